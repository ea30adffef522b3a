"""Parser core: options, token navigation and the Parser class.

The Parser is a hand-written recursive-descent parser for an ES2020
module subset plus JSX. Grammar areas live in mixins (statements,
expressions, binding patterns, JSX); this module owns the token cursor
they share.

The cursor holds exactly one token (``_current``). Because the lexer
scans on demand, the parser can re-scan the current position in another
lexical mode (regex, template, JSX) and can backtrack by restoring a
saved cursor, which is how arrow-function parameters are recognised.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Literal, TypeVar

from jsxmemo._types import Token, TokenType
from jsxmemo.exceptions import ErrorCode, ParseError, SourceSyntaxError
from jsxmemo.lexer import Lexer, LexMode
from jsxmemo.nodes import Node, Program
from jsxmemo.parser.expressions import ExpressionParsingMixin
from jsxmemo.parser.jsx import JSXParsingMixin
from jsxmemo.parser.patterns import PatternParsingMixin
from jsxmemo.parser.statements import StatementParsingMixin


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Parse configuration.

    Attributes:
        jsx: Recognise JSX elements in expression position.
        source_type: "module" allows import/export declarations.
        filename: Used in error locations only.
    """

    jsx: bool = True
    source_type: Literal["module", "script"] = "module"
    filename: str | None = None


DEFAULT_PARSER_OPTIONS = ParserOptions()

# Saved cursor: (current, previous, no_in, in_function, in_async, in_generator)
_CursorState = tuple[Token, Token | None, bool, bool, bool, bool]

_T = TypeVar("_T")


class Parser(
    StatementParsingMixin,
    ExpressionParsingMixin,
    PatternParsingMixin,
    JSXParsingMixin,
):
    """Parse JavaScript + JSX source into a jsxmemo Program.

    Example:
        >>> program = Parser("const a = <b />").parse()
        >>> type(program.body[0]).__name__
        'VariableDeclaration'

    """

    def __init__(self, source: str, options: ParserOptions | None = None) -> None:
        self._source = source
        self._options = options or DEFAULT_PARSER_OPTIONS
        self._lexer = Lexer(source, self._options.filename)
        self._prev: Token | None = None
        self._current = self._lexer.scan(0)
        # `in` is not a binary operator inside a for-statement head
        self._no_in = False
        self._in_function = False
        self._in_async = False
        self._in_generator = False

    def parse(self) -> Program:
        """Parse the whole source and return the Program node."""
        body = []
        while self._current.type is not TokenType.EOF:
            body.append(self._parse_statement(top_level=True))
        return Program(
            lineno=1,
            col_offset=0,
            body=tuple(body),
            source_type=self._options.source_type,
        )

    # ------------------------------------------------------------------
    # Token navigation
    # ------------------------------------------------------------------

    def _advance(self, mode: LexMode = "js") -> Token:
        """Consume the current token and scan the next one in ``mode``."""
        token = self._current
        self._prev = token
        self._current = self._lexer.scan(token.end, mode)
        return token

    def _peek(self, mode: LexMode = "js") -> Token:
        """Scan the token after the current one without consuming anything."""
        return self._lexer.scan(self._current.end, mode)

    def _rescan(self, mode: LexMode) -> Token:
        """Re-scan the current token's position in a different lexical mode."""
        old = self._current
        self._current = replace(
            self._lexer.scan(old.start, mode),
            newline_before=old.newline_before,
        )
        return self._current

    def _set_current(self, token: Token) -> None:
        self._prev = self._current
        self._current = token

    def _is(self, value: str) -> bool:
        """True if the current token is the punctuator or word ``value``."""
        token = self._current
        return token.value == value and token.type in (TokenType.PUNCT, TokenType.NAME)

    def _is_name(self) -> bool:
        return self._current.type is TokenType.NAME

    def _eat(self, value: str, mode: LexMode = "js") -> bool:
        if self._is(value):
            self._advance(mode)
            return True
        return False

    def _expect(self, value: str, mode: LexMode = "js") -> Token:
        if not self._is(value):
            raise self._error(f"Expected {value!r} but found {self._describe(self._current)}")
        return self._advance(mode)

    def _consume_semicolon(self) -> None:
        """Consume a statement terminator, applying automatic semicolon insertion."""
        if self._eat(";"):
            return
        token = self._current
        if token.type is TokenType.EOF or self._is("}") or token.newline_before:
            return
        raise self._error(
            f"Expected ';' but found {self._describe(token)}",
            suggestion="Separate statements with ';' or a line break",
        )

    def _save(self) -> _CursorState:
        return (
            self._current,
            self._prev,
            self._no_in,
            self._in_function,
            self._in_async,
            self._in_generator,
        )

    def _restore(self, state: _CursorState) -> None:
        (
            self._current,
            self._prev,
            self._no_in,
            self._in_function,
            self._in_async,
            self._in_generator,
        ) = state

    def _speculate(self, parse: Callable[[], _T]) -> _T | None:
        """Run ``parse``; on a syntax error rewind the cursor and return None."""
        state = self._save()
        try:
            return parse()
        except SourceSyntaxError:
            self._restore(state)
            return None

    def _allow_in(self, parse: Callable[[], _T]) -> _T:
        """Run ``parse`` with the ``in`` operator re-enabled (inside brackets)."""
        saved = self._no_in
        self._no_in = False
        try:
            return parse()
        finally:
            self._no_in = saved

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _error(
        self,
        message: str,
        at: Token | Node | None = None,
        *,
        code: ErrorCode = ErrorCode.UNEXPECTED_TOKEN,
        suggestion: str | None = None,
    ) -> ParseError:
        """Build a ParseError located at ``at`` (default: the current token)."""
        at = at or self._current
        return ParseError(
            message,
            at.lineno,
            at.col_offset,
            filename=self._options.filename,
            source=self._source,
            code=code,
            suggestion=suggestion,
        )

    def _unsupported(self, what: str, token: Token | None = None) -> ParseError:
        return self._error(
            f"{what} is not supported",
            token,
            code=ErrorCode.UNSUPPORTED_SYNTAX,
        )

    @staticmethod
    def _describe(token: Token) -> str:
        if token.type is TokenType.EOF:
            return "end of input"
        return repr(token.value)


def parse(source: str, options: ParserOptions | None = None) -> Program:
    """Parse source text into a Program.

    Raises:
        LexerError: The source contains an unterminated literal or a stray
            character.
        ParseError: The token stream is not a supported program.
    """
    return Parser(source, options).parse()
