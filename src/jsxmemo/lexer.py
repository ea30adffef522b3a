"""Lexer for JavaScript modules with JSX.

JavaScript cannot be tokenized without knowing the grammatical context:
``/`` starts a regex or divides, ``}`` closes a block or resumes a
template literal, and JSX text has no tokens at all. The Lexer therefore
does not produce a stream up front. It scans a single token at a given
offset in a given mode, and the Parser (which knows the context) asks for
the next token in the mode it needs.

Modes:
    js         Regular tokens. ``/`` is always punctuation.
    regex      Scan a regular expression literal starting at ``/``.
    template   Scan template text after a backtick or a ``}``.
    jsx_tag    Inside ``<...>``: names may contain ``-``, strings are raw.
    jsx_child  Between tags: text up to the next ``{`` or ``<``.

``tokenize()`` runs the js/template modes to completion for callers that
want a flat token list.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import Literal

from jsxmemo._types import Token, TokenType
from jsxmemo.exceptions import ErrorCode, LexerError

LexMode = Literal["js", "regex", "template", "jsx_tag", "jsx_child"]

# Longest first so the first match wins
_PUNCTUATORS = (
    ">>>=",
    "...",
    "===",
    "!==",
    "**=",
    "<<=",
    ">>=",
    ">>>",
    "&&=",
    "||=",
    "??=",
    "=>",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "??",
    "?.",
    "++",
    "--",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "**",
    "<<",
    ">>",
)
_SINGLE_PUNCTUATORS = frozenset("{}()[];,<>+-*/%&|^!~?:=.@#`")
_JSX_TAG_PUNCTUATORS = frozenset("<>/={}.:")

_NUMBER_RE = re.compile(
    r"""
    0[xX][0-9a-fA-F_]+n?
  | 0[oO][0-7_]+n?
  | 0[bB][01_]+n?
  | (?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d[\d_]*)?n?
    """,
    re.VERBOSE,
)
_DIGITS = frozenset("0123456789")
# \u{...} code point escapes, capped at U+10FFFF
_BRACED_ESCAPE_RE = re.compile(r"\{(0*(?:10|[0-9a-fA-F])?[0-9a-fA-F]{1,4})\}")
_WHITESPACE = frozenset(" \t\v\f\r\n\u00a0\ufeff\u2028\u2029")
_LINE_TERMINATORS = frozenset("\n\r\u2028\u2029")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def _is_id_start(ch: str) -> bool:
    return ch.isalpha() or ch in "_$" or (ch > "\x7f" and ch.isidentifier())


def _is_id_part(ch: str) -> bool:
    return ch.isalnum() or ch in "_$\u200c\u200d" or (ch > "\x7f" and ("a" + ch).isidentifier())


class Lexer:
    """On-demand scanner over a source string.

    Thread-safe: holds only the immutable source and its line table;
    every ``scan()`` call is independent.

    Example:
        >>> lexer = Lexer("a / b")
        >>> lexer.scan(0)
        Token(NAME, 'a', 1:0)
        >>> lexer.scan(1)
        Token(PUNCT, '/', 1:2)

    """

    __slots__ = ("_filename", "_line_starts", "_source")

    def __init__(self, source: str, filename: str | None = None) -> None:
        self._source = source
        self._filename = filename
        starts = [0]
        for match in re.finditer("\r\n|[\n\r\u2028\u2029]", source):
            starts.append(match.end())
        self._line_starts = starts

    @property
    def source(self) -> str:
        return self._source

    def position(self, offset: int) -> tuple[int, int]:
        """Return (lineno, col_offset) for a character offset (1-based line)."""
        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index]

    def scan(self, pos: int, mode: LexMode = "js") -> Token:
        """Scan one token starting at ``pos`` in the given mode."""
        if mode == "jsx_child":
            return self._scan_jsx_child(pos)
        if mode == "template":
            return self._scan_template(pos)
        if mode == "regex":
            return self._scan_regex(pos)

        pos, newline = self._skip_trivia(pos)
        source = self._source
        if pos >= len(source):
            return self._token(TokenType.EOF, "", pos, pos, newline)

        ch = source[pos]
        jsx_tag = mode == "jsx_tag"

        if _is_id_start(ch) or ch == "\\":
            end = pos + 1
            while end < len(source) and (
                _is_id_part(source[end]) or (jsx_tag and source[end] == "-")
            ):
                end += 1
            if ch == "\\":
                raise self._error("Unicode escapes in identifiers are not supported", pos)
            return self._token(TokenType.NAME, source[pos:end], pos, end, newline)

        if jsx_tag:
            if ch in "\"'":
                end = source.find(ch, pos + 1)
                if end == -1:
                    raise self._error(
                        "Unterminated string in JSX attribute",
                        pos,
                        ErrorCode.UNTERMINATED_STRING,
                    )
                return self._token(TokenType.STRING, source[pos : end + 1], pos, end + 1, newline)
            if ch in _JSX_TAG_PUNCTUATORS:
                return self._token(TokenType.PUNCT, ch, pos, pos + 1, newline)
            raise self._error(f"Unexpected character {ch!r} in JSX tag", pos)

        if ch in _DIGITS or (ch == "." and source[pos + 1 : pos + 2] in _DIGITS):
            match = _NUMBER_RE.match(source, pos)
            if match is None:
                raise self._error("Invalid number literal", pos)
            end = match.end()
            if end < len(source) and _is_id_start(source[end]):
                raise self._error("Identifier directly after number", end)
            return self._token(TokenType.NUMBER, match.group(), pos, end, newline)

        if ch in "\"'":
            end = self._scan_string_end(pos)
            return self._token(TokenType.STRING, source[pos:end], pos, end, newline)

        for punct in _PUNCTUATORS:
            if source.startswith(punct, pos):
                # `a?.5:b` is a conditional, not optional chaining
                if punct == "?." and source[pos + 2 : pos + 3] in _DIGITS:
                    break
                return self._token(TokenType.PUNCT, punct, pos, pos + len(punct), newline)
        if ch in _SINGLE_PUNCTUATORS:
            return self._token(TokenType.PUNCT, ch, pos, pos + 1, newline)

        raise self._error(f"Unexpected character {ch!r}", pos)

    # ------------------------------------------------------------------
    # Mode-specific scanners
    # ------------------------------------------------------------------

    def _skip_trivia(self, pos: int) -> tuple[int, bool]:
        """Skip whitespace and comments; report whether a line break was crossed."""
        source = self._source
        length = len(source)
        newline = False
        while pos < length:
            ch = source[pos]
            if ch in _WHITESPACE:
                if ch in _LINE_TERMINATORS:
                    newline = True
                pos += 1
            elif source.startswith("//", pos):
                while pos < length and source[pos] not in _LINE_TERMINATORS:
                    pos += 1
            elif source.startswith("/*", pos):
                end = source.find("*/", pos + 2)
                if end == -1:
                    raise self._error(
                        "Unterminated comment",
                        pos,
                        ErrorCode.UNTERMINATED_COMMENT,
                    )
                if any(c in _LINE_TERMINATORS for c in source[pos:end]):
                    newline = True
                pos = end + 2
            else:
                break
        return pos, newline

    def _scan_string_end(self, pos: int) -> int:
        source = self._source
        quote = source[pos]
        i = pos + 1
        while i < len(source):
            ch = source[i]
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                return i + 1
            if ch in "\n\r":
                break
            i += 1
        raise self._error("Unterminated string literal", pos, ErrorCode.UNTERMINATED_STRING)

    def _scan_template(self, pos: int) -> Token:
        source = self._source
        i = pos
        while i < len(source):
            ch = source[i]
            if ch == "\\":
                i += 2
                continue
            if ch == "`":
                return self._token(TokenType.TEMPLATE_END, source[pos:i], pos, i + 1)
            if ch == "$" and source.startswith("${", i):
                return self._token(TokenType.TEMPLATE_CHUNK, source[pos:i], pos, i + 2)
            i += 1
        raise self._error("Unterminated template literal", pos, ErrorCode.UNTERMINATED_TEMPLATE)

    def _scan_regex(self, pos: int) -> Token:
        source = self._source
        i = pos + 1
        in_class = False
        while i < len(source):
            ch = source[i]
            if ch in _LINE_TERMINATORS:
                break
            if ch == "\\":
                i += 2
                continue
            if ch == "[":
                in_class = True
            elif ch == "]":
                in_class = False
            elif ch == "/" and not in_class:
                end = i + 1
                while end < len(source) and _is_id_part(source[end]):
                    end += 1
                return self._token(TokenType.REGEX, source[pos:end], pos, end)
            i += 1
        raise self._error("Unterminated regular expression", pos, ErrorCode.UNTERMINATED_REGEX)

    def _scan_jsx_child(self, pos: int) -> Token:
        source = self._source
        if pos >= len(source):
            return self._token(TokenType.EOF, "", pos, pos)
        ch = source[pos]
        if ch in "{<":
            return self._token(TokenType.PUNCT, ch, pos, pos + 1)
        end = pos
        while end < len(source) and source[end] not in "{<":
            end += 1
        return self._token(TokenType.JSX_TEXT, source[pos:end], pos, end)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _token(
        self,
        token_type: TokenType,
        value: str,
        start: int,
        end: int,
        newline_before: bool = False,
    ) -> Token:
        lineno, col = self.position(start)
        return Token(token_type, value, lineno, col, start, end, newline_before)

    def _error(
        self,
        message: str,
        pos: int,
        code: ErrorCode = ErrorCode.UNEXPECTED_CHARACTER,
    ) -> LexerError:
        lineno, col = self.position(pos)
        return LexerError(
            message,
            lineno,
            col,
            filename=self._filename,
            source=self._source,
            code=code,
        )


def decode_string(raw: str) -> str:
    """Decode a quoted string literal's escapes into its runtime value."""
    body = raw[1:-1]
    if "\\" not in body:
        return body
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        nxt = body[i + 1 : i + 2]
        if nxt in _SIMPLE_ESCAPES and not (nxt == "0" and body[i + 2 : i + 3].isdigit()):
            out.append(_SIMPLE_ESCAPES[nxt])
            i += 2
        elif nxt == "x" and re.fullmatch(r"[0-9a-fA-F]{2}", body[i + 2 : i + 4]):
            out.append(chr(int(body[i + 2 : i + 4], 16)))
            i += 4
        elif nxt == "u" and (braced := _BRACED_ESCAPE_RE.match(body, i + 2)):
            out.append(chr(int(braced.group(1), 16)))
            i = braced.end()
        elif nxt == "u" and re.fullmatch(r"[0-9a-fA-F]{4}", body[i + 2 : i + 6]):
            out.append(chr(int(body[i + 2 : i + 6], 16)))
            i += 6
        elif nxt == "\r" and body[i + 2 : i + 3] == "\n":
            i += 3  # line continuation
        elif nxt in _LINE_TERMINATORS:
            i += 2
        else:
            out.append(nxt)
            i += 2
    return "".join(out)


# Tokens after which a `/` begins a regex rather than a division
_REGEX_AFTER_NAMES = frozenset(
    {"return", "typeof", "instanceof", "in", "of", "new", "delete", "void", "throw", "case", "do", "else"}
)


def tokenize(source: str, filename: str | None = None) -> list[Token]:
    """Tokenize a whole JavaScript source (no JSX) into a flat list.

    Regex literals are recognized with the usual previous-token heuristic
    and template literals are split into chunk tokens, with the tokens of
    each substitution in between. The list always ends with an EOF token.
    """
    lexer = Lexer(source, filename)
    tokens: list[Token] = []
    # Brace depth at which each open template substitution resumes
    template_stack: list[int] = []
    depth = 0
    pos = 0
    while True:
        token = lexer.scan(pos)
        if token.type is TokenType.PUNCT and token.value in ("/", "/=") and _regex_allowed(tokens):
            token = lexer.scan(token.start, "regex")
        elif token.type is TokenType.PUNCT and token.value == "`":
            tokens.append(token)
            token = lexer.scan(token.end, "template")
        elif token.type is TokenType.PUNCT and token.value == "}" and template_stack and template_stack[-1] == depth:
            template_stack.pop()
            tokens.append(token)
            token = lexer.scan(token.end, "template")
        elif token.type is TokenType.PUNCT and token.value == "{":
            depth += 1
        elif token.type is TokenType.PUNCT and token.value == "}":
            depth -= 1

        if token.type is TokenType.TEMPLATE_CHUNK:
            template_stack.append(depth)
        tokens.append(token)
        if token.type is TokenType.EOF:
            return tokens
        pos = token.end


def _regex_allowed(tokens: list[Token]) -> bool:
    if not tokens:
        return True
    prev = tokens[-1]
    if prev.type is TokenType.NAME:
        return prev.value in _REGEX_AFTER_NAMES
    if prev.type is TokenType.PUNCT:
        return prev.value not in (")", "]", "}", "++", "--")
    return prev.type is TokenType.TEMPLATE_CHUNK
