"""Expression parsing for the jsxmemo parser.

Provides the mixin for the expression grammar: assignment, arrows,
conditionals, binary operators by precedence climbing, unary and update
operators, member/call chains (including optional chaining), and the
primary forms (literals, templates, regexes, object and array literals,
function expressions, JSX).

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from jsxmemo._types import (
    ASSIGNMENT_OPERATORS,
    BINARY_PRECEDENCE,
    LOGICAL_OPERATORS,
    RESERVED_WORDS,
    Token,
    TokenType,
)
from jsxmemo.exceptions import ErrorCode
from jsxmemo.lexer import decode_string
from jsxmemo.nodes import (
    ArrayExpression,
    ArrowFunctionExpression,
    AssignmentExpression,
    AssignmentPattern,
    AwaitExpression,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ConditionalExpression,
    Expr,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    LogicalExpression,
    MemberExpression,
    NewExpression,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    RegExpLiteral,
    SequenceExpression,
    SpreadElement,
    StringLiteral,
    TaggedTemplateExpression,
    TemplateElement,
    TemplateLiteral,
    ThisExpression,
    UnaryExpression,
    UpdateExpression,
    YieldExpression,
)

if TYPE_CHECKING:
    from jsxmemo.exceptions import ParseError
    from jsxmemo.lexer import Lexer, LexMode
    from jsxmemo.nodes import JSXElement, JSXFragment
    from jsxmemo.parser.core import ParserOptions

_T = TypeVar("_T")

_UNARY_OPERATORS = frozenset({"!", "~", "+", "-"})
_UNARY_KEYWORDS = frozenset({"typeof", "void", "delete"})
# Tokens that end a `yield` with no argument
_YIELD_TERMINATORS = frozenset({")", "]", "}", ",", ";", ":"})


class ExpressionParsingMixin:
    """Mixin for parsing expressions.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.

    """

    if TYPE_CHECKING:
        # Host attributes (from Parser.__init__)
        _lexer: Lexer
        _options: ParserOptions
        _current: Token
        _no_in: bool
        _in_function: bool
        _in_async: bool
        _in_generator: bool

        def _advance(self, mode: LexMode = "js") -> Token: ...
        def _peek(self, mode: LexMode = "js") -> Token: ...
        def _rescan(self, mode: LexMode) -> Token: ...
        def _set_current(self, token: Token) -> None: ...
        def _is(self, value: str) -> bool: ...
        def _is_name(self) -> bool: ...
        def _eat(self, value: str, mode: LexMode = "js") -> bool: ...
        def _expect(self, value: str, mode: LexMode = "js") -> Token: ...
        def _save(self) -> tuple[Token, Token | None, bool, bool, bool, bool]: ...
        def _restore(self, state: tuple[Token, Token | None, bool, bool, bool, bool]) -> None: ...
        def _speculate(self, parse: Callable[[], _T]) -> _T | None: ...
        def _allow_in(self, parse: Callable[[], _T]) -> _T: ...
        def _error(
            self,
            message: str,
            at: Token | Node | None = None,
            *,
            code: ErrorCode = ErrorCode.UNEXPECTED_TOKEN,
            suggestion: str | None = None,
        ) -> ParseError: ...
        def _unsupported(self, what: str, token: Token | None = None) -> ParseError: ...
        @staticmethod
        def _describe(token: Token) -> str: ...

        # From PatternParsingMixin
        def _parse_params(self) -> tuple[Node, ...]: ...
        def _parse_binding_identifier(self) -> Identifier: ...
        def _to_pattern(self, node: Node) -> Node: ...
        def _check_simple_target(self, node: Node) -> Node: ...

        # From StatementParsingMixin
        def _parse_block(self) -> BlockStatement: ...

        # From JSXParsingMixin
        def _parse_jsx_element(self, follow_mode: LexMode = "js") -> JSXElement | JSXFragment: ...

    # ------------------------------------------------------------------
    # Comma, assignment, arrow
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Expr:
        """Parse a full expression, including the comma operator."""
        first = self._parse_assignment()
        if not self._is(","):
            return first
        expressions = [first]
        while self._eat(","):
            expressions.append(self._parse_assignment())
        return SequenceExpression(first.lineno, first.col_offset, tuple(expressions))

    def _parse_assignment(self) -> Expr:
        arrow = self._try_parse_arrow()
        if arrow is not None:
            return arrow
        if self._in_generator and self._is("yield"):
            return self._parse_yield()

        left = self._parse_conditional()
        token = self._current
        if token.type is TokenType.PUNCT and token.value in ASSIGNMENT_OPERATORS:
            if token.value == "=":
                target = self._to_pattern(left)
            else:
                target = self._check_simple_target(left)
            self._advance()
            right = self._parse_assignment()
            return AssignmentExpression(left.lineno, left.col_offset, token.value, target, right)
        return left

    def _try_parse_arrow(self) -> ArrowFunctionExpression | None:
        """Parse an arrow function if one starts here, else leave the cursor alone."""
        start = self._current
        if start.type is TokenType.NAME:
            if start.value == "async":
                arrow = self._try_parse_async_arrow()
                if arrow is not None:
                    return arrow
            if start.value in RESERVED_WORDS:
                return None
            follow = self._peek()
            if follow.type is TokenType.PUNCT and follow.value == "=>" and not follow.newline_before:
                param = self._parse_binding_identifier()
                return self._parse_arrow_body(start, (param,), is_async=False)
            return None

        if self._is("("):
            state = self._save()
            params = self._speculate(self._parse_params)
            if params is not None and self._is("=>") and not self._current.newline_before:
                return self._parse_arrow_body(start, params, is_async=False)
            self._restore(state)
        return None

    def _try_parse_async_arrow(self) -> ArrowFunctionExpression | None:
        start = self._current
        state = self._save()
        self._advance()
        token = self._current
        if not token.newline_before:
            params: tuple[Node, ...] | None = None
            if token.type is TokenType.NAME and token.value not in RESERVED_WORDS:
                params = (self._parse_binding_identifier(),)
            elif self._is("("):
                params = self._speculate(self._parse_params)
            if params is not None and self._is("=>") and not self._current.newline_before:
                return self._parse_arrow_body(start, params, is_async=True)
        self._restore(state)
        return None

    def _parse_arrow_body(
        self,
        start: Token,
        params: tuple[Node, ...],
        *,
        is_async: bool,
    ) -> ArrowFunctionExpression:
        self._expect("=>")
        saved = (self._in_function, self._in_async, self._in_generator)
        self._in_function, self._in_async, self._in_generator = True, is_async, False
        try:
            if self._is("{"):
                body: BlockStatement | Expr = self._allow_in(self._parse_block)
            else:
                body = self._parse_assignment()
        finally:
            self._in_function, self._in_async, self._in_generator = saved
        return ArrowFunctionExpression(start.lineno, start.col_offset, params, body, is_async)

    def _parse_yield(self) -> YieldExpression:
        start = self._advance()
        token = self._current
        if token.newline_before or token.type is TokenType.EOF:
            return YieldExpression(start.lineno, start.col_offset)
        if self._eat("*"):
            return YieldExpression(start.lineno, start.col_offset, self._parse_assignment(), True)
        if token.type is TokenType.PUNCT and token.value in _YIELD_TERMINATORS:
            return YieldExpression(start.lineno, start.col_offset)
        return YieldExpression(start.lineno, start.col_offset, self._parse_assignment())

    # ------------------------------------------------------------------
    # Conditional and binary operators
    # ------------------------------------------------------------------

    def _parse_conditional(self) -> Expr:
        test = self._parse_binary()
        if not self._eat("?"):
            return test
        consequent = self._allow_in(self._parse_assignment)
        self._expect(":")
        alternate = self._parse_assignment()
        return ConditionalExpression(test.lineno, test.col_offset, test, consequent, alternate)

    def _binary_operator(self) -> str | None:
        token = self._current
        if token.type is TokenType.PUNCT and token.value in BINARY_PRECEDENCE:
            return token.value
        if token.type is TokenType.NAME and token.value in ("instanceof", "in"):
            if token.value == "in" and self._no_in:
                return None
            return token.value
        return None

    def _parse_binary(self, min_precedence: int = 0) -> Expr:
        """Precedence climbing over BINARY_PRECEDENCE."""
        left = self._parse_unary()
        while (operator := self._binary_operator()) is not None:
            precedence = BINARY_PRECEDENCE[operator]
            if precedence <= min_precedence:
                break
            self._advance()
            # `**` is right-associative
            right = self._parse_binary(precedence - 1 if operator == "**" else precedence)
            if operator in LOGICAL_OPERATORS:
                left = LogicalExpression(left.lineno, left.col_offset, operator, left, right)
            else:
                left = BinaryExpression(left.lineno, left.col_offset, operator, left, right)
        return left

    # ------------------------------------------------------------------
    # Unary, update
    # ------------------------------------------------------------------

    def _await_allowed(self) -> bool:
        if self._in_async:
            return True
        # Top-level await in modules
        return not self._in_function and self._options.source_type == "module"

    def _parse_unary(self) -> Expr:
        token = self._current
        if (token.type is TokenType.PUNCT and token.value in _UNARY_OPERATORS) or (
            token.type is TokenType.NAME and token.value in _UNARY_KEYWORDS
        ):
            self._advance()
            argument = self._parse_unary()
            return UnaryExpression(token.lineno, token.col_offset, token.value, argument)
        if self._is("++") or self._is("--"):
            self._advance()
            argument = self._check_simple_target(self._parse_unary())
            return UpdateExpression(token.lineno, token.col_offset, token.value, argument, prefix=True)
        if self._is("await") and self._await_allowed():
            self._advance()
            return AwaitExpression(token.lineno, token.col_offset, self._parse_unary())

        expr = self._parse_left_hand_side()
        token = self._current
        if (self._is("++") or self._is("--")) and not token.newline_before:
            self._advance()
            target = self._check_simple_target(expr)
            return UpdateExpression(expr.lineno, expr.col_offset, token.value, target)
        return expr

    # ------------------------------------------------------------------
    # Member access, calls, new
    # ------------------------------------------------------------------

    def _parse_left_hand_side(self) -> Expr:
        if self._is("new"):
            expr = self._parse_new()
        else:
            expr = self._parse_primary()
        return self._parse_call_tail(expr)

    def _parse_new(self) -> Expr:
        start = self._advance()
        if self._is("."):
            raise self._unsupported("new.target", start)
        callee = self._parse_new() if self._is("new") else self._parse_primary()
        callee = self._parse_call_tail(callee, allow_call=False)
        arguments = self._parse_arguments() if self._is("(") else ()
        return NewExpression(start.lineno, start.col_offset, callee, arguments)

    def _parse_call_tail(self, expr: Expr, *, allow_call: bool = True) -> Expr:
        while True:
            if self._is("."):
                self._advance()
                prop = self._parse_property_name()
                expr = MemberExpression(expr.lineno, expr.col_offset, expr, prop)
            elif self._is("?.") and allow_call:
                self._advance()
                if self._is("("):
                    arguments = self._parse_arguments()
                    expr = CallExpression(expr.lineno, expr.col_offset, expr, arguments, optional=True)
                elif self._eat("["):
                    prop = self._allow_in(self._parse_expression)
                    self._expect("]")
                    expr = MemberExpression(
                        expr.lineno, expr.col_offset, expr, prop, computed=True, optional=True
                    )
                else:
                    prop = self._parse_property_name()
                    expr = MemberExpression(expr.lineno, expr.col_offset, expr, prop, optional=True)
            elif self._is("["):
                self._advance()
                prop = self._allow_in(self._parse_expression)
                self._expect("]")
                expr = MemberExpression(expr.lineno, expr.col_offset, expr, prop, computed=True)
            elif self._is("(") and allow_call:
                arguments = self._parse_arguments()
                expr = CallExpression(expr.lineno, expr.col_offset, expr, arguments)
            elif self._is("`"):
                quasi = self._parse_template()
                expr = TaggedTemplateExpression(expr.lineno, expr.col_offset, expr, quasi)
            else:
                return expr

    def _parse_property_name(self) -> Identifier:
        """Name after ``.``; keywords are allowed here."""
        token = self._current
        if token.type is not TokenType.NAME:
            if self._is("#"):
                raise self._unsupported("Private class members")
            raise self._error(f"Expected a property name but found {self._describe(token)}")
        self._advance()
        return Identifier(token.lineno, token.col_offset, token.value)

    def _parse_arguments(self) -> tuple[Expr | SpreadElement, ...]:
        self._expect("(")
        arguments: list[Expr | SpreadElement] = []
        while not self._is(")"):
            token = self._current
            if self._eat("..."):
                argument = self._allow_in(self._parse_assignment)
                arguments.append(SpreadElement(token.lineno, token.col_offset, argument))
            else:
                arguments.append(self._allow_in(self._parse_assignment))
            if not self._is(")"):
                self._expect(",")
        self._expect(")")
        return tuple(arguments)

    # ------------------------------------------------------------------
    # Primary expressions
    # ------------------------------------------------------------------

    def _parse_primary(self) -> Expr:
        token = self._current
        kind = token.type

        if kind is TokenType.NAME:
            return self._parse_name_primary(token)
        if kind is TokenType.NUMBER:
            self._advance()
            return NumericLiteral(token.lineno, token.col_offset, token.value)
        if kind is TokenType.STRING:
            self._advance()
            return StringLiteral(token.lineno, token.col_offset, decode_string(token.value), token.value)
        if kind is not TokenType.PUNCT:
            raise self._error(f"Unexpected {self._describe(token)}")

        value = token.value
        if value == "(":
            self._advance()
            expr = self._allow_in(self._parse_expression)
            self._expect(")")
            return expr
        if value == "[":
            return self._parse_array_literal()
        if value == "{":
            return self._parse_object_literal()
        if value == "`":
            return self._parse_template()
        if value in ("/", "/="):
            return self._parse_regex()
        if value == "<" and self._options.jsx:
            return self._parse_jsx_element()
        if value == "#":
            raise self._unsupported("Private class members")
        if value == "@":
            raise self._unsupported("Decorators")
        raise self._error(f"Unexpected {self._describe(token)}")

    def _parse_name_primary(self, token: Token) -> Expr:
        name = token.value
        if name == "this":
            self._advance()
            return ThisExpression(token.lineno, token.col_offset)
        if name == "null":
            self._advance()
            return NullLiteral(token.lineno, token.col_offset)
        if name in ("true", "false"):
            self._advance()
            return BooleanLiteral(token.lineno, token.col_offset, name == "true")
        if name == "function":
            return self._parse_function(token, is_async=False)
        if name == "async":
            follow = self._peek()
            if follow.value == "function" and follow.type is TokenType.NAME and not follow.newline_before:
                self._advance()
                return self._parse_function(token, is_async=True)
        if name == "class":
            raise self._unsupported("Classes")
        if name == "super":
            raise self._unsupported("'super'")
        if name == "import":
            # Dynamic import() is an ordinary call for our purposes
            if self._peek().value != "(":
                raise self._unsupported("import.meta")
        elif name in RESERVED_WORDS:
            raise self._error(f"Unexpected keyword {name!r}")
        self._advance()
        return Identifier(token.lineno, token.col_offset, name)

    def _parse_regex(self) -> RegExpLiteral:
        token = self._rescan("regex")
        self._advance()
        raw = token.value
        slash = raw.rindex("/")
        return RegExpLiteral(token.lineno, token.col_offset, raw[1:slash], raw[slash + 1 :])

    def _parse_template(self) -> TemplateLiteral:
        """Parse a template literal; the current token is the opening backtick."""
        start = self._current
        quasis: list[TemplateElement] = []
        expressions: list[Expr] = []
        chunk = self._lexer.scan(start.end, "template")
        while True:
            tail = chunk.type is TokenType.TEMPLATE_END
            quasis.append(TemplateElement(chunk.lineno, chunk.col_offset, chunk.value, tail))
            self._set_current(chunk)
            self._advance()
            if tail:
                break
            expressions.append(self._allow_in(self._parse_expression))
            if not self._is("}"):
                raise self._error(
                    f"Expected '}}' to close template substitution but found {self._describe(self._current)}"
                )
            chunk = self._lexer.scan(self._current.end, "template")
        return TemplateLiteral(start.lineno, start.col_offset, tuple(quasis), tuple(expressions))

    def _parse_array_literal(self) -> ArrayExpression:
        start = self._expect("[")
        elements: list[Expr | SpreadElement | None] = []
        while not self._is("]"):
            token = self._current
            if self._eat(","):
                elements.append(None)
                continue
            if self._eat("..."):
                argument = self._allow_in(self._parse_assignment)
                elements.append(SpreadElement(token.lineno, token.col_offset, argument))
            else:
                elements.append(self._allow_in(self._parse_assignment))
            if not self._is("]"):
                self._expect(",")
        self._expect("]")
        return ArrayExpression(start.lineno, start.col_offset, tuple(elements))

    def _parse_object_literal(self) -> ObjectExpression:
        start = self._expect("{")
        properties: list[Node] = []
        while not self._is("}"):
            properties.append(self._parse_object_member())
            if not self._is("}"):
                self._expect(",")
        self._expect("}")
        return ObjectExpression(start.lineno, start.col_offset, tuple(properties))

    def _at_property_end(self) -> bool:
        """True if the token after the current one ends a property key."""
        follow = self._peek()
        return follow.type is TokenType.EOF or (
            follow.type is TokenType.PUNCT and follow.value in (",", ":", "(", "}", "=")
        )

    def _parse_object_member(self) -> Node:
        start = self._current
        if self._eat("..."):
            argument = self._allow_in(self._parse_assignment)
            return SpreadElement(start.lineno, start.col_offset, argument)

        kind = "method"
        is_async = False
        if start.type is TokenType.NAME and start.value in ("get", "set", "async") and not self._at_property_end():
            if start.value == "async":
                is_async = True
            else:
                kind = start.value
            self._advance()
        generator = self._eat("*")

        key, computed = self._parse_property_key()
        if self._is("("):
            return self._parse_method(start, kind, key, computed, is_async, generator)
        if is_async or generator or kind != "method":
            raise self._error("Expected '(' after method name")

        if self._eat(":"):
            value = self._allow_in(self._parse_assignment)
            return ObjectProperty(start.lineno, start.col_offset, key, value, computed)
        if isinstance(key, Identifier) and not computed:
            shorthand: Node = Identifier(key.lineno, key.col_offset, key.name)
            if self._eat("="):
                # Only valid once the literal is reinterpreted as a pattern
                default = self._allow_in(self._parse_assignment)
                shorthand = AssignmentPattern(key.lineno, key.col_offset, shorthand, default)
            return ObjectProperty(start.lineno, start.col_offset, key, shorthand, shorthand=True)
        raise self._error(f"Expected ':' but found {self._describe(self._current)}")

    def _parse_property_key(self) -> tuple[Expr, bool]:
        """Parse an object key; returns (key, computed)."""
        token = self._current
        if self._eat("["):
            key = self._allow_in(self._parse_assignment)
            self._expect("]")
            return key, True
        if token.type is TokenType.NAME:
            self._advance()
            return Identifier(token.lineno, token.col_offset, token.value), False
        if token.type is TokenType.STRING:
            self._advance()
            return StringLiteral(token.lineno, token.col_offset, decode_string(token.value), token.value), False
        if token.type is TokenType.NUMBER:
            self._advance()
            return NumericLiteral(token.lineno, token.col_offset, token.value), False
        raise self._error(f"Expected a property key but found {self._describe(token)}")

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def _parse_function_block(self, *, is_async: bool, generator: bool) -> BlockStatement:
        saved = (self._in_function, self._in_async, self._in_generator)
        self._in_function, self._in_async, self._in_generator = True, is_async, generator
        try:
            return self._allow_in(self._parse_block)
        finally:
            self._in_function, self._in_async, self._in_generator = saved

    def _parse_method(
        self,
        start: Token,
        kind: str,
        key: Expr,
        computed: bool,
        is_async: bool,
        generator: bool,
    ) -> ObjectMethod:
        params = self._parse_params()
        body = self._parse_function_block(is_async=is_async, generator=generator)
        return ObjectMethod(
            start.lineno,
            start.col_offset,
            kind,  # type: ignore[arg-type]
            key,
            params,
            body,
            computed,
            is_async,
            generator,
        )

    def _parse_function(
        self,
        start: Token,
        *,
        is_async: bool,
        declaration: bool = False,
    ) -> FunctionExpression | FunctionDeclaration:
        """Parse ``function [*] [name](params) { body }``.

        ``start`` is the first token (``async`` or ``function``). With
        ``declaration=True`` a named function becomes a FunctionDeclaration;
        an anonymous one (``export default function () {}``) stays an
        expression.
        """
        self._expect("function")
        generator = self._eat("*")
        name: Identifier | None = None
        if not self._is("("):
            name = self._parse_binding_identifier()
        params = self._parse_params()
        body = self._parse_function_block(is_async=is_async, generator=generator)
        if declaration and name is not None:
            return FunctionDeclaration(
                start.lineno, start.col_offset, name, params, body, is_async, generator
            )
        return FunctionExpression(start.lineno, start.col_offset, name, params, body, is_async, generator)
