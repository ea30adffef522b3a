"""Binding pattern parsing for the jsxmemo parser.

Provides the mixin for destructuring targets in declarations, parameter
lists and catch clauses, plus the cover-grammar conversion that turns an
already-parsed expression (``[a, b] = pair``) into an assignment pattern.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from jsxmemo._types import RESERVED_WORDS, Token, TokenType
from jsxmemo.exceptions import ErrorCode
from jsxmemo.nodes import (
    ArrayExpression,
    ArrayPattern,
    AssignmentExpression,
    AssignmentPattern,
    Identifier,
    MemberExpression,
    Node,
    ObjectExpression,
    ObjectPattern,
    ObjectProperty,
    RestElement,
    SpreadElement,
)

if TYPE_CHECKING:
    from jsxmemo.exceptions import ParseError
    from jsxmemo.lexer import LexMode
    from jsxmemo.nodes import Expr

_T = TypeVar("_T")


class PatternParsingMixin:
    """Mixin for parsing binding patterns and parameter lists."""

    if TYPE_CHECKING:
        _current: Token

        def _advance(self, mode: LexMode = "js") -> Token: ...
        def _is(self, value: str) -> bool: ...
        def _eat(self, value: str, mode: LexMode = "js") -> bool: ...
        def _expect(self, value: str, mode: LexMode = "js") -> Token: ...
        def _allow_in(self, parse: Callable[[], _T]) -> _T: ...
        def _error(
            self,
            message: str,
            at: Token | Node | None = None,
            *,
            code: ErrorCode = ErrorCode.UNEXPECTED_TOKEN,
            suggestion: str | None = None,
        ) -> ParseError: ...

        # From ExpressionParsingMixin
        def _parse_assignment(self) -> Expr: ...
        def _parse_property_key(self) -> tuple[Expr, bool]: ...

    def _parse_params(self) -> tuple[Node, ...]:
        """Parse a parenthesised formal parameter list."""
        self._expect("(")
        params: list[Node] = []
        while not self._is(")"):
            if self._is("..."):
                params.append(self._parse_rest_element())
                break
            params.append(self._parse_binding_element())
            if not self._is(")"):
                self._expect(",")
        self._expect(")")
        return tuple(params)

    def _parse_binding_identifier(self) -> Identifier:
        token = self._current
        if token.type is not TokenType.NAME or token.value in RESERVED_WORDS:
            raise self._error(f"Expected a binding name but found {token.value or 'end of input'!r}")
        self._advance()
        return Identifier(token.lineno, token.col_offset, token.value)

    def _parse_binding_target(self) -> Node:
        """Identifier, object pattern or array pattern."""
        if self._is("{"):
            return self._parse_object_pattern()
        if self._is("["):
            return self._parse_array_pattern()
        return self._parse_binding_identifier()

    def _parse_binding_element(self) -> Node:
        """Binding target with an optional default value."""
        target = self._parse_binding_target()
        if self._eat("="):
            default = self._allow_in(self._parse_assignment)
            return AssignmentPattern(target.lineno, target.col_offset, target, default)
        return target

    def _parse_rest_element(self) -> RestElement:
        start = self._expect("...")
        return RestElement(start.lineno, start.col_offset, self._parse_binding_target())

    def _parse_object_pattern(self) -> ObjectPattern:
        start = self._expect("{")
        properties: list[Node] = []
        while not self._is("}"):
            if self._is("..."):
                properties.append(self._parse_rest_element())
                break
            token = self._current
            key, computed = self._parse_property_key()
            if self._eat(":"):
                value = self._parse_binding_element()
                properties.append(ObjectProperty(token.lineno, token.col_offset, key, value, computed))
            elif isinstance(key, Identifier) and not computed and key.name not in RESERVED_WORDS:
                value = Identifier(key.lineno, key.col_offset, key.name)
                if self._eat("="):
                    default = self._allow_in(self._parse_assignment)
                    value = AssignmentPattern(key.lineno, key.col_offset, value, default)
                properties.append(
                    ObjectProperty(token.lineno, token.col_offset, key, value, shorthand=True)
                )
            else:
                raise self._error("Expected ':' in object pattern")
            if not self._is("}"):
                self._expect(",")
        self._expect("}")
        return ObjectPattern(start.lineno, start.col_offset, tuple(properties))

    def _parse_array_pattern(self) -> ArrayPattern:
        start = self._expect("[")
        elements: list[Node | None] = []
        while not self._is("]"):
            if self._eat(","):
                elements.append(None)
                continue
            if self._is("..."):
                elements.append(self._parse_rest_element())
                break
            elements.append(self._parse_binding_element())
            if not self._is("]"):
                self._expect(",")
        self._expect("]")
        return ArrayPattern(start.lineno, start.col_offset, tuple(elements))

    # ------------------------------------------------------------------
    # Expression -> pattern conversion
    # ------------------------------------------------------------------

    def _to_pattern(self, node: Node) -> Node:
        """Reinterpret an expression as an assignment target."""
        if isinstance(node, (Identifier, AssignmentPattern)):
            return node
        if isinstance(node, MemberExpression) and not node.optional:
            return node
        if isinstance(node, AssignmentExpression) and node.operator == "=":
            return AssignmentPattern(node.lineno, node.col_offset, node.left, node.right)
        if isinstance(node, ArrayExpression):
            elements: list[Node | None] = []
            for element in node.elements:
                if element is None:
                    elements.append(None)
                elif isinstance(element, SpreadElement):
                    elements.append(
                        RestElement(element.lineno, element.col_offset, self._to_pattern(element.argument))
                    )
                else:
                    elements.append(self._to_pattern(element))
            return ArrayPattern(node.lineno, node.col_offset, tuple(elements))
        if isinstance(node, ObjectExpression):
            properties: list[Node] = []
            for prop in node.properties:
                if isinstance(prop, SpreadElement):
                    properties.append(
                        RestElement(prop.lineno, prop.col_offset, self._to_pattern(prop.argument))
                    )
                elif isinstance(prop, ObjectProperty):
                    properties.append(
                        ObjectProperty(
                            prop.lineno,
                            prop.col_offset,
                            prop.key,
                            self._to_pattern(prop.value),
                            prop.computed,
                            prop.shorthand,
                        )
                    )
                else:
                    raise self._invalid_target(prop)
            return ObjectPattern(node.lineno, node.col_offset, tuple(properties))
        raise self._invalid_target(node)

    def _check_simple_target(self, node: Node) -> Node:
        """Targets of compound assignment and ``++``/``--``."""
        if isinstance(node, Identifier):
            return node
        if isinstance(node, MemberExpression) and not node.optional:
            return node
        raise self._invalid_target(node)

    def _invalid_target(self, node: Node) -> ParseError:
        return self._error(
            "Invalid assignment target",
            node,
            code=ErrorCode.INVALID_ASSIGNMENT_TARGET,
        )
