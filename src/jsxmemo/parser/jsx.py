"""JSX parsing for the jsxmemo parser.

Provides the mixin for elements, fragments, attributes and children.
The lexer is driven in ``jsx_tag`` mode inside ``<...>`` and in
``jsx_child`` mode between tags; embedded ``{...}`` expressions switch
back to ordinary ``js`` scanning.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from jsxmemo._types import Token, TokenType
from jsxmemo.exceptions import ErrorCode
from jsxmemo.nodes import (
    JSXAttribute,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXSpreadAttribute,
    JSXText,
    Node,
    StringLiteral,
)

if TYPE_CHECKING:
    from jsxmemo.exceptions import ParseError
    from jsxmemo.lexer import LexMode
    from jsxmemo.nodes import Expr

_T = TypeVar("_T")


class JSXParsingMixin:
    """Mixin for parsing JSX elements and fragments."""

    if TYPE_CHECKING:
        _current: Token

        def _advance(self, mode: LexMode = "js") -> Token: ...
        def _peek(self, mode: LexMode = "js") -> Token: ...
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
        def _unsupported(self, what: str, token: Token | None = None) -> ParseError: ...
        @staticmethod
        def _describe(token: Token) -> str: ...

        # From ExpressionParsingMixin
        def _parse_expression(self) -> Expr: ...
        def _parse_assignment(self) -> Expr: ...

    def _parse_jsx_element(self, follow_mode: LexMode = "js") -> JSXElement | JSXFragment:
        """Parse an element or fragment; the current token is its ``<``.

        ``follow_mode`` is how the token after the final ``>`` is scanned:
        ``jsx_child`` for a child element, ``jsx_tag`` for an attribute
        value, ``js`` otherwise.
        """
        start = self._current
        self._advance("jsx_tag")

        if self._is(">"):
            self._advance("jsx_child")
            children = self._parse_jsx_children(start, None)
            self._expect(">", follow_mode)
            return JSXFragment(start.lineno, start.col_offset, children)

        name = self._parse_jsx_name()
        attributes = self._parse_jsx_attributes()

        if self._eat("/", "jsx_tag"):
            self._expect(">", follow_mode)
            return JSXElement(start.lineno, start.col_offset, name, attributes, (), True)

        self._expect(">", "jsx_child")
        children = self._parse_jsx_children(start, name)
        self._expect(">", follow_mode)
        return JSXElement(start.lineno, start.col_offset, name, attributes, children)

    def _parse_jsx_name(self) -> str:
        """Element or attribute name: ``div``, ``ui.Button``, ``xlink:href``."""
        token = self._current
        if token.type is not TokenType.NAME:
            raise self._error(f"Expected a JSX name but found {self._describe(token)}")
        parts = [self._advance("jsx_tag").value]
        while self._is(".") or self._is(":"):
            parts.append(self._advance("jsx_tag").value)
            if self._current.type is not TokenType.NAME:
                raise self._error(f"Expected a JSX name but found {self._describe(self._current)}")
            parts.append(self._advance("jsx_tag").value)
        return "".join(parts)

    def _parse_jsx_attributes(self) -> tuple[JSXAttribute | JSXSpreadAttribute, ...]:
        attributes: list[JSXAttribute | JSXSpreadAttribute] = []
        while not (self._is("/") or self._is(">")):
            token = self._current
            if self._eat("{"):
                self._expect("...")
                argument = self._allow_in(self._parse_assignment)
                self._expect("}", "jsx_tag")
                attributes.append(JSXSpreadAttribute(token.lineno, token.col_offset, argument))
                continue
            name = self._parse_jsx_name()
            value = self._parse_jsx_attribute_value() if self._eat("=", "jsx_tag") else None
            attributes.append(JSXAttribute(token.lineno, token.col_offset, name, value))
        return tuple(attributes)

    def _parse_jsx_attribute_value(self) -> StringLiteral | JSXExpressionContainer | JSXElement | JSXFragment:
        token = self._current
        if token.type is TokenType.STRING:
            self._advance("jsx_tag")
            # JSX attribute strings have no escape sequences
            return StringLiteral(token.lineno, token.col_offset, token.value[1:-1], token.value)
        if self._eat("{"):
            if self._is("}"):
                raise self._error("JSX attribute value must not be an empty expression", token)
            expression = self._allow_in(self._parse_assignment)
            self._expect("}", "jsx_tag")
            return JSXExpressionContainer(token.lineno, token.col_offset, expression)
        if self._is("<"):
            return self._parse_jsx_element("jsx_tag")
        raise self._error(f"Unexpected {self._describe(token)} as JSX attribute value")

    def _parse_jsx_children(self, start: Token, name: str | None) -> tuple[Node, ...]:
        """Parse children up to and including ``</name`` (``</`` for fragments)."""
        children: list[Node] = []
        while True:
            token = self._current
            if token.type is TokenType.EOF:
                label = f"<{name}>" if name is not None else "fragment"
                raise self._error(f"Unterminated JSX {label}", start)
            if token.type is TokenType.JSX_TEXT:
                self._advance("jsx_child")
                children.append(JSXText(token.lineno, token.col_offset, token.value))
            elif self._is("{"):
                children.append(self._parse_jsx_child_expression())
            elif self._peek("jsx_tag").value == "/":
                self._advance("jsx_tag")
                self._advance("jsx_tag")
                self._check_closing_tag(start, name)
                return tuple(children)
            else:
                children.append(self._parse_jsx_element("jsx_child"))

    def _parse_jsx_child_expression(self) -> JSXExpressionContainer:
        token = self._advance()
        if self._is("}"):
            empty = JSXEmptyExpression(self._current.lineno, self._current.col_offset)
            self._advance("jsx_child")
            return JSXExpressionContainer(token.lineno, token.col_offset, empty)
        if self._is("..."):
            raise self._unsupported("JSX spread children")
        expression = self._allow_in(self._parse_expression)
        self._expect("}", "jsx_child")
        return JSXExpressionContainer(token.lineno, token.col_offset, expression)

    def _check_closing_tag(self, start: Token, name: str | None) -> None:
        """Consume the closing tag's name; the ``>`` is left current."""
        closing = self._current
        closing_name = self._parse_jsx_name() if closing.type is TokenType.NAME else None
        if closing_name != name:
            expected = f"</{name}>" if name is not None else "</>"
            found = f"</{closing_name}>" if closing_name is not None else "</>"
            raise self._error(
                f"Expected corresponding closing tag {expected} but found {found}",
                closing,
                code=ErrorCode.MISMATCHED_JSX_TAG,
            )
