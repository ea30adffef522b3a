"""JSX nodes for the jsxmemo AST.

Element and attribute names are kept as plain strings in their source
spelling (``div``, ``ui.Button``, ``xlink:href``, ``data-id``). Opening and
closing tags are folded into a single JSXElement node.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from jsxmemo.nodes.base import Node
from jsxmemo.nodes.expressions import Expr, StringLiteral


@dataclass(frozen=True, slots=True)
class JSXEmptyExpression(Node):
    """Empty expression container body: {} or {/* comment */}"""


@dataclass(frozen=True, slots=True)
class JSXExpressionContainer(Node):
    """Embedded expression: {expr}"""

    expression: Expr | JSXEmptyExpression


@dataclass(frozen=True, slots=True)
class JSXText(Node):
    """Raw text between tags, whitespace preserved."""

    value: str


@dataclass(frozen=True, slots=True)
class JSXSpreadAttribute(Node):
    """Spread attribute: {...props}"""

    argument: Expr


@dataclass(frozen=True, slots=True)
class JSXAttribute(Node):
    """Attribute: name, name="value", name={expr}, name=<el />"""

    name: str
    value: StringLiteral | JSXExpressionContainer | JSXElement | JSXFragment | None = None


@dataclass(frozen=True, slots=True)
class JSXElement(Expr):
    """Element: <name attributes>children</name> or <name attributes />"""

    name: str
    attributes: Sequence[JSXAttribute | JSXSpreadAttribute] = ()
    children: Sequence[Node] = ()
    self_closing: bool = False


@dataclass(frozen=True, slots=True)
class JSXFragment(Expr):
    """Fragment: <>children</>"""

    children: Sequence[Node] = ()
