"""Binding pattern nodes for the jsxmemo AST.

Patterns appear in declarations, parameters, catch clauses and on the
left-hand side of assignments. ``ObjectPattern`` reuses ``ObjectProperty``
with a pattern as its value.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from jsxmemo.nodes.base import Node
from jsxmemo.nodes.expressions import Expr


@dataclass(frozen=True, slots=True)
class ObjectPattern(Node):
    """Object destructuring: {a, b: c, ...rest}"""

    properties: Sequence[Node] = ()


@dataclass(frozen=True, slots=True)
class ArrayPattern(Node):
    """Array destructuring: [a, , b, ...rest]  (holes are None)"""

    elements: Sequence[Node | None] = ()


@dataclass(frozen=True, slots=True)
class AssignmentPattern(Node):
    """Pattern with default value: a = 1"""

    left: Node
    right: Expr


@dataclass(frozen=True, slots=True)
class RestElement(Node):
    """Rest binding: ...rest"""

    argument: Node
