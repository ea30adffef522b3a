"""Scope lifting for UI subtrees.

Memoization calls must run unconditionally and in a stable order on every
render, so they can only be placed in a function body, before its return.
UI trees written as expression-bodied arrows or embedded in a container
have no such body. The lifter gives them one:

    items.map(item => <Row item={item} />)
        -> items.map(item => { return <Row item={item} />; })

    <div>{open && <Menu onClose={() => close()} />}</div>
        -> <div>{(() => { return open && <Menu ... />; })()}</div>

Every other position, including the arguments of primitive calls, is left
as written. A lifted tree sits under a return statement, which is never
lifted again, so lifting is idempotent.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from jsxmemo.analysis.eligibility import is_hook_call
from jsxmemo.analysis.visitor import transform_children
from jsxmemo.config import DEFAULT_CONFIG, TransformConfig
from jsxmemo.nodes import (
    ArrowFunctionExpression,
    ConditionalExpression,
    JSXExpressionContainer,
    LogicalExpression,
    is_ui_element,
)
from jsxmemo.transform.builders import block_return, invocation_boundary

if TYPE_CHECKING:
    from jsxmemo.nodes import Node


def is_ui_tree(node: Node | None) -> bool:
    """A UI element, or a conditional/logical expression with a UI tree operand."""
    if is_ui_element(node):
        return True
    if isinstance(node, ConditionalExpression):
        return is_ui_tree(node.consequent) or is_ui_tree(node.alternate)
    if isinstance(node, LogicalExpression):
        return is_ui_tree(node.left) or is_ui_tree(node.right)
    return False


class ScopeLifter:
    """Introduce function bodies around UI trees that lack one.

    Arguments of primitive calls (``useCallback(...)``) are already under
    manual memoization and keep their shape.

    Thread-safe: Immutable after construction; lift() returns a new tree
    and never mutates.

    Example:
            >>> lifter = ScopeLifter()
            >>> program = lifter.lift(parse("const f = () => <div />;"))
            >>> generate(program)
            'const f = () => {\\n  return <div />;\\n};'

    """

    def __init__(self, config: TransformConfig | None = None) -> None:
        self._prefix = (config or DEFAULT_CONFIG).primitive_prefix

    def lift(self, node: Node) -> Node:
        """Return ``node`` with every liftable UI tree lifted."""
        return self._lift(node)

    def _lift(self, node: Node) -> Node:
        if is_hook_call(node, self._prefix):
            return node
        node = transform_children(node, self._lift)
        if isinstance(node, ArrowFunctionExpression) and is_ui_tree(node.body):
            return replace(node, body=block_return(node.body))  # type: ignore[arg-type]
        if isinstance(node, JSXExpressionContainer) and is_ui_tree(node.expression):
            return replace(node, expression=invocation_boundary(node.expression))  # type: ignore[arg-type]
        return node
