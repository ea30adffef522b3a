"""AST builders for generated code.

Generated nodes take the location of the source node they replace, so
diagnostics and error messages on a rewritten program still point into
the original file.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from jsxmemo.nodes import (
    ArrayExpression,
    ArrowFunctionExpression,
    BlockStatement,
    CallExpression,
    Identifier,
    MemberExpression,
    ReturnStatement,
    VariableDeclaration,
    VariableDeclarator,
)

if TYPE_CHECKING:
    from jsxmemo.analysis.captures import CaptureSet
    from jsxmemo.config import TransformConfig
    from jsxmemo.nodes import Expr, Node

_SEGMENT_RE = re.compile(r"(\?\.|\.)")


def dependency_expression(path: str, at: Node) -> Expr:
    """``"a?.b.c"`` -> MemberExpression chain."""
    parts = _SEGMENT_RE.split(path)
    node: Expr = Identifier(at.lineno, at.col_offset, parts[0])
    for separator, name in zip(parts[1::2], parts[2::2], strict=True):
        prop = Identifier(at.lineno, at.col_offset, name)
        node = MemberExpression(at.lineno, at.col_offset, node, prop, optional=separator == "?.")
    return node


def dependency_array(captures: CaptureSet, at: Node) -> ArrayExpression:
    elements = tuple(dependency_expression(path, at) for path in captures.dependencies)
    return ArrayExpression(at.lineno, at.col_offset, elements)


def primitive_callee(config: TransformConfig, primitive: str, at: Node) -> Expr:
    name = Identifier(at.lineno, at.col_offset, primitive)
    if not config.namespace:
        return name
    namespace = Identifier(at.lineno, at.col_offset, config.namespace)
    return MemberExpression(at.lineno, at.col_offset, namespace, name)


def block_return(expr: Expr) -> BlockStatement:
    """``expr`` -> ``{ return expr; }``"""
    return BlockStatement(expr.lineno, expr.col_offset, (ReturnStatement(expr.lineno, expr.col_offset, expr),))


def invocation_boundary(expr: Expr) -> CallExpression:
    """``expr`` -> ``(() => { return expr; })()``"""
    factory = ArrowFunctionExpression(expr.lineno, expr.col_offset, (), block_return(expr))
    return CallExpression(expr.lineno, expr.col_offset, factory)


def memoized_callback(closure: Expr, captures: CaptureSet, config: TransformConfig) -> CallExpression:
    """``React.useCallback(closure, [deps])``"""
    callee = primitive_callee(config, config.callback_primitive, closure)
    return CallExpression(closure.lineno, closure.col_offset, callee, (closure, dependency_array(captures, closure)))


def memoized_value(
    value: Expr,
    captures: CaptureSet,
    config: TransformConfig,
    *,
    block_body: bool = False,
) -> CallExpression:
    """``React.useMemo(() => value, [deps])``

    With ``block_body`` the factory is ``() => { return value; }``.
    """
    body: BlockStatement | Expr = block_return(value) if block_body else value
    factory = ArrowFunctionExpression(value.lineno, value.col_offset, (), body)
    callee = primitive_callee(config, config.value_primitive, value)
    return CallExpression(value.lineno, value.col_offset, callee, (factory, dependency_array(captures, value)))


def const_declaration(name: str, init: Expr) -> VariableDeclaration:
    """``const name = init;``"""
    identifier = Identifier(init.lineno, init.col_offset, name)
    declarator = VariableDeclarator(init.lineno, init.col_offset, identifier, init)
    return VariableDeclaration(init.lineno, init.col_offset, "const", (declarator,))
