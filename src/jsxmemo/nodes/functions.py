"""Function nodes for the jsxmemo AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from jsxmemo.nodes.base import Node
from jsxmemo.nodes.expressions import Expr, Identifier
from jsxmemo.nodes.statements import BlockStatement, Stmt


@dataclass(frozen=True, slots=True)
class ArrowFunctionExpression(Expr):
    """Arrow function: (params) => body

    ``body`` is a BlockStatement or, for expression-bodied arrows, an Expr.
    """

    params: Sequence[Node]
    body: BlockStatement | Expr
    is_async: bool = False


@dataclass(frozen=True, slots=True)
class FunctionExpression(Expr):
    """Function expression: function name(params) { body }"""

    id: Identifier | None
    params: Sequence[Node]
    body: BlockStatement
    is_async: bool = False
    generator: bool = False


@dataclass(frozen=True, slots=True)
class FunctionDeclaration(Stmt):
    """Function declaration: function name(params) { body }"""

    id: Identifier
    params: Sequence[Node]
    body: BlockStatement
    is_async: bool = False
    generator: bool = False


@dataclass(frozen=True, slots=True)
class ObjectMethod(Node):
    """Method shorthand in an object literal: {name(params) { body }}"""

    kind: Literal["method", "get", "set"]
    key: Expr
    params: Sequence[Node]
    body: BlockStatement
    computed: bool = False
    is_async: bool = False
    generator: bool = False


AnyFunction = ArrowFunctionExpression | FunctionExpression | FunctionDeclaration | ObjectMethod
"""Every node kind that introduces a function scope."""
