"""Statement nodes for the jsxmemo AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from jsxmemo.nodes.base import Node
from jsxmemo.nodes.expressions import Expr


@dataclass(frozen=True, slots=True)
class Stmt(Node):
    """Base class for statements."""


@dataclass(frozen=True, slots=True)
class Program(Node):
    """Root node: a whole module or script."""

    body: Sequence[Stmt]
    source_type: Literal["module", "script"] = "module"


@dataclass(frozen=True, slots=True)
class ExpressionStatement(Stmt):
    """Expression evaluated for its side effects: expr;"""

    expression: Expr


@dataclass(frozen=True, slots=True)
class BlockStatement(Stmt):
    """Braced statement list: { ... }"""

    body: Sequence[Stmt] = ()


@dataclass(frozen=True, slots=True)
class EmptyStatement(Stmt):
    """Lone semicolon."""


@dataclass(frozen=True, slots=True)
class VariableDeclarator(Node):
    """Single binding of a declaration: id = init"""

    id: Node
    init: Expr | None = None


@dataclass(frozen=True, slots=True)
class VariableDeclaration(Stmt):
    """var / let / const declaration."""

    kind: Literal["var", "let", "const"]
    declarations: Sequence[VariableDeclarator]


@dataclass(frozen=True, slots=True)
class ReturnStatement(Stmt):
    """return [argument];"""

    argument: Expr | None = None


@dataclass(frozen=True, slots=True)
class IfStatement(Stmt):
    """if (test) consequent else alternate"""

    test: Expr
    consequent: Stmt
    alternate: Stmt | None = None


@dataclass(frozen=True, slots=True)
class ForStatement(Stmt):
    """for (init; test; update) body"""

    init: VariableDeclaration | Expr | None
    test: Expr | None
    update: Expr | None
    body: Stmt


@dataclass(frozen=True, slots=True)
class ForInStatement(Stmt):
    """for (left in right) body"""

    left: Node
    right: Expr
    body: Stmt


@dataclass(frozen=True, slots=True)
class ForOfStatement(Stmt):
    """for [await] (left of right) body"""

    left: Node
    right: Expr
    body: Stmt
    is_await: bool = False


@dataclass(frozen=True, slots=True)
class WhileStatement(Stmt):
    """while (test) body"""

    test: Expr
    body: Stmt


@dataclass(frozen=True, slots=True)
class DoWhileStatement(Stmt):
    """do body while (test)"""

    body: Stmt
    test: Expr


@dataclass(frozen=True, slots=True)
class BreakStatement(Stmt):
    """break;"""


@dataclass(frozen=True, slots=True)
class ContinueStatement(Stmt):
    """continue;"""


@dataclass(frozen=True, slots=True)
class ThrowStatement(Stmt):
    """throw argument;"""

    argument: Expr


@dataclass(frozen=True, slots=True)
class CatchClause(Node):
    """catch [(param)] { body }"""

    param: Node | None
    body: BlockStatement


@dataclass(frozen=True, slots=True)
class TryStatement(Stmt):
    """try { block } catch ... finally { finalizer }"""

    block: BlockStatement
    handler: CatchClause | None = None
    finalizer: BlockStatement | None = None


@dataclass(frozen=True, slots=True)
class SwitchCase(Node):
    """case test: consequent  (test is None for default)"""

    test: Expr | None
    consequent: Sequence[Stmt] = ()


@dataclass(frozen=True, slots=True)
class SwitchStatement(Stmt):
    """switch (discriminant) { cases }"""

    discriminant: Expr
    cases: Sequence[SwitchCase] = ()
