"""Module-level import/export nodes for the jsxmemo AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from jsxmemo.nodes.base import Node
from jsxmemo.nodes.expressions import Expr, Identifier, StringLiteral
from jsxmemo.nodes.statements import Stmt


@dataclass(frozen=True, slots=True)
class ImportSpecifier(Node):
    """Named import: {imported as local}"""

    imported: Identifier
    local: Identifier


@dataclass(frozen=True, slots=True)
class ImportDefaultSpecifier(Node):
    """Default import: import local from '...'"""

    local: Identifier


@dataclass(frozen=True, slots=True)
class ImportNamespaceSpecifier(Node):
    """Namespace import: import * as local from '...'"""

    local: Identifier


@dataclass(frozen=True, slots=True)
class ImportDeclaration(Stmt):
    """import specifiers from 'source'"""

    specifiers: Sequence[Node]
    source: StringLiteral


@dataclass(frozen=True, slots=True)
class ExportSpecifier(Node):
    """Named export: {local as exported}"""

    local: Identifier
    exported: Identifier


@dataclass(frozen=True, slots=True)
class ExportNamedDeclaration(Stmt):
    """export declaration / export {specifiers} [from 'source']"""

    declaration: Stmt | None = None
    specifiers: Sequence[ExportSpecifier] = ()
    source: StringLiteral | None = None


@dataclass(frozen=True, slots=True)
class ExportDefaultDeclaration(Stmt):
    """export default declaration-or-expression"""

    declaration: Stmt | Expr


@dataclass(frozen=True, slots=True)
class ExportAllDeclaration(Stmt):
    """export * [as exported] from 'source'"""

    source: StringLiteral
    exported: Identifier | None = None
