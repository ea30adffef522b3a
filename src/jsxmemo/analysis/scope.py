"""Lexical scopes, bindings and unique-name generation.

A Scope maps names to Bindings for one lexical region (program, function
body, block, for-head, catch clause) and links to its parent. Scopes are
built lazily by the traversal that needs them: ``program_scope`` for the
module, then ``function_scope``/``block_scope`` as a walker descends.

Hoisting follows the language: ``var`` and function-declaration names
belong to the nearest function (or program) scope; ``let``/``const`` to
the enclosing block.

Example:
    >>> from jsxmemo.parser import parse
    >>> scope = program_scope(parse("const a = 1; let b;"))
    >>> scope.get_binding("a").kind
    'const'
    >>> scope.has_binding("window")
    False

"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Literal

from jsxmemo.analysis.visitor import walk
from jsxmemo.nodes import (
    ArrayPattern,
    ArrowFunctionExpression,
    AssignmentPattern,
    BlockStatement,
    CatchClause,
    DoWhileStatement,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ForInStatement,
    ForOfStatement,
    ForStatement,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    IfStatement,
    ImportDeclaration,
    JSXElement,
    Node,
    ObjectPattern,
    ObjectProperty,
    Program,
    RestElement,
    Stmt,
    SwitchStatement,
    TryStatement,
    VariableDeclaration,
    WhileStatement,
)

BindingKind = Literal["var", "let", "const", "param", "function", "import", "catch"]
ScopeKind = Literal["program", "function", "block"]


@dataclass(frozen=True, slots=True)
class Binding:
    """A declared name.

    Attributes:
        name: The bound name
        kind: How it was declared (only ``const`` is a memoization candidate)
        node: Declaring node: VariableDeclarator, FunctionDeclaration,
            import specifier, CatchClause, or the function for parameters
        identifier: The binding Identifier inside ``node``
        scope: Owning scope
    """

    name: str
    kind: BindingKind
    node: Node
    identifier: Identifier
    scope: Scope = field(compare=False, repr=False)

    @property
    def constant(self) -> bool:
        return self.kind == "const"


class Scope:
    """One lexical scope and a link to its parent."""

    __slots__ = ("_bindings", "block", "kind", "parent")

    def __init__(self, block: Node, kind: ScopeKind, parent: Scope | None = None) -> None:
        self.block = block
        self.kind = kind
        self.parent = parent
        self._bindings: dict[str, Binding] = {}

    def __repr__(self) -> str:
        return f"Scope({self.kind}, {type(self.block).__name__}, {sorted(self._bindings)})"

    def declare(self, name: str, kind: BindingKind, node: Node, identifier: Identifier) -> Binding:
        """Add a binding; the first declaration of a name wins."""
        binding = self._bindings.get(name)
        if binding is None:
            binding = Binding(name, kind, node, identifier, self)
            self._bindings[name] = binding
        return binding

    def has_own_binding(self, name: str) -> bool:
        return name in self._bindings

    def has_binding(self, name: str) -> bool:
        """True if ``name`` resolves in this scope or any parent."""
        return self.get_binding(name) is not None

    def get_binding(self, name: str) -> Binding | None:
        scope: Scope | None = self
        while scope is not None:
            binding = scope._bindings.get(name)
            if binding is not None:
                return binding
            scope = scope.parent
        return None

    def own_bindings(self) -> dict[str, Binding]:
        return dict(self._bindings)

    def get_all_bindings(self) -> dict[str, Binding]:
        """Every visible binding; inner declarations shadow outer ones."""
        chain: list[Scope] = []
        scope: Scope | None = self
        while scope is not None:
            chain.append(scope)
            scope = scope.parent
        merged: dict[str, Binding] = {}
        for scope in reversed(chain):
            merged.update(scope._bindings)
        return merged

    @property
    def function_scope(self) -> Scope:
        """Nearest enclosing function (or program) scope."""
        scope = self
        while scope.kind == "block" and scope.parent is not None:
            scope = scope.parent
        return scope


# ---------------------------------------------------------------------------
# Pattern and declaration helpers
# ---------------------------------------------------------------------------


def binding_identifiers(pattern: Node | None) -> Iterator[Identifier]:
    """Yield the identifiers a binding pattern declares, in source order."""
    if pattern is None:
        return
    if isinstance(pattern, Identifier):
        yield pattern
    elif isinstance(pattern, ObjectPattern):
        for prop in pattern.properties:
            if isinstance(prop, ObjectProperty):
                yield from binding_identifiers(prop.value)
            else:
                yield from binding_identifiers(prop)
    elif isinstance(pattern, ArrayPattern):
        for element in pattern.elements:
            yield from binding_identifiers(element)
    elif isinstance(pattern, AssignmentPattern):
        yield from binding_identifiers(pattern.left)
    elif isinstance(pattern, RestElement):
        yield from binding_identifiers(pattern.argument)


def _declare_variables(scope: Scope, declaration: VariableDeclaration) -> None:
    for declarator in declaration.declarations:
        for identifier in binding_identifiers(declarator.id):
            scope.declare(identifier.name, declaration.kind, declarator, identifier)


def _unwrap_export(stmt: Node) -> Node | None:
    if isinstance(stmt, (ExportNamedDeclaration, ExportDefaultDeclaration)):
        return stmt.declaration
    return stmt


def _declare_lexical(scope: Scope, body: Iterable[Stmt]) -> None:
    """let/const/function declarations directly in a statement list."""
    for stmt in body:
        stmt = _unwrap_export(stmt)
        if isinstance(stmt, VariableDeclaration) and stmt.kind != "var":
            _declare_variables(scope, stmt)
        elif isinstance(stmt, FunctionDeclaration):
            scope.declare(stmt.id.name, "function", stmt, stmt.id)


def _var_declarations(stmt: Node | None) -> Iterator[VariableDeclaration]:
    """``var`` declarations hoisted out of ``stmt``; does not enter functions."""
    stmt = _unwrap_export(stmt) if stmt is not None else None
    if stmt is None:
        return
    if isinstance(stmt, VariableDeclaration):
        if stmt.kind == "var":
            yield stmt
    elif isinstance(stmt, BlockStatement):
        for child in stmt.body:
            yield from _var_declarations(child)
    elif isinstance(stmt, IfStatement):
        yield from _var_declarations(stmt.consequent)
        yield from _var_declarations(stmt.alternate)
    elif isinstance(stmt, ForStatement):
        if isinstance(stmt.init, VariableDeclaration):
            yield from _var_declarations(stmt.init)
        yield from _var_declarations(stmt.body)
    elif isinstance(stmt, (ForInStatement, ForOfStatement)):
        if isinstance(stmt.left, VariableDeclaration):
            yield from _var_declarations(stmt.left)
        yield from _var_declarations(stmt.body)
    elif isinstance(stmt, (WhileStatement, DoWhileStatement)):
        yield from _var_declarations(stmt.body)
    elif isinstance(stmt, TryStatement):
        yield from _var_declarations(stmt.block)
        if stmt.handler is not None:
            yield from _var_declarations(stmt.handler.body)
        yield from _var_declarations(stmt.finalizer)
    elif isinstance(stmt, SwitchStatement):
        for case in stmt.cases:
            for child in case.consequent:
                yield from _var_declarations(child)


def _declare_hoisted_vars(scope: Scope, body: Iterable[Stmt]) -> None:
    for stmt in body:
        for declaration in _var_declarations(stmt):
            _declare_variables(scope, declaration)


# ---------------------------------------------------------------------------
# Scope builders
# ---------------------------------------------------------------------------


def program_scope(program: Program) -> Scope:
    """Module scope: imports, top-level declarations and hoisted vars."""
    scope = Scope(program, "program")
    for stmt in program.body:
        if isinstance(stmt, ImportDeclaration):
            for spec in stmt.specifiers:
                local = spec.local  # type: ignore[attr-defined]
                scope.declare(local.name, "import", spec, local)
    _declare_lexical(scope, program.body)
    _declare_hoisted_vars(scope, program.body)
    return scope


def function_scope(function: Node, parent: Scope | None) -> Scope:
    """Scope of a function: its own name (expressions), parameters, body declarations."""
    scope = Scope(function, "function", parent)
    if isinstance(function, FunctionExpression) and function.id is not None:
        scope.declare(function.id.name, "function", function, function.id)
    for param in function.params:  # type: ignore[attr-defined]
        for identifier in binding_identifiers(param):
            scope.declare(identifier.name, "param", function, identifier)
    body = function.body  # type: ignore[attr-defined]
    if isinstance(body, BlockStatement):
        _declare_lexical(scope, body.body)
        _declare_hoisted_vars(scope, body.body)
    elif not isinstance(function, ArrowFunctionExpression):
        raise TypeError(f"{type(function).__name__} has no block body")
    return scope


def block_scope(node: Node, parent: Scope) -> Scope:
    """Scope for a nested block, for-head, catch clause or switch body."""
    scope = Scope(node, "block", parent)
    if isinstance(node, BlockStatement):
        _declare_lexical(scope, node.body)
    elif isinstance(node, ForStatement):
        if isinstance(node.init, VariableDeclaration) and node.init.kind != "var":
            _declare_variables(scope, node.init)
    elif isinstance(node, (ForInStatement, ForOfStatement)):
        if isinstance(node.left, VariableDeclaration) and node.left.kind != "var":
            _declare_variables(scope, node.left)
    elif isinstance(node, CatchClause):
        for identifier in binding_identifiers(node.param):
            scope.declare(identifier.name, "catch", node, identifier)
    elif isinstance(node, SwitchStatement):
        for case in node.cases:
            _declare_lexical(scope, case.consequent)
    return scope


# ---------------------------------------------------------------------------
# Unique names
# ---------------------------------------------------------------------------

_NON_IDENTIFIER_RE = re.compile(r"[^A-Za-z0-9_$]+")


def to_identifier(text: str) -> str:
    """Turn arbitrary text into an identifier: ``aria-label`` -> ``ariaLabel``."""
    parts = [part for part in _NON_IDENTIFIER_RE.split(text) if part]
    if not parts:
        return "temp"
    return parts[0] + "".join(part[:1].upper() + part[1:] for part in parts[1:])


class NameAllocator:
    """Unique identifier generator for one compilation unit.

    Seeded with every name already used in the program, so generated names
    never shadow or collide with user code. Generated names are
    ``_<base>``, then ``_<base>2``, ``_<base>3``...

    Example:
        >>> names = NameAllocator({"_onClick"})
        >>> names.generate("onClick")
        '_onClick2'

    """

    __slots__ = ("_used",)

    def __init__(self, used: Iterable[str] = ()) -> None:
        self._used = set(used)

    @classmethod
    def for_program(cls, program: Program) -> NameAllocator:
        used: set[str] = set()
        for node in walk(program):
            if isinstance(node, Identifier):
                used.add(node.name)
            elif isinstance(node, JSXElement):
                used.add(re.split(r"[.:]", node.name, maxsplit=1)[0])
        return cls(used)

    def is_used(self, name: str) -> bool:
        return name in self._used

    def generate(self, base: str = "temp") -> str:
        """Reserve and return a fresh name derived from ``base``."""
        stem = to_identifier(base).lstrip("_").rstrip("0123456789") or "temp"
        candidate = f"_{stem}"
        counter = 1
        while candidate in self._used:
            counter += 1
            candidate = f"_{stem}{counter}"
        self._used.add(candidate)
        return candidate
