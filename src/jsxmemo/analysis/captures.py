"""Capture analysis for memoization dependency lists.

Computes the externally-bound values an expression reads: the names it
references that resolve in an enclosing scope, followed by the dot-access
paths rooted at those names. The result is ordered by first occurrence and
free of duplicates, so the same input always yields the same dependency
list.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jsxmemo.analysis.scope import binding_identifiers, block_scope, function_scope
from jsxmemo.analysis.visitor import visit_children
from jsxmemo.nodes import (
    ArrayPattern,
    AssignmentPattern,
    BlockStatement,
    Identifier,
    MemberExpression,
    Node,
    ObjectPattern,
    ObjectProperty,
    RestElement,
)

if TYPE_CHECKING:
    from jsxmemo.analysis.scope import Scope
    from jsxmemo.nodes import (
        AssignmentExpression,
        CallExpression,
        CatchClause,
        ForStatement,
        FunctionDeclaration,
        JSXElement,
        ObjectMethod,
        SwitchStatement,
        UpdateExpression,
        VariableDeclarator,
    )


@dataclass(frozen=True, slots=True)
class CaptureSet:
    """Result of a capture analysis.

    Attributes:
        dependencies: Root names first, then dot-access paths
            (``("items", "user.name", "config?.theme")``)
        computed_roots: Captured roots read through a computed access
            (``row[key]``); their paths could not be refined
    """

    dependencies: tuple[str, ...] = ()
    computed_roots: tuple[str, ...] = ()

    @property
    def roots(self) -> tuple[str, ...]:
        return tuple(dep for dep in self.dependencies if "." not in dep)

    def __len__(self) -> int:
        return len(self.dependencies)

    def __contains__(self, path: object) -> bool:
        return path in self.dependencies


class CaptureAnalyzer:
    """Collect the captured names and access paths of an expression.

    Only identifiers in reference position count. Names declared inside the
    analyzed expression (parameters, nested declarations, catch bindings)
    are tracked on a scope stack and never captured; names that do not
    resolve in ``scope`` (globals such as ``window``) are ignored.

    Thread-safe: Creates new state for each analyze() call.

    Example:
            >>> analyzer = CaptureAnalyzer()
            >>> captures = analyzer.analyze(closure, scope)
            >>> captures.dependencies
            ('history', 'id')

    Member Access:
        - ``user.profile.name`` records ``user`` and ``user.profile.name``
        - ``history.push(x)`` records ``history`` only (method receiver)
        - ``row[key].id`` records ``row`` and ``key``; the path is abandoned

    """

    def __init__(self) -> None:
        """Initialize analyzer (stateless until analyze() is called)."""
        self._scope: Scope | None = None
        self._excluded: frozenset[str] = frozenset()
        self._scope_stack: list[set[str]] = []
        self._roots: dict[str, None] = {}
        self._paths: dict[str, None] = {}
        self._computed_roots: dict[str, None] = {}
        self._dispatch: dict[str, Callable[..., None]] = {}
        for name in dir(self):
            if name.startswith("_visit_"):
                method = getattr(self, name)
                if callable(method):
                    self._dispatch[name[7:]] = method

    def analyze(self, node: Node, scope: Scope, excluded: frozenset[str] = frozenset()) -> CaptureSet:
        """Analyze an expression and return what it captures.

        Args:
            node: Expression to analyze (closure, initializer, UI tree)
            scope: Scope the expression is evaluated in
            excluded: Names never reported (e.g. the binding being declared)

        Returns:
            CaptureSet with roots followed by refined paths
        """
        # Reset state for each analysis
        self._scope = scope
        self._excluded = excluded
        self._scope_stack = [set()]
        self._roots = {}
        self._paths = {}
        self._computed_roots = {}
        self._visit(node)

        dependencies = list(self._roots)
        dependencies.extend(path for path in self._paths if path not in self._roots)
        return CaptureSet(tuple(dependencies), tuple(self._computed_roots))

    def _visit(self, node: Node | None) -> None:
        if node is None:
            return
        handler = self._dispatch.get(type(node).__name__.lower())
        if handler:
            handler(node)
        else:
            visit_children(node, self._visit)

    # -- references ---------------------------------------------------------

    def _is_local(self, name: str) -> bool:
        return any(name in frame for frame in self._scope_stack)

    def _reference(self, name: str) -> bool:
        """Record a referenced name; True when it is captured."""
        if name in self._excluded or self._is_local(name):
            return False
        assert self._scope is not None
        if not self._scope.has_binding(name):
            return False
        self._roots.setdefault(name)
        return True

    def _visit_identifier(self, node: Identifier) -> None:
        self._reference(node.name)

    def _visit_jsxelement(self, node: JSXElement) -> None:
        """Component names (``<Row>``, ``<ui.Row>``) reference their root."""
        name = node.name
        if ":" not in name and (name[0].isupper() or "." in name):
            self._reference(name.split(".", 1)[0])
        visit_children(node, self._visit)

    # -- member access ------------------------------------------------------

    def _visit_memberexpression(self, node: MemberExpression) -> None:
        self._visit_access(node, receiver=False)

    def _visit_access(self, node: MemberExpression, *, receiver: bool) -> None:
        """Record the maximal dot-access path of ``node``.

        With ``receiver`` set (callee, assignment or update target) the last
        segment is dropped: the object the member is read from or written to
        is the dependency.
        """
        segments: list[str] = []
        computed_keys: list[Node] = []
        current: Node = node
        while isinstance(current, MemberExpression):
            if current.computed:
                computed_keys.append(current.property)
            else:
                assert isinstance(current.property, Identifier)
                segments.append(("?." if current.optional else ".") + current.property.name)
            current = current.object

        if not isinstance(current, Identifier):
            self._visit(current)
        elif self._reference(current.name):
            if computed_keys:
                self._computed_roots.setdefault(current.name)
            else:
                segments.reverse()
                if receiver:
                    segments.pop()
                if segments:
                    self._paths.setdefault(current.name + "".join(segments))

        for key in reversed(computed_keys):
            self._visit(key)

    def _visit_target(self, node: Node) -> None:
        if isinstance(node, MemberExpression):
            self._visit_access(node, receiver=True)
        else:
            self._visit(node)

    def _visit_callexpression(self, node: CallExpression) -> None:
        self._visit_target(node.callee)
        for argument in node.arguments:
            self._visit(argument)

    def _visit_assignmentexpression(self, node: AssignmentExpression) -> None:
        self._visit_target(node.left)
        self._visit(node.right)

    def _visit_updateexpression(self, node: UpdateExpression) -> None:
        self._visit_target(node.argument)

    def _visit_objectproperty(self, node: ObjectProperty) -> None:
        if node.computed:
            self._visit(node.key)
        self._visit(node.value)

    # -- assignment targets -------------------------------------------------

    def _visit_objectpattern(self, node: ObjectPattern) -> None:
        """Destructuring assignment: ``({a, b} = obj)`` writes outer names."""
        for prop in node.properties:
            if isinstance(prop, ObjectProperty):
                if prop.computed:
                    self._visit(prop.key)
                self._visit_target(prop.value)
            else:
                self._visit(prop)

    def _visit_arraypattern(self, node: ArrayPattern) -> None:
        for element in node.elements:
            if element is not None:
                self._visit_target(element)

    def _visit_assignmentpattern(self, node: AssignmentPattern) -> None:
        self._visit_target(node.left)
        self._visit(node.right)

    def _visit_restelement(self, node: RestElement) -> None:
        self._visit_target(node.argument)

    # -- binding constructs -------------------------------------------------

    def _visit_declared(self, node: Node | None) -> None:
        """Visit the expressions inside a binding pattern (defaults, computed keys)."""
        if node is None or isinstance(node, Identifier):
            return
        if isinstance(node, AssignmentPattern):
            self._visit_declared(node.left)
            self._visit(node.right)
        elif isinstance(node, ObjectPattern):
            for prop in node.properties:
                if isinstance(prop, ObjectProperty):
                    if prop.computed:
                        self._visit(prop.key)
                    self._visit_declared(prop.value)
                else:
                    self._visit_declared(prop)
        elif isinstance(node, ArrayPattern):
            for element in node.elements:
                self._visit_declared(element)
        elif isinstance(node, RestElement):
            self._visit_declared(node.argument)

    def _visit_function(self, node: Node) -> None:
        """Parameters and body declarations are local to the function."""
        self._scope_stack.append(set(function_scope(node, None).own_bindings()))
        for param in node.params:  # type: ignore[attr-defined]
            self._visit_declared(param)
        body = node.body  # type: ignore[attr-defined]
        if isinstance(body, BlockStatement):
            for stmt in body.body:
                self._visit(stmt)
        else:
            self._visit(body)
        self._scope_stack.pop()

    def _visit_arrowfunctionexpression(self, node: Node) -> None:
        self._visit_function(node)

    def _visit_functionexpression(self, node: Node) -> None:
        self._visit_function(node)

    def _visit_functiondeclaration(self, node: FunctionDeclaration) -> None:
        self._visit_function(node)

    def _visit_objectmethod(self, node: ObjectMethod) -> None:
        if node.computed:
            self._visit(node.key)
        self._visit_function(node)

    def _push_block(self, node: Node) -> None:
        assert self._scope is not None
        self._scope_stack.append(set(block_scope(node, self._scope).own_bindings()))

    def _visit_block(self, node: Node) -> None:
        self._push_block(node)
        visit_children(node, self._visit)
        self._scope_stack.pop()

    def _visit_blockstatement(self, node: BlockStatement) -> None:
        self._visit_block(node)

    def _visit_forstatement(self, node: ForStatement) -> None:
        self._visit_block(node)

    def _visit_forinstatement(self, node: Node) -> None:
        self._visit_block(node)

    def _visit_forofstatement(self, node: Node) -> None:
        self._visit_block(node)

    def _visit_switchstatement(self, node: SwitchStatement) -> None:
        self._visit(node.discriminant)
        self._push_block(node)
        for case in node.cases:
            self._visit(case)
        self._scope_stack.pop()

    def _visit_catchclause(self, node: CatchClause) -> None:
        self._scope_stack.append({identifier.name for identifier in binding_identifiers(node.param)})
        self._visit_declared(node.param)
        self._visit(node.body)
        self._scope_stack.pop()

    def _visit_variabledeclarator(self, node: VariableDeclarator) -> None:
        self._visit_declared(node.id)
        self._visit(node.init)
