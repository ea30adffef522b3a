"""Memoization rewriter.

Walks a program, tracking lexical scopes, and rewrites every view function
(a function that returns a UI tree). Two passes run on each function body
before the traversal continues into its (rewritten) children:

Pass A (attribute closures):
    Inline closures bound to UI attributes in a *terminal return* (a return
    statement directly in the body) become named callbacks declared
    immediately before the return::

        return <button onClick={() => alert(text)} />;

        const _onClick = React.useCallback(() => alert(text), [text]);
        return <button onClick={_onClick} />;

Pass B (own bindings):
    When any return of the function produces a UI tree, every binding the
    function owns is classified in declaration order; eligible ``const``
    declarators are rewritten in place::

        const visible = items.filter(isVisible);
        const visible = React.useMemo(() => items.filter(isVisible), [items, isVisible]);

Arguments of primitive calls (``React.useMemo(...)``, ``useEffect(...)``)
are never entered: primitives may not run inside another primitive's
callback, and generated declarations are left alone on a second run.
Every declined site is recorded as a Diagnostic.

Functions are processed outside-in, so names are allocated in document
order: the outer handler gets ``_onClick``, a nested one ``_onClick2``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from typing import TYPE_CHECKING

from jsxmemo.analysis.captures import CaptureAnalyzer
from jsxmemo.analysis.eligibility import Eligibility, classify, is_hook_call, is_inline_closure
from jsxmemo.analysis.scope import NameAllocator, block_scope, function_scope, program_scope
from jsxmemo.analysis.visitor import iter_child_nodes, transform_children
from jsxmemo.config import DEFAULT_CONFIG, TransformConfig
from jsxmemo.diagnostics import Diagnostic, SkipReason
from jsxmemo.nodes import (
    BlockStatement,
    Identifier,
    JSXAttribute,
    JSXExpressionContainer,
    ReturnStatement,
    VariableDeclaration,
    VariableDeclarator,
    is_function,
)
from jsxmemo.transform.builders import const_declaration, memoized_callback, memoized_value
from jsxmemo.transform.lifter import is_ui_tree

if TYPE_CHECKING:
    from jsxmemo.analysis.captures import CaptureSet
    from jsxmemo.analysis.scope import Scope
    from jsxmemo.nodes import CallExpression, Node, Program, Stmt

logger = logging.getLogger(__name__)


class Rewriter:
    """Insert memoization primitives into view functions.

    Thread-safe: Creates new traversal state for each rewrite() call. A
    shared NameAllocator must not be used from two threads at once.

    Example:
            >>> rewriter = Rewriter()
            >>> program = rewriter.rewrite(ScopeLifter().lift(parse(source)))
            >>> for diagnostic in rewriter.diagnostics:
            ...     print(diagnostic.format())

    Args:
        config: Transform configuration. Uses DEFAULT_CONFIG if not provided.
        names: Name allocator for the compilation unit. When omitted, each
            rewrite() call seeds a fresh one from the program's identifiers.

    """

    def __init__(self, config: TransformConfig | None = None, names: NameAllocator | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._names = names
        self._active_names: NameAllocator | None = None
        self._scope: Scope | None = None
        self._diagnostics: list[Diagnostic] = []
        self._analyzer = CaptureAnalyzer()
        self._dispatch: dict[str, Callable[..., Node]] = {}
        for name in dir(self):
            if name.startswith("_visit_"):
                method = getattr(self, name)
                if callable(method):
                    self._dispatch[name[7:]] = method

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Sites skipped by the most recent rewrite() call, in visit order."""
        return tuple(self._diagnostics)

    def rewrite(self, program: Program) -> Program:
        """Return ``program`` with its view functions memoized.

        Untouched subtrees keep their identity; a program with nothing to
        rewrite is returned as is.
        """
        self._active_names = self._names or NameAllocator.for_program(program)
        self._diagnostics = []
        self._scope = program_scope(program)
        try:
            return transform_children(program, self._visit)
        finally:
            self._scope = None
            self._active_names = None

    # -- traversal ----------------------------------------------------------

    def _visit(self, node: Node) -> Node:
        handler = self._dispatch.get(type(node).__name__.lower())
        if handler:
            return handler(node)
        return transform_children(node, self._visit)

    @contextmanager
    def _entered(self, scope: Scope) -> Iterator[Scope]:
        outer = self._scope
        self._scope = scope
        try:
            yield scope
        finally:
            self._scope = outer

    def _enter_block(self, node: Node) -> Node:
        assert self._scope is not None
        with self._entered(block_scope(node, self._scope)):
            return transform_children(node, self._visit)

    def _visit_blockstatement(self, node: BlockStatement) -> Node:
        return self._enter_block(node)

    def _visit_forstatement(self, node: Node) -> Node:
        return self._enter_block(node)

    def _visit_forinstatement(self, node: Node) -> Node:
        return self._enter_block(node)

    def _visit_forofstatement(self, node: Node) -> Node:
        return self._enter_block(node)

    def _visit_switchstatement(self, node: Node) -> Node:
        return self._enter_block(node)

    def _visit_catchclause(self, node: Node) -> Node:
        return self._enter_block(node)

    def _enter_function(self, node: Node) -> Node:
        scope = function_scope(node, self._scope)
        body = node.body  # type: ignore[attr-defined]
        params = node.params  # type: ignore[attr-defined]
        if isinstance(body, BlockStatement):
            body = self._memoize_body(body, scope)

        with self._entered(scope):
            new_params = tuple(self._visit(param) for param in params)
            if isinstance(body, BlockStatement):
                # The body shares the function scope; no extra block scope
                new_body = transform_children(body, self._visit)
            else:
                new_body = self._visit(body)

        changes: dict[str, object] = {}
        if any(new is not old for new, old in zip(new_params, params, strict=True)):
            changes["params"] = new_params
        if new_body is not node.body:  # type: ignore[attr-defined]
            changes["body"] = new_body
        return replace(node, **changes) if changes else node  # type: ignore[type-var]

    def _visit_arrowfunctionexpression(self, node: Node) -> Node:
        return self._enter_function(node)

    def _visit_functionexpression(self, node: Node) -> Node:
        return self._enter_function(node)

    def _visit_functiondeclaration(self, node: Node) -> Node:
        return self._enter_function(node)

    def _visit_objectmethod(self, node: Node) -> Node:
        return self._enter_function(node)

    def _visit_callexpression(self, node: CallExpression) -> Node:
        if is_hook_call(node, self._config.primitive_prefix):
            return node
        return transform_children(node, self._visit)

    def _visit_jsxattribute(self, node: JSXAttribute) -> Node:
        value = node.value
        if (
            self._config.memoize_attributes
            and isinstance(value, JSXExpressionContainer)
            and is_inline_closure(value.expression)
        ):
            self._skip(
                SkipReason.AMBIGUOUS_SHAPE,
                value.expression,
                f"inline '{node.name}' closure is not part of a terminal return",
            )
        return transform_children(node, self._visit)

    # -- view function bodies -----------------------------------------------

    def _memoize_body(self, body: BlockStatement, scope: Scope) -> BlockStatement:
        """Run Pass B on the body's own bindings, then Pass A on its terminal returns."""
        returns = [
            stmt for stmt in body.body if isinstance(stmt, ReturnStatement) and stmt.argument is not None
        ]

        replacements: dict[int, VariableDeclarator] = {}
        if self._config.memoize_bindings and _returns_ui_tree(body):
            self._memoize_bindings(scope, _declaration_order(body), replacements)
        if not returns and not replacements:
            return body

        terminal = {id(stmt) for stmt in returns}
        statements: list[Stmt] = []
        changed = False
        for stmt in body.body:
            new_stmt = stmt
            if isinstance(stmt, VariableDeclaration) and replacements:
                new_stmt = _replace_declarators(stmt, replacements)
            elif id(stmt) in terminal and self._config.memoize_attributes:
                declarations: list[VariableDeclaration] = []
                new_stmt = self._hoist_attribute_closures(stmt, scope, declarations)
                statements.extend(declarations)
            changed = changed or new_stmt is not stmt
            statements.append(new_stmt)
        if not changed:
            return body
        return replace(body, body=tuple(statements))

    # -- Pass A --------------------------------------------------------------

    def _hoist_attribute_closures(
        self, stmt: ReturnStatement, scope: Scope, declarations: list[VariableDeclaration]
    ) -> Stmt:
        """Replace inline attribute closures in a returned tree with named callbacks."""
        assert self._active_names is not None
        names = self._active_names

        def hoist(node: Node) -> Node:
            # Containers and nested functions get their own terminal returns
            if isinstance(node, JSXExpressionContainer) or is_function(node):
                return node
            if not isinstance(node, JSXAttribute):
                return transform_children(node, hoist)
            value = node.value
            if not (isinstance(value, JSXExpressionContainer) and is_inline_closure(value.expression)):
                return transform_children(node, hoist)

            closure = value.expression
            name = names.generate(node.name)
            captures = self._analyzer.analyze(closure, scope)
            self._check_computed(captures, closure, name)
            declarations.append(const_declaration(name, memoized_callback(closure, captures, self._config)))  # type: ignore[arg-type]
            logger.debug(
                f"Memoized inline '{node.name}' closure as {name} "
                f"at {closure.lineno}:{closure.col_offset} (deps: {list(captures.dependencies)})"
            )
            reference = Identifier(closure.lineno, closure.col_offset, name)
            return replace(node, value=replace(value, expression=reference))

        return transform_children(stmt, hoist)

    # -- Pass B --------------------------------------------------------------

    def _memoize_bindings(
        self,
        scope: Scope,
        order: dict[int, int],
        replacements: dict[int, VariableDeclarator],
    ) -> None:
        """Classify every binding the function owns, in declaration order."""
        for binding in scope.own_bindings().values():
            declarator = binding.node
            classification = classify(binding, scope, self._config)
            if classification.reason is not None:
                self._skip(classification.reason, binding.identifier, f"'{binding.name}' left as declared")
                continue

            assert isinstance(declarator, VariableDeclarator) and declarator.init is not None
            init = declarator.init
            captures = self._analyzer.analyze(init, scope, excluded=frozenset({binding.name}))
            late = _declared_later(captures, scope, order, order[id(declarator)])
            if late:
                self._skip(
                    SkipReason.TEMPORAL_DEAD_ZONE,
                    binding.identifier,
                    f"'{binding.name}' depends on '{late}', which is declared after it",
                )
                continue
            self._check_computed(captures, init, binding.name)

            if classification.eligibility is Eligibility.MEMOIZE_CALLBACK:
                primitive = self._config.callback_primitive
                new_init = memoized_callback(init, captures, self._config)
            else:
                primitive = self._config.value_primitive
                new_init = memoized_value(init, captures, self._config, block_body=is_ui_tree(init))
            replacements[id(declarator)] = replace(declarator, init=new_init)
            logger.debug(
                f"Memoized '{binding.name}' with {self._config.callee(primitive)} "
                f"at {init.lineno}:{init.col_offset} (deps: {list(captures.dependencies)})"
            )

    # -- diagnostics ----------------------------------------------------------

    def _check_computed(self, captures: CaptureSet, at: Node, name: str) -> None:
        for root in captures.computed_roots:
            self._skip(
                SkipReason.UNSAFE_CAPTURE,
                at,
                f"'{name}' reads '{root}' through a computed access; depending on '{root}' as a whole",
            )

    def _skip(self, reason: SkipReason, at: Node, message: str) -> None:
        diagnostic = Diagnostic(reason, message, at.lineno, at.col_offset)
        self._diagnostics.append(diagnostic)
        logger.debug(f"Skipped: {diagnostic.format()}")


def _declaration_order(body: BlockStatement) -> dict[int, int]:
    """Position of every declarator directly in ``body``, keyed by node id."""
    order: dict[int, int] = {}
    for stmt in body.body:
        if isinstance(stmt, VariableDeclaration):
            for declarator in stmt.declarations:
                order[id(declarator)] = len(order)
    return order


def _declared_later(captures: CaptureSet, scope: Scope, order: dict[int, int], position: int) -> str | None:
    """First captured own let/const declared after ``position``, if any."""
    for name in captures.roots:
        binding = scope.get_binding(name)
        if binding is None or binding.scope is not scope or binding.kind not in ("let", "const"):
            continue
        if order.get(id(binding.node), -1) > position:
            return name
    return None


def _replace_declarators(stmt: VariableDeclaration, replacements: dict[int, VariableDeclarator]) -> VariableDeclaration:
    declarations = tuple(replacements.get(id(d), d) for d in stmt.declarations)
    if all(new is old for new, old in zip(declarations, stmt.declarations, strict=True)):
        return stmt
    return replace(stmt, declarations=declarations)


def _returns_ui_tree(body: BlockStatement) -> bool:
    """True when a return anywhere in ``body`` (nested functions aside) produces a UI tree."""
    pending: list[Node] = list(body.body)
    while pending:
        node = pending.pop()
        if is_function(node):
            continue
        if isinstance(node, ReturnStatement) and is_ui_tree(node.argument):
            return True
        pending.extend(iter_child_nodes(node))
    return False
