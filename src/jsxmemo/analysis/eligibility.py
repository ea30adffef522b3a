"""Eligibility of bindings and attribute values for memoization.

``classify`` applies the rules in a fixed order; the first rule that
rejects a binding determines the skip reason:

0. Only ``name = init`` variable declarators are candidates
1. Initializers that already call a framework primitive are left alone
2. ``let``/``var`` bindings may be reassigned, so they are skipped
3. Bindings owned by an enclosing scope belong to another render cycle
4. Closures get the callback primitive, anything else the value primitive
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from jsxmemo.config import DEFAULT_CONFIG, TransformConfig
from jsxmemo.diagnostics import SkipReason
from jsxmemo.nodes import (
    CallExpression,
    Identifier,
    MemberExpression,
    VariableDeclarator,
    is_function_expression,
)

if TYPE_CHECKING:
    from jsxmemo.analysis.scope import Binding, Scope
    from jsxmemo.nodes import Node


class Eligibility(Enum):
    SKIP = "skip"
    MEMOIZE_CALLBACK = "memoize-callback"
    MEMOIZE_VALUE = "memoize-value"


@dataclass(frozen=True, slots=True)
class Classification:
    """Outcome of ``classify``: an eligibility and, for skips, the reason."""

    eligibility: Eligibility
    reason: SkipReason | None = None

    @property
    def memoize(self) -> bool:
        return self.eligibility is not Eligibility.SKIP


_CALLBACK = Classification(Eligibility.MEMOIZE_CALLBACK)
_VALUE = Classification(Eligibility.MEMOIZE_VALUE)


def is_hook_call(node: Node | None, prefix: str = DEFAULT_CONFIG.primitive_prefix) -> bool:
    """True for ``useX(...)`` and ``ns.useX(...)`` calls."""
    if not isinstance(node, CallExpression):
        return False
    callee = node.callee
    if isinstance(callee, MemberExpression) and not callee.computed:
        callee = callee.property
    if not isinstance(callee, Identifier):
        return False
    return callee.name.startswith(prefix)


def is_inline_closure(node: Node | None) -> bool:
    """Attribute values that allocate a new function on every render.

    Identifiers and member expressions (``onClick={handler}``,
    ``onClick={props.onClick}``) refer to functions created elsewhere and
    are not inline closures.
    """
    return is_function_expression(node)


def _skip(reason: SkipReason) -> Classification:
    return Classification(Eligibility.SKIP, reason)


def classify(binding: Binding, scope: Scope, config: TransformConfig = DEFAULT_CONFIG) -> Classification:
    """Decide whether a binding read by a view function should be memoized.

    Args:
        binding: Binding referenced by the returned UI tree
        scope: Own scope of the view function
        config: Transform configuration (primitive prefix)

    Returns:
        Classification; skips carry a SkipReason
    """
    declarator = binding.node
    if (
        binding.kind not in ("var", "let", "const")
        or not isinstance(declarator, VariableDeclarator)
        or not isinstance(declarator.id, Identifier)
        or declarator.init is None
    ):
        return _skip(SkipReason.NOT_A_DECLARATOR)

    init = declarator.init
    if is_hook_call(init, config.primitive_prefix):
        return _skip(SkipReason.ALREADY_MEMOIZED)
    if not binding.constant:
        return _skip(SkipReason.REASSIGNABLE)
    if binding.scope is not scope:
        return _skip(SkipReason.EXTERNAL_REFERENCE)
    if is_function_expression(init):
        return _CALLBACK
    return _VALUE
