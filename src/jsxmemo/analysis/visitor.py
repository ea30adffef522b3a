"""Shared visitor patterns for jsxmemo AST analysis.

Provides iter_child_nodes, visit_children and transform_children for
generic AST traversal. Used by the scope builder, CaptureAnalyzer, the
scope lifter and the rewriter.

Child fields are discovered from the node dataclasses themselves, so
every node kind is covered without a per-kind attribute list. Children
are yielded in field order, which is source order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import fields, replace
from functools import cache
from typing import TypeVar

from jsxmemo.nodes import Node

_N = TypeVar("_N", bound=Node)

# Location fields carried by every node
_LOCATION_FIELDS = frozenset({"lineno", "col_offset"})


@cache
def _field_names(node_type: type[Node]) -> tuple[str, ...]:
    return tuple(f.name for f in fields(node_type) if f.name not in _LOCATION_FIELDS)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of a node in source order."""
    for name in _field_names(type(node)):
        value = getattr(node, name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, tuple):
            for item in value:
                if isinstance(item, Node):
                    yield item


def visit_children(node: Node, visit: Callable[[Node], None]) -> None:
    """Visit all child nodes of a jsxmemo AST node (generic handler)."""
    for child in iter_child_nodes(node):
        visit(child)


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))


def transform_children(node: _N, transform: Callable[[Node], Node]) -> _N:
    """Rebuild ``node`` with every child passed through ``transform``.

    Returns ``node`` itself when no child changed, so untouched subtrees
    keep their identity.
    """
    changes: dict[str, object] = {}
    for name in _field_names(type(node)):
        value = getattr(node, name)
        if isinstance(value, Node):
            new_value = transform(value)
            if new_value is not value:
                changes[name] = new_value
        elif isinstance(value, tuple) and value:
            new_items = tuple(transform(item) if isinstance(item, Node) else item for item in value)
            if any(new is not old for new, old in zip(new_items, value, strict=True)):
                changes[name] = new_items
    if not changes:
        return node
    return replace(node, **changes)
