"""Base node class for the jsxmemo AST."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error reporting.
    Nodes are immutable: transforms build new trees and share every
    subtree they do not change.

    Field order matters. Subclasses declare their child fields in source
    order so that generic traversal visits children in document order.

    """

    lineno: int
    col_offset: int
