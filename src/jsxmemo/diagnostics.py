"""Rewrite diagnostics.

Every rewrite site the transform declines to touch is recorded as a
Diagnostic instead of raising. The output program is always valid; the
diagnostics explain which closures and values were left as they were.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SkipReason(Enum):
    """Why a closure or binding was left unmemoized."""

    AMBIGUOUS_SHAPE = "ambiguous-shape"
    UNSAFE_CAPTURE = "unsafe-capture"
    ALREADY_MEMOIZED = "already-memoized"
    REASSIGNABLE = "reassignable"
    EXTERNAL_REFERENCE = "external-reference"
    NOT_A_DECLARATOR = "not-a-declarator"
    TEMPORAL_DEAD_ZONE = "temporal-dead-zone"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A skipped rewrite site.

    Attributes:
        reason: Skip category
        message: Human-readable explanation naming the site
        lineno: 1-based line of the site
        col_offset: 0-based column of the site
    """

    reason: SkipReason
    message: str
    lineno: int
    col_offset: int

    def format(self) -> str:
        return f"{self.lineno}:{self.col_offset}: {self.reason}: {self.message}"
