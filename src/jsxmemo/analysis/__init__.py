"""Static analysis for jsxmemo.

Provides the scope service, capture analysis and the eligibility rules the
rewriter builds on.

Example:
    >>> from jsxmemo.analysis import CaptureAnalyzer, program_scope
    >>> from jsxmemo.parser import parse
    >>> program = parse("const items = []; const f = () => items.length;")
    >>> scope = program_scope(program)
    >>> closure = program.body[1].declarations[0].init
    >>> CaptureAnalyzer().analyze(closure, scope).dependencies
    ('items', 'items.length')

"""

from jsxmemo.analysis.captures import CaptureAnalyzer, CaptureSet
from jsxmemo.analysis.eligibility import (
    Classification,
    Eligibility,
    classify,
    is_hook_call,
    is_inline_closure,
)
from jsxmemo.analysis.scope import (
    Binding,
    NameAllocator,
    Scope,
    binding_identifiers,
    block_scope,
    function_scope,
    program_scope,
)
from jsxmemo.analysis.visitor import iter_child_nodes, transform_children, visit_children, walk

__all__ = [
    "Binding",
    "CaptureAnalyzer",
    "CaptureSet",
    "Classification",
    "Eligibility",
    "NameAllocator",
    "Scope",
    "binding_identifiers",
    "block_scope",
    "classify",
    "function_scope",
    "is_hook_call",
    "is_inline_closure",
    "iter_child_nodes",
    "program_scope",
    "transform_children",
    "visit_children",
    "walk",
]
