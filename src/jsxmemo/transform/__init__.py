"""AST transforms for jsxmemo.

ScopeLifter gives UI trees a function body to host memoization calls;
Rewriter inserts the calls. Run them in that order:

    >>> program = ScopeLifter().lift(parse(source))
    >>> program = Rewriter().rewrite(program)

"""

from jsxmemo.transform.lifter import ScopeLifter, is_ui_tree
from jsxmemo.transform.rewriter import Rewriter

__all__ = [
    "Rewriter",
    "ScopeLifter",
    "is_ui_tree",
]
