"""jsxmemo: automatic memoization for JSX view functions.

Rewrites JavaScript modules so that closures and derived values inside
view functions (functions returning a JSX tree) are wrapped in
``React.useCallback`` / ``React.useMemo`` with dependency lists computed
from what they capture.

Quickstart:
    >>> from jsxmemo import transform
    >>> result = transform(source)
    >>> print(result.code)
    >>> for diagnostic in result.diagnostics:
    ...     print(diagnostic.format())

Architecture:
Source → Lexer → Parser → AST → ScopeLifter → Rewriter → CodeGenerator → Source

Pipeline stages:
1. **Lexer**: Context-sensitive tokenizer (regex, template and JSX modes)
2. **Parser**: Builds an immutable AST of frozen dataclasses
3. **ScopeLifter**: Gives UI trees in expression positions a function body
4. **Rewriter**: Hoists attribute closures and memoizes own bindings
5. **CodeGenerator**: Prints the AST back to source

Thread-Safety:
AST nodes are immutable and every analyzer creates fresh state per call,
so parsed programs can be shared and transforms run concurrently.

"""

from jsxmemo.analysis import CaptureAnalyzer, CaptureSet, Classification, Eligibility, classify
from jsxmemo.config import DEFAULT_CONFIG, TransformConfig
from jsxmemo.diagnostics import Diagnostic, SkipReason
from jsxmemo.exceptions import (
    ErrorCode,
    JsxMemoError,
    LexerError,
    ParseError,
    SourceSyntaxError,
)
from jsxmemo.generator import CodeGenerator, generate
from jsxmemo.parser import ParserOptions, parse
from jsxmemo.plugin import MemoizePlugin, TransformResult, transform
from jsxmemo.transform import Rewriter, ScopeLifter

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "CaptureAnalyzer",
    "CaptureSet",
    "Classification",
    "CodeGenerator",
    "Diagnostic",
    "Eligibility",
    "ErrorCode",
    "JsxMemoError",
    "LexerError",
    "MemoizePlugin",
    "ParseError",
    "ParserOptions",
    "Rewriter",
    "ScopeLifter",
    "SkipReason",
    "SourceSyntaxError",
    "TransformConfig",
    "TransformResult",
    "__version__",
    "classify",
    "generate",
    "parse",
    "transform",
]
