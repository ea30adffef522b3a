"""Exceptions for jsxmemo.

Exception Hierarchy:
JsxMemoError (base)
└── SourceSyntaxError        # Source text could not be read
    ├── LexerError           # Unterminated literal, stray character
    └── ParseError           # Unexpected token, unsupported syntax

The rewrite passes themselves never raise: a rewrite site that cannot be
handled safely is skipped and reported as a Diagnostic (see
``jsxmemo.diagnostics``). Only unreadable input aborts a
transform, and it does so with one of the exceptions above.

Error Messages:
Syntax errors carry the source location and, when the source text is
available, a snippet with a caret under the offending column:

    ```
    J-PAR-001: Expected ')' but found '}'
      --> Button.jsx:3:14
       |
     3 |   return foo(}
       |              ^
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes for jsxmemo errors.

    Format: J-{CATEGORY}-{NUMBER}
    Categories: LEX (lexer), PAR (parser)
    """

    # Lexer errors (J-LEX-xxx)
    UNTERMINATED_STRING = "J-LEX-001"
    UNTERMINATED_COMMENT = "J-LEX-002"
    UNTERMINATED_TEMPLATE = "J-LEX-003"
    UNTERMINATED_REGEX = "J-LEX-004"
    UNEXPECTED_CHARACTER = "J-LEX-005"

    # Parser errors (J-PAR-xxx)
    UNEXPECTED_TOKEN = "J-PAR-001"
    UNSUPPORTED_SYNTAX = "J-PAR-002"
    INVALID_ASSIGNMENT_TARGET = "J-PAR-003"
    MISMATCHED_JSX_TAG = "J-PAR-004"

    @property
    def category(self) -> str:
        """Error category ('lexer' or 'parser')."""
        prefix = self.value.split("-")[1]
        return {
            "LEX": "lexer",
            "PAR": "parser",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        """Format snippet in a compiler-diagnostic style."""
        parts: list[str] = ["   |"]
        for lineno, content in self.lines:
            marker = ">" if lineno == self.error_line else " "
            parts.append(f"{marker}{lineno:>2} | {content}")
            if lineno == self.error_line and self.column is not None:
                parts.append(f"   | {' ' * self.column}^")
        parts.append("   |")
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from source text.

    Args:
        source: Full source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional column offset for caret pointer.

    Returns:
        SourceSnippet with surrounding context lines.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class JsxMemoError(Exception):
    """Base exception for all jsxmemo errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a short, human-readable summary without traceback noise."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class SourceSyntaxError(JsxMemoError):
    """Source text is not valid input for the parser.

    When ``source`` and ``lineno`` are provided, the error message includes
    a source snippet with the offending line.  If ``col_offset`` is also
    given, a caret (``^``) points at the exact column.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        *,
        filename: str | None = None,
        source: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.filename = filename
        self.source = source
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    @property
    def location(self) -> str:
        """``file:line:col`` string for the error position."""
        location = self.filename or "<source>"
        if self.lineno:
            location += f":{self.lineno}"
            if self.col_offset is not None:
                location += f":{self.col_offset}"
        return location

    def _format_message(self) -> str:
        return f"{self.message}\n  --> {self.location}"

    def format_compact(self) -> str:
        """Format syntax error as structured terminal diagnostic."""
        code_prefix = f"{self.code.value}: " if self.code else ""
        parts = [f"{code_prefix}{self.message}", f"  --> {self.location}"]
        if self.source and self.lineno:
            snippet = build_source_snippet(
                self.source, self.lineno, context_lines=0, column=self.col_offset
            )
            parts.append(snippet.format())
        return "\n".join(parts)


class LexerError(SourceSyntaxError):
    """Source text could not be split into tokens."""

    code: ErrorCode | None = ErrorCode.UNEXPECTED_CHARACTER


class ParseError(SourceSyntaxError):
    """Token stream does not form a supported program.

    Carries an optional ``suggestion`` that is appended to the message.
    """

    code: ErrorCode | None = ErrorCode.UNEXPECTED_TOKEN

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        *,
        filename: str | None = None,
        source: str | None = None,
        code: ErrorCode | None = None,
        suggestion: str | None = None,
    ):
        self.suggestion = suggestion
        super().__init__(
            message,
            lineno,
            col_offset,
            filename=filename,
            source=source,
            code=code,
        )

    def _format_message(self) -> str:
        msg = super()._format_message()
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg
