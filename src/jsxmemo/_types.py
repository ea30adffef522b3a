"""Token types shared by the lexer and parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of token produced by the Lexer."""

    NAME = "name"  # identifiers and keywords
    NUMBER = "number"
    STRING = "string"  # raw text, quotes included
    PUNCT = "punct"  # operators and delimiters
    REGEX = "regex"  # raw /body/flags
    TEMPLATE_CHUNK = "template_chunk"  # template text ending in ${
    TEMPLATE_END = "template_end"  # template text ending in a backtick
    JSX_TEXT = "jsx_text"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed token.

    ``start``/``end`` are character offsets into the source, so the parser
    can re-scan from any token boundary in a different lexical mode
    (regex, template, JSX).

    """

    type: TokenType
    value: str
    lineno: int
    col_offset: int
    start: int
    end: int
    newline_before: bool = False

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.lineno}:{self.col_offset})"


# Binary operator precedence, shared by the parser and the code generator.
# Higher binds tighter; `**` is the only right-associative entry.
BINARY_PRECEDENCE: dict[str, int] = {
    "??": 1,
    "||": 2,
    "&&": 3,
    "|": 4,
    "^": 5,
    "&": 6,
    "==": 7,
    "!=": 7,
    "===": 7,
    "!==": 7,
    "<": 8,
    ">": 8,
    "<=": 8,
    ">=": 8,
    "instanceof": 8,
    "in": 8,
    "<<": 9,
    ">>": 9,
    ">>>": 9,
    "+": 10,
    "-": 10,
    "*": 11,
    "/": 11,
    "%": 11,
    "**": 12,
}

LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})

ASSIGNMENT_OPERATORS = frozenset(
    {"=", "+=", "-=", "*=", "/=", "%=", "**=", "<<=", ">>=", ">>>=", "&=", "|=", "^=", "&&=", "||=", "??="}
)

# Words that can never be an identifier reference or binding name
RESERVED_WORDS = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "null",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
    }
)
