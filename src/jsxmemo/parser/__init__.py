"""Parser for JavaScript modules with JSX.

Produces an immutable jsxmemo AST (``jsxmemo.nodes``) from source text.
Comments are dropped; unsupported constructs (classes, labels, ``with``)
raise ParseError with code J-PAR-002.

Example:
    >>> from jsxmemo.parser import parse
    >>> program = parse("const el = <div />;")
    >>> program.body[0].declarations[0].init.name
    'div'

"""

from __future__ import annotations

from jsxmemo.parser.core import DEFAULT_PARSER_OPTIONS, Parser, ParserOptions, parse

__all__ = ["DEFAULT_PARSER_OPTIONS", "Parser", "ParserOptions", "parse"]
