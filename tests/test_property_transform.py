"""Property-based tests for parsing, printing and the memoization rewrite.

Generated view functions mix constants, handlers, primitive calls and
nested JSX. For every one of them:

- Printing is a fixed point of parse + print
- The transform output parses again
- Transforming twice changes nothing
- Every diagnostic points into the source
"""

from __future__ import annotations

from hypothesis import given, settings

from jsxmemo import generate, parse, transform

from .strategies import expression, view_function


class TestPrintingProperties:
    """Parse/print invariants."""

    @given(source=expression)
    @settings(max_examples=200)
    def test_expression_fixed_point(self, source: str) -> None:
        printed = generate(parse(f"x = {source};"))
        assert generate(parse(printed)) == printed

    @given(source=view_function())
    @settings(max_examples=150)
    def test_view_fixed_point(self, source: str) -> None:
        printed = generate(parse(source))
        assert generate(parse(printed)) == printed


class TestTransformProperties:
    """Rewrite invariants."""

    @given(source=view_function())
    @settings(max_examples=150)
    def test_output_parses(self, source: str) -> None:
        result = transform(source)
        assert generate(parse(result.code)) == result.code

    @given(source=view_function())
    @settings(max_examples=150)
    def test_idempotent(self, source: str) -> None:
        once = transform(source).code
        assert transform(once).code == once

    @given(source=view_function())
    @settings(max_examples=100)
    def test_diagnostics_point_into_source(self, source: str) -> None:
        line_count = len(source.splitlines())
        for diagnostic in transform(source).diagnostics:
            assert 1 <= diagnostic.lineno <= line_count
            assert diagnostic.col_offset >= 0
