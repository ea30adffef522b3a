"""Pytest configuration and fixtures for jsxmemo tests."""

from textwrap import dedent

import pytest

from jsxmemo import TransformConfig, generate, parse, transform
from jsxmemo.analysis import program_scope


@pytest.fixture
def config():
    """Default transform configuration."""
    return TransformConfig()


@pytest.fixture
def bare_config():
    """Configuration that calls primitives without a namespace."""
    return TransformConfig(namespace=None)


def normalize(source: str) -> str:
    """Parse and re-print source, so layout differences do not matter.

    JSX text is printed verbatim; keep whitespace out from between tags in
    sources that are compared this way.
    """
    return generate(parse(dedent(source)))


def assert_code_equal(actual: str, expected: str) -> None:
    """Assert two sources print the same after normalization.

    Args:
        actual: Source produced by the code under test.
        expected: The expected source, in any layout.
    """
    actual_normalized = normalize(actual)
    expected_normalized = normalize(expected)
    assert actual_normalized == expected_normalized, (
        f"Code mismatch:\n"
        f"  Actual:\n{actual_normalized}\n"
        f"  Expected:\n{expected_normalized}"
    )


def transform_code(source: str, **kwargs) -> str:
    """Transform dedented source and return the generated code."""
    return transform(dedent(source), **kwargs).code


def scope_of(source: str):
    """Parse source and return (program, module scope)."""
    program = parse(dedent(source))
    return program, program_scope(program)
