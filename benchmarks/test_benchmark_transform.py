"""Transform pipeline throughput.

Run with:
    uv run pytest benchmarks/test_benchmark_transform.py -v --benchmark-only

Measures each stage (tokenize, parse, lift, rewrite, generate) and the
whole pipeline on modules of increasing size.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from jsxmemo import Rewriter, ScopeLifter, generate, parse, transform
from jsxmemo.lexer import tokenize

if TYPE_CHECKING:
    from pytest_benchmark.fixture import BenchmarkFixture


# =============================================================================
# Test Modules
# =============================================================================

# Minimal: one inline handler
MINIMAL = "const App = ({ text }) => <button onClick={() => alert(text)} />;\n"

# Medium: derived values, a list and conditionals
MEDIUM = """\
export function Dashboard({ user, items, filter, onSelect, history }) {
  const visible = items.filter((item) => item.tags.includes(filter));
  const total = visible.reduce((sum, item) => sum + item.price, 0);
  const header = <h1 className="title">{user.name}</h1>;
  const select = (item) => onSelect(item.id);
  return <section>{header}<p>{total}</p><ul>{visible.map((item) => <li key={item.id} onClick={() => select(item)}>{item.label}</li>)}</ul>{user.admin ? <button onClick={() => history.push('/admin')}>Admin</button> : null}</section>;
}
"""


def _module(count: int) -> str:
    """``count`` copies of MEDIUM with distinct component names."""
    return "\n".join(MEDIUM.replace("Dashboard", f"Dashboard{i}") for i in range(count))


# Large: many view functions in one module
LARGE = _module(25)

# Plain script without JSX, for the flat tokenizer
SCRIPT = """\
const visible = items.filter((item) => item.tags.includes(filter) && /^[a-z]+$/i.test(item.label));
const total = visible.reduce((sum, item) => sum + item.price * 1.2e1, 0) / count;
const label = `${total} items for ${user?.name ?? "guest"}`;
"""

MODULES = [
    (MINIMAL, "minimal"),
    (MEDIUM, "medium"),
    (LARGE, "large"),
]


# =============================================================================
# Stage Benchmarks
# =============================================================================


@pytest.mark.benchmark(group="transform:tokenize")
@pytest.mark.parametrize(("source", "name"), [(SCRIPT, "script"), (SCRIPT * 25, "large-script")])
def test_tokenize(benchmark: BenchmarkFixture, source: str, name: str) -> None:
    """Flat tokenization. JSX text is only scanned under parser control."""
    result = benchmark(tokenize, source)
    assert len(result) > 1


@pytest.mark.benchmark(group="transform:parse")
@pytest.mark.parametrize(("source", "name"), MODULES)
def test_parse(benchmark: BenchmarkFixture, source: str, name: str) -> None:
    result = benchmark(parse, source)
    assert result.body


@pytest.mark.benchmark(group="transform:lift")
@pytest.mark.parametrize(("source", "name"), MODULES)
def test_lift(benchmark: BenchmarkFixture, source: str, name: str) -> None:
    program = parse(source)
    lifter = ScopeLifter()
    benchmark(lifter.lift, program)


@pytest.mark.benchmark(group="transform:rewrite")
@pytest.mark.parametrize(("source", "name"), MODULES)
def test_rewrite(benchmark: BenchmarkFixture, source: str, name: str) -> None:
    program = ScopeLifter().lift(parse(source))

    def run():
        return Rewriter().rewrite(program)

    result = benchmark(run)
    assert result is not program


@pytest.mark.benchmark(group="transform:generate")
@pytest.mark.parametrize(("source", "name"), MODULES)
def test_generate(benchmark: BenchmarkFixture, source: str, name: str) -> None:
    program = parse(source)
    result = benchmark(generate, program)
    assert result


# =============================================================================
# Full Pipeline
# =============================================================================


@pytest.mark.benchmark(group="transform:pipeline")
@pytest.mark.parametrize(("source", "name"), MODULES)
def test_transform(benchmark: BenchmarkFixture, source: str, name: str) -> None:
    """Source in, memoized source out."""
    result = benchmark(transform, source)
    assert "React.useCallback" in result.code
    if hasattr(benchmark, "stats") and benchmark.stats:
        mean_time = benchmark.stats.stats.mean
        if mean_time > 0:
            print(f"\n  {name}: {len(source):,} chars, {len(source) / mean_time:,.0f} chars/s")
