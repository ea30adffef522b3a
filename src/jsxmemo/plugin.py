"""Host-facing entry points.

``transform`` is the one-call API: source text in, rewritten source text
and diagnostics out. ``MemoizePlugin`` packages the same pipeline for a
host that owns parsing and printing: it receives the host's parser
options in ``pre`` and exposes its work through ``visitor``, keyed by the
node kind it runs on.

Example:
    >>> from jsxmemo import transform
    >>> result = transform("const App = ({text}) => <p onClick={() => alert(text)} />;")
    >>> print(result.code)
    const App = ({ text }) => {
      const _onClick = React.useCallback(() => alert(text), [text]);
      return <p onClick={_onClick} />;
    };

"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jsxmemo.analysis.scope import NameAllocator
from jsxmemo.config import DEFAULT_CONFIG, TransformConfig
from jsxmemo.generator import generate
from jsxmemo.parser import DEFAULT_PARSER_OPTIONS, ParserOptions, parse
from jsxmemo.transform import Rewriter, ScopeLifter

if TYPE_CHECKING:
    from jsxmemo.diagnostics import Diagnostic
    from jsxmemo.nodes import Node, Program

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransformResult:
    """Output of a transform.

    Attributes:
        code: Generated source text
        program: Rewritten AST
        diagnostics: Rewrite sites that were left unchanged, in visit order
    """

    code: str
    program: Program
    diagnostics: tuple[Diagnostic, ...] = ()


class MemoizePlugin:
    """Lift and rewrite one compilation unit at a time.

    Each ``run`` seeds its own NameAllocator from the program it is given,
    so generated names are unique within a unit and independent across
    units.

    Example:
            >>> plugin = MemoizePlugin(TransformConfig(namespace=None))
            >>> plugin.pre(ParserOptions(filename="App.jsx"))
            >>> result = plugin.transform_source(source)
            >>> result.diagnostics
            ()

    """

    def __init__(self, config: TransformConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._options = DEFAULT_PARSER_OPTIONS
        self._lifter = ScopeLifter(self._config)
        self._diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def config(self) -> TransformConfig:
        return self._config

    @property
    def options(self) -> ParserOptions:
        """Parser options received in ``pre``."""
        return self._options

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Diagnostics from the most recent ``run``."""
        return self._diagnostics

    def pre(self, options: ParserOptions | None = None) -> None:
        """Receive the parser options the host pipeline was configured with."""
        self._options = options or DEFAULT_PARSER_OPTIONS

    @property
    def visitor(self) -> dict[str, Callable[[Node], Node]]:
        """Hooks keyed by node kind.

        The rewrite needs whole-program scope information, so its single hook
        runs on ``Program``; element, attribute and return handling happen
        inside it.
        """
        return {"Program": self.run}  # type: ignore[dict-item]

    def run(self, program: Program) -> Program:
        """Lift UI trees, then memoize view functions."""
        lifted = self._lifter.lift(program)
        rewriter = Rewriter(self._config, NameAllocator.for_program(program))
        result = rewriter.rewrite(lifted)  # type: ignore[arg-type]
        self._diagnostics = rewriter.diagnostics
        name = self._options.filename or "<source>"
        if self._diagnostics:
            logger.debug(f"{name}: {len(self._diagnostics)} rewrite site(s) skipped")
        return result

    def transform_source(self, source: str) -> TransformResult:
        """Parse with the stored options, run, and generate code."""
        program = self.run(parse(source, self._options))
        return TransformResult(generate(program), program, self._diagnostics)


def transform(
    source: str,
    *,
    config: TransformConfig | None = None,
    options: ParserOptions | None = None,
) -> TransformResult:
    """Memoize the view functions in ``source``.

    Args:
        source: Module source text (JavaScript with JSX)
        config: Transform configuration. Uses DEFAULT_CONFIG if not provided.
        options: Parser options. Uses DEFAULT_PARSER_OPTIONS if not provided.

    Returns:
        TransformResult with generated code, AST and diagnostics

    Raises:
        LexerError: Source text could not be tokenized
        ParseError: Source text is not a supported program
    """
    plugin = MemoizePlugin(config)
    plugin.pre(options)
    return plugin.transform_source(source)
