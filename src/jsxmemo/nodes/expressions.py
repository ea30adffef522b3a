"""Expression nodes for the jsxmemo AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from jsxmemo.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base class for expressions."""


@dataclass(frozen=True, slots=True)
class Identifier(Expr):
    """Name reference or declaration: foo"""

    name: str


@dataclass(frozen=True, slots=True)
class StringLiteral(Expr):
    """String literal. ``raw`` keeps the original quoting for printing."""

    value: str
    raw: str


@dataclass(frozen=True, slots=True)
class NumericLiteral(Expr):
    """Number or BigInt literal, kept in its source spelling: 0x1F, 1_000n"""

    raw: str


@dataclass(frozen=True, slots=True)
class BooleanLiteral(Expr):
    """true / false"""

    value: bool


@dataclass(frozen=True, slots=True)
class NullLiteral(Expr):
    """null"""


@dataclass(frozen=True, slots=True)
class RegExpLiteral(Expr):
    """Regular expression literal: /ab+c/gi"""

    pattern: str
    flags: str = ""


@dataclass(frozen=True, slots=True)
class ThisExpression(Expr):
    """this"""


@dataclass(frozen=True, slots=True)
class TemplateElement(Node):
    """Literal chunk of a template literal (raw text between substitutions)."""

    raw: str
    tail: bool = False


@dataclass(frozen=True, slots=True)
class TemplateLiteral(Expr):
    """Template literal: `a${b}c`

    ``quasis`` always has exactly one more element than ``expressions``.
    """

    quasis: Sequence[TemplateElement]
    expressions: Sequence[Expr] = ()


@dataclass(frozen=True, slots=True)
class TaggedTemplateExpression(Expr):
    """Tagged template: css`...`"""

    tag: Expr
    quasi: TemplateLiteral


@dataclass(frozen=True, slots=True)
class SpreadElement(Node):
    """Spread in arrays, calls and object literals: ...items"""

    argument: Expr


@dataclass(frozen=True, slots=True)
class ArrayExpression(Expr):
    """Array literal: [a, , ...b]  (holes are None)"""

    elements: Sequence[Expr | SpreadElement | None] = ()


@dataclass(frozen=True, slots=True)
class ObjectProperty(Node):
    """Object literal or object pattern property: key: value / shorthand"""

    key: Expr
    value: Node
    computed: bool = False
    shorthand: bool = False


@dataclass(frozen=True, slots=True)
class ObjectExpression(Expr):
    """Object literal: {a, b: c, [d]: e, ...f, g() {}}"""

    properties: Sequence[Node] = ()


@dataclass(frozen=True, slots=True)
class MemberExpression(Expr):
    """Property access: obj.prop, obj[prop], obj?.prop"""

    object: Expr
    property: Expr
    computed: bool = False
    optional: bool = False


@dataclass(frozen=True, slots=True)
class CallExpression(Expr):
    """Call: callee(args), callee?.(args)"""

    callee: Expr
    arguments: Sequence[Expr | SpreadElement] = ()
    optional: bool = False


@dataclass(frozen=True, slots=True)
class NewExpression(Expr):
    """Constructor call: new Callee(args)"""

    callee: Expr
    arguments: Sequence[Expr | SpreadElement] = ()


@dataclass(frozen=True, slots=True)
class UnaryExpression(Expr):
    """Unary operation: !a, -a, typeof a, void 0, delete a.b"""

    operator: str
    argument: Expr


@dataclass(frozen=True, slots=True)
class UpdateExpression(Expr):
    """Increment/decrement: ++a, a--"""

    operator: Literal["++", "--"]
    argument: Expr
    prefix: bool = False


@dataclass(frozen=True, slots=True)
class BinaryExpression(Expr):
    """Binary operation: left op right"""

    operator: str
    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class LogicalExpression(Expr):
    """Short-circuit operation: a && b, a || b, a ?? b"""

    operator: Literal["&&", "||", "??"]
    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class ConditionalExpression(Expr):
    """Ternary: test ? consequent : alternate"""

    test: Expr
    consequent: Expr
    alternate: Expr


@dataclass(frozen=True, slots=True)
class AssignmentExpression(Expr):
    """Assignment: target op= value"""

    operator: str
    left: Node
    right: Expr


@dataclass(frozen=True, slots=True)
class SequenceExpression(Expr):
    """Comma operator: a, b, c"""

    expressions: Sequence[Expr]


@dataclass(frozen=True, slots=True)
class AwaitExpression(Expr):
    """await expr"""

    argument: Expr


@dataclass(frozen=True, slots=True)
class YieldExpression(Expr):
    """yield expr / yield* expr"""

    argument: Expr | None = None
    delegate: bool = False
