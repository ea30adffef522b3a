"""jsxmemo AST nodes.

The node set is closed: the parser only produces these classes, the
generator prints all of them, and the transforms dispatch on them by
class name. Every node is a frozen, slotted dataclass.

Node-kind predicates used throughout the analysis and rewrite passes live
here too, so callers never chain ``isinstance`` checks by hand.
"""

from __future__ import annotations

from jsxmemo.nodes.base import Node
from jsxmemo.nodes.expressions import (
    ArrayExpression,
    AssignmentExpression,
    AwaitExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ConditionalExpression,
    Expr,
    Identifier,
    LogicalExpression,
    MemberExpression,
    NewExpression,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectProperty,
    RegExpLiteral,
    SequenceExpression,
    SpreadElement,
    StringLiteral,
    TaggedTemplateExpression,
    TemplateElement,
    TemplateLiteral,
    ThisExpression,
    UnaryExpression,
    UpdateExpression,
    YieldExpression,
)
from jsxmemo.nodes.functions import (
    AnyFunction,
    ArrowFunctionExpression,
    FunctionDeclaration,
    FunctionExpression,
    ObjectMethod,
)
from jsxmemo.nodes.jsx import (
    JSXAttribute,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXSpreadAttribute,
    JSXText,
)
from jsxmemo.nodes.modules import (
    ExportAllDeclaration,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExportSpecifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
)
from jsxmemo.nodes.patterns import (
    ArrayPattern,
    AssignmentPattern,
    ObjectPattern,
    RestElement,
)
from jsxmemo.nodes.statements import (
    BlockStatement,
    BreakStatement,
    CatchClause,
    ContinueStatement,
    DoWhileStatement,
    EmptyStatement,
    ExpressionStatement,
    ForInStatement,
    ForOfStatement,
    ForStatement,
    IfStatement,
    Program,
    ReturnStatement,
    Stmt,
    SwitchCase,
    SwitchStatement,
    ThrowStatement,
    TryStatement,
    VariableDeclaration,
    VariableDeclarator,
    WhileStatement,
)

_FUNCTION_TYPES = (ArrowFunctionExpression, FunctionExpression, FunctionDeclaration, ObjectMethod)


def is_function(node: Node | None) -> bool:
    """True for any node that opens a function scope."""
    return isinstance(node, _FUNCTION_TYPES)


def is_function_expression(node: Node | None) -> bool:
    """True for arrow functions and function expressions (inline closures)."""
    return isinstance(node, (ArrowFunctionExpression, FunctionExpression))


def is_ui_element(node: Node | None) -> bool:
    """True for a JSX element or fragment."""
    return isinstance(node, (JSXElement, JSXFragment))


__all__ = [
    "AnyFunction",
    "ArrayExpression",
    "ArrayPattern",
    "ArrowFunctionExpression",
    "AssignmentExpression",
    "AssignmentPattern",
    "AwaitExpression",
    "BinaryExpression",
    "BlockStatement",
    "BooleanLiteral",
    "BreakStatement",
    "CallExpression",
    "CatchClause",
    "ConditionalExpression",
    "ContinueStatement",
    "DoWhileStatement",
    "EmptyStatement",
    "ExportAllDeclaration",
    "ExportDefaultDeclaration",
    "ExportNamedDeclaration",
    "ExportSpecifier",
    "Expr",
    "ExpressionStatement",
    "ForInStatement",
    "ForOfStatement",
    "ForStatement",
    "FunctionDeclaration",
    "FunctionExpression",
    "Identifier",
    "IfStatement",
    "ImportDeclaration",
    "ImportDefaultSpecifier",
    "ImportNamespaceSpecifier",
    "ImportSpecifier",
    "JSXAttribute",
    "JSXElement",
    "JSXEmptyExpression",
    "JSXExpressionContainer",
    "JSXFragment",
    "JSXSpreadAttribute",
    "JSXText",
    "LogicalExpression",
    "MemberExpression",
    "NewExpression",
    "Node",
    "NullLiteral",
    "NumericLiteral",
    "ObjectExpression",
    "ObjectMethod",
    "ObjectPattern",
    "ObjectProperty",
    "Program",
    "RegExpLiteral",
    "RestElement",
    "ReturnStatement",
    "SequenceExpression",
    "SpreadElement",
    "Stmt",
    "StringLiteral",
    "SwitchCase",
    "SwitchStatement",
    "TaggedTemplateExpression",
    "TemplateElement",
    "TemplateLiteral",
    "ThisExpression",
    "ThrowStatement",
    "TryStatement",
    "UnaryExpression",
    "UpdateExpression",
    "VariableDeclaration",
    "VariableDeclarator",
    "WhileStatement",
    "YieldExpression",
    "is_function",
    "is_function_expression",
    "is_ui_element",
]
