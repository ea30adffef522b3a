"""Tests for the JavaScript + JSX parser."""

import pytest

from jsxmemo import ParseError, ParserOptions, parse
from jsxmemo.exceptions import ErrorCode, LexerError, SourceSyntaxError
from jsxmemo.nodes import (
    ArrowFunctionExpression,
    AssignmentPattern,
    BlockStatement,
    CallExpression,
    ConditionalExpression,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExpressionStatement,
    ForOfStatement,
    FunctionDeclaration,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportSpecifier,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXFragment,
    JSXSpreadAttribute,
    JSXText,
    LogicalExpression,
    MemberExpression,
    ObjectPattern,
    ObjectProperty,
    RegExpLiteral,
    RestElement,
    ReturnStatement,
    SequenceExpression,
    TemplateLiteral,
    TryStatement,
    VariableDeclaration,
)


def _expr(source: str):
    """Parse a single expression statement and return its expression."""
    stmt = parse(source).body[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


def _init(source: str):
    """Initializer of the first declarator of a declaration."""
    stmt = parse(source).body[0]
    assert isinstance(stmt, VariableDeclaration)
    return stmt.declarations[0].init


class TestStatements:
    """Statement-level grammar."""

    def test_variable_declarations(self):
        program = parse("const a = 1, b = 2; let c; var d = a;")
        kinds = [stmt.kind for stmt in program.body]
        assert kinds == ["const", "let", "var"]
        assert [d.id.name for d in program.body[0].declarations] == ["a", "b"]
        assert program.body[1].declarations[0].init is None

    def test_automatic_semicolon_insertion(self):
        program = parse("const a = 1\nconst b = 2\nfoo()")
        assert len(program.body) == 3

    def test_return_not_continued_across_newline(self):
        fn = parse("function f() { return\n1 }").body[0]
        assert isinstance(fn, FunctionDeclaration)
        assert fn.body.body[0].argument is None

    def test_for_of_with_destructuring(self):
        stmt = parse("for (const [k, v] of entries) { use(k, v); }").body[0]
        assert isinstance(stmt, ForOfStatement)
        assert stmt.left.kind == "const"

    def test_try_catch_finally(self):
        stmt = parse("try { a(); } catch (err) { b(err); } finally { c(); }").body[0]
        assert isinstance(stmt, TryStatement)
        assert stmt.handler.param.name == "err"
        assert stmt.finalizer is not None

    def test_optional_catch_binding(self):
        stmt = parse("try { a(); } catch { b(); }").body[0]
        assert stmt.handler.param is None

    def test_switch(self):
        stmt = parse("switch (x) { case 1: a(); break; default: b(); }").body[0]
        assert [case.test is None for case in stmt.cases] == [False, True]

    def test_imports(self):
        stmt = parse("import React, { useState as useS, memo } from 'react';").body[0]
        assert isinstance(stmt, ImportDeclaration)
        assert isinstance(stmt.specifiers[0], ImportDefaultSpecifier)
        named = [s for s in stmt.specifiers if isinstance(s, ImportSpecifier)]
        assert [(s.imported.name, s.local.name) for s in named] == [("useState", "useS"), ("memo", "memo")]
        assert stmt.source.value == "react"

    def test_export_default_arrow(self):
        stmt = parse("export default ({ data }) => <ul />;").body[0]
        assert isinstance(stmt, ExportDefaultDeclaration)
        assert isinstance(stmt.declaration, ArrowFunctionExpression)

    def test_export_named_declaration(self):
        stmt = parse("export const View = () => null;").body[0]
        assert isinstance(stmt, ExportNamedDeclaration)
        assert isinstance(stmt.declaration, VariableDeclaration)

    def test_script_source_type(self):
        program = parse("a();", ParserOptions(source_type="script"))
        assert program.source_type == "script"


class TestExpressions:
    """Expression grammar."""

    def test_precedence(self):
        expr = _expr("a || b && c;")
        assert isinstance(expr, LogicalExpression)
        assert expr.operator == "||"
        assert expr.right.operator == "&&"

    def test_exponent_is_right_associative(self):
        expr = _expr("a ** b ** c;")
        assert expr.right.operator == "**"

    def test_conditional(self):
        assert isinstance(_expr("a ? b : c;"), ConditionalExpression)

    def test_sequence(self):
        assert isinstance(_expr("a, b;"), SequenceExpression)

    def test_member_and_call_chain(self):
        expr = _expr("a.b?.c[d](e);")
        assert isinstance(expr, CallExpression)
        assert isinstance(expr.callee, MemberExpression)
        assert expr.callee.computed
        assert expr.callee.object.optional

    def test_optional_call(self):
        expr = _expr("cb?.(x);")
        assert isinstance(expr, CallExpression)
        assert expr.optional

    def test_template_literal(self):
        literal = _init("const s = `a${b}c${d}`;")
        assert isinstance(literal, TemplateLiteral)
        assert [q.raw for q in literal.quasis] == ["a", "c", ""]
        assert [e.name for e in literal.expressions] == ["b", "d"]

    def test_regex_literal(self):
        regex = _init("const r = /a+b/g;")
        assert isinstance(regex, RegExpLiteral)
        assert (regex.pattern, regex.flags) == ("a+b", "g")

    def test_arrow_single_param(self):
        arrow = _init("const f = x => x * 2;")
        assert isinstance(arrow, ArrowFunctionExpression)
        assert [p.name for p in arrow.params] == ["x"]

    def test_arrow_with_patterns(self):
        arrow = _init("const f = ({ a, b: [c] }, d = 1, ...rest) => {};")
        first, second, third = arrow.params
        assert isinstance(first, ObjectPattern)
        assert isinstance(second, AssignmentPattern)
        assert isinstance(third, RestElement)
        assert isinstance(arrow.body, BlockStatement)

    def test_parenthesized_expression_is_not_an_arrow(self):
        expr = _expr("(a, b);")
        assert isinstance(expr, SequenceExpression)

    def test_async_arrow(self):
        arrow = _init("const f = async () => { await go(); };")
        assert arrow.is_async

    def test_object_shorthand_and_methods(self):
        obj = _init("const o = { a, b: 1, [k]: 2, m() { return 1; }, ...rest };")
        props = obj.properties
        assert props[0].shorthand
        assert props[2].computed
        assert type(props[3]).__name__ == "ObjectMethod"
        assert type(props[4]).__name__ == "SpreadElement"

    def test_destructuring_assignment(self):
        expr = _expr("({ a, b } = obj);")
        assert isinstance(expr.left, ObjectPattern)
        assert all(isinstance(p, ObjectProperty) for p in expr.left.properties)


class TestJSX:
    """JSX elements, attributes and children."""

    def test_self_closing_element(self):
        element = _init("const e = <input disabled />;")
        assert isinstance(element, JSXElement)
        assert element.name == "input"
        assert element.self_closing
        assert element.attributes[0].value is None

    def test_attributes(self):
        element = _init('const e = <a href="/x" onClick={go} {...rest} aria-label="l" />;')
        names = [a.name for a in element.attributes if isinstance(a, JSXAttribute)]
        assert names == ["href", "onClick", "aria-label"]
        assert isinstance(element.attributes[1].value, JSXExpressionContainer)
        assert isinstance(element.attributes[2], JSXSpreadAttribute)

    def test_member_and_namespaced_names(self):
        element = _init("const e = <ui.Button xlink:href='#' />;")
        assert element.name == "ui.Button"
        assert element.attributes[0].name == "xlink:href"

    def test_children(self):
        element = _init("const e = <p>Hello, {name}<b>!</b></p>;")
        kinds = [type(child) for child in element.children]
        assert kinds == [JSXText, JSXExpressionContainer, JSXElement]
        assert element.children[0].value == "Hello, "

    def test_fragment(self):
        fragment = _init("const e = <><a /><b /></>;")
        assert isinstance(fragment, JSXFragment)
        assert len(fragment.children) == 2

    def test_element_as_attribute_value(self):
        element = _init("const e = <Layout header=<Title /> />;")
        assert isinstance(element.attributes[0].value, JSXElement)

    def test_parenthesized_return(self):
        fn = parse("function App() {\n  return (\n    <div />\n  );\n}").body[0]
        stmt = fn.body.body[0]
        assert isinstance(stmt, ReturnStatement)
        assert isinstance(stmt.argument, JSXElement)

    def test_less_than_after_name_is_comparison(self):
        expr = _expr("a < b;")
        assert expr.operator == "<"

    def test_jsx_disabled(self):
        with pytest.raises(SourceSyntaxError):
            parse("const e = <div />;", ParserOptions(jsx=False))

    def test_arrow_returning_jsx_with_closure(self):
        arrow = _init("const f = ({ id }) => <li onClick={() => open(id)}>{id}</li>;")
        assert isinstance(arrow.body, JSXElement)
        handler = arrow.body.attributes[0].value.expression
        assert isinstance(handler, ArrowFunctionExpression)
        assert isinstance(handler.body.callee, Identifier)


class TestParseErrors:
    """Unsupported and malformed input."""

    @pytest.mark.parametrize(
        "source",
        [
            "class A {}",
            "export default class A {}",
            "with (a) {}",
            "label: for (;;) {}",
            "const e = <div>{...children}</div>;",
            "const f = () => super.x;",
        ],
    )
    def test_unsupported_syntax(self, source):
        with pytest.raises(ParseError) as exc_info:
            parse(source)
        assert exc_info.value.code is ErrorCode.UNSUPPORTED_SYNTAX
        assert "is not supported" in exc_info.value.message

    def test_mismatched_closing_tag(self):
        with pytest.raises(ParseError) as exc_info:
            parse("const e = <div></span>;")
        assert exc_info.value.code is ErrorCode.MISMATCHED_JSX_TAG
        assert "</div>" in exc_info.value.message

    def test_unexpected_token(self):
        with pytest.raises(ParseError) as exc_info:
            parse("const = 1;")
        assert exc_info.value.code is ErrorCode.UNEXPECTED_TOKEN

    def test_invalid_assignment_target(self):
        with pytest.raises(ParseError) as exc_info:
            parse("a + b = c;")
        assert exc_info.value.code is ErrorCode.INVALID_ASSIGNMENT_TARGET

    def test_missing_semicolon_has_suggestion(self):
        with pytest.raises(ParseError) as exc_info:
            parse("a b")
        assert exc_info.value.suggestion

    def test_error_location_uses_filename(self):
        with pytest.raises(ParseError) as exc_info:
            parse("const a = (1;", ParserOptions(filename="View.jsx"))
        assert exc_info.value.location.startswith("View.jsx:1:")

    def test_lexer_errors_propagate(self):
        with pytest.raises(LexerError):
            parse("const s = 'open")
