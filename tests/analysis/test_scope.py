"""Tests for scopes, bindings and name allocation."""

from jsxmemo.analysis import NameAllocator, block_scope, function_scope, program_scope
from jsxmemo.analysis.scope import to_identifier
from jsxmemo.nodes import CatchClause, ForStatement, FunctionDeclaration, SwitchStatement, VariableDeclarator
from jsxmemo.parser import parse


def _function(source: str):
    """Parse source whose first statement is a function declaration."""
    program = parse(source)
    fn = program.body[0]
    assert isinstance(fn, FunctionDeclaration)
    return fn, function_scope(fn, program_scope(program))


class TestProgramScope:
    """Module-level declarations."""

    def test_declaration_kinds(self):
        program = parse(
            "import React, { useState } from 'react';\n"
            "const a = 1;\n"
            "let b;\n"
            "function helper() {}\n"
            "export const exported = 2;\n"
        )
        scope = program_scope(program)
        kinds = {name: binding.kind for name, binding in scope.own_bindings().items()}
        assert kinds == {
            "React": "import",
            "useState": "import",
            "a": "const",
            "b": "let",
            "helper": "function",
            "exported": "const",
        }

    def test_var_is_hoisted_out_of_blocks(self):
        scope = program_scope(parse("if (x) { for (;;) { var deep = 1; } }"))
        assert scope.get_binding("deep").kind == "var"

    def test_var_is_not_hoisted_out_of_functions(self):
        scope = program_scope(parse("function f() { var inner = 1; }"))
        assert not scope.has_binding("inner")

    def test_block_let_is_not_module_level(self):
        scope = program_scope(parse("{ let hidden = 1; }"))
        assert not scope.has_binding("hidden")

    def test_binding_records_declarator(self):
        scope = program_scope(parse("const { a, b: [c] } = obj;"))
        binding = scope.get_binding("c")
        assert isinstance(binding.node, VariableDeclarator)
        assert binding.identifier.name == "c"
        assert binding.constant
        assert binding.scope is scope

    def test_first_declaration_wins(self):
        scope = program_scope(parse("var a = 1; var a = 2;"))
        assert scope.get_binding("a").node.init.raw == "1"


class TestFunctionScope:
    """Parameters and body declarations."""

    def test_params(self):
        fn, scope = _function("function f(a, { b, c: [d] }, e = 1, ...rest) {}")
        params = {name for name, binding in scope.own_bindings().items() if binding.kind == "param"}
        assert params == {"a", "b", "d", "e", "rest"}
        assert scope.get_binding("a").node is fn

    def test_body_declarations_and_hoisting(self):
        _, scope = _function("function f() { const a = 1; if (x) { var b = 2; let c = 3; } }")
        assert scope.has_own_binding("a")
        assert scope.has_own_binding("b")
        assert not scope.has_own_binding("c")

    def test_parent_lookup(self):
        _, scope = _function("function f() {}\nconst outer = 1;")
        assert scope.has_binding("outer")
        assert not scope.has_own_binding("outer")
        assert scope.get_binding("outer").scope is scope.parent

    def test_function_expression_name(self):
        program = parse("const f = function named(x) {};")
        fn = program.body[0].declarations[0].init
        scope = function_scope(fn, program_scope(program))
        assert scope.get_binding("named").kind == "function"

    def test_arrow_with_expression_body(self):
        program = parse("const f = (a) => a;")
        arrow = program.body[0].declarations[0].init
        scope = function_scope(arrow, None)
        assert list(scope.own_bindings()) == ["a"]

    def test_shadowing(self):
        _, scope = _function("function f(a) { const b = 2; }\nconst a = 0, c = 1;")
        merged = scope.get_all_bindings()
        assert merged["a"].kind == "param"
        assert merged["c"].kind == "const"


class TestBlockScope:
    """Blocks, loop heads, catch clauses and switch bodies."""

    def test_for_let(self):
        program = parse("for (let i = 0; i < 3; i++) {}")
        loop = program.body[0]
        assert isinstance(loop, ForStatement)
        scope = block_scope(loop, program_scope(program))
        assert scope.get_binding("i").kind == "let"
        assert scope.kind == "block"

    def test_catch_clause(self):
        program = parse("try {} catch ({ message }) {}")
        handler = program.body[0].handler
        assert isinstance(handler, CatchClause)
        scope = block_scope(handler, program_scope(program))
        assert scope.get_binding("message").kind == "catch"

    def test_switch_body(self):
        program = parse("switch (x) { case 1: const y = 2; }")
        switch = program.body[0]
        assert isinstance(switch, SwitchStatement)
        assert block_scope(switch, program_scope(program)).has_own_binding("y")

    def test_function_scope_of_block(self):
        fn, scope = _function("function f() { { let a; } }")
        inner = block_scope(fn.body.body[0], scope)
        assert inner.function_scope is scope
        assert scope.function_scope is scope


class TestNameAllocator:
    """Unique generated names."""

    def test_sequence(self):
        names = NameAllocator()
        assert [names.generate("onClick") for _ in range(3)] == ["_onClick", "_onClick2", "_onClick3"]

    def test_seeded_names_are_skipped(self):
        names = NameAllocator({"_onClick", "_onClick2"})
        assert names.generate("onClick") == "_onClick3"

    def test_base_is_normalized(self):
        names = NameAllocator()
        assert names.generate("_onClick2") == "_onClick"
        assert names.generate("aria-label") == "_ariaLabel"
        assert names.generate("") == "_temp"

    def test_for_program_collects_identifiers_and_components(self):
        names = NameAllocator.for_program(parse("const _onClick = 1; x = <ui.Row><div /></ui.Row>;"))
        assert names.is_used("_onClick")
        assert names.is_used("ui")
        assert names.generate("onClick") == "_onClick2"

    def test_to_identifier(self):
        assert to_identifier("aria-label") == "ariaLabel"
        assert to_identifier("xlink:href") == "xlinkHref"
        assert to_identifier("---") == "temp"
