"""Code generator: jsxmemo AST back to JavaScript source.

Statements are printed one per line with a fixed indent unit; expressions
are printed inline, with parentheses inserted only where operator
precedence (or a statement-position ambiguity) requires them. JSX text is
printed verbatim, so whitespace between tags survives a round trip.

Node Dispatch:
    Uses O(1) dict lookup on the node's class name, one table for
    statements and one for expressions:
        ```python
        handler = self._get_expr_dispatch()[type(node).__name__]
        ```

Example:
    >>> from jsxmemo.parser import parse
    >>> generate(parse("const a=b+c*d"))
    'const a = b + c * d;'

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from jsxmemo._types import BINARY_PRECEDENCE
from jsxmemo.nodes import (
    AssignmentPattern,
    BinaryExpression,
    BlockStatement,
    CallExpression,
    Expr,
    FunctionExpression,
    Identifier,
    IfStatement,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXSpreadAttribute,
    JSXText,
    LogicalExpression,
    Node,
    NumericLiteral,
    ObjectExpression,
    ObjectMethod,
    ObjectPattern,
    ObjectProperty,
    Stmt,
    StringLiteral,
    VariableDeclaration,
)

# Precedence levels; higher binds tighter
_SEQUENCE = 1
_ASSIGN = 2  # assignment, arrow, yield
_CONDITIONAL = 3
_BINARY_BASE = 3  # + BINARY_PRECEDENCE[op] -> 4..15
_UNARY = 16
_POSTFIX = 17
_CALL = 18  # member access, call, new with arguments
_PRIMARY = 19

_FIXED_PRECEDENCE = {
    "SequenceExpression": _SEQUENCE,
    "AssignmentExpression": _ASSIGN,
    "ArrowFunctionExpression": _ASSIGN,
    "YieldExpression": _ASSIGN,
    "ConditionalExpression": _CONDITIONAL,
    "UnaryExpression": _UNARY,
    "AwaitExpression": _UNARY,
    "MemberExpression": _CALL,
    "CallExpression": _CALL,
    "NewExpression": _CALL,
    "TaggedTemplateExpression": _CALL,
}


def _precedence(node: Node) -> int:
    if isinstance(node, (BinaryExpression, LogicalExpression)):
        return _BINARY_BASE + BINARY_PRECEDENCE[node.operator]
    kind = type(node).__name__
    if kind == "UpdateExpression":
        return _UNARY if node.prefix else _POSTFIX  # type: ignore[attr-defined]
    return _FIXED_PRECEDENCE.get(kind, _PRIMARY)


def _starts_ambiguously(node: Node) -> bool:
    """True if an expression statement would begin with `{` or `function`."""
    while True:
        if isinstance(node, (ObjectExpression, ObjectPattern, FunctionExpression)):
            return True
        kind = type(node).__name__
        if kind == "MemberExpression":
            node = node.object  # type: ignore[attr-defined]
        elif kind == "CallExpression":
            node = node.callee  # type: ignore[attr-defined]
        elif kind == "TaggedTemplateExpression":
            node = node.tag  # type: ignore[attr-defined]
        elif kind in ("BinaryExpression", "LogicalExpression", "AssignmentExpression"):
            node = node.left  # type: ignore[attr-defined]
        elif kind == "ConditionalExpression":
            node = node.test  # type: ignore[attr-defined]
        elif kind == "SequenceExpression":
            node = node.expressions[0]  # type: ignore[attr-defined]
        elif kind == "UpdateExpression" and not node.prefix:  # type: ignore[attr-defined]
            node = node.argument  # type: ignore[attr-defined]
        else:
            return False


class CodeGenerator:
    """Print jsxmemo AST nodes as JavaScript source.

    Not thread-safe: holds the current indentation level while printing.
    Create one per ``generate()`` call.

    Attributes:
        _indent: Indent unit for one nesting level
        _level: Nesting level of the statement being printed

    """

    __slots__ = ("_expr_dispatch", "_indent", "_level", "_stmt_dispatch")

    def __init__(self, indent: str = "  ") -> None:
        self._indent = indent
        self._level = 0

    def generate(self, node: Node) -> str:
        """Print a Program, statement or expression."""
        kind = type(node).__name__
        if kind == "Program":
            return "\n".join(self._stmts(node.body, 0))  # type: ignore[attr-defined]
        if kind in self._get_stmt_dispatch():
            return "\n".join(self._stmt(node, 0))  # type: ignore[arg-type]
        return self._expr(node)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _pad(self, level: int) -> str:
        return self._indent * level

    def _stmts(self, body: Sequence[Stmt], level: int) -> list[str]:
        lines: list[str] = []
        for stmt in body:
            lines.extend(self._stmt(stmt, level))
        return lines

    def _stmt(self, node: Stmt, level: int) -> list[str]:
        handler = self._get_stmt_dispatch().get(type(node).__name__)
        if handler is None:
            raise TypeError(f"Cannot generate code for {type(node).__name__}")
        saved = self._level
        self._level = level
        try:
            return handler(node, level)
        finally:
            self._level = saved

    def _clause(self, head: str, body: Stmt, level: int) -> list[str]:
        """``head {`` block ``}``, or ``head`` with an indented single statement."""
        pad = self._pad(level)
        if isinstance(body, BlockStatement):
            return [f"{pad}{head} {{", *self._stmts(body.body, level + 1), f"{pad}}}"]
        return [f"{pad}{head}", *self._stmt(body, level + 1)]

    def _get_stmt_dispatch(self) -> dict[str, Callable[[Any, int], list[str]]]:
        """Get statement dispatch table (cached on first call)."""
        try:
            return self._stmt_dispatch
        except AttributeError:
            self._stmt_dispatch = {
                "ExpressionStatement": self._gen_expression_statement,
                "BlockStatement": self._gen_block,
                "EmptyStatement": self._gen_empty,
                "VariableDeclaration": self._gen_variable_declaration,
                "FunctionDeclaration": self._gen_function_declaration,
                "ReturnStatement": self._gen_return,
                "IfStatement": self._gen_if,
                "ForStatement": self._gen_for,
                "ForInStatement": self._gen_for_in,
                "ForOfStatement": self._gen_for_of,
                "WhileStatement": self._gen_while,
                "DoWhileStatement": self._gen_do_while,
                "BreakStatement": self._gen_break,
                "ContinueStatement": self._gen_continue,
                "ThrowStatement": self._gen_throw,
                "TryStatement": self._gen_try,
                "SwitchStatement": self._gen_switch,
                "ImportDeclaration": self._gen_import,
                "ExportNamedDeclaration": self._gen_export_named,
                "ExportDefaultDeclaration": self._gen_export_default,
                "ExportAllDeclaration": self._gen_export_all,
            }
            return self._stmt_dispatch

    def _gen_expression_statement(self, node: Any, level: int) -> list[str]:
        text = self._expr(node.expression)
        if _starts_ambiguously(node.expression) and not text.startswith("("):
            text = f"({text})"
        return [f"{self._pad(level)}{text};"]

    def _gen_block(self, node: Any, level: int) -> list[str]:
        pad = self._pad(level)
        return [f"{pad}{{", *self._stmts(node.body, level + 1), f"{pad}}}"]

    def _gen_empty(self, node: Any, level: int) -> list[str]:
        return [f"{self._pad(level)};"]

    def _declaration_text(self, node: VariableDeclaration) -> str:
        parts = []
        for declarator in node.declarations:
            text = self._pattern(declarator.id)
            if declarator.init is not None:
                text += f" = {self._expr(declarator.init, _ASSIGN)}"
            parts.append(text)
        return f"{node.kind} {', '.join(parts)}"

    def _gen_variable_declaration(self, node: Any, level: int) -> list[str]:
        return [f"{self._pad(level)}{self._declaration_text(node)};"]

    def _gen_function_declaration(self, node: Any, level: int) -> list[str]:
        return [f"{self._pad(level)}{self._function_text(node)}"]

    def _gen_return(self, node: Any, level: int) -> list[str]:
        if node.argument is None:
            return [f"{self._pad(level)}return;"]
        return [f"{self._pad(level)}return {self._expr(node.argument)};"]

    def _gen_if(self, node: Any, level: int) -> list[str]:
        consequent = node.consequent
        if (
            node.alternate is not None
            and isinstance(consequent, IfStatement)
            and consequent.alternate is None
        ):
            # Keep the else bound to this if, not the nested one
            consequent = BlockStatement(consequent.lineno, consequent.col_offset, (consequent,))
        lines = self._clause(f"if ({self._expr(node.test)})", consequent, level)
        alternate = node.alternate
        if alternate is None:
            return lines
        if isinstance(alternate, IfStatement):
            alt_lines = self._stmt(alternate, level)
            alt_lines[0] = f"{self._pad(level)}else {alt_lines[0].lstrip()}"
        else:
            alt_lines = self._clause("else", alternate, level)
        if isinstance(consequent, BlockStatement):
            lines[-1] = f"{lines[-1]} {alt_lines[0].lstrip()}"
            lines.extend(alt_lines[1:])
        else:
            lines.extend(alt_lines)
        return lines

    def _for_init_text(self, init: Any) -> str:
        if init is None:
            return ""
        if isinstance(init, VariableDeclaration):
            return self._declaration_text(init)
        return self._expr(init)

    def _gen_for(self, node: Any, level: int) -> list[str]:
        init = self._for_init_text(node.init)
        test = f" {self._expr(node.test)}" if node.test is not None else ""
        update = f" {self._expr(node.update)}" if node.update is not None else ""
        return self._clause(f"for ({init};{test};{update})", node.body, level)

    def _for_left_text(self, left: Any) -> str:
        if isinstance(left, VariableDeclaration):
            return self._declaration_text(left)
        return self._pattern(left)

    def _gen_for_in(self, node: Any, level: int) -> list[str]:
        head = f"for ({self._for_left_text(node.left)} in {self._expr(node.right)})"
        return self._clause(head, node.body, level)

    def _gen_for_of(self, node: Any, level: int) -> list[str]:
        keyword = "for await" if node.is_await else "for"
        head = f"{keyword} ({self._for_left_text(node.left)} of {self._expr(node.right, _ASSIGN)})"
        return self._clause(head, node.body, level)

    def _gen_while(self, node: Any, level: int) -> list[str]:
        return self._clause(f"while ({self._expr(node.test)})", node.body, level)

    def _gen_do_while(self, node: Any, level: int) -> list[str]:
        lines = self._clause("do", node.body, level)
        tail = f"while ({self._expr(node.test)});"
        if isinstance(node.body, BlockStatement):
            lines[-1] = f"{lines[-1]} {tail}"
        else:
            lines.append(f"{self._pad(level)}{tail}")
        return lines

    def _gen_break(self, node: Any, level: int) -> list[str]:
        return [f"{self._pad(level)}break;"]

    def _gen_continue(self, node: Any, level: int) -> list[str]:
        return [f"{self._pad(level)}continue;"]

    def _gen_throw(self, node: Any, level: int) -> list[str]:
        return [f"{self._pad(level)}throw {self._expr(node.argument)};"]

    def _gen_try(self, node: Any, level: int) -> list[str]:
        lines = self._clause("try", node.block, level)
        if node.handler is not None:
            head = "catch"
            if node.handler.param is not None:
                head = f"catch ({self._pattern(node.handler.param)})"
            handler_lines = self._clause(head, node.handler.body, level)
            lines[-1] = f"{lines[-1]} {handler_lines[0].lstrip()}"
            lines.extend(handler_lines[1:])
        if node.finalizer is not None:
            final_lines = self._clause("finally", node.finalizer, level)
            lines[-1] = f"{lines[-1]} {final_lines[0].lstrip()}"
            lines.extend(final_lines[1:])
        return lines

    def _gen_switch(self, node: Any, level: int) -> list[str]:
        pad = self._pad(level)
        case_pad = self._pad(level + 1)
        lines = [f"{pad}switch ({self._expr(node.discriminant)}) {{"]
        for case in node.cases:
            self._level = level + 1
            head = "default:" if case.test is None else f"case {self._expr(case.test)}:"
            lines.append(f"{case_pad}{head}")
            lines.extend(self._stmts(case.consequent, level + 2))
        lines.append(f"{pad}}}")
        return lines

    def _gen_import(self, node: Any, level: int) -> list[str]:
        pad = self._pad(level)
        if not node.specifiers:
            return [f"{pad}import {node.source.raw};"]
        parts: list[str] = []
        named: list[str] = []
        for spec in node.specifiers:
            kind = type(spec).__name__
            if kind == "ImportDefaultSpecifier":
                parts.append(spec.local.name)
            elif kind == "ImportNamespaceSpecifier":
                parts.append(f"* as {spec.local.name}")
            elif spec.imported.name == spec.local.name:
                named.append(spec.local.name)
            else:
                named.append(f"{spec.imported.name} as {spec.local.name}")
        if named:
            parts.append(f"{{ {', '.join(named)} }}")
        return [f"{pad}import {', '.join(parts)} from {node.source.raw};"]

    def _gen_export_named(self, node: Any, level: int) -> list[str]:
        pad = self._pad(level)
        if node.declaration is not None:
            lines = self._stmt(node.declaration, level)
            lines[0] = f"{pad}export {lines[0].lstrip()}"
            return lines
        names = [
            spec.local.name if spec.local.name == spec.exported.name else f"{spec.local.name} as {spec.exported.name}"
            for spec in node.specifiers
        ]
        text = f"export {{ {', '.join(names)} }}" if names else "export {}"
        if node.source is not None:
            text += f" from {node.source.raw}"
        return [f"{pad}{text};"]

    def _gen_export_default(self, node: Any, level: int) -> list[str]:
        pad = self._pad(level)
        declaration = node.declaration
        if isinstance(declaration, Stmt):
            lines = self._stmt(declaration, level)
            lines[0] = f"{pad}export default {lines[0].lstrip()}"
            return lines
        if isinstance(declaration, FunctionExpression):
            return [f"{pad}export default {self._function_text(declaration)}"]
        return [f"{pad}export default {self._expr(declaration, _ASSIGN)};"]

    def _gen_export_all(self, node: Any, level: int) -> list[str]:
        star = f"* as {node.exported.name}" if node.exported is not None else "*"
        return [f"{self._pad(level)}export {star} from {node.source.raw};"]

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def _body_text(self, body: BlockStatement) -> str:
        """Block printed inline in an expression, closing brace at the current level."""
        if not body.body:
            return "{}"
        lines = self._stmts(body.body, self._level + 1)
        return "{\n" + "\n".join(lines) + f"\n{self._pad(self._level)}}}"

    def _params_text(self, params: Sequence[Node]) -> str:
        return f"({', '.join(self._pattern(p) for p in params)})"

    def _function_text(self, node: Any) -> str:
        head = "async function" if node.is_async else "function"
        if node.generator:
            head += "*"
        if node.id is not None:
            head += f" {node.id.name}"
        elif not node.generator:
            head += " "
        return f"{head}{self._params_text(node.params)} {self._body_text(node.body)}"

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _expr(self, node: Node, min_precedence: int = 0) -> str:
        handler = self._get_expr_dispatch().get(type(node).__name__)
        if handler is None:
            raise TypeError(f"Cannot generate code for {type(node).__name__}")
        text = handler(node)
        if _precedence(node) < min_precedence:
            return f"({text})"
        return text

    def _get_expr_dispatch(self) -> dict[str, Callable[[Any], str]]:
        """Get expression dispatch table (cached on first call)."""
        try:
            return self._expr_dispatch
        except AttributeError:
            self._expr_dispatch = {
                "Identifier": self._gen_identifier,
                "StringLiteral": self._gen_string,
                "NumericLiteral": self._gen_number,
                "BooleanLiteral": self._gen_boolean,
                "NullLiteral": self._gen_null,
                "RegExpLiteral": self._gen_regex,
                "ThisExpression": self._gen_this,
                "TemplateLiteral": self._gen_template,
                "TaggedTemplateExpression": self._gen_tagged_template,
                "ArrayExpression": self._gen_array,
                "ObjectExpression": self._gen_object,
                "MemberExpression": self._gen_member,
                "CallExpression": self._gen_call,
                "NewExpression": self._gen_new,
                "UnaryExpression": self._gen_unary,
                "UpdateExpression": self._gen_update,
                "BinaryExpression": self._gen_binary,
                "LogicalExpression": self._gen_binary,
                "ConditionalExpression": self._gen_conditional,
                "AssignmentExpression": self._gen_assignment,
                "SequenceExpression": self._gen_sequence,
                "AwaitExpression": self._gen_await,
                "YieldExpression": self._gen_yield,
                "ArrowFunctionExpression": self._gen_arrow,
                "FunctionExpression": self._function_text,
                "JSXElement": self._gen_jsx_element,
                "JSXFragment": self._gen_jsx_fragment,
                # Patterns appear as assignment targets
                "ObjectPattern": self._pattern,
                "ArrayPattern": self._pattern,
                "AssignmentPattern": self._pattern,
                "RestElement": self._pattern,
            }
            return self._expr_dispatch

    def _gen_identifier(self, node: Any) -> str:
        return node.name

    def _gen_string(self, node: Any) -> str:
        return node.raw

    def _gen_number(self, node: Any) -> str:
        return node.raw

    def _gen_boolean(self, node: Any) -> str:
        return "true" if node.value else "false"

    def _gen_null(self, node: Any) -> str:
        return "null"

    def _gen_regex(self, node: Any) -> str:
        return f"/{node.pattern}/{node.flags}"

    def _gen_this(self, node: Any) -> str:
        return "this"

    def _gen_template(self, node: Any) -> str:
        parts = ["`"]
        for i, quasi in enumerate(node.quasis):
            parts.append(quasi.raw)
            if i < len(node.expressions):
                parts.append(f"${{{self._expr(node.expressions[i])}}}")
        parts.append("`")
        return "".join(parts)

    def _gen_tagged_template(self, node: Any) -> str:
        return f"{self._expr(node.tag, _CALL)}{self._gen_template(node.quasi)}"

    def _element_text(self, node: Node | None) -> str:
        """Array element, call argument or spread."""
        if node is None:
            return ""
        if type(node).__name__ == "SpreadElement":
            return f"...{self._expr(node.argument, _ASSIGN)}"  # type: ignore[attr-defined]
        return self._expr(node, _ASSIGN)

    def _gen_array(self, node: Any) -> str:
        items = [self._element_text(element) for element in node.elements]
        if node.elements and node.elements[-1] is None:
            items.append("")
        return f"[{', '.join(items)}]"

    def _key_text(self, key: Node, computed: bool) -> str:
        if computed:
            return f"[{self._expr(key, _ASSIGN)}]"
        return self._expr(key)

    def _property_text(self, prop: Node) -> str:
        kind = type(prop).__name__
        if kind == "SpreadElement":
            return self._element_text(prop)
        if kind == "RestElement":
            return self._pattern(prop)
        if isinstance(prop, ObjectMethod):
            head = ""
            if prop.is_async:
                head = "async "
            if prop.kind != "method":
                head += f"{prop.kind} "
            if prop.generator:
                head += "*"
            key = self._key_text(prop.key, prop.computed)
            return f"{head}{key}{self._params_text(prop.params)} {self._body_text(prop.body)}"
        if isinstance(prop, ObjectProperty):
            value = prop.value
            if prop.shorthand and isinstance(prop.key, Identifier):
                if isinstance(value, Identifier) and value.name == prop.key.name:
                    return value.name
                if isinstance(value, AssignmentPattern) and isinstance(value.left, Identifier):
                    return self._pattern(value)
            key = self._key_text(prop.key, prop.computed)
            return f"{key}: {self._pattern(value)}"
        raise TypeError(f"Cannot generate code for {kind}")

    def _gen_object(self, node: Any) -> str:
        if not node.properties:
            return "{}"
        return f"{{ {', '.join(self._property_text(p) for p in node.properties)} }}"

    def _gen_member(self, node: Any) -> str:
        obj = node.object
        text = self._expr(obj, _CALL)
        if isinstance(obj, NumericLiteral) and text.isdigit():
            text = f"({text})"
        if node.computed:
            dot = "?.[" if node.optional else "["
            return f"{text}{dot}{self._expr(node.property)}]"
        dot = "?." if node.optional else "."
        return f"{text}{dot}{node.property.name}"

    def _arguments_text(self, arguments: Sequence[Node]) -> str:
        return f"({', '.join(self._element_text(a) for a in arguments)})"

    def _gen_call(self, node: Any) -> str:
        callee = self._expr(node.callee, _CALL)
        dot = "?." if node.optional else ""
        return f"{callee}{dot}{self._arguments_text(node.arguments)}"

    def _gen_new(self, node: Any) -> str:
        callee = node.callee
        # `new a()()` would call the constructed value
        minimum = _PRIMARY if isinstance(callee, CallExpression) else _CALL
        return f"new {self._expr(callee, minimum)}{self._arguments_text(node.arguments)}"

    def _gen_unary(self, node: Any) -> str:
        operator = node.operator
        argument = self._expr(node.argument, _UNARY)
        if operator.isalpha() or (operator in "+-" and argument.startswith(operator)):
            return f"{operator} {argument}"
        return f"{operator}{argument}"

    def _gen_update(self, node: Any) -> str:
        argument = self._expr(node.argument, _POSTFIX)
        if node.prefix:
            return f"{node.operator}{argument}"
        return f"{argument}{node.operator}"

    def _gen_binary(self, node: Any) -> str:
        operator = node.operator
        precedence = _BINARY_BASE + BINARY_PRECEDENCE[operator]
        if operator == "**":
            left_min, right_min = _POSTFIX, precedence
        else:
            left_min, right_min = precedence, precedence + 1
        left = self._expr(node.left, left_min)
        right = self._expr(node.right, right_min)
        # `??` cannot mix with `&&`/`||` without parentheses
        if operator == "??" or operator in ("&&", "||"):
            left = self._guard_nullish_mix(operator, node.left, left)
            right = self._guard_nullish_mix(operator, node.right, right)
        return f"{left} {operator} {right}"

    @staticmethod
    def _guard_nullish_mix(operator: str, child: Node, text: str) -> str:
        if not isinstance(child, LogicalExpression) or text.startswith("("):
            return text
        if (operator == "??") != (child.operator == "??"):
            return f"({text})"
        return text

    def _gen_conditional(self, node: Any) -> str:
        test = self._expr(node.test, _CONDITIONAL + 1)
        consequent = self._expr(node.consequent, _ASSIGN)
        alternate = self._expr(node.alternate, _ASSIGN)
        return f"{test} ? {consequent} : {alternate}"

    def _gen_assignment(self, node: Any) -> str:
        return f"{self._pattern(node.left)} {node.operator} {self._expr(node.right, _ASSIGN)}"

    def _gen_sequence(self, node: Any) -> str:
        return ", ".join(self._expr(e, _ASSIGN) for e in node.expressions)

    def _gen_await(self, node: Any) -> str:
        return f"await {self._expr(node.argument, _UNARY)}"

    def _gen_yield(self, node: Any) -> str:
        keyword = "yield*" if node.delegate else "yield"
        if node.argument is None:
            return keyword
        return f"{keyword} {self._expr(node.argument, _ASSIGN)}"

    def _gen_arrow(self, node: Any) -> str:
        params = node.params
        if len(params) == 1 and isinstance(params[0], Identifier):
            params_text = params[0].name
        else:
            params_text = self._params_text(params)
        head = f"async {params_text}" if node.is_async else params_text
        body = node.body
        if isinstance(body, BlockStatement):
            return f"{head} => {self._body_text(body)}"
        body_text = self._expr(body, _ASSIGN)
        if body_text.startswith("{"):
            body_text = f"({body_text})"
        return f"{head} => {body_text}"

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def _pattern(self, node: Any) -> str:
        kind = type(node).__name__
        if kind == "ObjectPattern":
            if not node.properties:
                return "{}"
            return f"{{ {', '.join(self._property_text(p) for p in node.properties)} }}"
        if kind == "ArrayPattern":
            items = ["" if e is None else self._pattern(e) for e in node.elements]
            if node.elements and node.elements[-1] is None:
                items.append("")
            return f"[{', '.join(items)}]"
        if kind == "AssignmentPattern":
            return f"{self._pattern(node.left)} = {self._expr(node.right, _ASSIGN)}"
        if kind == "RestElement":
            return f"...{self._pattern(node.argument)}"
        if isinstance(node, Expr):
            return self._expr(node, _ASSIGN)
        raise TypeError(f"Cannot generate code for {kind}")

    # ------------------------------------------------------------------
    # JSX
    # ------------------------------------------------------------------

    def _jsx_child_text(self, child: Node) -> str:
        if isinstance(child, JSXText):
            return child.value
        if isinstance(child, JSXExpressionContainer):
            return self._container_text(child)
        return self._expr(child)

    def _container_text(self, node: JSXExpressionContainer) -> str:
        if isinstance(node.expression, JSXEmptyExpression):
            return "{}"
        return f"{{{self._expr(node.expression)}}}"

    def _jsx_attribute_text(self, attr: Node) -> str:
        if isinstance(attr, JSXSpreadAttribute):
            return f"{{...{self._expr(attr.argument, _ASSIGN)}}}"
        value = attr.value  # type: ignore[attr-defined]
        name = attr.name  # type: ignore[attr-defined]
        if value is None:
            return name
        if isinstance(value, StringLiteral):
            return f"{name}={value.raw}"
        if isinstance(value, JSXExpressionContainer):
            return f"{name}={self._container_text(value)}"
        if isinstance(value, (JSXElement, JSXFragment)):
            return f"{name}={self._expr(value)}"
        raise TypeError(f"Cannot generate code for {type(value).__name__}")

    def _gen_jsx_element(self, node: Any) -> str:
        opening = node.name
        if node.attributes:
            opening += " " + " ".join(self._jsx_attribute_text(a) for a in node.attributes)
        if node.self_closing and not node.children:
            return f"<{opening} />"
        children = "".join(self._jsx_child_text(c) for c in node.children)
        return f"<{opening}>{children}</{node.name}>"

    def _gen_jsx_fragment(self, node: Any) -> str:
        return f"<>{''.join(self._jsx_child_text(c) for c in node.children)}</>"


def generate(node: Node, indent: str = "  ") -> str:
    """Print a node (usually a Program) as JavaScript source."""
    return CodeGenerator(indent).generate(node)
