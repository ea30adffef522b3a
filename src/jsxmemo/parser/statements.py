"""Statement parsing for the jsxmemo parser.

Provides the mixin for statements, variable declarations, control flow
and module-level import/export declarations.

Classes, labelled statements, ``with`` and ``debugger`` are rejected with
J-PAR-002 (unsupported syntax) rather than parsed and ignored.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Literal, TypeVar

from jsxmemo._types import Token, TokenType
from jsxmemo.exceptions import ErrorCode
from jsxmemo.lexer import decode_string
from jsxmemo.nodes import (
    BlockStatement,
    BreakStatement,
    CatchClause,
    ContinueStatement,
    DoWhileStatement,
    EmptyStatement,
    ExportAllDeclaration,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExportSpecifier,
    ExpressionStatement,
    ForInStatement,
    ForOfStatement,
    ForStatement,
    Identifier,
    IfStatement,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    Node,
    ReturnStatement,
    Stmt,
    StringLiteral,
    SwitchCase,
    SwitchStatement,
    ThrowStatement,
    TryStatement,
    VariableDeclaration,
    VariableDeclarator,
    WhileStatement,
)

if TYPE_CHECKING:
    from jsxmemo.exceptions import ParseError
    from jsxmemo.lexer import LexMode
    from jsxmemo.nodes import Expr, FunctionDeclaration, FunctionExpression
    from jsxmemo.parser.core import ParserOptions

_T = TypeVar("_T")

DeclarationKind = Literal["var", "let", "const"]


class StatementParsingMixin:
    """Mixin for parsing statements and module declarations."""

    if TYPE_CHECKING:
        # Host attributes (from Parser.__init__)
        _options: ParserOptions
        _current: Token
        _no_in: bool

        def _advance(self, mode: LexMode = "js") -> Token: ...
        def _peek(self, mode: LexMode = "js") -> Token: ...
        def _is(self, value: str) -> bool: ...
        def _is_name(self) -> bool: ...
        def _eat(self, value: str, mode: LexMode = "js") -> bool: ...
        def _expect(self, value: str, mode: LexMode = "js") -> Token: ...
        def _consume_semicolon(self) -> None: ...
        def _allow_in(self, parse: Callable[[], _T]) -> _T: ...
        def _error(
            self,
            message: str,
            at: Token | Node | None = None,
            *,
            code: ErrorCode = ErrorCode.UNEXPECTED_TOKEN,
            suggestion: str | None = None,
        ) -> ParseError: ...
        def _unsupported(self, what: str, token: Token | None = None) -> ParseError: ...
        @staticmethod
        def _describe(token: Token) -> str: ...

        # From ExpressionParsingMixin
        def _parse_expression(self) -> Expr: ...
        def _parse_assignment(self) -> Expr: ...
        def _parse_function(
            self,
            start: Token,
            *,
            is_async: bool,
            declaration: bool = False,
        ) -> FunctionExpression | FunctionDeclaration: ...

        # From PatternParsingMixin
        def _parse_binding_target(self) -> Node: ...
        def _parse_binding_identifier(self) -> Identifier: ...
        def _to_pattern(self, node: Node) -> Node: ...

    def _parse_statement(self, *, top_level: bool = False) -> Stmt:
        """Parse one statement (or declaration) at the current token."""
        token = self._current

        if token.type is TokenType.PUNCT:
            if token.value == "{":
                return self._parse_block()
            if token.value == ";":
                self._advance()
                return EmptyStatement(token.lineno, token.col_offset)
            return self._parse_expression_statement()

        if token.type is not TokenType.NAME:
            return self._parse_expression_statement()

        keyword = token.value
        follow = self._peek()

        if keyword in ("var", "const") or (keyword == "let" and self._starts_let_declaration(follow)):
            declaration = self._parse_variable_declaration()
            self._consume_semicolon()
            return declaration
        if keyword == "function":
            return self._parse_function(token, is_async=False, declaration=True)
        if keyword == "async" and follow.value == "function" and not follow.newline_before:
            self._advance()
            return self._parse_function(token, is_async=True, declaration=True)
        if keyword == "import" and follow.value not in ("(", "."):
            return self._parse_import(token, top_level)
        if keyword == "export":
            return self._parse_export(token, top_level)

        parse = _KEYWORD_STATEMENTS.get(keyword)
        if parse is not None:
            return parse(self)

        if keyword in ("class", "with", "debugger"):
            raise self._unsupported(f"'{keyword}' statements")
        if follow.type is TokenType.PUNCT and follow.value == ":":
            raise self._unsupported("Labelled statements")
        return self._parse_expression_statement()

    @staticmethod
    def _starts_let_declaration(follow: Token) -> bool:
        if follow.type is TokenType.NAME:
            return follow.value not in ("in", "instanceof", "of")
        return follow.type is TokenType.PUNCT and follow.value in ("[", "{")

    def _parse_block(self) -> BlockStatement:
        start = self._expect("{")
        body: list[Stmt] = []
        while not self._is("}"):
            if self._current.type is TokenType.EOF:
                raise self._error("Expected '}' but found end of input", start)
            body.append(self._parse_statement())
        self._advance()
        return BlockStatement(start.lineno, start.col_offset, tuple(body))

    def _parse_expression_statement(self) -> ExpressionStatement:
        expression = self._parse_expression()
        self._consume_semicolon()
        return ExpressionStatement(expression.lineno, expression.col_offset, expression)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_variable_declaration(self, *, in_for_head: bool = False) -> VariableDeclaration:
        start = self._advance()
        kind: DeclarationKind = start.value  # type: ignore[assignment]
        declarations: list[VariableDeclarator] = []
        while True:
            target = self._parse_binding_target()
            init: Expr | None = None
            if self._eat("="):
                init = self._parse_assignment()
            elif not in_for_head and (kind == "const" or not isinstance(target, Identifier)):
                raise self._error("Missing initializer in declaration", target)
            declarations.append(VariableDeclarator(target.lineno, target.col_offset, target, init))
            if not self._eat(","):
                break
        return VariableDeclaration(start.lineno, start.col_offset, kind, tuple(declarations))

    # ------------------------------------------------------------------
    # Control flow
    # ------------------------------------------------------------------

    def _parse_if(self) -> IfStatement:
        start = self._advance()
        test = self._parse_parenthesized()
        consequent = self._parse_statement()
        alternate = self._parse_statement() if self._eat("else") else None
        return IfStatement(start.lineno, start.col_offset, test, consequent, alternate)

    def _parse_parenthesized(self) -> Expr:
        self._expect("(")
        expr = self._allow_in(self._parse_expression)
        self._expect(")")
        return expr

    def _parse_for(self) -> Stmt:
        start = self._advance()
        is_await = self._eat("await")
        self._expect("(")

        init: VariableDeclaration | Expr | None = None
        if not self._is(";"):
            self._no_in = True
            try:
                if self._is("var") or self._is("const") or (
                    self._is("let") and self._starts_let_declaration(self._peek())
                ):
                    init = self._parse_variable_declaration(in_for_head=True)
                else:
                    init = self._parse_expression()
            finally:
                self._no_in = False

            if self._is("of") or self._is("in"):
                of = self._is("of")
                self._advance()
                left = init if isinstance(init, VariableDeclaration) else self._to_pattern(init)
                right = self._parse_assignment() if of else self._parse_expression()
                self._expect(")")
                body = self._parse_statement()
                if of:
                    return ForOfStatement(start.lineno, start.col_offset, left, right, body, is_await)
                return ForInStatement(start.lineno, start.col_offset, left, right, body)

        if is_await:
            raise self._error("'for await' requires an 'of' loop", start)
        self._expect(";")
        test = None if self._is(";") else self._parse_expression()
        self._expect(";")
        update = None if self._is(")") else self._parse_expression()
        self._expect(")")
        body = self._parse_statement()
        return ForStatement(start.lineno, start.col_offset, init, test, update, body)

    def _parse_while(self) -> WhileStatement:
        start = self._advance()
        test = self._parse_parenthesized()
        return WhileStatement(start.lineno, start.col_offset, test, self._parse_statement())

    def _parse_do_while(self) -> DoWhileStatement:
        start = self._advance()
        body = self._parse_statement()
        self._expect("while")
        test = self._parse_parenthesized()
        self._eat(";")
        return DoWhileStatement(start.lineno, start.col_offset, body, test)

    def _parse_return(self) -> ReturnStatement:
        start = self._advance()
        token = self._current
        argument: Expr | None = None
        if not (token.newline_before or token.type is TokenType.EOF or self._is(";") or self._is("}")):
            argument = self._parse_expression()
        self._consume_semicolon()
        return ReturnStatement(start.lineno, start.col_offset, argument)

    def _parse_jump(self) -> Stmt:
        start = self._advance()
        token = self._current
        if token.type is TokenType.NAME and not token.newline_before:
            raise self._unsupported("Labelled statements", token)
        self._consume_semicolon()
        if start.value == "break":
            return BreakStatement(start.lineno, start.col_offset)
        return ContinueStatement(start.lineno, start.col_offset)

    def _parse_throw(self) -> ThrowStatement:
        start = self._advance()
        if self._current.newline_before:
            raise self._error("Illegal newline after 'throw'")
        argument = self._parse_expression()
        self._consume_semicolon()
        return ThrowStatement(start.lineno, start.col_offset, argument)

    def _parse_try(self) -> TryStatement:
        start = self._advance()
        block = self._parse_block()
        handler: CatchClause | None = None
        finalizer: BlockStatement | None = None
        token = self._current
        if self._eat("catch"):
            param: Node | None = None
            if self._eat("("):
                param = self._parse_binding_target()
                self._expect(")")
            handler = CatchClause(token.lineno, token.col_offset, param, self._parse_block())
        if self._eat("finally"):
            finalizer = self._parse_block()
        if handler is None and finalizer is None:
            raise self._error("Missing catch or finally after try")
        return TryStatement(start.lineno, start.col_offset, block, handler, finalizer)

    def _parse_switch(self) -> SwitchStatement:
        start = self._advance()
        discriminant = self._parse_parenthesized()
        self._expect("{")
        cases: list[SwitchCase] = []
        while not self._is("}"):
            token = self._current
            if self._eat("default"):
                test = None
            else:
                self._expect("case")
                test = self._allow_in(self._parse_expression)
            self._expect(":")
            consequent: list[Stmt] = []
            while not (self._is("case") or self._is("default") or self._is("}")):
                if self._current.type is TokenType.EOF:
                    raise self._error("Expected '}' but found end of input", start)
                consequent.append(self._parse_statement())
            cases.append(SwitchCase(token.lineno, token.col_offset, test, tuple(consequent)))
        self._advance()
        return SwitchStatement(start.lineno, start.col_offset, discriminant, tuple(cases))

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------

    def _check_module_item(self, start: Token, top_level: bool) -> None:
        if not top_level or self._options.source_type != "module":
            raise self._error(
                f"'{start.value}' may only appear at the top level of a module",
                start,
                suggestion="Parse with source_type='module'",
            )

    def _parse_module_source(self) -> StringLiteral:
        token = self._current
        if token.type is not TokenType.STRING:
            raise self._error(f"Expected a module path string but found {self._describe(token)}")
        self._advance()
        return StringLiteral(token.lineno, token.col_offset, decode_string(token.value), token.value)

    def _parse_module_name(self) -> Identifier:
        """Imported/exported name; keywords such as ``default`` are allowed."""
        token = self._current
        if token.type is not TokenType.NAME:
            raise self._error(f"Expected a name but found {self._describe(token)}")
        self._advance()
        return Identifier(token.lineno, token.col_offset, token.value)

    def _parse_import(self, start: Token, top_level: bool) -> ImportDeclaration:
        self._check_module_item(start, top_level)
        self._advance()
        specifiers: list[Node] = []

        if self._current.type is TokenType.STRING:
            source = self._parse_module_source()
            self._consume_semicolon()
            return ImportDeclaration(start.lineno, start.col_offset, (), source)

        if self._is_name() and not self._is("from"):
            local = self._parse_binding_identifier()
            specifiers.append(ImportDefaultSpecifier(local.lineno, local.col_offset, local))
            if not self._eat(","):
                return self._finish_import(start, specifiers)
        elif self._is("from") and self._peek().value in (",", "from"):
            # `import from from "x"` binds a default named `from`
            local = self._parse_binding_identifier()
            specifiers.append(ImportDefaultSpecifier(local.lineno, local.col_offset, local))
            if not self._eat(","):
                return self._finish_import(start, specifiers)

        token = self._current
        if self._eat("*"):
            self._expect("as")
            local = self._parse_binding_identifier()
            specifiers.append(ImportNamespaceSpecifier(token.lineno, token.col_offset, local))
        elif self._eat("{"):
            while not self._is("}"):
                imported = self._parse_module_name()
                local = self._parse_binding_identifier() if self._eat("as") else Identifier(
                    imported.lineno, imported.col_offset, imported.name
                )
                specifiers.append(ImportSpecifier(imported.lineno, imported.col_offset, imported, local))
                if not self._is("}"):
                    self._expect(",")
            self._advance()
        else:
            raise self._error(f"Unexpected {self._describe(token)} in import declaration")
        return self._finish_import(start, specifiers)

    def _finish_import(self, start: Token, specifiers: list[Node]) -> ImportDeclaration:
        self._expect("from")
        source = self._parse_module_source()
        self._consume_semicolon()
        return ImportDeclaration(start.lineno, start.col_offset, tuple(specifiers), source)

    def _parse_export(self, start: Token, top_level: bool) -> Stmt:
        self._check_module_item(start, top_level)
        self._advance()
        token = self._current

        if self._eat("default"):
            follow = self._peek()
            if self._is("function"):
                declaration: Stmt | Expr = self._parse_function(
                    self._current, is_async=False, declaration=True
                )
            elif self._is("async") and follow.value == "function" and not follow.newline_before:
                async_token = self._advance()
                declaration = self._parse_function(async_token, is_async=True, declaration=True)
            elif self._is("class"):
                raise self._unsupported("Classes")
            else:
                declaration = self._parse_assignment()
                self._consume_semicolon()
            return ExportDefaultDeclaration(start.lineno, start.col_offset, declaration)

        if self._eat("*"):
            exported = self._parse_module_name() if self._eat("as") else None
            self._expect("from")
            source = self._parse_module_source()
            self._consume_semicolon()
            return ExportAllDeclaration(start.lineno, start.col_offset, source, exported)

        if self._eat("{"):
            specifiers: list[ExportSpecifier] = []
            while not self._is("}"):
                local = self._parse_module_name()
                exported_name = self._parse_module_name() if self._eat("as") else Identifier(
                    local.lineno, local.col_offset, local.name
                )
                specifiers.append(ExportSpecifier(local.lineno, local.col_offset, local, exported_name))
                if not self._is("}"):
                    self._expect(",")
            self._advance()
            source = self._parse_module_source() if self._eat("from") else None
            self._consume_semicolon()
            return ExportNamedDeclaration(start.lineno, start.col_offset, None, tuple(specifiers), source)

        if token.type is TokenType.NAME and token.value in ("var", "let", "const", "function", "async"):
            declaration_stmt = self._parse_statement()
            return ExportNamedDeclaration(start.lineno, start.col_offset, declaration_stmt)
        if self._is("class"):
            raise self._unsupported("Classes")
        raise self._error(f"Unexpected {self._describe(token)} after 'export'")


_KEYWORD_STATEMENTS: dict[str, Callable[[StatementParsingMixin], Stmt]] = {
    "if": StatementParsingMixin._parse_if,
    "for": StatementParsingMixin._parse_for,
    "while": StatementParsingMixin._parse_while,
    "do": StatementParsingMixin._parse_do_while,
    "return": StatementParsingMixin._parse_return,
    "break": StatementParsingMixin._parse_jump,
    "continue": StatementParsingMixin._parse_jump,
    "throw": StatementParsingMixin._parse_throw,
    "try": StatementParsingMixin._parse_try,
    "switch": StatementParsingMixin._parse_switch,
}
