"""Name analysis of statements and expressions: scopes and identifier binding."""

from ..ast_nodes import (
    AssignExpr, AssignStmt, BinaryExpr, BoolLiteral, CallExpr, CallStmt,
    DotAccessExpr, Identifier, IfElseStmt, IfStmt, IntLiteral, PostDecStmt,
    PostIncStmt, ReadStmt, ReturnStmt, StringLiteral, UnaryExpr, WhileStmt,
    WriteStmt,
)
from ..errors import AnalyzerError, ErrorKind
from ..symbols import StructVarSymbol, SymbolTable


class NameStatementsMixin:

    def _names_stmt_list(self, stmt_list, table: SymbolTable):
        for stmt in stmt_list.stmts:
            self._names_stmt(stmt, table)

    def _names_block(self, decl_list, stmt_list, table: SymbolTable):
        table.enter_scope()
        self._names_decl_list(decl_list, table)
        self._names_stmt_list(stmt_list, table)
        table.exit_scope()

    def _names_stmt(self, stmt, table: SymbolTable):
        if isinstance(stmt, AssignStmt):
            self._names_expr(stmt.assign, table)
        elif isinstance(stmt, (PostIncStmt, PostDecStmt, ReadStmt, WriteStmt)):
            self._names_expr(stmt.exp, table)
        elif isinstance(stmt, IfStmt):
            self._names_expr(stmt.exp, table)
            self._names_block(stmt.decl_list, stmt.stmt_list, table)
        elif isinstance(stmt, IfElseStmt):
            self._names_expr(stmt.exp, table)
            self._names_block(stmt.then_decls, stmt.then_stmts, table)
            self._names_block(stmt.else_decls, stmt.else_stmts, table)
        elif isinstance(stmt, WhileStmt):
            self._names_expr(stmt.exp, table)
            self._names_block(stmt.decl_list, stmt.stmt_list, table)
        elif isinstance(stmt, CallStmt):
            self._names_expr(stmt.call, table)
        elif isinstance(stmt, ReturnStmt):
            if stmt.exp is not None:
                self._names_expr(stmt.exp, table)
        else:
            self._unexpected(stmt, "statement")


class NameExpressionsMixin:

    def _names_expr(self, expr, table: SymbolTable):
        if isinstance(expr, (IntLiteral, StringLiteral, BoolLiteral)):
            pass
        elif isinstance(expr, Identifier):
            self._names_identifier(expr, table)
        elif isinstance(expr, DotAccessExpr):
            self._names_dot_access(expr, table)
        elif isinstance(expr, AssignExpr):
            self._names_expr(expr.lhs, table)
            self._names_expr(expr.exp, table)
        elif isinstance(expr, CallExpr):
            self._names_identifier(expr.id, table)
            for arg in expr.args.exps:
                self._names_expr(arg, table)
        elif isinstance(expr, UnaryExpr):
            self._names_expr(expr.operand, table)
        elif isinstance(expr, BinaryExpr):
            self._names_expr(expr.left, table)
            self._names_expr(expr.right, table)
        else:
            self._unexpected(expr, "expression")

    def _names_identifier(self, ident, table: SymbolTable):
        sym = table.lookup_lexical(ident.name)
        if sym is None:
            self._error(ErrorKind.UNDECLARED, ident.line, ident.col)
        else:
            ident.sym = sym

    def _names_dot_access(self, expr, table: SymbolTable):
        if not isinstance(expr.loc, (Identifier, DotAccessExpr)):
            self._unexpected(expr.loc, "dot-access base")
        self._names_expr(expr.loc, table)
        loc_sym = expr.loc.sym
        if loc_sym is None:
            # base already reported as undeclared or as a bad access
            return
        if not isinstance(loc_sym, StructVarSymbol):
            # a chained base is blamed on its last field, not the root variable
            base = expr.loc.id if isinstance(expr.loc, DotAccessExpr) else expr.loc
            self._error_at(ErrorKind.DOT_ACCESS_OF_NON_STRUCT, base)
            return
        struct = table.resolve_struct(loc_sym.struct_name)
        if struct is None:
            raise AnalyzerError(f"struct '{loc_sym.struct_name}' is not in scope",
                                expr.id.line, expr.id.col)
        field_sym = struct.fields.lookup_local(expr.id.name)
        if field_sym is None:
            self._error(ErrorKind.INVALID_STRUCT_FIELD, expr.id.line, expr.id.col)
        else:
            expr.id.sym = field_sym
