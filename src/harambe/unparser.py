"""Unparser for the harambe language.

Renders an analyzed AST back to source text. Expressions are fully
parenthesized and every identifier use is followed by its resolved symbol's
signature, e.g. ``add(int,int->int)(x(int), 1)``. String literals hold their
source lexeme, quotes included, and are printed verbatim.
"""

from __future__ import annotations

from .ast_nodes import (
    AssignExpr, AssignStmt, BinaryExpr, BoolLiteral, BoolTypeExpr, CallExpr,
    CallStmt, DotAccessExpr, FnDecl, FormalDecl, Identifier, IfElseStmt,
    IfStmt, IntLiteral, IntTypeExpr, PostDecStmt, PostIncStmt, Program,
    ReadStmt, ReturnStmt, StringLiteral, StructDecl, StructTypeExpr,
    UnaryExpr, VarDecl, VoidTypeExpr, WhileStmt, WriteStmt,
)
from .errors import AnalyzerError


class Unparser:
    def __init__(self, annotate: bool = True):
        self.annotate = annotate
        self.output: list[str] = []
        self.indent_level = 0

    def unparse(self, program: Program) -> str:
        self.output = []
        self.indent_level = 0
        self._emit_decl_list(program.decl_list)
        return "\n".join(self.output) + "\n"

    # ---- Output helpers ----

    def _emit(self, line: str = ""):
        if line:
            self.output.append("    " * self.indent_level + line)
        else:
            self.output.append("")

    def _emit_body(self, decl_list, stmt_list):
        self.indent_level += 1
        self._emit_decl_list(decl_list)
        for stmt in stmt_list.stmts:
            self._emit_stmt(stmt)
        self.indent_level -= 1

    # ---- Declarations ----

    def _emit_decl_list(self, decl_list):
        for decl in decl_list.decls:
            self._emit_decl(decl)

    def _emit_decl(self, decl):
        if isinstance(decl, VarDecl):
            self._emit(f"{self._type_to_str(decl.type)} {decl.id.name};")
        elif isinstance(decl, FnDecl):
            formals = ", ".join(self._formal_to_str(f) for f in decl.formals.formals)
            self._emit(f"{self._type_to_str(decl.type)} {decl.id.name}({formals}) {{")
            self._emit_body(decl.body.decl_list, decl.body.stmt_list)
            self._emit("}")
            self._emit()
        elif isinstance(decl, StructDecl):
            self._emit(f"struct {decl.id.name}{{")
            self.indent_level += 1
            self._emit_decl_list(decl.decl_list)
            self.indent_level -= 1
            self._emit("};")
            self._emit()
        else:
            raise AnalyzerError(f"cannot unparse declaration {type(decl).__name__}")

    def _formal_to_str(self, formal: FormalDecl) -> str:
        return f"{self._type_to_str(formal.type)} {formal.id.name}"

    def _type_to_str(self, type_node) -> str:
        if isinstance(type_node, (IntTypeExpr, BoolTypeExpr, VoidTypeExpr)):
            return type_node.type_name
        if isinstance(type_node, StructTypeExpr):
            return f"struct {type_node.id.name}"
        raise AnalyzerError(f"cannot unparse type {type(type_node).__name__}")

    # ---- Statements ----

    def _emit_stmt(self, stmt):
        if isinstance(stmt, AssignStmt):
            self._emit(f"{self._assign_to_str(stmt.assign)};")
        elif isinstance(stmt, PostIncStmt):
            self._emit(f"{self._expr_to_str(stmt.exp)}++;")
        elif isinstance(stmt, PostDecStmt):
            self._emit(f"{self._expr_to_str(stmt.exp)}--;")
        elif isinstance(stmt, ReadStmt):
            self._emit(f"cin >> {self._expr_to_str(stmt.exp)};")
        elif isinstance(stmt, WriteStmt):
            self._emit(f"cout << {self._expr_to_str(stmt.exp)};")
        elif isinstance(stmt, IfStmt):
            self._emit(f"if ({self._expr_to_str(stmt.exp)}) {{")
            self._emit_body(stmt.decl_list, stmt.stmt_list)
            self._emit("}")
        elif isinstance(stmt, IfElseStmt):
            self._emit(f"if ({self._expr_to_str(stmt.exp)}) {{")
            self._emit_body(stmt.then_decls, stmt.then_stmts)
            self._emit("}")
            self._emit("else {")
            self._emit_body(stmt.else_decls, stmt.else_stmts)
            self._emit("}")
        elif isinstance(stmt, WhileStmt):
            self._emit(f"while ({self._expr_to_str(stmt.exp)}) {{")
            self._emit_body(stmt.decl_list, stmt.stmt_list)
            self._emit("}")
        elif isinstance(stmt, CallStmt):
            self._emit(f"{self._expr_to_str(stmt.call)};")
        elif isinstance(stmt, ReturnStmt):
            if stmt.exp is None:
                self._emit("return;")
            else:
                self._emit(f"return {self._expr_to_str(stmt.exp)};")
        else:
            raise AnalyzerError(f"cannot unparse statement {type(stmt).__name__}")

    # ---- Expressions ----

    def _assign_to_str(self, expr: AssignExpr) -> str:
        return f"{self._expr_to_str(expr.lhs)} = {self._expr_to_str(expr.exp)}"

    def _ident_to_str(self, ident: Identifier) -> str:
        if self.annotate and ident.sym is not None:
            return f"{ident.name}({ident.sym})"
        return ident.name

    def _expr_to_str(self, expr) -> str:
        if isinstance(expr, IntLiteral):
            return str(expr.value)
        if isinstance(expr, StringLiteral):
            return expr.value
        if isinstance(expr, BoolLiteral):
            return "true" if expr.value else "false"
        if isinstance(expr, Identifier):
            return self._ident_to_str(expr)
        if isinstance(expr, DotAccessExpr):
            return f"({self._expr_to_str(expr.loc)}).{self._ident_to_str(expr.id)}"
        if isinstance(expr, AssignExpr):
            return f"({self._assign_to_str(expr)})"
        if isinstance(expr, CallExpr):
            args = ", ".join(self._expr_to_str(a) for a in expr.args.exps)
            return f"{self._ident_to_str(expr.id)}({args})"
        if isinstance(expr, UnaryExpr):
            return f"({expr.op}{self._expr_to_str(expr.operand)})"
        if isinstance(expr, BinaryExpr):
            return f"({self._expr_to_str(expr.left)} {expr.op} {self._expr_to_str(expr.right)})"
        raise AnalyzerError(f"cannot unparse expression {type(expr).__name__}")


def unparse(program: Program, annotate: bool = True) -> str:
    return Unparser(annotate=annotate).unparse(program)
