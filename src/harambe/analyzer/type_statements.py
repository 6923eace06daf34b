"""Type analysis of declarations and statements: returns, conditions, I/O."""

from __future__ import annotations

from ..ast_nodes import (
    AssignStmt, CallStmt, FnDecl, FormalDecl, IfElseStmt, IfStmt,
    PostDecStmt, PostIncStmt, ReadStmt, ReturnStmt, StructDecl, VarDecl,
    WhileStmt, WriteStmt,
)
from ..errors import ErrorKind
from ..static_types import (
    BOOL, ERROR, INT, SUCCESS, VOID, FunctionType, StaticType, StructType,
    StructVarType, VoidType, from_type_name, is_error,
)
from ..symbols import FunctionSymbol

_READ_BANNED = (
    (FunctionType, ErrorKind.READ_OF_FUNCTION),
    (StructType, ErrorKind.READ_OF_STRUCT_NAME),
    (StructVarType, ErrorKind.READ_OF_STRUCT_VARIABLE),
)

_WRITE_BANNED = (
    (FunctionType, ErrorKind.WRITE_OF_FUNCTION),
    (StructType, ErrorKind.WRITE_OF_STRUCT_NAME),
    (StructVarType, ErrorKind.WRITE_OF_STRUCT_VARIABLE),
    (VoidType, ErrorKind.WRITE_OF_VOID),
)


def _combine(results) -> StaticType:
    """ERROR if any check in ``results`` failed, else SUCCESS."""
    return ERROR if any(is_error(r) for r in results) else SUCCESS


class TypeStatementsMixin:

    def _type_decl_list(self, decl_list) -> StaticType:
        return _combine([self._type_decl(decl) for decl in decl_list.decls])

    def _type_decl(self, decl) -> StaticType:
        if isinstance(decl, FnDecl):
            return self._type_fn_decl(decl)
        elif isinstance(decl, (VarDecl, FormalDecl, StructDecl)):
            return SUCCESS
        self._unexpected(decl, "declaration")

    def _type_fn_decl(self, decl) -> StaticType:
        sym = decl.id.sym
        if isinstance(sym, FunctionSymbol):
            return_type = from_type_name(sym.return_type)
        else:
            return_type = from_type_name(decl.type.type_name)

        prev_return_type = self.current_return_type
        self.current_return_type = return_type
        result = self._type_stmt_list(decl.body.stmt_list)
        if return_type != VOID and not self._has_direct_return(decl.body.stmt_list):
            self._error(ErrorKind.MISSING_RETURN, decl.id.line, decl.id.col)
            result = ERROR
        self.current_return_type = prev_return_type
        return result

    def _has_direct_return(self, stmt_list) -> bool:
        """True if a return statement is an immediate child of the list.

        Returns nested in if/else or while bodies are not considered.
        """
        return any(isinstance(stmt, ReturnStmt) for stmt in stmt_list.stmts)

    def _type_stmt_list(self, stmt_list) -> StaticType:
        return _combine([self._type_stmt(stmt) for stmt in stmt_list.stmts])

    def _type_stmt(self, stmt) -> StaticType:
        if isinstance(stmt, AssignStmt):
            return self._as_stmt_result(self._type_expr(stmt.assign))
        elif isinstance(stmt, (PostIncStmt, PostDecStmt)):
            t = self._type_expr(stmt.exp)
            if is_error(t):
                return ERROR
            if t != INT:
                self._error_at(ErrorKind.ARITHMETIC, stmt.exp)
                return ERROR
            return SUCCESS
        elif isinstance(stmt, ReadStmt):
            return self._check_io_operand(stmt.exp, _READ_BANNED)
        elif isinstance(stmt, WriteStmt):
            return self._check_io_operand(stmt.exp, _WRITE_BANNED)
        elif isinstance(stmt, IfStmt):
            return _combine([self._check_condition(stmt.exp, "an if"),
                             self._type_stmt_list(stmt.stmt_list)])
        elif isinstance(stmt, IfElseStmt):
            return _combine([self._check_condition(stmt.exp, "an if"),
                             self._type_stmt_list(stmt.then_stmts),
                             self._type_stmt_list(stmt.else_stmts)])
        elif isinstance(stmt, WhileStmt):
            return _combine([self._check_condition(stmt.exp, "a while"),
                             self._type_stmt_list(stmt.stmt_list)])
        elif isinstance(stmt, CallStmt):
            return self._as_stmt_result(self._type_expr(stmt.call))
        elif isinstance(stmt, ReturnStmt):
            return self._type_return(stmt)
        self._unexpected(stmt, "statement")

    def _as_stmt_result(self, t: StaticType) -> StaticType:
        return ERROR if is_error(t) else SUCCESS

    def _check_condition(self, exp, construct: str) -> StaticType:
        t = self._type_expr(exp)
        if is_error(t):
            return ERROR
        if t != BOOL:
            self._error_at(ErrorKind.NON_BOOL_CONDITION, exp,
                           f"Non-bool expression used as {construct} condition")
            return ERROR
        return SUCCESS

    def _check_io_operand(self, exp, banned) -> StaticType:
        t = self._type_expr(exp)
        if is_error(t):
            return ERROR
        for cls, kind in banned:
            if isinstance(t, cls):
                self._error_at(kind, exp)
                return ERROR
        return SUCCESS

    def _type_return(self, stmt) -> StaticType:
        expected = self.current_return_type
        if stmt.exp is None:
            if expected != VOID:
                self._error(ErrorKind.MISSING_RETURN_VALUE, stmt.line, stmt.col)
                return ERROR
            return SUCCESS
        actual = self._type_expr(stmt.exp)
        if expected == VOID:
            self._error_at(ErrorKind.RETURN_VALUE_FROM_VOID, stmt.exp)
            return ERROR
        if is_error(actual):
            return ERROR
        if actual != expected:
            self._error_at(ErrorKind.BAD_RETURN_VALUE, stmt.exp)
            return ERROR
        return SUCCESS
