"""Type analysis of expressions.

Every method returns the expression's static type. Once an operand is the
error type, the construct built on it yields the error type without another
diagnostic.
"""

from __future__ import annotations

from ..ast_nodes import (
    ARITHMETIC_OPS, EQUALITY_OPS, LOGICAL_OPS, RELATIONAL_OPS,
    AssignExpr, BinaryExpr, BoolLiteral, CallExpr, DotAccessExpr,
    Identifier, IntLiteral, StringLiteral, UnaryExpr,
)
from ..errors import ErrorKind
from ..static_types import (
    BOOL, ERROR, INT, STRING, FunctionType, StaticType, StructType, compatible,
    is_error,
)


class TypeExpressionsMixin:

    def _type_expr(self, expr) -> StaticType:
        if isinstance(expr, IntLiteral):
            return INT
        elif isinstance(expr, StringLiteral):
            return STRING
        elif isinstance(expr, BoolLiteral):
            return BOOL
        elif isinstance(expr, (Identifier, DotAccessExpr)):
            return self._symbol_type(expr.sym)
        elif isinstance(expr, AssignExpr):
            return self._type_assign(expr)
        elif isinstance(expr, CallExpr):
            return self._type_call(expr)
        elif isinstance(expr, UnaryExpr):
            return self._type_unary(expr)
        elif isinstance(expr, BinaryExpr):
            return self._type_binary(expr)
        self._unexpected(expr, "expression")

    def _type_unary(self, expr) -> StaticType:
        operand_type = self._type_expr(expr.operand)
        if is_error(operand_type):
            return ERROR
        if expr.op == "-":
            required, kind = INT, ErrorKind.ARITHMETIC
        elif expr.op == "!":
            required, kind = BOOL, ErrorKind.LOGICAL
        else:
            self._unexpected(expr, f"unary operator '{expr.op}' in")
        if operand_type != required:
            self._error_at(kind, expr.operand)
            return ERROR
        return required

    def _type_binary(self, expr) -> StaticType:
        if expr.op in ARITHMETIC_OPS:
            return self._check_operands(expr, INT, ErrorKind.ARITHMETIC, INT)
        if expr.op in LOGICAL_OPS:
            return self._check_operands(expr, BOOL, ErrorKind.LOGICAL, BOOL)
        if expr.op in RELATIONAL_OPS:
            return self._check_operands(expr, INT, ErrorKind.RELATIONAL, BOOL)
        if expr.op in EQUALITY_OPS:
            return self._type_equality(expr)
        self._unexpected(expr, f"binary operator '{expr.op}' in")

    def _check_operands(self, expr, required: StaticType, kind: ErrorKind,
                        result: StaticType) -> StaticType:
        """Both operands must be ``required``; each offender is reported once."""
        ok = True
        for operand in (expr.left, expr.right):
            t = self._type_expr(operand)
            if is_error(t):
                ok = False
            elif t != required:
                self._error_at(kind, operand)
                ok = False
        return result if ok else ERROR

    def _type_equality(self, expr) -> StaticType:
        left = self._type_expr(expr.left)
        right = self._type_expr(expr.right)
        if is_error(left) or is_error(right):
            return ERROR
        for operand, t in ((expr.left, left), (expr.right, right)):
            banned = self._describe_banned(t)
            if banned:
                self._error_at(ErrorKind.EQUALITY_OPERAND_BANNED, operand, banned)
                return ERROR
        if left != right:
            self._error_at(ErrorKind.EQUALITY_MISMATCH, expr.left)
            return ERROR
        return BOOL

    def _type_assign(self, expr) -> StaticType:
        target = self._type_expr(expr.lhs)
        value = self._type_expr(expr.exp)
        if is_error(target) or is_error(value):
            return ERROR
        if isinstance(target, FunctionType):
            self._error_at(ErrorKind.INVALID_ASSIGNMENT_TARGET, expr.lhs,
                           "Function assignment")
            return ERROR
        if isinstance(target, StructType):
            self._error_at(ErrorKind.INVALID_ASSIGNMENT_TARGET, expr.lhs,
                           "Struct name assignment")
            return ERROR
        if target != value:
            self._error_at(ErrorKind.ASSIGNMENT_MISMATCH, expr.lhs)
            return ERROR
        return target

    def _type_call(self, expr) -> StaticType:
        callee = self._symbol_type(expr.id.sym)
        arg_types = [self._type_expr(arg) for arg in expr.args.exps]
        if is_error(callee):
            return ERROR
        if not isinstance(callee, FunctionType):
            self._error(ErrorKind.CALL_OF_NON_FUNCTION, expr.id.line, expr.id.col)
            return ERROR
        if len(arg_types) != len(callee.params):
            self._error(ErrorKind.ARITY_MISMATCH, expr.id.line, expr.id.col)
            return callee.ret
        for arg, actual, formal in zip(expr.args.exps, arg_types, callee.params):
            if not compatible(actual, formal):
                self._error_at(ErrorKind.ARGUMENT_MISMATCH, arg)
        return callee.ret
