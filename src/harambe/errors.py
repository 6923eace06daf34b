"""Diagnostics and the error sink shared by the analysis passes."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional, TextIO

logger = logging.getLogger("harambe.errors")


class ErrorKind(enum.Enum):
    # name analysis
    MULTIPLY_DECLARED = "multiply-declared"
    UNDECLARED = "undeclared"
    BAD_VOID_TYPE = "bad-void-type"
    UNDEFINED_STRUCT_TYPE = "undefined-struct-type"
    DOT_ACCESS_OF_NON_STRUCT = "dot-access-of-non-struct"
    INVALID_STRUCT_FIELD = "invalid-struct-field"
    # operators
    ARITHMETIC = "arithmetic"
    LOGICAL = "logical"
    RELATIONAL = "relational"
    EQUALITY_MISMATCH = "equality-mismatch"
    EQUALITY_OPERAND_BANNED = "equality-operand-banned"
    # assignment
    INVALID_ASSIGNMENT_TARGET = "invalid-assignment-target"
    ASSIGNMENT_MISMATCH = "assignment-mismatch"
    # calls
    CALL_OF_NON_FUNCTION = "call-of-non-function"
    ARITY_MISMATCH = "arity-mismatch"
    ARGUMENT_MISMATCH = "argument-mismatch"
    # returns
    RETURN_VALUE_FROM_VOID = "return-value-from-void"
    MISSING_RETURN_VALUE = "missing-return-value"
    MISSING_RETURN = "missing-return"
    BAD_RETURN_VALUE = "bad-return-value"
    # conditions
    NON_BOOL_CONDITION = "non-bool-condition"
    # input / output
    READ_OF_FUNCTION = "read-of-function"
    READ_OF_STRUCT_NAME = "read-of-struct-name"
    READ_OF_STRUCT_VARIABLE = "read-of-struct-variable"
    WRITE_OF_FUNCTION = "write-of-function"
    WRITE_OF_STRUCT_NAME = "write-of-struct-name"
    WRITE_OF_STRUCT_VARIABLE = "write-of-struct-variable"
    WRITE_OF_VOID = "write-of-void"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorKind.MULTIPLY_DECLARED: "Multiply declared identifier",
    ErrorKind.UNDECLARED: "Undeclared identifier",
    ErrorKind.BAD_VOID_TYPE: "Non-function declared void",
    ErrorKind.UNDEFINED_STRUCT_TYPE: "Invalid name of struct type",
    ErrorKind.DOT_ACCESS_OF_NON_STRUCT: "Dot-access of non-struct type",
    ErrorKind.INVALID_STRUCT_FIELD: "Invalid struct field name",
    ErrorKind.ARITHMETIC: "Arithmetic operator applied to non-numeric operand",
    ErrorKind.LOGICAL: "Logical operator applied to non-bool operand",
    ErrorKind.RELATIONAL: "Relational operator applied to non-numeric operand",
    ErrorKind.EQUALITY_MISMATCH: "Type mismatch",
    ErrorKind.EQUALITY_OPERAND_BANNED: "Equality operator applied to an invalid operand",
    ErrorKind.INVALID_ASSIGNMENT_TARGET: "Invalid assignment target",
    ErrorKind.ASSIGNMENT_MISMATCH: "Type mismatch",
    ErrorKind.CALL_OF_NON_FUNCTION: "Attempt to call a non-function",
    ErrorKind.ARITY_MISMATCH: "Function call with wrong number of args",
    ErrorKind.ARGUMENT_MISMATCH: "Type of actual does not match type of formal",
    ErrorKind.RETURN_VALUE_FROM_VOID: "Return with a value in a void function",
    ErrorKind.MISSING_RETURN_VALUE: "Missing return value",
    ErrorKind.MISSING_RETURN: "Missing return statement",
    ErrorKind.BAD_RETURN_VALUE: "Bad return value",
    ErrorKind.NON_BOOL_CONDITION: "Non-bool expression used as a condition",
    ErrorKind.READ_OF_FUNCTION: "Attempt to read a function",
    ErrorKind.READ_OF_STRUCT_NAME: "Attempt to read a struct name",
    ErrorKind.READ_OF_STRUCT_VARIABLE: "Attempt to read a struct variable",
    ErrorKind.WRITE_OF_FUNCTION: "Attempt to write a function",
    ErrorKind.WRITE_OF_STRUCT_NAME: "Attempt to write a struct name",
    ErrorKind.WRITE_OF_STRUCT_VARIABLE: "Attempt to write a struct variable",
    ErrorKind.WRITE_OF_VOID: "Attempt to write void",
}


class AnalyzerError(Exception):
    """A broken analyzer invariant. Never a problem in the analyzed program."""

    def __init__(self, message: str, line: int = 0, col: int = 0):
        self.line = line
        self.col = col
        super().__init__(f"{message} at {line}:{col}")


@dataclass
class Diagnostic:
    line: int
    col: int
    message: str
    kind: Optional[ErrorKind] = None

    def __str__(self) -> str:
        return f"{self.line}:{self.col} ***ERROR*** {self.message}"

    @property
    def key(self) -> tuple:
        return (self.kind, self.line, self.col)


@dataclass
class ErrorSink:
    """Collects diagnostics for one compilation.

    ``reset()`` clears the failed flag between phases but keeps the log, so a
    later phase's failure is judged only by what it reported itself.
    """
    stream: Optional[TextIO] = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    failed: bool = False

    def report(self, line: int, col: int, message: str,
               kind: Optional[ErrorKind] = None) -> Diagnostic:
        diag = Diagnostic(line, col, message, kind)
        self.diagnostics.append(diag)
        self.failed = True
        logger.error("%s", diag)
        if self.stream is not None:
            print(diag, file=self.stream)
        return diag

    def report_kind(self, kind: ErrorKind, line: int, col: int,
                    message: Optional[str] = None) -> Diagnostic:
        return self.report(line, col, message or kind.message, kind)

    def has_failed(self) -> bool:
        return self.failed

    def reset(self):
        self.failed = False

    def count(self, kind: Optional[ErrorKind] = None) -> int:
        if kind is None:
            return len(self.diagnostics)
        return sum(1 for d in self.diagnostics if d.kind is kind)

    def kinds(self) -> list[ErrorKind]:
        return [d.kind for d in self.diagnostics]
