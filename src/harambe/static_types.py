"""Static type values computed by type analysis."""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True)
class StaticType:
    def __str__(self) -> str:
        return self.describe()

    def describe(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class IntType(StaticType):
    def describe(self) -> str:
        return "int"


@dataclass(frozen=True)
class BoolType(StaticType):
    def describe(self) -> str:
        return "bool"


@dataclass(frozen=True)
class VoidType(StaticType):
    def describe(self) -> str:
        return "void"


@dataclass(frozen=True)
class StringType(StaticType):
    def describe(self) -> str:
        return "String"


@dataclass(frozen=True)
class StructType(StaticType):
    """The type of a bare struct name (a layout, not a value)."""
    name: str = ""

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class StructVarType(StaticType):
    """The type of a variable whose value has a struct layout."""
    name: str = ""

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class FunctionType(StaticType):
    params: tuple[StaticType, ...] = field(default_factory=tuple)
    ret: StaticType = None

    def describe(self) -> str:
        params = ",".join(str(p) for p in self.params)
        return f"{params}->{self.ret}"


@dataclass(frozen=True)
class ErrorType(StaticType):
    def describe(self) -> str:
        return "error"


@dataclass(frozen=True)
class SuccessType(StaticType):
    def describe(self) -> str:
        return "success"


INT = IntType()
BOOL = BoolType()
VOID = VoidType()
STRING = StringType()
ERROR = ErrorType()
SUCCESS = SuccessType()


def is_error(t: StaticType) -> bool:
    return isinstance(t, ErrorType)


def compatible(a: StaticType, b: StaticType) -> bool:
    """Structural equality, except that the error type matches anything."""
    if is_error(a) or is_error(b):
        return True
    return a == b


def from_type_name(name: str) -> StaticType:
    """Map a declared type name to the type of a value of that type."""
    if name == "int":
        return INT
    if name == "bool":
        return BOOL
    if name == "void":
        return VOID
    return StructVarType(name)
