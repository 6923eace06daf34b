"""Type utilities: symbol-to-type mapping and operand classification."""

from __future__ import annotations

from ..errors import AnalyzerError
from ..static_types import (
    ERROR, FunctionType, StaticType, StructType, StructVarType, VoidType,
    from_type_name,
)
from ..symbols import (
    FunctionSymbol, StructDeclSymbol, StructVarSymbol, VariableSymbol,
)


class TypeUtilsMixin:

    def _symbol_type(self, sym) -> StaticType:
        """The static type of a use of ``sym``; ERROR if the use is unresolved."""
        if sym is None:
            return ERROR
        if isinstance(sym, FunctionSymbol):
            params = tuple(from_type_name(p) for p in sym.param_types)
            return FunctionType(params, from_type_name(sym.return_type))
        if isinstance(sym, StructDeclSymbol):
            return StructType(sym.name)
        if isinstance(sym, StructVarSymbol):
            return StructVarType(sym.struct_name)
        if isinstance(sym, VariableSymbol):
            return from_type_name(sym.type_name)
        raise AnalyzerError(f"unknown symbol kind {type(sym).__name__}")

    def _describe_banned(self, t: StaticType) -> str | None:
        """Message for an equality operand that cannot be compared, if any."""
        if isinstance(t, VoidType):
            return "Equality operator applied to void functions"
        if isinstance(t, FunctionType):
            return "Equality operator applied to functions"
        if isinstance(t, StructType):
            return "Equality operator applied to struct names"
        return None
