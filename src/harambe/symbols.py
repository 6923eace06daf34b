"""Symbols and the scoped symbol table used by name analysis.

A ``SymbolTable`` is a stack of scopes, innermost last. Struct declarations
keep their fields in a table of their own; struct variables refer back to
their layout by the struct's name, resolved through the enclosing table.
"""

from __future__ import annotations
from dataclasses import dataclass


class SymbolTableError(Exception):
    pass


class DuplicateSymbolError(SymbolTableError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' is already declared in this scope")


class EmptySymbolTableError(SymbolTableError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} on a symbol table with no open scope")


@dataclass(frozen=True)
class Symbol:
    type_name: str = ""

    def __str__(self) -> str:
        return self.type_name


@dataclass(frozen=True)
class VariableSymbol(Symbol):
    pass


@dataclass(frozen=True)
class FunctionSymbol(Symbol):
    param_types: tuple[str, ...] = ()
    return_type: str = "void"

    def __post_init__(self):
        object.__setattr__(self, "param_types", tuple(self.param_types))
        object.__setattr__(self, "type_name", str(self))

    def __str__(self) -> str:
        return f"{','.join(self.param_types)}->{self.return_type}"


@dataclass(frozen=True)
class StructDeclSymbol(Symbol):
    fields: SymbolTable = None

    @property
    def name(self) -> str:
        return self.type_name


@dataclass(frozen=True)
class StructVarSymbol(Symbol):
    @property
    def struct_name(self) -> str:
        return self.type_name


class SymbolTable:
    def __init__(self):
        self._scopes: list[dict[str, Symbol]] = []

    @classmethod
    def from_scope(cls, scope: dict[str, Symbol]) -> SymbolTable:
        table = cls()
        table._scopes.append(dict(scope))
        return table

    @property
    def depth(self) -> int:
        return len(self._scopes)

    def __len__(self) -> int:
        return len(self._scopes)

    def enter_scope(self):
        self._scopes.append({})

    def exit_scope(self) -> dict[str, Symbol]:
        if not self._scopes:
            raise EmptySymbolTableError("exit_scope")
        return self._scopes.pop()

    def declare(self, name: str, symbol: Symbol):
        if not name or symbol is None:
            raise ValueError("declare() needs a name and a symbol")
        if not self._scopes:
            raise EmptySymbolTableError("declare")
        scope = self._scopes[-1]
        if name in scope:
            raise DuplicateSymbolError(name)
        scope[name] = symbol

    def lookup_local(self, name: str) -> Symbol | None:
        if not self._scopes:
            raise EmptySymbolTableError("lookup_local")
        return self._scopes[-1].get(name)

    def lookup_lexical(self, name: str) -> Symbol | None:
        if not self._scopes:
            raise EmptySymbolTableError("lookup_lexical")
        for scope in reversed(self._scopes):
            if name in scope:
                return scope[name]
        return None

    def resolve_struct(self, name: str) -> StructDeclSymbol | None:
        """Find the struct declaration called ``name``, innermost first.

        Entries with that name that are not struct declarations are skipped,
        so a variable shadowing a struct's name does not hide its layout.
        """
        for scope in reversed(self._scopes):
            sym = scope.get(name)
            if isinstance(sym, StructDeclSymbol):
                return sym
        return None

    def dump(self) -> str:
        lines = ["=== Sym Table ==="]
        for scope in reversed(self._scopes):
            entries = ", ".join(f"{n}={s}" for n, s in scope.items())
            lines.append("{" + entries + "}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"SymbolTable(depth={self.depth})"
