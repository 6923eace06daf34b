"""Name analysis of declarations: variables, formals, functions, structs."""

from ..ast_nodes import (
    BoolTypeExpr, FnDecl, FormalDecl, IntTypeExpr, StructDecl,
    StructTypeExpr, VarDecl, VoidTypeExpr,
)
from ..errors import AnalyzerError, ErrorKind
from ..symbols import (
    DuplicateSymbolError, FunctionSymbol, StructDeclSymbol,
    StructVarSymbol, SymbolTable, VariableSymbol,
)


class DeclarationsMixin:

    def _names_decl_list(self, decl_list, table: SymbolTable):
        for decl in decl_list.decls:
            self._names_decl(decl, table)

    def _names_decl(self, decl, table: SymbolTable):
        if isinstance(decl, (VarDecl, FormalDecl)):
            sym = self._storage_symbol(decl.type, decl.id, table)
            if sym is not None:
                self._declare(table, decl.id, sym)
        elif isinstance(decl, FnDecl):
            self._require_global(decl, table)
            self._names_fn_decl(decl, table)
        elif isinstance(decl, StructDecl):
            self._require_global(decl, table)
            self._names_struct_decl(decl, table)
        else:
            self._unexpected(decl, "declaration")

    def _require_global(self, decl, table: SymbolTable):
        """Functions and structs may only be declared in the global scope."""
        if table.depth != self.global_depth:
            kind = "function" if isinstance(decl, FnDecl) else "struct"
            raise AnalyzerError(f"{kind} '{decl.id.name}' declared outside the global scope",
                                decl.id.line, decl.id.col)

    def _declare(self, table: SymbolTable, ident, sym):
        try:
            table.declare(ident.name, sym)
        except DuplicateSymbolError:
            self._error(ErrorKind.MULTIPLY_DECLARED, ident.line, ident.col)
            return
        ident.sym = sym

    def _storage_symbol(self, type_node, ident, table: SymbolTable):
        """Symbol for a variable, field or formal of the given type, or None
        if the type cannot be stored."""
        if isinstance(type_node, VoidTypeExpr):
            self._error(ErrorKind.BAD_VOID_TYPE, ident.line, ident.col)
            return None
        if isinstance(type_node, StructTypeExpr):
            struct = self._resolve_struct_type(type_node, table)
            if struct is None:
                return None
            return StructVarSymbol(struct.name)
        if isinstance(type_node, (IntTypeExpr, BoolTypeExpr)):
            return VariableSymbol(type_node.type_name)
        self._unexpected(type_node, "type")

    def _resolve_struct_type(self, type_node, table: SymbolTable):
        struct = table.resolve_struct(type_node.id.name)
        if struct is None:
            self._error(ErrorKind.UNDEFINED_STRUCT_TYPE,
                        type_node.id.line, type_node.id.col)
            return None
        type_node.id.sym = struct
        return struct

    def _names_fn_decl(self, decl, table: SymbolTable):
        if isinstance(decl.type, StructTypeExpr):
            self._resolve_struct_type(decl.type, table)
        sym = FunctionSymbol(param_types=decl.formals.type_names,
                             return_type=decl.type.type_name)
        self._declare(table, decl.id, sym)

        # formals and body locals share one scope
        table.enter_scope()
        for formal in decl.formals.formals:
            self._names_decl(formal, table)
        self._names_decl_list(decl.body.decl_list, table)
        self._names_stmt_list(decl.body.stmt_list, table)
        table.exit_scope()

    def _names_struct_decl(self, decl, table: SymbolTable):
        table.enter_scope()
        self._names_decl_list(decl.decl_list, table)
        fields = table.exit_scope()
        sym = StructDeclSymbol(decl.id.name, fields=SymbolTable.from_scope(fields))
        self._declare(table, decl.id, sym)
