"""AST node definitions for the harambe language.

The parser builds these once; name analysis writes ``Identifier.sym`` and
nothing else, type analysis only reads.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union

ARITHMETIC_OPS = ("+", "-", "*", "/")
LOGICAL_OPS = ("&&", "||")
EQUALITY_OPS = ("==", "!=")
RELATIONAL_OPS = ("<", ">", "<=", ">=")


@dataclass
class Program:
    decl_list: DeclList = None

@dataclass
class DeclList:
    decls: list[decl] = field(default_factory=list)

@dataclass
class FormalsList:
    formals: list[FormalDecl] = field(default_factory=list)

    @property
    def type_names(self) -> list[str]:
        return [f.type.type_name for f in self.formals]

@dataclass
class FnBody:
    decl_list: DeclList = field(default_factory=lambda: DeclList())
    stmt_list: StmtList = field(default_factory=lambda: StmtList())

@dataclass
class StmtList:
    stmts: list[stmt] = field(default_factory=list)

@dataclass
class ExpList:
    exps: list[expr] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.exps)

# ---- Declarations ----

@dataclass
class VarDecl:
    type: type_expr = None
    id: Identifier = None

@dataclass
class FnDecl:
    type: type_expr = None
    id: Identifier = None
    formals: FormalsList = field(default_factory=lambda: FormalsList())
    body: FnBody = field(default_factory=lambda: FnBody())

@dataclass
class FormalDecl:
    type: type_expr = None
    id: Identifier = None

@dataclass
class StructDecl:
    id: Identifier = None
    decl_list: DeclList = field(default_factory=lambda: DeclList())

# ---- Type nodes ----

@dataclass
class IntTypeExpr:
    type_name = "int"

@dataclass
class BoolTypeExpr:
    type_name = "bool"

@dataclass
class VoidTypeExpr:
    type_name = "void"

@dataclass
class StructTypeExpr:
    id: Identifier = None

    @property
    def type_name(self) -> str:
        return self.id.name

# ---- Statements ----

@dataclass
class AssignStmt:
    assign: AssignExpr = None

@dataclass
class PostIncStmt:
    exp: expr = None

@dataclass
class PostDecStmt:
    exp: expr = None

@dataclass
class ReadStmt:
    exp: expr = None

@dataclass
class WriteStmt:
    exp: expr = None

@dataclass
class IfStmt:
    exp: expr = None
    decl_list: DeclList = field(default_factory=lambda: DeclList())
    stmt_list: StmtList = field(default_factory=lambda: StmtList())

@dataclass
class IfElseStmt:
    exp: expr = None
    then_decls: DeclList = field(default_factory=lambda: DeclList())
    then_stmts: StmtList = field(default_factory=lambda: StmtList())
    else_decls: DeclList = field(default_factory=lambda: DeclList())
    else_stmts: StmtList = field(default_factory=lambda: StmtList())

@dataclass
class WhileStmt:
    exp: expr = None
    decl_list: DeclList = field(default_factory=lambda: DeclList())
    stmt_list: StmtList = field(default_factory=lambda: StmtList())

@dataclass
class CallStmt:
    call: CallExpr = None

@dataclass
class ReturnStmt:
    exp: Optional[expr] = None
    line: int = 0
    col: int = 0

# ---- Expressions ----

@dataclass
class IntLiteral:
    value: int = 0
    line: int = 0
    col: int = 0

@dataclass
class StringLiteral:
    value: str = ""
    line: int = 0
    col: int = 0

@dataclass
class BoolLiteral:
    value: bool = False
    line: int = 0
    col: int = 0

@dataclass
class Identifier:
    name: str = ""
    line: int = 0
    col: int = 0
    # set by name analysis; None means unresolved
    sym: object = field(default=None, compare=False, repr=False)

@dataclass
class DotAccessExpr:
    loc: expr = None
    id: Identifier = None

    @property
    def sym(self):
        return self.id.sym

@dataclass
class AssignExpr:
    lhs: expr = None
    exp: expr = None

@dataclass
class CallExpr:
    id: Identifier = None
    args: ExpList = field(default_factory=lambda: ExpList())

@dataclass
class UnaryExpr:
    op: str = ""
    operand: expr = None

@dataclass
class BinaryExpr:
    op: str = ""
    left: expr = None
    right: expr = None


decl = Union[VarDecl, FnDecl, FormalDecl, StructDecl]
type_expr = Union[IntTypeExpr, BoolTypeExpr, VoidTypeExpr, StructTypeExpr]
stmt = Union[AssignStmt, PostIncStmt, PostDecStmt, ReadStmt, WriteStmt,
             IfStmt, IfElseStmt, WhileStmt, CallStmt, ReturnStmt]
expr = Union[IntLiteral, StringLiteral, BoolLiteral, Identifier,
             DotAccessExpr, AssignExpr, CallExpr, UnaryExpr, BinaryExpr]


def position_of(node) -> tuple[int, int]:
    """Line/column used when reporting a diagnostic against an expression."""
    if isinstance(node, (Identifier, IntLiteral, StringLiteral, BoolLiteral)):
        return node.line, node.col
    if isinstance(node, DotAccessExpr):
        return position_of(node.loc)
    if isinstance(node, AssignExpr):
        return position_of(node.lhs)
    if isinstance(node, CallExpr):
        return node.id.line, node.id.col
    if isinstance(node, UnaryExpr):
        return position_of(node.operand)
    if isinstance(node, BinaryExpr):
        return position_of(node.left)
    return 0, 0
