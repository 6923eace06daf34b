"""Analyzer assembly: the two passes and the pipeline that sequences them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..ast_nodes import Program
from ..errors import Diagnostic, ErrorSink
from ..static_types import ERROR, StaticType
from ..symbols import SymbolTable
from .core import AnalyzerBase
from .declarations import DeclarationsMixin
from .names import NameExpressionsMixin, NameStatementsMixin
from .type_expressions import TypeExpressionsMixin
from .type_statements import TypeStatementsMixin
from .type_utils import TypeUtilsMixin

logger = logging.getLogger("harambe.analyzer")


class NameAnalyzer(
    NameExpressionsMixin,
    NameStatementsMixin,
    DeclarationsMixin,
    AnalyzerBase,
):
    """Binds identifiers to symbols, scope by scope."""

    def __init__(self, sink: ErrorSink | None = None):
        super().__init__(sink)
        self.global_depth = 1

    def analyze(self, program: Program, table: SymbolTable | None = None):
        table = table if table is not None else SymbolTable()
        table.enter_scope()
        self.global_depth = table.depth
        self._names_decl_list(program.decl_list, table)
        table.exit_scope()


class TypeAnalyzer(
    TypeUtilsMixin,
    TypeExpressionsMixin,
    TypeStatementsMixin,
    AnalyzerBase,
):
    """Computes and checks static types over a fully name-resolved tree."""

    def __init__(self, sink: ErrorSink | None = None):
        super().__init__(sink)
        self.current_return_type: StaticType | None = None

    def analyze(self, program: Program) -> StaticType:
        """SUCCESS if the whole program type-checks, else ERROR."""
        reported = self.sink.count()
        result = self._type_decl_list(program.decl_list)
        # calls with bad arguments keep their return type, so also count reports
        if self.sink.count() > reported:
            return ERROR
        return result


def analyze_names(program: Program, sink: ErrorSink):
    NameAnalyzer(sink).analyze(program)


def analyze_types(program: Program, sink: ErrorSink) -> StaticType:
    return TypeAnalyzer(sink).analyze(program)


@dataclass
class AnalysisResult:
    program: Program
    diagnostics: list[Diagnostic] = field(default_factory=list)
    names_ok: bool = False
    types_ok: bool = False
    result_type: StaticType | None = None

    @property
    def ok(self) -> bool:
        return self.names_ok and self.types_ok

    @property
    def errors(self) -> list[str]:
        return [str(d) for d in self.diagnostics]


class Analyzer:
    """Runs name analysis, then type analysis if names resolved cleanly."""

    def __init__(self, sink: ErrorSink | None = None):
        self.sink = sink if sink is not None else ErrorSink()

    def analyze(self, program: Program) -> AnalysisResult:
        first = len(self.sink.diagnostics)
        result = AnalysisResult(program=program)
        self.sink.reset()

        logger.info("Attempting to analyze names...")
        analyze_names(program, self.sink)
        if self.sink.has_failed():
            logger.info("Name Analysis Unsuccessful!")
            result.diagnostics = self.sink.diagnostics[first:]
            return result
        logger.info("Name Analysis Successful!")
        result.names_ok = True
        self.sink.reset()

        logger.info("Attempting to analyze types...")
        result.result_type = analyze_types(program, self.sink)
        result.diagnostics = self.sink.diagnostics[first:]
        if self.sink.has_failed():
            logger.info("Type Analysis Unsuccessful!")
            return result
        logger.info("Type Analysis Successful!")
        result.types_ok = True
        self.sink.reset()
        return result
