"""Diagnostic computation for harambe documents.

Runs the analysis pipeline (name analysis -> type analysis) on an already
parsed program and converts the reported diagnostics into LSP Diagnostic
objects.
"""

from dataclasses import dataclass, field
from typing import Optional

from lsprotocol import types as lsp

from src.harambe.analyzer import AnalysisResult, Analyzer
from src.harambe.ast_nodes import Program
from src.harambe.errors import Diagnostic, ErrorSink


@dataclass
class AnalysisReport:
    """Result of analyzing one document."""

    uri: str
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)
    result: Optional[AnalysisResult] = None


def _make_diagnostic(
    line: int,
    col: int,
    message: str,
    severity: lsp.DiagnosticSeverity = lsp.DiagnosticSeverity.Error,
    source: str = "harambe",
    code: Optional[str] = None,
) -> lsp.Diagnostic:
    """Create an LSP Diagnostic.

    harambe uses 1-based line/col; LSP uses 0-based.
    """
    line_0 = max(0, line - 1)
    col_0 = max(0, col - 1)
    return lsp.Diagnostic(
        range=lsp.Range(
            start=lsp.Position(line=line_0, character=col_0),
            end=lsp.Position(line=line_0, character=col_0 + 1),
        ),
        message=message,
        severity=severity,
        source=source,
        code=code,
    )


def to_lsp_diagnostic(diag: Diagnostic) -> lsp.Diagnostic:
    code = diag.kind.value if diag.kind is not None else None
    return _make_diagnostic(diag.line, diag.col, diag.message, code=code)


def compute_diagnostics(uri: str, program: Program) -> AnalysisReport:
    """Run the analysis pipeline and return diagnostics."""
    report = AnalysisReport(uri=uri)
    result = Analyzer(ErrorSink()).analyze(program)
    report.result = result
    report.diagnostics = [to_lsp_diagnostic(d) for d in result.diagnostics]
    return report
