"""Analyzer core: shared state and diagnostic reporting for both passes."""

from __future__ import annotations

from ..ast_nodes import position_of
from ..errors import AnalyzerError, ErrorKind, ErrorSink


class AnalyzerBase:
    def __init__(self, sink: ErrorSink | None = None):
        self.sink: ErrorSink = sink if sink is not None else ErrorSink()

    def _error(self, kind: ErrorKind, line: int = 0, col: int = 0,
               message: str | None = None):
        self.sink.report_kind(kind, line, col, message)

    def _error_at(self, kind: ErrorKind, node, message: str | None = None):
        line, col = position_of(node)
        self._error(kind, line, col, message)

    def _unexpected(self, node, what: str):
        line, col = position_of(node)
        raise AnalyzerError(f"unexpected {what} {type(node).__name__}", line, col)
