from .analyzer import (
    AnalysisResult, Analyzer, NameAnalyzer, TypeAnalyzer,
    analyze_names, analyze_types,
)
from .core import AnalyzerBase

__all__ = [
    "Analyzer", "AnalysisResult", "AnalyzerBase", "NameAnalyzer",
    "TypeAnalyzer", "analyze_names", "analyze_types",
]
