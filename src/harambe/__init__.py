"""harambe semantic-analysis front end."""

from .analyzer import Analyzer as Analyzer, analyze_names as analyze_names
from .analyzer import analyze_types as analyze_types
from .errors import ErrorSink as ErrorSink, AnalyzerError as AnalyzerError
from .unparser import Unparser as Unparser
