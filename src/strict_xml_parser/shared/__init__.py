"""Shared utilities for strict XML parsing.

This module provides the error types, configuration objects, result types and
logging helpers used across the scanning, tree and API layers.
"""

from .errors import (
    ErrorKind,
    ScanError,
    SourceLocation,
    XMLParseError,
    locate,
    make_error,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseResult,
)
from .config import (
    ApiConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    OutputConfig,
    ParserConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "ErrorKind",
    "ScanError",
    "SourceLocation",
    "XMLParseError",
    "locate",
    "make_error",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ParseResult",
    "ApiConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "OutputConfig",
    "ParserConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
