"""Result objects and diagnostic types for strict XML parsing.

:func:`strict_xml_parser.try_parse` wraps the raising parse API into a
:class:`ParseResult` so callers that prefer to branch on a flag rather than
catch exceptions can do so.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .errors import XMLParseError

if TYPE_CHECKING:
    from strict_xml_parser.tree.node import Document


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    INFO = auto()       # Informational messages
    WARNING = auto()    # Warnings about potential issues
    ERROR = auto()      # The parse was rejected


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class ParseResult:
    """Outcome of a parse that reports failure instead of raising it."""

    document: Optional["Document"] = None
    error: Optional[XMLParseError] = None
    processing_time_ms: float = 0.0
    characters_processed: int = 0
    correlation_id: Optional[str] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate result consistency."""
        if self.document is not None and self.error is not None:
            raise ValueError("ParseResult cannot hold both a document and an error")

    @property
    def success(self) -> bool:
        """Whether the input was accepted."""
        return self.error is None and self.document is not None

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def unwrap(self) -> "Document":
        """Return the document, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        if self.document is None:
            raise ValueError("ParseResult holds neither a document nor an error")
        return self.document

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        result: Dict[str, Any] = {
            "success": self.success,
            "processing_time_ms": self.processing_time_ms,
            "characters_processed": self.characters_processed,
        }
        if self.document is not None:
            result["document"] = self.document.to_dict()
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result
