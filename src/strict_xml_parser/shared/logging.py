"""Structured logging utilities for strict XML parsing.

Every record emitted through :class:`CorrelationLogger` carries the component
that produced it and, when given, the correlation ID of the parse request, as
``component`` and ``correlation_id`` record attributes.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, TextIO

if TYPE_CHECKING:
    from .errors import XMLParseError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(component)s] %(message)s"


class ContextDefaultsFilter(logging.Filter):
    """Fill in ``component``/``correlation_id`` for records from other loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name
        if not hasattr(record, "correlation_id"):
            record.correlation_id = None
        return True


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def with_correlation(self, correlation_id: Optional[str]) -> "CorrelationLogger":
        """Same logger and component, tagged with another correlation ID."""
        return CorrelationLogger(self.logger.name, correlation_id, self.component)

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def _log(
        self,
        level: int,
        message: str,
        extra: Optional[Dict[str, Any]],
        exc_info: bool = False
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        record_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            record_extra.update(extra)
        self.logger.log(level, message, extra=record_extra, exc_info=exc_info)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, extra)

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True
    ) -> None:
        """Log error message, with the active exception's traceback by default."""
        self._log(logging.ERROR, message, extra, exc_info)

    def parse_rejected(self, error: "XMLParseError") -> None:
        """Log a rejected input with its error kind and location."""
        self._log(
            logging.WARNING,
            "Parse rejected",
            {
                "kind": error.kind.value,
                "offset": error.offset,
                "line": error.line,
                "column": error.column,
            },
        )


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(level: str = "WARNING", stream: Optional[TextIO] = None) -> None:
    """Configure root logging for command-line use.

    Has no effect when the root logger already has handlers.

    Args:
        level: Name of a standard logging level (DEBUG, INFO, ...)
        stream: Output stream (stderr when not given)
    """
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(ContextDefaultsFilter())
    logging.basicConfig(level=getattr(logging, level), handlers=[handler])
