"""Core parser API with progressive disclosure for strict XML parsing.

Level 1 is a set of module-level functions (:func:`parse`, :func:`parse_file`,
:func:`try_parse`); level 2 is :class:`StrictXMLParser`, a reusable parser
carrying a :class:`~strict_xml_parser.shared.config.ParserConfig`.

The raising functions let :class:`XMLParseError` propagate to the caller.
:func:`try_parse` reports the same failure through a :class:`ParseResult`.
"""

import time
import uuid
from pathlib import Path
from typing import Optional, Union

from strict_xml_parser.shared import (
    DiagnosticSeverity,
    ParseResult,
    ParserConfig,
    XMLParseError,
    get_logger,
)
from strict_xml_parser.tree import Document, XMLTreeBuilder

# Type definitions for input data
InputType = Union[str, bytes]
PathType = Union[str, Path]

# Constants for API operations
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


def _as_text(input_data: InputType) -> str:
    if isinstance(input_data, bytes):
        return input_data.decode("utf-8")
    if isinstance(input_data, str):
        return input_data
    raise TypeError(
        f"XML input must be str or bytes, not {type(input_data).__name__}"
    )


def _preview(text: str) -> str:
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


def parse(input_data: InputType, correlation_id: Optional[str] = None) -> Document:
    """Parse XML text into a document tree.

    Args:
        input_data: Complete XML text; bytes are decoded as UTF-8
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Document with the declaration data and the root element

    Raises:
        XMLParseError: when the input is not accepted

    Examples:
        >>> doc = parse('<?xml version="1.0"?><a><b>x</b></a>')
        >>> doc.root.children[0].value
        'x'
    """
    logger = get_logger(__name__, correlation_id, "parse")
    text = _as_text(input_data)

    logger.debug(
        "Starting parse operation",
        extra={"content_length": len(text), "preview": _preview(text)}
    )

    try:
        document = XMLTreeBuilder(correlation_id=correlation_id).build(text)
    except XMLParseError as e:
        logger.parse_rejected(e)
        raise

    logger.info(
        "Parse completed",
        extra={"element_count": len(document.iter_elements())}
    )
    return document


def parse_string(xml_string: str, correlation_id: Optional[str] = None) -> Document:
    """Parse XML from a string; same as :func:`parse`."""
    return parse(xml_string, correlation_id)


def parse_file(
    file_path: PathType,
    encoding: Optional[str] = None,
    correlation_id: Optional[str] = None
) -> Document:
    """Read a whole file and parse it.

    Args:
        file_path: Path to the XML file
        encoding: Text encoding of the file (UTF-8 when not given)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Parsed Document

    Raises:
        OSError: when the file cannot be read
        UnicodeDecodeError: when the file is not valid in ``encoding``
        XMLParseError: when the content is not accepted
    """
    logger = get_logger(__name__, correlation_id, "parse_file")
    path = Path(file_path)
    text = path.read_text(encoding=encoding or "utf-8")

    logger.debug(
        "File read",
        extra={"file": str(path), "content_length": len(text)}
    )

    return parse(text, correlation_id)


def try_parse(
    input_data: InputType,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse XML text, reporting rejection through the result instead of raising.

    Args:
        input_data: Complete XML text; bytes are decoded as UTF-8
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ParseResult holding either the document or the error

    Examples:
        >>> result = try_parse("")
        >>> result.success
        False
        >>> result.error.kind.value
        'NoXmlDeclaration'
    """
    start_time = time.perf_counter()
    text = _as_text(input_data)

    try:
        document = parse(text, correlation_id)
    except XMLParseError as e:
        result = ParseResult(
            error=e,
            processing_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
            characters_processed=len(text),
            correlation_id=correlation_id,
        )
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            e.message,
            "xml_tree_builder",
            position={"offset": e.offset, "line": e.line, "column": e.column},
            details={"kind": e.kind.value},
        )
        return result

    return ParseResult(
        document=document,
        processing_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
        characters_processed=len(text),
        correlation_id=correlation_id,
    )


class StrictXMLParser:
    """Reusable XML parser with configuration and usage statistics.

    Examples:
        >>> parser = StrictXMLParser()
        >>> parser.parse('<?xml version="1.0"?><root/>').root.name
        'root'
        >>> parser.parse_count
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize parser.

        Args:
            config: Parser configuration (defaults to ``ParserConfig()``)
            correlation_id: Fixed correlation ID for every parse; when omitted
                and correlation tracking is enabled, each parse gets a new one
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "strict_xml_parser")

        self._parse_count = 0
        self._error_count = 0
        self._total_processing_time_ms = 0.0

    @property
    def parse_count(self) -> int:
        """Number of parse attempts made with this instance."""
        return self._parse_count

    @property
    def error_count(self) -> int:
        """Number of rejected inputs."""
        return self._error_count

    @property
    def average_processing_time_ms(self) -> float:
        if self._parse_count == 0:
            return 0.0
        return self._total_processing_time_ms / self._parse_count

    def reset_statistics(self) -> None:
        """Reset usage statistics."""
        self._parse_count = 0
        self._error_count = 0
        self._total_processing_time_ms = 0.0

    def _next_correlation_id(self) -> Optional[str]:
        if self.correlation_id is not None:
            return self.correlation_id
        if self.config.global_.enable_correlation_tracking:
            return uuid.uuid4().hex[:12]
        return None

    def try_parse(self, input_data: InputType) -> ParseResult:
        """Parse and report the outcome as a :class:`ParseResult`."""
        result = try_parse(input_data, self._next_correlation_id())

        self._parse_count += 1
        self._total_processing_time_ms += result.processing_time_ms
        if not result.success:
            self._error_count += 1

        if self.config.api.include_timing_info:
            self.logger.with_correlation(result.correlation_id).info(
                "Parse timing",
                extra={
                    "success": result.success,
                    "processing_time_ms": result.processing_time_ms,
                    "characters_per_second": result.characters_per_second,
                }
            )
        return result

    def parse(self, input_data: InputType) -> Document:
        """Parse XML text, raising :class:`XMLParseError` on rejection."""
        return self.try_parse(input_data).unwrap()

    def parse_file(self, file_path: PathType) -> Document:
        """Read a file with the configured encoding and parse it."""
        text = Path(file_path).read_text(encoding=self.config.api.file_encoding)
        return self.parse(text)
