"""Strict XML Parser.

A small, strict parser for a well-formed subset of XML 1.0. Input is accepted
only if it satisfies every well-formedness rule the parser knows; the first
violation is reported with its kind and its line and column.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file(), try_parse()
- Level 2: Configured parser - StrictXMLParser class
"""

__version__ = "0.1.0"
__author__ = "Strict XML Parser Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Advanced configuration
from .api import StrictXMLParser, parse, parse_file, parse_string, try_parse

# Errors and configuration for advanced usage
from .shared.config import ParserConfig
from .shared.errors import ErrorKind, XMLParseError
from .shared.result import ParseResult

# Core result objects for all API levels
from .tree.node import Document, Node

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions (progressive disclosure entry point)
    "parse",
    "parse_string",
    "parse_file",
    "try_parse",

    # Level 2: Advanced parser class
    "StrictXMLParser",

    # Result objects and data structures
    "Document",
    "Node",
    "ParseResult",

    # Errors and configuration
    "ErrorKind",
    "XMLParseError",
    "ParserConfig",
]
