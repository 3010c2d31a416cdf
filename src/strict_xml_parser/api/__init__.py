"""Public parsing API.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file(), try_parse()
- Level 2: Configured parser - StrictXMLParser class
- Interop: lxml conversion - to_lxml(), from_lxml()
"""

from .adapters import AdapterError, LxmlAdapter, from_lxml, to_lxml
from .parser import StrictXMLParser, parse, parse_file, parse_string, try_parse

__all__ = [
    "AdapterError",
    "LxmlAdapter",
    "StrictXMLParser",
    "from_lxml",
    "parse",
    "parse_file",
    "parse_string",
    "to_lxml",
    "try_parse",
]
