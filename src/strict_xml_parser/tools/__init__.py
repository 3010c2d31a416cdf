"""Developer tools module for Strict XML Parser.

This module provides profiling of parse operations.
"""

from .profiling import ParseProfile, ParseProfiler, ProfileReport

__all__ = [
    "ParseProfile",
    "ParseProfiler",
    "ProfileReport",
]
