"""Command-line interface module for Strict XML Parser.

This module provides the ``strict-xml`` tool for parsing documents and
printing their outline, inner text or JSON rendering.
"""

from .main import main

__all__ = ["main"]
