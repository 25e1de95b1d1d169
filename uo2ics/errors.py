"""
Parse errors raised while reading a class schedule export.
"""
from __future__ import annotations


class ParseError(ValueError):
    """Base class: the HTML does not look like the expected export."""


class StructuralParseError(ParseError):
    """A marker element, grid or cell is missing from the document."""


class ValueParseError(ParseError):
    """A cell's text does not match the format expected for its column."""
