"""Parsing errors raised while decoding topic listing pages.

Every error here is fatal: the parser never retries and never returns a
partial result once one of them is raised.
"""

from __future__ import annotations

from typing import Any


class ParseError(Exception):
    """Base class for topic list parsing failures."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class StructureNotFound(ParseError):
    """A mandatory structural path yielded no match."""


class UnexpectedStructure(ParseError):
    """A mandatory sub-element was missing, of the wrong kind or malformed."""


class TimeFormatError(ParseError):
    """A reply-time text node did not have the bulleted annotation shape."""


class UnsupportedPageKind(ParseError):
    """The caller asked for a page kind the parser cannot dispatch."""
