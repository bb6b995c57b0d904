"""Errors raised while converting a coverage profile.

Every failure aborts the whole conversion; nothing is retried internally.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for all conversion failures."""


class ParseError(ConversionError):
    """The coverage profile is malformed (bad mode line or record line)."""


class ResolutionError(ConversionError):
    """No package or module metadata is available for a covered file."""


class SourceReadError(ConversionError):
    """A source file could not be read to recover method boundaries."""


class OutputError(ConversionError):
    """The output sink rejected a write."""
