"""
Exceptions raised by the GS1 label toolkit.

Malformed source rows are not exceptions: the record builder returns None
for them and the source skips the row.
"""

from __future__ import annotations


class Gs1LabelError(Exception):
    """Base class for all toolkit errors."""


class InvalidRecordError(Gs1LabelError, ValueError):
    """A label record is missing its GTIN or lot.

    Records produced by the record builder can never trigger this, so it
    signals an internal contract violation rather than bad input data.
    """


class UnsupportedSourceError(Gs1LabelError):
    """The input file extension maps to no known row provider."""


class UnreadableSourceError(Gs1LabelError):
    """The file has a supported extension but its content cannot be read."""
