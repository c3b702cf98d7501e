"""
Exceptions raised by the catalog layer.

Empty results (404 on a documented endpoint, empty body) are not errors
and never show up here.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog failures."""


class TransportError(CatalogError):
    """A source could not be reached or answered with an unexpected status."""

    def __init__(self, source: str, reason: str, status: Optional[int] = None):
        self.source = source
        self.reason = reason
        self.status = status
        detail = f"status {status}: {reason}" if status is not None else reason
        super().__init__(f"Failed to fetch from {source} ({detail})")


class RecordFormatError(CatalogError):
    """A single record in an otherwise valid payload is malformed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Malformed {source} record: {reason}")
