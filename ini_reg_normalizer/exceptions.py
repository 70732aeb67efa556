"""
Exceptions raised by the formatter.

The formatting pipeline itself never fails on malformed input; the only
error it surfaces is being asked for a dialect it does not know.
"""

from typing import Iterable


class FormatterError(Exception):
    """Base exception for all formatter errors."""

    pass


class UnsupportedDialectError(FormatterError, ValueError):
    """Requested dialect is not one of the supported file kinds."""

    def __init__(self, dialect: str, supported: Iterable[str]):
        self.dialect = dialect
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported dialect '{dialect}' (expected one of: {', '.join(self.supported)})"
        )
