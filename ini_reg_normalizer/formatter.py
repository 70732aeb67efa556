"""
Entry point of the formatting pipeline.

format_document(dialect, text) runs normalize -> parse (sorting each section
as it closes) -> assemble. It is pure: no I/O and nothing kept between calls.
"""

from __future__ import annotations

from .assemble import assemble_text
from .document import Document
from .exceptions import UnsupportedDialectError
from .lines import normalize_lines
from .parse import parse_document
from .rules import DIALECTS


def check_dialect(dialect: str) -> str:
    normalized = (dialect or "").strip().lower()
    if normalized not in DIALECTS:
        raise UnsupportedDialectError(dialect, DIALECTS)
    return normalized


def build_document(dialect: str, text: str) -> Document:
    return parse_document(normalize_lines(text), check_dialect(dialect))


def format_document(dialect: str, text: str) -> str:
    """Return the canonical form of an INI or REG document."""
    return assemble_text(build_document(dialect, text))
