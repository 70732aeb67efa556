"""
Line classification and model building.

Each trimmed line is folded into the Document by `_step`, which takes the
current section and the pending-comments buffer and returns the next ones.
Pending comments are whatever comment (or opaque) lines have been seen since
the last entry or header; they attach to whichever of the two comes next.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Tuple

from .document import Document, Entry, Section
from .logging_config import get_logger
from .rules import COMMENT_PREFIX, KEY_VALUE_SEPARATOR, REG, REG_HEADER_PREFIXES
from .sort import sort_section

logger = get_logger("parse")

Pending = Tuple[str, ...]


def normalize_comment(line: str) -> str:
    text = line[len(COMMENT_PREFIX):].lstrip()
    return f"{COMMENT_PREFIX} {text}" if text else COMMENT_PREFIX


def is_section_header(line: str) -> bool:
    # both brackets required: a lone "[" falls through to entry/opaque handling
    return len(line) >= 2 and line.startswith("[") and line.endswith("]")


def is_registry_header(line: str) -> bool:
    return line.startswith(REG_HEADER_PREFIXES)


def split_entry(line: str) -> Optional[Entry]:
    """
    Split a key/value line, or return None when it has no `=` before any `;`.

    Not quote-aware: the first `;` always starts the inline comment.
    """
    key_value, *comment_parts = line.split(COMMENT_PREFIX)
    if KEY_VALUE_SEPARATOR not in key_value:
        return None

    key, value = key_value.split(KEY_VALUE_SEPARATOR, 1)
    fragments = [part.strip() for part in comment_parts if part.strip()]
    return Entry(
        key=key.strip(),
        value=value.strip(),
        inline_comment="; ".join(fragments) or None,
    )


def _step(document: Document, section: Section, line: str, pending: Pending) -> Tuple[Section, Pending]:
    if not line:
        return section, pending

    if line.startswith(COMMENT_PREFIX):
        document.comment_lines += 1
        return section, pending + (normalize_comment(line),)

    if is_section_header(line):
        sort_section(section)
        if document.get(line) is not None:
            logger.debug("Merging repeated section %s", line)
        next_section = document.open_section(line)
        next_section.header_comments.extend(pending)
        return next_section, ()

    if document.dialect == REG and is_registry_header(line):
        if document.registry_header is None:
            document.registry_header = line
            return section, pending
        logger.debug("Repeated registry header kept as opaque line: %s", line)

    entry = split_entry(line)
    if entry is None:
        logger.debug("Opaque line passed through: %r", line)
        document.opaque_lines += 1
        return section, pending + (line,)

    section.entries.append(replace(entry, leading_comments=pending))
    return section, ()


def parse_document(lines: Iterable[str], dialect: str) -> Document:
    """Build the section model from normalized lines. Every section comes back sorted."""
    document = Document(dialect=dialect)
    section = document.get("")
    pending: Pending = ()

    for line in lines:
        section, pending = _step(document, section, line, pending)

    sort_section(section)
    document.trailing_comments = list(pending)
    return document
