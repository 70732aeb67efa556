from __future__ import annotations

from typing import List

from .document import Document, Entry
from .parse import is_section_header
from .rules import ENTRY_SEPARATOR, INLINE_COMMENT_SEPARATOR


def render_entry(entry: Entry, dialect: str) -> str:
    line = f"{entry.key}{ENTRY_SEPARATOR[dialect]}{entry.value}".strip()
    if entry.inline_comment:
        line += f"{INLINE_COMMENT_SEPARATOR}{entry.inline_comment}"
    if is_section_header(line):
        # an entry such as "[K=1]" must not read back as a section header
        line += INLINE_COMMENT_SEPARATOR.rstrip()
    return line


def assemble_lines(document: Document) -> List[str]:
    """
    Serialize the model to output lines, blank separators included.

    Blank lines are derived here only: one after the registry header, one
    after every section holding entries, one after trailing comments.
    Trailing blanks are trimmed at the end.
    """
    result: List[str] = []

    if document.registry_header:
        result.extend([document.registry_header, ""])

    for section in document:
        result.extend(section.header_comments)
        if not section.is_global:
            result.append(section.header)
        for entry in section.entries:
            result.extend(entry.leading_comments)
            result.append(render_entry(entry, document.dialect))
        if section.entries:
            result.append("")

    if document.trailing_comments:
        result.extend(document.trailing_comments)
        result.append("")

    while result and result[-1] == "":
        result.pop()
    return result


def assemble_text(document: Document) -> str:
    lines = assemble_lines(document)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
