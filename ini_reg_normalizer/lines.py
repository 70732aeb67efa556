from __future__ import annotations

from typing import List


def normalize_lines(text: str) -> List[str]:
    """
    Split text into trimmed lines.

    CRLF is accepted as-is (stripping removes the stray CR) and lone CR
    newlines are converted to LF first. Blank lines are kept as empty
    strings; the parser ignores them and the assembler re-derives spacing.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return [line.strip() for line in text.split("\n")]
