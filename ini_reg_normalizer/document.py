from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .rules import INI


@dataclass(frozen=True)
class Entry:
    key: str
    value: str
    inline_comment: Optional[str] = None
    leading_comments: Tuple[str, ...] = ()


@dataclass
class Section:
    header: str
    header_comments: List[str] = field(default_factory=list)
    entries: List[Entry] = field(default_factory=list)

    @property
    def is_global(self) -> bool:
        return self.header == ""


@dataclass
class Document:
    """
    Ordered section table for one formatting call.

    Sections are kept in first-seen order in a plain list, with a header ->
    position index alongside it. Re-opening a header returns the existing
    section so duplicate headers merge.
    """

    dialect: str = INI
    registry_header: Optional[str] = None
    trailing_comments: List[str] = field(default_factory=list)
    merged_sections: int = 0
    comment_lines: int = 0
    opaque_lines: int = 0
    _sections: List[Section] = field(default_factory=list)
    _index: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.open_section("")

    def open_section(self, header: str) -> Section:
        position = self._index.get(header)
        if position is not None:
            if header:
                self.merged_sections += 1
            return self._sections[position]
        section = Section(header=header)
        self._index[header] = len(self._sections)
        self._sections.append(section)
        return section

    def get(self, header: str) -> Optional[Section]:
        position = self._index.get(header)
        return None if position is None else self._sections[position]

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)
