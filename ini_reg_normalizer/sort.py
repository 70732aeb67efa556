from __future__ import annotations

import locale

from .document import Entry, Section


def entry_sort_key(entry: Entry) -> str:
    # compare on the key only; repeated keys keep their input order.
    # LC_COLLATE is never set here, so under the default C locale this is
    # code-point order ("Zeta" before "alpha") and identical on every host.
    return locale.strxfrm(entry.key)


def sort_section(section: Section) -> None:
    """Sort a section's entries in place. `list.sort` is stable."""
    section.entries.sort(key=entry_sort_key)
