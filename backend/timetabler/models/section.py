from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Section:
    id: str
    group_id: str
    name: str = ""


def group_sections(sections: list[Section]) -> dict[str, list[Section]]:
    """Bucket sections by group, keeping first-seen group and section order."""
    groups: dict[str, list[Section]] = {}
    for section in sections:
        groups.setdefault(section.group_id, []).append(section)
    return groups
