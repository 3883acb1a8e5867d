from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from timetabler.models.chromosome import Gene


class ConflictKind(str, Enum):
    instructor = "instructor"
    room = "room"
    section = "section"


CONFLICT_DESCRIPTIONS = {
    ConflictKind.instructor: "Instructor teaching two lectures at the same time",
    ConflictKind.room: "Two lectures scheduled in the same room at the same time",
    ConflictKind.section: "Section has two lectures at the same time",
}


@dataclass(frozen=True)
class ConflictInfo:
    kind: ConflictKind
    genes: tuple[Gene, Gene]
    gene_indices: tuple[int, int] = (-1, -1)

    @property
    def description(self) -> str:
        return CONFLICT_DESCRIPTIONS[self.kind]
