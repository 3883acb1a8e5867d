from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Gene:
    course_id: str
    instructor_id: str
    section_id: str
    room_id: str
    time_slot_id: str

    @property
    def has_instructor(self) -> bool:
        return bool(self.instructor_id)


@dataclass
class Chromosome:
    genes: list[Gene] = field(default_factory=list)
    fitness: float = 0.0

    def copy(self) -> "Chromosome":
        return Chromosome(genes=list(self.genes), fitness=self.fitness)

    def __len__(self) -> int:
        return len(self.genes)
