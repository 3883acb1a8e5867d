from collections import Counter, defaultdict
from typing import Dict, List, Tuple

from timetabler.models.chromosome import Chromosome, Gene
from timetabler.models.conflict import ConflictInfo, ConflictKind
from timetabler.schemas.conflict import ConflictDetail, ConflictReport

_KIND_ORDER = {ConflictKind.instructor: 0, ConflictKind.room: 1, ConflictKind.section: 2}


def detect_conflicts(chromosome: Chromosome) -> List[ConflictInfo]:
    """Every pairwise double-booking among genes that share a time slot.

    Pairs are reported in (i, j) order with i < j; a single pair can raise an
    instructor, a room and a section conflict at the same time.
    """
    genes = chromosome.genes

    # Only genes in the same slot can clash, so bucket by slot first.
    indices_by_slot: Dict[str, List[int]] = defaultdict(list)
    for index, gene in enumerate(genes):
        indices_by_slot[gene.time_slot_id].append(index)

    found: List[Tuple[int, int, ConflictKind]] = []
    for slot_indices in indices_by_slot.values():
        n = len(slot_indices)
        for a in range(n):
            i = slot_indices[a]
            g1 = genes[i]
            for b in range(a + 1, n):
                j = slot_indices[b]
                g2 = genes[j]
                if g1.instructor_id and g1.instructor_id == g2.instructor_id:
                    found.append((i, j, ConflictKind.instructor))
                if g1.room_id == g2.room_id:
                    found.append((i, j, ConflictKind.room))
                if g1.section_id == g2.section_id:
                    found.append((i, j, ConflictKind.section))

    found.sort(key=lambda item: (item[0], item[1], _KIND_ORDER[item[2]]))
    return [ConflictInfo(kind=kind, genes=(genes[i], genes[j]), gene_indices=(i, j)) for i, j, kind in found]


def count_conflicts(chromosome: Chromosome) -> int:
    return len(detect_conflicts(chromosome))


class ConflictService:
    def __init__(self, genes: List[Gene]):
        self.chromosome = Chromosome(genes=list(genes))

    def detect(self) -> List[ConflictInfo]:
        return detect_conflicts(self.chromosome)

    def build_report(self, conflicts: List[ConflictInfo] | None = None) -> ConflictReport:
        if conflicts is None:
            conflicts = self.detect()
        details: List[ConflictDetail] = []
        counts: Counter = Counter()
        for conflict in conflicts:
            g1, g2 = conflict.genes
            i, j = conflict.gene_indices
            counts[conflict.kind.value] += 1
            details.append(
                ConflictDetail(
                    id=f"{conflict.kind.value}-{i}-{j}",
                    conflict_type=f"{conflict.kind.value}_conflict",
                    description=conflict.description,
                    severity="hard",
                    time_slot_id=g1.time_slot_id,
                    affected_genes=[i, j],
                    course_ids=[g1.course_id, g2.course_id],
                )
            )
        return ConflictReport(conflicts=details, total=len(details), counts=dict(counts))
