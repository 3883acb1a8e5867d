from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from timetabler.models.chromosome import Chromosome
from timetabler.models.time_slot import TimeSlot
from timetabler.services.availability import AvailabilityIndex
from timetabler.services.conflict_service import count_conflicts

# Callers treat a fitness of 900 or more as an acceptable timetable, so these
# coefficients must not drift.
BASE_SCORE = 1000
CONFLICT_PENALTY = 100
UNAVAILABLE_PENALTY = 50
PREFERENCE_BONUS = {3: 15, 2: 8}
LATE_SLOT_PENALTY = 2
DAY_DISTRIBUTION_BONUS = 10
DAY_BALANCE_WEIGHT = 2
ACCEPTABLE_FITNESS = 900.0


@dataclass(frozen=True)
class FitnessBreakdown:
    conflicts: int
    base: float
    availability: float
    late_penalty: float
    distribution_bonus: float
    balance_penalty: float

    @property
    def total(self) -> float:
        raw = self.base + self.availability - self.late_penalty + self.distribution_bonus - self.balance_penalty
        return max(0.0, raw)


class FitnessEvaluator:
    """Scores chromosomes; higher is better.

    One hard signal (pairwise conflicts) dominates four soft ones: instructor
    availability/preference, late slots, how many days are used and how evenly
    genes spread across those days.
    """

    def __init__(self, time_slots: list[TimeSlot], availability: AvailabilityIndex) -> None:
        self.slots_by_id = {slot.id: slot for slot in time_slots}
        self.availability = availability

    def breakdown(self, chromosome: Chromosome) -> FitnessBreakdown:
        conflicts = count_conflicts(chromosome)

        availability_score = 0
        late_genes = 0
        per_day: Counter[str] = Counter()
        for gene in chromosome.genes:
            if gene.has_instructor:
                record = self.availability.get(gene.instructor_id, gene.time_slot_id)
                if record is not None:
                    if not record.is_available:
                        availability_score -= UNAVAILABLE_PENALTY
                    else:
                        availability_score += PREFERENCE_BONUS.get(record.preference_level, 0)

            slot = self.slots_by_id.get(gene.time_slot_id)
            if slot is None:
                continue
            if slot.is_late:
                late_genes += 1
            per_day[slot.day] += 1

        balance = 0.0
        if per_day:
            avg = sum(per_day.values()) / len(per_day)
            balance = sum(abs(count - avg) for count in per_day.values())

        return FitnessBreakdown(
            conflicts=conflicts,
            base=float(BASE_SCORE - CONFLICT_PENALTY * conflicts),
            availability=float(availability_score),
            late_penalty=float(late_genes * LATE_SLOT_PENALTY),
            distribution_bonus=float(sum(1 for day in per_day if day) * DAY_DISTRIBUTION_BONUS),
            balance_penalty=balance * DAY_BALANCE_WEIGHT,
        )

    def evaluate(self, chromosome: Chromosome) -> float:
        return self.breakdown(chromosome).total

    __call__ = evaluate
