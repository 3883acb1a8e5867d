from __future__ import annotations

import random
from collections.abc import Iterable

from timetabler.models.availability import NEUTRAL_PREFERENCE, InstructorAvailability
from timetabler.models.time_slot import TimeSlot

# Draw weight per preference level; anything else counts as plain "available".
PREFERENCE_WEIGHTS = {3: 9, 2: 4}
DEFAULT_WEIGHT = 1


class AvailabilityIndex:
    """Sparse (instructor, time slot) lookup of availability records.

    Pairs without a record are treated as available with neutral preference.
    """

    def __init__(self, records: Iterable[InstructorAvailability] | None = None) -> None:
        self._records: dict[tuple[str, str], InstructorAvailability] = {}
        for record in records or ():
            self._records[(record.instructor_id, record.time_slot_id)] = record

    def __len__(self) -> int:
        return len(self._records)

    def get(self, instructor_id: str, time_slot_id: str) -> InstructorAvailability | None:
        return self._records.get((instructor_id, time_slot_id))

    def is_available(self, instructor_id: str, time_slot_id: str) -> bool:
        record = self.get(instructor_id, time_slot_id)
        return record.is_available if record is not None else True

    def preference_level(self, instructor_id: str, time_slot_id: str) -> int:
        record = self.get(instructor_id, time_slot_id)
        return record.preference_level if record is not None else NEUTRAL_PREFERENCE

    def slot_weight(self, instructor_id: str, time_slot_id: str) -> int:
        return PREFERENCE_WEIGHTS.get(self.preference_level(instructor_id, time_slot_id), DEFAULT_WEIGHT)

    def select_time_slot(self, instructor_id: str, time_slots: list[TimeSlot], rng: random.Random) -> TimeSlot:
        candidates: list[TimeSlot] = []
        weights: list[int] = []
        for slot in time_slots:
            if not self.is_available(instructor_id, slot.id):
                continue
            candidates.append(slot)
            weights.append(self.slot_weight(instructor_id, slot.id))
        if not candidates:
            return rng.choice(time_slots)
        return rng.choices(candidates, weights=weights, k=1)[0]
