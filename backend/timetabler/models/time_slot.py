from __future__ import annotations

from dataclasses import dataclass

LATE_SLOT_ORDER = 2


@dataclass(frozen=True)
class TimeSlot:
    id: str
    day: str
    slot_order: int
    start_time: str = ""
    end_time: str = ""

    @property
    def is_late(self) -> bool:
        return self.slot_order > LATE_SLOT_ORDER
