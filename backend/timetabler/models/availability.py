from __future__ import annotations

from dataclasses import dataclass

NEUTRAL_PREFERENCE = 1


@dataclass(frozen=True)
class InstructorAvailability:
    instructor_id: str
    time_slot_id: str
    is_available: bool = True
    # 1 = available, 2 = preferred, 3 = highly preferred
    preference_level: int = NEUTRAL_PREFERENCE
