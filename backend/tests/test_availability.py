import random
from collections import Counter

from timetabler.models.availability import InstructorAvailability
from timetabler.models.time_slot import TimeSlot
from timetabler.services.availability import AvailabilityIndex


def test_missing_record_defaults_to_available_and_neutral():
    index = AvailabilityIndex()
    assert index.get("dr-1", "mon-1") is None
    assert index.is_available("dr-1", "mon-1") is True
    assert index.preference_level("dr-1", "mon-1") == 1
    assert index.slot_weight("dr-1", "mon-1") == 1


def test_slot_weights_follow_preference_level():
    index = AvailabilityIndex(
        [
            InstructorAvailability("dr-1", "s3", preference_level=3),
            InstructorAvailability("dr-1", "s2", preference_level=2),
            InstructorAvailability("dr-1", "s1", preference_level=1),
        ]
    )
    assert index.slot_weight("dr-1", "s3") == 9
    assert index.slot_weight("dr-1", "s2") == 4
    assert index.slot_weight("dr-1", "s1") == 1


def test_later_record_replaces_earlier_one():
    index = AvailabilityIndex(
        [
            InstructorAvailability("dr-1", "s1", is_available=True, preference_level=3),
            InstructorAvailability("dr-1", "s1", is_available=False),
        ]
    )
    assert len(index) == 1
    assert index.is_available("dr-1", "s1") is False


def test_weighted_selection_favours_preferred_slots():
    slots = [TimeSlot(id="liked", day="Monday", slot_order=1), TimeSlot(id="plain", day="Monday", slot_order=2)]
    index = AvailabilityIndex([InstructorAvailability("dr-1", "liked", preference_level=3)])
    rng = random.Random(5)

    picks = Counter(index.select_time_slot("dr-1", slots, rng).id for _ in range(2000))

    # 9:1 odds in favour of the highly preferred slot.
    assert picks["liked"] > 1500
    assert picks["plain"] > 0


def test_selection_skips_unavailable_slots():
    slots = [TimeSlot(id=f"s{order}", day="Monday", slot_order=order) for order in range(1, 5)]
    index = AvailabilityIndex(
        [InstructorAvailability("dr-1", f"s{order}", is_available=False) for order in (1, 2, 4)]
    )
    rng = random.Random(1)

    assert {index.select_time_slot("dr-1", slots, rng).id for _ in range(50)} == {"s3"}
    # Other instructors are unaffected.
    assert len({index.select_time_slot("dr-2", slots, rng).id for _ in range(200)}) == 4
