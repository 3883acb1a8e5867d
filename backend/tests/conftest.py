import pytest
from fastapi.testclient import TestClient

from timetabler.core.config import get_settings
from timetabler.main import app
from timetabler.models.course import Course
from timetabler.models.room import Room, RoomType
from timetabler.models.section import Section
from timetabler.models.time_slot import TimeSlot


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def app_settings():
    return get_settings()


@pytest.fixture()
def week_slots():
    # Two days, three periods each; period 3 counts as a late slot.
    return [
        TimeSlot(id=f"{day[:3].lower()}-{order}", day=day, slot_order=order)
        for day in ("Monday", "Tuesday")
        for order in (1, 2, 3)
    ]


@pytest.fixture()
def department_rooms():
    return [
        Room(id="hall-1", room_type=RoomType.lecture_hall, capacity=120),
        Room(id="hall-2", room_type=RoomType.lecture_hall, capacity=90),
        Room(id="lab-1", room_type=RoomType.lab, capacity=30),
        Room(id="sem-1", room_type=RoomType.seminar_room, capacity=25),
    ]


@pytest.fixture()
def two_group_sections():
    return [
        Section(id="A1", group_id="A"),
        Section(id="A2", group_id="A"),
        Section(id="B1", group_id="B"),
    ]


@pytest.fixture()
def mixed_courses():
    return [
        Course(id="algo", doctor_id="dr-1", ta_id="ta-1"),
        Course(id="calc", doctor_id="dr-2"),
        Course(id="lab", ta_id="ta-2"),
    ]
