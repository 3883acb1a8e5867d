from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RoomType(str, Enum):
    lecture_hall = "lecture_hall"
    lab = "lab"
    seminar_room = "seminar_room"


LECTURE_ROOM_TYPES = frozenset({RoomType.lecture_hall})
SECTION_ROOM_TYPES = frozenset({RoomType.lab, RoomType.seminar_room})


@dataclass(frozen=True)
class Room:
    id: str
    room_type: RoomType
    capacity: int = 0
    name: str = ""


def rooms_of_type(rooms: list[Room], room_types: frozenset[RoomType]) -> list[Room]:
    matching = [room for room in rooms if room.room_type in room_types]
    return matching or list(rooms)
