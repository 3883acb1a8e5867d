from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from timetabler.models.availability import NEUTRAL_PREFERENCE, InstructorAvailability
from timetabler.models.chromosome import Gene
from timetabler.models.course import Course
from timetabler.models.room import Room, RoomType
from timetabler.models.section import Section
from timetabler.models.time_slot import TimeSlot

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


class CoursePayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    code: str = Field(default="", max_length=20)
    name: str = Field(default="", max_length=200)
    departmentId: str = Field(default="", max_length=36)
    doctorId: str | None = Field(default=None, max_length=36)
    taId: str | None = Field(default=None, max_length=36)

    def to_domain(self) -> Course:
        return Course(
            id=self.id,
            department_id=self.departmentId,
            doctor_id=self.doctorId or None,
            ta_id=self.taId or None,
            code=self.code,
            name=self.name,
        )


class SectionPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str = Field(default="", max_length=100)
    groupId: str = Field(min_length=1, max_length=36)

    def to_domain(self) -> Section:
        return Section(id=self.id, group_id=self.groupId, name=self.name)


class RoomPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str = Field(default="", max_length=100)
    capacity: int = Field(default=0, ge=0)
    roomType: Literal["lecture_hall", "lab", "seminar_room"]

    def to_domain(self) -> Room:
        return Room(id=self.id, room_type=RoomType(self.roomType), capacity=self.capacity, name=self.name)


class TimeSlotPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    day: str = Field(min_length=1, max_length=20)
    startTime: str = ""
    endTime: str = ""
    slotOrder: int = Field(ge=0)

    @model_validator(mode="after")
    def validate_time_order(self) -> "TimeSlotPayload":
        if self.startTime and self.endTime:
            if parse_time_to_minutes(self.endTime) <= parse_time_to_minutes(self.startTime):
                raise ValueError("endTime must be after startTime")
        return self

    def to_domain(self) -> TimeSlot:
        return TimeSlot(
            id=self.id,
            day=self.day,
            slot_order=self.slotOrder,
            start_time=self.startTime,
            end_time=self.endTime,
        )


class InstructorAvailabilityPayload(BaseModel):
    instructorId: str = Field(min_length=1, max_length=36)
    timeSlotId: str = Field(min_length=1, max_length=36)
    isAvailable: bool = True
    preferenceLevel: int | None = Field(default=NEUTRAL_PREFERENCE, ge=0, le=3)

    @field_validator("preferenceLevel")
    @classmethod
    def default_preference(cls, value: int | None) -> int:
        return value or NEUTRAL_PREFERENCE

    def to_domain(self) -> InstructorAvailability:
        return InstructorAvailability(
            instructor_id=self.instructorId,
            time_slot_id=self.timeSlotId,
            is_available=self.isAvailable,
            preference_level=self.preferenceLevel or NEUTRAL_PREFERENCE,
        )


class GenePayload(BaseModel):
    courseId: str = Field(min_length=1, max_length=36)
    instructorId: str = Field(default="", max_length=36)
    sectionId: str = Field(min_length=1, max_length=36)
    roomId: str = Field(min_length=1, max_length=36)
    timeSlotId: str = Field(min_length=1, max_length=36)

    @field_validator("instructorId", mode="before")
    @classmethod
    def empty_instructor(cls, value: str | None) -> str:
        return value or ""

    def to_domain(self) -> Gene:
        return Gene(
            course_id=self.courseId,
            instructor_id=self.instructorId,
            section_id=self.sectionId,
            room_id=self.roomId,
            time_slot_id=self.timeSlotId,
        )


class TimetableEntryPayload(BaseModel):
    """One row of a generated timetable, shaped for persistence."""

    courseId: str
    instructorId: str | None = None
    sectionId: str
    roomId: str
    timeSlotId: str

    @classmethod
    def from_gene(cls, gene: Gene) -> "TimetableEntryPayload":
        return cls(
            courseId=gene.course_id,
            instructorId=gene.instructor_id or None,
            sectionId=gene.section_id,
            roomId=gene.room_id,
            timeSlotId=gene.time_slot_id,
        )
