from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CourseAssignment(str, Enum):
    lecture_only = "lecture_only"
    section_only = "section_only"
    both = "both"
    unassigned = "unassigned"


@dataclass(frozen=True)
class Course:
    id: str
    department_id: str = ""
    doctor_id: str | None = None
    ta_id: str | None = None
    code: str = ""
    name: str = ""

    @property
    def assignment_kind(self) -> CourseAssignment:
        if self.doctor_id and self.ta_id:
            return CourseAssignment.both
        if self.doctor_id:
            return CourseAssignment.lecture_only
        if self.ta_id:
            return CourseAssignment.section_only
        return CourseAssignment.unassigned

    @property
    def has_lecture(self) -> bool:
        return self.assignment_kind in (CourseAssignment.lecture_only, CourseAssignment.both)

    @property
    def has_sections(self) -> bool:
        return self.assignment_kind in (CourseAssignment.section_only, CourseAssignment.both)
