from __future__ import annotations

import random

from timetabler.models.chromosome import Chromosome, Gene
from timetabler.models.course import Course, CourseAssignment
from timetabler.models.room import LECTURE_ROOM_TYPES, SECTION_ROOM_TYPES, Room, rooms_of_type
from timetabler.models.section import Section, group_sections
from timetabler.models.time_slot import TimeSlot
from timetabler.services.availability import AvailabilityIndex


class ChromosomeBuilder:
    """Builds random candidate timetables for one fixed set of inputs.

    Every course expands into genes according to its assignment kind:

    * a doctor gives one lecture per group; every section of the group gets a
      gene in that shared slot,
    * a TA meets each section separately,
    * a course with neither role gets one unassigned gene per section.

    Rooms for the genes of a shared group lecture are drawn independently, so a
    single lecture may land in different halls for different sections.
    """

    def __init__(
        self,
        courses: list[Course],
        sections: list[Section],
        rooms: list[Room],
        time_slots: list[TimeSlot],
        availability: AvailabilityIndex,
        rng: random.Random,
    ) -> None:
        self.courses = courses
        self.sections = sections
        self.rooms = rooms
        self.time_slots = time_slots
        self.availability = availability
        self.random = rng

        self.groups = group_sections(sections)
        self.lecture_rooms = rooms_of_type(rooms, LECTURE_ROOM_TYPES)
        self.section_rooms = rooms_of_type(rooms, SECTION_ROOM_TYPES)

    def build(self) -> Chromosome:
        genes: list[Gene] = []
        for course in self.courses:
            genes.extend(self.genes_for_course(course))
        return Chromosome(genes=genes, fitness=0.0)

    def genes_for_course(self, course: Course) -> list[Gene]:
        if course.assignment_kind == CourseAssignment.unassigned:
            return self._unassigned_genes(course)
        genes: list[Gene] = []
        if course.has_lecture:
            genes.extend(self._lecture_genes(course))
        if course.has_sections:
            genes.extend(self._section_genes(course))
        return genes

    def _lecture_genes(self, course: Course) -> list[Gene]:
        genes: list[Gene] = []
        for group_members in self.groups.values():
            slot = self.availability.select_time_slot(course.doctor_id, self.time_slots, self.random)
            for section in group_members:
                genes.append(
                    Gene(
                        course_id=course.id,
                        instructor_id=course.doctor_id,
                        section_id=section.id,
                        room_id=self.random.choice(self.lecture_rooms).id,
                        time_slot_id=slot.id,
                    )
                )
        return genes

    def _section_genes(self, course: Course) -> list[Gene]:
        genes: list[Gene] = []
        for section in self.sections:
            slot = self.availability.select_time_slot(course.ta_id, self.time_slots, self.random)
            genes.append(
                Gene(
                    course_id=course.id,
                    instructor_id=course.ta_id,
                    section_id=section.id,
                    room_id=self.random.choice(self.section_rooms).id,
                    time_slot_id=slot.id,
                )
            )
        return genes

    def _unassigned_genes(self, course: Course) -> list[Gene]:
        return [
            Gene(
                course_id=course.id,
                instructor_id="",
                section_id=section.id,
                room_id=self.random.choice(self.rooms).id,
                time_slot_id=self.random.choice(self.time_slots).id,
            )
            for section in self.sections
        ]
