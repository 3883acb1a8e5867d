"""Generate a timetable for an in-memory demo department.

Run:
  PYTHONPATH=backend python scripts/run_demo_generation.py
"""

from __future__ import annotations

import logging
import os

from timetabler.models.availability import InstructorAvailability
from timetabler.models.course import Course
from timetabler.models.room import Room, RoomType
from timetabler.models.section import Section
from timetabler.models.time_slot import TimeSlot
from timetabler.schemas.generator import GenerationSettingsBase
from timetabler.services.evolution_scheduler import run_genetic_algorithm

SEED = int(os.getenv("DEMO_RANDOM_SEED", "2026"))
GENERATIONS = int(os.getenv("DEMO_GENERATIONS", "300"))

DEPARTMENT = "CS"
WORKING_DAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday"]
SLOT_TIMES = [("08:00", "09:30"), ("09:45", "11:15"), ("11:30", "13:00"), ("13:30", "15:00")]
GROUPS = {"G1": ["G1-S1", "G1-S2", "G1-S3"], "G2": ["G2-S1", "G2-S2"]}
COURSES = [
    # (id, code, doctor, ta)
    ("c-prog", "CS101", "dr-hassan", "ta-mona"),
    ("c-math", "MA102", "dr-salma", None),
    ("c-ds", "CS201", "dr-hassan", "ta-omar"),
    ("c-net", "CS305", None, "ta-mona"),
    ("c-ethics", "GE110", None, None),
]
ROOMS = [
    ("hall-a", RoomType.lecture_hall, 200),
    ("hall-b", RoomType.lecture_hall, 150),
    ("lab-1", RoomType.lab, 30),
    ("lab-2", RoomType.lab, 30),
    ("sem-1", RoomType.seminar_room, 40),
]

logger = logging.getLogger("demo")


def build_time_slots() -> list[TimeSlot]:
    slots: list[TimeSlot] = []
    for day in WORKING_DAYS:
        for order, (start, end) in enumerate(SLOT_TIMES, start=1):
            slots.append(
                TimeSlot(id=f"{day[:3].lower()}-{order}", day=day, slot_order=order, start_time=start, end_time=end)
            )
    return slots


def build_availability(slots: list[TimeSlot]) -> list[InstructorAvailability]:
    records: list[InstructorAvailability] = []
    for slot in slots:
        # Dr. Hassan does not teach on Thursdays and prefers first periods.
        if slot.day == "Thursday":
            records.append(InstructorAvailability("dr-hassan", slot.id, is_available=False))
        elif slot.slot_order == 1:
            records.append(InstructorAvailability("dr-hassan", slot.id, preference_level=3))
        if slot.slot_order == 2:
            records.append(InstructorAvailability("dr-salma", slot.id, preference_level=2))
    return records


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    courses = [Course(id=cid, department_id=DEPARTMENT, doctor_id=doctor, ta_id=ta, code=code) for cid, code, doctor, ta in COURSES]
    sections = [Section(id=section_id, group_id=group_id) for group_id, ids in GROUPS.items() for section_id in ids]
    rooms = [Room(id=room_id, room_type=room_type, capacity=capacity) for room_id, room_type, capacity in ROOMS]
    slots = build_time_slots()
    settings = GenerationSettingsBase(generations=GENERATIONS, random_seed=SEED)

    def report(generation: int, best_fitness: float) -> None:
        logger.info("generation=%s best_fitness=%.2f", generation, best_fitness)

    result = run_genetic_algorithm(
        courses,
        sections,
        rooms,
        slots,
        settings=settings,
        on_progress=report,
        instructor_availability=build_availability(slots),
    )

    slot_by_id = {slot.id: slot for slot in slots}
    def placement(gene) -> tuple[int, int]:
        slot = slot_by_id[gene.time_slot_id]
        return WORKING_DAYS.index(slot.day), slot.slot_order

    for gene in sorted(result.chromosome.genes, key=placement):
        slot = slot_by_id[gene.time_slot_id]
        print(
            f"{slot.day:<10} {slot.start_time}-{slot.end_time}  {gene.course_id:<9} "
            f"{gene.section_id:<6} {gene.room_id:<7} {gene.instructor_id or '-'}"
        )
    print(
        f"\nfitness={result.chromosome.fitness:.2f} conflicts={len(result.conflicts)} "
        f"generations={result.generations_run} acceptable={result.is_acceptable}"
    )


if __name__ == "__main__":
    main()
