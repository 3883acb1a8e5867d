import pickle

import pytest

from timetabler.models.availability import InstructorAvailability
from timetabler.models.chromosome import Chromosome, Gene
from timetabler.models.time_slot import TimeSlot
from timetabler.services.availability import AvailabilityIndex
from timetabler.services.fitness import FitnessEvaluator

SLOTS = [
    TimeSlot(id="mon-1", day="Monday", slot_order=1),
    TimeSlot(id="mon-3", day="Monday", slot_order=3),
    TimeSlot(id="tue-1", day="Tuesday", slot_order=1),
]


def gene(instructor, section, room, slot, course="c1") -> Gene:
    return Gene(course_id=course, instructor_id=instructor, section_id=section, room_id=room, time_slot_id=slot)


def evaluator(records=()) -> FitnessEvaluator:
    return FitnessEvaluator(SLOTS, AvailabilityIndex(records))


def test_empty_chromosome_scores_base():
    assert evaluator().evaluate(Chromosome()) == 1000


def test_fitness_combines_every_term():
    chromosome = Chromosome(
        genes=[
            gene("dr-1", "A", "r1", "mon-1"),
            gene("dr-2", "B", "r2", "mon-3"),
            gene("dr-1", "A", "r1", "tue-1"),
        ]
    )
    records = [
        InstructorAvailability("dr-1", "mon-1", preference_level=3),
        InstructorAvailability("dr-2", "mon-3", is_available=False),
        InstructorAvailability("dr-1", "tue-1", preference_level=2),
    ]

    breakdown = evaluator(records).breakdown(chromosome)

    assert breakdown.conflicts == 0
    assert breakdown.base == 1000
    assert breakdown.availability == 15 - 50 + 8
    assert breakdown.late_penalty == 2
    assert breakdown.distribution_bonus == 20
    # Monday 2, Tuesday 1, mean 1.5
    assert breakdown.balance_penalty == pytest.approx(2.0)
    assert breakdown.total == pytest.approx(989.0)


def test_conflicts_dominate_the_score():
    clashing = Chromosome(genes=[gene("dr-1", "A", "r1", "mon-1"), gene("dr-2", "B", "r1", "mon-1", course="c2")])
    clean = Chromosome(genes=[gene("dr-1", "A", "r1", "mon-1"), gene("dr-2", "B", "r2", "mon-1", course="c2")])

    scorer = evaluator()

    assert scorer.evaluate(clashing) == pytest.approx(910.0)
    assert scorer.evaluate(clean) == pytest.approx(1010.0)
    assert scorer.evaluate(clean) > scorer.evaluate(clashing)


def test_preference_level_one_and_missing_records_are_neutral():
    chromosome = Chromosome(genes=[gene("dr-1", "A", "r1", "mon-1"), gene("", "B", "r2", "tue-1")])
    records = [
        InstructorAvailability("dr-1", "mon-1", preference_level=1),
        InstructorAvailability("", "tue-1", is_available=False),
    ]

    assert evaluator(records).breakdown(chromosome).availability == 0


def test_unknown_time_slots_are_ignored_by_soft_terms():
    chromosome = Chromosome(genes=[gene("dr-1", "A", "r1", "ghost")])

    breakdown = evaluator().breakdown(chromosome)

    assert breakdown.late_penalty == 0
    assert breakdown.distribution_bonus == 0
    assert breakdown.balance_penalty == 0
    assert breakdown.total == 1000


def test_fitness_is_never_negative():
    genes = [gene("dr-1", "A", "r1", "mon-1", course=f"c{index}") for index in range(8)]

    assert evaluator().evaluate(Chromosome(genes=genes)) == 0


def test_blank_days_earn_no_distribution_bonus():
    slots = SLOTS + [TimeSlot(id="tba-1", day="", slot_order=1)]
    chromosome = Chromosome(genes=[gene("dr-1", "A", "r1", "mon-1"), gene("dr-2", "B", "r2", "tba-1")])

    breakdown = FitnessEvaluator(slots, AvailabilityIndex()).breakdown(chromosome)

    assert breakdown.distribution_bonus == 10
    # The blank day still counts towards balance: one gene each, no spread.
    assert breakdown.balance_penalty == 0
    assert breakdown.total == pytest.approx(1010.0)


def test_evaluator_survives_pickling_for_worker_processes():
    chromosome = Chromosome(genes=[gene("dr-1", "A", "r1", "mon-1"), gene("dr-1", "A", "r1", "tue-1")])
    scorer = evaluator([InstructorAvailability("dr-1", "mon-1", preference_level=3)])

    restored = pickle.loads(pickle.dumps(scorer))

    assert restored.evaluate(chromosome) == scorer.evaluate(chromosome)
