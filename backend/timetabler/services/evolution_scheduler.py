from __future__ import annotations

import logging
import math
import random
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Executor, ProcessPoolExecutor
from dataclasses import dataclass, field
from time import perf_counter

from timetabler.models.availability import InstructorAvailability
from timetabler.models.chromosome import Chromosome
from timetabler.models.conflict import ConflictInfo
from timetabler.models.course import Course
from timetabler.models.room import Room
from timetabler.models.section import Section
from timetabler.models.time_slot import TimeSlot
from timetabler.schemas.generator import GenerationSettingsBase
from timetabler.services.availability import AvailabilityIndex
from timetabler.services.chromosome_builder import ChromosomeBuilder
from timetabler.services.conflict_service import detect_conflicts
from timetabler.services.fitness import ACCEPTABLE_FITNESS, FitnessEvaluator
from timetabler.services.genetic_operators import Mutator, recombine, tournament_select

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, float], None]


@dataclass
class SchedulerResult:
    chromosome: Chromosome
    conflicts: list[ConflictInfo] = field(default_factory=list)
    generations_run: int = 0
    cancelled: bool = False

    @property
    def is_acceptable(self) -> bool:
        return not self.conflicts and self.chromosome.fitness >= ACCEPTABLE_FITNESS


def _fittest(population: list[Chromosome]) -> Chromosome:
    best = population[0]
    for candidate in population[1:]:
        if candidate.fitness > best.fitness:
            best = candidate
    return best


class EvolutionaryScheduler:
    """Genetic search over complete weekly timetables.

    A run owns its population, random generator and lookups; nothing is shared
    between runs. With ``random_seed`` set, two runs over the same inputs return
    the same timetable, whatever ``evaluation_workers`` is, because all random
    draws happen in the calling process and only fitness scoring is farmed out
    to worker processes.
    """

    def __init__(
        self,
        *,
        courses: list[Course],
        sections: list[Section],
        rooms: list[Room],
        time_slots: list[TimeSlot],
        settings: GenerationSettingsBase | None = None,
        availability: Iterable[InstructorAvailability] | None = None,
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self.courses = list(courses)
        self.sections = list(sections)
        self.rooms = list(rooms)
        self.time_slots = list(time_slots)
        self.settings = settings or GenerationSettingsBase()
        self.on_progress = on_progress
        self.cancel_event = cancel_event
        self.random = random.Random(self.settings.random_seed)

        self.availability = AvailabilityIndex(availability)
        self.builder = ChromosomeBuilder(
            self.courses,
            self.sections,
            self.rooms,
            self.time_slots,
            self.availability,
            self.random,
        )
        self.evaluator = FitnessEvaluator(self.time_slots, self.availability)
        self.mutator = Mutator(self.rooms, self.time_slots, self.availability, self.random)

    def has_complete_inputs(self) -> bool:
        return bool(self.courses and self.sections and self.rooms and self.time_slots)

    def _evaluate_all(self, chromosomes: list[Chromosome], executor: Executor | None) -> None:
        if executor is None:
            scores = [self.evaluator.evaluate(item) for item in chromosomes]
        else:
            chunksize = max(1, math.ceil(len(chromosomes) / self.settings.evaluation_workers))
            scores = list(executor.map(self.evaluator.evaluate, chromosomes, chunksize=chunksize))
        for chromosome, score in zip(chromosomes, scores):
            chromosome.fitness = score

    def _is_cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _breed(self, ranked: list[Chromosome]) -> list[Chromosome]:
        settings = self.settings
        offspring: list[Chromosome] = []
        room_left = settings.population_size - min(settings.elitism_count, len(ranked))
        while len(offspring) < room_left:
            parent_a = tournament_select(ranked, settings.tournament_size, self.random)
            parent_b = tournament_select(ranked, settings.tournament_size, self.random)
            child_a, child_b = recombine(parent_a, parent_b, settings.crossover_rate, self.random)
            child_a = self.mutator.mutate(child_a, settings.mutation_rate)
            child_b = self.mutator.mutate(child_b, settings.mutation_rate)
            offspring.append(child_a)
            if len(offspring) < room_left:
                offspring.append(child_b)
        return offspring

    def _evolve(self, executor: Executor | None) -> SchedulerResult:
        settings = self.settings

        population = [self.builder.build() for _ in range(settings.population_size)]
        self._evaluate_all(population, executor)
        best = _fittest(population)

        generations_run = 0
        cancelled = False
        for generation in range(settings.generations):
            generations_run = generation + 1

            if self._is_cancelled():
                cancelled = True
                logger.warning("Scheduler run cancelled at generation=%s best_fitness=%.2f", generation, best.fitness)
                break

            if best.fitness > settings.early_stop_fitness and not detect_conflicts(best):
                logger.info("Conflict-free timetable found at generation=%s fitness=%.2f", generation, best.fitness)
                break

            # sorted() is stable, so equal-fitness chromosomes keep their order.
            ranked = sorted(population, key=lambda item: item.fitness, reverse=True)
            next_population = [item.copy() for item in ranked[: settings.elitism_count]]
            offspring = self._breed(ranked)
            self._evaluate_all(offspring, executor)
            next_population.extend(offspring)
            population = next_population

            generation_best = _fittest(population)
            if generation_best.fitness > best.fitness:
                best = generation_best

            if self.on_progress is not None and generation % settings.progress_interval == 0:
                logger.debug("Generation %s best_fitness=%.2f", generation, best.fitness)
                self.on_progress(generation, best.fitness)

        return SchedulerResult(
            chromosome=best,
            conflicts=detect_conflicts(best),
            generations_run=generations_run,
            cancelled=cancelled,
        )

    def run(self) -> SchedulerResult:
        if not self.has_complete_inputs():
            logger.info(
                "Skipping generation: courses=%s sections=%s rooms=%s time_slots=%s",
                len(self.courses),
                len(self.sections),
                len(self.rooms),
                len(self.time_slots),
            )
            return SchedulerResult(chromosome=Chromosome(genes=[], fitness=0.0))

        settings = self.settings
        logger.info(
            "Scheduler run population=%s generations=%s mutation_rate=%s crossover_rate=%s "
            "elitism=%s tournament=%s seed=%s workers=%s",
            settings.population_size,
            settings.generations,
            settings.mutation_rate,
            settings.crossover_rate,
            settings.elitism_count,
            settings.tournament_size,
            settings.random_seed,
            settings.evaluation_workers,
        )
        start = perf_counter()
        if settings.evaluation_workers > 1:
            with ProcessPoolExecutor(max_workers=settings.evaluation_workers) as executor:
                result = self._evolve(executor)
        else:
            result = self._evolve(None)

        logger.info(
            "Scheduler finished generations=%s fitness=%.2f conflicts=%s genes=%s runtime_ms=%s",
            result.generations_run,
            result.chromosome.fitness,
            len(result.conflicts),
            len(result.chromosome.genes),
            int((perf_counter() - start) * 1000),
        )
        return result


def run_genetic_algorithm(
    courses: list[Course],
    sections: list[Section],
    rooms: list[Room],
    time_slots: list[TimeSlot],
    settings: GenerationSettingsBase | None = None,
    on_progress: ProgressCallback | None = None,
    instructor_availability: Iterable[InstructorAvailability] | None = None,
    cancel_event: threading.Event | None = None,
) -> SchedulerResult:
    scheduler = EvolutionaryScheduler(
        courses=courses,
        sections=sections,
        rooms=rooms,
        time_slots=time_slots,
        settings=settings,
        availability=instructor_availability,
        on_progress=on_progress,
        cancel_event=cancel_event,
    )
    return scheduler.run()
