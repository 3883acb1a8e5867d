from __future__ import annotations

import dataclasses
import random

from timetabler.models.chromosome import Chromosome, Gene
from timetabler.models.room import Room
from timetabler.models.time_slot import TimeSlot
from timetabler.services.availability import AvailabilityIndex


def tournament_select(population: list[Chromosome], tournament_size: int, rng: random.Random) -> Chromosome:
    """Fittest of ``tournament_size`` draws with replacement; ties keep the first drawn."""
    best = rng.choice(population)
    for _ in range(tournament_size - 1):
        contender = rng.choice(population)
        if contender.fitness > best.fitness:
            best = contender
    return best


def splice_at(parent_a: Chromosome, parent_b: Chromosome, point: int) -> tuple[Chromosome, Chromosome]:
    child_a = parent_a.genes[:point] + parent_b.genes[point:]
    child_b = parent_b.genes[:point] + parent_a.genes[point:]
    return Chromosome(genes=child_a), Chromosome(genes=child_b)


def single_point_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: random.Random,
) -> tuple[Chromosome, Chromosome]:
    if not parent_a.genes or not parent_b.genes:
        return Chromosome(genes=list(parent_a.genes)), Chromosome(genes=list(parent_b.genes))
    point = rng.randrange(len(parent_a.genes))
    return splice_at(parent_a, parent_b, point)


def recombine(
    parent_a: Chromosome,
    parent_b: Chromosome,
    crossover_rate: float,
    rng: random.Random,
) -> tuple[Chromosome, Chromosome]:
    if rng.random() < crossover_rate:
        return single_point_crossover(parent_a, parent_b, rng)
    return Chromosome(genes=list(parent_a.genes)), Chromosome(genes=list(parent_b.genes))


class Mutator:
    def __init__(
        self,
        rooms: list[Room],
        time_slots: list[TimeSlot],
        availability: AvailabilityIndex,
        rng: random.Random,
    ) -> None:
        self.rooms = rooms
        self.time_slots = time_slots
        self.availability = availability
        self.random = rng

    def mutate_gene(self, gene: Gene) -> Gene:
        if self.random.random() < 0.5:
            return dataclasses.replace(gene, room_id=self.random.choice(self.rooms).id)
        if gene.has_instructor:
            slot = self.availability.select_time_slot(gene.instructor_id, self.time_slots, self.random)
        else:
            slot = self.random.choice(self.time_slots)
        return dataclasses.replace(gene, time_slot_id=slot.id)

    def mutate(self, chromosome: Chromosome, mutation_rate: float) -> Chromosome:
        genes: list[Gene] = []
        for gene in chromosome.genes:
            if self.random.random() < mutation_rate:
                genes.append(self.mutate_gene(gene))
            else:
                genes.append(gene)
        return Chromosome(genes=genes, fitness=0.0)
