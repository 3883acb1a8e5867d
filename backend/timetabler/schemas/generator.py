from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from timetabler.schemas.conflict import ConflictDetail
from timetabler.schemas.timetable import (
    CoursePayload,
    InstructorAvailabilityPayload,
    RoomPayload,
    SectionPayload,
    TimeSlotPayload,
    TimetableEntryPayload,
)


class GenerationSettingsBase(BaseModel):
    population_size: int = Field(default=100, ge=1, le=5000)
    generations: int = Field(default=500, ge=0, le=20_000)
    mutation_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    crossover_rate: float = Field(default=0.8, ge=0.0, le=1.0)
    elitism_count: int = Field(default=5, ge=0, le=1000)
    tournament_size: int = Field(default=5, ge=1, le=1000)
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)
    progress_interval: int = Field(default=50, ge=1, le=10_000)
    early_stop_fitness: float = Field(default=900.0, ge=0.0)
    evaluation_workers: int = Field(default=1, ge=1, le=64)

    @model_validator(mode="after")
    def validate_relationships(self) -> "GenerationSettingsBase":
        if self.elitism_count > self.population_size:
            raise ValueError("elitism_count cannot exceed population_size")
        return self


class GenerateTimetableRequest(BaseModel):
    courses: list[CoursePayload] = Field(default_factory=list)
    sections: list[SectionPayload] = Field(default_factory=list)
    rooms: list[RoomPayload] = Field(default_factory=list)
    time_slots: list[TimeSlotPayload] = Field(default_factory=list)
    instructor_availability: list[InstructorAvailabilityPayload] = Field(default_factory=list)
    settings_override: GenerationSettingsBase | None = None


class GenerateTimetableResponse(BaseModel):
    fitness: float
    generations_run: int
    hard_conflicts: int
    acceptable: bool
    cancelled: bool = False
    entries: list[TimetableEntryPayload]
    conflicts: list[ConflictDetail] = Field(default_factory=list)
    settings_used: GenerationSettingsBase
    runtime_ms: int
