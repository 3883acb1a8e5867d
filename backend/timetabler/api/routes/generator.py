import logging
from time import perf_counter

from fastapi import APIRouter, Depends

from timetabler.api.deps import get_default_generation_settings
from timetabler.core.config import get_settings
from timetabler.core.exceptions import SchedulerError
from timetabler.schemas.generator import (
    GenerateTimetableRequest,
    GenerateTimetableResponse,
    GenerationSettingsBase,
)
from timetabler.schemas.timetable import TimetableEntryPayload
from timetabler.services.conflict_service import ConflictService
from timetabler.services.evolution_scheduler import EvolutionaryScheduler

router = APIRouter()
logger = logging.getLogger(__name__)


def _missing_collections(payload: GenerateTimetableRequest) -> list[str]:
    collections = {
        "courses": payload.courses,
        "sections": payload.sections,
        "rooms": payload.rooms,
        "time_slots": payload.time_slots,
    }
    return [name for name, items in collections.items() if not items]


@router.get("/timetable/generation-settings", response_model=GenerationSettingsBase)
def get_generation_settings(
    defaults: GenerationSettingsBase = Depends(get_default_generation_settings),
) -> GenerationSettingsBase:
    return defaults


@router.post("/timetable/generate", response_model=GenerateTimetableResponse)
def generate_timetable(
    payload: GenerateTimetableRequest,
    defaults: GenerationSettingsBase = Depends(get_default_generation_settings),
) -> GenerateTimetableResponse:
    started = perf_counter()
    missing = _missing_collections(payload)
    if missing and get_settings().require_complete_inputs:
        raise SchedulerError(
            message="Please ensure there are courses, sections, rooms, and time slots configured",
            details={"missing": missing},
        )

    settings = payload.settings_override or defaults
    logger.info(
        "TIMETABLE GENERATION START | courses=%s | sections=%s | rooms=%s | time_slots=%s | availability=%s",
        len(payload.courses),
        len(payload.sections),
        len(payload.rooms),
        len(payload.time_slots),
        len(payload.instructor_availability),
    )

    scheduler = EvolutionaryScheduler(
        courses=[item.to_domain() for item in payload.courses],
        sections=[item.to_domain() for item in payload.sections],
        rooms=[item.to_domain() for item in payload.rooms],
        time_slots=[item.to_domain() for item in payload.time_slots],
        settings=settings,
        availability=[item.to_domain() for item in payload.instructor_availability],
    )
    result = scheduler.run()

    genes = result.chromosome.genes
    report = ConflictService(genes).build_report(result.conflicts)
    runtime_ms = int((perf_counter() - started) * 1000)
    logger.info(
        "TIMETABLE GENERATION COMPLETE | entries=%s | fitness=%.2f | hard_conflicts=%s | generations=%s | runtime_ms=%s",
        len(genes),
        result.chromosome.fitness,
        report.total,
        result.generations_run,
        runtime_ms,
    )
    return GenerateTimetableResponse(
        fitness=result.chromosome.fitness,
        generations_run=result.generations_run,
        hard_conflicts=report.total,
        acceptable=result.is_acceptable,
        cancelled=result.cancelled,
        entries=[TimetableEntryPayload.from_gene(gene) for gene in genes],
        conflicts=report.conflicts,
        settings_used=settings,
        runtime_ms=runtime_ms,
    )
