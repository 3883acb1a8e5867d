from pydantic import ValidationError

from timetabler.core.config import get_settings
from timetabler.core.exceptions import ConfigurationError
from timetabler.schemas.generator import GenerationSettingsBase


def get_default_generation_settings() -> GenerationSettingsBase:
    settings = get_settings()
    try:
        return GenerationSettingsBase(
            population_size=settings.ga_population_size,
            generations=settings.ga_generations,
            mutation_rate=settings.ga_mutation_rate,
            crossover_rate=settings.ga_crossover_rate,
            elitism_count=settings.ga_elitism_count,
            tournament_size=settings.ga_tournament_size,
            progress_interval=settings.ga_progress_interval,
            early_stop_fitness=settings.ga_early_stop_fitness,
            evaluation_workers=settings.ga_evaluation_workers,
        )
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid default generation settings",
            details={"errors": [error["msg"] for error in exc.errors()]},
        ) from exc
