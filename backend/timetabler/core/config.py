from functools import lru_cache
import json
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    # Resolve to backend/.env so `uvicorn --app-dir backend` works from any cwd.
    model_config = SettingsConfigDict(env_file=str(BACKEND_ENV_FILE), env_file_encoding="utf-8")

    project_name: str = "Timetabler API"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # When true, the generate route rejects empty collections instead of
    # returning the empty timetable.
    require_complete_inputs: bool = False

    ga_population_size: int = 100
    ga_generations: int = 500
    ga_mutation_rate: float = 0.1
    ga_crossover_rate: float = 0.8
    ga_elitism_count: int = 5
    ga_tournament_size: int = 5
    ga_progress_interval: int = 50
    ga_early_stop_fitness: float = 900.0
    ga_evaluation_workers: int = 1

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.startswith("["):
                try:
                    parsed = json.loads(stripped)
                    if isinstance(parsed, list):
                        return [str(item).strip() for item in parsed if str(item).strip()]
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
