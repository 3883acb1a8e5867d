import pytest
from pydantic import ValidationError

from timetabler.api.deps import get_default_generation_settings
from timetabler.core.config import Settings
from timetabler.core.exceptions import ConfigurationError
from timetabler.schemas.generator import GenerationSettingsBase


def test_generation_settings_defaults():
    settings = GenerationSettingsBase()

    assert settings.population_size == 100
    assert settings.generations == 500
    assert settings.mutation_rate == 0.1
    assert settings.crossover_rate == 0.8
    assert settings.elitism_count == 5
    assert settings.tournament_size == 5
    assert settings.random_seed is None
    assert settings.evaluation_workers == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"population_size": 0},
        {"mutation_rate": 1.5},
        {"crossover_rate": -0.1},
        {"tournament_size": 0},
        {"generations": -1},
        {"population_size": 3, "elitism_count": 4},
    ],
)
def test_generation_settings_reject_out_of_range_values(overrides):
    with pytest.raises(ValidationError):
        GenerationSettingsBase(**overrides)


def test_elitism_may_fill_the_whole_population():
    settings = GenerationSettingsBase(population_size=4, elitism_count=4)
    assert settings.elitism_count == 4


def test_cors_origins_accept_comma_separated_and_json_lists():
    assert Settings(cors_origins="http://a.test, http://b.test").cors_origins == ["http://a.test", "http://b.test"]
    assert Settings(cors_origins='["http://c.test"]').cors_origins == ["http://c.test"]


def test_log_level_is_normalized():
    assert Settings(log_level=" debug ").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_default_generation_settings_follow_environment(monkeypatch, app_settings):
    monkeypatch.setattr(app_settings, "ga_population_size", 40)
    monkeypatch.setattr(app_settings, "ga_generations", 12)

    defaults = get_default_generation_settings()

    assert defaults.population_size == 40
    assert defaults.generations == 12


def test_inconsistent_environment_defaults_raise_configuration_error(monkeypatch, app_settings):
    monkeypatch.setattr(app_settings, "ga_population_size", 2)
    monkeypatch.setattr(app_settings, "ga_elitism_count", 5)

    with pytest.raises(ConfigurationError) as exc_info:
        get_default_generation_settings()

    assert exc_info.value.status_code == 500
    assert exc_info.value.details["errors"]
