import pytest

from textfield_engine.runtime.settings import (
    DEFAULT_CAPACITY,
    DEFAULT_SCROLL_MARGIN,
    EngineSettings,
)


def test_defaults_match_classic_field() -> None:
    settings = EngineSettings()

    assert settings.capacity == 256
    assert settings.scroll_margin == 10.0
    assert settings.padding == 5.0
    assert settings.blink_period == 1.0


def test_from_env_reads_prefixed_values() -> None:
    settings = EngineSettings.from_env(
        {
            "TEXTFIELD_ENGINE_CAPACITY": "32",
            "TEXTFIELD_ENGINE_SCROLL_MARGIN": "4.5",
            "TEXTFIELD_ENGINE_TEXT_SCALE": "2",
            "CAPACITY": "9",
        }
    )

    assert settings.capacity == 32
    assert settings.scroll_margin == 4.5
    assert settings.text_scale == 2.0


def test_from_env_ignores_unparseable_values() -> None:
    settings = EngineSettings.from_env({"TEXTFIELD_ENGINE_CAPACITY": "lots"})

    assert settings.capacity == DEFAULT_CAPACITY


def test_from_env_falls_back_when_values_are_invalid() -> None:
    settings = EngineSettings.from_env(
        {
            "TEXTFIELD_ENGINE_CAPACITY": "0",
            "TEXTFIELD_ENGINE_SCROLL_MARGIN": "3",
        }
    )

    assert settings == EngineSettings()
    assert settings.scroll_margin == DEFAULT_SCROLL_MARGIN


@pytest.mark.parametrize(
    "kwargs",
    [
        {"capacity": 0},
        {"scroll_margin": -1.0},
        {"padding": -2.0},
        {"text_scale": -1.0},
        {"blink_period": 0.0},
    ],
)
def test_invalid_settings_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        EngineSettings(**kwargs)
