"""Tests for food_snake.config."""

import pytest

from food_snake.config import Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.port == 8000
        assert settings.strategy == "heuristic"
        assert settings.log_level == "INFO"

    def test_reads_environment(self) -> None:
        settings = Settings.from_env({
            "HOST": "127.0.0.1",
            "PORT": "9001",
            "BATTLESNAKE_STRATEGY": "random",
            "LOG_LEVEL": "debug",
            "BATTLESNAKE_AUTHOR": "someone",
            "BATTLESNAKE_COLOR": "#123456",
            "BATTLESNAKE_HEAD": "smile",
            "BATTLESNAKE_TAIL": "bolt",
        })
        assert settings.host == "127.0.0.1"
        assert settings.port == 9001
        assert settings.strategy == "random"
        assert settings.log_level == "DEBUG"
        assert (settings.author, settings.color, settings.head, settings.tail) == (
            "someone", "#123456", "smile", "bolt",
        )

    def test_unknown_strategy(self) -> None:
        with pytest.raises(ValueError, match="unknown selection strategy"):
            Settings.from_env({"BATTLESNAKE_STRATEGY": "astar"})

    def test_bad_port(self) -> None:
        with pytest.raises(ValueError, match="PORT must be an integer"):
            Settings.from_env({"PORT": "eighty"})
        with pytest.raises(ValueError, match="out of range"):
            Settings(port=70000)

    def test_bad_log_level(self) -> None:
        with pytest.raises(ValueError, match="log level"):
            Settings(log_level="LOUD")

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Settings().port = 1
