"""Runtime settings, read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping

from food_snake.selection import STRATEGIES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    strategy: str = "heuristic"
    log_level: str = "INFO"
    # Appearance returned by the info handshake
    author: str = ""
    color: str = "#888888"
    head: str = "default"
    tail: str = "default"

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            known = ", ".join(sorted(STRATEGIES))
            raise ValueError(f"unknown selection strategy {self.strategy!r} (choose from: {known})")
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port out of range: {self.port}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "Settings":
        port = environ.get("PORT", str(cls.port))
        try:
            port_num = int(port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port!r}") from None
        return cls(
            host=environ.get("HOST", cls.host),
            port=port_num,
            strategy=environ.get("BATTLESNAKE_STRATEGY", cls.strategy),
            log_level=environ.get("LOG_LEVEL", cls.log_level).upper(),
            author=environ.get("BATTLESNAKE_AUTHOR", cls.author),
            color=environ.get("BATTLESNAKE_COLOR", cls.color),
            head=environ.get("BATTLESNAKE_HEAD", cls.head),
            tail=environ.get("BATTLESNAKE_TAIL", cls.tail),
        )
