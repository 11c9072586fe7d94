"""Settings accepted by ``configure_logging``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class LogConfig(BaseModel):
    """Console JSON sink, plus a JSON-lines file when ``file_path`` is set.

    ``console_stream`` defaults to stderr so stdout stays free for CLI output.
    """

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    console_stream: Any = None
    file_path: str | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LEVELS:
            raise ValueError(f"unknown log level {value!r}; expected one of {', '.join(LEVELS)}")
        return level


__all__ = ["LEVELS", "LogConfig"]
