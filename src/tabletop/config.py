"""Engine configuration sourced from defaults and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

from tabletop import constants


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True, slots=True)
class PlacementConfig:
    """Immutable tuning for seat planning, grid reflow and path motion."""

    seat_thickness: float = constants.SEAT_STRIP_THICKNESS
    seat_length: float = constants.SEAT_STRIP_LENGTH
    edge_join_margin: float = constants.EDGE_JOIN_MARGIN
    grid_spacing: float = constants.TOKEN_GRID_SPACING
    grid_margin: float = constants.TOKEN_GRID_MARGIN
    step_duration_ms: float = constants.STEP_DURATION_MS
    bounce_duration_ms: float = constants.BOUNCE_DURATION_MS
    bounce_height: float = constants.BOUNCE_HEIGHT

    @classmethod
    def from_env(cls, prefix: str = "TABLETOP_") -> "PlacementConfig":
        """Read overrides such as ``TABLETOP_GRID_SPACING``; bad values keep the default."""
        values = {}
        for item in fields(cls):
            values[item.name] = _float(f"{prefix}{item.name.upper()}", item.default)
        return cls(**values)


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json
    logger_name: str = "tabletop"

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        file_path = os.getenv("TABLETOP_LOG_FILE") or None
        return cls(
            level_name=_str("TABLETOP_LOG_LEVEL", "INFO"),
            console_format=_str("TABLETOP_LOG_FORMAT", "text"),
            file_path=file_path,
        )
