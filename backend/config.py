"""
Runtime settings, read from the environment (and a .env file if present).

Variables:
    SNAKE_ROWS, SNAKE_COLUMNS   board size (default 20x20)
    SNAKE_TICK_MS               tick interval in milliseconds (default 100)
    SNAKE_SOUNDS                play eat/game-over cues (default true)
    SNAKE_SEED                  seed for reproducible sessions (default unset)
    SNAKE_ASSETS_DIR            directory holding Eat.wav / Die.wav
    SNAKE_PLAYER                autoplay variant (default heuristic)
    SNAKE_LOG_LEVEL             logging level name (default INFO)
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from domain.constants import DEFAULT_COLUMNS, DEFAULT_ROWS, DEFAULT_TICK_MS, INITIAL_SNAKE_LENGTH

BACKEND_DIR = Path(__file__).resolve().parent
DEFAULT_ASSETS_DIR = BACKEND_DIR / "assets"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Settings:
    rows: int = DEFAULT_ROWS
    columns: int = DEFAULT_COLUMNS
    tick_ms: int = DEFAULT_TICK_MS
    sounds: bool = True
    seed: Optional[int] = None
    assets_dir: Path = DEFAULT_ASSETS_DIR
    player: str = "heuristic"
    log_level: str = "INFO"


def _get_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Load a .env file (if any) and build Settings from the environment."""
    load_dotenv(env_file)

    settings = Settings(
        rows=_get_int("SNAKE_ROWS", DEFAULT_ROWS),
        columns=_get_int("SNAKE_COLUMNS", DEFAULT_COLUMNS),
        tick_ms=_get_int("SNAKE_TICK_MS", DEFAULT_TICK_MS),
        sounds=_get_bool("SNAKE_SOUNDS", True),
        seed=_get_int("SNAKE_SEED", None),
        assets_dir=Path(os.getenv("SNAKE_ASSETS_DIR") or DEFAULT_ASSETS_DIR),
        player=os.getenv("SNAKE_PLAYER") or "heuristic",
        log_level=(os.getenv("SNAKE_LOG_LEVEL") or "INFO").upper(),
    )

    validate_settings(settings)
    return settings


def validate_settings(settings: Settings) -> None:
    """Raise ValueError if the settings cannot start a session."""
    if settings.rows <= 0 or settings.columns <= 0:
        raise ValueError(f"Board size must be positive, got {settings.rows}x{settings.columns}")
    if settings.columns <= INITIAL_SNAKE_LENGTH:
        raise ValueError(
            f"Board needs more than {INITIAL_SNAKE_LENGTH} columns for the initial snake, got {settings.columns}"
        )
    if settings.tick_ms < 0:
        raise ValueError(f"SNAKE_TICK_MS must not be negative, got {settings.tick_ms}")
    if not isinstance(logging.getLevelName(settings.log_level), int):
        raise ValueError(f"SNAKE_LOG_LEVEL must be a logging level name, got {settings.log_level!r}")


def apply_overrides(settings: Settings, **overrides) -> Settings:
    """
    Return a copy of `settings` with every non-None override applied.

    The merged settings are validated, so command-line values get the same
    checks as the environment.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    merged = replace(settings, **changes)
    validate_settings(merged)
    return merged
