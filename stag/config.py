"""
Engine configuration.

Settings are read from the environment once and cached:
    STAG_ENV                     development | production
    STAG_LOG_LEVEL               DEBUG | INFO | WARNING | ERROR
    STAG_LOG_FILE                optional path for a rotating log file
    STAG_MAX_AUTO_ADVANCE_STEPS  bound on automatic phase steps per action
    STAG_MAX_PLAYERS             lobby seat cap (never above the rules' max)

Game-design constants live in stag.game.rules, not here.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
import os


def _get_env_int(key: str, default: int) -> int:
    value = os.environ.get(key)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            pass
    return default


@dataclass(frozen=True)
class EngineSettings:
    """Process-wide engine settings (immutable)."""
    env: str = "development"
    log_level: str = "INFO"
    log_file: str | None = None
    max_auto_advance_steps: int = 32
    max_players: int = 6

    @classmethod
    def from_env(cls) -> EngineSettings:
        return cls(
            env=os.getenv("STAG_ENV", "development"),
            log_level=os.getenv("STAG_LOG_LEVEL", "INFO"),
            log_file=os.getenv("STAG_LOG_FILE") or None,
            max_auto_advance_steps=max(1, _get_env_int("STAG_MAX_AUTO_ADVANCE_STEPS", 32)),
            max_players=_get_env_int("STAG_MAX_PLAYERS", 6),
        )


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Settings from the environment, read once."""
    return EngineSettings.from_env()
