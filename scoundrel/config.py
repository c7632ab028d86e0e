"""
Configuration - environment-driven settings.

Environment variables:
    SCOUNDREL_MAX_HEALTH   Starting and maximum health (default 20)
    SCOUNDREL_SEED         Default seed for CLI games (default: random)
    LOG_LEVEL              DEBUG / INFO / WARNING / ERROR (default INFO)
"""

from __future__ import annotations
from dataclasses import dataclass
import os

# Fixed by the rules
ROOM_SIZE = 4
PLAYS_PER_ROOM = 3

DEFAULT_MAX_HEALTH = 20

SCOUNDREL_MAX_HEALTH = os.getenv("SCOUNDREL_MAX_HEALTH")
SCOUNDREL_SEED = os.getenv("SCOUNDREL_SEED")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class EngineConfig:
    """Tunables for one engine. Room size and plays per room are fixed rules."""
    max_health: int = DEFAULT_MAX_HEALTH

    def __post_init__(self):
        if self.max_health < 1:
            raise ValueError("max_health must be >= 1")

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config from SCOUNDREL_* environment variables."""
        raw = os.getenv("SCOUNDREL_MAX_HEALTH", SCOUNDREL_MAX_HEALTH)
        if not raw:
            return cls()
        try:
            max_health = int(raw)
        except ValueError as e:
            raise ValueError(f"SCOUNDREL_MAX_HEALTH must be an integer, got {raw!r}") from e
        return cls(max_health=max_health)


def default_seed() -> int | None:
    """Seed from SCOUNDREL_SEED, or None for a random game."""
    raw = os.getenv("SCOUNDREL_SEED", SCOUNDREL_SEED)
    return int(raw) if raw else None
