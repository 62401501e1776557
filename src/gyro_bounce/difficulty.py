"""
difficulty.py: Named parameter bundles selected once per session.
"""

from dataclasses import dataclass
from typing import Dict, List

from .errors import ConfigurationError


@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    gravity: float                  # pixels/s^2
    restitution: float              # top wall, platform and obstacle bounces
    platform_width_ratio: float     # fraction of the screen width...
    platform_width_cap: float       # ...but never wider than this
    obstacle_count: int
    obstacle_speed: float           # base speed, pixels/s

    def platform_width(self, screen_width: float) -> float:
        return min(self.platform_width_ratio * screen_width, self.platform_width_cap)


EASY = DifficultyProfile(
    name="easy",
    gravity=1500.0,
    restitution=0.95,
    platform_width_ratio=0.40,
    platform_width_cap=180.0,
    obstacle_count=2,
    obstacle_speed=80.0,
)

HARD = DifficultyProfile(
    name="hard",
    gravity=2000.0,
    restitution=0.88,
    platform_width_ratio=0.28,
    platform_width_cap=130.0,
    obstacle_count=4,
    obstacle_speed=140.0,
)

PROFILES: Dict[str, DifficultyProfile] = {p.name: p for p in (EASY, HARD)}
DEFAULT_DIFFICULTY = EASY.name


def available_difficulties() -> List[str]:
    return list(PROFILES)


def get_profile(name: str) -> DifficultyProfile:
    """Looks up a preset by name; unknown names are rejected, not defaulted."""
    if not isinstance(name, str):
        raise ConfigurationError(f"difficulty name must be a string, got {name!r}")
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"unknown difficulty {name!r}, expected one of {', '.join(PROFILES)}") from None
