"""
config.py — Engine Constants & Pacing Policy
=============================================
Central place for every tunable number the engine uses.  The web app
builds its EngineConfig from the environment; tests and the headless
comparison runner use EngineConfig.instant() so a full sort finishes in
milliseconds instead of minutes.

Environment overrides (all optional):
    SORTVIZ_POLL_INTERVAL   – seconds between pause re-checks
    SORTVIZ_MIN_DELAY_MS    – pacing floor
    SORTVIZ_BASE_DELAY_MS   – delay at speed 0 (delay = base - speed)
    SORTVIZ_DEFAULT_SIZE    – array size on startup
    SORTVIZ_DEFAULT_SPEED   – speed on startup
"""

import os
from dataclasses import dataclass
from typing import Tuple


# ---------------------------------------------------------------------------
# Array generation
# ---------------------------------------------------------------------------
DEFAULT_ARRAY_SIZE: int            = 30
MIN_ARRAY_SIZE:     int            = 5
MAX_ARRAY_SIZE:     int            = 100
VALUE_RANGE:        Tuple[int, int] = (10, 309)   # inclusive, bars need a visible minimum height
MIN_CUSTOM_LENGTH:  int            = 5
MAX_COUNTING_VALUE: int            = 1_000_000    # counting sort allocates max + 1 buckets

# ---------------------------------------------------------------------------
# Speed & pacing (milliseconds unless noted)
# ---------------------------------------------------------------------------
MIN_SPEED:      int   = 1
MAX_SPEED:      int   = 100
DEFAULT_SPEED:  int   = 50
POLL_INTERVAL:  float = 0.1     # seconds
MIN_DELAY_MS:   float = 5.0
BASE_DELAY_MS:  float = 110.0


@dataclass
class EngineConfig:
    poll_interval: float = POLL_INTERVAL
    min_delay_ms:  float = MIN_DELAY_MS
    base_delay_ms: float = BASE_DELAY_MS
    default_size:  int   = DEFAULT_ARRAY_SIZE
    default_speed: int   = DEFAULT_SPEED

    def delay_for(self, speed: int) -> float:
        """Seconds to wait after one step.  Higher speed, shorter wait; never below the floor."""
        return max(self.min_delay_ms, self.base_delay_ms - speed) / 1000.0

    @classmethod
    def instant(cls) -> "EngineConfig":
        """No pacing at all: steps still yield to the loop, they just don't wait."""
        return cls(poll_interval=0.001, min_delay_ms=0.0, base_delay_ms=0.0)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            poll_interval=float(os.environ.get("SORTVIZ_POLL_INTERVAL", POLL_INTERVAL)),
            min_delay_ms=float(os.environ.get("SORTVIZ_MIN_DELAY_MS", MIN_DELAY_MS)),
            base_delay_ms=float(os.environ.get("SORTVIZ_BASE_DELAY_MS", BASE_DELAY_MS)),
            default_size=int(os.environ.get("SORTVIZ_DEFAULT_SIZE", DEFAULT_ARRAY_SIZE)),
            default_speed=int(os.environ.get("SORTVIZ_DEFAULT_SPEED", DEFAULT_SPEED)),
        )


def clamp_speed(speed: int) -> int:
    return max(MIN_SPEED, min(MAX_SPEED, int(speed)))
