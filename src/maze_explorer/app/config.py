# src/maze_explorer/app/config.py
#!/usr/bin/env python3
"""
Settings resolution.

- ENV: MAZE_SIZE, MAZE_ALGO, MAZE_SPEED, MAZE_SEED, MAZE_LOG_LEVEL, MAZE_AUTO_REGEN
- CLI: --size=, --algo=, --speed=, --seed=, --log-level=, --auto-regen=
CLI wins over ENV, ENV wins over the defaults below.
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

from maze_explorer.core.algorithms import ALGORITHMS

MIN_SIZE = 5
MAX_SIZE = 31
DEFAULT_SIZE = 15
DEFAULT_ALGO = "astar"
DEFAULT_SPEED = 30
REGENERATE_DELAY_MS = 2000
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_ENV_KEYS = {
    "size": "MAZE_SIZE",
    "algo": "MAZE_ALGO",
    "speed": "MAZE_SPEED",
    "seed": "MAZE_SEED",
    "log-level": "MAZE_LOG_LEVEL",
    "auto-regen": "MAZE_AUTO_REGEN",
}


@dataclass(frozen=True)
class Settings:
    size: int = DEFAULT_SIZE
    algorithm: str = DEFAULT_ALGO
    speed: int = DEFAULT_SPEED          # 1..100, higher is faster
    seed: Optional[int] = None
    log_level: str = "INFO"
    auto_regenerate: bool = True
    regenerate_delay_ms: int = REGENERATE_DELAY_MS

    @property
    def delay_ms(self) -> int:
        return step_delay_ms(self.speed)


def step_delay_ms(speed: int) -> int:
    return max(1, 101 - speed)


def clamp_size(n: int) -> int:
    n = max(MIN_SIZE, min(MAX_SIZE, n))
    return n if n % 2 else n - 1


def clamp_speed(v: int) -> int:
    return max(1, min(100, v))


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key}: expected an integer, got {raw!r}") from None


def _parse_bool(key: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{key}: expected on/off, got {raw!r}")


def _collect(argv: Sequence[str], environ: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for key, env_key in _ENV_KEYS.items():
        if environ.get(env_key):
            raw[key] = environ[env_key]
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, value = arg[2:].split("=", 1)
        if key in _ENV_KEYS:
            raw[key] = value
    return raw


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    if argv is None:
        argv = sys.argv[1:]
    if environ is None:
        environ = os.environ
    raw = _collect(argv, environ)

    kwargs = {}
    if "size" in raw:
        kwargs["size"] = clamp_size(_parse_int("size", raw["size"]))
    if "algo" in raw:
        algo = raw["algo"].lower()
        if algo not in ALGORITHMS:
            raise ValueError(f"algo: expected one of {sorted(ALGORITHMS)}, got {raw['algo']!r}")
        kwargs["algorithm"] = algo
    if "speed" in raw:
        kwargs["speed"] = clamp_speed(_parse_int("speed", raw["speed"]))
    if "seed" in raw:
        kwargs["seed"] = _parse_int("seed", raw["seed"])
    if "log-level" in raw:
        level = raw["log-level"].upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log-level: expected one of {LOG_LEVELS}, got {raw['log-level']!r}")
        kwargs["log_level"] = level
    if "auto-regen" in raw:
        kwargs["auto_regenerate"] = _parse_bool("auto-regen", raw["auto-regen"])
    return Settings(**kwargs)
