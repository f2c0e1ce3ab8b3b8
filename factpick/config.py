"""
Configuration - Game tuning and policy flags.

Defaults: three options per question,
a 10 second timer shrinking by 0.5s per correct answer down to 3s, and
a single miss (or timeout) ending the run.

Every field can be overridden from the environment via GameConfig.from_env().
"""

from __future__ import annotations
import os
from dataclasses import dataclass

from .engine_core.question_builder import DEFAULT_MAX_ATTEMPTS, DistractorPolicy

ENV_PREFIX = "FACTPICK_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class GameConfig:
    """Tuning for question generation and session scoring."""
    options_per_question: int = 3
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    # Timer (seconds)
    initial_time: float = 10.0
    min_time: float = 3.0
    time_decrement: float = 0.5

    # Session-ending policies
    miss_ends_game: bool = True
    timeout_ends_game: bool = True

    distractor_policy: DistractorPolicy = DistractorPolicy.EXCLUDE_GREATER
    random_seed: int | None = None

    def __post_init__(self):
        if self.options_per_question < 2:
            raise ValueError("options_per_question must be >= 2")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.min_time <= 0:
            raise ValueError("min_time must be > 0")
        if self.initial_time < self.min_time:
            raise ValueError("initial_time must be >= min_time")
        if self.time_decrement < 0:
            raise ValueError("time_decrement must be >= 0")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> GameConfig:
        """
        Build a config from FACTPICK_* variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        int_fields = {
            "options_per_question": "OPTIONS_PER_QUESTION",
            "max_attempts": "MAX_ATTEMPTS",
            "random_seed": "RANDOM_SEED",
        }
        float_fields = {
            "initial_time": "INITIAL_TIME",
            "min_time": "MIN_TIME",
            "time_decrement": "TIME_DECREMENT",
        }
        bool_fields = {
            "miss_ends_game": "MISS_ENDS_GAME",
            "timeout_ends_game": "TIMEOUT_ENDS_GAME",
        }

        for field_name, suffix in int_fields.items():
            raw = env.get(ENV_PREFIX + suffix)
            if raw not in (None, ""):
                kwargs[field_name] = int(raw)

        for field_name, suffix in float_fields.items():
            raw = env.get(ENV_PREFIX + suffix)
            if raw not in (None, ""):
                kwargs[field_name] = float(raw)

        for field_name, suffix in bool_fields.items():
            raw = env.get(ENV_PREFIX + suffix)
            if raw not in (None, ""):
                kwargs[field_name] = _parse_bool(ENV_PREFIX + suffix, raw)

        policy = env.get(ENV_PREFIX + "DISTRACTOR_POLICY")
        if policy:
            kwargs["distractor_policy"] = DistractorPolicy(policy.strip().lower())

        return cls(**kwargs)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
