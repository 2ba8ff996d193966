"""Configuration helpers for the exact geometry engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Precision knobs shared by every exact predicate."""

    filter_digits: int = 30
    max_digits: int = 2000
    heading_digits: int = 100
    arc_sample_denominator: int = 10**6

    def validate(self) -> None:
        if self.filter_digits < 10:
            raise ValueError("filter_digits must be at least 10")
        if self.max_digits < 2 * self.filter_digits:
            raise ValueError("max_digits must be at least twice filter_digits")
        if self.heading_digits < 17:
            raise ValueError("heading_digits must cover double precision (>= 17)")
        if self.arc_sample_denominator < 2:
            raise ValueError("arc_sample_denominator must be at least 2")


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    config.validate()
    _ENGINE_CONFIG = copy.deepcopy(config)


def _current_config() -> EngineConfig:
    # Hot path for predicates; callers must not mutate the result.
    return _ENGINE_CONFIG
