"""Bounded-noise rotation models."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class RotationModel(Protocol):
    """Protocol implemented by rotation strategies."""

    max_error: float

    def apply(self, heading: float) -> float:
        """Return the heading actually achieved when ``heading`` is requested."""

    def bounds(self, heading: float) -> Tuple[float, float]:
        """Closed interval guaranteed to contain every result of :meth:`apply`."""


def _check_error(max_error: float) -> float:
    value = float(max_error)
    if not math.isfinite(value) or value < 0.0:
        raise ValueError(f"max_error must be a finite non-negative angle, got {max_error!r}")
    return value


@dataclass
class UniformRotationModel:
    """Uniform noise in ``[-max_error, max_error]`` added to every heading.

    Seeded instances reproduce the same sequence; without a seed the generator
    draws fresh OS entropy.
    """

    max_error: float
    seed: Optional[int] = None
    rng: np.random.Generator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.max_error = _check_error(self.max_error)
        self.rng = np.random.default_rng(self.seed)

    def apply(self, heading: float) -> float:
        heading = float(heading)
        error = float(self.rng.uniform(-1.0, 1.0)) * self.max_error
        result = heading + error
        logger.debug("Rotation %.6g -> %.6g (error %.3g)", heading, result, error)
        return result

    __call__ = apply

    def bounds(self, heading: float) -> Tuple[float, float]:
        return float(heading) - self.max_error, float(heading) + self.max_error


@dataclass
class FixedRotationModel:
    """Deterministic error of ``max_error * scale``; ``scale=1`` is the worst case."""

    max_error: float
    scale: float = 1.0

    def __post_init__(self) -> None:
        self.max_error = _check_error(self.max_error)
        if not -1.0 <= float(self.scale) <= 1.0:
            raise ValueError(f"scale must lie in [-1, 1], got {self.scale!r}")
        self.scale = float(self.scale)

    def apply(self, heading: float) -> float:
        return float(heading) + self.max_error * self.scale

    __call__ = apply

    def bounds(self, heading: float) -> Tuple[float, float]:
        return float(heading) - self.max_error, float(heading) + self.max_error


_ROTATION_MODELS = {
    "uniform": UniformRotationModel,
    "fixed": FixedRotationModel,
}


def make_rotation_model(kind: str, max_error: float, **options: Any) -> RotationModel:
    """Build a rotation model by name (``"uniform"`` or ``"fixed"``)."""

    try:
        factory = _ROTATION_MODELS[kind]
    except KeyError as exc:
        choices = ", ".join(sorted(_ROTATION_MODELS))
        raise ValueError(f"unknown rotation model {kind!r}; expected one of {choices}") from exc
    return factory(max_error, **options)


__all__ = [
    "RotationModel",
    "UniformRotationModel",
    "FixedRotationModel",
    "make_rotation_model",
]
