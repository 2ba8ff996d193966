"""Exact planar primitives: points, vectors, segments, rays and circular arcs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence, Tuple, Union

import numpy as np

from .numbers import TWO, Scalar, ScalarLike, divide, exact_sqrt, sign, simplify, to_exact


class Orientation(Enum):
    CLOCKWISE = -1
    COLLINEAR = 0
    COUNTERCLOCKWISE = 1


@dataclass(frozen=True, eq=False)
class Vector:
    x: Scalar
    y: Scalar

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", simplify(self.x))
        object.__setattr__(self, "y", simplify(self.y))

    def __iter__(self) -> Iterator[Scalar]:
        yield self.x
        yield self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return sign(self.x - other.x) == 0 and sign(self.y - other.y) == 0

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def __mul__(self, factor: ScalarLike) -> "Vector":
        k = to_exact(factor)
        return Vector(self.x * k, self.y * k)

    __rmul__ = __mul__

    def dot(self, other: "Vector") -> Scalar:
        return simplify(self.x * other.x + self.y * other.y)

    def cross(self, other: "Vector") -> Scalar:
        return simplify(self.x * other.y - self.y * other.x)

    def squared_length(self) -> Scalar:
        return self.dot(self)

    def is_zero(self) -> bool:
        return sign(self.x) == 0 and sign(self.y) == 0

    def perpendicular(self) -> "Vector":
        """Left normal (rotated a quarter-turn counter-clockwise)."""
        return Vector(-self.y, self.x)

    def scaled_to(self, length: ScalarLike) -> "Vector":
        factor = divide(length, exact_sqrt(self.squared_length()))
        return self * factor

    def to_float(self) -> Tuple[float, float]:
        return float(self.x), float(self.y)


@dataclass(frozen=True, eq=False)
class Point:
    x: Scalar
    y: Scalar

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", simplify(self.x))
        object.__setattr__(self, "y", simplify(self.y))

    def __iter__(self) -> Iterator[Scalar]:
        yield self.x
        yield self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return sign(self.x - other.x) == 0 and sign(self.y - other.y) == 0

    __hash__ = None  # type: ignore[assignment]

    def __sub__(self, other: "Point") -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __add__(self, offset: Vector) -> "Point":
        return Point(self.x + offset.x, self.y + offset.y)

    def as_vector(self) -> Vector:
        return Vector(self.x, self.y)

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other.x) / TWO, (self.y + other.y) / TWO)

    def to_float(self) -> Tuple[float, float]:
        return float(self.x), float(self.y)

    def to_numpy(self) -> np.ndarray:
        return np.array(self.to_float(), dtype=float)


PointLike = Union[Point, Sequence[ScalarLike], np.ndarray]
VectorLike = Union[Vector, Sequence[ScalarLike], np.ndarray]


def _pair(value: object, kind: str) -> Tuple[ScalarLike, ScalarLike]:
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return value[0], value[1]
    raise ValueError(f"cannot interpret {value!r} as a {kind}")


def as_point(value: PointLike) -> Point:
    if isinstance(value, Point):
        return value
    x, y = _pair(value, "point")
    return Point(to_exact(x), to_exact(y))


def as_vector(value: VectorLike) -> Vector:
    if isinstance(value, Vector):
        return value
    x, y = _pair(value, "vector")
    return Vector(to_exact(x), to_exact(y))


@dataclass(frozen=True, eq=False)
class Segment:
    source: Point
    target: Point

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", as_point(self.source))
        object.__setattr__(self, "target", as_point(self.target))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.source == other.source and self.target == other.target

    __hash__ = None  # type: ignore[assignment]

    def to_vector(self) -> Vector:
        return self.target - self.source

    def is_degenerate(self) -> bool:
        return self.source == self.target

    def squared_length(self) -> Scalar:
        return self.to_vector().squared_length()

    def point_at(self, t: ScalarLike) -> Point:
        return self.source + self.to_vector() * t

    def midpoint(self) -> Point:
        return self.source.midpoint(self.target)

    def reversed(self) -> "Segment":
        return Segment(self.target, self.source)


@dataclass(frozen=True, eq=False)
class Ray:
    source: Point
    direction: Vector

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", as_point(self.source))
        object.__setattr__(self, "direction", as_vector(self.direction))
        if self.direction.is_zero():
            raise ValueError("ray direction must be non-zero")

    def point_at(self, t: ScalarLike) -> Point:
        return self.source + self.direction * t


@dataclass(frozen=True, eq=False)
class Arc:
    """Circular arc from ``source`` to ``target`` sweeping less than a half-turn.

    ``orientation`` is the direction of travel around ``center``; both end
    points must lie on the circle.
    """

    center: Point
    radius: Scalar
    source: Point
    target: Point
    orientation: Orientation = Orientation.CLOCKWISE

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_point(self.center))
        object.__setattr__(self, "radius", simplify(self.radius))
        object.__setattr__(self, "source", as_point(self.source))
        object.__setattr__(self, "target", as_point(self.target))
        if sign(self.radius) <= 0:
            raise ValueError("arc radius must be positive")
        if self.orientation is Orientation.COLLINEAR:
            raise ValueError("arc orientation must be clockwise or counterclockwise")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Arc):
            return NotImplemented
        return (
            self.orientation is other.orientation
            and self.center == other.center
            and sign(self.radius - other.radius) == 0
            and self.source == other.source
            and self.target == other.target
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def squared_radius(self) -> Scalar:
        return simplify(self.radius * self.radius)

    def midpoint(self) -> Point:
        """Exact point halfway along the sweep."""
        bisector = (self.source - self.center) + (self.target - self.center)
        return self.center + bisector.scaled_to(self.radius)

    def reversed(self) -> "Arc":
        flipped = Orientation(-self.orientation.value)
        return Arc(self.center, self.radius, self.target, self.source, flipped)


__all__ = [
    "Orientation",
    "Vector",
    "Point",
    "PointLike",
    "VectorLike",
    "as_point",
    "as_vector",
    "Segment",
    "Ray",
    "Arc",
]
