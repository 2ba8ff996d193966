"""Exact planar kernel: scalars, primitives, predicates and intersections."""

from .numbers import (
    Scalar,
    ScalarLike,
    compare,
    divide,
    exact_sqrt,
    heading_direction,
    is_exact_zero,
    sign,
    to_exact,
)
from .predicates import in_arc_sweep, on_arc, on_segment, orientation, winding_number
from .types import Arc, Orientation, Point, PointLike, Ray, Segment, Vector, as_point, as_vector

__all__ = [
    "Scalar",
    "ScalarLike",
    "compare",
    "divide",
    "exact_sqrt",
    "heading_direction",
    "is_exact_zero",
    "sign",
    "to_exact",
    "in_arc_sweep",
    "on_arc",
    "on_segment",
    "orientation",
    "winding_number",
    "Arc",
    "Orientation",
    "Point",
    "PointLike",
    "Ray",
    "Segment",
    "Vector",
    "as_point",
    "as_vector",
]
