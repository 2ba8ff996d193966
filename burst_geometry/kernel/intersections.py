"""Exact intersection routines for segments, arcs and parametric lines.

Parametric helpers work on ``origin + t * direction`` and return the raw
parameters; callers decide which range of ``t`` they care about.
"""

from __future__ import annotations

import functools
from typing import List, Optional, Sequence, Tuple

from .numbers import TWO, Scalar, compare, divide, exact_sqrt, sign, simplify
from .predicates import in_arc_sweep, on_segment
from .types import Arc, Point, Segment, Vector


def sorted_unique(values: Sequence[Scalar]) -> List[Scalar]:
    """Sort exact scalars and drop exact duplicates."""

    ordered = sorted(values, key=functools.cmp_to_key(compare))
    unique: List[Scalar] = []
    for value in ordered:
        if not unique or compare(value, unique[-1]) != 0:
            unique.append(value)
    return unique


def unique_points(points: Sequence[Point]) -> List[Point]:
    unique: List[Point] = []
    for point in points:
        if not any(point == seen for seen in unique):
            unique.append(point)
    return unique


def line_line_parameters(
    origin: Point, direction: Vector, anchor: Point, edge: Vector
) -> Optional[Tuple[Scalar, Scalar]]:
    """Solve ``origin + t*direction == anchor + u*edge``; ``None`` when parallel."""

    denom = direction.cross(edge)
    if sign(denom) == 0:
        return None
    offset = anchor - origin
    return divide(offset.cross(edge), denom), divide(offset.cross(direction), denom)


def line_segment_parameters(origin: Point, direction: Vector, segment: Segment) -> List[Scalar]:
    """Parameters ``t`` where the line meets ``segment``.

    A collinear overlap contributes the parameters of both segment ends.
    """

    edge = segment.to_vector()
    solved = line_line_parameters(origin, direction, segment.source, edge)
    if solved is not None:
        t, u = solved
        if sign(u) >= 0 and sign(u - 1) <= 0:
            return [t]
        return []
    if sign((segment.source - origin).cross(direction)) != 0:
        return []
    length2 = direction.squared_length()
    return [
        divide((segment.source - origin).dot(direction), length2),
        divide((segment.target - origin).dot(direction), length2),
    ]


def line_circle_parameters(
    origin: Point, direction: Vector, center: Point, squared_radius: Scalar
) -> List[Scalar]:
    """Ascending parameters where the line meets the circle."""

    a = direction.squared_length()
    offset = origin - center
    b = simplify(TWO * direction.dot(offset))
    c = simplify(offset.squared_length() - squared_radius)
    if sign(c) == 0:
        other = divide(-b, a)
        return sorted_unique([simplify(0), other])
    disc = simplify(b * b - 4 * a * c)
    disc_sign = sign(disc)
    if disc_sign < 0:
        return []
    if disc_sign == 0:
        return [divide(-b, TWO * a)]
    root = exact_sqrt(disc)
    return [divide(-b - root, TWO * a), divide(-b + root, TWO * a)]


def segment_segment(first: Segment, second: Segment) -> List[Point]:
    """Intersection points of two segments; overlaps yield their end points."""

    direction = first.to_vector()
    edge = second.to_vector()
    solved = line_line_parameters(first.source, direction, second.source, edge)
    if solved is not None:
        t, u = solved
        if sign(t) >= 0 and sign(t - 1) <= 0 and sign(u) >= 0 and sign(u - 1) <= 0:
            return [first.point_at(t)]
        return []
    candidates = [p for p in (first.source, first.target) if on_segment(p, second)]
    candidates += [p for p in (second.source, second.target) if on_segment(p, first)]
    return unique_points(candidates)


def segment_arc(segment: Segment, arc: Arc) -> List[Point]:
    points = []
    direction = segment.to_vector()
    for t in line_circle_parameters(segment.source, direction, arc.center, arc.squared_radius):
        if sign(t) < 0 or sign(t - 1) > 0:
            continue
        point = segment.point_at(t)
        if in_arc_sweep(point, arc):
            points.append(point)
    return points


def arc_arc(first: Arc, second: Arc) -> List[Point]:
    """Intersection points of two arcs on distinct circles.

    Arcs on concentric circles never meet at isolated points and yield ``[]``.
    """

    between = second.center - first.center
    distance2 = between.squared_length()
    if sign(distance2) == 0:
        return []
    along = divide(first.squared_radius - second.squared_radius + distance2, TWO * distance2)
    height2 = simplify(divide(first.squared_radius, distance2) - along * along)
    height_sign = sign(height2)
    if height_sign < 0:
        return []
    foot = first.center + between * along
    if height_sign == 0:
        candidates = [foot]
    else:
        offset = between.perpendicular() * exact_sqrt(height2)
        candidates = [foot + offset, foot + (-offset)]
    return [p for p in candidates if in_arc_sweep(p, first) and in_arc_sweep(p, second)]


def intersect(first: object, second: object) -> List[Point]:
    """Dispatch on segment/arc pairs."""

    if isinstance(first, Arc):
        if isinstance(second, Arc):
            return arc_arc(first, second)
        return segment_arc(second, first)  # type: ignore[arg-type]
    if isinstance(second, Arc):
        return segment_arc(first, second)  # type: ignore[arg-type]
    return segment_segment(first, second)  # type: ignore[arg-type]


__all__ = [
    "sorted_unique",
    "unique_points",
    "line_line_parameters",
    "line_segment_parameters",
    "line_circle_parameters",
    "segment_segment",
    "segment_arc",
    "arc_arc",
    "intersect",
]
