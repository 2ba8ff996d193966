"""Exact geometric predicates over the kernel primitives."""

from __future__ import annotations

import functools
from typing import Sequence

from .numbers import Scalar, sign, simplify
from .types import Arc, Orientation, Point, Segment, Vector


def orientation(a: Point, b: Point, c: Point) -> Orientation:
    """Turn direction of the path a -> b -> c."""
    return Orientation(sign((b - a).cross(c - a)))


def turn(incoming: Vector, outgoing: Vector) -> int:
    return sign(incoming.cross(outgoing))


def signed_area2(vertices: Sequence[Point]) -> Scalar:
    """Twice the signed area of the polygon through ``vertices``."""
    total = 0
    count = len(vertices)
    for index, current in enumerate(vertices):
        following = vertices[(index + 1) % count]
        total += current.x * following.y - current.y * following.x
    return simplify(total)


def on_segment(point: Point, segment: Segment) -> bool:
    edge = segment.to_vector()
    offset = point - segment.source
    if sign(edge.cross(offset)) != 0:
        return False
    return sign(offset.dot(edge)) >= 0 and sign((segment.target - point).dot(edge)) >= 0


def on_circle(point: Point, center: Point, squared_radius: Scalar) -> int:
    """Sign of |point - center|^2 - r^2: -1 inside, 0 on, 1 outside."""
    return sign((point - center).squared_length() - squared_radius)


def in_arc_sweep(point: Point, arc: Arc, *, strict: bool = False) -> bool:
    """Whether the direction of ``point`` from the arc center lies within the sweep.

    The point is not required to be on the circle. With ``strict`` the end
    directions themselves are excluded.
    """

    k = arc.orientation.value
    radial = point - arc.center
    after_source = sign((arc.source - arc.center).cross(radial)) * k
    before_target = sign(radial.cross(arc.target - arc.center)) * k
    if strict:
        return after_source > 0 and before_target > 0
    return after_source >= 0 and before_target >= 0


def on_arc(point: Point, arc: Arc) -> bool:
    if on_circle(point, arc.center, arc.squared_radius) != 0:
        return False
    return in_arc_sweep(point, arc)


def precedes_on_arc(first: Point, second: Point, arc: Arc) -> int:
    """Comparison key for points on ``arc``: negative when ``first`` comes earlier."""
    k = arc.orientation.value
    return -k * sign((first - arc.center).cross(second - arc.center))


def arc_order_key(arc: Arc):
    """Sort key ordering points along ``arc`` from source to target."""
    return functools.cmp_to_key(lambda a, b: precedes_on_arc(a, b, arc))


def clear_of_segment(point: Point, a: Point, b: Point, squared_radius: Scalar) -> bool:
    """True when the distance from ``point`` to segment ab is at least the radius."""

    edge = b - a
    offset = point - a
    if sign(offset.dot(edge)) <= 0:
        return sign(offset.squared_length() - squared_radius) >= 0
    beyond = point - b
    if sign(beyond.dot(edge)) >= 0:
        return sign(beyond.squared_length() - squared_radius) >= 0
    cross = edge.cross(offset)
    return sign(cross * cross - squared_radius * edge.squared_length()) >= 0


def winding_number(point: Point, vertices: Sequence[Point]) -> int:
    """Winding number of the closed polygon ``vertices`` around ``point``."""

    winding = 0
    count = len(vertices)
    for index, start in enumerate(vertices):
        end = vertices[(index + 1) % count]
        if sign(start.y - point.y) <= 0:
            if sign(end.y - point.y) > 0 and orientation(start, end, point) is Orientation.COUNTERCLOCKWISE:
                winding += 1
        elif sign(end.y - point.y) <= 0 and orientation(start, end, point) is Orientation.CLOCKWISE:
            winding -= 1
    return winding


__all__ = [
    "orientation",
    "turn",
    "signed_area2",
    "on_segment",
    "on_circle",
    "in_arc_sweep",
    "on_arc",
    "precedes_on_arc",
    "arc_order_key",
    "clear_of_segment",
    "winding_number",
]
