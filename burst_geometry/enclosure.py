"""Validated polygonal enclosures (the walls the robot moves within)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .kernel.intersections import segment_segment
from .kernel.numbers import sign
from .kernel.predicates import orientation, signed_area2, turn
from .kernel.types import Orientation, Point, PointLike, Segment, as_point

logger = logging.getLogger(__name__)


class EnclosureError(ValueError):
    """Raised when a vertex list does not describe a simple polygon."""


def _check_simple(vertices: Tuple[Point, ...]) -> None:
    count = len(vertices)
    edges = [Segment(vertices[i], vertices[(i + 1) % count]) for i in range(count)]
    for i in range(count):
        for j in range(i + 1, count):
            adjacent = j == i + 1 or (i == 0 and j == count - 1)
            if adjacent:
                # edges share one vertex; they may only fold back onto each other
                if j == i + 1:
                    before, shared, after = vertices[i], vertices[j], vertices[(j + 1) % count]
                else:
                    before, shared, after = vertices[j], vertices[0], vertices[1]
                if (
                    orientation(before, shared, after) is Orientation.COLLINEAR
                    and sign((before - shared).dot(after - shared)) > 0
                ):
                    raise EnclosureError(
                        f"edges {i} and {j} overlap at vertex ({shared.x}, {shared.y})"
                    )
                continue
            if segment_segment(edges[i], edges[j]):
                raise EnclosureError(f"edges {i} and {j} intersect; polygon is not simple")


@dataclass(frozen=True, eq=False)
class Enclosure:
    vertices: Tuple[Point, ...]
    orientation: Orientation

    @classmethod
    def create(cls, points: Iterable[PointLike]) -> "Enclosure":
        """Validate ``points`` and build an enclosure.

        Raises :class:`EnclosureError` for fewer than three vertices,
        repeated vertices, self-intersections or zero area.
        """

        try:
            vertices = tuple(as_point(point) for point in points)
        except ValueError as exc:
            raise EnclosureError(f"invalid enclosure vertex: {exc}") from exc
        if len(vertices) < 3:
            raise EnclosureError(f"enclosure needs at least 3 vertices, got {len(vertices)}")
        for i, first in enumerate(vertices):
            for j in range(i + 1, len(vertices)):
                if first == vertices[j]:
                    raise EnclosureError(f"vertices {i} and {j} coincide")
        area_sign = sign(signed_area2(vertices))
        if area_sign == 0:
            raise EnclosureError("enclosure has zero area")
        _check_simple(vertices)
        enclosure = cls(vertices, Orientation(area_sign))
        logger.debug(
            "Created enclosure with %d vertices (%s)", len(vertices), enclosure.orientation.name
        )
        return enclosure

    def counterclockwise(self) -> Tuple[Point, ...]:
        if self.orientation is Orientation.COUNTERCLOCKWISE:
            return self.vertices
        return tuple(reversed(self.vertices))

    def edges(self) -> List[Segment]:
        """Edges in counter-clockwise order; edge ``i`` starts at vertex ``i``."""
        vertices = self.counterclockwise()
        count = len(vertices)
        return [Segment(vertices[i], vertices[(i + 1) % count]) for i in range(count)]

    def reflex_vertices(self) -> List[int]:
        """Indices (counter-clockwise order) of vertices turning right."""
        edges = self.edges()
        return [
            index
            for index in range(len(edges))
            if turn(edges[index - 1].to_vector(), edges[index].to_vector()) < 0
        ]

    def __len__(self) -> int:
        return len(self.vertices)


__all__ = ["Enclosure", "EnclosureError"]
