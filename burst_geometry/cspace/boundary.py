"""Configuration-space boundary and its exact membership and crossing queries.

A :class:`Boundary` is the closed counter-clockwise curve traced by the robot
center when it touches the walls. Its pieces are straight segments on the
inward offsets of enclosure edges and clockwise arcs around reflex enclosure
vertices. All queries are decided with exact predicates; the region to the
left of the curve is the legal (INSIDE) side.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ..kernel.intersections import line_circle_parameters, line_segment_parameters, sorted_unique
from ..kernel.numbers import TWO, ZERO, Scalar, compare, divide, exact_abs, sign, simplify
from ..kernel.predicates import arc_order_key, in_arc_sweep, on_arc, on_segment, orientation
from ..kernel.types import (
    Arc,
    Orientation,
    Point,
    PointLike,
    Ray,
    Segment,
    Vector,
    VectorLike,
    as_point,
    as_vector,
)
from ..logging_utils import apply_debug_logging

logger = logging.getLogger(__name__)


class Location(Enum):
    INSIDE = "inside"
    OUTSIDE = "outside"
    ON = "on"


@dataclass(frozen=True, eq=False)
class BoundarySegment(Segment):
    """Straight piece on the inward offset of enclosure edge ``edge_index``."""

    edge_index: int = -1

    @property
    def feature(self) -> Tuple[str, int]:
        return ("edge", self.edge_index)


@dataclass(frozen=True, eq=False)
class BoundaryArc(Arc):
    """Clockwise piece around reflex enclosure vertex ``vertex_index``."""

    vertex_index: int = -1

    @property
    def feature(self) -> Tuple[str, int]:
        return ("vertex", self.vertex_index)


BoundaryPiece = Union[BoundarySegment, BoundaryArc]
Probe = Union[Ray, Segment]


@dataclass(frozen=True, eq=False)
class BoundingBox:
    xmin: Scalar
    ymin: Scalar
    xmax: Scalar
    ymax: Scalar

    @property
    def width(self) -> Scalar:
        return simplify(self.xmax - self.xmin)

    @property
    def height(self) -> Scalar:
        return simplify(self.ymax - self.ymin)

    @property
    def center(self) -> Point:
        return Point((self.xmin + self.xmax) / TWO, (self.ymin + self.ymax) / TWO)

    def contains(self, point: PointLike) -> bool:
        p = as_point(point)
        return (
            compare(p.x, self.xmin) >= 0
            and compare(self.xmax, p.x) >= 0
            and compare(p.y, self.ymin) >= 0
            and compare(self.ymax, p.y) >= 0
        )

    def to_float(self) -> Tuple[float, float, float, float]:
        return float(self.xmin), float(self.ymin), float(self.xmax), float(self.ymax)


@dataclass(frozen=True, eq=False)
class _MonotonePart:
    """Piece of the boundary with strictly increasing y from ``lower`` to ``upper``."""

    lower: Point
    upper: Point
    center: Optional[Point] = None
    squared_radius: Optional[Scalar] = None
    right: bool = True

    def crosses_right_of(self, point: Point) -> bool:
        # half-open in y so a ray through a shared end point counts once
        if sign(self.lower.y - point.y) > 0 or sign(point.y - self.upper.y) >= 0:
            return False
        if self.center is None:
            return orientation(self.lower, self.upper, point) is Orientation.COUNTERCLOCKWISE
        offset = point - self.center
        circle = sign(offset.squared_length() - self.squared_radius)
        if self.right:
            return sign(offset.x) < 0 or circle < 0
        return sign(offset.x) < 0 and circle > 0


def _extreme(values: Sequence[Scalar], largest: bool) -> Scalar:
    best = values[0]
    for value in values[1:]:
        delta = compare(value, best)
        if (delta > 0 and largest) or (delta < 0 and not largest):
            best = value
    return best


def _arc_monotone_parts(arc: BoundaryArc) -> List[_MonotonePart]:
    r = arc.radius
    turning = [
        point
        for point in (Point(arc.center.x, arc.center.y + r), Point(arc.center.x, arc.center.y - r))
        if in_arc_sweep(point, arc, strict=True)
    ]
    turning.sort(key=arc_order_key(arc))
    stops = [arc.source, *turning, arc.target]
    parts = []
    for start, end in zip(stops, stops[1:]):
        rising = sign(end.y - start.y)
        if rising == 0:
            continue
        lower, upper = (start, end) if rising > 0 else (end, start)
        side = sign(start.x - arc.center.x) or sign(end.x - arc.center.x)
        if side == 0:
            # half circle between the poles
            descending = sign(start.y - arc.center.y) > 0
            right = descending == (arc.orientation is Orientation.CLOCKWISE)
        else:
            right = side > 0
        parts.append(_MonotonePart(lower, upper, arc.center, arc.squared_radius, right))
    return parts


@dataclass(frozen=True, eq=False)
class Boundary:
    """Closed counter-clockwise curve of segments and arcs.

    Derived structures (``bbox``, ``vertices``, the y-monotone decomposition)
    are computed on first use and cached.
    """

    pieces: Tuple[BoundaryPiece, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pieces", tuple(self.pieces))
        if len(self.pieces) < 2:
            raise ValueError("a closed boundary needs at least two pieces")

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self):
        return iter(self.pieces)

    @property
    def segments(self) -> Tuple[BoundarySegment, ...]:
        return tuple(piece for piece in self.pieces if isinstance(piece, BoundarySegment))

    @property
    def arcs(self) -> Tuple[BoundaryArc, ...]:
        return tuple(piece for piece in self.pieces if isinstance(piece, BoundaryArc))

    @cached_property
    def vertices(self) -> Tuple[Point, ...]:
        """Start points of the pieces, in boundary order."""
        return tuple(piece.source for piece in self.pieces)

    @cached_property
    def orientation(self) -> Orientation:
        total = ZERO
        for piece in self.pieces:
            total += piece.source.x * piece.target.y - piece.source.y * piece.target.x
        return Orientation(sign(total))

    @cached_property
    def bbox(self) -> BoundingBox:
        points: List[Point] = []
        for piece in self.pieces:
            points.append(piece.source)
            if isinstance(piece, BoundaryArc):
                c, r = piece.center, piece.radius
                for extreme in (
                    Point(c.x + r, c.y),
                    Point(c.x - r, c.y),
                    Point(c.x, c.y + r),
                    Point(c.x, c.y - r),
                ):
                    if in_arc_sweep(extreme, piece):
                        points.append(extreme)
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return BoundingBox(
            _extreme(xs, largest=False),
            _extreme(ys, largest=False),
            _extreme(xs, largest=True),
            _extreme(ys, largest=True),
        )

    @cached_property
    def _monotone_parts(self) -> Tuple[_MonotonePart, ...]:
        parts: List[_MonotonePart] = []
        for piece in self.pieces:
            if isinstance(piece, BoundaryArc):
                parts.extend(_arc_monotone_parts(piece))
                continue
            rising = sign(piece.target.y - piece.source.y)
            if rising > 0:
                parts.append(_MonotonePart(piece.source, piece.target))
            elif rising < 0:
                parts.append(_MonotonePart(piece.target, piece.source))
        return tuple(parts)

    @staticmethod
    def _on_piece(point: Point, piece: BoundaryPiece) -> bool:
        if isinstance(piece, BoundaryArc):
            return on_arc(point, piece)
        return on_segment(point, piece)

    def pieces_through(self, point: PointLike) -> Tuple[BoundaryPiece, ...]:
        """Pieces passing through ``point``; two at a junction, none off the curve."""
        p = as_point(point)
        return tuple(piece for piece in self.pieces if self._on_piece(p, piece))

    def contains(self, point: PointLike) -> bool:
        """Whether ``point`` lies exactly on the boundary."""
        p = as_point(point)
        return any(self._on_piece(p, piece) for piece in self.pieces)

    def classify(self, point: PointLike) -> Location:
        p = as_point(point)
        if self.contains(p):
            return Location.ON
        hits = sum(1 for part in self._monotone_parts if part.crosses_right_of(p))
        return Location.INSIDE if hits % 2 else Location.OUTSIDE

    def _ray_length(self, origin: Point, direction: Vector) -> Scalar:
        box = self.bbox
        mid_x, mid_y = box.center.to_float()
        reach = (
            math.ceil(abs(float(origin.x) - mid_x))
            + math.ceil(abs(float(origin.y) - mid_y))
            + math.ceil(float(box.width))
            + math.ceil(float(box.height))
            + 2
        )
        dx, dy = exact_abs(direction.x), exact_abs(direction.y)
        longest = dx if compare(dx, dy) >= 0 else dy
        return divide(reach, longest)

    def _probe_extent(self, probe: Probe) -> Tuple[Point, Vector, Scalar]:
        if isinstance(probe, Ray):
            return probe.source, probe.direction, self._ray_length(probe.source, probe.direction)
        if isinstance(probe, Segment):
            if probe.is_degenerate():
                raise ValueError("probe segment has zero length")
            return probe.source, probe.to_vector(), simplify(1)
        raise TypeError(f"probe must be a Ray or Segment, got {type(probe).__name__}")

    @staticmethod
    def _meeting_parameters(piece: BoundaryPiece, source: Point, direction: Vector) -> List[Scalar]:
        if isinstance(piece, BoundaryArc):
            return [
                t
                for t in line_circle_parameters(source, direction, piece.center, piece.squared_radius)
                if in_arc_sweep(source + direction * t, piece)
            ]
        return line_segment_parameters(source, direction, piece)

    def _trace(
        self, source: Point, direction: Vector, t_max: Scalar
    ) -> Tuple[List[Scalar], List[Location]]:
        """Meeting parameters in (0, t_max) and the status of each interval between them."""

        candidates: List[Scalar] = []
        for piece in self.pieces:
            candidates.extend(self._meeting_parameters(piece, source, direction))
        events = sorted_unique([t for t in candidates if sign(t) > 0 and sign(t - t_max) < 0])
        cuts = [ZERO, *events, t_max]
        statuses = [
            self.classify(source + direction * ((lo + hi) / TWO)) for lo, hi in zip(cuts, cuts[1:])
        ]
        return events, statuses

    def first_crossing(self, origin: PointLike, direction: VectorLike) -> Optional[Point]:
        """First point past ``origin`` where the ray meets the boundary.

        Contacts with the pieces through ``origin`` itself are ignored unless
        the ray leaves the legal region there; any contact with another piece,
        tangential ones included, ends the ray. Returns ``None`` when the ray
        heads straight into the exterior.
        """

        source = as_point(origin)
        heading = as_vector(direction)
        if heading.is_zero():
            raise ValueError("direction must be non-zero")
        events, statuses = self._trace(source, heading, self._ray_length(source, heading))
        if statuses[0] is Location.OUTSIDE:
            logger.debug("Ray from %s leaves the region immediately", source.to_float())
            return None
        own = self.pieces_through(source)
        others = [piece for piece in self.pieces if all(piece is not mine for mine in own)]
        for index, t in enumerate(events):
            point = source + heading * t
            # any contact with another piece stops the robot, tangent or not
            if statuses[index + 1] is Location.OUTSIDE or any(
                self._on_piece(point, piece) for piece in others
            ):
                return point
        return None

    def crossings(self, probe: Probe) -> List[Point]:
        """Points where the probe passes between INSIDE and OUTSIDE, in order."""

        source, direction, t_max = self._probe_extent(probe)
        events, statuses = self._trace(source, direction, t_max)
        points: List[Point] = []
        previous: Optional[Location] = None
        contact = 0
        for index, status in enumerate(statuses):
            if status is Location.ON:
                continue
            if previous is not None and status is not previous:
                points.append(source + direction * events[contact])
            previous = status
            contact = index
        return points

    def count_crossings(self, probe: Probe) -> int:
        return len(self.crossings(probe))

    def to_polyline(self, arc_steps: int = 16) -> np.ndarray:
        """Closed float approximation of the curve, shape ``(n + 1, 2)``."""

        if arc_steps < 1:
            raise ValueError("arc_steps must be positive")
        chunks: List[np.ndarray] = []
        for piece in self.pieces:
            if not isinstance(piece, BoundaryArc):
                chunks.append(piece.source.to_numpy()[None, :])
                continue
            cx, cy = piece.center.to_float()
            sx, sy = piece.source.to_float()
            tx, ty = piece.target.to_float()
            start = math.atan2(sy - cy, sx - cx)
            sweep = math.atan2(ty - cy, tx - cx) - start
            if piece.orientation is Orientation.CLOCKWISE:
                while sweep > 0:
                    sweep -= 2 * math.pi
            else:
                while sweep < 0:
                    sweep += 2 * math.pi
            angles = start + sweep * np.linspace(0.0, 1.0, arc_steps, endpoint=False)
            radius = float(piece.radius)
            chunks.append(np.column_stack([cx + radius * np.cos(angles), cy + radius * np.sin(angles)]))
        chunks.append(chunks[0][:1])
        return np.vstack(chunks)


apply_debug_logging(
    globals(),
    "_arc_monotone_parts",
    "Boundary._ray_length",
    "Boundary._probe_extent",
    "Boundary.pieces_through",
    "Boundary.first_crossing",
    "Boundary.crossings",
    "Boundary.count_crossings",
    "Boundary.to_polyline",
    logger=logger,
)


__all__ = [
    "Boundary",
    "BoundaryArc",
    "BoundaryPiece",
    "BoundarySegment",
    "BoundingBox",
    "Location",
    "Probe",
]
