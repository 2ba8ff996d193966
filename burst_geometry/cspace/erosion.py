"""Erode an enclosure polygon by the robot radius into a configuration-space boundary.

Every edge contributes its inward offset segment and every reflex vertex a
clockwise arc joining the offsets of its two edges. These raw features are
split at all of their mutual intersections; a sub-piece survives when a point
of its interior keeps at least the radius of clearance from every wall and
lies inside the enclosure. Survivors are linked end to start into exactly one
counter-clockwise loop, or the construction is reported degenerate.
"""

from __future__ import annotations

import functools
import logging
import math
from typing import FrozenSet, List, Optional, Sequence, Tuple

import sympy

from ..config import _current_config
from ..enclosure import Enclosure
from ..kernel.intersections import intersect
from ..kernel.numbers import ONE, TWO, ScalarLike, compare, sign, simplify, to_exact
from ..kernel.predicates import arc_order_key, clear_of_segment, in_arc_sweep, turn, winding_number
from ..kernel.types import Orientation, Point
from .boundary import Boundary, BoundaryArc, BoundaryPiece, BoundarySegment

logger = logging.getLogger(__name__)


class DegenerateErosion(Exception):
    """The eroded region is empty, pinched or otherwise not a single simple loop."""


def _offset_features(
    vertices: Sequence[Point], radius
) -> List[Tuple[BoundaryPiece, FrozenSet[int]]]:
    """Raw offset segments and reflex arcs, each with the edges it hugs by construction."""

    count = len(vertices)
    edges = [vertices[(i + 1) % count] - vertices[i] for i in range(count)]
    offsets = [edge.perpendicular().scaled_to(radius) for edge in edges]

    features: List[Tuple[BoundaryPiece, FrozenSet[int]]] = []
    for i in range(count):
        start = vertices[i]
        previous = (i - 1) % count
        if turn(edges[previous], edges[i]) < 0:
            arc = BoundaryArc(
                start,
                radius,
                start + offsets[previous],
                start + offsets[i],
                Orientation.CLOCKWISE,
                vertex_index=i,
            )
            features.append((arc, frozenset({previous, i})))
        segment = BoundarySegment(start + offsets[i], vertices[(i + 1) % count] + offsets[i], edge_index=i)
        features.append((segment, frozenset({i})))
    return features


def _segment_order_key(segment: BoundarySegment):
    direction = segment.to_vector()
    return functools.cmp_to_key(
        lambda a, b: compare((a - segment.source).dot(direction), (b - segment.source).dot(direction))
    )


def _split(feature: BoundaryPiece, cuts: List[Point]) -> List[BoundaryPiece]:
    if isinstance(feature, BoundaryArc):
        ordered = sorted(cuts, key=arc_order_key(feature))
    else:
        ordered = sorted(cuts, key=_segment_order_key(feature))
    stops: List[Point] = []
    for point in ordered:
        if not stops or not point == stops[-1]:
            stops.append(point)

    pieces: List[BoundaryPiece] = []
    for start, end in zip(stops, stops[1:]):
        if isinstance(feature, BoundaryArc):
            pieces.append(
                BoundaryArc(
                    feature.center,
                    feature.radius,
                    start,
                    end,
                    feature.orientation,
                    vertex_index=feature.vertex_index,
                )
            )
        else:
            pieces.append(BoundarySegment(start, end, edge_index=feature.edge_index))
    return pieces


def _arc_sample(arc: BoundaryArc) -> Point:
    """A point strictly inside the arc, rational whenever the center and radius are."""

    c = arc.center
    sx, sy = (arc.source - c).to_float()
    tx, ty = (arc.target - c).to_float()
    ux, uy = sx + tx, sy + ty
    norm = math.hypot(ux, uy)
    if norm > 0:
        ux, uy = ux / norm, uy / norm
        flip = ux < 0
        slope = uy / (1 - ux) if flip else uy / (1 + ux)
        m = sympy.Rational(slope).limit_denominator(_current_config().arc_sample_denominator)
        denom = ONE + m * m
        px = (ONE - m * m) / denom
        py = TWO * m / denom
        if flip:
            px = -px
        candidate = Point(c.x + arc.radius * px, c.y + arc.radius * py)
        if in_arc_sweep(candidate, arc, strict=True):
            return candidate
    return arc.midpoint()


def _is_clear(
    piece: BoundaryPiece,
    hugged: FrozenSet[int],
    vertices: Sequence[Point],
    squared_radius,
) -> bool:
    sample = _arc_sample(piece) if isinstance(piece, BoundaryArc) else piece.midpoint()
    count = len(vertices)
    for j in range(count):
        if j in hugged:
            continue
        if not clear_of_segment(sample, vertices[j], vertices[(j + 1) % count], squared_radius):
            return False
    return winding_number(sample, vertices) != 0


def _same_curve(first: BoundaryPiece, second: BoundaryPiece) -> bool:
    return (first.source == second.source and first.target == second.target) or (
        first.source == second.target and first.target == second.source
    )


def _link(pieces: List[BoundaryPiece]) -> List[List[BoundaryPiece]]:
    """Chain pieces end to start into closed loops."""

    for i, first in enumerate(pieces):
        for second in pieces[i + 1 :]:
            if _same_curve(first, second):
                raise DegenerateErosion("two boundary pieces coincide (zero-width corridor)")

    successor: List[int] = []
    claimed = [False] * len(pieces)
    for piece in pieces:
        following = [j for j, other in enumerate(pieces) if other.source == piece.target]
        if not following:
            raise DegenerateErosion("boundary chain does not close")
        if len(following) > 1:
            raise DegenerateErosion("boundary touches itself (pinch point)")
        if claimed[following[0]]:
            raise DegenerateErosion("boundary touches itself (pinch point)")
        claimed[following[0]] = True
        successor.append(following[0])

    loops: List[List[BoundaryPiece]] = []
    visited = [False] * len(pieces)
    for start in range(len(pieces)):
        if visited[start]:
            continue
        loop = []
        index = start
        while not visited[index]:
            visited[index] = True
            loop.append(pieces[index])
            index = successor[index]
        loops.append(loop)
    return loops


def _merge(loop: List[BoundaryPiece]) -> List[BoundaryPiece]:
    """Fuse consecutive pieces that come from the same edge or vertex."""

    cut = next(
        (k for k in range(len(loop)) if loop[k].feature != loop[k - 1].feature),
        0,
    )
    rotated = loop[cut:] + loop[:cut]
    merged: List[BoundaryPiece] = []
    for piece in rotated:
        if merged and merged[-1].feature == piece.feature:
            head = merged[-1]
            if isinstance(head, BoundaryArc):
                merged[-1] = BoundaryArc(
                    head.center,
                    head.radius,
                    head.source,
                    piece.target,
                    head.orientation,
                    vertex_index=head.vertex_index,
                )
            else:
                merged[-1] = BoundarySegment(head.source, piece.target, edge_index=head.edge_index)
        else:
            merged.append(piece)
    return merged


def _erode(enclosure: Enclosure, radius) -> Boundary:
    vertices = enclosure.counterclockwise()
    squared_radius = simplify(radius * radius)
    features = _offset_features(vertices, radius)

    cuts: List[List[Point]] = [[feature.source, feature.target] for feature, _ in features]
    for i in range(len(features)):
        for j in range(i + 1, len(features)):
            for point in intersect(features[i][0], features[j][0]):
                cuts[i].append(point)
                cuts[j].append(point)

    survivors: List[BoundaryPiece] = []
    for (feature, hugged), feature_cuts in zip(features, cuts):
        for piece in _split(feature, feature_cuts):
            if _is_clear(piece, hugged, vertices, squared_radius):
                survivors.append(piece)
    logger.debug("%d raw features, %d surviving pieces", len(features), len(survivors))

    if not survivors:
        raise DegenerateErosion("enclosure is too small for the robot")
    loops = _link(survivors)
    if len(loops) != 1:
        raise DegenerateErosion(f"free space splits into {len(loops)} components")
    loop = _merge(loops[0])
    if len(loop) < 2:
        raise DegenerateErosion("eroded boundary has no interior")
    boundary = Boundary(tuple(loop))
    if boundary.orientation is not Orientation.COUNTERCLOCKWISE:
        raise DegenerateErosion("eroded boundary has no interior")
    return boundary


def construct_boundary(enclosure: Enclosure, radius: ScalarLike) -> Optional[Boundary]:
    """Configuration-space boundary for a robot of ``radius`` inside ``enclosure``.

    Returns ``None`` when the eroded region is empty or degenerate (pinched,
    split into several components or of zero width). Raises ``ValueError`` for
    a non-positive radius.
    """

    r = to_exact(radius)
    if sign(r) <= 0:
        raise ValueError(f"robot radius must be positive, got {radius!r}")
    try:
        boundary = _erode(enclosure, r)
    except DegenerateErosion as exc:
        logger.info("No configuration space for radius %s: %s", r, exc)
        return None
    logger.info(
        "Constructed boundary for radius %s: %d segments, %d arcs",
        r,
        len(boundary.segments),
        len(boundary.arcs),
    )
    return boundary


__all__ = ["construct_boundary", "DegenerateErosion"]
