"""Translation models for a robot moving on the configuration-space boundary."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from ..cspace.boundary import Boundary
from ..kernel.numbers import ScalarLike, heading_direction
from ..kernel.types import Point, PointLike, Segment, Vector, as_point

logger = logging.getLogger(__name__)


class MovementModel(Protocol):
    def attempt(self, origin: PointLike, heading: ScalarLike, boundary: Boundary) -> Optional[Point]:
        """Return where the robot stops, or ``None`` when the move is impossible."""


class LinearMovementModel:
    """Straight-line motion until the robot center meets the boundary again.

    The origin must lie on the boundary (the robot starts in wall contact).
    Headings may be floats or exact ``sympy`` angles such as ``sympy.pi / 4``.
    """

    def attempt(self, origin: PointLike, heading: ScalarLike, boundary: Boundary) -> Optional[Point]:
        start = as_point(origin)
        if not boundary.contains(start):
            logger.debug("Movement rejected: origin %s is not on the boundary", start.to_float())
            return None
        direction = Vector(*heading_direction(heading))
        endpoint = boundary.first_crossing(start, direction)
        if endpoint is None:
            logger.debug("Movement rejected: heading %s points out of the free space", heading)
        return endpoint

    def __call__(self, origin: PointLike, heading: ScalarLike, boundary: Boundary) -> Optional[Point]:
        return self.attempt(origin, heading, boundary)

    def path(self, origin: PointLike, heading: ScalarLike, boundary: Boundary) -> Optional[Segment]:
        """Segment swept by the move, ``None`` when no (non-zero) move exists."""

        start = as_point(origin)
        endpoint = self.attempt(start, heading, boundary)
        if endpoint is None or endpoint == start:
            return None
        return Segment(start, endpoint)


__all__ = ["MovementModel", "LinearMovementModel"]
