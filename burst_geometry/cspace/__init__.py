"""Configuration space: eroded boundary construction and queries."""

from .boundary import Boundary, BoundaryArc, BoundarySegment, BoundingBox, Location
from .erosion import construct_boundary

__all__ = [
    "Boundary",
    "BoundaryArc",
    "BoundarySegment",
    "BoundingBox",
    "Location",
    "construct_boundary",
]
