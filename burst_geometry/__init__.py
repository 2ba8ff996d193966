from .config import EngineConfig, get_engine_config, set_engine_config
from .cspace import Boundary, BoundaryArc, BoundarySegment, BoundingBox, Location, construct_boundary
from .enclosure import Enclosure, EnclosureError
from .kernel import Arc, Orientation, Point, Ray, Segment, Vector
from .models import (
    FixedRotationModel,
    LinearMovementModel,
    RotationModel,
    UniformRotationModel,
    make_rotation_model,
)

__all__ = [
    "Enclosure",
    "EnclosureError",
    "construct_boundary",
    "Boundary",
    "BoundarySegment",
    "BoundaryArc",
    "BoundingBox",
    "Location",
    "Point",
    "Vector",
    "Segment",
    "Ray",
    "Arc",
    "Orientation",
    "LinearMovementModel",
    "RotationModel",
    "UniformRotationModel",
    "FixedRotationModel",
    "make_rotation_model",
    "EngineConfig",
    "get_engine_config",
    "set_engine_config",
]
