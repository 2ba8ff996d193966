"""Movement and rotation models for the blind robot."""

from .movement import LinearMovementModel, MovementModel
from .rotation import FixedRotationModel, RotationModel, UniformRotationModel, make_rotation_model

__all__ = [
    "LinearMovementModel",
    "MovementModel",
    "RotationModel",
    "UniformRotationModel",
    "FixedRotationModel",
    "make_rotation_model",
]
