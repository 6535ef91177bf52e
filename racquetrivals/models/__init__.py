from .base import Base

# import models so Alembic/autoloaders can discover mappers
from .draw import Draw, DrawSlot  # noqa: F401
from .prediction import Prediction  # noqa: F401
from .user import User  # noqa: F401

__all__ = [
    "Base",
    "Draw",
    "DrawSlot",
    "Prediction",
    "User",
]
