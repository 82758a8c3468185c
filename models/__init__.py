# models/__init__.py

from .users import User
from .attendance import Attendance

__all__ = [
    "User",
    "Attendance",
]
