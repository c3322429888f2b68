"""Plain records shared by the engines and the record store."""

from .fast import FastRecord, FastStatus
from .health import HealthSnapshot
from .meal import MealRecord
from .profile import Profile, Role
from .weight import WeightEntry

__all__ = [
    "FastRecord",
    "FastStatus",
    "HealthSnapshot",
    "MealRecord",
    "Profile",
    "Role",
    "WeightEntry",
]
