"""Re-export individual schema modules for easy imports."""

from .fast import AdjustStartIn, EndFastIn, HistoryItem, ScheduleOut, StageOut, StartFastIn, TimerOut
from .insights import BadgeOut, BucketOut, DashboardOut, InsightsOut, QuoteOut
from .meal import MealDayOut, MealIn
from .profile import AdminOut, ConnectIn, ProfileIn, SyncOut, WaterIn, WaterOut
from .weight import WeightIn, WeightPageOut, WeightSummaryOut

__all__ = [
    "AdjustStartIn",
    "AdminOut",
    "BadgeOut",
    "BucketOut",
    "ConnectIn",
    "DashboardOut",
    "EndFastIn",
    "HistoryItem",
    "InsightsOut",
    "MealDayOut",
    "MealIn",
    "ProfileIn",
    "QuoteOut",
    "ScheduleOut",
    "StageOut",
    "StartFastIn",
    "SyncOut",
    "TimerOut",
    "WaterIn",
    "WaterOut",
    "WeightIn",
    "WeightPageOut",
    "WeightSummaryOut",
]
