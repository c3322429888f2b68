from __future__ import annotations
from datetime import date

from pydantic import BaseModel

from core.models import HealthSnapshot, Profile


class ProfileIn(BaseModel):
    display_name: str | None = None
    target_weight: float | None = None
    preferred_schedule: str | None = "16:8"


class WaterIn(BaseModel):
    delta: int = 1


class WaterOut(BaseModel):
    day: date
    glasses: int
    goal: int
    progress: float
    over_goal: bool


class ConnectIn(BaseModel):
    kinds: list[str] | None = None


class SyncOut(BaseModel):
    status: str
    message: str
    snapshot: HealthSnapshot | None = None
    failed_kinds: list[str] = []
    imported_steps: float | None = None


class AdminOut(BaseModel):
    total_users: int
    active_fasts: int
    total_snapshots: int
    profiles: list[Profile]
