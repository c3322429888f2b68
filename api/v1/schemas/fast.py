from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, Field

from core.models import FastRecord


class StartFastIn(BaseModel):
    schedule: str = Field("16:8", examples=["16:8", "18:6", "20:4 (OMAD)", "Custom"])
    custom_hours: float | str | None = None


class AdjustStartIn(BaseModel):
    started_at: str = Field(..., examples=["2025-01-15T06:30:00Z"])


class EndFastIn(BaseModel):
    notes: str | None = None


class StageOut(BaseModel):
    hours: float
    label: str
    description: str


class TimerOut(BaseModel):
    fast: FastRecord
    elapsed_ms: float
    remaining_ms: float
    progress: float
    overtime: bool
    label: str
    clock: str
    ring_offset: float
    stage: StageOut


class HistoryItem(BaseModel):
    fast: FastRecord
    duration: str
    started_label: str


class ScheduleOut(BaseModel):
    label: str
    fast_hours: float
