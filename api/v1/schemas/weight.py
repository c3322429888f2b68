from __future__ import annotations

from pydantic import BaseModel

from core.models import WeightEntry


class WeightIn(BaseModel):
    weight: float | str | None = None
    notes: str | None = None


class WeightSummaryOut(BaseModel):
    latest: float | None
    earliest: float | None
    total_change: float | None
    distance_to_goal: float | None
    target_weight: float | None


class WeightPageOut(BaseModel):
    entries: list[WeightEntry]
    summary: WeightSummaryOut
