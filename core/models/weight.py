from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WeightEntry(BaseModel):
    id: str
    user_id: str
    weight: float = Field(..., gt=0)   # unit is whatever the user logs in
    recorded_at: datetime
    notes: str | None = None

    model_config = ConfigDict(from_attributes=True)
