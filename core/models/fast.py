from __future__ import annotations
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FastStatus(str, Enum):
    active = "active"
    completed = "completed"


class FastRecord(BaseModel):
    id: str
    user_id: str
    started_at: datetime
    ended_at: datetime | None = None
    schedule_type: str
    fasting_hours: float = Field(..., gt=0)
    status: FastStatus = FastStatus.active
    notes: str | None = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def duration_hours(self) -> float | None:
        if self.ended_at is None:
            return None
        return (self.ended_at - self.started_at).total_seconds() / 3600
