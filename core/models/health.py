from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict


class HealthSnapshot(BaseModel):
    user_id: str
    date: dt.date
    steps: float | None = None
    active_energy: float | None = None
    weight: float | None = None
    heart_rate: float | None = None
    source: str

    model_config = ConfigDict(from_attributes=True)
