from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MealRecord(BaseModel):
    id: str
    user_id: str
    meal_name: str
    calories: float | None = Field(None, ge=0)
    notes: str | None = None
    eaten_at: datetime

    model_config = ConfigDict(from_attributes=True)
