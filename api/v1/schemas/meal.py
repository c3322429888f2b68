from __future__ import annotations
from datetime import date

from pydantic import BaseModel, Field

from core.models import MealRecord


class MealIn(BaseModel):
    meal_name: str = Field(..., examples=["Greek yoghurt bowl"])
    calories: float | str | None = None
    notes: str | None = None


class MealDayOut(BaseModel):
    day: date
    meals: list[MealRecord]
    total_calories: float
    has_calories: bool
    goal_met: bool
