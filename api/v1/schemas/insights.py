from __future__ import annotations
from datetime import date

from pydantic import BaseModel


class QuoteOut(BaseModel):
    text: str
    author: str


class DashboardOut(BaseModel):
    streak: int
    total_fasts: int
    week_hours: float
    quote: QuoteOut


class BucketOut(BaseModel):
    day: date
    label: str
    hours: float


class BadgeOut(BaseModel):
    threshold: int
    label: str
    emoji: str
    earned: bool


class InsightsOut(BaseModel):
    total_fasts: int
    total_hours: float
    longest_fast: float
    average_fast: float
    period_hours: float
    chart: list[BucketOut]
    badges: list[BadgeOut]
