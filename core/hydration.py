"""Daily water counter: glasses per local day, reset at midnight."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

DEFAULT_GOAL = 8


@dataclass(frozen=True)
class WaterDay:
    day: date
    glasses: int = 0
    goal: int = DEFAULT_GOAL

    @property
    def progress(self) -> float:
        if self.goal <= 0:
            return 1.0
        return min(1.0, self.glasses / self.goal)

    @property
    def over_goal(self) -> bool:
        return self.glasses > self.goal


def for_today(current: WaterDay | None, today: date, goal: int = DEFAULT_GOAL) -> WaterDay:
    """Yesterday's count never carries over."""
    if current is None or current.day != today:
        return WaterDay(today, 0, goal)
    return WaterDay(today, current.glasses, goal)


def adjust(current: WaterDay | None, delta: int, today: date, goal: int = DEFAULT_GOAL) -> WaterDay:
    base = for_today(current, today, goal)
    return WaterDay(today, max(0, base.glasses + delta), goal)
