"""
core/aggregation.py
────────────────────────────────────────────────────────────────────────
Statistics for the dashboard, history, insights, meals and weight views.

Every function is pure: it takes the records plus a reference `now`
(whose tzinfo decides what a calendar day is) and returns value objects.

  • streak            consecutive days with a finished fast, anchored today
  • period_hours      hours fasted over a trailing N-day window
  • fast_totals       count / total / longest / average
  • chart_buckets     fixed-length per-day series for the charts
  • badges            lifetime-count milestones
  • group_meals       meals per local day with calorie totals
  • weight_delta      overall change and distance to goal
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Sequence

from core.models import FastRecord, FastStatus, MealRecord, WeightEntry
from core.timeutils import hours_between, local_day

MAX_STREAK_DAYS = 365


def _completed(fasts: Iterable[FastRecord]) -> list[FastRecord]:
    return [
        f for f in fasts
        if f.status == FastStatus.completed and f.ended_at is not None
    ]


def _duration(fast: FastRecord) -> float:
    return hours_between(fast.started_at, fast.ended_at)  # type: ignore[arg-type]


def _hours_by_day(fasts: Iterable[FastRecord], tz: tzinfo | None) -> dict[date, float]:
    per_day: dict[date, float] = defaultdict(float)
    for f in _completed(fasts):
        per_day[local_day(f.ended_at, tz)] += _duration(f)  # type: ignore[arg-type]
    return per_day


# ──────────────────────────────────────────────────────────────────────
#  Fasts
# ──────────────────────────────────────────────────────────────────────
def streak(
    fasts: Iterable[FastRecord], now: datetime, max_days: int = MAX_STREAK_DAYS
) -> int:
    """
    Walk back one day at a time from today; stop at the first day on which
    no fast ended.  A day without a fast *today* means a streak of 0, even
    if yesterday had one.
    """
    tz = now.tzinfo
    days = {local_day(f.ended_at, tz) for f in _completed(fasts)}  # type: ignore[arg-type]
    today = local_day(now, tz)

    count = 0
    for offset in range(max_days):
        if today - timedelta(days=offset) not in days:
            break
        count += 1
    return count


def period_hours(fasts: Iterable[FastRecord], now: datetime, days: int = 7) -> float:
    cutoff = now - timedelta(days=days)
    total = sum(_duration(f) for f in _completed(fasts) if f.ended_at > cutoff)  # type: ignore[operator]
    return round(total, 1)


@dataclass(frozen=True)
class FastTotals:
    count: int
    total_hours: float
    longest_hours: float
    average_hours: float

    @property
    def display(self) -> dict[str, float]:
        return {
            "total_fasts": self.count,
            "total_hours": round(self.total_hours),
            "longest_fast": round(self.longest_hours, 1),
            "average_fast": round(self.average_hours, 1),
        }


def fast_totals(fasts: Iterable[FastRecord]) -> FastTotals:
    durations = [_duration(f) for f in _completed(fasts)]
    if not durations:
        return FastTotals(0, 0.0, 0.0, 0.0)
    total = sum(durations)
    return FastTotals(len(durations), total, max(durations), total / len(durations))


@dataclass(frozen=True)
class DayBucket:
    day: date
    hours: float

    @property
    def label(self) -> str:
        return self.day.strftime("%a")


def chart_buckets(
    fasts: Iterable[FastRecord], now: datetime, days: int = 7
) -> list[DayBucket]:
    """One bucket per day, oldest → newest, empty days kept as 0."""
    tz = now.tzinfo
    per_day = _hours_by_day(fasts, tz)
    today = local_day(now, tz)
    out = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        out.append(DayBucket(day, round(per_day.get(day, 0.0), 1)))
    return out


@dataclass(frozen=True)
class Badge:
    threshold: int
    label: str
    emoji: str


@dataclass(frozen=True)
class BadgeStatus:
    badge: Badge
    earned: bool


# ascending by threshold
BADGES: tuple[Badge, ...] = (
    Badge(1, "First Fast!", "🌱"),
    Badge(7, "7-Day Streak", "🔥"),
    Badge(10, "10 Fasts", "💪"),
    Badge(25, "25 Fasts", "⭐"),
    Badge(50, "50 Fasts", "🏆"),
    Badge(100, "Century Club", "👑"),
)


def badges(total_fasts: int, table: Sequence[Badge] = BADGES) -> list[BadgeStatus]:
    return [BadgeStatus(b, total_fasts >= b.threshold) for b in table]


@dataclass(frozen=True)
class DashboardStats:
    streak: int
    total_fasts: int
    week_hours: float


def dashboard(fasts: Sequence[FastRecord], now: datetime) -> DashboardStats:
    return DashboardStats(
        streak=streak(fasts, now),
        total_fasts=len(_completed(fasts)),
        week_hours=period_hours(fasts, now, 7),
    )


# ──────────────────────────────────────────────────────────────────────
#  Meals
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class MealDay:
    day: date
    meals: list[MealRecord]
    total_calories: float
    has_calories: bool
    goal_met: bool


def group_meals(
    meals: Iterable[MealRecord], tz: tzinfo | None, calorie_goal: float
) -> list[MealDay]:
    by_day: dict[date, list[MealRecord]] = defaultdict(list)
    for m in meals:
        by_day[local_day(m.eaten_at, tz)].append(m)

    out = []
    for day in sorted(by_day, reverse=True):
        items = sorted(by_day[day], key=lambda m: m.eaten_at, reverse=True)
        total = sum(m.calories or 0 for m in items)
        out.append(
            MealDay(
                day=day,
                meals=items,
                total_calories=total,
                has_calories=any(m.calories is not None for m in items),
                goal_met=total >= calorie_goal,
            )
        )
    return out


# ──────────────────────────────────────────────────────────────────────
#  Weight
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class WeightSummary:
    latest: float | None
    earliest: float | None
    total_change: float | None       # needs two entries
    distance_to_goal: float | None   # needs one entry and a target


def weight_delta(
    entries: Sequence[WeightEntry], target_weight: float | None = None
) -> WeightSummary:
    ordered = sorted(entries, key=lambda e: e.recorded_at)
    if not ordered:
        return WeightSummary(None, None, None, None)

    latest, earliest = ordered[-1].weight, ordered[0].weight
    change = latest - earliest if len(ordered) > 1 else None
    distance = abs(latest - target_weight) if target_weight is not None else None
    return WeightSummary(latest, earliest, change, distance)
