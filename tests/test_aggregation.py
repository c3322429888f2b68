"""
Pure aggregation checks – no DB, fixed `now`.
"""
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from itertools import count
from zoneinfo import ZoneInfo

import pytest

from core import aggregation as agg
from core.models import FastRecord, MealRecord, WeightEntry

NOW = datetime(2025, 3, 12, 15, 0, tzinfo=timezone.utc)
DAY = timedelta(days=1)
_ids = count()


def done(end: datetime, hours: float) -> FastRecord:
    return FastRecord(
        id=f"f{next(_ids)}",
        user_id="u1",
        started_at=end - timedelta(hours=hours),
        ended_at=end,
        schedule_type="16:8",
        fasting_hours=16,
        status="completed",
    )


def meal(at: datetime, kcal: float | None) -> MealRecord:
    return MealRecord(id=f"m{next(_ids)}", user_id="u1", meal_name="x", calories=kcal, eaten_at=at)


def weigh(days_ago: int, value: float) -> WeightEntry:
    return WeightEntry(id=f"w{next(_ids)}", user_id="u1", weight=value, recorded_at=NOW - days_ago * DAY)


# ── streak ───────────────────────────────────────────────────────────
def test_streak_today_and_yesterday():
    fasts = [done(NOW - timedelta(hours=2), 16), done(NOW - DAY, 16), done(NOW - 3 * DAY, 16)]
    assert agg.streak(fasts, NOW) == 2


def test_streak_needs_today():
    assert agg.streak([done(NOW - DAY, 16), done(NOW - 2 * DAY, 16)], NOW) == 0


def test_streak_empty_and_active_only():
    active = FastRecord(id="a", user_id="u1", started_at=NOW - DAY, schedule_type="16:8", fasting_hours=16)
    assert agg.streak([], NOW) == 0
    assert agg.streak([active], NOW) == 0


def test_streak_is_bounded():
    fasts = [done(NOW - d * DAY, 16) for d in range(400)]
    assert agg.streak(fasts, NOW) == 365
    assert agg.streak(fasts, NOW, max_days=30) == 30


def test_streak_uses_local_calendar_days():
    ny = ZoneInfo("America/New_York")
    now = datetime(2025, 3, 12, 20, 0, tzinfo=ny)
    # 02:00 UTC on the 12th is still the evening of the 11th in New York
    late_yesterday = datetime(2025, 3, 12, 2, 0, tzinfo=timezone.utc)
    today = datetime(2025, 3, 12, 14, 0, tzinfo=timezone.utc)
    assert agg.streak([done(today, 16), done(late_yesterday, 16)], now) == 2
    assert agg.streak([done(late_yesterday, 16)], now) == 0


# ── period hours / totals ────────────────────────────────────────────
def test_week_hours_sum():
    fasts = [done(NOW - DAY, 16), done(NOW - 3 * DAY, 18), done(NOW - 9 * DAY, 20)]
    assert agg.period_hours(fasts, NOW, 7) == 34.0
    assert agg.period_hours(fasts, NOW, 30) == 54.0


def test_week_hours_rounds_to_one_decimal():
    assert agg.period_hours([done(NOW - DAY, 16 + 5 / 60)], NOW) == 16.1


def test_totals():
    t = agg.fast_totals([done(NOW - DAY, 16), done(NOW - 2 * DAY, 20), done(NOW - 3 * DAY, 12)])
    assert t.count == 3
    assert math.isclose(t.total_hours, 48)
    assert math.isclose(t.longest_hours, 20)
    assert math.isclose(t.average_hours, 16)
    assert t.display["total_hours"] == 48


def test_totals_without_fasts():
    t = agg.fast_totals([])
    assert (t.count, t.total_hours, t.longest_hours, t.average_hours) == (0, 0.0, 0.0, 0.0)


# ── chart buckets ────────────────────────────────────────────────────
def test_chart_keeps_empty_days():
    today = NOW.date()
    start = today - 6 * DAY
    def on(offset: int) -> datetime:
        return datetime.combine(start + offset * DAY, datetime.min.time(), tzinfo=timezone.utc) + timedelta(hours=10)

    fasts = [done(on(3), 16), done(on(5), 18), done(on(5) + timedelta(hours=8), 2)]

    series = agg.chart_buckets(fasts, NOW, 7)
    assert [b.hours for b in series] == [0, 0, 0, 16.0, 0, 20.0, 0]
    assert series[0].day == start
    assert series[-1].day == today
    assert series[-1].label == today.strftime("%a")


def test_chart_thirty_days():
    series = agg.chart_buckets([done(NOW, 16)], NOW, 30)
    assert len(series) == 30
    assert series[-1].hours == 16.0
    assert sum(b.hours for b in series) == 16.0


# ── badges ───────────────────────────────────────────────────────────
def test_badges_earned_by_threshold():
    earned = [s.badge.label for s in agg.badges(10) if s.earned]
    assert earned == ["First Fast!", "7-Day Streak", "10 Fasts"]
    assert not any(s.earned for s in agg.badges(0))


@pytest.mark.parametrize("total", [1, 7, 9, 25, 99, 100, 500])
def test_badges_never_unearned_as_count_grows(total):
    before = {s.badge.label for s in agg.badges(total) if s.earned}
    after = {s.badge.label for s in agg.badges(total + 1) if s.earned}
    assert before <= after


# ── meals ────────────────────────────────────────────────────────────
def test_meal_grouping_totals():
    days = agg.group_meals(
        [
            meal(NOW - timedelta(hours=6), 500),
            meal(NOW - timedelta(hours=4), None),
            meal(NOW - timedelta(hours=1), 700),
            meal(NOW - DAY, None),
            meal(NOW - DAY - timedelta(hours=1), None),
        ],
        timezone.utc,
        calorie_goal=1000,
    )
    assert [d.day for d in days] == [NOW.date(), (NOW - DAY).date()]

    today, yesterday = days
    assert today.total_calories == 1200
    assert today.has_calories
    assert today.goal_met
    assert today.meals[0].calories == 700

    assert yesterday.total_calories == 0
    assert not yesterday.has_calories
    assert len(yesterday.meals) == 2


def test_meal_goal_not_met():
    (day,) = agg.group_meals([meal(NOW, 300)], timezone.utc, calorie_goal=2000)
    assert day.has_calories and not day.goal_met


# ── weight ───────────────────────────────────────────────────────────
def test_weight_delta():
    s = agg.weight_delta([weigh(2, 180), weigh(1, 175), weigh(0, 170)], target_weight=165)
    assert s.total_change == -10
    assert s.distance_to_goal == 5


def test_weight_delta_sorts_chronologically():
    s = agg.weight_delta([weigh(0, 170), weigh(2, 180)], target_weight=None)
    assert s.total_change == -10
    assert s.distance_to_goal is None


def test_weight_delta_small_inputs():
    empty = agg.weight_delta([], 150)
    assert empty.total_change is None and empty.distance_to_goal is None

    single = agg.weight_delta([weigh(0, 160)], 150)
    assert single.total_change is None
    assert single.distance_to_goal == 10


def test_dashboard_bundle():
    stats = agg.dashboard([done(NOW, 16), done(NOW - DAY, 18)], NOW)
    assert stats == agg.DashboardStats(streak=2, total_fasts=2, week_hours=34.0)
