# tests/test_helpers.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import jwt
import pytest

from core import hydration
from core.errors import ValidationFailed
from core.quotes import QUOTES, daily_quote
from core.schedules import resolve_hours
from core.timeutils import (
    format_clock,
    format_duration,
    format_stamp,
    parse_timestamp,
)
from services.auth import create_token, sign_in, sign_out

T = datetime(2025, 1, 5, 7, 30, tzinfo=timezone.utc)


# ── schedules ────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "schedule, custom, hours",
    [("16:8", None, 16), ("18:6", None, 18), ("20:4 (OMAD)", None, 20),
     ("Custom", "36", 36), ("Custom", "", 16), ("Custom", "abc", 16), ("weird", None, 16)],
)
def test_resolve_hours(schedule, custom, hours):
    assert resolve_hours(schedule, custom) == hours


def test_custom_hours_out_of_range():
    with pytest.raises(ValidationFailed):
        resolve_hours("Custom", 96)


# ── time helpers ─────────────────────────────────────────────────────
def test_format_clock_uses_magnitude():
    assert format_clock(3_723_000) == "01:02:03"
    assert format_clock(-61_000) == "00:01:01"


def test_format_duration():
    assert format_duration(T, T + timedelta(hours=16, minutes=42)) == "16h 42m"
    assert format_duration(T, None) == "In progress..."


def test_format_stamp():
    assert format_stamp(T) == "Jan 5, 2025 · 7:30 AM"


def test_parse_timestamp():
    assert parse_timestamp("2025-01-05T07:30:00Z") == T
    assert parse_timestamp("2025-01-05T07:30:00", timezone.utc) == T
    with pytest.raises(ValueError):
        parse_timestamp("")


# ── hydration ────────────────────────────────────────────────────────
def test_water_counter():
    today = date(2025, 1, 5)
    w = hydration.adjust(None, 1, today)
    w = hydration.adjust(w, 1, today)
    assert w.glasses == 2
    assert w.progress == 0.25
    assert hydration.adjust(w, -5, today).glasses == 0


def test_water_resets_next_day_and_caps_progress():
    w = hydration.WaterDay(date(2025, 1, 5), 9, 8)
    assert w.over_goal and w.progress == 1.0
    assert hydration.adjust(w, 1, date(2025, 1, 6)).glasses == 1


# ── quotes ───────────────────────────────────────────────────────────
def test_daily_quote_rotates():
    assert daily_quote(date(2025, 1, 1)) == QUOTES[1]
    assert daily_quote(date(2025, 1, 1)) != daily_quote(date(2025, 1, 2))


# ── session ──────────────────────────────────────────────────────────
def test_sign_in_and_out():
    session = sign_in(create_token("u1"))
    assert session.user_id == "u1"
    assert session.active
    sign_out(session)
    assert not session.active


def test_expired_token_is_rejected():
    with pytest.raises(jwt.ExpiredSignatureError):
        sign_in(create_token("u1", ttl_minutes=-1))
