from __future__ import annotations

from dataclasses import dataclass

from core.errors import ValidationFailed

DEFAULT_HOURS = 16.0
MIN_HOURS, MAX_HOURS = 1.0, 72.0
CUSTOM = "Custom"


@dataclass(frozen=True)
class Schedule:
    label: str
    fast_hours: float   # 0 → user supplies the value


SCHEDULES: tuple[Schedule, ...] = (
    Schedule("16:8", 16),
    Schedule("18:6", 18),
    Schedule("20:4 (OMAD)", 20),
    Schedule(CUSTOM, 0),
)


def resolve_hours(schedule: str, custom_hours: str | float | None = None) -> float:
    """Map a schedule label (plus the free-form custom value) to target hours."""
    if schedule == CUSTOM:
        try:
            hours = float(custom_hours) if custom_hours not in (None, "") else 0.0
        except (TypeError, ValueError):
            hours = 0.0
        hours = hours or DEFAULT_HOURS
    else:
        hours = next(
            (s.fast_hours for s in SCHEDULES if s.label == schedule), DEFAULT_HOURS
        )

    if not MIN_HOURS <= hours <= MAX_HOURS:
        raise ValidationFailed(
            f"Fasting hours must be between {MIN_HOURS:g} and {MAX_HOURS:g}"
        )
    return hours
