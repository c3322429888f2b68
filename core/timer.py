"""
core/timer.py
────────────────────────────────────────────────────────────────────────
Live view of the active fast.

`derive()` is a pure function of (fast, now) and is recomputed from
scratch on every one-second tick.  `FastingTimer` owns the active fast
for one session, persists start / adjust / end through
`services.fasts`, and fires the "goal reached" notification at most once
per fast id.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.errors import ActiveFastExistsError, NoActiveFastError, ValidationFailed
from core.models import FastRecord
from core.timeutils import MS_PER_HOUR, format_clock, millis_between, parse_timestamp
from services import fasts as fast_store
from services.auth import Session
from services.notify import Notifier

_LOG = logging.getLogger(__name__)

RING_RADIUS = 90


# ──────────────────────────────────────────────────────────────────────
#  Stages
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Stage:
    hours: float
    label: str
    description: str


# ascending by hours
STAGES: tuple[Stage, ...] = (
    Stage(0, "Fed State", "Blood sugar rises and falls as your last meal is digested."),
    Stage(4, "Early Fasting", "Insulin drops and the body starts drawing on stored glycogen."),
    Stage(8, "Fat Burning", "Glycogen runs low and fat becomes the main fuel."),
    Stage(12, "Ketosis", "The liver produces ketones; many people feel sharper here."),
    Stage(18, "Deep Ketosis", "Ketone levels climb and cellular clean-up ramps up."),
)


def stage_for(elapsed_hours: float) -> Stage:
    current = STAGES[0]
    for stage in STAGES:
        if stage.hours <= elapsed_hours:
            current = stage
        else:
            break
    return current


# ──────────────────────────────────────────────────────────────────────
#  Derivation
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class TimerState:
    fast_id: str
    schedule_type: str
    target_ms: float
    elapsed_ms: float       # signed; negative only after a backwards clock fix
    remaining_ms: float
    progress: float         # clamped to [0, 1]
    stage: Stage

    @property
    def overtime(self) -> bool:
        return self.remaining_ms <= 0

    @property
    def label(self) -> str:
        return "Overtime" if self.overtime else "Remaining"

    @property
    def display_ms(self) -> float:
        """Counts down to the goal, then counts up past it."""
        if self.overtime:
            return self.elapsed_ms - self.target_ms
        return self.remaining_ms

    @property
    def clock(self) -> str:
        return format_clock(self.display_ms)

    def ring_offset(self, radius: float = RING_RADIUS) -> float:
        circumference = 2 * math.pi * radius
        return circumference * (1 - self.progress)


def derive(fast: FastRecord, now: datetime) -> TimerState:
    target_ms = fast.fasting_hours * MS_PER_HOUR
    elapsed_ms = millis_between(fast.started_at, now)
    remaining_ms = max(0.0, target_ms - elapsed_ms)
    progress = min(1.0, max(0.0, elapsed_ms / target_ms))
    return TimerState(
        fast_id=fast.id,
        schedule_type=fast.schedule_type,
        target_ms=target_ms,
        elapsed_ms=elapsed_ms,
        remaining_ms=remaining_ms,
        progress=progress,
        stage=stage_for(max(0.0, elapsed_ms) / MS_PER_HOUR),
    )


# ──────────────────────────────────────────────────────────────────────
#  Controller
# ──────────────────────────────────────────────────────────────────────
def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FastingTimer:
    def __init__(
        self,
        session: Session,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.session = session
        self.notifier = notifier or Notifier()
        self._clock = clock
        self.active_fast: FastRecord | None = None
        self.last_notified_fast_id: str | None = None

    # --------------- lifecycle --------------------------------------
    async def load_active(self, db: AsyncSession) -> FastRecord | None:
        self.active_fast = await fast_store.get_active_fast(db, self.session.user_id)
        return self.active_fast

    async def start_fast(
        self, db: AsyncSession, schedule: str, target_hours: float
    ) -> FastRecord:
        if self.active_fast is not None:
            raise ActiveFastExistsError(self.active_fast.id)
        if target_hours <= 0:
            raise ValidationFailed("Fasting hours must be positive")

        fast = await fast_store.start_fast(
            db, self.session.user_id, schedule, target_hours, self._clock()
        )
        self.active_fast = fast
        self.last_notified_fast_id = None
        self.notifier.notify(
            "Fast started! 🔥", f"{target_hours:g}-hour fast has begun. You got this!"
        )
        self.notifier.haptic("start")
        return fast

    async def adjust_start_time(
        self, db: AsyncSession, new_start: str | datetime
    ) -> FastRecord:
        if self.active_fast is None:
            raise NoActiveFastError()
        try:
            started_at = parse_timestamp(new_start, settings.tz)
        except ValueError:
            raise ValidationFailed(f"Invalid start time: {new_start!r}") from None
        if started_at > self._clock():
            raise ValidationFailed("Start time cannot be in the future")

        fast = await fast_store.adjust_start(
            db, self.session.user_id, self.active_fast.id, started_at
        )
        self.active_fast = fast
        return fast

    async def end_fast(self, db: AsyncSession, notes: str | None = None) -> FastRecord:
        if self.active_fast is None:
            raise NoActiveFastError()

        fast = await fast_store.end_fast(
            db, self.session.user_id, self.active_fast.id, self._clock(), notes
        )
        self.active_fast = None
        self.last_notified_fast_id = None
        self.notifier.notify("Fast complete! 🎉", "Great job staying consistent!")
        self.notifier.haptic("success")
        return fast

    # --------------- per-second tick --------------------------------
    def tick(self, now: datetime | None = None) -> TimerState | None:
        if self.active_fast is None:
            return None
        state = derive(self.active_fast, now or self._clock())
        if state.overtime and self.last_notified_fast_id != state.fast_id:
            self.last_notified_fast_id = state.fast_id
            _LOG.info("fast %s reached its goal", state.fast_id)
            self.notifier.notify(
                "Goal reached! 🏁",
                f"You finished your {state.schedule_type} fast. Keep going or end it.",
            )
            self.notifier.haptic("success")
        return state
