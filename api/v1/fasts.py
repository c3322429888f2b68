# api/v1/fasts.py
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import current_session, http_error, local_now
from api.v1.schemas import (
    AdjustStartIn,
    EndFastIn,
    HistoryItem,
    ScheduleOut,
    StageOut,
    StartFastIn,
    TimerOut,
)
from core.errors import FastTrackError
from core.models import FastRecord
from core.schedules import SCHEDULES, resolve_hours
from core.timer import FastingTimer, derive
from core.timeutils import format_duration, format_stamp
from services import fasts as fast_store
from services.auth import Session
from services.db import get_session

router = APIRouter()


def _timer_out(fast: FastRecord, now: datetime) -> TimerOut:
    state = derive(fast, now)
    return TimerOut(
        fast=fast,
        elapsed_ms=state.elapsed_ms,
        remaining_ms=state.remaining_ms,
        progress=state.progress,
        overtime=state.overtime,
        label=state.label,
        clock=state.clock,
        ring_offset=state.ring_offset(),
        stage=StageOut(**vars(state.stage)),
    )


async def _timer(db: AsyncSession, session: Session) -> FastingTimer:
    timer = FastingTimer(session)
    await timer.load_active(db)
    return timer


@router.get("/schedules", response_model=list[ScheduleOut])
async def list_schedules() -> list[ScheduleOut]:
    return [ScheduleOut(label=s.label, fast_hours=s.fast_hours) for s in SCHEDULES]


# ───────────────────────── active fast ──────────────────────
@router.get("/active", response_model=TimerOut | None)
async def active_fast(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    now: datetime = Depends(local_now),
) -> TimerOut | None:
    fast = await fast_store.get_active_fast(db, session.user_id)
    return _timer_out(fast, now) if fast else None


@router.post("/active", response_model=TimerOut, status_code=status.HTTP_201_CREATED)
async def start_fast(
    body: StartFastIn,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    now: datetime = Depends(local_now),
) -> TimerOut:
    timer = await _timer(db, session)
    try:
        hours = resolve_hours(body.schedule, body.custom_hours)
        fast = await timer.start_fast(db, body.schedule, hours)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return _timer_out(fast, now)


@router.patch("/active", response_model=TimerOut)
async def adjust_start(
    body: AdjustStartIn,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    now: datetime = Depends(local_now),
) -> TimerOut:
    timer = await _timer(db, session)
    try:
        fast = await timer.adjust_start_time(db, body.started_at)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return _timer_out(fast, now)


@router.post("/active/end", response_model=FastRecord)
async def end_fast(
    body: EndFastIn,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> FastRecord:
    timer = await _timer(db, session)
    try:
        return await timer.end_fast(db, body.notes)
    except FastTrackError as exc:
        raise http_error(exc) from exc


# ───────────────────────── history ──────────────────────────
@router.get("", response_model=list[HistoryItem])
async def history(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    now: datetime = Depends(local_now),
) -> list[HistoryItem]:
    tz = now.tzinfo
    return [
        HistoryItem(
            fast=f,
            duration=format_duration(f.started_at, f.ended_at),
            started_label=format_stamp(f.started_at, tz),
        )
        for f in await fast_store.list_history(db, session.user_id)
    ]


@router.delete("/{fast_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fast(
    fast_id: str,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> Response:
    try:
        await fast_store.delete_fast(db, session.user_id, fast_id)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
