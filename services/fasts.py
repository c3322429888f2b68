"""
services/fasts.py
────────────────────────────────────────────────────────────────────────
Owner-scoped reads and writes against the `fasts` table.

Reads never raise on a store failure: they log and hand back "no data".
Writes raise StoreWriteError (via `db.commit`) and leave nothing behind.
"""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import (
    ActiveFastExistsError,
    NoActiveFastError,
    NotFound,
    StoreWriteError,
)
from core.models import FastRecord, FastStatus
from services.db import Fast, commit, new_id

_LOG = logging.getLogger(__name__)

HISTORY_LIMIT = 50


def _record(row: Fast) -> FastRecord:
    return FastRecord.model_validate(row, from_attributes=True)


async def _active_row(db: AsyncSession, user_id: str) -> Fast | None:
    res = await db.execute(
        select(Fast)
        .where(Fast.user_id == user_id, Fast.status == FastStatus.active.value)
        .order_by(Fast.started_at.desc())
        .limit(1)
    )
    return res.scalars().first()


# ───────────────────────── reads ────────────────────────────
async def get_active_fast(db: AsyncSession, user_id: str) -> FastRecord | None:
    try:
        row = await _active_row(db, user_id)
    except SQLAlchemyError as exc:
        _LOG.warning("active fast lookup failed for %s: %s", user_id, exc)
        return None
    return _record(row) if row else None


async def list_history(
    db: AsyncSession, user_id: str, limit: int = HISTORY_LIMIT
) -> list[FastRecord]:
    """Newest first by start time, any status."""
    try:
        res = await db.execute(
            select(Fast)
            .where(Fast.user_id == user_id)
            .order_by(Fast.started_at.desc())
            .limit(limit)
        )
    except SQLAlchemyError as exc:
        _LOG.warning("history fetch failed for %s: %s", user_id, exc)
        return []
    return [_record(r) for r in res.scalars().all()]


async def list_completed(db: AsyncSession, user_id: str) -> list[FastRecord]:
    try:
        res = await db.execute(
            select(Fast)
            .where(Fast.user_id == user_id, Fast.status == FastStatus.completed.value)
            .order_by(Fast.ended_at.desc())
        )
    except SQLAlchemyError as exc:
        _LOG.warning("completed fasts fetch failed for %s: %s", user_id, exc)
        return []
    return [_record(r) for r in res.scalars().all()]


# ───────────────────────── writes ───────────────────────────
async def start_fast(
    db: AsyncSession,
    user_id: str,
    schedule_type: str,
    fasting_hours: float,
    started_at: datetime,
) -> FastRecord:
    # query-before-insert: the store has no uniqueness constraint on status
    try:
        existing = await _active_row(db, user_id)
    except SQLAlchemyError as exc:
        _LOG.error("active fast check failed for %s: %s", user_id, exc)
        raise StoreWriteError(str(exc)) from exc
    if existing is not None:
        raise ActiveFastExistsError(existing.id)

    row = Fast(
        id=new_id(),
        user_id=user_id,
        started_at=started_at,
        schedule_type=schedule_type,
        fasting_hours=fasting_hours,
        status=FastStatus.active.value,
    )
    db.add(row)
    await commit(db)
    _LOG.info("fast %s started for %s (%sh)", row.id, user_id, fasting_hours)
    return _record(row)


async def _owned_active(db: AsyncSession, user_id: str, fast_id: str) -> Fast:
    row = await db.get(Fast, fast_id)
    if row is None or row.user_id != user_id or row.status != FastStatus.active.value:
        raise NoActiveFastError()
    return row


async def adjust_start(
    db: AsyncSession, user_id: str, fast_id: str, started_at: datetime
) -> FastRecord:
    row = await _owned_active(db, user_id, fast_id)
    row.started_at = started_at
    await commit(db)
    return _record(row)


async def end_fast(
    db: AsyncSession,
    user_id: str,
    fast_id: str,
    ended_at: datetime,
    notes: str | None = None,
) -> FastRecord:
    row = await _owned_active(db, user_id, fast_id)
    row.status = FastStatus.completed.value
    row.ended_at = ended_at
    row.notes = notes or None
    await commit(db)
    _LOG.info("fast %s completed for %s", fast_id, user_id)
    return _record(row)


async def delete_fast(db: AsyncSession, user_id: str, fast_id: str) -> None:
    res = await db.execute(
        delete(Fast).where(Fast.id == fast_id, Fast.user_id == user_id)
    )
    if not res.rowcount:
        await db.rollback()
        raise NotFound("Fast not found")
    await commit(db)


async def prune_completed(db: AsyncSession, user_id: str, before: datetime) -> int:
    """Delete completed fasts that ended before `before`; returns the count."""
    res = await db.execute(
        delete(Fast).where(
            Fast.user_id == user_id,
            Fast.status == FastStatus.completed.value,
            Fast.ended_at < before,
        )
        .execution_options(synchronize_session=False)
    )
    await commit(db)
    return res.rowcount or 0
