"""
services/profiles.py
────────────────────────────────────────────────────────────────────────
Profile read/update, per-day water and health-snapshot upserts, and
the admin overview.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ValidationFailed
from core.hydration import WaterDay
from core.models import FastStatus, HealthSnapshot, Profile
from core.schedules import SCHEDULES
from services.db import Fast, ProfileRow, SnapshotRow, WaterRow, commit, new_id

_LOG = logging.getLogger(__name__)


def _profile(row: ProfileRow) -> Profile:
    return Profile.model_validate(row, from_attributes=True)


# ───────────────────────── profile ──────────────────────────
async def ensure_profile(db: AsyncSession, user_id: str) -> ProfileRow:
    """Every account has exactly one profile; create it on first touch."""
    row = await db.get(ProfileRow, user_id)
    if row is None:
        row = ProfileRow(user_id=user_id, health_data={})
        db.add(row)
        await commit(db)
    return row


async def get_profile(db: AsyncSession, user_id: str) -> Profile | None:
    try:
        row = await db.get(ProfileRow, user_id)
    except SQLAlchemyError as exc:
        _LOG.warning("profile fetch failed for %s: %s", user_id, exc)
        return None
    return _profile(row) if row else None


async def update_profile(
    db: AsyncSession,
    user_id: str,
    display_name: str | None = None,
    target_weight: float | None = None,
    preferred_schedule: str | None = None,
) -> Profile:
    """Owner-editable fields only; `role` is set by an admin process."""
    if target_weight is not None and target_weight <= 0:
        raise ValidationFailed("Target weight must be positive")
    if preferred_schedule and preferred_schedule not in {s.label for s in SCHEDULES}:
        raise ValidationFailed(f"Unknown schedule {preferred_schedule!r}")

    row = await ensure_profile(db, user_id)
    row.display_name = display_name
    row.target_weight = target_weight
    row.preferred_schedule = preferred_schedule or "16:8"
    await commit(db)
    return _profile(row)


async def set_role(db: AsyncSession, user_id: str, role: str) -> Profile:
    row = await ensure_profile(db, user_id)
    row.role = role
    await commit(db)
    return _profile(row)


async def patch_health_fields(db: AsyncSession, user_id: str, **fields: Any) -> Profile:
    row = await ensure_profile(db, user_id)
    for key, value in fields.items():
        setattr(row, key, value)
    await commit(db)
    return _profile(row)


# ───────────────────────── snapshots ────────────────────────
async def upsert_snapshot(db: AsyncSession, snap: HealthSnapshot) -> HealthSnapshot:
    """One row per (user, date); a later sync overwrites the same day."""
    payload = snap.model_dump(exclude={"user_id", "date"})

    # Try update → if row doesn’t exist we’ll insert.
    res = await db.execute(
        update(SnapshotRow)
        .where(SnapshotRow.user_id == snap.user_id, SnapshotRow.date == snap.date)
        .values(**payload)
    )
    if not res.rowcount:
        db.add(SnapshotRow(id=new_id(), user_id=snap.user_id, date=snap.date, **payload))
    await commit(db)
    return snap


async def get_snapshot(db: AsyncSession, user_id: str, day: date) -> HealthSnapshot | None:
    try:
        res = await db.execute(
            select(SnapshotRow).where(SnapshotRow.user_id == user_id, SnapshotRow.date == day)
        )
    except SQLAlchemyError as exc:
        _LOG.warning("snapshot fetch failed for %s: %s", user_id, exc)
        return None
    row = res.scalar_one_or_none()
    return HealthSnapshot.model_validate(row, from_attributes=True) if row else None


# ───────────────────────── water ────────────────────────────
async def get_water(db: AsyncSession, user_id: str, day: date, goal: int) -> WaterDay:
    try:
        res = await db.execute(
            select(WaterRow).where(WaterRow.user_id == user_id, WaterRow.date == day)
        )
    except SQLAlchemyError as exc:
        _LOG.warning("water fetch failed for %s: %s", user_id, exc)
        return WaterDay(day, 0, goal)
    row = res.scalar_one_or_none()
    return WaterDay(day, row.glasses if row else 0, goal)


async def save_water(db: AsyncSession, user_id: str, water: WaterDay) -> WaterDay:
    res = await db.execute(
        update(WaterRow)
        .where(WaterRow.user_id == user_id, WaterRow.date == water.day)
        .values(glasses=water.glasses)
    )
    if not res.rowcount:
        db.add(WaterRow(id=new_id(), user_id=user_id, date=water.day, glasses=water.glasses))
    await commit(db)
    return water


# ───────────────────────── admin ────────────────────────────
@dataclass(frozen=True)
class AdminOverview:
    total_users: int
    active_fasts: int
    total_snapshots: int
    profiles: list[Profile]


async def _count(db: AsyncSession, stmt) -> int:
    try:
        return (await db.execute(stmt)).scalar_one() or 0
    except SQLAlchemyError as exc:
        _LOG.warning("admin count failed: %s", exc)
        return 0


async def admin_overview(db: AsyncSession) -> AdminOverview:
    users = await _count(db, select(func.count()).select_from(ProfileRow))
    active = await _count(
        db,
        select(func.count()).select_from(Fast).where(Fast.status == FastStatus.active.value),
    )
    snaps = await _count(db, select(func.count()).select_from(SnapshotRow))
    try:
        rows = (
            await db.execute(select(ProfileRow).order_by(ProfileRow.created_at.desc()))
        ).scalars().all()
    except SQLAlchemyError as exc:
        _LOG.warning("admin profile list failed: %s", exc)
        rows = []
    return AdminOverview(users, active, snaps, [_profile(r) for r in rows])
