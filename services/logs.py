"""
services/logs.py
────────────────────────────────────────────────────────────────────────
Meal and weight logs: validated insert, owner-scoped list and delete.
Both are immutable once written.
"""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFound, ValidationFailed
from core.models import MealRecord, WeightEntry
from services.db import MealLog, WeightLog, commit, new_id, utcnow

_LOG = logging.getLogger(__name__)

MEAL_LIMIT = 50


def _number(value: str | float | None, field: str) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationFailed(f"{field} must be a number") from None


# ───────────────────────── meals ────────────────────────────
async def add_meal(
    db: AsyncSession,
    user_id: str,
    meal_name: str,
    calories: str | float | None = None,
    notes: str | None = None,
    eaten_at: datetime | None = None,
) -> MealRecord:
    name = (meal_name or "").strip()
    if not name:
        raise ValidationFailed("Meal name is required")
    kcal = _number(calories, "Calories")
    if kcal is not None and kcal < 0:
        raise ValidationFailed("Calories cannot be negative")

    row = MealLog(
        id=new_id(),
        user_id=user_id,
        meal_name=name,
        calories=kcal,
        notes=notes or None,
        eaten_at=eaten_at or utcnow(),
    )
    db.add(row)
    await commit(db)
    return MealRecord.model_validate(row, from_attributes=True)


async def list_meals(
    db: AsyncSession, user_id: str, limit: int = MEAL_LIMIT
) -> list[MealRecord]:
    try:
        res = await db.execute(
            select(MealLog)
            .where(MealLog.user_id == user_id)
            .order_by(MealLog.eaten_at.desc())
            .limit(limit)
        )
    except SQLAlchemyError as exc:
        _LOG.warning("meal fetch failed for %s: %s", user_id, exc)
        return []
    return [MealRecord.model_validate(r, from_attributes=True) for r in res.scalars()]


async def delete_meal(db: AsyncSession, user_id: str, meal_id: str) -> None:
    res = await db.execute(
        delete(MealLog).where(MealLog.id == meal_id, MealLog.user_id == user_id)
    )
    if not res.rowcount:
        await db.rollback()
        raise NotFound("Meal not found")
    await commit(db)


# ───────────────────────── weight ───────────────────────────
async def add_weight(
    db: AsyncSession,
    user_id: str,
    weight: str | float | None,
    notes: str | None = None,
    recorded_at: datetime | None = None,
) -> WeightEntry:
    value = _number(weight, "Weight")
    if value is None:
        raise ValidationFailed("Weight is required")
    if value <= 0:
        raise ValidationFailed("Weight must be positive")

    row = WeightLog(
        id=new_id(),
        user_id=user_id,
        weight=value,
        notes=notes or None,
        recorded_at=recorded_at or utcnow(),
    )
    db.add(row)
    await commit(db)
    return WeightEntry.model_validate(row, from_attributes=True)


async def list_weights(db: AsyncSession, user_id: str) -> list[WeightEntry]:
    """Oldest first; the summary and chart read it chronologically."""
    try:
        res = await db.execute(
            select(WeightLog)
            .where(WeightLog.user_id == user_id)
            .order_by(WeightLog.recorded_at.asc())
        )
    except SQLAlchemyError as exc:
        _LOG.warning("weight fetch failed for %s: %s", user_id, exc)
        return []
    return [WeightEntry.model_validate(r, from_attributes=True) for r in res.scalars()]


async def delete_weight(db: AsyncSession, user_id: str, entry_id: str) -> None:
    res = await db.execute(
        delete(WeightLog).where(WeightLog.id == entry_id, WeightLog.user_id == user_id)
    )
    if not res.rowcount:
        await db.rollback()
        raise NotFound("Entry not found")
    await commit(db)
