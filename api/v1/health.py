# api/v1/health.py
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import current_session, http_error, local_now
from api.v1.schemas import ConnectIn, SyncOut, WaterIn, WaterOut
from config import settings
from core import hydration
from core.errors import FastTrackError
from services import health_sync, profiles
from services.auth import Session
from services.db import get_session

router = APIRouter()


def health_source() -> health_sync.HealthSource:
    """Server side has no device bridge; native shells override this."""
    return health_sync.HealthSource()


def _sync_out(res: health_sync.SyncResult) -> SyncOut:
    return SyncOut(
        status=res.status.value,
        message=res.message,
        snapshot=res.snapshot,
        failed_kinds=res.failed_kinds,
        imported_steps=res.imported_steps,
    )


def _water_out(w: hydration.WaterDay) -> WaterOut:
    return WaterOut(
        day=w.day, glasses=w.glasses, goal=w.goal,
        progress=w.progress, over_goal=w.over_goal,
    )


# ───────────────────────── water ────────────────────────────
@router.get("/water", response_model=WaterOut)
async def water_today(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    now: datetime = Depends(local_now),
) -> WaterOut:
    w = await profiles.get_water(db, session.user_id, now.date(), settings.water_goal)
    return _water_out(w)


@router.post("/water", response_model=WaterOut)
async def log_water(
    body: WaterIn,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    now: datetime = Depends(local_now),
) -> WaterOut:
    today = now.date()
    current = await profiles.get_water(db, session.user_id, today, settings.water_goal)
    updated = hydration.adjust(current, body.delta, today, settings.water_goal)
    try:
        await profiles.save_water(db, session.user_id, updated)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return _water_out(updated)


# ───────────────────────── Apple Health ─────────────────────
@router.post("/apple/connect", response_model=SyncOut)
async def connect_apple(
    body: ConnectIn,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    source: health_sync.HealthSource = Depends(health_source),
) -> SyncOut:
    try:
        res = await health_sync.connect_apple_health(db, session, source, body.kinds)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return _sync_out(res)


@router.post("/apple/disconnect", status_code=status.HTTP_204_NO_CONTENT)
async def disconnect_apple(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> None:
    try:
        await health_sync.disconnect_apple_health(db, session)
    except FastTrackError as exc:
        raise http_error(exc) from exc


@router.post("/apple/sync", response_model=SyncOut)
async def sync_apple(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    source: health_sync.HealthSource = Depends(health_source),
) -> SyncOut:
    try:
        res = await health_sync.sync_apple_health(db, session, source)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return _sync_out(res)


# ───────────────────────── Google Fit ───────────────────────
@router.post("/google/link", status_code=status.HTTP_204_NO_CONTENT)
async def link_google(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> None:
    try:
        await health_sync.link_google_fit(db, session)
    except FastTrackError as exc:
        raise http_error(exc) from exc


@router.post("/google/unlink", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_google(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> None:
    try:
        await health_sync.unlink_google_fit(db, session)
    except FastTrackError as exc:
        raise http_error(exc) from exc


@router.post("/google/sync", response_model=SyncOut)
async def sync_google(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> SyncOut:
    try:
        res = await health_sync.sync_google_fit(db, session)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return _sync_out(res)
