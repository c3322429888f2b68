# api/v1/weights.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import current_session, http_error
from api.v1.schemas import WeightIn, WeightPageOut, WeightSummaryOut
from core.aggregation import weight_delta
from core.errors import FastTrackError
from core.models import WeightEntry
from services import logs, profiles
from services.auth import Session
from services.db import get_session

router = APIRouter()


@router.get("", response_model=WeightPageOut)
async def weight_page(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> WeightPageOut:
    entries = await logs.list_weights(db, session.user_id)
    profile = await profiles.get_profile(db, session.user_id)
    target = profile.target_weight if profile else None
    summary = weight_delta(entries, target)
    return WeightPageOut(
        entries=entries,
        summary=WeightSummaryOut(**vars(summary), target_weight=target),
    )


@router.post("", response_model=WeightEntry, status_code=status.HTTP_201_CREATED)
async def add_weight(
    body: WeightIn,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> WeightEntry:
    try:
        return await logs.add_weight(db, session.user_id, body.weight, body.notes)
    except FastTrackError as exc:
        raise http_error(exc) from exc


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_weight(
    entry_id: str,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> Response:
    try:
        await logs.delete_weight(db, session.user_id, entry_id)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
