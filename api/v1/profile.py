# api/v1/profile.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import current_session, http_error
from api.v1.schemas import ProfileIn
from core.errors import FastTrackError
from core.models import Profile
from services import profiles
from services.auth import Session
from services.db import get_session

router = APIRouter()


@router.get("", response_model=Profile)
async def get_profile(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> Profile:
    try:
        row = await profiles.ensure_profile(db, session.user_id)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return Profile.model_validate(row, from_attributes=True)


@router.put("", response_model=Profile)
async def update_profile(
    body: ProfileIn,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> Profile:
    try:
        return await profiles.update_profile(
            db,
            session.user_id,
            display_name=body.display_name,
            target_weight=body.target_weight,
            preferred_schedule=body.preferred_schedule,
        )
    except FastTrackError as exc:
        raise http_error(exc) from exc
