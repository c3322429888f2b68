# api/v1/admin.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import current_session
from api.v1.schemas import AdminOut
from services import profiles
from services.auth import Session
from services.db import get_session

router = APIRouter()


@router.get("", response_model=AdminOut)
async def overview(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> AdminOut:
    me = await profiles.get_profile(db, session.user_id)
    if me is None or not me.is_admin:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Admins only")

    ov = await profiles.admin_overview(db)
    return AdminOut(
        total_users=ov.total_users,
        active_fasts=ov.active_fasts,
        total_snapshots=ov.total_snapshots,
        profiles=ov.profiles,
    )
