# api/v1/meals.py
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import current_session, http_error, local_now
from api.v1.schemas import MealDayOut, MealIn
from config import settings
from core.aggregation import group_meals
from core.errors import FastTrackError
from core.models import MealRecord
from services import logs
from services.auth import Session
from services.db import get_session

router = APIRouter()


@router.get(
    "",
    response_model=list[MealDayOut],
    summary="Recent meals grouped by day, newest first",
)
async def list_meals(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    now: datetime = Depends(local_now),
) -> list[MealDayOut]:
    meals = await logs.list_meals(db, session.user_id)
    return [
        MealDayOut(**vars(day))
        for day in group_meals(meals, now.tzinfo, settings.daily_calorie_goal)
    ]


@router.post("", response_model=MealRecord, status_code=status.HTTP_201_CREATED)
async def add_meal(
    body: MealIn,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> MealRecord:
    try:
        return await logs.add_meal(
            db, session.user_id, body.meal_name, body.calories, body.notes
        )
    except FastTrackError as exc:
        raise http_error(exc) from exc


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    meal_id: str,
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
) -> Response:
    try:
        await logs.delete_meal(db, session.user_id, meal_id)
    except FastTrackError as exc:
        raise http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
