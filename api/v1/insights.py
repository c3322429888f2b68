# api/v1/insights.py
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import current_session, local_now
from api.v1.schemas import BadgeOut, BucketOut, DashboardOut, InsightsOut, QuoteOut
from core import aggregation
from core.quotes import daily_quote
from services import fasts as fast_store
from services.auth import Session
from services.db import get_session

router = APIRouter()


@router.get("/dashboard", response_model=DashboardOut)
async def dashboard(
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    now: datetime = Depends(local_now),
) -> DashboardOut:
    fasts = await fast_store.list_completed(db, session.user_id)
    stats = aggregation.dashboard(fasts, now)
    quote = daily_quote(now.date())
    return DashboardOut(
        streak=stats.streak,
        total_fasts=stats.total_fasts,
        week_hours=stats.week_hours,
        quote=QuoteOut(text=quote.text, author=quote.author),
    )


@router.get("", response_model=InsightsOut)
async def insights(
    days: int = Query(7, ge=1, le=365, description="chart window in days, 7 or 30 in the app"),
    session: Session = Depends(current_session),
    db: AsyncSession = Depends(get_session),
    now: datetime = Depends(local_now),
) -> InsightsOut:
    fasts = await fast_store.list_completed(db, session.user_id)
    totals = aggregation.fast_totals(fasts).display
    return InsightsOut(
        **totals,
        period_hours=aggregation.period_hours(fasts, now, days),
        chart=[
            BucketOut(day=b.day, label=b.label, hours=b.hours)
            for b in aggregation.chart_buckets(fasts, now, days)
        ],
        badges=[
            BadgeOut(**vars(s.badge), earned=s.earned)
            for s in aggregation.badges(totals["total_fasts"])
        ],
    )
