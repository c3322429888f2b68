"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* Models for the six owner-scoped tables
* Commit helper that turns store rejections into StoreWriteError
"""
from __future__ import annotations

import datetime as dt
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, AsyncIterator
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    TypeDecorator,
    UniqueConstraint,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings
from core.errors import StoreWriteError

_LOG = logging.getLogger(__name__)

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None
_SESSIONMAKER: async_sessionmaker[AsyncSession] | None = None


def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = create_async_engine(settings.database_url, pool_pre_ping=True)
    return _ENGINE


def sessionmaker() -> async_sessionmaker[AsyncSession]:
    global _SESSIONMAKER
    if _SESSIONMAKER is None:
        _SESSIONMAKER = async_sessionmaker(engine(), expire_on_commit=False)
    return _SESSIONMAKER


# ───────── column helpers ───────────────────────────────────────────
class UTCDateTime(TypeDecorator):
    """Stores UTC, always hands back an aware datetime (SQLite drops tzinfo)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Any):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect: Any):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def new_id() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class Fast(Base):
    __tablename__ = "fasts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String, index=True)
    started_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)
    ended_at: Mapped[datetime | None] = mapped_column(UTCDateTime)
    schedule_type: Mapped[str] = mapped_column(String)
    fasting_hours: Mapped[float] = mapped_column(Float)
    status: Mapped[str] = mapped_column(String, default="active", index=True)
    notes: Mapped[str | None] = mapped_column(Text)


class MealLog(Base):
    __tablename__ = "meal_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String, index=True)
    meal_name: Mapped[str] = mapped_column(String)
    calories: Mapped[float | None] = mapped_column(Float)
    notes: Mapped[str | None] = mapped_column(Text)
    eaten_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)


class WeightLog(Base):
    __tablename__ = "weight_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String, index=True)
    weight: Mapped[float] = mapped_column(Float)
    recorded_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)
    notes: Mapped[str | None] = mapped_column(Text)


class ProfileRow(Base):
    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String, primary_key=True)
    display_name: Mapped[str | None] = mapped_column(String)
    target_weight: Mapped[float | None] = mapped_column(Float)
    preferred_schedule: Mapped[str] = mapped_column(String, default="16:8")
    role: Mapped[str] = mapped_column(String, default="user")
    healthkit_connected: Mapped[bool] = mapped_column(Boolean, default=False)
    healthkit_last_sync: Mapped[datetime | None] = mapped_column(UTCDateTime)
    health_data: Mapped[dict] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)


class SnapshotRow(Base):
    __tablename__ = "health_snapshots"
    __table_args__ = (UniqueConstraint("user_id", "date"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String, index=True)
    date: Mapped[dt.date] = mapped_column(Date)
    steps: Mapped[float | None] = mapped_column(Float)
    active_energy: Mapped[float | None] = mapped_column(Float)
    weight: Mapped[float | None] = mapped_column(Float)
    heart_rate: Mapped[float | None] = mapped_column(Float)
    source: Mapped[str] = mapped_column(String)


class WaterRow(Base):
    __tablename__ = "water_intake"
    __table_args__ = (UniqueConstraint("user_id", "date"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String, index=True)
    date: Mapped[dt.date] = mapped_column(Date)
    glasses: Mapped[int] = mapped_column(Integer, default=0)


# ───────── write helper ──────────────────────────────────────────────
async def commit(db: AsyncSession) -> None:
    """Commit or roll back; the store's message is surfaced verbatim."""
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        _LOG.error("store write rejected: %s", exc)
        raise StoreWriteError(str(exc.orig if getattr(exc, "orig", None) else exc)) from exc


async def init_models(eng: AsyncEngine | None = None) -> None:
    """Create missing tables (local dev / tests)."""
    async with (eng or engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ───────── session helpers ───────────────────────────────────────────

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with sessionmaker()() as session:
        yield session


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """`async with` flavour of get_session for scripts."""
    async with sessionmaker()() as session:
        yield session
