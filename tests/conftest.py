# tests/conftest.py
from __future__ import annotations

import asyncio

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from services.db import init_models
from services.notify import Notifier


@pytest.fixture
def store(tmp_path):
    """Fresh SQLite file per test; NullPool so every event loop gets its own connection."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    asyncio.run(init_models(eng))
    return async_sessionmaker(eng, expire_on_commit=False)


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.titles: list[str] = []
        self.haptics: list[str] = []

    def notify(self, title: str, body: str = "") -> None:
        self.titles.append(title)

    def haptic(self, pattern: str) -> None:
        self.haptics.append(pattern)

    def count(self, prefix: str) -> int:
        return sum(1 for t in self.titles if t.startswith(prefix))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
