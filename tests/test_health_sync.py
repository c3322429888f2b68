# tests/test_health_sync.py
from __future__ import annotations

import asyncio
import random
from datetime import datetime, timezone

import httpx
import pytest

from config import settings
from core.errors import ValidationFailed
from services import health_sync as hs
from services import profiles
from services.auth import Session

NOW = datetime(2025, 3, 12, 15, 0, tzinfo=timezone.utc)
ME = Session("u1", "tok")


class FakeHealthKit(hs.HealthSource):
    def __init__(self, present: bool = True, broken: tuple[str, ...] = ()) -> None:
        self.present = present
        self.broken = broken
        self.authorized: list[str] = []

    async def available(self) -> bool:
        return self.present

    async def authorize(self, kinds):
        self.authorized = list(kinds)

    def _maybe_fail(self, kind: str) -> None:
        if kind in self.broken:
            raise RuntimeError(f"{kind} query not permitted")

    async def steps(self, start, end):
        self._maybe_fail("steps")
        return 6543

    async def active_energy(self, start, end):
        self._maybe_fail("active_energy")
        return 321

    async def weight(self, start, end):
        self._maybe_fail("weight")
        return 172.5

    async def heart_rate(self, start, end):
        self._maybe_fail("heart_rate")
        return 61


@pytest.fixture(autouse=True)
def _utc(monkeypatch):
    monkeypatch.setattr(settings, "timezone", "UTC")
    monkeypatch.setattr(settings, "sync_function_url", None)


# ── Apple Health ─────────────────────────────────────────────────────
def test_connect_requires_native_bridge(store):
    async def go():
        async with store() as db:
            res = await hs.connect_apple_health(db, ME, FakeHealthKit(present=False))
            assert res.status == hs.SyncStatus.unavailable
            res = await hs.sync_apple_health(db, ME, FakeHealthKit(), NOW)
            assert res.status == hs.SyncStatus.unavailable

    asyncio.run(go())


def test_connect_needs_at_least_one_kind(store):
    async def go():
        async with store() as db:
            with pytest.raises(ValidationFailed):
                await hs.connect_apple_health(db, ME, FakeHealthKit(), kinds=["", "  "])
            assert await profiles.get_profile(db, "u1") is None

    asyncio.run(go())


def test_connect_with_no_kinds_asks_for_defaults(store):
    kit = FakeHealthKit()

    async def go():
        async with store() as db:
            res = await hs.connect_apple_health(db, ME, kit, kinds=[])
            assert res.status == hs.SyncStatus.synced
            assert kit.authorized == list(hs.DEFAULT_KINDS)

    asyncio.run(go())


class DeniedHealthKit(FakeHealthKit):
    async def authorize(self, kinds):
        raise RuntimeError("user denied")


def test_denied_authorization_is_unavailable(store):
    async def go():
        async with store() as db:
            res = await hs.connect_apple_health(db, ME, DeniedHealthKit())
            assert res.status == hs.SyncStatus.unavailable
            assert res.message == "Could not link with Apple Health."
            assert await profiles.get_profile(db, "u1") is None

    asyncio.run(go())


def test_partial_sync_still_writes_snapshot(store):
    kit = FakeHealthKit(broken=("weight", "heart_rate"))

    async def go():
        async with store() as db:
            await hs.connect_apple_health(db, ME, kit)
            assert kit.authorized == list(hs.DEFAULT_KINDS)

            res = await hs.sync_apple_health(db, ME, kit, NOW)
            assert res.status == hs.SyncStatus.synced
            assert res.failed_kinds == ["weight", "heart_rate"]

            snap = await profiles.get_snapshot(db, "u1", NOW.date())
            assert (snap.steps, snap.active_energy, snap.weight, snap.heart_rate) == (6543, 321, None, None)
            assert snap.source == hs.APPLE_HEALTH

            prof = await profiles.get_profile(db, "u1")
            assert prof.health_data["steps"] == 6543
            assert prof.healthkit_last_sync == NOW

    asyncio.run(go())


def test_disconnect_keeps_google_link(store):
    async def go():
        async with store() as db:
            kit = FakeHealthKit()
            await hs.connect_apple_health(db, ME, kit)
            await hs.link_google_fit(db, ME)
            await hs.sync_apple_health(db, ME, kit, NOW)

            await hs.disconnect_apple_health(db, ME)
            prof = await profiles.get_profile(db, "u1")
            assert not prof.healthkit_connected
            assert prof.health_data == {"google_fit_linked": True}

    asyncio.run(go())


# ── Google Fit ───────────────────────────────────────────────────────
def test_google_fit_requires_link(store):
    async def go():
        async with store() as db:
            res = await hs.sync_google_fit(db, ME, now=NOW)
            assert res.status == hs.SyncStatus.unavailable
            assert await profiles.get_snapshot(db, "u1", NOW.date()) is None

    asyncio.run(go())


def test_google_fit_falls_back_to_simulated(store):
    async def go():
        async with store() as db:
            await hs.link_google_fit(db, ME)
            res = await hs.sync_google_fit(db, ME, now=NOW, rng=random.Random(7))
            assert res.status == hs.SyncStatus.simulated
            assert "simulated" in res.message
            assert 3000 <= res.snapshot.steps <= 7999
            assert 100 <= res.snapshot.active_energy <= 399

            snap = await profiles.get_snapshot(db, "u1", NOW.date())
            assert snap.source == hs.GOOGLE_FIT
            assert snap.steps == res.snapshot.steps

    asyncio.run(go())


def test_google_fit_sync_function(store, monkeypatch):
    monkeypatch.setattr(settings, "sync_function_url", "https://functions.test/sync-google-fit")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = request.read()
        return httpx.Response(200, json={"steps": 4321})

    async def go():
        async with store() as db, httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            await hs.link_google_fit(db, ME)
            res = await hs.sync_google_fit(db, ME, client, NOW)
            assert res.status == hs.SyncStatus.synced
            assert res.imported_steps == 4321
            assert "4321 steps" in res.message

    asyncio.run(go())
    assert b'"user_id"' in seen["body"]


def test_google_fit_function_error_is_simulated(store, monkeypatch):
    monkeypatch.setattr(settings, "sync_function_url", "https://functions.test/sync-google-fit")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "not deployed"})

    async def go():
        async with store() as db, httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            await hs.link_google_fit(db, ME)
            res = await hs.sync_google_fit(db, ME, client, NOW)
            assert res.status == hs.SyncStatus.simulated

    asyncio.run(go())


@pytest.mark.parametrize("payload", [[1, 2], 42, {"steps": "lots"}])
def test_google_fit_bad_payload_is_simulated(store, monkeypatch, payload):
    monkeypatch.setattr(settings, "sync_function_url", "https://functions.test/sync-google-fit")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    async def go():
        async with store() as db, httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            await hs.link_google_fit(db, ME)
            res = await hs.sync_google_fit(db, ME, client, NOW, random.Random(3))
            assert res.status == hs.SyncStatus.simulated
            assert res.imported_steps is None
            assert res.snapshot.source == hs.GOOGLE_FIT

    asyncio.run(go())
