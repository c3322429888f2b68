"""
Seed a demo history (completed fasts, meals, weigh-ins) for one user.

Usage
-----

    # two weeks of 16:8 fasts plus a few meals and weigh-ins
    python -m scripts.seed_demo <USER_ID>

    # custom meals list in a JSON file: [{"meal_name": ..., "calories": ...}]
    python -m scripts.seed_demo <USER_ID> --days 30 --meals path/to/meals.json
"""
from __future__ import annotations

import argparse
import asyncio
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, List

from dotenv import load_dotenv
load_dotenv()

from core.models import FastStatus
from services.db import Fast, MealLog, WeightLog, init_models, new_id, session_scope
from services.profiles import ensure_profile

# ────────────────────────────────────────────────────────────────────
_DEFAULT_MEALS: List[dict[str, Any]] = [
    {"meal_name": "Eggs & avocado toast", "calories": 520},
    {"meal_name": "Chicken salad", "calories": 610},
    {"meal_name": "Handful of almonds", "calories": None},
]


async def _seed(user_id: str, days: int, meals: list[dict[str, Any]]) -> None:
    await init_models()
    now = datetime.now(timezone.utc)
    async with session_scope() as db:
        await ensure_profile(db, user_id)
        for d in range(days, 0, -1):
            end = (now - timedelta(days=d)).replace(hour=12, minute=0, second=0, microsecond=0)
            db.add(
                Fast(
                    id=new_id(),
                    user_id=user_id,
                    started_at=end - timedelta(hours=16),
                    ended_at=end,
                    schedule_type="16:8",
                    fasting_hours=16,
                    status=FastStatus.completed.value,
                )
            )
            for i, m in enumerate(meals):
                db.add(
                    MealLog(
                        id=new_id(),
                        user_id=user_id,
                        eaten_at=end + timedelta(hours=1 + 3 * i),
                        **m,
                    )
                )
            if d % 7 == 0:
                db.add(
                    WeightLog(id=new_id(), user_id=user_id, weight=180 - (days - d) / 7, recorded_at=end)
                )
        await db.commit()
    print(f"✓ seeded {days} days of history for user {user_id}")


def _load_json(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise ValueError("JSON file must contain a list of meal dictionaries")
    return data


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("user_id", help="target user id")
    parser.add_argument("--days", type=int, default=14, help="days of history")
    parser.add_argument(
        "--meals",
        type=Path,
        help="optional JSON file with meals to log each day (overrides defaults)",
    )
    args = parser.parse_args()

    meals = _load_json(args.meals) if args.meals else _DEFAULT_MEALS
    asyncio.run(_seed(args.user_id, args.days, meals))


if __name__ == "__main__":
    main()
