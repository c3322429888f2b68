#!/usr/bin/env python3
"""
Delete a user's completed fasts older than N days.
Usage:
    python -m scripts.prune_history <user_id> [--days 365]
"""
import argparse
import asyncio
from datetime import datetime, timedelta, timezone

from dotenv import load_dotenv
load_dotenv()

from core.errors import StoreWriteError
from services.db import session_scope
from services.fasts import prune_completed


async def prune_history(user_id: str, days: int) -> None:
    cutoff = datetime.now(timezone.utc) - timedelta(days=days)
    async with session_scope() as db:
        removed = await prune_completed(db, user_id, cutoff)
    print(f"✓ removed {removed} completed fasts older than {days} days for user {user_id}")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("user_id")
    ap.add_argument("--days", type=int, default=365, help="keep this many days")
    args = ap.parse_args()

    if args.days < 1:
        ap.error("--days must be at least 1")

    try:
        asyncio.run(prune_history(args.user_id, args.days))
    except StoreWriteError as exc:
        raise SystemExit(f"Error: {exc}")

if __name__ == "__main__":
    main()
