"""
scripts/grant_admin.py
────────────────────────────────────────────────────────────────────────
Role changes are an operator task, never a self-service one.

    python -m scripts.grant_admin <user_id>            # make admin
    python -m scripts.grant_admin <user_id> --revoke   # back to user
    python -m scripts.grant_admin <user_id> --token    # also print a JWT
"""
from __future__ import annotations

import asyncio
from argparse import ArgumentParser

from dotenv import load_dotenv
load_dotenv()

from core.models import Role
from services.auth import create_token
from services.db import session_scope
from services.profiles import set_role


async def _async_main() -> None:
    ap = ArgumentParser()
    ap.add_argument("user_id")
    ap.add_argument("--revoke", action="store_true", help="demote to a plain user")
    ap.add_argument("--token", action="store_true", help="print a bearer token")
    args = ap.parse_args()

    role = Role.user if args.revoke else Role.admin
    async with session_scope() as db:
        await set_role(db, args.user_id, role.value)
    print(f"✓ {args.user_id} is now {role.value}")
    if args.token:
        print(create_token(args.user_id))


if __name__ == "__main__":  # pragma: no cover
    asyncio.run(_async_main())
