from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import jwt

from config import settings

_ALGO = "HS256"


def create_token(user_id: str, ttl_minutes: int | None = None) -> str:
    ttl = settings.token_ttl_minutes if ttl_minutes is None else ttl_minutes
    exp = datetime.now(timezone.utc) + timedelta(minutes=ttl)
    payload = {"sub": user_id, "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)


def verify_token(token: str) -> str:
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO])
    return payload["sub"]


@dataclass
class Session:
    """
    The signed-in user, handed explicitly to every operation.

    Acquired by `sign_in`, released by `sign_out`; read-only to the engines.
    """
    user_id: str
    token: str
    signed_in_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    active: bool = True


def sign_in(token: str) -> Session:
    """Raises jwt.InvalidTokenError for expired or forged tokens."""
    return Session(user_id=verify_token(token), token=token)


def sign_out(session: Session) -> None:
    session.active = False
