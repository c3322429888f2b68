from __future__ import annotations

from datetime import datetime

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import settings
from core.errors import (
    ActiveFastExistsError,
    FastTrackError,
    NoActiveFastError,
    NotFound,
    StoreWriteError,
    ValidationFailed,
)
from services.auth import Session, sign_in

_bearer = HTTPBearer(auto_error=False)


def current_session(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Session:
    if creds is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Not signed in")
    try:
        return sign_in(creds.credentials)
    except jwt.InvalidTokenError as exc:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, str(exc)) from exc


def local_now() -> datetime:
    """Wall clock in the configured timezone; its tzinfo defines 'a day'."""
    return datetime.now(settings.tz)


def http_error(exc: FastTrackError) -> HTTPException:
    if isinstance(exc, ValidationFailed):
        return HTTPException(status.HTTP_400_BAD_REQUEST, str(exc))
    if isinstance(exc, ActiveFastExistsError):
        return HTTPException(status.HTTP_409_CONFLICT, str(exc))
    if isinstance(exc, (NoActiveFastError, NotFound)):
        return HTTPException(status.HTTP_404_NOT_FOUND, str(exc))
    if isinstance(exc, StoreWriteError):
        return HTTPException(status.HTTP_502_BAD_GATEWAY, str(exc))
    return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
