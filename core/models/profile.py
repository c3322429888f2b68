from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    user = "user"
    admin = "admin"


class Profile(BaseModel):
    user_id: str
    display_name: str | None = None
    target_weight: float | None = None
    preferred_schedule: str = "16:8"
    role: Role = Role.user
    healthkit_connected: bool = False
    healthkit_last_sync: datetime | None = None
    health_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin

    @property
    def google_fit_linked(self) -> bool:
        return bool((self.health_data or {}).get("google_fit_linked"))
