"""API key schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class ApiKeyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    can_save_mockups: bool = True
    expires_in_days: int | None = Field(None, ge=1, le=365)


class ApiKeySummary(BaseModel):
    """Key as listed later on: the secret is masked."""

    id: int
    name: str
    description: str | None
    key_preview: str
    is_active: bool
    can_save_mockups: bool
    last_used_at: datetime | None
    expires_at: datetime | None
    created_at: datetime


class ApiKeyCreated(BaseModel):
    """Returned once, at creation, with the full key."""

    id: int
    name: str
    key: str
    description: str | None
    can_save_mockups: bool
    expires_at: datetime | None
    created_at: datetime
    message: str = "Save this key now. It will not be shown again."
