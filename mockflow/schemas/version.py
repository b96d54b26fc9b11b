"""Mockup version schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mockflow.schemas.mockup import MockupResponse


class VersionCreate(BaseModel):
    """Snapshot the current state of a mockup."""

    change_description: str | None = Field(None, max_length=500)


class VersionSummary(BaseModel):
    """Version list entry, without the content payload."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    version_number: int
    name: str
    thumbnail_url: str | None
    change_description: str | None
    created_at: datetime


class VersionResponse(VersionSummary):
    """Full version snapshot."""

    mockup_id: int
    user_id: int
    data: dict[str, Any]
    appearance: dict[str, Any]


class RestoreResponse(BaseModel):
    """Result of restoring a version onto its mockup."""

    mockup: MockupResponse
    message: str
