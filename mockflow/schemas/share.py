"""Mockup share schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from mockflow.models.enums import SharePermission


class ShareCreate(BaseModel):
    """Share a mockup with a person, a link, or both."""

    email: EmailStr | None = Field(None, max_length=255)
    permission: SharePermission = SharePermission.VIEW
    generate_link: bool = False
    expires_in_days: int | None = Field(None, ge=1, le=365)


class ShareUpdate(BaseModel):
    """Change the permission of an existing share."""

    permission: SharePermission


class ShareResponse(BaseModel):
    """Share as seen by the mockup owner."""

    id: int
    mockup_id: int
    permission: SharePermission
    share_token: str | None
    expires_at: datetime | None
    is_expired: bool
    shared_with_email: str | None
    shared_with_user_id: int | None
    shared_with_user_name: str | None = None
    shared_with_user_email: str | None = None
    created_at: datetime
