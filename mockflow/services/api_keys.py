"""API keys for programmatic access.

A key is shown in full once, when it is issued. Afterwards only a masked preview
is returned. Keys without ``can_save_mockups`` may read but not write.
"""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from mockflow.models.api_key import ApiKey
from mockflow.models.user import User
from mockflow.services.access_control import Requester
from mockflow.services.errors import (
    InsufficientPermission,
    NotFoundOrUnauthorized,
    returns_result,
)

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "mk_"
PREVIEW_CHARS = 8


def generate_api_key() -> str:
    """Random key: the prefix followed by 64 hex characters."""
    return f"{API_KEY_PREFIX}{secrets.token_hex(32)}"


def mask_api_key(key: str) -> str:
    """Keep the prefix and the last few characters, star out the rest."""
    hidden = len(key) - len(API_KEY_PREFIX) - PREVIEW_CHARS
    return f"{API_KEY_PREFIX}{'*' * hidden}{key[-PREVIEW_CHARS:]}"


def create_api_key(
    db: Session,
    user: User,
    name: str,
    *,
    description: str | None = None,
    can_save_mockups: bool = True,
    expires_in_days: int | None = None,
) -> ApiKey:
    """Issue an API key for a user."""
    expires_at = None
    if expires_in_days:
        expires_at = datetime.now(UTC) + timedelta(days=expires_in_days)

    api_key = ApiKey(
        user_id=user.id,
        name=name,
        description=description,
        key=generate_api_key(),
        can_save_mockups=can_save_mockups,
        expires_at=expires_at,
    )
    db.add(api_key)
    db.commit()
    db.refresh(api_key)
    logger.info(f"Issued API key {api_key.id} for user {user.id}")
    return api_key


def authenticate_api_key(db: Session, key: str) -> ApiKey | None:
    """Look up an active, unexpired API key and record its use."""
    if not key.startswith(API_KEY_PREFIX):
        return None

    api_key = db.query(ApiKey).filter(ApiKey.key == key, ApiKey.is_active.is_(True)).first()
    if api_key is None:
        return None

    now = datetime.now(UTC)
    if api_key.expires_at is not None:
        expires_at = api_key.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at <= now:
            return None

    api_key.last_used_at = now
    db.commit()
    return api_key


class ApiKeyService:
    """Key management for the signed-in user. Keys cannot manage other keys."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _require_session(requester: Requester) -> None:
        if requester.api_key is not None:
            raise InsufficientPermission("API keys cannot manage API keys")

    @returns_result
    def list_keys(self, requester: Requester) -> list[ApiKey]:
        self._require_session(requester)
        return (
            self.db.query(ApiKey)
            .filter(ApiKey.user_id == requester.id)
            .order_by(ApiKey.created_at.desc(), ApiKey.id.desc())
            .all()
        )

    @returns_result
    def create(
        self,
        requester: Requester,
        name: str,
        description: str | None = None,
        can_save_mockups: bool = True,
        expires_in_days: int | None = None,
    ) -> ApiKey:
        self._require_session(requester)
        user = self.db.get(User, requester.id)
        if user is None:
            raise NotFoundOrUnauthorized("User not found")
        return create_api_key(
            self.db,
            user,
            name,
            description=description,
            can_save_mockups=can_save_mockups,
            expires_in_days=expires_in_days,
        )

    @returns_result
    def revoke(self, requester: Requester, key_id: int) -> None:
        self._require_session(requester)
        api_key = (
            self.db.query(ApiKey)
            .filter(ApiKey.id == key_id, ApiKey.user_id == requester.id)
            .first()
        )
        if api_key is None:
            raise NotFoundOrUnauthorized("API key not found")

        self.db.delete(api_key)
        self.db.commit()
        logger.info(f"Revoked API key {key_id} for user {requester.id}")
