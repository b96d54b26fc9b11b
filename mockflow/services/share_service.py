"""Share management for mockups. Every operation is restricted to the owner."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from mockflow.config import get_settings
from mockflow.models.enums import SharePermission
from mockflow.models.mockup import Mockup, MockupShare
from mockflow.services.access_control import Requester, is_literal_owner, is_share_active
from mockflow.services.auth import get_user_by_email
from mockflow.services.errors import NotFoundOrUnauthorized, ValidationError, returns_result
from mockflow.services.mockup_service import require_can_save, require_requester

logger = logging.getLogger(__name__)


def generate_share_token() -> str:
    """Generate a random link token."""
    return secrets.token_hex(32)


def share_to_dict(share: MockupShare, now: datetime | None = None) -> dict[str, Any]:
    """Owner-facing view of a share, including grantee details when known."""
    grantee = share.shared_with_user
    return {
        "id": share.id,
        "mockup_id": share.mockup_id,
        "permission": share.permission,
        "share_token": share.share_token,
        "expires_at": share.expires_at,
        "is_expired": not is_share_active(share, now),
        "shared_with_email": share.shared_with_email,
        "shared_with_user_id": share.shared_with_user_id,
        "shared_with_user_name": grantee.display_name if grantee else None,
        "shared_with_user_email": grantee.email if grantee else None,
        "created_at": share.created_at,
    }


class ShareService:
    """Service for granting and revoking access to a mockup."""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def _get_owned_mockup(self, mockup_id: int, requester: Requester | None) -> Mockup:
        requester = require_requester(requester)
        mockup = self.db.query(Mockup).filter(Mockup.id == mockup_id).first()
        if mockup is None or not is_literal_owner(mockup, requester):
            raise NotFoundOrUnauthorized("Mockup not found")
        return mockup

    def _get_share(self, mockup_id: int, share_id: int) -> MockupShare:
        share = (
            self.db.query(MockupShare)
            .filter(MockupShare.id == share_id, MockupShare.mockup_id == mockup_id)
            .first()
        )
        if share is None:
            raise NotFoundOrUnauthorized("Share not found")
        return share

    @returns_result
    def list_shares(
        self, mockup_id: int, requester: Requester | None
    ) -> list[dict[str, Any]]:
        """List every share on a mockup, expired ones included."""
        self._get_owned_mockup(mockup_id, requester)
        shares = (
            self.db.query(MockupShare)
            .filter(MockupShare.mockup_id == mockup_id)
            .order_by(MockupShare.created_at, MockupShare.id)
            .all()
        )
        now = datetime.now(UTC)
        return [share_to_dict(share, now) for share in shares]

    @returns_result
    def create(
        self,
        mockup_id: int,
        requester: Requester | None,
        email: str | None = None,
        permission: SharePermission = SharePermission.VIEW,
        generate_link: bool = False,
        expires_in_days: int | None = None,
    ) -> dict[str, Any]:
        """Share a mockup with an email address, a link, or both.

        When the email belongs to an existing account the share is keyed by that
        user's id; otherwise it waits on the email until the person signs up.
        """
        mockup = self._get_owned_mockup(mockup_id, requester)
        require_can_save(requester)

        if not email and not generate_link:
            raise ValidationError("Provide an email or request a share link")
        if expires_in_days is not None and not (
            1 <= expires_in_days <= self.settings.share_link_max_days
        ):
            raise ValidationError(
                f"expires_in_days must be between 1 and {self.settings.share_link_max_days}"
            )

        shared_with_user_id = None
        shared_with_email = None
        if email:
            email = email.lower()
            if email == requester.email.lower():
                raise ValidationError("You cannot share with yourself")

            existing_email_share = (
                self.db.query(MockupShare)
                .filter(
                    MockupShare.mockup_id == mockup.id,
                    func.lower(MockupShare.shared_with_email) == email,
                )
                .first()
            )
            if existing_email_share:
                raise ValidationError("This mockup is already shared with this email")

            grantee = get_user_by_email(self.db, email)
            if grantee:
                existing_user_share = (
                    self.db.query(MockupShare)
                    .filter(
                        MockupShare.mockup_id == mockup.id,
                        MockupShare.shared_with_user_id == grantee.id,
                    )
                    .first()
                )
                if existing_user_share:
                    raise ValidationError("This mockup is already shared with this user")
                shared_with_user_id = grantee.id
            else:
                shared_with_email = email

        share_token = generate_share_token() if generate_link else None
        expires_at = None
        if expires_in_days:
            expires_at = datetime.now(UTC) + timedelta(days=expires_in_days)

        share = MockupShare(
            mockup_id=mockup.id,
            owner_id=requester.id,
            shared_with_user_id=shared_with_user_id,
            shared_with_email=shared_with_email,
            permission=SharePermission(permission).value,
            share_token=share_token,
            expires_at=expires_at,
        )
        self.db.add(share)
        self.db.commit()
        self.db.refresh(share)

        logger.info(
            f"User {requester.id} shared mockup {mockup.id} ({share.permission}) "
            f"as share {share.id}"
        )
        return share_to_dict(share)

    @returns_result
    def update(
        self,
        mockup_id: int,
        share_id: int,
        requester: Requester | None,
        permission: SharePermission,
    ) -> dict[str, Any]:
        """Change the permission a share grants."""
        self._get_owned_mockup(mockup_id, requester)
        require_can_save(requester)
        share = self._get_share(mockup_id, share_id)

        share.permission = SharePermission(permission).value
        self.db.commit()
        self.db.refresh(share)

        logger.info(f"Share {share.id} on mockup {mockup_id} now grants {share.permission}")
        return share_to_dict(share)

    @returns_result
    def delete(self, mockup_id: int, share_id: int, requester: Requester | None) -> None:
        """Revoke a share."""
        self._get_owned_mockup(mockup_id, requester)
        require_can_save(requester)
        share = self._get_share(mockup_id, share_id)

        self.db.delete(share)
        self.db.commit()
        logger.info(f"Revoked share {share_id} on mockup {mockup_id}")
