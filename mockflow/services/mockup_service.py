"""Mockup lifecycle: create, read, update, delete and list, gated by permission."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from mockflow.config import get_settings
from mockflow.models.enums import AccessLevel, MockupType, is_valid_platform
from mockflow.models.mockup import Mockup, MockupShare
from mockflow.models.project import Project
from mockflow.schemas.mockup import MockupCreate, MockupEnvelope, MockupUpdate
from mockflow.services.access_control import (
    Requester,
    is_literal_owner,
    is_share_active,
    load_permission,
    resolve_permission,
)
from mockflow.services.errors import (
    InsufficientPermission,
    NotFoundOrUnauthorized,
    ValidationError,
    returns_result,
)

logger = logging.getLogger(__name__)

# Fields any editor may write
CONTENT_FIELDS = ("name", "data", "appearance", "thumbnail_url")
# Fields only the owner may write
OWNER_FIELDS = ("project_id", "is_public")


def require_requester(requester: Requester | None) -> Requester:
    """Reject anonymous callers for operations that need an identity."""
    if requester is None:
        raise NotFoundOrUnauthorized("Authentication required")
    return requester


def require_can_save(requester: Requester) -> None:
    """Reject API keys that were issued without save rights."""
    if not requester.can_save:
        raise InsufficientPermission("This API key cannot save mockups")


def render_bundle(mockup: Mockup) -> dict[str, Any]:
    """Opaque content bundle handed to the export pipeline."""
    return {
        "type": mockup.type,
        "platform": mockup.platform,
        "data": mockup.data,
        "appearance": mockup.appearance,
    }


class MockupService:
    """Service for mockup lifecycle operations."""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def _get(self, mockup_id: int) -> Mockup:
        mockup = self.db.query(Mockup).filter(Mockup.id == mockup_id).first()
        if mockup is None:
            raise NotFoundOrUnauthorized("Mockup not found")
        return mockup

    def _get_accessible(
        self, mockup_id: int, requester: Requester | None
    ) -> tuple[Mockup, AccessLevel]:
        mockup = self._get(mockup_id)
        permission = load_permission(self.db, mockup, requester)
        if not permission.can_view():
            # Same outward signal as a missing record
            raise NotFoundOrUnauthorized("Mockup not found")
        return mockup, permission

    def _get_editable(self, mockup_id: int, requester: Requester) -> tuple[Mockup, AccessLevel]:
        mockup, permission = self._get_accessible(mockup_id, requester)
        if not permission.can_edit():
            raise InsufficientPermission("You do not have permission to update this mockup")
        require_can_save(requester)
        return mockup, permission

    def _check_project(self, project_id: int | None, requester: Requester) -> None:
        if project_id is None:
            return
        project = (
            self.db.query(Project)
            .filter(Project.id == project_id, Project.owner_id == requester.id)
            .first()
        )
        if project is None:
            raise ValidationError(f"Project {project_id} does not exist")

    @returns_result
    def create(self, requester: Requester | None, payload: MockupCreate) -> Mockup:
        """Create a mockup owned by the requester."""
        requester = require_requester(requester)
        require_can_save(requester)

        if not is_valid_platform(payload.type, payload.platform):
            raise ValidationError(
                f"Platform '{payload.platform.value}' is not a {payload.type.value} platform"
            )
        self._check_project(payload.project_id, requester)

        mockup = Mockup(
            owner_id=requester.id,
            name=payload.name,
            type=payload.type.value,
            platform=payload.platform.value,
            data=payload.data,
            appearance=payload.appearance or {},
            project_id=payload.project_id,
            is_public=payload.is_public,
            thumbnail_url=payload.thumbnail_url,
        )
        self.db.add(mockup)
        self.db.commit()
        self.db.refresh(mockup)

        logger.info(f"User {requester.id} created {mockup.platform} mockup {mockup.id}")
        return mockup

    @returns_result
    def read(self, mockup_id: int, requester: Requester | None) -> tuple[Mockup, AccessLevel]:
        """Get a mockup and the requester's access level on it."""
        return self._get_accessible(mockup_id, requester)

    @returns_result
    def update(
        self, mockup_id: int, requester: Requester | None, payload: MockupUpdate
    ) -> tuple[Mockup, AccessLevel]:
        """Apply a sparse update.

        Content fields need edit access. ``project_id`` and ``is_public`` are
        applied for the owner only and silently dropped for editors.
        """
        requester = require_requester(requester)
        mockup, permission = self._get_editable(mockup_id, requester)

        changes = payload.model_dump(exclude_unset=True)

        for field in CONTENT_FIELDS:
            if field not in changes:
                continue
            value = changes[field]
            # name, data and appearance are not nullable; thumbnail_url may be cleared
            if value is None and field != "thumbnail_url":
                continue
            setattr(mockup, field, value)

        if permission.is_owner():
            if "project_id" in changes:
                self._check_project(changes["project_id"], requester)
                mockup.project_id = changes["project_id"]
            if changes.get("is_public") is not None:
                mockup.is_public = changes["is_public"]
        else:
            dropped = [field for field in OWNER_FIELDS if field in changes]
            if dropped:
                logger.debug(f"Ignoring owner-only fields {dropped} from user {requester.id}")

        mockup.touch()
        self.db.commit()
        self.db.refresh(mockup)
        return mockup, permission

    @returns_result
    def delete(self, mockup_id: int, requester: Requester | None) -> None:
        """Delete a mockup with its shares and versions. Owner only."""
        requester = require_requester(requester)
        mockup = self._get(mockup_id)
        if not is_literal_owner(mockup, requester):
            raise NotFoundOrUnauthorized("Mockup not found")
        require_can_save(requester)

        self.db.delete(mockup)
        self.db.commit()
        logger.info(f"User {requester.id} deleted mockup {mockup_id}")

    @returns_result
    def list_owned(
        self,
        requester: Requester | None,
        mockup_type: MockupType | None = None,
        platform: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> dict[str, Any]:
        """List the requester's own mockups, most recently updated first.

        The platform filter runs on the already paginated page, so a page can hold
        fewer than ``limit`` rows while ``total`` still counts every platform.
        """
        requester = require_requester(requester)

        if limit is None:
            limit = self.settings.mockup_list_default_limit
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        if offset < 0:
            raise ValidationError("offset must not be negative")
        limit = min(limit, self.settings.mockup_list_max_limit)

        query = self.db.query(Mockup).filter(Mockup.owner_id == requester.id)
        if mockup_type is not None:
            query = query.filter(Mockup.type == MockupType(mockup_type).value)

        total = query.count()
        mockups = (
            query.order_by(Mockup.updated_at.desc(), Mockup.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

        if platform:
            mockups = [m for m in mockups if m.platform == platform]

        return {"mockups": mockups, "total": total, "limit": limit, "offset": offset}

    @returns_result
    def list_shared_with(self, requester: Requester | None) -> list[tuple[Mockup, AccessLevel]]:
        """List other users' mockups reachable through one of the requester's shares."""
        requester = require_requester(requester)

        conditions = [MockupShare.shared_with_user_id == requester.id]
        if requester.email:
            conditions.append(
                func.lower(MockupShare.shared_with_email) == requester.email.lower()
            )
        shares = self.db.query(MockupShare).filter(or_(*conditions)).all()

        # Expired shares neither grant access nor list the mockup
        now = datetime.now(UTC)
        shares_by_mockup: dict[int, list[MockupShare]] = {}
        for share in shares:
            if not is_share_active(share, now):
                continue
            shares_by_mockup.setdefault(share.mockup_id, []).append(share)
        if not shares_by_mockup:
            return []

        mockups = (
            self.db.query(Mockup)
            .filter(Mockup.id.in_(list(shares_by_mockup)), Mockup.owner_id != requester.id)
            .order_by(Mockup.updated_at.desc(), Mockup.id.desc())
            .all()
        )

        result = []
        for mockup in mockups:
            permission = resolve_permission(mockup, requester, shares_by_mockup[mockup.id])
            if permission.can_view():
                result.append((mockup, permission))
        return result

    @returns_result
    def public_view(self, mockup_id: int) -> Mockup:
        """Get a public mockup for the anonymous view page."""
        mockup = self._get(mockup_id)
        if not mockup.is_public:
            raise NotFoundOrUnauthorized("Mockup not found")
        return mockup

    @returns_result
    def export_envelope(self, mockup_id: int, requester: Requester | None) -> dict[str, Any]:
        """Wrap a mockup's content in the offline export envelope."""
        mockup, _ = self._get_accessible(mockup_id, requester)
        bundle = render_bundle(mockup)
        return {
            "version": self.settings.envelope_version,
            "exportedAt": datetime.now(UTC),
            "mockupType": bundle["type"],
            "platform": bundle["platform"],
            "name": mockup.name,
            "data": bundle["data"],
            "appearance": bundle["appearance"],
        }

    @returns_result
    def import_envelope(
        self, mockup_id: int, requester: Requester | None, envelope: MockupEnvelope
    ) -> tuple[Mockup, AccessLevel]:
        """Replace a mockup's content with the content of an export envelope."""
        requester = require_requester(requester)
        mockup, permission = self._get_editable(mockup_id, requester)

        if envelope.mockup_type.value != mockup.type:
            raise ValidationError(
                f"This file contains a {envelope.mockup_type.value} mockup, "
                f"but this is a {mockup.type} mockup"
            )

        mockup.data = envelope.data
        if envelope.appearance is not None:
            mockup.appearance = envelope.appearance
        mockup.touch()
        self.db.commit()
        self.db.refresh(mockup)

        logger.info(f"User {requester.id} imported content into mockup {mockup.id}")
        return mockup, permission
