"""Version history for mockups: snapshot, list, restore and delete.

Version numbers grow by one from the highest existing number for the mockup. The
``(mockup_id, version_number)`` unique constraint decides between two snapshots
racing for the same number; the loser gets a ``ConflictError`` and may retry.
Gaps left by deleted versions below the highest number are never refilled.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mockflow.config import get_settings
from mockflow.models.mockup import Mockup, MockupVersion
from mockflow.services.access_control import Requester, is_literal_owner
from mockflow.services.errors import ConflictError, NotFoundOrUnauthorized, returns_result
from mockflow.services.mockup_service import require_can_save, require_requester

logger = logging.getLogger(__name__)

# Snapshotted and restored content
SNAPSHOT_FIELDS = ("name", "data", "appearance", "thumbnail_url")


class VersionService:
    """Service for a mockup's version history. Owner only."""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def _get_owned_mockup(self, mockup_id: int, requester: Requester | None) -> Mockup:
        requester = require_requester(requester)
        mockup = self.db.query(Mockup).filter(Mockup.id == mockup_id).first()
        if mockup is None or not is_literal_owner(mockup, requester):
            raise NotFoundOrUnauthorized("Mockup not found")
        return mockup

    def _get_version(self, mockup_id: int, version_id: int) -> MockupVersion:
        version = (
            self.db.query(MockupVersion)
            .filter(MockupVersion.id == version_id, MockupVersion.mockup_id == mockup_id)
            .first()
        )
        if version is None:
            raise NotFoundOrUnauthorized("Version not found")
        return version

    def next_version_number(self, mockup_id: int) -> int:
        """Highest existing version number for the mockup plus one."""
        current = (
            self.db.query(func.coalesce(func.max(MockupVersion.version_number), 0))
            .filter(MockupVersion.mockup_id == mockup_id)
            .scalar()
        )
        return (current or 0) + 1

    @returns_result
    def create(
        self,
        mockup_id: int,
        requester: Requester | None,
        change_description: str | None = None,
    ) -> MockupVersion:
        """Snapshot the mockup's current content as a new version."""
        mockup = self._get_owned_mockup(mockup_id, requester)
        require_can_save(requester)

        version = MockupVersion(
            mockup_id=mockup.id,
            user_id=requester.id,
            version_number=self.next_version_number(mockup.id),
            change_description=change_description,
            **{field: getattr(mockup, field) for field in SNAPSHOT_FIELDS},
        )
        self.db.add(version)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(
                f"Version number {version.version_number} for mockup {mockup_id} "
                "was taken by a concurrent snapshot"
            )
            raise ConflictError("Another version was saved at the same time, try again") from None
        self.db.refresh(version)

        logger.info(f"Saved version {version.version_number} of mockup {mockup_id}")
        return version

    @returns_result
    def list_versions(self, mockup_id: int, requester: Requester | None) -> list[MockupVersion]:
        """Most recent versions first, capped at the configured limit."""
        self._get_owned_mockup(mockup_id, requester)
        return (
            self.db.query(MockupVersion)
            .filter(MockupVersion.mockup_id == mockup_id)
            .order_by(MockupVersion.version_number.desc())
            .limit(self.settings.version_list_limit)
            .all()
        )

    @returns_result
    def get(self, mockup_id: int, version_id: int, requester: Requester | None) -> MockupVersion:
        """Get a single version with its full content."""
        self._get_owned_mockup(mockup_id, requester)
        return self._get_version(mockup_id, version_id)

    @returns_result
    def restore(
        self, mockup_id: int, version_id: int, requester: Requester | None
    ) -> tuple[Mockup, MockupVersion]:
        """Copy a version's content back onto the live mockup.

        Visibility, project and owner are left alone. The pre-restore state is
        not snapshotted; callers that want it must create a version first.
        """
        mockup = self._get_owned_mockup(mockup_id, requester)
        require_can_save(requester)
        version = self._get_version(mockup_id, version_id)

        for field in SNAPSHOT_FIELDS:
            setattr(mockup, field, getattr(version, field))
        mockup.touch()
        self.db.commit()
        self.db.refresh(mockup)

        logger.info(f"Restored mockup {mockup_id} to version {version.version_number}")
        return mockup, version

    @returns_result
    def delete(self, mockup_id: int, version_id: int, requester: Requester | None) -> None:
        """Delete one version. Remaining versions keep their numbers."""
        self._get_owned_mockup(mockup_id, requester)
        require_can_save(requester)
        version = self._get_version(mockup_id, version_id)

        self.db.delete(version)
        self.db.commit()
        logger.info(f"Deleted version {version_id} of mockup {mockup_id}")
