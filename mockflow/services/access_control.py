"""Permission resolution for mockups.

Every request evaluates permission from scratch: the owner check, the public
floor and the requester's active shares. Nothing is cached or persisted.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from mockflow.models.api_key import ApiKey
from mockflow.models.enums import AccessLevel
from mockflow.models.mockup import Mockup, MockupShare


@dataclass(frozen=True)
class Requester:
    """Identity a request acts as. Anonymous requests use ``None`` instead."""

    id: int
    email: str
    name: str | None = None
    api_key: ApiKey | None = None

    @property
    def can_save(self) -> bool:
        """Whether this identity may write mockups.

        Session-authenticated users always can; API keys need ``can_save_mockups``.
        """
        return self.api_key is None or bool(self.api_key.can_save_mockups)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timezone-aware columns back naive
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def is_share_active(share: MockupShare, now: datetime | None = None) -> bool:
    """Check that a share has not expired."""
    if share.expires_at is None:
        return True
    now = now or datetime.now(UTC)
    return _as_utc(share.expires_at) > _as_utc(now)


def share_matches(share: MockupShare, requester: Requester) -> bool:
    """Check whether a share names the requester as its grantee."""
    if share.shared_with_user_id is not None and share.shared_with_user_id == requester.id:
        return True
    if share.shared_with_email and requester.email:
        return share.shared_with_email.lower() == requester.email.lower()
    return False


def is_literal_owner(mockup: Mockup, requester: Requester | None) -> bool:
    """Strict identity check for owner-only operations.

    Delete, share management and version history use this instead of
    :func:`resolve_permission`; no share can satisfy it.
    """
    return requester is not None and mockup.owner_id == requester.id


def resolve_permission(
    mockup: Mockup,
    requester: Requester | None,
    shares: Iterable[MockupShare] = (),
    now: datetime | None = None,
) -> AccessLevel:
    """Compute the effective access level of a requester over a mockup.

    Args:
        mockup: The mockup being accessed.
        requester: The caller, or ``None`` for anonymous access.
        shares: Candidate shares for this mockup. Shares for other mockups,
            other grantees, or past their expiry are ignored.
        now: Evaluation time, defaults to the current UTC time.

    Returns:
        ``OWNER`` for the owner, otherwise the most permissive of the public
        floor and the requester's active shares, or ``NONE``.
    """
    if requester is not None and mockup.owner_id == requester.id:
        return AccessLevel.OWNER

    level = AccessLevel.VIEW if mockup.is_public else AccessLevel.NONE

    # Shares need an identity
    if requester is None:
        return level

    now = now or datetime.now(UTC)
    for share in shares:
        if share.mockup_id != mockup.id:
            continue
        if not share_matches(share, requester) or not is_share_active(share, now):
            continue
        granted = AccessLevel.from_share(share.permission)
        if granted.rank > level.rank:
            level = granted

    return level


def find_candidate_shares(db: Session, mockup_id: int, requester: Requester) -> list[MockupShare]:
    """Load the shares on a mockup that name the requester, expired or not."""
    conditions = [MockupShare.shared_with_user_id == requester.id]
    if requester.email:
        conditions.append(func.lower(MockupShare.shared_with_email) == requester.email.lower())

    return (
        db.query(MockupShare)
        .filter(MockupShare.mockup_id == mockup_id, or_(*conditions))
        .all()
    )


def load_permission(db: Session, mockup: Mockup, requester: Requester | None) -> AccessLevel:
    """Resolve permission, querying shares only when they could matter."""
    if requester is None or mockup.owner_id == requester.id:
        return resolve_permission(mockup, requester)
    shares = find_candidate_shares(db, mockup.id, requester)
    return resolve_permission(mockup, requester, shares)
