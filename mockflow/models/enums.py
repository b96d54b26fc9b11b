"""Enums for model fields."""

from enum import Enum


class MockupType(str, Enum):
    """Family of screenshot a mockup imitates."""

    CHAT = "chat"
    AI = "ai"
    SOCIAL = "social"


class Platform(str, Enum):
    """Concrete platform a mockup is styled after."""

    # Chat
    WHATSAPP = "whatsapp"
    IMESSAGE = "imessage"
    DISCORD = "discord"
    TELEGRAM = "telegram"
    MESSENGER = "messenger"
    SLACK = "slack"
    # AI assistants
    CHATGPT = "chatgpt"
    CLAUDE = "claude"
    GEMINI = "gemini"
    PERPLEXITY = "perplexity"
    # Social
    LINKEDIN = "linkedin"
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"


PLATFORMS_BY_TYPE: dict[MockupType, frozenset[Platform]] = {
    MockupType.CHAT: frozenset(
        {
            Platform.WHATSAPP,
            Platform.IMESSAGE,
            Platform.DISCORD,
            Platform.TELEGRAM,
            Platform.MESSENGER,
            Platform.SLACK,
        }
    ),
    MockupType.AI: frozenset(
        {Platform.CHATGPT, Platform.CLAUDE, Platform.GEMINI, Platform.PERPLEXITY}
    ),
    MockupType.SOCIAL: frozenset(
        {
            Platform.LINKEDIN,
            Platform.INSTAGRAM,
            Platform.TWITTER,
            Platform.FACEBOOK,
            Platform.TIKTOK,
        }
    ),
}


def is_valid_platform(mockup_type: MockupType | str, platform: Platform | str) -> bool:
    """Check that a platform belongs to the given mockup type."""
    try:
        return Platform(platform) in PLATFORMS_BY_TYPE[MockupType(mockup_type)]
    except ValueError:
        return False


class SharePermission(str, Enum):
    """Permission a share grants on a mockup."""

    VIEW = "view"
    EDIT = "edit"


class AccessLevel(str, Enum):
    """Effective permission a requester holds over a mockup."""

    NONE = "none"
    VIEW = "view"
    EDIT = "edit"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        return _ACCESS_RANK[self]

    def can_view(self) -> bool:
        """Check if this level allows reading the mockup."""
        return self is not AccessLevel.NONE

    def can_edit(self) -> bool:
        """Check if this level allows editing content fields."""
        return self in (AccessLevel.EDIT, AccessLevel.OWNER)

    def is_owner(self) -> bool:
        """Check if this level carries owner-only rights."""
        return self is AccessLevel.OWNER

    @classmethod
    def from_share(cls, permission: SharePermission | str) -> "AccessLevel":
        """Map a share permission onto an access level."""
        if SharePermission(permission) is SharePermission.EDIT:
            return cls.EDIT
        return cls.VIEW


_ACCESS_RANK = {
    AccessLevel.NONE: 0,
    AccessLevel.VIEW: 1,
    AccessLevel.EDIT: 2,
    AccessLevel.OWNER: 3,
}
