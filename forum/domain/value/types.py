"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import hashlib
import re
from enum import Enum, IntEnum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject


class VoteValue(IntEnum):
    """Directional stance of a single vote."""

    UP = 1
    DOWN = -1

    @property
    def opposite(self) -> "VoteValue":
        """Return the opposite stance."""
        return VoteValue.DOWN if self is VoteValue.UP else VoteValue.UP


class TransitionKind(str, Enum):
    """Classified change in a voter's stance.

    Exactly one kind applies per vote request:
    - CAST: no previous vote, a new one is recorded
    - UNVOTE: the same value was re-submitted, the vote is removed
    - SWITCH: the opposite value was submitted, the vote is flipped
    """

    CAST = "cast"
    UNVOTE = "unvote"
    SWITCH = "switch"


class NotificationType(str, Enum):
    """Type of notification sent to a post owner."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @classmethod
    def for_vote(cls, value: VoteValue) -> "NotificationType":
        """Map a vote stance to its notification type."""
        return cls.UPVOTE if value is VoteValue.UP else cls.DOWNVOTE


class SummaryKind(str, Enum):
    """Kind of generated summary."""

    POST = "post"
    COMMENTS = "comments"


class Collection(str, Enum):
    """Document store collections used by the forum."""

    POSTS = "forum_posts"
    COMMENTS = "forum_comments"
    VOTES = "votes"
    NOTIFICATIONS = "notifications"
    SUMMARIES = "summaries"


class Handle(RootValueObject[str]):
    """Display name of a post or comment author."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        v = v.strip()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v


class Fingerprint(RootValueObject[str]):
    """SHA-256 fingerprint of the content a summary was generated from.

    Two fingerprints are equal exactly when the summarized source text is
    equal, so a summary can be reused until the content changes.
    """

    @field_validator("root")
    @classmethod
    def validate_fingerprint_format(cls, v: str) -> str:
        """Validate fingerprint is a lowercase hex SHA-256 digest."""
        if not re.match(r"^[0-9a-f]{64}$", v):
            raise ValueError("Fingerprint must be a 64 character hex digest")
        return v

    @classmethod
    def of(cls, text: str) -> "Fingerprint":
        """Compute the fingerprint of a source text."""
        return cls(hashlib.sha256(text.encode("utf-8")).hexdigest())
