"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .counter_projector import (
    DOWN_VOTES,
    UP_VOTES,
    CounterProjector,
    counter_delta,
    counter_field,
)
from .live_projection import (
    FeedQuery,
    LiveProjectionBus,
    LiveSubscription,
)
from .notification_dispatcher import NotificationDispatcher
from .post_service import PostService
from .summary_cache import (
    SummaryCache,
    comments_fingerprint,
    comments_source_text,
    post_fingerprint,
    post_source_text,
)
from .summary_generator import SummaryGenerator
from .vote_ledger import VoteLedger

__all__ = [
    "DOWN_VOTES",
    "UP_VOTES",
    "CommentService",
    "CounterProjector",
    "FeedQuery",
    "LiveProjectionBus",
    "LiveSubscription",
    "NotificationDispatcher",
    "PostService",
    "Service",
    "SummaryCache",
    "SummaryGenerator",
    "VoteLedger",
    "comments_fingerprint",
    "comments_source_text",
    "counter_delta",
    "counter_field",
    "post_fingerprint",
    "post_source_text",
]
