"""Domain model entities for the forum."""

from forum.domain.model.comment import Comment
from forum.domain.model.notification import Notification
from forum.domain.model.post import Post
from forum.domain.model.summary import Summary
from forum.domain.model.vote import VoteOutcome, VoteRecord, classify_transition

__all__ = [
    "Post",
    "Comment",
    "VoteRecord",
    "VoteOutcome",
    "Notification",
    "Summary",
    "classify_transition",
]
