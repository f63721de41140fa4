"""Summary use cases."""

from .common import SummaryResponse, SummaryStatus
from .get_comment_summary import GetCommentSummaryRequest, GetCommentSummaryUseCase
from .get_post_summary import GetPostSummaryRequest, GetPostSummaryUseCase

__all__ = [
    "GetCommentSummaryRequest",
    "GetCommentSummaryUseCase",
    "GetPostSummaryRequest",
    "GetPostSummaryUseCase",
    "SummaryResponse",
    "SummaryStatus",
]
