"""Vote use cases."""

from .recount_votes import RecountVotesRequest, RecountVotesResponse, RecountVotesUseCase
from .submit_vote import SubmitVoteRequest, SubmitVoteResponse, SubmitVoteUseCase

__all__ = [
    "SubmitVoteRequest",
    "SubmitVoteResponse",
    "SubmitVoteUseCase",
    "RecountVotesRequest",
    "RecountVotesResponse",
    "RecountVotesUseCase",
]
