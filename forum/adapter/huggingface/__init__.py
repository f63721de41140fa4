"""Hugging Face summarization adapter."""

from .client import HuggingFaceSummaryGenerator, MockSummaryGenerator

__all__ = ["HuggingFaceSummaryGenerator", "MockSummaryGenerator"]
