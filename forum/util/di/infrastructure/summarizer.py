"""Summarizer infrastructure providers."""

import logfire
from dishka import Scope, provide

from forum.adapter.huggingface import HuggingFaceSummaryGenerator, MockSummaryGenerator
from forum.config import Settings, SummarySettings
from forum.domain.service import SummaryGenerator
from forum.util.di.base import ProviderBase
from forum.util.error import ConfigurationError
from forum.util.observability import instrument_httpx


class SummarizerProvider(ProviderBase):
    """Summarizer component base."""

    __mock_component__ = "summarizer"


class ProdSummarizerProvider(SummarizerProvider):
    """Production summarizer provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_summary_generator(
        self, summary_settings: SummarySettings, settings: Settings
    ) -> SummaryGenerator:
        """Provide the configured summary generator.

        Raises:
            ConfigurationError: If production runs without a provider token
        """
        if summary_settings.provider == "mock":
            logfire.warn("Using mock summary generator", environment=settings.environment)
            return MockSummaryGenerator()

        if settings.environment == "production" and not summary_settings.api_token:
            raise ConfigurationError(
                "SUMMARIES__API_TOKEN must be configured in production"
            )

        instrument_httpx()
        return HuggingFaceSummaryGenerator(
            api_url=summary_settings.api_url,
            model=summary_settings.model,
            api_token=summary_settings.api_token,
            timeout=summary_settings.timeout,
        )
