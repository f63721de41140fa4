"""Mock summarizer providers for testing."""

from dishka import AnyOf, Scope, provide

from forum.adapter.huggingface import MockSummaryGenerator
from forum.domain.service import SummaryGenerator
from forum.util.di.infrastructure.summarizer import SummarizerProvider


class MockSummarizerProvider(SummarizerProvider):
    """Mock summarizer provider using the deterministic mock generator."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_summary_generator(
        self,
    ) -> AnyOf[SummaryGenerator, MockSummaryGenerator]:
        """Provide mock summary generator.

        Exposed under both types so tests can inspect recorded calls.
        """
        return MockSummaryGenerator()
