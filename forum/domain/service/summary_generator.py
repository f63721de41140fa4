"""Summary generator port."""

from abc import ABC, abstractmethod


class SummaryGenerator(ABC):
    """Text summarization provider.

    Implementations live in the adapter layer.
    """

    @abstractmethod
    async def generate(self, text: str, max_length: int) -> str:
        """Summarize a text.

        Args:
            text: Source text
            max_length: Maximum summary length

        Returns:
            Summary text

        Raises:
            GenerationFailure: If the provider could not produce a summary
        """
        pass
