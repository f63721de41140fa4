"""Hugging Face summarization client.

Calls the Inference API summarization pipeline:

    POST {api_url}/{model}
    {"inputs": "...", "parameters": {"max_length": 200}}
    -> [{"summary_text": "..."}]
"""

import hashlib

import httpx
import logfire

from forum.domain.error import GenerationFailure
from forum.domain.service.summary_generator import SummaryGenerator


class HuggingFaceSummaryGenerator(SummaryGenerator):
    """SummaryGenerator backed by the Hugging Face Inference API."""

    def __init__(
        self,
        api_url: str,
        model: str,
        api_token: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize Hugging Face client.

        Args:
            api_url: Inference API base URL
            model: Summarization model name
            api_token: API token (anonymous requests are heavily rate limited)
            timeout: Request timeout in seconds
        """
        self.endpoint = f"{api_url.rstrip('/')}/{model}"
        self.model = model
        self.api_token = api_token
        self.timeout = timeout

    async def generate(self, text: str, max_length: int) -> str:
        """Summarize a text.

        Args:
            text: Source text
            max_length: Maximum summary length in tokens

        Returns:
            Summary text

        Raises:
            GenerationFailure: If the API call fails or returns no summary
        """
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        payload = {
            "inputs": text,
            "parameters": {
                "max_length": max_length,
                "min_length": min(30, max_length),
                "do_sample": False,
            },
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.endpoint,
                    json=payload,
                    headers=headers,
                    timeout=self.timeout,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Summarization request failed",
                        model=self.model,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise GenerationFailure(
                        f"Summarization failed: {response.status_code}"
                    )

                result = response.json()

        except httpx.HTTPError as e:
            logfire.error("Summarization HTTP error", model=self.model, error=str(e))
            raise GenerationFailure(f"HTTP error during summarization: {e}")

        try:
            summary = result[0]["summary_text"]
        except (IndexError, KeyError, TypeError):
            logfire.error(
                "Unexpected summarization response", model=self.model, body=result
            )
            raise GenerationFailure("Summarization response had no summary_text")

        logfire.info(
            "Summary generated by provider",
            model=self.model,
            input_length=len(text),
            summary_length=len(summary),
        )
        return summary


class MockSummaryGenerator(SummaryGenerator):
    """Mock generator for testing.

    Returns deterministic text derived from the input without making real
    API calls. Every call is recorded in ``calls``.
    """

    def __init__(self, fail: bool = False) -> None:
        """Initialize mock generator.

        Args:
            fail: Raise GenerationFailure on every call
        """
        self.fail = fail
        self.calls: list[tuple[str, int]] = []

    async def generate(self, text: str, max_length: int) -> str:
        """Return a mock summary of the text."""
        self.calls.append((text, max_length))
        if self.fail:
            raise GenerationFailure("Mock generator configured to fail")

        digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:8]
        head = " ".join(text.split()[:12])
        return f"Summary {digest}: {head}"
