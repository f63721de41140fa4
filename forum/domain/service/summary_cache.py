"""Summary cache domain service.

Summaries are expensive to generate (seconds, external provider), so they
are cached against a fingerprint of the source content. A lookup is a hit
only when the stored fingerprint equals the caller's current fingerprint;
anything else regenerates.

Generation runs in background tasks tracked per (subject, kind, fingerprint).
Concurrent requests for the same fingerprint share one task, and tasks for
different fingerprints never cancel each other: a late request carrying an
older fingerprint cannot abort generation for the current content. Only
invalidate(), called after the content changes, cancels in-flight work, and
a cancelled task never persists its result. Current lookups match on the
fingerprint, so an older result stored late never shadows the current one.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Optional
from uuid import UUID, uuid4

import logfire

from forum.domain.model import Comment, Post, Summary
from forum.domain.repository import SummaryRepository
from forum.domain.value import Fingerprint, SummaryId, SummaryKind

from .base import Service

Generator = Callable[[], Awaitable[str]]
CacheKey = tuple[UUID, SummaryKind]


def post_source_text(post: Post) -> str:
    """Text a post summary is generated from."""
    return f"{post.title}\n\n{post.content}"


def post_fingerprint(post: Post) -> Fingerprint:
    """Fingerprint of a post's summarizable content."""
    return Fingerprint.of(post_source_text(post))


def comments_source_text(comments: Sequence[Comment]) -> str:
    """Text a comment-thread summary is generated from."""
    return "\n\n".join(f"{c.author_handle}: {c.content}" for c in comments)


def comments_fingerprint(comments: Sequence[Comment]) -> Fingerprint:
    """Fingerprint of a comment thread."""
    return Fingerprint.of(comments_source_text(comments))


class SummaryCache(Service):
    """Domain service memoizing generated summaries by content fingerprint."""

    def __init__(self, summary_repository: SummaryRepository) -> None:
        """Initialize summary cache.

        Args:
            summary_repository: Summary repository
        """
        self.summary_repository = summary_repository
        self._inflight: dict[CacheKey, dict[Fingerprint, asyncio.Task]] = {}

    async def get_current(
        self, subject_id: UUID, kind: SummaryKind, fingerprint: Fingerprint
    ) -> Optional[Summary]:
        """Get the summary matching the current content, if one exists.

        Args:
            subject_id: Post ID
            kind: Summary kind
            fingerprint: Fingerprint of the current content

        Returns:
            The current summary, None if it has not been generated yet
        """
        return await self.summary_repository.find_by_fingerprint(
            subject_id, kind, fingerprint
        )

    async def get_latest(self, subject_id: UUID, kind: SummaryKind) -> Optional[Summary]:
        """Get the most recently generated summary, which may be stale."""
        history = await self.summary_repository.find_by_subject(subject_id, kind)
        return history[0] if history else None

    async def get_or_generate(
        self,
        subject_id: UUID,
        kind: SummaryKind,
        current_fingerprint: Fingerprint,
        generator: Generator,
        source_count: int = 1,
    ) -> Optional[Summary]:
        """Return the cached summary or generate a new one.

        Args:
            subject_id: Post ID
            kind: Summary kind
            current_fingerprint: Fingerprint of the current content
            generator: Coroutine factory producing the summary text
            source_count: Number of source items summarized

        Returns:
            The current summary, or None if generation failed or was
            abandoned because the content changed
        """
        with logfire.span(
            "summary_cache.get_or_generate",
            subject_id=str(subject_id),
            kind=kind.value,
            fingerprint=str(current_fingerprint),
        ):
            cached = await self.get_current(subject_id, kind, current_fingerprint)
            if cached:
                logfire.info(
                    "Summary cache hit", subject_id=str(subject_id), kind=kind.value
                )
                return cached

            task = self._ensure_task(
                (subject_id, kind), current_fingerprint, generator, source_count
            )
            try:
                return await asyncio.shield(task)
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
                logfire.info(
                    "Summary generation abandoned",
                    subject_id=str(subject_id),
                    kind=kind.value,
                )
                return None

    async def schedule(
        self,
        subject_id: UUID,
        kind: SummaryKind,
        current_fingerprint: Fingerprint,
        generator: Generator,
        source_count: int = 1,
    ) -> Optional[Summary]:
        """Return the cached summary, or start generating it in the background.

        Never waits for the generator, so it is safe on latency-sensitive
        paths.

        Returns:
            The current summary on a cache hit, None while it is generated
        """
        cached = await self.get_current(subject_id, kind, current_fingerprint)
        if cached:
            return cached

        self._ensure_task(
            (subject_id, kind), current_fingerprint, generator, source_count
        )
        logfire.info(
            "Summary generation scheduled", subject_id=str(subject_id), kind=kind.value
        )
        return None

    def is_generating(self, subject_id: UUID, kind: SummaryKind) -> bool:
        """Whether a generation task is running for the subject."""
        tasks = self._inflight.get((subject_id, kind), {})
        return any(not task.done() for task in tasks.values())

    def invalidate(self, subject_id: UUID, kind: Optional[SummaryKind] = None) -> None:
        """Abandon in-flight generation after the subject's content changed.

        Stored summaries are kept; they simply stop matching the new
        fingerprint.

        Args:
            subject_id: Post ID
            kind: Summary kind to invalidate, all kinds if None
        """
        kinds = [kind] if kind else list(SummaryKind)
        for k in kinds:
            tasks = self._inflight.pop((subject_id, k), {})
            for fingerprint, task in tasks.items():
                if task.done():
                    continue
                task.cancel()
                logfire.info(
                    "In-flight summary generation cancelled",
                    subject_id=str(subject_id),
                    kind=k.value,
                    fingerprint=str(fingerprint),
                )

    async def close(self) -> None:
        """Cancel every in-flight generation and wait for the tasks to end."""
        tasks = [task for by_fp in self._inflight.values() for task in by_fp.values()]
        self._inflight.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _ensure_task(
        self,
        key: CacheKey,
        fingerprint: Fingerprint,
        generator: Generator,
        source_count: int,
    ) -> asyncio.Task:
        """Join the running task for this fingerprint or start a new one."""
        tasks = self._inflight.setdefault(key, {})
        running = tasks.get(fingerprint)
        if running and not running.done():
            return running

        task = asyncio.create_task(
            self._generate(key, fingerprint, generator, source_count),
            name=f"summary:{key[1].value}:{key[0]}",
        )
        tasks[fingerprint] = task
        task.add_done_callback(lambda t: self._forget(key, fingerprint, t))
        return task

    def _forget(self, key: CacheKey, fingerprint: Fingerprint, task: asyncio.Task) -> None:
        tasks = self._inflight.get(key)
        if tasks and tasks.get(fingerprint) is task:
            del tasks[fingerprint]
            if not tasks:
                del self._inflight[key]

    def _is_registered(self, key: CacheKey, fingerprint: Fingerprint) -> bool:
        task = self._inflight.get(key, {}).get(fingerprint)
        return task is not None and task is asyncio.current_task()

    async def _generate(
        self,
        key: CacheKey,
        fingerprint: Fingerprint,
        generator: Generator,
        source_count: int,
    ) -> Optional[Summary]:
        subject_id, kind = key
        with logfire.span(
            "summary_cache.generate",
            subject_id=str(subject_id),
            kind=kind.value,
            fingerprint=str(fingerprint),
        ):
            try:
                text = await generator()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # Failures are never cached; the previous record stays as is
                logfire.warn(
                    "Summary generation failed",
                    subject_id=str(subject_id),
                    kind=kind.value,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return None

            if not text or not text.strip():
                logfire.warn(
                    "Summary generator returned empty text",
                    subject_id=str(subject_id),
                    kind=kind.value,
                )
                return None

            if not self._is_registered(key, fingerprint):
                logfire.info(
                    "Discarding summary for invalidated content",
                    subject_id=str(subject_id),
                    kind=kind.value,
                    fingerprint=str(fingerprint),
                )
                return None

            summary = Summary(
                id=SummaryId(uuid4()),
                subject_id=subject_id,
                kind=kind,
                source_fingerprint=fingerprint,
                summary_text=text.strip(),
                source_count=source_count,
            )
            try:
                saved = await self.summary_repository.save(summary)
            except Exception as e:
                # The previous record stays current
                logfire.error(
                    "Summary could not be stored",
                    subject_id=str(subject_id),
                    kind=kind.value,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return None

            logfire.info(
                "Summary generated",
                subject_id=str(subject_id),
                kind=kind.value,
                summary_length=len(saved.summary_text),
            )
            return saved
