"""Change notification shared by document store implementations."""

import asyncio
from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager


class ChangeNotifier:
    """Wakes change-feed readers when a collection is written.

    Each reader registers an asyncio.Event for the collection it follows.
    A write sets every event registered for that collection; readers clear
    their event before taking a snapshot so no write is missed.
    """

    def __init__(self) -> None:
        self._watchers: dict[str, set[asyncio.Event]] = defaultdict(set)

    @contextmanager
    def watch(self, collection: str) -> Iterator[asyncio.Event]:
        """Register a wakeup event for the lifetime of a feed reader."""
        wakeup = asyncio.Event()
        self._watchers[collection].add(wakeup)
        try:
            yield wakeup
        finally:
            self._watchers[collection].discard(wakeup)

    def notify(self, collection: str) -> None:
        """Wake every reader of a collection."""
        for wakeup in self._watchers.get(collection, ()):
            wakeup.set()

    def watcher_count(self, collection: str) -> int:
        """Number of live readers on a collection."""
        return len(self._watchers.get(collection, ()))
