"""Fake implementations for testing the search pipeline."""

import threading

from ytermusic.api import ApiError
from ytermusic.models.media import Collection, MediaItem


class FakeApi:
    """In-memory fake for YTApi.

    Stores predefined responses and records all calls for assertions. Calls
    arrive from worker threads, so recording is locked.
    """

    def __init__(self) -> None:
        self.searches: dict[str, tuple[list[MediaItem], list[Collection]]] = {}
        self.collections: dict[str, list[MediaItem]] = {}
        self.failing: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def add_search(
        self,
        query: str,
        items: list[MediaItem],
        collections: list[Collection] | None = None,
    ) -> None:
        """Register the response for a search query."""
        self.searches[query] = (items, collections or [])

    def add_collection(self, collection_id: str, items: list[MediaItem]) -> None:
        """Register the members of a collection."""
        self.collections[collection_id] = items

    def fail(self, key: str) -> None:
        """Make the search for `key` (or the browse of collection `key`) fail."""
        self.failing.add(key)

    def search(self, query: str) -> tuple[list[MediaItem], list[Collection]]:
        with self._lock:
            self.calls.append(("search", query))
        if query in self.failing:
            msg = f"FakeApi: search {query!r} failed"
            raise ApiError(msg)
        items, collections = self.searches.get(query, ([], []))
        return list(items), list(collections)

    def browse_collection(self, collection_id: str) -> list[MediaItem]:
        with self._lock:
            self.calls.append(("browse", collection_id))
        if collection_id in self.failing:
            msg = f"FakeApi: browse {collection_id!r} failed"
            raise ApiError(msg)
        return list(self.collections.get(collection_id, []))

    def search_collections(self, query: str) -> list[Collection]:
        with self._lock:
            self.calls.append(("search_collections", query))
        if query in self.failing:
            msg = f"FakeApi: search {query!r} failed"
            raise ApiError(msg)
        return list(self.searches.get(query, ([], []))[1])

    def calls_to(self, kind: str) -> list[str]:
        """Arguments of all recorded calls of one kind."""
        with self._lock:
            return [arg for k, arg in self.calls if k == kind]


LOCAL_ITEMS = [
    MediaItem(title="Turbo Killer", author="Carpenter Brut", album="Trilogy", id="vid-turbo"),
    MediaItem(title="Roller Mobster", author="Carpenter Brut", album="Trilogy", id="vid-roller"),
    MediaItem(title="Nightcall", author="Kavinsky", album="OutRun", id="vid-night"),
]
