"""Result list shared between the search screen and its background tasks."""

import threading
from collections.abc import Iterable

from ytermusic.models.media import ResultEntry


class ResultList:
    """Ordered search results guarded by a lock.

    Writers replace the whole list or append one entry; readers get an
    immutable snapshot, so a half-applied update is never visible.
    """

    def __init__(self, title: str = "Select a song to play") -> None:
        self.title = title
        self._lock = threading.Lock()
        self._entries: list[ResultEntry] = []

    def replace(self, entries: Iterable[ResultEntry]) -> None:
        new_entries = list(entries)
        with self._lock:
            self._entries = new_entries

    def append(self, entry: ResultEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def snapshot(self) -> tuple[ResultEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
