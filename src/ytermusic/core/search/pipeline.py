"""Incremental search behind the search screen.

Each edit of the query shows local matches immediately, then schedules a
debounced remote search. Remote media items replace the list below the local
ones; every remote collection is expanded by its own background task and
appended once its members are known.
"""

import asyncio
import queue

from loguru import logger

from ytermusic.api import ApiError
from ytermusic.config import DEBOUNCE_SECONDS, LOCAL_RESULT_LIMIT
from ytermusic.core.search.results import ResultList
from ytermusic.messages import CacheItem, InspectPayload, Navigate, PlayItem, Screen, SoundAction
from ytermusic.models.media import (
    Collection,
    CollectionHit,
    KnownLocal,
    Remote,
    ResultEntry,
    SearchHit,
    entry_for,
)
from ytermusic.protocols import CatalogApiProtocol, LocalIndexProtocol
from ytermusic.supervisor import SHUTDOWN, ShutdownSignal, run_service


class SearchPipeline:
    """State of the search screen: query text, in-flight search, results.

    Methods that edit the text must be called from the event loop thread;
    they spawn background tasks on the running loop.
    """

    def __init__(
        self,
        local_index: LocalIndexProtocol,
        *,
        actions: "queue.Queue[SoundAction]",
        navigation: "queue.Queue[Navigate]",
        api: CatalogApiProtocol | None = None,
        results: ResultList | None = None,
        goto: Screen = Screen.MUSIC_PLAYER,
        debounce: float = DEBOUNCE_SECONDS,
        local_limit: int = LOCAL_RESULT_LIMIT,
        signal: ShutdownSignal = SHUTDOWN,
    ) -> None:
        self.text = ""
        self.goto = goto
        self.results = results if results is not None else ResultList()
        self.search_handle: asyncio.Task[None] | None = None
        self._local = local_index
        self._api = api
        self._actions = actions
        self._navigation = navigation
        self._debounce = debounce
        self._local_limit = local_limit
        self._signal = signal

    @property
    def is_searching(self) -> bool:
        return self.search_handle is not None and not self.search_handle.done()

    def type_char(self, char: str) -> None:
        before = self.text.strip()
        self.text += char
        self._on_text_changed(before)

    def delete_char(self) -> None:
        before = self.text.strip()
        self.text = self.text[:-1]
        self._on_text_changed(before)

    def set_text(self, text: str) -> None:
        before = self.text.strip()
        self.text = text
        self._on_text_changed(before)

    def _on_text_changed(self, before: str) -> None:
        if before == self.text.strip():
            return

        if self.search_handle is not None:
            self.search_handle.cancel()
            self.search_handle = None

        local = [
            entry_for(KnownLocal(item))
            for item in self._local.matching(self.text.lower(), self._local_limit)
        ]
        self.results.replace(local)

        if self._api is not None:
            self.search_handle = run_service(
                self._remote_search(self._api, self.text, local),
                signal=self._signal,
                name=f"search {self.text!r}",
            )

    async def _remote_search(
        self, api: CatalogApiProtocol, text: str, local: list[ResultEntry]
    ) -> None:
        # Typing again before this elapses cancels the task here.
        await asyncio.sleep(self._debounce)
        try:
            items, collections = await asyncio.to_thread(api.search, text)
        except ApiError as e:
            logger.error("Search for {!r} failed: {}", text, e)
            return

        remote: list[ResultEntry] = []
        for item in items:
            hit: SearchHit = KnownLocal(item) if self._local.contains_id(item.id) else Remote(item)
            remote.append(entry_for(hit))

        # Expansions are not tied to this query; they may append after it is superseded.
        for found in collections:
            run_service(
                self._expand_collection(api, found),
                signal=self._signal,
                name=f"expand {found.collection_id}",
            )

        self.results.replace([*local, *remote])

    async def _expand_collection(self, api: CatalogApiProtocol, found: Collection) -> None:
        try:
            items = await asyncio.to_thread(api.browse_collection, found.collection_id)
        except ApiError as e:
            logger.error("Expanding collection {!r} failed: {}", found.collection_id, e)
            return
        if not items:
            return
        self.results.append(entry_for(CollectionHit(found, tuple(items))))

    def select(self, hit: SearchHit, *, keep_screen: bool = False) -> None:
        """Act on a chosen result.

        Media items are queued for playback and caching; the player screen is
        shown unless `keep_screen` (the modifier key) is set. Collections open
        in the collection viewer with their already expanded members.
        """
        if isinstance(hit, CollectionHit):
            payload = InspectPayload(
                label=hit.collection.name, origin=Screen.SEARCH, items=hit.items
            )
            self._navigation.put(Navigate(Screen.PLAYLIST_VIEWER, payload))
            return

        self._actions.put(PlayItem(hit.item))
        self._actions.put(CacheItem(hit.item))
        if not keep_screen:
            self._navigation.put(Navigate(Screen.MUSIC_PLAYER))

    def leave(self) -> None:
        """Go back to the screen the search was opened from."""
        self._navigation.put(Navigate(self.goto))

    def close(self) -> None:
        """Drop the in-flight remote search, if any."""
        if self.search_handle is not None:
            self.search_handle.cancel()
            self.search_handle = None
