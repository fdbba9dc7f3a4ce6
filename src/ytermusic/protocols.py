"""Protocols for dependency injection in the search pipeline."""

from typing import Protocol, runtime_checkable

from ytermusic.models.media import Collection, MediaItem


@runtime_checkable
class CatalogApiProtocol(Protocol):
    """Protocol for remote catalog clients."""

    def search(self, query: str) -> tuple[list[MediaItem], list[Collection]]:
        """Return media items and collections matching `query`."""
        ...

    def browse_collection(self, collection_id: str) -> list[MediaItem]:
        """Return the members of a collection."""
        ...


@runtime_checkable
class LocalIndexProtocol(Protocol):
    """Protocol for the index of locally cached media items."""

    def matching(self, text: str, limit: int) -> list[MediaItem]:
        """Return up to `limit` items whose title or author contains `text`."""
        ...

    def contains_id(self, item_id: str) -> bool:
        """Return whether an item with this id is cached locally."""
        ...
