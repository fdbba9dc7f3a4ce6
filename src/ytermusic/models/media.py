"""Domain models for catalog search."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MediaItem:
    """A playable catalog entry.

    `duration` is always empty when extracted from a search or browse
    response; it is filled in by the downloader once the media is cached.
    """

    title: str
    author: str
    album: str
    id: str
    duration: str = ""

    def __str__(self) -> str:
        return f"{self.author} | {self.title}"


@dataclass(frozen=True, order=True)
class Collection:
    """A named group of media items (a playlist or an album)."""

    name: str
    subtitle: str
    collection_id: str

    def __str__(self) -> str:
        if self.subtitle:
            return f"{self.name} ({self.subtitle})"
        return self.name


@dataclass(frozen=True)
class KnownLocal:
    """A media item already present in the local index."""

    item: MediaItem


@dataclass(frozen=True)
class Remote:
    """A media item only known to the remote service."""

    item: MediaItem


@dataclass(frozen=True)
class CollectionHit:
    """A collection together with its expanded members."""

    collection: Collection
    items: tuple[MediaItem, ...] = field(default=())


SearchHit = KnownLocal | Remote | CollectionHit


@dataclass(frozen=True)
class ResultEntry:
    """A search hit paired with the label it is displayed under."""

    label: str
    hit: SearchHit


def entry_for(hit: SearchHit) -> ResultEntry:
    """Build the display entry for a search hit."""
    if isinstance(hit, CollectionHit):
        return ResultEntry(label=f" [P] {hit.collection}", hit=hit)
    return ResultEntry(label=f" {hit.item} ", hit=hit)
