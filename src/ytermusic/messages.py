"""Messages sent from the search screen to the player and the screen manager."""

from dataclasses import dataclass
from enum import Enum

from ytermusic.models.media import MediaItem


class Screen(Enum):
    """Screens the navigation controller can show."""

    MUSIC_PLAYER = "music_player"
    PLAYLIST = "playlist"
    SEARCH = "search"
    PLAYLIST_VIEWER = "playlist_viewer"


@dataclass(frozen=True)
class PlayItem:
    """Append an item to the play queue."""

    item: MediaItem


@dataclass(frozen=True)
class CacheItem:
    """Start downloading an item into the local cache."""

    item: MediaItem


SoundAction = PlayItem | CacheItem


@dataclass(frozen=True)
class InspectPayload:
    """Content handed to the collection viewer."""

    label: str
    origin: Screen
    items: tuple[MediaItem, ...]


@dataclass(frozen=True)
class Navigate:
    """Ask the screen manager to switch screens."""

    target: Screen
    payload: InspectPayload | None = None
