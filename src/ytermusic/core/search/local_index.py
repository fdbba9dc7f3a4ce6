"""In-memory index of media items already downloaded to the cache."""

import json
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from loguru import logger

from ytermusic.models.media import MediaItem


def parse_item_data(data: Any) -> MediaItem:
    """Parse a cached item's metadata file.

    Accepts both ``video_id`` (as written by the downloader) and ``id``.
    """
    if not isinstance(data, dict):
        msg = f"Expected an object, got {type(data).__name__}"
        raise ValueError(msg)
    item_id = data.get("video_id", data.get("id"))
    if not isinstance(item_id, str) or not item_id:
        msg = f"Missing item id in {sorted(data.keys())!r}"
        raise ValueError(msg)
    return MediaItem(
        title=data.get("title", ""),
        author=data.get("author", ""),
        album=data.get("album", ""),
        id=item_id,
        duration=data.get("duration", ""),
    )


class LocalIndex:
    """Media items available offline, queried by substring and by id."""

    def __init__(self, items: Iterable[MediaItem] = ()) -> None:
        self._lock = threading.RLock()
        self._items: list[MediaItem] = []
        self._ids: set[str] = set()
        for item in items:
            self.add(item)

    def add(self, item: MediaItem) -> None:
        """Add an item unless one with the same id is already present."""
        with self._lock:
            if item.id in self._ids:
                return
            self._items.append(item)
            self._ids.add(item.id)

    def matching(self, text: str, limit: int) -> list[MediaItem]:
        """Case-insensitive substring match on title or author, in index order."""
        needle = text.lower()
        found: list[MediaItem] = []
        with self._lock:
            for item in self._items:
                if len(found) >= limit:
                    break
                if needle in item.title.lower() or needle in item.author.lower():
                    found.append(item)
        return found

    def contains_id(self, item_id: str) -> bool:
        with self._lock:
            return item_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def load_local_index(downloads_dir: Path) -> LocalIndex:
    """Build an index from the ``*.json`` metadata files of a downloads directory.

    Only items whose media file sits next to the metadata are included.
    Unreadable metadata files are skipped with a warning.
    """
    index = LocalIndex()
    if not downloads_dir.is_dir():
        logger.debug("No downloads directory at {}", downloads_dir)
        return index

    for meta_path in sorted(downloads_dir.glob("*.json")):
        if not any(p.suffix != ".json" for p in downloads_dir.glob(meta_path.stem + ".*")):
            continue
        try:
            data = json.loads(meta_path.read_text(encoding="utf-8"))
            index.add(parse_item_data(data))
        except (OSError, ValueError) as e:
            logger.warning("Skipping unreadable cache entry {}: {}", meta_path.name, e)
    logger.debug("Loaded {} local items from {}", len(index), downloads_dir)
    return index
