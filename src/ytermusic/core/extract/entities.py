"""Shape matchers for catalog entities.

Each matcher takes any JSON node and returns an entity or None. They never
raise: a node that does not have the expected shape is simply not a match, and
the crawl moves on. Keep them small and independent so a layout change on the
service side only needs one of them adjusted.
"""

from typing import Any

from ytermusic.core.tree.text import extract_text
from ytermusic.models.media import Collection, MediaItem

_PLAYLIST_BROWSE_PREFIX = "VL"


def _dig(node: Any, *keys: str) -> Any:
    """Follow `keys` through nested dicts, returning None on any miss."""
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def identifier(node: Any) -> str | None:
    """Find the first string ``videoId`` field anywhere under `node`.

    A dict's own field wins over anything nested in its values.
    """
    if isinstance(node, list):
        for element in node:
            found = identifier(element)
            if found is not None:
                return found
        return None
    if isinstance(node, dict):
        video_id = node.get("videoId")
        if isinstance(video_id, str):
            return video_id
        for value in node.values():
            found = identifier(value)
            if found is not None:
                return found
    return None


def media_item(node: Any) -> MediaItem | None:
    """Match a list row carrying ``flexColumns`` and a video id.

    Columns are read in order; each column is a single-key renderer wrapper
    whose value holds the text. First usable column is the title, second the
    author, third (optional) the album.
    """
    if not isinstance(node, dict):
        return None
    columns = node.get("flexColumns")
    if not isinstance(columns, list):
        return None

    texts: list[str] = []
    for column in columns:
        if not isinstance(column, dict) or not column:
            continue
        renderer = next(iter(column.values()))
        text = extract_text(renderer, suppress_singleton=True, bullet_join=True)
        if text:
            texts.append(text)
    if len(texts) < 2:
        return None

    video_id = identifier(node)
    if video_id is None:
        return None
    return MediaItem(
        title=texts[0],
        author=texts[1],
        album=texts[2] if len(texts) > 2 else "",
        id=video_id,
    )


def _browse_id(node: dict[str, Any]) -> Any:
    browse_id = _dig(node, "navigationEndpoint", "browseEndpoint", "browseId")
    if browse_id is not None:
        return browse_id
    # Some layouts only link the title runs.
    runs = _dig(node, "title", "runs")
    if isinstance(runs, list):
        for run in runs:
            browse_id = _dig(run, "navigationEndpoint", "browseEndpoint", "browseId")
            if browse_id is not None:
                return browse_id
    return None


def collection(node: Any) -> Collection | None:
    """Match a browse-page playlist card.

    Only ids with the playlist browse prefix are accepted; anything else would
    produce an invalid browse call later, so the card is dropped instead.
    """
    if not isinstance(node, dict) or "title" not in node:
        return None
    name = extract_text(node["title"], suppress_singleton=True)
    if name is None:
        return None
    browse_id = _browse_id(node)
    if not isinstance(browse_id, str) or not browse_id.startswith(_PLAYLIST_BROWSE_PREFIX):
        return None
    subtitle = extract_text(node["subtitle"]) if "subtitle" in node else None
    return Collection(
        name=name,
        subtitle=subtitle or "",
        collection_id=browse_id.removeprefix(_PLAYLIST_BROWSE_PREFIX),
    )


def collection_from_search_result(node: Any) -> Collection | None:
    """Match a playlist row as rendered inside search results."""
    playlist_id = _dig(
        node,
        "overlay",
        "musicItemThumbnailOverlayRenderer",
        "content",
        "musicPlayButtonRenderer",
        "playNavigationEndpoint",
        "watchPlaylistEndpoint",
        "playlistId",
    )
    if not isinstance(playlist_id, str):
        return None
    columns = node.get("flexColumns")
    if not isinstance(columns, list):
        return None
    texts: list[str] = []
    for column in columns:
        text = extract_text(_dig(column, "musicResponsiveListItemFlexColumnRenderer", "text"))
        if text is not None:
            texts.append(text)
    if len(texts) < 2:
        return None
    return Collection(name=texts[0], subtitle=texts[1], collection_id=playlist_id)
