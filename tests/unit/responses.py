"""Builders for service responses shaped like the real ones."""

from typing import Any


def text_runs(*texts: str, linked: bool = True) -> dict[str, Any]:
    """Rich text made of runs; linked runs carry a navigation endpoint like real data."""
    runs: list[dict[str, Any]] = []
    for i, text in enumerate(texts):
        if i:
            runs.append({"text": " • "})
        run: dict[str, Any] = {"text": text}
        if linked:
            run["navigationEndpoint"] = {"browseEndpoint": {"browseId": f"UC{i}"}}
        runs.append(run)
    return {"runs": runs}


def flex_column(*texts: str) -> dict[str, Any]:
    return {
        "musicResponsiveListItemFlexColumnRenderer": {
            "text": text_runs(*texts),
            "displayPriority": "MUSIC_RESPONSIVE_LIST_ITEM_COLUMN_DISPLAY_PRIORITY_HIGH",
        }
    }


def song_row(title: str, author: str, album: str | None, video_id: str) -> dict[str, Any]:
    """A song row as rendered in search results and playlist pages."""
    columns = [flex_column(title), flex_column(author)]
    if album is not None:
        columns.append(flex_column(album))
    return {
        "musicResponsiveListItemRenderer": {
            "flexColumns": columns,
            "overlay": {
                "musicItemThumbnailOverlayRenderer": {
                    "content": {
                        "musicPlayButtonRenderer": {
                            "playNavigationEndpoint": {
                                "watchEndpoint": {"videoId": video_id},
                            }
                        }
                    }
                }
            },
            "playlistItemData": {"videoId": video_id},
        }
    }


def playlist_card(name: str, subtitle: str, browse_id: str) -> dict[str, Any]:
    """A two-row playlist card as rendered on browse pages."""
    return {
        "musicTwoRowItemRenderer": {
            "title": text_runs(name),
            "subtitle": text_runs(subtitle, linked=False),
            "navigationEndpoint": {"browseEndpoint": {"browseId": browse_id}},
        }
    }


def playlist_row(name: str, subtitle: str, playlist_id: str) -> dict[str, Any]:
    """A playlist row as rendered in search results."""
    return {
        "musicResponsiveListItemRenderer": {
            "flexColumns": [
                {"musicResponsiveListItemFlexColumnRenderer": {"text": text_runs(name)}},
                {"musicResponsiveListItemFlexColumnRenderer": {"text": text_runs(subtitle)}},
            ],
            "overlay": {
                "musicItemThumbnailOverlayRenderer": {
                    "content": {
                        "musicPlayButtonRenderer": {
                            "playNavigationEndpoint": {
                                "watchPlaylistEndpoint": {"playlistId": playlist_id},
                            }
                        }
                    }
                }
            },
        }
    }


def wrap_in_sections(*rows: dict[str, Any]) -> dict[str, Any]:
    """Bury rows in the nesting the service puts around result shelves."""
    return {
        "responseContext": {"visitorData": "abc", "serviceTrackingParams": []},
        "contents": {
            "tabbedSearchResultsRenderer": {
                "tabs": [
                    {
                        "tabRenderer": {
                            "title": "YT Music",
                            "content": {
                                "sectionListRenderer": {
                                    "contents": [
                                        {"musicShelfRenderer": {"contents": list(rows)}},
                                    ]
                                }
                            },
                        }
                    }
                ]
            }
        },
    }


