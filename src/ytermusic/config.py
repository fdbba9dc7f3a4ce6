"""Configuration constants for ytermusic."""

import os
from pathlib import Path

# Raw request headers copied from a browser session. First file found is used.
HEADER_FILES: list[Path] = [
    Path("headers.txt"),
    Path("~/.config/ytermusic/headers.txt").expanduser(),
]

HEADER_TUTORIAL = """\
To get the headers:
- Open https://music.youtube.com in your browser and log in.
- Open the developer tools (F12) and go to the Network tab.
- Reload the page, select a request to music.youtube.com and copy its request headers.
- Paste them into `headers.txt` as `Name: Value` lines. A `Cookie:` line is required.
"""

# Cache directory; downloaded items and their metadata live in `downloads/`.
CACHE_DIR: Path = Path("~/.cache/ytermusic").expanduser()

# Response cache, used only when --cache is passed.
API_CACHE_PREFIX: str = "/tmp/ytermusic-api-cache/cache-"

DEBOUNCE_SECONDS: float = 0.3
LOCAL_RESULT_LIMIT: int = 100
REQUEST_TIMEOUT_SECONDS: float = 15

LOG_FILE: Path = Path("log.txt")


def resolve_header_file() -> Path | None:
    """Return the first existing header file, honouring YTERMUSIC_HEADERS."""
    override = os.environ.get("YTERMUSIC_HEADERS")
    candidates = [Path(override).expanduser()] if override else HEADER_FILES
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def resolve_cache_dir() -> Path:
    """Return the cache directory, honouring YTERMUSIC_CACHE_DIR."""
    override = os.environ.get("YTERMUSIC_CACHE_DIR")
    return Path(override).expanduser() if override else CACHE_DIR
