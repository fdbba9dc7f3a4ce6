"""Remote catalog client with optional response caching."""

import hashlib
import json
import re
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import requests
from loguru import logger

from ytermusic.config import API_CACHE_PREFIX, REQUEST_TIMEOUT_SECONDS
from ytermusic.core.extract.entities import collection, collection_from_search_result, media_item
from ytermusic.core.tree.crawler import crawl
from ytermusic.models.media import Collection, MediaItem

ORIGIN = "https://music.youtube.com"
API_BASE = f"{ORIGIN}/youtubei/v1"

_YTCFG_RE = re.compile(r"ytcfg\.set\s*\(\s*(\{.+?\})\s*\)\s*;", re.DOTALL)

# Headers that describe the original browser request, not the session.
_DROPPED_HEADERS = {"content-length", "host", "accept-encoding", ":authority", ":method", ":path"}


class ApiError(RuntimeError):
    """A remote call failed: transport error, bad status or unusable body."""


class ParseError(ApiError):
    """The response body is not well-formed JSON."""


class HeaderFileError(RuntimeError):
    """The browser headers file is missing or unusable."""


def parse_header_file(text: str) -> dict[str, str]:
    """Parse ``Name: Value`` lines as copied from browser developer tools."""
    headers: dict[str, str] = {}
    for line in text.splitlines():
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            continue
        name = name.strip()
        if name.lower() in _DROPPED_HEADERS:
            continue
        headers[name] = value.strip()
    return headers


def parse_document(text: str) -> Any:
    """Parse a response body. Dicts keep the document's key order."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Malformed response body: {e}"
        raise ParseError(msg) from e


def sapisid_hash(cookie: str, *, now: int | None = None) -> str | None:
    """Compute the SAPISIDHASH authorization value for a cookie header."""
    cookies: dict[str, str] = {}
    for part in cookie.split(";"):
        name, sep, value = part.partition("=")
        if sep:
            cookies[name.strip()] = value.strip()
    sapisid = cookies.get("SAPISID") or cookies.get("__Secure-3PAPISID")
    if not sapisid:
        return None
    ts = int(time.time()) if now is None else now
    digest = hashlib.sha1(f"{ts} {sapisid} {ORIGIN}".encode()).hexdigest()
    return f"SAPISIDHASH {ts}_{digest}"


class YTApi:
    """Encapsulated music catalog API with caching."""

    def __init__(self, headers: Mapping[str, str], *, from_cache: bool = False) -> None:
        self.from_cache = from_cache
        self.sess = requests.Session()
        self.sess.headers.update(headers)
        self.sess.headers.setdefault("Origin", ORIGIN)

        self.cookie: str = next((v for k, v in headers.items() if k.lower() == "cookie"), "")
        if not self.cookie:
            msg = "Request headers do not contain a cookie"
            raise HeaderFileError(msg)

        self.api_key: str | None = None
        self.context: dict[str, Any] | None = None

        self.api_cache_prefix: str | None = API_CACHE_PREFIX
        if not self.from_cache:
            self.api_cache_prefix = None

        logger.debug(
            "API ready: {} headers, from_cache {!r}, api_cache_prefix {!r}",
            len(headers),
            self.from_cache,
            self.api_cache_prefix,
        )

        if self.api_cache_prefix:
            Path(self.api_cache_prefix).parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_header_file(cls, path: Path, *, from_cache: bool = False) -> "YTApi":
        """Build a client from a browser headers file."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            msg = f"Cannot find headers file {str(path)!r}"
            raise HeaderFileError(msg) from e
        headers = parse_header_file(text)
        logger.debug("Read {} headers from {!r}", len(headers), str(path))
        return cls(headers, from_cache=from_cache)

    def _bootstrap(self) -> None:
        """Read the API key and client context from the web app's landing page."""
        if self.api_key is not None:
            return
        logger.debug("Fetching client configuration from {}", ORIGIN)
        try:
            r = self.sess.get(ORIGIN, timeout=REQUEST_TIMEOUT_SECONDS)
            r.raise_for_status()
        except requests.RequestException as e:
            msg = f"Cannot load {ORIGIN}: {e}"
            raise ApiError(msg) from e

        config: dict[str, Any] = {}
        for blob in _YTCFG_RE.findall(r.text):
            try:
                config.update(json.loads(blob))
            except json.JSONDecodeError:
                continue
        api_key = config.get("INNERTUBE_API_KEY")
        context = config.get("INNERTUBE_CONTEXT")
        if not isinstance(api_key, str) or not isinstance(context, dict):
            msg = "Client configuration not found; are the headers still valid?"
            raise ApiError(msg)
        self.api_key = api_key
        self.context = context

    def call(self, endpoint: str, args: dict[str, Any]) -> Any:
        """Invoke an API endpoint, return the parsed document."""
        name_last = endpoint
        if args:
            params_str = json.dumps(args, sort_keys=True, separators=(",", ":"))
            if len(params_str) > 64:
                params_str = hashlib.sha1(params_str.encode("utf-8")).hexdigest()
            name_last += "--" + params_str

        cache_name: str | None = None
        if self.api_cache_prefix:
            cache_name = self.api_cache_prefix + name_last.replace("/", "--")

            if self.from_cache and Path(cache_name).exists():
                logger.debug("Filled from cache: {!r}", cache_name)
                return parse_document(Path(cache_name).read_text(encoding="utf-8"))

        self._bootstrap()
        logger.debug("Making request: {!r} {}", endpoint, repr(args)[:32])

        headers: dict[str, str] = {}
        authorization = sapisid_hash(self.cookie)
        if authorization:
            headers["Authorization"] = authorization
        try:
            r = self.sess.post(
                f"{API_BASE}/{endpoint}",
                params={"key": self.api_key, "prettyPrint": "false"},
                json={"context": self.context, **args},
                headers=headers,
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            msg = f"API call failed: ({endpoint!r}, {args!r}) -> {e}"
            raise ApiError(msg) from e

        rv = parse_document(r.text)
        if self.api_cache_prefix and cache_name:
            with open(cache_name, "w", encoding="utf-8") as f:
                f.write(r.text)

        return rv

    def search(self, query: str) -> tuple[list[MediaItem], list[Collection]]:
        """Search the catalog; return matching media items and collections."""
        document = self.call("search", {"query": query})
        return crawl(document, media_item), crawl(document, collection)

    def search_collections(self, query: str) -> list[Collection]:
        """Search the catalog for collections rendered as search result rows."""
        document = self.call("search", {"query": query})
        return crawl(document, collection_from_search_result)

    def browse_collection(self, collection_id: str) -> list[MediaItem]:
        """List the media items of a collection."""
        document = self.call("browse", {"browseId": f"VL{collection_id}"})
        return crawl(document, media_item)
