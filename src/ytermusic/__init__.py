"""Catalog search with instant local results and live remote expansion."""

from ytermusic.api import ApiError, YTApi
from ytermusic.core.search.local_index import LocalIndex
from ytermusic.core.search.pipeline import SearchPipeline
from ytermusic.protocols import CatalogApiProtocol, LocalIndexProtocol

__all__ = [
    "ApiError",
    "CatalogApiProtocol",
    "LocalIndex",
    "LocalIndexProtocol",
    "SearchPipeline",
    "YTApi",
]
