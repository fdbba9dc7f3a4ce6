"""CLI for ytermusic (search, browse, playlists)."""

import asyncio
import json
import queue
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from ytermusic.api import ApiError, HeaderFileError, YTApi
from ytermusic.config import HEADER_TUTORIAL, resolve_cache_dir, resolve_header_file
from ytermusic.core.search.local_index import load_local_index
from ytermusic.core.search.pipeline import SearchPipeline
from ytermusic.logging_config import configure_logging
from ytermusic.models.media import (
    Collection,
    CollectionHit,
    KnownLocal,
    MediaItem,
    ResultEntry,
)
from ytermusic.protocols import CatalogApiProtocol
from ytermusic.supervisor import join_services

app = typer.Typer(help="Search and browse the music catalog from the terminal.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Also write debug logs to this file"),
    ] = None,
) -> None:
    configure_logging(verbose=verbose, log_file=log_file)


def _open_api(*, cache: bool) -> YTApi:
    """Build the API client from the headers file, exiting if that is impossible."""
    header_file = resolve_header_file()
    if header_file is None:
        logger.error("The headers file is not present.")
        typer.echo(HEADER_TUTORIAL)
        raise typer.Exit(1)
    try:
        return YTApi.from_header_file(header_file, from_cache=cache)
    except HeaderFileError as e:
        logger.error("The headers file is not configured correctly: {}", e)
        typer.echo(HEADER_TUTORIAL)
        raise typer.Exit(1) from e


def _item_dict(item: MediaItem) -> dict[str, Any]:
    return {"id": item.id, "title": item.title, "author": item.author, "album": item.album}


def _collection_dict(found: Collection) -> dict[str, Any]:
    return {"id": found.collection_id, "name": found.name, "subtitle": found.subtitle}


def _entry_dict(entry: ResultEntry) -> dict[str, Any]:
    hit = entry.hit
    if isinstance(hit, CollectionHit):
        return {
            "kind": "collection",
            **_collection_dict(hit.collection),
            "items": [_item_dict(i) for i in hit.items],
        }
    kind = "local" if isinstance(hit, KnownLocal) else "remote"
    return {"kind": kind, **_item_dict(hit.item)}


async def run_search(query: str, pipeline: SearchPipeline) -> tuple[ResultEntry, ...]:
    """Feed `query` to the pipeline and wait for all remote work to settle."""
    pipeline.set_text(query)
    await join_services()
    return pipeline.results.snapshot()


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    cache: bool = typer.Option(False, "--cache", "-C", help="Cache API responses and use cache"),
    local_only: bool = typer.Option(False, "--local-only", "-l", help="Do not query the service"),
) -> None:
    """Search local downloads and the remote catalog."""
    local_index = load_local_index(resolve_cache_dir() / "downloads")
    api: CatalogApiProtocol | None = None if local_only else _open_api(cache=cache)
    pipeline = SearchPipeline(
        local_index,
        api=api,
        actions=queue.Queue(),
        navigation=queue.Queue(),
    )
    entries = asyncio.run(run_search(query, pipeline))

    if output_json:
        data = {"results": [_entry_dict(e) for e in entries], "total": len(entries)}
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"{pipeline.results.title} ({len(entries)} results):\n")
    for entry in entries:
        hit = entry.hit
        if isinstance(hit, CollectionHit):
            typer.echo(
                f"{entry.label} - {len(hit.items)} items  [id={hit.collection.collection_id}]"
            )
            for item in hit.items[:5]:
                typer.echo(f"      {item}")
        else:
            marker = "*" if isinstance(hit, KnownLocal) else " "
            typer.echo(f"{marker}{entry.label} [id={hit.item.id}]")


@app.command()
def browse(
    collection_id: str = typer.Argument(..., help="Collection (playlist) id"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    cache: bool = typer.Option(False, "--cache", "-C", help="Cache API responses and use cache"),
) -> None:
    """List the items of a collection."""
    api = _open_api(cache=cache)
    try:
        items = api.browse_collection(collection_id)
    except ApiError as e:
        logger.error("Browse failed: {}", e)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps({"items": [_item_dict(i) for i in items]}, indent=2))
        return
    typer.echo(f"{len(items)} items:\n")
    for item in items:
        album = f"  ({item.album})" if item.album else ""
        typer.echo(f"  {item}{album}  [id={item.id}]")


@app.command()
def playlists(
    query: str = typer.Argument(..., help="Search query"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    cache: bool = typer.Option(False, "--cache", "-C", help="Cache API responses and use cache"),
) -> None:
    """Find collections shown as rows in search results."""
    api = _open_api(cache=cache)
    try:
        found = api.search_collections(query)
    except ApiError as e:
        logger.error("Search failed: {}", e)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps({"collections": [_collection_dict(c) for c in found]}, indent=2))
        return
    typer.echo(f"{len(found)} collections:\n")
    for c in sorted(found):
        typer.echo(f"  {c}  [id={c.collection_id}]")
