"""Tests for the command-line interface."""

import json
import sys
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from loguru import logger
from typer.testing import CliRunner

from ytermusic.cli import app
from ytermusic.models.media import Collection, MediaItem
from tests.unit.fakes import FakeApi

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """The CLI callback reconfigures loguru against the runner's streams."""
    yield
    logger.remove()
    logger.add(sys.stderr)


REMOTE = MediaItem(title="Le Perv", author="Carpenter Brut", album="Trilogy", id="vid-perv")
PLAYLIST = Collection(name="Synthwave", subtitle="Playlist", collection_id="PLsynth")


@pytest.fixture
def cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A cache directory holding one downloaded track."""
    downloads = tmp_path / "downloads"
    downloads.mkdir()
    meta = {"title": "Turbo Killer", "author": "Carpenter Brut", "album": "", "video_id": "loc1"}
    (downloads / "loc1.json").write_text(json.dumps(meta))
    (downloads / "loc1.mp4").write_bytes(b"\x00")
    monkeypatch.setenv("YTERMUSIC_CACHE_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def fake_api() -> FakeApi:
    api = FakeApi()
    api.add_search("carpenter", [REMOTE], [PLAYLIST])
    api.add_collection("PLsynth", [REMOTE])
    return api


def test_search_merges_local_remote_and_collections(cache_dir: Path, fake_api: FakeApi) -> None:
    with patch("ytermusic.cli._open_api", return_value=fake_api):
        result = runner.invoke(app, ["search", "carpenter", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [r["kind"] for r in data["results"]] == ["local", "remote", "collection"]
    assert data["results"][0]["id"] == "loc1"
    assert data["results"][2]["items"][0]["id"] == "vid-perv"


def test_search_local_only_does_not_touch_the_service(cache_dir: Path) -> None:
    with patch("ytermusic.cli._open_api") as open_api:
        result = runner.invoke(app, ["search", "turbo", "--local-only"])

    assert result.exit_code == 0, result.output
    assert "Select a song to play (1 results)" in result.output
    assert "Carpenter Brut | Turbo Killer" in result.output
    open_api.assert_not_called()


def test_search_without_headers_file_exits(
    cache_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("YTERMUSIC_HEADERS", str(tmp_path / "missing.txt"))

    result = runner.invoke(app, ["search", "carpenter"])

    assert result.exit_code == 1
    assert "Cookie:" in result.output


def test_browse_prints_items(fake_api: FakeApi) -> None:
    with patch("ytermusic.cli._open_api", return_value=fake_api):
        result = runner.invoke(app, ["browse", "PLsynth"])

    assert result.exit_code == 0, result.output
    assert "1 items" in result.output
    assert "Carpenter Brut | Le Perv" in result.output


def test_browse_failure_exits_with_error() -> None:
    api = FakeApi()
    api.fail("PLbroken")
    with patch("ytermusic.cli._open_api", return_value=api):
        result = runner.invoke(app, ["browse", "PLbroken"])

    assert result.exit_code == 1


def test_playlists_outputs_json() -> None:
    api = FakeApi()
    api.add_search("synth", [], [PLAYLIST])
    with patch("ytermusic.cli._open_api", return_value=api):
        result = runner.invoke(app, ["playlists", "synth", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "collections": [{"id": "PLsynth", "name": "Synthwave", "subtitle": "Playlist"}]
    }
