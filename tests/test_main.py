"""
Tests for the interactive app wiring.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, patch
from rich.console import Console

from tubescout.main import TubeScoutApp
from tubescout.models.batch import LookupResult, SummaryResult

from conftest import VALID_YOUTUBE_KEY, make_video


@pytest.fixture
def app(monkeypatch, tmp_path):
    monkeypatch.setenv("KEY_STORE_PATH", str(tmp_path / "keys.json"))
    monkeypatch.setenv("YOUTUBE_API_KEY", VALID_YOUTUBE_KEY)
    return TubeScoutApp(console=Console(record=True, width=200))


def test_env_key_used_when_store_empty(app):
    assert app.config["youtube_api_key"] == VALID_YOUTUBE_KEY
    assert app.processor.config is app.config


def test_set_keys_persists_and_updates_processor(app):
    with patch("tubescout.main.Prompt.ask", side_effect=["AIza" + "y" * 35, "gemini"]):
        app._set_keys()

    assert app.processor.config["youtube_api_key"] == "AIza" + "y" * 35
    assert TubeScoutApp(console=app.console).key_store.gemini_api_key == "gemini"


def test_ffmpeg_commands_for_single_video(app):
    app.processor.result = LookupResult(
        video=make_video(title="My Video"),
        summary=SummaryResult("https://fictional-stream-link.com/a\nhttps://fictional-stream-link.com/b"),
    )

    app._show_ffmpeg_commands()

    output = app.console.export_text()
    assert '"My Video_1.mp4"' in output
    assert '"My Video_2.mp4"' in output


def test_lookup_errors_are_printed(app):
    with patch("tubescout.main.Prompt.ask", side_effect=["1", "   ", "q"]):
        asyncio.run(app.start())

    assert "Please enter a YouTube URL or search query." in app.console.export_text()


def test_lookup_shows_video(app):
    app.processor.fetch_details = AsyncMock(return_value=LookupResult(video=make_video(title="My Video")))

    with patch("tubescout.main.Prompt.ask", side_effect=["1", "https://youtu.be/dQw4w9WgXcQ", "q"]):
        asyncio.run(app.start())

    output = app.console.export_text()
    assert "My Video" in output
    assert "10:00" in output


@pytest.mark.parametrize("name, value, problem", [
    ("SUMMARY_MAX_ATTEMPTS", "0", "SUMMARY_MAX_ATTEMPTS must be at least 1"),
    ("BATCH_DELAY_SECONDS", "-5", "BATCH_DELAY_SECONDS cannot be negative"),
])
def test_bad_settings_stop_startup(monkeypatch, tmp_path, name, value, problem):
    monkeypatch.setenv("KEY_STORE_PATH", str(tmp_path / "keys.json"))
    monkeypatch.setenv(name, value)
    app = TubeScoutApp(console=Console(record=True, width=200))

    with patch("tubescout.main.Prompt.ask") as ask:
        with pytest.raises(ValueError, match=problem):
            asyncio.run(app.start())

    ask.assert_not_called()


def test_missing_youtube_key_does_not_stop_startup(monkeypatch, tmp_path):
    monkeypatch.setenv("KEY_STORE_PATH", str(tmp_path / "keys.json"))
    monkeypatch.setenv("YOUTUBE_API_KEY", "not-a-key")
    app = TubeScoutApp(console=Console(record=True, width=200))

    with patch("tubescout.main.Prompt.ask", side_effect=["q"]) as ask:
        asyncio.run(app.start())

    ask.assert_called_once()
