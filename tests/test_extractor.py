"""
test_extractor.py — Unit and integration tests for the convenience layer.

Unit tests (fast, no network):
    - URL / ID parsing for every supported format
    - format_text() and format_json() output shape
    - extract() wiring and error cases

Integration tests (need network, marked with @pytest.mark.integration):
    - Fetching a transcript and metadata from a real YouTube video
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from yt_transcript_scraper.api import YouTubeTranscriptApi
from yt_transcript_scraper.extractor import (
    extract,
    format_json,
    format_text,
    get_transcript,
    parse_video_id,
)
from yt_transcript_scraper.models import FetchedTranscript, FetchedTranscriptSnippet


def _make_transcript(snippets_data: list[dict], video_id: str = "dQw4w9WgXcQ") -> FetchedTranscript:
    return FetchedTranscript(
        video_id=video_id,
        language="English",
        language_code="en",
        is_generated=False,
        snippets=[FetchedTranscriptSnippet(**data) for data in snippets_data],
    )


# ---------------------------------------------------------------------------
# parse_video_id — URL parsing
# ---------------------------------------------------------------------------

class TestParseVideoId:
    """Tests for parse_video_id covering every URL format + bare IDs."""

    def test_standard_watch_url(self) -> None:
        """Standard youtube.com/watch?v= URL."""
        assert parse_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_watch_url_with_extra_params(self) -> None:
        """Watch URL with additional query parameters like playlist or timestamp."""
        url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ&list=PLrAXtmErZgOeiKm4sgNOknGvNjby9efdf&t=42"
        assert parse_video_id(url) == "dQw4w9WgXcQ"

    def test_mobile_watch_url(self) -> None:
        """m.youtube.com watch URL."""
        assert parse_video_id("https://m.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_short_url(self) -> None:
        """youtu.be short-link format."""
        assert parse_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_embed_url(self) -> None:
        """youtube.com/embed/ URL used in iframes."""
        assert parse_video_id("https://www.youtube.com/embed/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_shorts_url(self) -> None:
        """youtube.com/shorts/ URL."""
        assert parse_video_id("https://www.youtube.com/shorts/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_live_url(self) -> None:
        """youtube.com/live/ URL."""
        assert parse_video_id("https://www.youtube.com/live/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_bare_id(self) -> None:
        """Raw 11-character video ID with no URL wrapper."""
        assert parse_video_id("dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_bare_id_with_whitespace(self) -> None:
        """Bare ID with leading/trailing spaces should be trimmed."""
        assert parse_video_id("  dQw4w9WgXcQ  ") == "dQw4w9WgXcQ"

    def test_invalid_url_raises(self) -> None:
        """Completely unrelated string should raise ValueError naming the input."""
        with pytest.raises(ValueError, match="not-a-youtube-url") as exc_info:
            parse_video_id("not-a-youtube-url")
        assert "watch?v=" not in str(exc_info.value)

    def test_empty_string_raises(self) -> None:
        """Empty input should raise ValueError."""
        with pytest.raises(ValueError):
            parse_video_id("")

    def test_id_with_hyphens_and_underscores(self) -> None:
        """IDs can contain hyphens and underscores (base64url alphabet)."""
        assert parse_video_id("Ab_Cd-Ef_12") == "Ab_Cd-Ef_12"


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatText:
    """Tests for the plain-text formatter."""

    def test_joins_lines(self) -> None:
        """Each snippet becomes one line."""
        transcript = _make_transcript([
            {"text": "Hello world", "start": 0.0, "duration": 1.5},
            {"text": "Second line", "start": 1.5, "duration": 2.0},
        ])
        assert format_text(transcript) == "Hello world\nSecond line"

    def test_empty_transcript(self) -> None:
        """No snippets gives an empty string."""
        assert format_text(_make_transcript([])) == ""


class TestFormatJson:
    """Tests for the JSON formatter."""

    def test_structure(self) -> None:
        """Output carries the video, language and timestamped segments."""
        data = [
            {"text": "Hello", "start": 0.0, "duration": 1.0},
            {"text": "World", "start": 1.0, "duration": 1.0},
        ]
        result = format_json(_make_transcript(data, video_id="test_video_"))
        assert result["video_id"] == "test_video_"
        assert result["language_code"] == "en"
        assert result["is_generated"] is False
        assert result["segment_count"] == 2
        assert result["segments"] == data

    def test_empty_segments(self) -> None:
        """An empty transcript has zero segments."""
        result = format_json(_make_transcript([]))
        assert result["segment_count"] == 0
        assert result["segments"] == []


# ---------------------------------------------------------------------------
# get_transcript / extract
# ---------------------------------------------------------------------------

class TestGetTranscript:
    """Delegation to YouTubeTranscriptApi."""

    def test_uses_given_api(self) -> None:
        """A supplied api is used with the requested languages."""
        api = MagicMock()
        get_transcript("dQw4w9WgXcQ", languages=["de"], api=api)
        api.fetch_transcript.assert_called_once_with("dQw4w9WgXcQ", languages=["de"])

    def test_defaults_to_english(self) -> None:
        """No languages means ["en"]."""
        api = MagicMock()
        get_transcript("dQw4w9WgXcQ", api=api)
        api.fetch_transcript.assert_called_once_with("dQw4w9WgXcQ", languages=["en"])

    @patch("yt_transcript_scraper.extractor.YouTubeTranscriptApi")
    def test_creates_default_api(self, MockApi: MagicMock) -> None:
        """Without an api a default one is constructed."""
        get_transcript("dQw4w9WgXcQ")
        MockApi.assert_called_once_with()


class TestExtract:
    """extract() wiring."""

    @patch("yt_transcript_scraper.extractor.get_transcript")
    def test_text(self, mock_get_transcript: MagicMock) -> None:
        """fmt="text" parses the URL and returns plain text."""
        mock_get_transcript.return_value = _make_transcript([
            {"text": "Hello", "start": 0.0, "duration": 1.0},
        ])
        result = extract("https://youtu.be/dQw4w9WgXcQ", languages=["en"])
        assert result == "Hello"
        mock_get_transcript.assert_called_once_with("dQw4w9WgXcQ", languages=["en"], api=None)

    @patch("yt_transcript_scraper.extractor.get_transcript")
    def test_json(self, mock_get_transcript: MagicMock) -> None:
        """fmt="json" returns the structured dict."""
        mock_get_transcript.return_value = _make_transcript([
            {"text": "Hello", "start": 0.0, "duration": 1.0},
        ])
        result = extract("dQw4w9WgXcQ", fmt="json")
        assert isinstance(result, dict)
        assert result["segment_count"] == 1

    def test_unknown_format(self) -> None:
        """Unsupported formats are rejected before any fetch."""
        with pytest.raises(ValueError, match="Unknown format"):
            extract("dQw4w9WgXcQ", fmt="doc")

    def test_invalid_url(self) -> None:
        """Unparseable input raises ValueError."""
        with pytest.raises(ValueError, match="Not a YouTube video URL or ID"):
            extract("https://example.com/video")


# ---------------------------------------------------------------------------
# Integration tests — require network access
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestIntegration:
    """
    Integration tests that hit the real YouTube site.

    Run with:  uv run pytest -m integration
    """

    VIDEO = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

    def test_extract_text(self) -> None:
        """A well-known video has an English transcript."""
        result = extract(self.VIDEO)
        assert isinstance(result, str)
        assert len(result) > 100

    def test_extract_json(self) -> None:
        """JSON output has timestamped segments."""
        result = extract(self.VIDEO, fmt="json")
        assert result["segment_count"] > 0
        assert {"text", "start", "duration"} <= set(result["segments"][0])

    def test_video_infos(self) -> None:
        """All metadata records come back from one page fetch."""
        infos = YouTubeTranscriptApi().fetch_video_infos(parse_video_id(self.VIDEO))
        assert infos.video_details.video_id == "dQw4w9WgXcQ"
        assert infos.video_details.length_seconds > 0
        assert len(infos.transcript_list) > 0
