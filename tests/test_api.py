"""
test_api.py — Tests for YouTubeTranscriptApi: session configuration and the
transcript/metadata operations built on it.

A real requests.Session is configured and its .get() is patched, so header,
cookie and proxy setup is checked on the object requests would actually use.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from yt_transcript_scraper.api import YouTubeTranscriptApi
from yt_transcript_scraper.errors import CookiePathInvalid, NoTranscriptFound
from yt_transcript_scraper.proxies import GenericProxyConfig, WebshareProxyConfig
from yt_transcript_scraper.settings import USER_AGENT


# ---------------------------------------------------------------------------
# Session configuration
# ---------------------------------------------------------------------------

class TestSessionSetup:
    """What the constructor does to the session."""

    def test_default_headers(self) -> None:
        """A desktop User-Agent and English Accept-Language are set."""
        session = requests.Session()
        YouTubeTranscriptApi(http_client=session)
        assert session.headers["User-Agent"] == USER_AGENT
        assert session.headers["Accept-Language"] == "en-US"
        assert session.headers.get("Connection") != "close"

    def test_generic_proxy(self) -> None:
        """Proxies are installed; keep-alive is untouched."""
        session = requests.Session()
        YouTubeTranscriptApi(
            proxy_config=GenericProxyConfig(http_url="http://proxy:8080"), http_client=session
        )
        assert session.proxies == {"http": "http://proxy:8080", "https": "http://proxy:8080"}
        assert session.headers.get("Connection") != "close"

    def test_webshare_proxy_disables_keep_alive(self) -> None:
        """Rotating proxies get "Connection: close" so every request rotates."""
        session = requests.Session()
        YouTubeTranscriptApi(
            proxy_config=WebshareProxyConfig(proxy_username="u", proxy_password="p"),
            http_client=session,
        )
        assert session.headers["Connection"] == "close"
        assert session.proxies["https"] == "http://u-rotate:p@p.webshare.io:80/"

    def test_cookie_file(self, tmp_path) -> None:
        """Cookies from the file are added to the session."""
        path = tmp_path / "cookies.txt"
        path.write_text(".youtube.com\tTRUE\t/\tTRUE\t1999999999\tSID\tabc\n")
        session = requests.Session()
        YouTubeTranscriptApi(cookie_path=path, http_client=session)
        assert session.cookies.get("SID", domain=".youtube.com") == "abc"

    def test_bad_cookie_path(self, tmp_path) -> None:
        """An unreadable cookie file fails at construction time."""
        with pytest.raises(CookiePathInvalid):
            YouTubeTranscriptApi(cookie_path=tmp_path / "missing.txt")

    def test_creates_session_when_none_given(self) -> None:
        """A fresh session is created by default."""
        with patch("yt_transcript_scraper.api.requests.Session") as MockSession:
            MockSession.return_value.headers = {}
            YouTubeTranscriptApi()
        MockSession.assert_called_once_with()


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

@pytest.fixture
def session() -> requests.Session:
    session = requests.Session()
    session.get = MagicMock()
    return session


class TestOperations:
    """End-to-end flows over a patched session."""

    def test_fetch_transcript(
        self, session, video_id, player_response, watch_html, transcript_xml, make_response
    ) -> None:
        """The page is fetched, a track is picked and its XML parsed."""
        session.get.side_effect = [
            make_response(watch_html(player_response)),
            make_response(transcript_xml),
        ]
        fetched = YouTubeTranscriptApi(http_client=session).fetch_transcript(
            video_id, languages=["de", "en"]
        )
        assert fetched.language_code == "de"
        assert fetched.is_generated is False
        assert len(fetched) == 3
        assert session.get.call_args_list[1].args[0].endswith("lang=de")

    def test_fetch_transcript_default_language(
        self, session, video_id, player_response, watch_html, transcript_xml, make_response
    ) -> None:
        """English is requested by default and the srv3 parameter is gone."""
        session.get.side_effect = [
            make_response(watch_html(player_response)),
            make_response(transcript_xml),
        ]
        fetched = YouTubeTranscriptApi(http_client=session).fetch_transcript(video_id)
        assert fetched.language_code == "en"
        assert fetched.is_generated is True
        assert "fmt=srv3" not in session.get.call_args_list[1].args[0]

    def test_fetch_transcript_not_found(
        self, session, video_id, player_response, watch_html, make_response
    ) -> None:
        """Unavailable languages raise NoTranscriptFound without fetching a track."""
        session.get.side_effect = [make_response(watch_html(player_response))]
        with pytest.raises(NoTranscriptFound):
            YouTubeTranscriptApi(http_client=session).fetch_transcript(video_id, languages=["ja"])
        assert session.get.call_count == 1

    def test_translated_transcript(
        self, session, video_id, player_response, watch_html, transcript_xml, make_response
    ) -> None:
        """list_transcripts → translate → fetch requests the tlang URL."""
        session.get.side_effect = [
            make_response(watch_html(player_response)),
            make_response(transcript_xml),
        ]
        api = YouTubeTranscriptApi(http_client=session)
        fetched = api.list_transcripts(video_id).find_transcript(["de"]).translate("fr").fetch()
        assert fetched.language == "French"
        assert session.get.call_args_list[1].args[0].endswith("&tlang=fr")

    def test_debug_sink_sees_every_artifact(
        self, session, video_id, player_response, watch_html, transcript_xml, make_response
    ) -> None:
        """watch_html, player_response and transcript_xml reach the sink in order."""
        session.get.side_effect = [
            make_response(watch_html(player_response)),
            make_response(transcript_xml),
        ]
        sink = MagicMock()
        YouTubeTranscriptApi(http_client=session, debug_sink=sink).fetch_transcript(video_id)
        assert [call.args[0] for call in sink.call_args_list] == [
            "watch_html",
            "player_response",
            "transcript_xml",
        ]

    def test_metadata_operations(
        self, session, video_id, player_response, watch_html, make_response
    ) -> None:
        """Each metadata operation performs one page fetch."""
        session.get.side_effect = [make_response(watch_html(player_response)) for _ in range(4)]
        api = YouTubeTranscriptApi(http_client=session)
        assert api.fetch_video_details(video_id).view_count == "1234"
        assert api.fetch_microformat(video_id).upload_date == "2020-01-01"
        assert api.fetch_streaming_data(video_id).formats[0].quality == "medium"
        assert api.fetch_video_infos(video_id).video_details.title == "Test Video"
        assert session.get.call_count == 4
