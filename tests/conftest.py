"""
conftest.py — Shared fixtures: a realistic player response, watch-page HTML
built around it, timed-text XML, and real requests.Response objects for
fake sessions to return.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import pytest
import requests

VIDEO_ID = "GJLlxj_dtq8"

TRANSCRIPT_XML = (
    '<?xml version="1.0" encoding="utf-8" ?>'
    "<transcript>"
    '<text start="0.0" dur="1.54">Hey, this is just a test</text>'
    '<text start="1.54" dur="4.16">this is not the original transcript</text>'
    '<text start="5.7" dur="3.239">test &amp;amp; test, like this &quot;test&quot; he&#39;s testing</text>'
    "</transcript>"
)


def _player_response() -> dict[str, Any]:
    return {
        "playabilityStatus": {"status": "OK"},
        "videoDetails": {
            "videoId": VIDEO_ID,
            "title": "Test Video",
            "lengthSeconds": "213",
            "keywords": ["test", "video"],
            "channelId": "UC_test_channel",
            "shortDescription": "A short description",
            "viewCount": "1234",
            "author": "Test Author",
            "thumbnail": {
                "thumbnails": [
                    {"url": "https://i.ytimg.com/vi/x/default.jpg", "width": 120, "height": 90},
                ]
            },
            "isLiveContent": False,
        },
        "microformat": {
            "playerMicroformatRenderer": {
                "title": {"simpleText": "Test Video"},
                "description": {"simpleText": "A longer description"},
                "category": "Education",
                "publishDate": "2020-01-01",
                "uploadDate": "2020-01-01",
                "isFamilySafe": True,
                "availableCountries": ["DE", "US"],
            }
        },
        "streamingData": {
            "expiresInSeconds": "21540",
            "formats": [
                {
                    "itag": 18,
                    "mimeType": 'video/mp4; codecs="avc1.42001E, mp4a.40.2"',
                    "bitrate": 503574,
                    "quality": "medium",
                    "projectionType": "RECTANGULAR",
                    "approxDurationMs": "213000",
                    "width": 640,
                    "height": 360,
                },
            ],
            "adaptiveFormats": [],
        },
        "captions": {
            "playerCaptionsTracklistRenderer": {
                "captionTracks": [
                    {
                        "baseUrl": "https://www.youtube.com/api/timedtext?v=GJLlxj_dtq8&lang=de",
                        "name": {"simpleText": "Deutsch"},
                        "languageCode": "de",
                        "isTranslatable": True,
                    },
                    {
                        "baseUrl": "https://www.youtube.com/api/timedtext?v=GJLlxj_dtq8&lang=en&fmt=srv3",
                        "name": {"runs": [{"text": "English "}, {"text": "(auto-generated)"}]},
                        "languageCode": "en",
                        "kind": "asr",
                        "isTranslatable": True,
                    },
                ],
                "translationLanguages": [
                    {"languageCode": "af", "languageName": {"simpleText": "Afrikaans"}},
                    {"languageCode": "fr", "languageName": {"runs": [{"text": "French"}]}},
                ],
            }
        },
    }


@pytest.fixture
def video_id() -> str:
    return VIDEO_ID


@pytest.fixture
def player_response() -> dict[str, Any]:
    """A fresh, playable player response with captions and metadata."""
    return _player_response()


@pytest.fixture
def watch_html() -> Callable[[Any], str]:
    """Factory wrapping a player response in watch-page HTML."""

    def _build(player_response: Any) -> str:
        return (
            "<html><head><script>var ytcfg = {};</script></head><body>"
            f"<script>var ytInitialPlayerResponse = {json.dumps(player_response)};"
            "var meta = document.createElement('meta');</script>"
            "</body></html>"
        )

    return _build


@pytest.fixture
def transcript_xml() -> str:
    return TRANSCRIPT_XML


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Factory for real requests.Response objects with a given body and status."""

    def _build(text: str = "", status_code: int = 200) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response._content = text.encode("utf-8")
        response.encoding = "utf-8"
        return response

    return _build
