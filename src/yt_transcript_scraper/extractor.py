"""
extractor.py — One-call convenience layer over YouTubeTranscriptApi.

    1. Parsing YouTube URLs / IDs  → parse_video_id()
    2. Fetching transcript data    → get_transcript()
    3. Formatting output           → format_text(), format_json()
    4. One-call convenience        → extract()

Only single-video extraction is supported (no playlists).
"""

from __future__ import annotations

import re

from yt_transcript_scraper.api import YouTubeTranscriptApi
from yt_transcript_scraper.models import FetchedTranscript

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Each pattern captures the 11-character video ID in group "id":
#   - https://www.youtube.com/watch?v=VIDEO_ID
#   - https://youtu.be/VIDEO_ID
#   - https://www.youtube.com/embed/VIDEO_ID
#   - https://www.youtube.com/shorts/VIDEO_ID
#   - https://www.youtube.com/live/VIDEO_ID
#   - https://www.youtube.com/v/VIDEO_ID
_URL_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(?:https?://)?(?:www\.|m\.)?youtube\.com/watch\?.*v=(?P<id>[A-Za-z0-9_-]{11})"),
    re.compile(r"(?:https?://)?youtu\.be/(?P<id>[A-Za-z0-9_-]{11})"),
    re.compile(
        r"(?:https?://)?(?:www\.|m\.)?youtube\.com/(?:embed|shorts|live|v)/(?P<id>[A-Za-z0-9_-]{11})"
    ),
]

# A bare video ID is exactly 11 characters from the base64url alphabet.
_BARE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")

_DEFAULT_LANGUAGES = ["en"]

_FORMATS = ("text", "json")


# ---------------------------------------------------------------------------
# URL / ID parsing
# ---------------------------------------------------------------------------

def parse_video_id(url_or_id: str) -> str:
    """
    Extract a YouTube video ID from a URL string, or validate a raw 11-char ID.

    Args:
        url_or_id: A YouTube URL or a raw video ID.

    Returns:
        The 11-character video ID.

    Raises:
        ValueError: If the string doesn't match any known format.
    """
    url_or_id = url_or_id.strip()

    for pattern in _URL_PATTERNS:
        match = pattern.search(url_or_id)
        if match:
            return match.group("id")

    if _BARE_ID_PATTERN.match(url_or_id):
        return url_or_id

    raise ValueError(f"Not a YouTube video URL or ID: {url_or_id!r}")


# ---------------------------------------------------------------------------
# Transcript fetching
# ---------------------------------------------------------------------------

def get_transcript(
    video_id: str,
    languages: list[str] | None = None,
    api: YouTubeTranscriptApi | None = None,
) -> FetchedTranscript:
    """
    Fetch transcript snippets for a single YouTube video.

    Args:
        video_id:  The 11-character YouTube video ID (NOT a full URL).
        languages: Optional list of language codes in descending priority
                   (e.g. ["de", "en"]).  When None, defaults to ["en"].
        api:       A configured YouTubeTranscriptApi (cookies, proxies).
                   A default one is created when omitted.

    Returns:
        A FetchedTranscript (iterable of snippets with .text, .start,
        .duration attributes).

    Raises:
        TranscriptError: (or subclass) on any extraction failure, e.g.
            VideoUnavailable, TranscriptsDisabled or NoTranscriptFound.
    """
    langs = languages if languages else _DEFAULT_LANGUAGES
    if api is None:
        api = YouTubeTranscriptApi()
    return api.fetch_transcript(video_id, languages=langs)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_text(transcript: FetchedTranscript) -> str:
    """Plain text, one line per snippet, no timestamps."""
    return "\n".join(snippet.text for snippet in transcript)


def format_json(transcript: FetchedTranscript) -> dict:
    """
    Build a JSON-serialisable dict from a fetched transcript.

    Returns:
        A dict with keys: video_id, language, language_code, is_generated,
        segment_count, segments.  Each segment has: text, start, duration.
    """
    segments = transcript.to_raw_data()
    return {
        "video_id": transcript.video_id,
        "language": transcript.language,
        "language_code": transcript.language_code,
        "is_generated": transcript.is_generated,
        "segment_count": len(segments),
        "segments": segments,
    }


# ---------------------------------------------------------------------------
# High-level convenience function
# ---------------------------------------------------------------------------

def extract(
    url_or_id: str,
    languages: list[str] | None = None,
    fmt: str = "text",
    *,
    api: YouTubeTranscriptApi | None = None,
) -> str | dict:
    """
    One-call interface: parse URL → fetch transcript → format output.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        languages: Optional language priority list (e.g. ["de", "en"]).
        fmt:       "text" for plain text, "json" for a dict with timestamps.
        api:       A configured YouTubeTranscriptApi to fetch with.

    Returns:
        A plain-text string (fmt="text") or a dict (fmt="json").

    Raises:
        ValueError:      If fmt is not "text" or "json", or url_or_id is
                         not a YouTube URL or ID.
        TranscriptError: (or subclass) on any extraction failure.
    """
    if fmt not in _FORMATS:
        raise ValueError(f"Unknown format {fmt!r}; expected 'text' or 'json'")

    video_id = parse_video_id(url_or_id)
    transcript = get_transcript(video_id, languages=languages, api=api)

    if fmt == "json":
        return format_json(transcript)
    return format_text(transcript)
