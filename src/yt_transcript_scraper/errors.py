"""
errors.py — Exception hierarchy for yt-transcript-scraper.

Every failure to get at a video's transcript or metadata is a
TranscriptError carrying the video ID.  The subclass says *why*, and the
rendered message explains the likely cause in plain English, including
remediation steps for IP blocks that depend on the proxy in use.

Hierarchy:
    TranscriptError (base)
    ├── TranscriptsDisabled
    ├── NoTranscriptFound
    ├── VideoUnavailable
    ├── VideoUnplayable
    ├── AgeRestricted
    ├── InvalidVideoId
    ├── RequestBlocked
    │   └── IpBlocked
    ├── NotTranslatable
    ├── TranslationLanguageNotAvailable
    ├── FailedToCreateConsentCookie
    ├── YouTubeRequestFailed
    └── YouTubeDataUnparsable

    CookieError (base)
    ├── CookiePathInvalid
    └── CookieInvalid

    TimedTextParseError     Malformed timed-text XML (no video context).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from yt_transcript_scraper.proxies import ProxyKind
from yt_transcript_scraper.settings import WATCH_URL

if TYPE_CHECKING:
    from yt_transcript_scraper.proxies import ProxyConfig
    from yt_transcript_scraper.transcripts import TranscriptList


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class TranscriptError(Exception):
    """
    Root exception for every transcript/metadata retrieval failure.

    Subclasses override `cause` to describe the specific reason; the full
    message wraps it with the video URL so logs are self-explanatory.

    Attributes:
        video_id: The video the failing call was made for.
        message:  The rendered, human-readable explanation.
    """

    cause = ""

    def __init__(self, video_id: str) -> None:
        self.video_id = video_id
        self.message = self._build_message()
        super().__init__(self.message)

    def _build_message(self) -> str:
        base = (
            "Could not retrieve a transcript for the video "
            f"{WATCH_URL.format(video_id=self.video_id)}!"
        )
        cause = self.cause
        if not cause:
            return base
        return f"{base} This is most likely caused by:\n\n{cause}"


# ---------------------------------------------------------------------------
# Content is missing or inaccessible
# ---------------------------------------------------------------------------

class TranscriptsDisabled(TranscriptError):
    """The uploader disabled captions (no caption renderer in the player response)."""

    cause = "Subtitles are disabled for this video"


class NoTranscriptFound(TranscriptError):
    """
    None of the requested language codes matched an available transcript.

    Carries the full TranscriptList so callers can offer alternatives without
    fetching the page again.
    """

    def __init__(
        self,
        video_id: str,
        requested_language_codes: Iterable[str],
        transcript_list: TranscriptList,
    ) -> None:
        self.requested_language_codes = list(requested_language_codes)
        self.transcript_list = transcript_list
        super().__init__(video_id)

    @property
    def cause(self) -> str:
        return (
            "No transcripts were found for any of the requested language codes: "
            f"{self.requested_language_codes}\n\n{self.transcript_list}"
        )


class VideoUnavailable(TranscriptError):
    cause = "The video is no longer available"


class VideoUnplayable(TranscriptError):
    """
    YouTube refuses to play the video (private, members-only, region lock, ...).

    Attributes:
        reason:      YouTube's top-level reason string, if any.
        sub_reasons: Extra detail lines from the player error screen.
    """

    def __init__(self, video_id: str, reason: str | None, sub_reasons: list[str]) -> None:
        self.reason = reason
        self.sub_reasons = list(sub_reasons)
        super().__init__(video_id)

    @property
    def cause(self) -> str:
        reason = self.reason or "No reason specified!"
        message = f"The video is unplayable for the following reason: {reason}"
        if self.sub_reasons:
            message += "\n\nAdditional Details:\n"
            message += "".join(f" - {sub_reason}\n" for sub_reason in self.sub_reasons)
        return message


class AgeRestricted(TranscriptError):
    cause = (
        "This video is age-restricted. Therefore, you will have to authenticate to be "
        "able to retrieve transcripts for it. You will have to provide a cookie to "
        "authenticate yourself."
    )


class InvalidVideoId(TranscriptError):
    cause = (
        "You provided an invalid video id. Make sure you are using the video id and "
        "NOT the url!"
    )


# ---------------------------------------------------------------------------
# Blocking
# ---------------------------------------------------------------------------

_BLOCKED_BASE_CAUSE = (
    "YouTube is blocking requests from your IP. This usually is due to one of the "
    "following reasons:\n"
    "- You have done too many requests and your IP has been blocked by YouTube\n"
    "- You are doing requests from an IP belonging to a cloud provider (like AWS, "
    "Google Cloud Platform, Azure, etc.). Unfortunately, most IPs from cloud "
    "providers are blocked by YouTube."
)

# Remediation advice keyed by proxy kind.
_BLOCKED_PROXY_ADVICE = {
    ProxyKind.ROTATING_RESIDENTIAL: (
        "YouTube is blocking your requests, despite you using Webshare proxies. "
        'Please make sure that you have purchased "Residential" proxies and NOT '
        '"Proxy Server" or "Static Residential", as those won\'t work as reliably! '
        'The free tier also uses "Proxy Server" and will NOT work!\n\n'
        'The only reliable option is using "Residential" proxies (not "Static '
        'Residential"), as this allows you to rotate through a pool of over 30M IPs, '
        "which means you will always find an IP that hasn't been blocked by YouTube yet!"
    ),
    ProxyKind.GENERIC: (
        "YouTube is blocking your requests, despite you using proxies. Keep in mind a "
        "proxy is just a way to hide your real IP behind the IP of that proxy, but "
        "there is no guarantee that the IP of that proxy won't be blocked as well.\n\n"
        "The only truly reliable way to prevent IP blocks is rotating through a large "
        "pool of residential IPs, by using a provider like Webshare."
    ),
}


class RequestBlocked(TranscriptError):
    """
    YouTube answered with a block (HTTP 403/429 or a bot check).

    Attributes:
        proxy_config: The proxy in use when the block happened, or None.
    """

    no_proxy_advice = "Request blocked."

    def __init__(self, video_id: str, proxy_config: ProxyConfig | None = None) -> None:
        self.proxy_config = proxy_config
        super().__init__(video_id)

    def with_proxy_config(self, proxy_config: ProxyConfig | None) -> RequestBlocked:
        """Return a copy of this error that carries `proxy_config`."""
        return type(self)(self.video_id, proxy_config)

    @property
    def cause(self) -> str:
        if self.proxy_config is None:
            advice = self.no_proxy_advice
        else:
            advice = _BLOCKED_PROXY_ADVICE[self.proxy_config.kind]
        return f"{_BLOCKED_BASE_CAUSE}\n\n{advice}"


class IpBlocked(RequestBlocked):
    no_proxy_advice = "Ip blocked."


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------

class NotTranslatable(TranscriptError):
    cause = "The requested language is not translatable"


class TranslationLanguageNotAvailable(TranscriptError):
    cause = "The requested translation language is not available"


# ---------------------------------------------------------------------------
# Transport / page format
# ---------------------------------------------------------------------------

class FailedToCreateConsentCookie(TranscriptError):
    cause = "Failed to automatically give consent to saving cookies"


class YouTubeRequestFailed(TranscriptError):
    """
    The HTTP request itself failed (network error or non-success status).

    Attributes:
        detail: Description of the transport failure.
    """

    def __init__(self, video_id: str, detail: str) -> None:
        self.detail = detail
        super().__init__(video_id)

    @property
    def cause(self) -> str:
        return f"Failed to make a request to YouTube. Error: {self.detail}"


class YouTubeDataUnparsable(TranscriptError):
    """
    The page or transcript data did not have the shape we know how to read.

    Attributes:
        detail: Which step of the extraction failed.
    """

    def __init__(self, video_id: str, detail: str = "") -> None:
        self.detail = detail
        super().__init__(video_id)

    @property
    def cause(self) -> str:
        detail = f": {self.detail}" if self.detail else ""
        return (
            f"The data required to fetch the transcript is not parsable{detail}. "
            "This should not happen, please open an issue (make sure to include the "
            "video ID)!"
        )


# ---------------------------------------------------------------------------
# Cookies
# ---------------------------------------------------------------------------

class CookieError(Exception):
    """Root exception for cookie-file problems."""


class CookiePathInvalid(CookieError):
    def __init__(self, cookie_path: str) -> None:
        super().__init__(f"Can't load the provided cookie file: {cookie_path}")
        self.cookie_path = cookie_path


class CookieInvalid(CookieError):
    def __init__(self, cookie_path: str) -> None:
        super().__init__(
            f"The cookies provided are not valid (may have expired): {cookie_path}"
        )
        self.cookie_path = cookie_path


# ---------------------------------------------------------------------------
# Timed-text parsing
# ---------------------------------------------------------------------------

class TimedTextParseError(ValueError):
    """
    Raised by the timed-text parser for malformed XML.

    Attributes:
        line:   1-based line of the error, None for forbidden constructs.
        column: 0-based byte column of the error.
        offset: Byte offset of the error in the encoded document.
    """

    def __init__(
        self,
        message: str,
        line: int | None,
        column: int | None,
        offset: int | None,
    ) -> None:
        if offset is not None:
            message = f"{message} (byte offset {offset})"
        super().__init__(message)
        self.line = line
        self.column = column
        self.offset = offset
