"""
playability.py — Decide whether a video's content is accessible at all.

Captions and metadata are only worth extracting when YouTube says the video
is playable.  assert_playability() reads `playabilityStatus` from the player
response and raises the specific TranscriptError that explains why not.
It does no I/O and tolerates any missing field.
"""

from __future__ import annotations

import enum
import logging
from typing import Any

from yt_transcript_scraper.errors import (
    AgeRestricted,
    InvalidVideoId,
    VideoUnavailable,
    VideoUnplayable,
)
from yt_transcript_scraper.jsontree import as_list, as_string, get_field

logger = logging.getLogger(__name__)


class PlayabilityStatus(str, enum.Enum):
    OK = "OK"
    ERROR = "ERROR"
    LOGIN_REQUIRED = "LOGIN_REQUIRED"


# Substrings of playabilityStatus.reason.
_AGE_RESTRICTED_MARKER = "age"
_UNAVAILABLE_MARKERS = ("Video unavailable", "This video is unavailable")


def extract_sub_reasons(player_response: Any) -> list[str]:
    """Texts of the player error screen's subreason runs, in order."""
    runs = as_list(
        get_field(
            player_response,
            "playabilityStatus", "errorScreen", "playerErrorMessageRenderer",
            "subreason", "runs",
        )
    ) or []
    sub_reasons = []
    for run in runs:
        text = as_string(get_field(run, "text"))
        if text is not None:
            sub_reasons.append(text)
    return sub_reasons


def assert_playability(player_response: Any, video_id: str) -> None:
    """
    Raise if the player response says the video cannot be played.

    Args:
        player_response: The parsed ytInitialPlayerResponse.
        video_id:        Used to build the error.

    Raises:
        AgeRestricted:    Login required because of an age gate.
        VideoUnavailable: The video was removed or never existed.
        InvalidVideoId:   "Unavailable", but the caller passed a URL instead of an ID.
        VideoUnplayable:  Any other refusal; carries YouTube's reason text.
    """
    status = as_string(get_field(player_response, "playabilityStatus", "status")) or "ERROR"
    if status == PlayabilityStatus.OK:
        return

    reason = as_string(get_field(player_response, "playabilityStatus", "reason")) or ""

    if status == PlayabilityStatus.LOGIN_REQUIRED:
        if _AGE_RESTRICTED_MARKER in reason:
            raise AgeRestricted(video_id)
        raise VideoUnplayable(video_id, reason, extract_sub_reasons(player_response))

    if status != PlayabilityStatus.ERROR:
        logger.warning("Unrecognised playability status %r for video %s", status, video_id)

    if any(marker in reason for marker in _UNAVAILABLE_MARKERS):
        if video_id.startswith(("http://", "https://")):
            raise InvalidVideoId(video_id)
        raise VideoUnavailable(video_id)
    raise VideoUnplayable(video_id, reason, extract_sub_reasons(player_response))
