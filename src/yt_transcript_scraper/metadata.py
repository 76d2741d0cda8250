"""
metadata.py — Project the player response onto typed metadata records.

The transcript list only tells us which caption tracks exist.  The same
player response also carries the video's details, its microformat block and
its streaming formats; this module turns each of those subtrees into the
dataclasses in models.py.

YouTube's schema is undocumented and changes without notice, so every
extractor follows the same rule:

    - the subtree itself is required; if it is missing we raise, because
      that tells us something about the video (or the page format);
    - every field inside it is optional and read independently, so one
      renamed field degrades one attribute instead of the whole record.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from yt_transcript_scraper.errors import VideoUnavailable, YouTubeDataUnparsable
from yt_transcript_scraper.jsontree import (
    as_bool,
    as_dict,
    as_int,
    as_list,
    as_number,
    as_string,
    as_uint,
    get_field,
)
from yt_transcript_scraper.models import (
    ColorInfo,
    MicroformatData,
    MicroformatEmbed,
    MicroformatThumbnail,
    Range,
    StreamingData,
    StreamingFormat,
    VideoDetails,
    VideoThumbnail,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Video details
# ---------------------------------------------------------------------------

def _parse_thumbnails(thumbnails: Any) -> list[VideoThumbnail]:
    """Keep only thumbnails that have a url, a width and a height."""
    result = []
    for thumb in as_list(thumbnails) or []:
        url = as_string(get_field(thumb, "url"))
        width = as_uint(get_field(thumb, "width"))
        height = as_uint(get_field(thumb, "height"))
        if url is None or width is None or height is None:
            continue
        result.append(VideoThumbnail(url=url, width=width, height=height))
    return result


def _string_or(value: Any, default: str) -> str:
    text = as_string(value)
    return default if text is None else text


_DECIMAL = re.compile(r"[0-9]+")


def _parse_length(value: Any) -> int:
    # lengthSeconds arrives as a decimal string, e.g. "213".
    text = as_string(value)
    if text is None or _DECIMAL.fullmatch(text) is None:
        return 0
    return int(text)


def extract_video_details(player_response: Any, video_id: str) -> VideoDetails:
    """
    Build a VideoDetails from the `videoDetails` subtree.

    Args:
        player_response: The parsed ytInitialPlayerResponse.
        video_id:        Fallback for a missing videoId, and for errors.

    Returns:
        A VideoDetails with per-field defaults for anything missing.

    Raises:
        YouTubeDataUnparsable: If there is no `videoDetails` object at all.
    """
    details = as_dict(get_field(player_response, "videoDetails"))
    if details is None:
        raise YouTubeDataUnparsable(video_id, "videoDetails not found in player response")

    keywords = as_list(details.get("keywords"))
    if keywords is not None:
        keywords = [keyword for keyword in keywords if isinstance(keyword, str)]

    return VideoDetails(
        video_id=as_string(details.get("videoId")) or video_id,
        title=_string_or(details.get("title"), "Unknown Title"),
        length_seconds=_parse_length(details.get("lengthSeconds")),
        keywords=keywords,
        channel_id=_string_or(details.get("channelId"), ""),
        short_description=_string_or(details.get("shortDescription"), ""),
        view_count=_string_or(details.get("viewCount"), "0"),
        author=_string_or(details.get("author"), "Unknown"),
        thumbnails=_parse_thumbnails(get_field(details, "thumbnail", "thumbnails")),
        is_live_content=bool(as_bool(details.get("isLiveContent"))),
    )


# ---------------------------------------------------------------------------
# Microformat
# ---------------------------------------------------------------------------

# Renderer key -> MicroformatData attribute, for plain string fields.
_MICROFORMAT_STRING_FIELDS = {
    "externalVideoId": "external_video_id",
    "externalChannelId": "external_channel_id",
    "ownerChannelName": "owner_channel_name",
    "ownerProfileUrl": "owner_profile_url",
    "category": "category",
    "lengthSeconds": "length_seconds",
    "viewCount": "view_count",
    "likeCount": "like_count",
    "uploadDate": "upload_date",
    "publishDate": "publish_date",
}

_MICROFORMAT_BOOL_FIELDS = {
    "isFamilySafe": "is_family_safe",
    "isUnlisted": "is_unlisted",
    "isShortsEligible": "is_shorts_eligible",
    "hasYpcMetadata": "has_ypc_metadata",
}


def extract_microformat(player_response: Any, video_id: str) -> MicroformatData:
    """
    Build a MicroformatData from `microformat.playerMicroformatRenderer`.

    Fields are left as None when missing or mistyped; nothing is invented.

    Raises:
        VideoUnavailable: If the renderer is absent.
    """
    renderer = as_dict(get_field(player_response, "microformat", "playerMicroformatRenderer"))
    if renderer is None:
        raise VideoUnavailable(video_id)

    values: dict[str, Any] = {}
    for key, attribute in _MICROFORMAT_STRING_FIELDS.items():
        values[attribute] = as_string(renderer.get(key))
    for key, attribute in _MICROFORMAT_BOOL_FIELDS.items():
        values[attribute] = as_bool(renderer.get(key))

    values["title"] = as_string(get_field(renderer, "title", "simpleText"))
    values["description"] = as_string(get_field(renderer, "description", "simpleText"))

    countries = [
        country for country in as_list(renderer.get("availableCountries")) or []
        if isinstance(country, str)
    ]
    values["available_countries"] = countries or None

    embed = as_dict(renderer.get("embed"))
    if embed is not None:
        values["embed"] = MicroformatEmbed(
            height=as_int(embed.get("height")),
            iframe_url=as_string(embed.get("iframeUrl")),
            width=as_int(embed.get("width")),
        )

    thumbnails = [
        VideoThumbnail(
            url=as_string(get_field(thumb, "url")),
            width=as_uint(get_field(thumb, "width")) or 0,
            height=as_uint(get_field(thumb, "height")) or 0,
        )
        for thumb in as_list(get_field(renderer, "thumbnail", "thumbnails")) or []
        if as_string(get_field(thumb, "url"))
    ]
    if thumbnails:
        values["thumbnail"] = MicroformatThumbnail(thumbnails=thumbnails)

    return MicroformatData(**values)


# ---------------------------------------------------------------------------
# Streaming data
# ---------------------------------------------------------------------------

def _parse_range(value: Any) -> Range | None:
    start = as_string(get_field(value, "start"))
    end = as_string(get_field(value, "end"))
    if start is None or end is None:
        return None
    return Range(start=start, end=end)


def _parse_color_info(value: Any) -> ColorInfo | None:
    color = as_dict(value)
    if color is None:
        return None
    return ColorInfo(
        primaries=as_string(color.get("primaries")),
        transfer_characteristics=as_string(color.get("transferCharacteristics")),
        matrix_coefficients=as_string(color.get("matrixCoefficients")),
    )


def parse_streaming_format(entry: Any) -> StreamingFormat | None:
    """
    Build one StreamingFormat, or return None if a required field is missing.

    Required: itag, mimeType, bitrate, quality, projectionType, approxDurationMs.
    """
    entry = as_dict(entry)
    if entry is None:
        return None

    itag = as_uint(entry.get("itag"))
    mime_type = as_string(entry.get("mimeType"))
    bitrate = as_uint(entry.get("bitrate"))
    quality = as_string(entry.get("quality"))
    projection_type = as_string(entry.get("projectionType"))
    approx_duration_ms = as_string(entry.get("approxDurationMs"))
    required = (itag, mime_type, bitrate, quality, projection_type, approx_duration_ms)
    if any(value is None for value in required):
        logger.debug("Dropping streaming format with missing required fields: %r", entry.get("itag"))
        return None

    return StreamingFormat(
        itag=itag,
        mime_type=mime_type,
        bitrate=bitrate,
        quality=quality,
        projection_type=projection_type,
        approx_duration_ms=approx_duration_ms,
        url=as_string(entry.get("url")),
        width=as_uint(entry.get("width")),
        height=as_uint(entry.get("height")),
        init_range=_parse_range(entry.get("initRange")),
        index_range=_parse_range(entry.get("indexRange")),
        last_modified=as_string(entry.get("lastModified")),
        content_length=as_string(entry.get("contentLength")),
        fps=as_uint(entry.get("fps")),
        quality_label=as_string(entry.get("qualityLabel")),
        average_bitrate=as_uint(entry.get("averageBitrate")),
        audio_quality=as_string(entry.get("audioQuality")),
        audio_sample_rate=as_string(entry.get("audioSampleRate")),
        audio_channels=as_uint(entry.get("audioChannels")),
        quality_ordinal=as_string(entry.get("qualityOrdinal")),
        high_replication=as_bool(entry.get("highReplication")),
        color_info=_parse_color_info(entry.get("colorInfo")),
        loudness_db=as_number(entry.get("loudnessDb")),
        is_drc=as_bool(entry.get("isDrc")),
        xtags=as_string(entry.get("xtags")),
    )


def _parse_formats(value: Any) -> list[StreamingFormat]:
    formats = []
    for entry in as_list(value) or []:
        parsed = parse_streaming_format(entry)
        if parsed is not None:
            formats.append(parsed)
    return formats


def extract_streaming_data(player_response: Any, video_id: str) -> StreamingData:
    """
    Build a StreamingData from the `streamingData` subtree.

    Format entries missing a required field are dropped individually.

    Raises:
        VideoUnavailable: If `streamingData` is absent.
    """
    streaming = as_dict(get_field(player_response, "streamingData"))
    if streaming is None:
        raise VideoUnavailable(video_id)

    return StreamingData(
        expires_in_seconds=_string_or(streaming.get("expiresInSeconds"), "0"),
        formats=_parse_formats(streaming.get("formats")),
        adaptive_formats=_parse_formats(streaming.get("adaptiveFormats")),
        server_abr_streaming_url=as_string(streaming.get("serverAbrStreamingUrl")),
    )
