"""
models.py — Typed records produced by the extractors and the transcript fetch.

All records are frozen dataclasses: they are built once from a player
response (or a timed-text document) and never mutated afterwards, so they
can be shared freely between threads.  dataclasses.asdict() turns any of
them into JSON-serialisable data.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from yt_transcript_scraper.transcripts import TranscriptList


# ---------------------------------------------------------------------------
# Transcripts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TranslationLanguage:
    """A language a translatable transcript can be machine-translated into."""

    language: str
    language_code: str


@dataclass(frozen=True)
class FetchedTranscriptSnippet:
    """
    One cue of a transcript.

    Attributes:
        text:     The cue text (formatting stripped or preserved).
        start:    Start time in seconds.
        duration: Duration in seconds.  Cues may overlap.
    """

    text: str
    start: float
    duration: float


@dataclass(frozen=True)
class FetchedTranscript:
    """
    A materialised transcript: the snippets plus what they were fetched for.

    Iterable, indexable and sized over its snippets.
    """

    video_id: str
    language: str
    language_code: str
    is_generated: bool
    snippets: list[FetchedTranscriptSnippet] = field(default_factory=list)

    def __iter__(self) -> Iterator[FetchedTranscriptSnippet]:
        return iter(self.snippets)

    def __getitem__(self, index: int) -> FetchedTranscriptSnippet:
        return self.snippets[index]

    def __len__(self) -> int:
        return len(self.snippets)

    def text(self) -> str:
        """All snippet texts joined with single spaces."""
        return " ".join(snippet.text for snippet in self.snippets)

    def to_raw_data(self) -> list[dict]:
        """Snippets as a list of {"text", "start", "duration"} dicts."""
        return [asdict(snippet) for snippet in self.snippets]


# ---------------------------------------------------------------------------
# Video details
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VideoThumbnail:
    url: str
    width: int
    height: int


@dataclass(frozen=True)
class VideoDetails:
    """
    The `videoDetails` block of the player response.

    Every field has a default so a single renamed field upstream never
    prevents the record from being built.
    """

    video_id: str
    title: str = "Unknown Title"
    length_seconds: int = 0
    keywords: list[str] | None = None
    channel_id: str = ""
    short_description: str = ""
    view_count: str = "0"
    author: str = "Unknown"
    thumbnails: list[VideoThumbnail] = field(default_factory=list)
    is_live_content: bool = False


# ---------------------------------------------------------------------------
# Microformat
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MicroformatEmbed:
    height: int | None = None
    iframe_url: str | None = None
    width: int | None = None


@dataclass(frozen=True)
class MicroformatThumbnail:
    thumbnails: list[VideoThumbnail] | None = None


@dataclass(frozen=True)
class MicroformatData:
    """
    The `microformat.playerMicroformatRenderer` block.

    Nothing is defaulted beyond None: consumers show "unknown" themselves,
    so a missing value must stay distinguishable from a real one.
    """

    available_countries: list[str] | None = None
    category: str | None = None
    description: str | None = None
    embed: MicroformatEmbed | None = None
    external_channel_id: str | None = None
    external_video_id: str | None = None
    has_ypc_metadata: bool | None = None
    is_family_safe: bool | None = None
    is_shorts_eligible: bool | None = None
    is_unlisted: bool | None = None
    length_seconds: str | None = None
    like_count: str | None = None
    owner_channel_name: str | None = None
    owner_profile_url: str | None = None
    publish_date: str | None = None
    thumbnail: MicroformatThumbnail | None = None
    title: str | None = None
    upload_date: str | None = None
    view_count: str | None = None


# ---------------------------------------------------------------------------
# Streaming data
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Range:
    """A byte range; YouTube sends both ends as decimal strings."""

    start: str
    end: str


@dataclass(frozen=True)
class ColorInfo:
    primaries: str | None = None
    transfer_characteristics: str | None = None
    matrix_coefficients: str | None = None


@dataclass(frozen=True)
class StreamingFormat:
    """
    One entry of `formats` or `adaptiveFormats`.

    The first six fields are required; an entry missing any of them is
    dropped by the extractor rather than half-built.
    """

    itag: int
    mime_type: str
    bitrate: int
    quality: str
    projection_type: str
    approx_duration_ms: str
    url: str | None = None
    width: int | None = None
    height: int | None = None
    init_range: Range | None = None
    index_range: Range | None = None
    last_modified: str | None = None
    content_length: str | None = None
    fps: int | None = None
    quality_label: str | None = None
    average_bitrate: int | None = None
    audio_quality: str | None = None
    audio_sample_rate: str | None = None
    audio_channels: int | None = None
    quality_ordinal: str | None = None
    high_replication: bool | None = None
    color_info: ColorInfo | None = None
    loudness_db: float | None = None
    is_drc: bool | None = None
    xtags: str | None = None


@dataclass(frozen=True)
class StreamingData:
    expires_in_seconds: str = "0"
    formats: list[StreamingFormat] = field(default_factory=list)
    adaptive_formats: list[StreamingFormat] = field(default_factory=list)
    server_abr_streaming_url: str | None = None


# ---------------------------------------------------------------------------
# Everything from one page fetch
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VideoInfos:
    """All metadata and the transcript list, extracted from a single page fetch."""

    video_details: VideoDetails
    microformat: MicroformatData
    streaming_data: StreamingData
    transcript_list: TranscriptList
