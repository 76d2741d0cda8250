"""
transcripts.py — The caption tracks of a video, and fetching one of them.

    TranscriptList   Every track YouTube lists for a video, split into
                     manually created and auto-generated, plus the languages
                     translatable tracks can be machine-translated into.
    Transcript       One fetchable track.  Fetching returns a new
                     FetchedTranscript; translating returns a new Transcript.

Lookup is by language code in the caller's priority order, and manually
created tracks win over generated ones for the same code:

    transcript = transcript_list.find_transcript(["de", "en"])
    fetched = transcript.fetch()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import chain
from typing import Any, Callable, Iterable, Iterator, Optional

import requests

from yt_transcript_scraper.errors import (
    NoTranscriptFound,
    NotTranslatable,
    TimedTextParseError,
    TranscriptsDisabled,
    TranslationLanguageNotAvailable,
    YouTubeDataUnparsable,
)
from yt_transcript_scraper.jsontree import as_bool, as_dict, as_list, as_string, get_field, get_text
from yt_transcript_scraper.models import FetchedTranscript, TranslationLanguage
from yt_transcript_scraper.proxies import ProxyConfig
from yt_transcript_scraper.timedtext import TranscriptParser
from yt_transcript_scraper.transport import http_get

logger = logging.getLogger(__name__)

# Receives (artifact_name, content) for optional diagnostic capture.
DebugSink = Callable[[str, str], None]

# `kind` value YouTube uses for automatic speech recognition tracks.
_ASR_KIND = "asr"

# srv3 is a richer dialect the timed-text parser does not read.
_SRV3_PARAM = "&fmt=srv3"


# ---------------------------------------------------------------------------
# Captions subtree
# ---------------------------------------------------------------------------

def extract_captions_json(player_response: Any, video_id: str) -> dict:
    """
    Return `captions.playerCaptionsTracklistRenderer` from the player response.

    Raises:
        TranscriptsDisabled: If the renderer is absent.  This means the
            uploader turned captions off, not that the page format changed.
    """
    renderer = as_dict(get_field(player_response, "captions", "playerCaptionsTracklistRenderer"))
    if renderer is None:
        raise TranscriptsDisabled(video_id)
    return renderer


# ---------------------------------------------------------------------------
# Transcript
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Transcript:
    """
    A handle on one caption track; nothing is downloaded until fetch().

    Attributes:
        video_id:              The video the track belongs to.
        url:                   Timed-text URL of the track.
        language:              Display name, e.g. "English (auto-generated)".
        language_code:         e.g. "en".
        is_generated:          True for ASR tracks and for translations.
        translation_languages: Languages this track can be translated into;
                               empty when it is not translatable.
        http_client:           Session used by fetch(); not part of equality.
        proxy_config:          The proxy behind http_client, for block errors.
    """

    video_id: str
    url: str
    language: str
    language_code: str
    is_generated: bool
    translation_languages: tuple[TranslationLanguage, ...] = ()
    http_client: Optional[requests.Session] = field(default=None, repr=False, compare=False)
    proxy_config: Optional[ProxyConfig] = field(default=None, repr=False, compare=False)

    @property
    def is_translatable(self) -> bool:
        return len(self.translation_languages) > 0

    def translate(self, language_code: str) -> Transcript:
        """
        Return a Transcript for the machine translation of this track.

        The result is always flagged as generated and cannot itself be
        translated further.

        Raises:
            NotTranslatable:                  This track has no translation languages.
            TranslationLanguageNotAvailable:  `language_code` is not one of them.
        """
        if not self.is_translatable:
            raise NotTranslatable(self.video_id)
        for translation_language in self.translation_languages:
            if translation_language.language_code == language_code:
                return Transcript(
                    video_id=self.video_id,
                    url=f"{self.url}&tlang={language_code}",
                    language=translation_language.language,
                    language_code=language_code,
                    is_generated=True,
                    translation_languages=(),
                    http_client=self.http_client,
                    proxy_config=self.proxy_config,
                )
        raise TranslationLanguageNotAvailable(self.video_id)

    def fetch(
        self,
        preserve_formatting: bool = False,
        debug_sink: DebugSink | None = None,
    ) -> FetchedTranscript:
        """
        Download and parse this track.

        Args:
            preserve_formatting: Keep basic formatting tags such as <b> and <i>.
            debug_sink:          Optional callable receiving the raw XML.

        Raises:
            YouTubeRequestFailed, RequestBlocked: On transport failure.
            YouTubeDataUnparsable: If the track is not valid timed-text XML.
        """
        if self.http_client is None:
            with requests.Session() as session:
                response = http_get(session, self.url, self.video_id, self.proxy_config)
        else:
            response = http_get(
                self.http_client, self.url, self.video_id, self.proxy_config
            )

        raw_xml = response.text
        if debug_sink is not None:
            debug_sink("transcript_xml", raw_xml)

        try:
            snippets = TranscriptParser(preserve_formatting=preserve_formatting).parse(raw_xml)
        except TimedTextParseError as exc:
            raise YouTubeDataUnparsable(self.video_id, f"invalid timed-text XML: {exc}") from exc

        return FetchedTranscript(
            video_id=self.video_id,
            language=self.language,
            language_code=self.language_code,
            is_generated=self.is_generated,
            snippets=snippets,
        )

    def __str__(self) -> str:
        translatable = "[TRANSLATABLE]" if self.is_translatable else ""
        return f'{self.language_code} ("{self.language}"){translatable}'


# ---------------------------------------------------------------------------
# TranscriptList
# ---------------------------------------------------------------------------

def _parse_translation_languages(captions_json: dict) -> tuple[TranslationLanguage, ...]:
    languages = []
    for entry in as_list(captions_json.get("translationLanguages")) or []:
        name = get_text(get_field(entry, "languageName"))
        code = as_string(get_field(entry, "languageCode"))
        if name is None or code is None:
            continue
        languages.append(TranslationLanguage(language=name, language_code=code))
    return tuple(languages)


class TranscriptList:
    """
    All transcripts available for one video.

    Iterating yields the manually created transcripts followed by the
    generated ones.  A language code appears in at most one of the two maps.
    """

    def __init__(
        self,
        video_id: str,
        manually_created_transcripts: dict[str, Transcript],
        generated_transcripts: dict[str, Transcript],
        translation_languages: Iterable[TranslationLanguage],
    ) -> None:
        self.video_id = video_id
        self.manually_created_transcripts = manually_created_transcripts
        self.generated_transcripts = generated_transcripts
        self.translation_languages = tuple(translation_languages)

    @classmethod
    def build(
        cls,
        video_id: str,
        captions_json: dict,
        http_client: requests.Session | None = None,
        proxy_config: ProxyConfig | None = None,
    ) -> TranscriptList:
        """
        Build the list from a `playerCaptionsTracklistRenderer` object.

        Tracks missing a language code, base URL or display name are skipped.
        """
        translation_languages = _parse_translation_languages(captions_json)
        manually_created: dict[str, Transcript] = {}
        generated: dict[str, Transcript] = {}

        for caption in as_list(captions_json.get("captionTracks")) or []:
            language_code = as_string(get_field(caption, "languageCode"))
            base_url = as_string(get_field(caption, "baseUrl"))
            name = get_text(get_field(caption, "name"))
            if language_code is None or base_url is None or name is None:
                logger.debug("Skipping incomplete caption track for video %s", video_id)
                continue

            is_generated = as_string(get_field(caption, "kind")) == _ASR_KIND
            is_translatable = bool(as_bool(get_field(caption, "isTranslatable")))
            transcript = Transcript(
                video_id=video_id,
                url=base_url.replace(_SRV3_PARAM, ""),
                language=name,
                language_code=language_code,
                is_generated=is_generated,
                translation_languages=translation_languages if is_translatable else (),
                http_client=http_client,
                proxy_config=proxy_config,
            )

            if is_generated:
                if language_code not in manually_created:
                    generated[language_code] = transcript
            else:
                generated.pop(language_code, None)
                manually_created[language_code] = transcript

        return cls(video_id, manually_created, generated, translation_languages)

    def __iter__(self) -> Iterator[Transcript]:
        return chain(self.manually_created_transcripts.values(), self.generated_transcripts.values())

    def __len__(self) -> int:
        return len(self.manually_created_transcripts) + len(self.generated_transcripts)

    def find_transcript(self, language_codes: Iterable[str]) -> Transcript:
        """
        Return the first transcript matching `language_codes`, in order.

        For each code, a manually created transcript is preferred over a
        generated one.

        Raises:
            NoTranscriptFound: No code matched; carries the codes and this list.
        """
        return self._find_transcript(
            language_codes,
            (self.manually_created_transcripts, self.generated_transcripts),
        )

    def find_manually_created_transcript(self, language_codes: Iterable[str]) -> Transcript:
        return self._find_transcript(language_codes, (self.manually_created_transcripts,))

    def find_generated_transcript(self, language_codes: Iterable[str]) -> Transcript:
        return self._find_transcript(language_codes, (self.generated_transcripts,))

    def _find_transcript(
        self,
        language_codes: Iterable[str],
        transcript_maps: tuple[dict[str, Transcript], ...],
    ) -> Transcript:
        language_codes = list(language_codes)
        for language_code in language_codes:
            for transcript_map in transcript_maps:
                if language_code in transcript_map:
                    return transcript_map[language_code]
        raise NoTranscriptFound(self.video_id, language_codes, self)

    def __str__(self) -> str:
        def _describe(items: Iterable[Any]) -> str:
            lines = [f" - {item}" for item in items]
            return "\n".join(lines) if lines else "None"

        translation_languages = (
            f'{language.language_code} ("{language.language}")'
            for language in self.translation_languages
        )
        return (
            f"For this video ({self.video_id}) transcripts are available in the "
            "following languages:\n\n"
            f"(MANUALLY CREATED)\n{_describe(self.manually_created_transcripts.values())}\n\n"
            f"(GENERATED)\n{_describe(self.generated_transcripts.values())}\n\n"
            f"(TRANSLATION LANGUAGES)\n{_describe(translation_languages)}"
        )
