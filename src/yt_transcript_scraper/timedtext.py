"""
timedtext.py — Parse YouTube's timed-text XML into transcript snippets.

A track URL returns a document like

    <transcript>
      <text start="12.645" dur="1.37">So in <b>college</b>,</text>
      ...
    </transcript>

Each top-level <text> element is one cue.  Inline markup inside a cue is not
structure as far as we're concerned, just formatting, so the parser re-emits
it as text into a per-cue buffer and then post-processes the buffer in one of
two modes:

    strip (default)      Plain text.  Links keep their target as "text (href)".
    preserve_formatting  Keep a fixed allow-list of formatting tags, drop the rest.

Parsing is a single streaming pass driven by defusedxml's parser, so hostile
documents (entity expansion, external DTDs) are rejected rather than expanded.
"""

from __future__ import annotations

import html
import re
from typing import Callable

from bs4 import BeautifulSoup
from defusedxml import DefusedXmlException
from defusedxml.ElementTree import DefusedXMLParser, ParseError

from yt_transcript_scraper.errors import TimedTextParseError
from yt_transcript_scraper.models import FetchedTranscriptSnippet

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Tags kept verbatim in preserve_formatting mode.
FORMATTING_TAGS = frozenset({
    "strong",  # important
    "em",      # emphasized
    "b",       # bold
    "i",       # italic
    "mark",    # marked
    "small",   # smaller
    "del",     # deleted
    "ins",     # inserted
    "sub",     # subscript
    "sup",     # superscript
    "span",
    "a",
})

_CUE_TAG = "text"

# Anything shaped like an HTML tag: "<b>", "</b>", "<span class="x">", "<br/>".
_HTML_TAG = re.compile(r"<[^<>]*>")
_TAG_NAME = re.compile(r"^</?\s*([A-Za-z][A-Za-z0-9-]*)")

_WHITESPACE_RUN = re.compile(r"\s{2,}")


# ---------------------------------------------------------------------------
# Post-processing modes
# ---------------------------------------------------------------------------

def strip_formatting(text: str) -> str:
    """
    Reduce a cue's inner markup to plain text.

    Hyperlinks become "link text (href)" so their target isn't lost.  HTML
    entities are decoded, runs of two or more whitespace characters collapse
    to one space, and the result is trimmed.

    Decoding can expose markup that was escaped in the source (for example
    "&lt;i&gt;"), so the reduction repeats until the text stops changing.
    Applying this function to its own output returns the output unchanged.
    """
    plain = _strip_once(text)
    while True:
        reduced = _strip_once(plain)
        if reduced == plain:
            return plain
        plain = reduced


def _strip_once(text: str) -> str:
    soup = BeautifulSoup(text, "html.parser")
    for link in soup.find_all("a"):
        label = link.get_text()
        href = link.get("href")
        link.replace_with(f"{label} ({href})" if href else label)
    plain = html.unescape(soup.get_text())
    return _WHITESPACE_RUN.sub(" ", plain).strip()


def keep_formatting_tags(text: str) -> str:
    """
    Delete every tag-shaped substring whose name is not in FORMATTING_TAGS.

    Allowed tags are kept exactly as written, attributes included.  Text
    between tags is left alone.
    """

    def _filter(match: re.Match) -> str:
        name = _TAG_NAME.match(match.group(0))
        if name is not None and name.group(1).lower() in FORMATTING_TAGS:
            return match.group(0)
        return ""

    return _HTML_TAG.sub(_filter, text)


# ---------------------------------------------------------------------------
# Streaming parse
# ---------------------------------------------------------------------------

def _parse_seconds(value: str | None) -> float:
    """Timing attributes default to 0.0 rather than failing the document."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except ValueError:
        return 0.0


def _render_start_tag(tag: str, attrib: dict[str, str]) -> str:
    attributes = "".join(
        f' {key}="{value.replace(chr(34), "&quot;")}"' for key, value in attrib.items()
    )
    return f"<{tag}{attributes}>"


class _CueCollector:
    """
    Parser target turning start/data/end events into snippets.

    Depth 1 is the document root, depth 2 its children.  Only <text> children
    of the root are cues; everything nested inside a cue is re-emitted into
    the cue buffer.  Character data is held back until the next tag boundary
    because expat delivers it in several chunks around entity references,
    and the unescape step needs to see whole runs.
    """

    def __init__(self, finish_text: Callable[[str], str]) -> None:
        self._finish_text = finish_text
        self._snippets: list[FetchedTranscriptSnippet] = []
        self._depth = 0
        self._in_cue = False
        self._start = 0.0
        self._duration = 0.0
        self._buffer: list[str] = []
        self._pending_text: list[str] = []

    def start(self, tag: str, attrib: dict[str, str]) -> None:
        self._depth += 1
        if self._in_cue:
            self._flush_text()
            self._buffer.append(_render_start_tag(tag, attrib))
        elif self._depth == 2 and tag == _CUE_TAG:
            self._in_cue = True
            self._start = _parse_seconds(attrib.get("start"))
            self._duration = _parse_seconds(attrib.get("dur"))

    def data(self, data: str) -> None:
        if self._in_cue:
            self._pending_text.append(data)

    def end(self, tag: str) -> None:
        if self._in_cue:
            self._flush_text()
            if self._depth == 2:
                self._close_cue()
            else:
                self._buffer.append(f"</{tag}>")
        self._depth -= 1

    def close(self) -> list[FetchedTranscriptSnippet]:
        return self._snippets

    def _flush_text(self) -> None:
        if self._pending_text:
            self._buffer.append(html.unescape("".join(self._pending_text)))
            self._pending_text = []

    def _close_cue(self) -> None:
        self._snippets.append(
            FetchedTranscriptSnippet(
                text=self._finish_text("".join(self._buffer)),
                start=self._start,
                duration=self._duration,
            )
        )
        self._in_cue = False
        self._start = 0.0
        self._duration = 0.0
        self._buffer = []


def _byte_offset(raw: bytes, line: int, column: int) -> int:
    """Convert expat's (1-based line, 0-based byte column) into a byte offset."""
    preceding = raw.split(b"\n")[: max(line - 1, 0)]
    return sum(len(chunk) + 1 for chunk in preceding) + column


class TranscriptParser:
    """
    Turns a timed-text XML document into FetchedTranscriptSnippets.

    Args:
        preserve_formatting: Keep FORMATTING_TAGS in the snippet text instead
            of reducing it to plain text.
    """

    def __init__(self, preserve_formatting: bool = False) -> None:
        self.preserve_formatting = preserve_formatting
        self._finish_text = keep_formatting_tags if preserve_formatting else strip_formatting

    def parse(self, raw_data: str | bytes) -> list[FetchedTranscriptSnippet]:
        """
        Parse a timed-text document.

        Args:
            raw_data: The XML document, as text or as UTF-8 (or self-declared
                encoding) bytes.

        Returns:
            One snippet per cue, in document order.

        Raises:
            TimedTextParseError: The document is not well-formed XML, has an
                invalid encoding, or uses forbidden DTD/entity constructs.
        """
        raw_bytes = raw_data.encode("utf-8") if isinstance(raw_data, str) else raw_data
        parser = DefusedXMLParser(target=_CueCollector(self._finish_text))
        try:
            parser.feed(raw_bytes)
            return parser.close()
        except ParseError as exc:
            line, column = exc.position
            offset = _byte_offset(raw_bytes, line, column)
            raise TimedTextParseError(str(exc), line, column, offset) from exc
        except DefusedXmlException as exc:
            raise TimedTextParseError(str(exc), None, None, None) from exc
