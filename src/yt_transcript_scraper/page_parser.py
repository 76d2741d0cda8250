"""
page_parser.py — Pull a JavaScript object literal out of a YouTube watch page.

The watch page embeds the player response as

    <script>var ytInitialPlayerResponse = {...};var meta = ...</script>

The object literal is large, nested, and full of strings that contain braces
and escaped quotes, so a greedy regex either truncates it or runs past its
end.  extract_js_var() therefore scans character by character, tracking
brace depth only outside of string literals, and only falls back to a short
list of regexes when that scan cannot even begin (e.g. truncated HTML).
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from yt_transcript_scraper.errors import YouTubeDataUnparsable

logger = logging.getLogger(__name__)


# Fallback patterns, tried in order; "{name}" is replaced by the escaped
# variable name.  Each captures the assigned value in group 1.
_FALLBACK_PATTERNS = (
    r"{name}\s*=\s*(.*?);</script>",
    r"{name}=(.*?);</script>",
    r"{name} = (.*?);",
    r"{name}=(.*?);",
)


_NOT_FOUND = object()


class _ScanError(Exception):
    """Internal: the brace-matching scan could not produce valid JSON."""


def extract_js_var(html: str, var_name: str, video_id: str = "") -> Any:
    """
    Return the parsed JSON value assigned to `var_name` in `html`.

    Args:
        html:     The full watch-page HTML.
        var_name: JavaScript variable name, e.g. "ytInitialPlayerResponse".
        video_id: Used only to build the error on failure.

    Returns:
        The decoded JSON value (normally a dict).

    Raises:
        YouTubeDataUnparsable: If neither the scan nor any fallback pattern
            yields valid JSON.
    """
    try:
        return _scan_object_literal(html, var_name)
    except _ScanError as exc:
        logger.debug("Brace scan for %s failed (%s); trying regex fallback", var_name, exc)

    value = _match_fallback_patterns(html, var_name)
    if value is _NOT_FOUND:
        raise YouTubeDataUnparsable(
            video_id,
            f"Could not find or parse JavaScript variable '{var_name}'",
        )
    return value


def _scan_object_literal(html: str, var_name: str) -> Any:
    # Prefer the declaration; fall back to the first bare mention.
    marker = f"var {var_name}"
    position = html.find(marker)
    if position == -1:
        marker = var_name
        position = html.find(marker)
    if position == -1:
        raise _ScanError(f"variable '{var_name}' not found")

    start = html.find("{", position + len(marker))
    if start == -1:
        raise _ScanError(f"no opening brace after '{var_name}'")

    depth = 0
    in_quotes = False
    escaped = False
    end = None
    for index in range(start, len(html)):
        char = html[index]
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == '"':
            in_quotes = not in_quotes
        elif not in_quotes:
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    end = index + 1
                    break
    if end is None:
        raise _ScanError("unexpected end of HTML inside the object literal")

    try:
        return json.loads(html[start:end])
    except ValueError as exc:
        raise _ScanError(f"object literal is not valid JSON: {exc}") from exc


def _match_fallback_patterns(html: str, var_name: str) -> Any:
    escaped_name = re.escape(var_name)
    for template in _FALLBACK_PATTERNS:
        pattern = re.compile(template.replace("{name}", escaped_name), re.DOTALL)
        match = pattern.search(html)
        if match is None:
            continue
        try:
            return json.loads(match.group(1))
        except ValueError:
            continue
    return _NOT_FOUND
