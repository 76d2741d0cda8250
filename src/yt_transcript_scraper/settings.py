"""
settings.py — Fixed constants shared by the fetch and parse layers.

Nothing here is read from the environment.  Runtime options (cookies,
proxies, a custom HTTP session) are passed to YouTubeTranscriptApi instead.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# ---------------------------------------------------------------------------
# Request headers
# ---------------------------------------------------------------------------

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/137.0.0.0 Safari/537.36"
)

# YouTube localises playability reasons; the classifier matches English text.
ACCEPT_LANGUAGE = "en-US"

# ---------------------------------------------------------------------------
# Page markers
# ---------------------------------------------------------------------------

# JavaScript variable holding the player response on the watch page.
PLAYER_RESPONSE_VAR = "ytInitialPlayerResponse"

# Present in the HTML when YouTube serves the EU cookie-consent interstitial.
CONSENT_FORM_MARKER = 'action="https://consent.youtube.com/s"'

# Present in the HTML when YouTube answers with a captcha instead of the page.
RECAPTCHA_MARKER = 'class="g-recaptcha"'
