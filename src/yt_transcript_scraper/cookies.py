"""
cookies.py — Load a Netscape-format cookie file into a requests cookie jar.

Authenticated cookies let the fetch layer read age-restricted videos.  The
file is the tab-separated format browser extensions export ("cookies.txt"):

    domain  include_subdomains  path  secure  expiry  name  value

Lines starting with "#" and blank lines are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from requests.cookies import RequestsCookieJar

from yt_transcript_scraper.errors import CookieInvalid, CookiePathInvalid

logger = logging.getLogger(__name__)

_FIELD_COUNT = 7

# curl and browser exports mark HttpOnly cookies by prefixing the domain.
_HTTP_ONLY_PREFIX = "#HttpOnly_"


def load_cookie_jar(cookie_path: str | Path) -> RequestsCookieJar:
    """
    Read `cookie_path` and return the cookies it contains.

    Args:
        cookie_path: Path to a Netscape-format cookie file.

    Returns:
        A RequestsCookieJar holding every well-formed line.

    Raises:
        CookiePathInvalid: The file does not exist or cannot be read.
        CookieInvalid:     The file holds no well-formed cookie line.
    """
    try:
        content = Path(cookie_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CookiePathInvalid(str(cookie_path)) from exc

    jar = RequestsCookieJar()
    for line in content.splitlines():
        if line.startswith(_HTTP_ONLY_PREFIX):
            line = line[len(_HTTP_ONLY_PREFIX):]
        elif not line.strip() or line.lstrip().startswith("#"):
            continue
        fields = line.strip(" ").split("\t")
        if len(fields) < _FIELD_COUNT:
            logger.debug("Skipping malformed cookie line in %s", cookie_path)
            continue
        domain, _include_subdomains, path, secure, _expiry, name, value = fields[:_FIELD_COUNT]
        jar.set(name, value, domain=domain, path=path, secure=secure.upper() == "TRUE")

    if len(jar) == 0:
        raise CookieInvalid(str(cookie_path))
    return jar
