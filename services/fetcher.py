"""Page fetching and lightweight domain probing over HTTP."""

from __future__ import annotations

import logging
import re

import httpx
from bs4 import BeautifulSoup

from config import settings
from schemas.analysis import ProbeResult

logger = logging.getLogger("truthscan.fetcher")

_USER_AGENT = "Mozilla/5.0 (compatible; TruthScan/0.1; +https://github.com/truthscan)"
_WHITESPACE = re.compile(r"\s+")


class FetchError(Exception):
    """Raised when page content cannot be retrieved."""


def extract_body_text(html: str) -> str:
    """Return the visible body text of *html* with whitespace collapsed."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    body = soup.body or soup
    return _WHITESPACE.sub(" ", body.get_text(" ")).strip()


async def fetch_url_content(url: str) -> str:
    """GET *url* and return its plain body text.

    Raises
    ------
    FetchError
        On transport failures and non-2xx responses.  Never retried.
    """
    try:
        async with httpx.AsyncClient(
            timeout=settings.fetch_timeout,
            follow_redirects=True,
            headers={"User-Agent": _USER_AGENT},
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(f"Failed to fetch URL content: {exc}") from exc

    return extract_body_text(response.text)


async def probe_domain(url: str) -> ProbeResult:
    """Issue a HEAD request against *url*; never raises.

    Any response at all (whatever its status) counts as success.  Timeouts,
    TLS failures and redirect loops yield ``success=False`` with no headers.
    """
    try:
        async with httpx.AsyncClient(
            timeout=settings.probe_timeout,
            follow_redirects=True,
            max_redirects=settings.probe_max_redirects,
            headers={"User-Agent": _USER_AGENT},
        ) as client:
            response = await client.head(url)
    except Exception as exc:
        logger.warning("Failed to check technical signals for %s: %s", url, exc)
        return ProbeResult(success=False)

    headers = {k.lower(): v for k, v in response.headers.items()}
    return ProbeResult(success=True, headers=headers)
