"""Resolve YouTube channel URLs to channel IDs and RSS feed URLs.

/channel/<ID> URLs carry the ID and resolve offline. @handle, /c/, /user/
and youtu.be URLs need one fetch of the channel page (redirects followed),
and the ID is scraped from the final URL or the page HTML.
"""
import logging
import re
from enum import Enum
from typing import Callable, NamedTuple, Optional
from urllib.parse import quote, urljoin, urlsplit

import requests

from ytrss.config import CHANNEL_HOSTS, CHANNEL_URL, FETCH_TIMEOUT, HEADERS, RSS_URL, SHORT_HOSTS, SHORT_URL
from ytrss.errors import FetchFailed, IDNotFound, InvalidURL

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*://")
_CHANNEL_ID_RE = re.compile(r"[A-Za-z0-9_-]+")
_NAME_RE = re.compile(r"[^/\s]+")

_CHANNEL_PATH_RE = re.compile(r"/channel/([A-Za-z0-9_-]+)")
_LINK_TAG_RE = re.compile(r"<link\b[^>]*>", re.IGNORECASE)
_FEED_PARAM_RE = re.compile(r"channel_id=([A-Za-z0-9_-]+)")
_CANONICAL_RE = re.compile(r"""rel=["']canonical["']""", re.IGNORECASE)

# Embedded page JSON, most reliable first
_JSON_ID_PATTERNS = [
    re.compile(r'"externalId":"(UC[a-zA-Z0-9_-]{22})"'),
    re.compile(r'"channelId":"(UC[a-zA-Z0-9_-]{22})"'),
    re.compile(r'"browseId":"(UC[a-zA-Z0-9_-]{22})"'),
]


class UrlKind(Enum):
    DIRECT = "channel"
    HANDLE = "handle"
    CUSTOM = "custom"
    USER = "user"
    SHORT_LINK = "short"


class ChannelUrl(NamedTuple):
    kind: UrlKind
    value: str
    # None for DIRECT; the page to fetch otherwise
    fetch_url: Optional[str] = None


def _segment(segments, index: int) -> Optional[str]:
    return segments[index] if len(segments) > index else None


def _is_youtube_host(host: Optional[str]) -> bool:
    """youtube.com and its subdomains (consent., m., ...) or a short host."""
    host = (host or "").lower()
    return host in SHORT_HOSTS or host == "youtube.com" or host.endswith(".youtube.com")


def classify_url(url: str) -> ChannelUrl:
    """Match `url` against the recognised channel URL shapes.

    Scheme defaults to https when missing. Query, fragment, trailing slashes
    and path segments after the identifying one (e.g. /videos) are ignored.
    Raises InvalidURL for anything else.
    """
    raw = (url or "").strip()
    if not raw:
        raise InvalidURL(url, "empty URL")
    if raw.startswith("//"):
        raw = "https:" + raw
    elif not _SCHEME_RE.match(raw):
        raw = "https://" + raw

    try:
        parts = urlsplit(raw)
    except ValueError as e:
        raise InvalidURL(url, f"unparseable URL: {e}") from e

    if parts.scheme.lower() not in ("http", "https"):
        raise InvalidURL(url, f"unsupported scheme {parts.scheme!r}")

    host = (parts.hostname or "").lower()
    segments = [s for s in parts.path.split("/") if s]

    if host in SHORT_HOSTS:
        token = _segment(segments, 0)
        if not token or not _NAME_RE.fullmatch(token):
            raise InvalidURL(url, "short link without a target")
        return ChannelUrl(UrlKind.SHORT_LINK, token, SHORT_URL.format(token=token))

    if host not in CHANNEL_HOSTS:
        raise InvalidURL(url, f"not a YouTube host: {host or raw!r}")

    first = _segment(segments, 0)
    if first is None:
        raise InvalidURL(url, "no channel in path")

    if first == "channel":
        channel_id = _segment(segments, 1)
        if not channel_id or not _CHANNEL_ID_RE.fullmatch(channel_id):
            raise InvalidURL(url, "malformed /channel/ URL")
        return ChannelUrl(UrlKind.DIRECT, channel_id)

    if first.startswith("@"):
        handle = first[1:]
        if not _NAME_RE.fullmatch(handle):
            raise InvalidURL(url, "empty handle")
        return ChannelUrl(UrlKind.HANDLE, handle, CHANNEL_URL.format(path=first))

    if first in ("c", "user"):
        name = _segment(segments, 1)
        if not name or not _NAME_RE.fullmatch(name):
            raise InvalidURL(url, f"malformed /{first}/ URL")
        kind = UrlKind.CUSTOM if first == "c" else UrlKind.USER
        return ChannelUrl(kind, name, CHANNEL_URL.format(path=f"{first}/{name}"))

    raise InvalidURL(url)


def extract_channel_id(html: str, final_url: Optional[str] = None) -> Optional[str]:
    """Pull a channel ID out of a fetched channel page, or None."""
    if final_url:
        match = _CHANNEL_PATH_RE.search(urlsplit(final_url).path)
        if match:
            return match.group(1)

    html = html or ""
    tags = _LINK_TAG_RE.findall(html)

    # <link rel="alternate" type="application/rss+xml" href="...?channel_id=...">
    for tag in tags:
        if "application/rss+xml" in tag.lower():
            match = _FEED_PARAM_RE.search(tag)
            if match:
                return match.group(1)

    # <link rel="canonical" href="https://www.youtube.com/channel/...">
    for tag in tags:
        if _CANONICAL_RE.search(tag):
            match = _CHANNEL_PATH_RE.search(tag)
            if match:
                return match.group(1)

    for pattern in _JSON_ID_PATTERNS:
        match = pattern.search(html)
        if match:
            return match.group(1)

    return None


def stay_on_youtube(response, *args, **kwargs):
    """Response hook: refuse to follow a redirect that leaves YouTube.

    Runs on every hop before requests follows the next Location.
    """
    if response.is_redirect:
        target = urljoin(response.url, response.headers.get("location", ""))
        if not _is_youtube_host(urlsplit(target).hostname):
            raise requests.RequestException(f"redirected off YouTube to {target}")
    return response


def fetch_channel_id(url: str, timeout: float = FETCH_TIMEOUT) -> str:
    """Fetch a channel page and scrape its channel ID.

    Issues exactly one GET (redirects followed). Timeouts, connection
    errors, non-2xx statuses and redirects that leave YouTube raise
    FetchFailed; a page without an ID raises IDNotFound.
    """
    try:
        r = requests.get(
            url,
            headers=HEADERS,
            timeout=timeout,
            allow_redirects=True,
            hooks={"response": stay_on_youtube},
        )
        r.raise_for_status()
    except requests.RequestException as e:
        logger.debug("Failed to fetch %s: %s", url, e)
        raise FetchFailed(url, e) from e

    channel_id = extract_channel_id(r.text, r.url)
    if not channel_id:
        raise IDNotFound(url)

    logger.info("Resolved %s -> %s", url, channel_id)
    return channel_id


def build_feed_url(channel_id: str) -> str:
    return RSS_URL.format(channel_id=quote(channel_id, safe=""))


def resolve_channel_id(url: str, fetch: Callable[[str], str] = fetch_channel_id) -> str:
    """Channel ID for `url`, fetching the page only when the URL lacks one."""
    channel = classify_url(url)
    if channel.kind is UrlKind.DIRECT:
        return channel.value
    return fetch(channel.fetch_url)


def resolve_feed_url(url: str, fetch: Callable[[str], str] = fetch_channel_id) -> str:
    """RSS feed URL for a channel URL. Raises a ResolutionError subclass on failure."""
    return build_feed_url(resolve_channel_id(url, fetch))
