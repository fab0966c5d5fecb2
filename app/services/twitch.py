import logging
import re

import httpx

from app.config import settings

logger = logging.getLogger("streamsite.twitch")

# label and count must sit on the same line of markup
_VIEWERS_RE = re.compile(r"Average viewers.*?>([\d,]+)")
_FOLLOWERS_RE = re.compile(r"Followers.*?>([\d,]+)")
_CHANNEL_RE = re.compile(r"^[A-Za-z0-9_]{1,25}$")


class TrackerError(Exception):
    """The stats page could not be fetched."""


def is_valid_channel(channel: str | None) -> bool:
    return bool(channel and _CHANNEL_RE.match(channel))


def _parse_count(match: re.Match | None) -> int:
    if not match:
        return 0
    try:
        return int(match.group(1).replace(",", ""))
    except ValueError:
        return 0


def parse_tracker_html(html: str) -> dict:
    # the tracker page exposes no subscriber count
    return {
        "is_live": 'class="live"' in (html or ""),
        "viewers": _parse_count(_VIEWERS_RE.search(html or "")),
        "followers": _parse_count(_FOLLOWERS_RE.search(html or "")),
        "subscribers": 0,
    }


async def fetch_channel_stats(channel: str, client: httpx.AsyncClient | None = None) -> dict:
    url = f"{settings.TRACKER_BASE_URL.rstrip('/')}/{channel.lower()}"
    timeout = httpx.Timeout(8.0, connect=5.0)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                resp = await own_client.get(url)
        else:
            resp = await client.get(url)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        logger.error("Error fetching tracker data for %s: %s", channel, exc)
        raise TrackerError(str(exc)) from exc
    return parse_tracker_html(resp.text)
