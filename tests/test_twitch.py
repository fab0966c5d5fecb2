"""
tests.test_twitch

Test the tracker page scraper and its HTTP client.
"""

import unittest

import httpx

from app.config import settings
from app.services.twitch import TrackerError, fetch_channel_stats, is_valid_channel, parse_tracker_html

LIVE_PAGE = """
<div class="live">LIVE</div>
<div class="g-x-s-label">Average viewers</div><div class="g-x-s-value"><span>1,234</span></div>
<div class="g-x-s-label">Followers</div><div class="g-x-s-value"><span>56,789</span></div>
"""

SPLIT_PAGE = """
<div class="g-x-s-label">Average viewers</div>
<div class="g-x-s-value"><span>1,234</span></div>
"""


class TestParseTrackerHtml(unittest.TestCase):
    """Test scraping numbers out of a tracker page."""

    def test_live_page(self) -> None:
        """Counts lose their thousands separators."""
        self.assertEqual(
            parse_tracker_html(LIVE_PAGE),
            {"is_live": True, "viewers": 1234, "followers": 56789, "subscribers": 0},
        )

    def test_offline_page(self) -> None:
        """Missing markers fall back to zero and offline."""
        self.assertEqual(
            parse_tracker_html("<html><body>nothing here</body></html>"),
            {"is_live": False, "viewers": 0, "followers": 0, "subscribers": 0},
        )

    def test_count_on_next_line(self) -> None:
        """A count separated from its label by a line break is not picked up."""
        self.assertEqual(parse_tracker_html(SPLIT_PAGE)["viewers"], 0)

    def test_empty_page(self) -> None:
        self.assertFalse(parse_tracker_html("")["is_live"])


class TestChannelNames(unittest.TestCase):

    def test_is_valid_channel(self) -> None:
        """Only Twitch-style login names pass."""
        self.assertTrue(is_valid_channel("rennsz"))
        self.assertTrue(is_valid_channel("Some_User_42"))
        self.assertFalse(is_valid_channel(""))
        self.assertFalse(is_valid_channel(None))
        self.assertFalse(is_valid_channel("../etc/passwd"))
        self.assertFalse(is_valid_channel("x" * 26))


class TestFetchChannelStats(unittest.IsolatedAsyncioTestCase):
    """Test fetching with a mocked transport."""

    async def test_fetch(self) -> None:
        """The channel is requested lower-cased under the tracker base URL."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, text=LIVE_PAGE)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            stats = await fetch_channel_stats("RENNSZ", client=client)
        self.assertEqual(stats["viewers"], 1234)
        self.assertTrue(stats["is_live"])
        self.assertEqual(seen, [f"{settings.TRACKER_BASE_URL.rstrip('/')}/rennsz"])

    async def test_error_status(self) -> None:
        """Non-2xx answers raise TrackerError."""
        transport = httpx.MockTransport(lambda request: httpx.Response(503, text="busy"))
        async with httpx.AsyncClient(transport=transport) as client:
            with self.assertLogs("streamsite.twitch", level="ERROR"):
                with self.assertRaises(TrackerError):
                    await fetch_channel_stats("rennsz", client=client)

    async def test_transport_error(self) -> None:
        """Connection failures raise TrackerError too."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with self.assertLogs("streamsite.twitch", level="ERROR"):
                with self.assertRaises(TrackerError):
                    await fetch_channel_stats("rennsz", client=client)


if __name__ == "__main__":
    unittest.main()
