"""HTTP client for the MCST festival pages."""
import logging
from typing import Optional

import requests

from settings import ScraperSettings

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a page cannot be fetched."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


class McstClient:
    """Fetches HTML pages with a browser-like User-Agent. Never retries."""

    def __init__(self, settings: ScraperSettings, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            settings: Scraper settings (timeout, user agent)
            session: Optional pre-built requests session
        """
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': settings.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'ko-KR,ko;q=0.9,en-US;q=0.8',
        })

    def fetch_html(self, url: str) -> str:
        """
        Fetch a page and return its body.

        Args:
            url: Absolute page URL

        Returns:
            Decoded HTML text

        Raises:
            FetchError: On a non-success status or transport error
        """
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.settings.timeout_seconds)
        except requests.RequestException as e:
            raise FetchError(url, f"request failed: {e}") from e

        if not response.ok:
            raise FetchError(
                url,
                f"fetch failed: {response.status_code}",
                status_code=response.status_code
            )

        if response.encoding is None or response.encoding.lower() == 'iso-8859-1':
            response.encoding = response.apparent_encoding
        return response.text
