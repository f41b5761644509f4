"""
Feed Fetcher
============

Retrieves raw feed bytes over HTTP for the parsing pipeline. Sits outside
the core: the pipeline only ever sees the bytes this returns.
"""

from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config.settings import FetchSettings, get_settings
from ..models.feed import Feed
from ..processing.pipeline import FeedParser
from ..utils.exceptions import ErrorCode, FeedFetchError
from ..utils.logging import get_logger_for_component
from ..utils.validators import URLValidator, validate_username


class FeedFetcher:
    """HTTP client for feed documents with retry on transient failures."""

    def __init__(self, settings: Optional[FetchSettings] = None):
        """Initialize fetcher.

        Args:
            settings: Fetch settings (default from config)
        """
        self.settings = settings or get_settings().fetch
        self.logger = get_logger_for_component("feed_fetcher")

        self.session = requests.Session()
        retry_strategy = Retry(
            total=self.settings.max_retries,
            backoff_factor=self.settings.backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update(
            {
                "User-Agent": self.settings.user_agent,
                "Accept": "application/rss+xml, application/xml, text/xml",
            }
        )

    def __enter__(self) -> "FeedFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def build_feed_url(self, username: str) -> str:
        """Feed URL for a username, e.g. ``https://medium.com/feed/@someone``."""
        return self.settings.base_url + validate_username(username)

    def fetch_user_feed(self, username: str) -> bytes:
        """Fetch the feed published by ``username``.

        Raises:
            ValidationError: If the username is missing or invalid
            FeedFetchError: If the request fails
        """
        return self.fetch_url(self.build_feed_url(username))

    def fetch_url(self, url: str) -> bytes:
        """
        Fetch raw feed bytes from a URL.

        Args:
            url: Feed URL

        Returns:
            Response body

        Raises:
            ValidationError: If the URL is not an http(s) URL
            FeedFetchError: On HTTP errors, timeouts and connection failures
        """
        url = URLValidator.validate_feed_url(url)
        self.logger.info(f"Fetching feed: {url}")

        try:
            response = self.session.get(url, timeout=self.settings.request_timeout)
            response.raise_for_status()

        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 404:
                code = ErrorCode.FEED_NOT_FOUND
            elif status in (401, 403):
                code = ErrorCode.FEED_ACCESS_DENIED
            else:
                code = ErrorCode.FEED_NETWORK_ERROR
            self.logger.warning(f"Feed fetch failed for {url}: HTTP {status}")
            raise FeedFetchError(
                f"HTTP {status} fetching {url}",
                feed_url=url,
                error_code=code,
                context={"status_code": status},
                recoverable=code == ErrorCode.FEED_NETWORK_ERROR,
            ) from e

        except requests.Timeout as e:
            self.logger.warning(f"Feed fetch timeout for {url}")
            raise FeedFetchError(
                f"Request timeout after {self.settings.request_timeout}s",
                feed_url=url,
                error_code=ErrorCode.FEED_FETCH_TIMEOUT,
            ) from e

        except requests.RequestException as e:
            self.logger.error(f"Feed fetch failed for {url}: {e}")
            raise FeedFetchError(f"Failed to fetch feed {url}: {e}", feed_url=url) from e

        self.logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.content


def fetch_and_parse(
    username: str,
    fetcher: Optional[FeedFetcher] = None,
    parser: Optional[FeedParser] = None,
) -> Feed:
    """Fetch a user's feed and parse it into a Feed."""
    fetcher = fetcher or FeedFetcher()
    parser = parser or FeedParser()
    url = fetcher.build_feed_url(username)
    return parser.parse(fetcher.fetch_url(url), source=url)
