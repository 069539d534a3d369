from abc import ABC, abstractmethod
from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from sports_venues.config.settings import settings
from sports_venues.models.enums import League
from sports_venues.models.raw_table import RawLeagueTable

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class ScraperError(Exception):
    """Custom exception for scraper-related errors."""

    pass


class RateLimitError(ScraperError):
    """Exception raised for rate limit errors (429)."""

    pass


class TableNotFoundError(ScraperError):
    """Exception raised when a page has no table at the requested index."""

    pass


class BaseScraper(ABC):
    """Abstract base class for table scrapers."""

    source_name: str = "unknown"

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout),
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        )

    @abstractmethod
    async def fetch_table(
        self, url: str, table_index: int, league: League
    ) -> RawLeagueTable:
        """Fetch the table at ``table_index`` (0-based) from the page at ``url``.

        Args:
            url: Page to download.
            table_index: 0-based position of the table among the page's tables.
            league: League the rows will be tagged with downstream.

        Returns:
            The table's header texts and raw cell text rows.

        Raises:
            ScraperError: If the page could not be fetched.
            TableNotFoundError: If the page has fewer tables than requested.
        """
        pass

    @retry(
        stop=stop_after_attempt(4),  # 3 retries after the first attempt
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(
            (httpx.RequestError, httpx.HTTPStatusError, RateLimitError)
        ),
        reraise=True,  # Reraise the exception after max attempts
    )
    async def _make_request(self, method: str, url: str) -> httpx.Response:
        """Makes an asynchronous HTTP request with retry logic."""
        logger.debug(f"Making {method} request to {url}")
        try:
            response = await self.client.request(method, url)

            if response.status_code == 429:
                retry_after = response.headers.get("Retry-After")
                logger.warning(
                    f"Rate limit hit (429) for {self.source_name} at {url}. Retry-After: {retry_after}"
                )
                raise RateLimitError(f"Rate limited by {self.source_name}")

            response.raise_for_status()  # Raises HTTPStatusError for 4xx/5xx
            logger.debug(f"Request successful: {response.status_code} for {url}")
            return response

        except httpx.HTTPStatusError as e:
            if e.response.status_code in RETRYABLE_STATUS_CODES:
                logger.warning(
                    f"Retrying request to {url} due to status {e.response.status_code}: {e}"
                )
                raise  # Re-raise to trigger tenacity retry
            else:
                logger.error(
                    f"HTTP error during request to {url}: {e.response.status_code} - {e}"
                )
                raise ScraperError(f"HTTP error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            # Network errors, timeouts etc. - these are retryable by default
            logger.warning(f"Request error for {url}, retrying: {e}")
            raise
        except ScraperError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error during request to {url}: {e}")
            raise ScraperError("Unexpected error during HTTP request") from e

    async def fetch_page(self, url: str) -> str:
        """Downloads a page and returns its text, wrapping exhausted retries in ScraperError."""
        try:
            response = await self._make_request(method="GET", url=url)
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            # Only reached once tenacity has given up (reraise=True)
            raise ScraperError(f"Failed to fetch {url} after retries: {e}") from e
        return response.text

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.source_name}")
