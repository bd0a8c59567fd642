"""HTTP retrieval of result pages."""

import logging
from typing import Protocol

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import DEFAULT_USER_AGENT
from .exceptions import NetworkError

logger = logging.getLogger(__name__)


class PageFetcher(Protocol):
    """Anything that returns the text of the page at a URI."""

    def fetch(self, uri: str) -> str: ...


class HttpPageFetcher:
    """Fetches pages over HTTP with retries."""

    def __init__(
        self,
        timeout: int = 30,
        user_agent: str = DEFAULT_USER_AGENT,
        max_attempts: int = 3,
        backoff: float = 1.0,
    ):
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header
            max_attempts: Attempts per page before giving up
            backoff: Multiplier of the exponential wait between attempts
        """
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff = backoff
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
            }
        )

    def fetch(self, uri: str) -> str:
        """Fetch a page.

        Args:
            uri: Absolute URI of the page

        Returns:
            Page content as string

        Raises:
            NetworkError: If the request still fails after the last attempt
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.backoff, min=4 * self.backoff, max=10 * self.backoff
            ),
            retry=retry_if_exception_type(requests.RequestException),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    logger.info(f"Fetching {uri}")
                    response = self.session.get(uri, timeout=self.timeout)
                    response.raise_for_status()
                    return response.text
        except requests.RequestException as e:
            raise NetworkError(f"Failed to fetch {uri}: {str(e)}") from e
        raise NetworkError(f"Failed to fetch {uri}")
