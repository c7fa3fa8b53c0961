"""Page and stylesheet fetching over httpx.

The primary page fetch maps transport failures onto the pipeline's error
kinds. Stylesheet fetches never raise: a failed sheet degrades to empty text
so the remaining sheets and inline styles still contribute.
"""

import asyncio
import time
from typing import Protocol, Sequence

import httpx
import logfire

from brand_analyzer.constants import (
    BOT_USER_AGENT,
    MAX_REDIRECTS,
    PAGE_FETCH_TIMEOUT_SECONDS,
    STYLESHEET_FETCH_TIMEOUT_SECONDS,
    STYLESHEET_USER_AGENT,
)
from brand_analyzer.services.errors import (
    AccessBlockedError,
    FetchFailedError,
    FetchTimeoutError,
    HostUnreachableError,
)


class PageFetcher(Protocol):
    """Protocol for fetching page and stylesheet content."""

    async def fetch_page(self, url: str) -> str:
        """Fetch HTML content from URL.

        Raises:
            FetchError: If the fetch fails
        """
        ...

    async def fetch_stylesheet(self, url: str) -> str:
        """Fetch CSS text from URL, returning "" on any failure."""
        ...

    async def fetch_stylesheets(self, urls: Sequence[str]) -> list[str]:
        """Fetch several stylesheets concurrently, in input order."""
        ...


class HttpxPageFetcher:
    """Fetch pages with httpx, disclosing the analyzer bot identity."""

    DEFAULT_HEADERS = {
        "User-Agent": BOT_USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }

    def __init__(
        self,
        timeout: float = PAGE_FETCH_TIMEOUT_SECONDS,
        stylesheet_timeout: float = STYLESHEET_FETCH_TIMEOUT_SECONDS,
        max_redirects: int = MAX_REDIRECTS,
        user_agent: str | None = None,
    ):
        """Initialize the page fetcher.

        Args:
            timeout: Timeout for the primary page fetch in seconds
            stylesheet_timeout: Timeout for each stylesheet fetch in seconds
            max_redirects: Redirect hops followed for the primary page
            user_agent: Optional override for the disclosed User-Agent
        """
        self._timeout = timeout
        self._stylesheet_timeout = stylesheet_timeout
        self._max_redirects = max_redirects
        self._headers = self.DEFAULT_HEADERS.copy()
        if user_agent:
            self._headers["User-Agent"] = user_agent

    async def fetch_page(self, url: str) -> str:
        """Fetch the page to analyze.

        Args:
            url: Normalized absolute URL

        Returns:
            Decoded HTML text

        Raises:
            AccessBlockedError: On 401/403
            HostUnreachableError: On DNS or connection failure
            FetchTimeoutError: When the timeout is exceeded
            FetchFailedError: On any other HTTP status or transport error
        """
        start_time = time.time()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                max_redirects=self._max_redirects,
                headers=self._headers,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logfire.warning(
                "Page fetch rejected", url=url, status_code=status_code
            )
            if status_code in (401, 403):
                raise AccessBlockedError(
                    f"Site blocked automated access ({status_code}): {url}",
                    url=url,
                    status_code=status_code,
                ) from e
            raise FetchFailedError(
                f"Failed to fetch {url}: HTTP {status_code}",
                url=url,
                status_code=status_code,
            ) from e
        except httpx.TimeoutException as e:
            logfire.warning("Page fetch timed out", url=url, timeout=self._timeout)
            raise FetchTimeoutError(f"Timed out fetching {url}", url=url) from e
        except httpx.ConnectError as e:
            logfire.warning("Page host unreachable", url=url, error=str(e))
            raise HostUnreachableError(f"Could not reach {url}: {e}", url=url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logfire.warning("Page fetch failed", url=url, error=str(e))
            raise FetchFailedError(f"Failed to fetch {url}: {e}", url=url) from e

        html = response.text
        logfire.info(
            "Page fetched",
            url=url,
            final_url=str(response.url),
            status_code=response.status_code,
            content_length=len(html),
            response_time_ms=(time.time() - start_time) * 1000,
        )
        return html

    async def fetch_stylesheet(self, url: str) -> str:
        """Fetch CSS text; any failure yields an empty string."""
        try:
            async with httpx.AsyncClient(
                timeout=self._stylesheet_timeout,
                follow_redirects=True,
                headers={"User-Agent": STYLESHEET_USER_AGENT},
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logfire.warning("Stylesheet fetch failed", url=url, error=str(e))
            return ""
        logfire.debug(
            "Stylesheet fetched", url=url, content_length=len(response.text)
        )
        return response.text or ""

    async def fetch_stylesheets(self, urls: Sequence[str]) -> list[str]:
        """Fetch stylesheets concurrently without failing fast.

        Args:
            urls: Absolute stylesheet URLs

        Returns:
            CSS text per URL, in the same order; "" where a fetch failed
        """
        if not urls:
            return []
        results = await asyncio.gather(
            *(self.fetch_stylesheet(url) for url in urls),
            return_exceptions=True,
        )
        texts: list[str] = []
        for url, result in zip(urls, results):
            if isinstance(result, BaseException):
                logfire.warning(
                    "Stylesheet task errored", url=url, error=repr(result)
                )
                texts.append("")
            else:
                texts.append(result)
        return texts
