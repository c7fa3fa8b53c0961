"""Time-bounded in-memory cache of analysis results."""

import time
from threading import Lock

import logfire

from brand_analyzer.constants import RESULT_CACHE_MAX_ENTRIES, RESULT_CACHE_TTL_SECONDS
from brand_analyzer.models.brand_models import AnalysisResult


class AnalysisCache:
    """
    Thread-safe in-memory cache for analysis results.

    Caches results by normalized URL with a configurable TTL so repeated
    requests within the window are answered without network access. Entries
    are not durable across restarts. When max_entries is reached the oldest
    entry is evicted; concurrent writers for one URL resolve last-write-wins.
    """

    def __init__(
        self,
        ttl_seconds: float = RESULT_CACHE_TTL_SECONDS,
        max_entries: int = RESULT_CACHE_MAX_ENTRIES,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Time-to-live for cache entries in seconds (default: 300)
            max_entries: Maximum number of entries kept (default: 256)
        """
        self._cache: dict[str, tuple[AnalysisResult, float]] = {}
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._lock = Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, url: str) -> AnalysisResult | None:
        """
        Get a cached result if not expired.

        Args:
            url: Normalized URL (href)

        Returns:
            Cached AnalysisResult if valid, None if not found or expired
        """
        with self._lock:
            entry = self._cache.get(url)
            if entry is None:
                return None
            result, stored_at = entry
            age = time.monotonic() - stored_at
            if age < self._ttl:
                logfire.debug(
                    "Analysis cache hit", url=url, cache_age_seconds=age
                )
                return result
            # Expired - remove from cache
            del self._cache[url]
            logfire.debug("Analysis cache expired", url=url)
            return None

    def set(self, url: str, result: AnalysisResult) -> None:
        """
        Cache a result.

        Args:
            url: Normalized URL (href)
            result: Analysis result to cache
        """
        with self._lock:
            self._cache.pop(url, None)
            while len(self._cache) >= self._max_entries:
                oldest = next(iter(self._cache))
                del self._cache[oldest]
                logfire.debug("Analysis cache evicted", url=oldest)
            self._cache[url] = (result, time.monotonic())
            logfire.debug("Analysis cached", url=url, cache_size=len(self._cache))

    def invalidate(self, url: str) -> None:
        """Remove one URL from the cache."""
        with self._lock:
            if self._cache.pop(url, None) is not None:
                logfire.debug("Analysis cache invalidated", url=url)

    def clear(self) -> None:
        """Clear all cached results."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            logfire.debug("Analysis cache cleared", entries_cleared=count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
