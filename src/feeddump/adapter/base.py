"""Base feed adapter implementation.

Provides the FeedAdapter protocol the run coordinator depends on and the
BaseFeedAdapter base class concrete adapters build on.

Example:
    >>> from feeddump.adapter.base import BaseFeedAdapter, FeedAdapter
    >>> hasattr(FeedAdapter, "fetch")
    True
    >>> hasattr(BaseFeedAdapter, "fetch")
    True
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

from feeddump.adapter.normalize import normalize_feed
from feeddump.core.exceptions import FeedError
from feeddump.models.entry import FetchedFeed

logger = logging.getLogger(__name__)


@runtime_checkable
class FeedAdapter(Protocol):
    """Protocol defining the upstream provider interface.

    Example:
        >>> from feeddump.adapter.base import FeedAdapter
        >>> hasattr(FeedAdapter, "name")
        True
    """

    @property
    def name(self) -> str:
        """Feed alias this adapter fetches for."""
        ...

    async def fetch(self) -> FetchedFeed:
        """Fetch the feed and return its summary and entries.

        Raises:
            FeedError: If the feed cannot be fetched or parsed.
        """
        ...


class BaseFeedAdapter(ABC):
    """Base class for feed adapters.

    Subclasses implement `_fetch_channel()` returning a raw channel
    mapping (``title`` and ``items``); normalization, error wrapping and
    fetch bookkeeping happen here.

    Example:
        >>> class StaticAdapter(BaseFeedAdapter):
        ...     async def _fetch_channel(self):
        ...         return {"title": "Static", "items": [{"title": "Only"}]}
        >>> import asyncio
        >>> feed = asyncio.run(StaticAdapter(name="static").fetch())
        >>> feed.entries[0].title
        'Only'
    """

    def __init__(self, name: str, source_url: str | None = None) -> None:
        """Initialize the base adapter.

        Args:
            name: Feed alias.
            source_url: URL of the feed (optional).
        """
        self._name = name
        self._source_url = source_url
        self._last_fetch_at: datetime | None = None
        self._last_fetch_count: int = 0

    @property
    def name(self) -> str:
        """Feed alias."""
        return self._name

    @property
    def source_url(self) -> str | None:
        """Feed source URL."""
        return self._source_url

    @property
    def last_fetch_at(self) -> datetime | None:
        """When the last successful fetch finished."""
        return self._last_fetch_at

    @property
    def last_fetch_count(self) -> int:
        """Number of entries from the last fetch."""
        return self._last_fetch_count

    async def fetch(self) -> FetchedFeed:
        """Fetch and normalize the feed.

        Returns:
            The fetched feed, entries in provider order.

        Raises:
            FeedError: If fetching or parsing fails for any reason.
        """
        try:
            channel = await self._fetch_channel()
        except FeedError:
            raise
        except Exception as e:
            raise FeedError(str(e), source=self._name, cause=e) from e

        feed = normalize_feed(channel)
        self._last_fetch_count = len(feed)
        self._last_fetch_at = datetime.now(UTC)
        logger.debug("Fetched %d entries for %s", len(feed), self._name)
        return feed

    @abstractmethod
    async def _fetch_channel(self) -> dict[str, Any]:
        """Fetch the raw channel mapping from the source.

        Returns:
            Mapping with ``title`` and ``items`` (raw item mappings, newest first).
        """
        ...
