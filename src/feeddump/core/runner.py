"""Run coordinator - one synchronization run over all configured feeds.

The runner loads the checkpoint collection once, walks the configured
feeds in alias order, fetches each feed, lets the sync engine pick the
new entries, renders and writes them, and finally saves the collection
once. Any fatal error (fetch failure, unwritable directory) aborts the
run before the save, so the checkpoint file keeps its previous, still
consistent, state.

Example:
    >>> from feeddump.core.runner import FeedRunStats
    >>> stats = FeedRunStats(alias="blog", fetched=10, new=2, written=2)
    >>> stats.seen
    8
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

from feeddump.adapter.base import FeedAdapter
from feeddump.adapter.rss import RSSFeedAdapter
from feeddump.core.checkpoint import CheckpointCollection, CheckpointStore, load_collection
from feeddump.core.config import FeedConfig
from feeddump.core.sync import SyncResult, sync_feed
from feeddump.http.client import DEFAULT_USER_AGENT, HttpClient
from feeddump.render import Document, Renderer, get_renderer

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[str, str], FeedAdapter]
Echo = Callable[[str], None]


@dataclass
class FeedRunStats:
    """Statistics for one feed in a run.

    Example:
        >>> FeedRunStats(alias="blog", fetched=3, new=3).seen
        0
    """

    alias: str
    fetched: int = 0
    new: int = 0
    written: int = 0
    watermark_lost: bool = False
    duration_ms: float = 0.0

    @property
    def seen(self) -> int:
        """Entries already dumped by an earlier run."""
        return self.fetched - self.new


@dataclass
class RunResult:
    """Result from a run.

    Example:
        >>> result = RunResult(feed_stats={"a": FeedRunStats("a", new=2), "b": FeedRunStats("b", new=1)})
        >>> result.total_new
        3
    """

    feed_stats: dict[str, FeedRunStats] = field(default_factory=dict)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None
    dry_run: bool = False
    checkpoint_saved: bool = False

    @property
    def duration(self) -> timedelta | None:
        """Wall-clock time of the run, once it has completed."""
        if self.completed_at is None:
            return None
        return self.completed_at - self.started_at

    @property
    def total_fetched(self) -> int:
        return sum(s.fetched for s in self.feed_stats.values())

    @property
    def total_new(self) -> int:
        return sum(s.new for s in self.feed_stats.values())

    @property
    def total_written(self) -> int:
        return sum(s.written for s in self.feed_stats.values())


class FeedRunner:
    """Coordinates one run over every configured feed.

    Args:
        config: Parsed configuration (feeds and output format).
        store: Checkpoint store, loaded once and saved once.
        output_dir: Root output directory; each feed writes to ``output_dir / alias``.
        adapter_factory: Builds the adapter for ``(alias, url)``. Defaults to
            RSS adapters sharing one HttpClient.
        renderer: Renderer override; resolved from the configured format otherwise.
        dry_run: Only report where each feed would be written.
        stdout: Print rendered documents instead of writing files.
        echo: Receives user-facing lines (dry-run report, dumped paths, stdout output).
        timeout: Per-feed request timeout for the default adapters.
        max_retries: Retries for the default adapters.

    Example:
        >>> import asyncio
        >>> from feeddump.core.checkpoint import MemoryCheckpointStore
        >>> from feeddump.core.config import FeedConfig
        >>> runner = FeedRunner(FeedConfig(), MemoryCheckpointStore(), Path("/tmp/out"))
        >>> asyncio.run(runner.run()).total_new
        0
    """

    def __init__(
        self,
        config: FeedConfig,
        store: CheckpointStore,
        output_dir: Path,
        *,
        adapter_factory: AdapterFactory | None = None,
        renderer: Renderer | None = None,
        dry_run: bool = False,
        stdout: bool = False,
        echo: Echo | None = None,
        timeout: float = 30.0,
        max_retries: int = 2,
        user_agent: str | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._output_dir = Path(output_dir)
        self._adapter_factory = adapter_factory
        # Validated before any network activity.
        self._renderer = renderer or get_renderer(config.setting.output_format)
        self._dry_run = dry_run
        self._stdout = stdout
        self._echo = echo or print
        self._timeout = timeout
        self._max_retries = max_retries
        self._user_agent = user_agent

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    def feed_dir(self, alias: str) -> Path:
        return self._output_dir / alias

    async def run(self) -> RunResult:
        """Run every configured feed, then save the checkpoints once.

        Raises:
            FeedError: If any feed cannot be fetched; nothing is saved.
            OSError: If an output directory or file cannot be written.
        """
        result = RunResult(dry_run=self._dry_run)

        if self._dry_run:
            for alias, url in self._config.feeds():
                directory = self._prepare_dir(alias)
                self._echo(f"{directory} -> {url}")
                result.feed_stats[alias] = FeedRunStats(alias=alias)
            result.completed_at = datetime.now(UTC)
            return result

        collection = load_collection(self._store)

        if self._adapter_factory is not None:
            collection = await self._run_feeds(self._adapter_factory, collection, result)
        else:
            async with HttpClient(
                timeout=self._timeout,
                max_retries=self._max_retries,
                user_agent=self._user_agent or DEFAULT_USER_AGENT,
            ) as client:

                def factory(alias: str, url: str) -> FeedAdapter:
                    return RSSFeedAdapter(url=url, name=alias, client=client)

                collection = await self._run_feeds(factory, collection, result)

        collection = collection.retain(self._config.source)
        self._store.save(collection)
        result.checkpoint_saved = True
        result.completed_at = datetime.now(UTC)
        logger.info(
            "Run complete: %d feeds, %d new entries, %d files written",
            len(result.feed_stats),
            result.total_new,
            result.total_written,
        )
        return result

    async def _run_feeds(
        self,
        factory: AdapterFactory,
        collection: CheckpointCollection,
        result: RunResult,
    ) -> CheckpointCollection:
        for alias, url in self._config.feeds():
            start = time.perf_counter()
            directory = self._prepare_dir(alias)

            adapter = factory(alias, url)
            logger.info("Fetching %s from %s", alias, url)
            fetched = await adapter.fetch()

            synced = sync_feed(alias, fetched, collection)
            collection = synced.collection
            self._log_sync(synced)

            stats = FeedRunStats(
                alias=alias,
                fetched=synced.fetched_count,
                new=len(synced.new_entries),
                watermark_lost=synced.watermark_lost,
            )
            stats.written = self._emit(synced, directory)
            stats.duration_ms = (time.perf_counter() - start) * 1000
            result.feed_stats[alias] = stats
        return collection

    def _prepare_dir(self, alias: str) -> Path:
        directory = self.feed_dir(alias)
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def _emit(self, synced: SyncResult, directory: Path) -> int:
        """Render the new entries and print or write them.

        Files are written oldest first so creation order follows the feed's
        chronology. Returns the number of files written.
        """
        documents: list[Document] = [self._renderer.render(e) for e in synced.new_entries]

        if self._stdout:
            self._echo(repr(synced.collection.get(synced.alias)))
            for document in documents:
                self._echo(document.serialize().decode("utf-8"))
            return 0

        for document in reversed(documents):
            path = directory / document.suggested_filename()
            self._echo(f"dumping {path} ...")
            path.write_bytes(document.serialize())
        return len(documents)

    @staticmethod
    def _log_sync(synced: SyncResult) -> None:
        if synced.previous is None:
            logger.info("%s: no checkpoint, all %d entries are new", synced.alias, synced.fetched_count)
        elif synced.watermark_lost:
            logger.warning(
                "%s: last seen entry is no longer in the feed, dumping all %d entries",
                synced.alias,
                synced.fetched_count,
            )
        else:
            logger.info(
                "%s: %d new of %d entries", synced.alias, len(synced.new_entries), synced.fetched_count
            )
