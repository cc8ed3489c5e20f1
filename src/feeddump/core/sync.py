"""Sync engine - decides which fetched entries are new.

For one feed per run, the engine swaps the feed's checkpoint for the
freshly fetched summary and uses the old checkpoint's fingerprint as a
watermark: every entry before the first entry carrying that fingerprint
is new. When there is no previous checkpoint, or the watermark entry is
no longer in the feed, every fetched entry is new. Re-emitting seen
entries is preferred over dropping unseen ones.

The engine is pure computation: no I/O, no clock, no network.

Example:
    >>> from feeddump.core.checkpoint import CheckpointCollection
    >>> from feeddump.core.sync import sync_feed
    >>> from feeddump.models.entry import Entry, FeedSummary, FetchedFeed
    >>> fetched = FetchedFeed(
    ...     summary=FeedSummary(title="Blog", fingerprint="x"),
    ...     entries=(Entry(fingerprint="x"), Entry(fingerprint="y")),
    ... )
    >>> result = sync_feed("blog", fetched, CheckpointCollection())
    >>> result.boundary
    2
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from feeddump.core.checkpoint import CheckpointCollection
from feeddump.models.entry import Entry, FeedSummary, FetchedFeed


@dataclass(frozen=True)
class SyncResult:
    """Outcome of syncing one feed.

    Attributes:
        alias: Feed alias.
        new_entries: Entries newer than the watermark, provider order (newest first).
        collection: Checkpoint collection with this feed's summary replaced.
        previous: Checkpoint stored for the alias before this sync.
        boundary: Exclusive index separating new entries from seen ones.
        fetched_count: Number of entries in the fetch.
    """

    alias: str
    new_entries: tuple[Entry, ...]
    collection: CheckpointCollection
    previous: FeedSummary | None
    boundary: int
    fetched_count: int

    @property
    def watermark_lost(self) -> bool:
        """True when a previous checkpoint existed but matched no entry.

        A republished feed and a feed whose window moved past the
        watermark look the same; both re-emit everything.
        """
        return (
            self.previous is not None
            and self.fetched_count > 0
            and self.boundary == self.fetched_count
        )


def find_boundary(previous: FeedSummary | None, entries: Sequence[Entry]) -> int:
    """Return the exclusive index of the last new entry.

    Example:
        >>> from feeddump.models.entry import Entry, FeedSummary
        >>> entries = [Entry(fingerprint=f) for f in ("w", "x", "y")]
        >>> find_boundary(FeedSummary(fingerprint="x"), entries)
        1
        >>> find_boundary(FeedSummary(fingerprint="gone"), entries)
        3
        >>> find_boundary(None, entries)
        3
    """
    if previous is None:
        return len(entries)
    for index, entry in enumerate(entries):
        if entry.fingerprint == previous.fingerprint:
            return index
    return len(entries)


def sync_feed(
    alias: str,
    fetched: FetchedFeed,
    collection: CheckpointCollection,
) -> SyncResult:
    """Sync one feed against the checkpoint collection.

    Args:
        alias: Feed alias the checkpoint is stored under.
        fetched: This run's fetch of the feed.
        collection: Checkpoints as of before this feed; not modified.

    Returns:
        The new entries and the updated collection.
    """
    updated, previous = collection.replace(alias, fetched.summary)
    boundary = find_boundary(previous, fetched.entries)
    return SyncResult(
        alias=alias,
        new_entries=tuple(fetched.entries[:boundary]),
        collection=updated,
        previous=previous,
        boundary=boundary,
        fetched_count=len(fetched.entries),
    )
