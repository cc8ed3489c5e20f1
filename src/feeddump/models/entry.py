"""Entry models - the canonical shapes feed adapters produce.

- `Entry`: one syndication item, normalized
- `FeedSummary`: the checkpoint-relevant state of a feed at fetch time
- `FetchedFeed`: what an adapter returns for one fetch

Example:
    >>> from feeddump.models.entry import Entry, FeedSummary, FetchedFeed
    >>> entry = Entry(title="Hello", fingerprint="abc")
    >>> entry.categories
    ()
    >>> feed = FetchedFeed(
    ...     summary=FeedSummary(title="Blog", fingerprint="abc"),
    ...     entries=(entry,),
    ... )
    >>> len(feed)
    1
"""

from __future__ import annotations

from pydantic import AliasChoices, Field

from feeddump.models.base import FeedDumpModel


class Entry(FeedDumpModel):
    """One syndication item.

    Created fresh on every run from the provider's output and never
    persisted; only its fingerprint survives, as a feed watermark.

    Example:
        >>> from feeddump.models.entry import Entry
        >>> e = Entry(title="Post", categories=["a", "a"], fingerprint="f")
        >>> e.categories
        ('a', 'a')
    """

    title: str = ""
    link: str = ""
    author: str = ""
    date: str = Field(default="", description="Raw provider date, never parsed")
    categories: tuple[str, ...] = ()
    content: str = ""
    fingerprint: str = Field(..., description="Digest of the designated field")


class FeedSummary(FeedDumpModel):
    """Checkpoint value for one feed: the newest state known at fetch time.

    Checkpoints written by older releases call the digest ``checksum``;
    both names are accepted on load.

    Example:
        >>> from feeddump.models.entry import FeedSummary
        >>> FeedSummary.model_validate({"title": "t", "checksum": "42"}).fingerprint
        '42'
    """

    title: str = ""
    fingerprint: str = Field(
        ...,
        validation_alias=AliasChoices("fingerprint", "checksum"),
    )


class FetchedFeed(FeedDumpModel):
    """One fetch of a feed: its summary and entries in provider order."""

    summary: FeedSummary
    entries: tuple[Entry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)
