"""Entity normalizer.

Maps the raw mappings a feed adapter parses out of a document into the
canonical `Entry` and `FeedSummary` models. Normalization is total:
every field has a default, so sparse items never fail.

Raw item keys (all optional): ``title``, ``link``, ``source_url``,
``author``, ``pub_date``, ``description``, ``content``, ``categories``.
Raw channel keys: ``title`` and ``items`` (a list of raw items, newest
first).

Example:
    >>> from feeddump.adapter.normalize import normalize_entry, summarize_channel
    >>> entry = normalize_entry({"title": "Post", "description": "<p>Hi</p>"})
    >>> entry.content
    '<p>Hi</p>'
    >>> summarize_channel({"title": "Blog", "items": []}).title
    'Blog'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from feeddump.models.entry import Entry, FeedSummary, FetchedFeed
from feeddump.utils.keys import designated_field, fingerprint


def _first(*values: Any) -> str:
    """Return the first value that is not None, or an empty string."""
    for value in values:
        if value is not None:
            return str(value)
    return ""


def normalize_entry(raw: Mapping[str, Any]) -> Entry:
    """Build an `Entry` from a raw item mapping.

    - ``content`` prefers the rich content field over the description.
    - ``link`` prefers the source element URL over the item link.
    - ``categories`` keeps provider order and duplicates.

    Example:
        >>> e = normalize_entry({"link": "https://a", "source_url": "https://b"})
        >>> e.link
        'https://b'
        >>> e.title, e.author, e.date
        ('', '', '')
    """
    pub_date = raw.get("pub_date")
    title = raw.get("title")
    description = raw.get("description")

    return Entry(
        title=_first(title),
        link=_first(raw.get("source_url"), raw.get("link")),
        author=_first(raw.get("author")),
        date=_first(pub_date),
        categories=tuple(str(c) for c in raw.get("categories") or ()),
        content=_first(raw.get("content"), description),
        fingerprint=fingerprint(designated_field(pub_date, title, description)),
    )


def summarize_channel(channel: Mapping[str, Any]) -> FeedSummary:
    """Build the `FeedSummary` for a raw channel.

    The designated field comes from the first item (publication date,
    then title, then description), so the summary fingerprint equals the
    first entry's fingerprint. A feed without items falls back to the
    channel title so a summary can always be produced.

    Example:
        >>> s = summarize_channel({"title": "Blog", "items": [{"title": "Post"}]})
        >>> s.fingerprint == summarize_channel({"title": "Other", "items": [{"title": "Post"}]}).fingerprint
        True
    """
    channel_title = _first(channel.get("title"))
    items = channel.get("items") or []

    if items:
        first = items[0]
        candidate = designated_field(
            first.get("pub_date"), first.get("title"), first.get("description")
        )
    else:
        candidate = channel_title

    return FeedSummary(title=channel_title, fingerprint=fingerprint(candidate))


def normalize_feed(channel: Mapping[str, Any]) -> FetchedFeed:
    """Normalize a whole raw channel into a `FetchedFeed`.

    Example:
        >>> feed = normalize_feed({"title": "Blog", "items": [{"title": "a"}, {"title": "b"}]})
        >>> [e.title for e in feed.entries]
        ['a', 'b']
        >>> feed.summary.fingerprint == feed.entries[0].fingerprint
        True
    """
    return FetchedFeed(
        summary=summarize_channel(channel),
        entries=tuple(normalize_entry(item) for item in channel.get("items") or []),
    )
