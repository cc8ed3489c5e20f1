"""Content fingerprints for feeds and entries.

A fingerprint is an opaque, deterministic digest of one designated field
of a feed item. The same function produces entry fingerprints and the
feed-level watermark stored in the checkpoint, so a checkpoint written by
one run can be matched against entries fetched by the next.

Example:
    >>> from feeddump.utils.keys import designated_field, fingerprint
    >>> key = designated_field("Mon, 01 Jan 2024 00:00:00 GMT", "Hello", "")
    >>> key
    'Mon, 01 Jan 2024 00:00:00 GMT'
    >>> len(fingerprint(key))
    32
"""

from __future__ import annotations

import hashlib


def fingerprint(value: str) -> str:
    """Return the MD5 digest of ``value`` as 32 lowercase hex characters.

    MD5 is a content digest here, not a security primitive. It keeps
    checkpoint files written by earlier releases comparable.

    Example:
        >>> fingerprint("")
        'd41d8cd98f00b204e9800998ecf8427e'
        >>> fingerprint("hello") == fingerprint("hello")
        True
    """
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def designated_field(
    pub_date: str | None,
    title: str | None,
    description: str | None,
) -> str:
    """Pick the field a fingerprint is computed from.

    The first non-empty of publication date, title and description wins.
    Returns an empty string when all three are missing.

    Example:
        >>> designated_field("", "Hello", "World")
        'Hello'
        >>> designated_field(None, None, "World")
        'World'
        >>> designated_field(None, None, None)
        ''
    """
    for candidate in (pub_date, title, description):
        if candidate:
            return candidate
    return ""
