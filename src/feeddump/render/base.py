"""Renderer protocols and the output format registry.

A renderer turns an `Entry` into a `Document`; the run coordinator only
ever serializes documents and asks them for a filename.

Example:
    >>> from feeddump.render.base import available_formats, get_renderer
    >>> available_formats()
    ['html']
    >>> get_renderer("html").extension
    'html'
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from feeddump.core.exceptions import UnsupportedFormatError
from feeddump.models.entry import Entry

MAX_FILENAME_BYTES = 240


@runtime_checkable
class Document(Protocol):
    """A rendered entry."""

    def serialize(self) -> bytes:
        """Return the document's bytes."""
        ...

    def suggested_filename(self) -> str:
        """Return the file name the document should be written under."""
        ...


@runtime_checkable
class Renderer(Protocol):
    """Turns entries into documents of one output format."""

    extension: str

    def render(self, entry: Entry) -> Document:
        ...


_REGISTRY: dict[str, Callable[[], Renderer]] = {}


def register_renderer(name: str, factory: Callable[[], Renderer]) -> None:
    """Make ``factory`` available under the output format ``name``."""
    _REGISTRY[name.lower()] = factory


def available_formats() -> list[str]:
    return sorted(_REGISTRY)


def get_renderer(name: str) -> Renderer:
    """Instantiate the renderer for an output format.

    Raises:
        UnsupportedFormatError: If no renderer is registered under ``name``.
    """
    factory = _REGISTRY.get(name.lower())
    if factory is None:
        raise UnsupportedFormatError(
            f"Unsupported output format {name!r} (available: {', '.join(available_formats())})"
        )
    return factory()


def entry_filename(entry: Entry, extension: str) -> str:
    """Derive a file name from the entry title.

    Path separators are replaced so a title cannot escape the feed
    directory; an empty title falls back to the entry fingerprint.
    Identical titles give identical names.

    Example:
        >>> from feeddump.models.entry import Entry
        >>> entry_filename(Entry(title="a/b", fingerprint="f"), "html")
        'a_b.html'
        >>> entry_filename(Entry(title="", fingerprint="f"), "html")
        'f.html'
    """
    stem = entry.title.replace("/", "_").replace("\\", "_").replace("\0", "")
    if not stem.strip(" ."):
        stem = entry.fingerprint
    stem = stem.encode("utf-8")[:MAX_FILENAME_BYTES].decode("utf-8", errors="ignore")
    return f"{stem}.{extension}"
