"""Renderers for dumped entries.

Example:
    >>> from feeddump.render import get_renderer
    >>> renderer = get_renderer("html")
"""

from feeddump.render.base import (
    Document,
    Renderer,
    available_formats,
    entry_filename,
    get_renderer,
    register_renderer,
)
from feeddump.render.html import HTMLDocument, HTMLRenderer

register_renderer("html", HTMLRenderer)

__all__ = [
    "Document",
    "HTMLDocument",
    "HTMLRenderer",
    "Renderer",
    "available_formats",
    "entry_filename",
    "get_renderer",
    "register_renderer",
]
