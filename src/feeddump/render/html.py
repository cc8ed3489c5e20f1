"""HTML renderer.

Each entry becomes a self-contained page: a head with charset, viewport
and a shared ``../style.css`` stylesheet, a table of the entry's
metadata, then the entry content as markup.

Example:
    >>> from feeddump.models.entry import Entry
    >>> from feeddump.render.html import HTMLRenderer
    >>> doc = HTMLRenderer().render(Entry(title="Hello", content="<p>Hi</p>", fingerprint="f"))
    >>> doc.suggested_filename()
    'Hello.html'
    >>> b"<p>Hi</p>" in doc.serialize()
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from feeddump.models.entry import Entry
from feeddump.render.base import entry_filename

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "entry.html.j2"

_env: Environment | None = None


def _get_env() -> Environment:
    global _env
    if _env is None:
        _env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=select_autoescape(enabled_extensions=("html", "j2"), default=True),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
    return _env


@dataclass(frozen=True)
class HTMLDocument:
    """A rendered HTML page."""

    html: str
    filename: str

    def serialize(self) -> bytes:
        return self.html.encode("utf-8")

    def suggested_filename(self) -> str:
        return self.filename


class HTMLRenderer:
    """Renders entries as standalone HTML pages.

    Metadata is escaped; ``content`` is inserted verbatim since feeds
    carry it as HTML.
    """

    extension = "html"

    def __init__(self, stylesheet: str = "../style.css") -> None:
        self.stylesheet = stylesheet

    def render(self, entry: Entry) -> HTMLDocument:
        template = _get_env().get_template(TEMPLATE_NAME)
        html = template.render(
            entry=entry,
            stylesheet=self.stylesheet,
            categories=" ".join(entry.categories),
        )
        return HTMLDocument(html=html, filename=entry_filename(entry, self.extension))
