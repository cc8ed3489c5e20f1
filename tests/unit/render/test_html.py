"""Tests for feeddump.render - the HTML renderer and format registry."""

from __future__ import annotations

import pytest

from feeddump.core.exceptions import UnsupportedFormatError
from feeddump.models.entry import Entry
from feeddump.render import (
    Document,
    HTMLRenderer,
    Renderer,
    available_formats,
    entry_filename,
    get_renderer,
)
from feeddump.render.base import MAX_FILENAME_BYTES


@pytest.fixture
def entry() -> Entry:
    return Entry(
        title="Release <1.0> & more",
        link="https://example.com/post?a=1&b=2",
        author="Jane",
        date="Mon, 01 Jan 2024 10:00:00 GMT",
        categories=("rust", "release"),
        content="<p>Hello <b>world</b></p>",
        fingerprint="f",
    )


class TestHTMLRenderer:
    """Tests for HTMLRenderer."""

    def test_protocols(self, entry: Entry) -> None:
        renderer = HTMLRenderer()
        assert isinstance(renderer, Renderer)
        assert isinstance(renderer.render(entry), Document)

    def test_head(self, entry: Entry) -> None:
        html = HTMLRenderer().render(entry).html
        assert html.startswith("<!DOCTYPE html>")
        assert '<meta charset="UTF-8">' in html
        assert '<meta name="viewport" content="width=device-width">' in html
        assert '<link rel="stylesheet" href="../style.css">' in html
        assert "<title>Release &lt;1.0&gt; &amp; more</title>" in html

    def test_metadata_table(self, entry: Entry) -> None:
        html = HTMLRenderer().render(entry).html
        assert "<td>Jane</td>" in html
        assert "<td>Mon, 01 Jan 2024 10:00:00 GMT</td>" in html
        assert "<td>rust release</td>" in html
        assert 'href="https://example.com/post?a=1&amp;b=2"' in html

    def test_content_inserted_verbatim(self, entry: Entry) -> None:
        html = HTMLRenderer().render(entry).html
        assert "<p>Hello <b>world</b></p>" in html
        assert html.index("</table>") < html.index("<p>Hello")

    def test_empty_entry(self) -> None:
        html = HTMLRenderer().render(Entry(fingerprint="f")).html
        assert "<a href" not in html

    def test_custom_stylesheet(self, entry: Entry) -> None:
        html = HTMLRenderer(stylesheet="/static/feed.css").render(entry).html
        assert 'href="/static/feed.css"' in html

    def test_serialize_is_utf8(self) -> None:
        doc = HTMLRenderer().render(Entry(title="日本語", content="ü", fingerprint="f"))
        assert "ü".encode() in doc.serialize()
        assert doc.suggested_filename() == "日本語.html"


class TestEntryFilename:
    """Tests for entry_filename()."""

    def test_title(self) -> None:
        assert entry_filename(Entry(title="Hello World", fingerprint="f"), "html") == "Hello World.html"

    @pytest.mark.parametrize("title", ["../../etc/passwd", "a\\b", "x\0y"])
    def test_no_path_escape(self, title: str) -> None:
        name = entry_filename(Entry(title=title, fingerprint="f"), "html")
        assert "/" not in name
        assert "\\" not in name
        assert "\0" not in name

    @pytest.mark.parametrize("title", ["", "  ", ".", ".."])
    def test_blank_title_uses_fingerprint(self, title: str) -> None:
        assert entry_filename(Entry(title=title, fingerprint="abc"), "html") == "abc.html"

    def test_long_title_truncated(self) -> None:
        name = entry_filename(Entry(title="é" * 500, fingerprint="f"), "html")
        assert len(name.encode("utf-8")) <= MAX_FILENAME_BYTES + len(".html")
        assert name.endswith(".html")

    def test_identical_titles_collide(self) -> None:
        a = entry_filename(Entry(title="Same", fingerprint="1"), "html")
        b = entry_filename(Entry(title="Same", fingerprint="2"), "html")
        assert a == b


class TestRegistry:
    def test_html_registered(self) -> None:
        assert "html" in available_formats()
        assert isinstance(get_renderer("HTML"), HTMLRenderer)

    def test_unsupported(self) -> None:
        with pytest.raises(UnsupportedFormatError, match="markdown"):
            get_renderer("markdown")
