"""RSS/Atom feed adapter implementation.

Provides RSSFeedAdapter, which downloads an RSS 2.0 (or RSS 1.0) or Atom
document and parses it into the raw channel mapping the normalizer
understands.

Example:
    >>> from feeddump.adapter.rss import RSSFeedAdapter
    >>> adapter = RSSFeedAdapter(
    ...     url="https://example.com/feed.xml",
    ...     name="example",
    ... )
    >>> adapter.name
    'example'
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from feeddump.adapter.base import BaseFeedAdapter
from feeddump.core.exceptions import FeedError
from feeddump.http.client import HttpClient, HttpClientError

ATOM_NS = "http://www.w3.org/2005/Atom"
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"


def _local(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _text(elem: ET.Element | None) -> str | None:
    if elem is None or elem.text is None:
        return None
    return elem.text.strip()


class RSSFeedAdapter(BaseFeedAdapter):
    """Feed adapter for RSS and Atom feeds.

    Args:
        url: Feed URL to fetch.
        name: Feed alias.
        client: Shared HttpClient; a private one is opened per fetch when omitted.
        timeout: Request timeout in seconds for the private client.
        max_retries: Retry attempts for the private client.

    Example:
        >>> from feeddump.adapter.rss import RSSFeedAdapter
        >>> adapter = RSSFeedAdapter(url="https://example.com/feed.xml", name="blog")
        >>> adapter.source_url
        'https://example.com/feed.xml'
    """

    def __init__(
        self,
        url: str,
        name: str,
        *,
        client: HttpClient | None = None,
        timeout: float = 30.0,
        max_retries: int = 2,
    ) -> None:
        super().__init__(name=name, source_url=url)
        self.url = url
        self.timeout = timeout
        self.max_retries = max_retries
        self._client = client

    async def _fetch_xml(self) -> bytes:
        """Download the raw feed document, undecoded.

        Raises:
            FeedError: If the request fails.
        """
        try:
            if self._client is not None:
                return await self._client.get_bytes(self.url)
            async with HttpClient(timeout=self.timeout, max_retries=self.max_retries) as client:
                return await client.get_bytes(self.url)
        except HttpClientError as e:
            raise FeedError(f"Failed to fetch feed: {e}", source=self.name, cause=e) from e

    async def _fetch_channel(self) -> dict[str, Any]:
        xml_content = await self._fetch_xml()
        return self.parse(xml_content)

    def parse(self, xml_content: str | bytes) -> dict[str, Any]:
        """Parse a feed document into a raw channel mapping.

        Args:
            xml_content: The RSS or Atom document.

        Returns:
            Mapping with ``title`` and ``items`` in document order.

        Raises:
            FeedError: If the document is not well-formed XML or not a feed.
        """
        try:
            root = ET.fromstring(xml_content)
        except ET.ParseError as e:
            raise FeedError(
                f"Failed to parse feed XML: {e}",
                source=self.name,
                cause=e,
            ) from e

        root_name = _local(root.tag)
        if root_name == "feed":
            return self._parse_atom(root)
        if root_name in ("rss", "RDF", "channel"):
            return self._parse_rss(root)
        raise FeedError(f"Not an RSS or Atom document: <{root_name}>", source=self.name)

    # --- RSS ---

    def _parse_rss(self, root: ET.Element) -> dict[str, Any]:
        channel = root if _local(root.tag) == "channel" else None
        if channel is None:
            channel = next((e for e in root if _local(e.tag) == "channel"), None)

        title = None
        if channel is not None:
            title = _text(next((e for e in channel if _local(e.tag) == "title"), None))

        items = [self._parse_rss_item(e) for e in root.iter() if _local(e.tag) == "item"]
        return {"title": title or "", "items": items}

    def _parse_rss_item(self, item: ET.Element) -> dict[str, Any]:
        """Parse a single RSS item element.

        Only present elements produce keys, so the normalizer can tell a
        missing field from an empty one.
        """
        data: dict[str, Any] = {}
        categories: list[str] = []

        for elem in item:
            name = _local(elem.tag)
            namespace = elem.tag[1:].split("}", 1)[0] if elem.tag.startswith("{") else ""

            if name == "title":
                data["title"] = _text(elem) or ""
            elif name == "link":
                data["link"] = _text(elem) or ""
            elif name == "description":
                data["description"] = _text(elem) or ""
            elif name == "encoded" and namespace == CONTENT_NS:
                data["content"] = _text(elem) or ""
            elif name == "pubDate":
                data["pub_date"] = _text(elem) or ""
            elif name == "date" and namespace == DC_NS:
                data.setdefault("pub_date", _text(elem) or "")
            elif name == "author" or (name == "creator" and namespace == DC_NS):
                data.setdefault("author", _text(elem) or "")
            elif name == "source" and elem.get("url"):
                data["source_url"] = elem.get("url")
            elif name == "category" and elem.text:
                categories.append(elem.text.strip())

        if categories:
            data["categories"] = categories
        return data

    # --- Atom ---

    def _parse_atom(self, root: ET.Element) -> dict[str, Any]:
        title = _text(self._atom_child(root, "title"))
        entries = [e for e in root if _local(e.tag) == "entry"]
        return {"title": title or "", "items": [self._parse_atom_entry(e) for e in entries]}

    @staticmethod
    def _atom_child(parent: ET.Element, tag: str) -> ET.Element | None:
        elem = parent.find(f"{{{ATOM_NS}}}{tag}")
        if elem is None:
            elem = parent.find(tag)
        return elem

    def _parse_atom_entry(self, entry: ET.Element) -> dict[str, Any]:
        data: dict[str, Any] = {}

        title = _text(self._atom_child(entry, "title"))
        if title is not None:
            data["title"] = title

        published = _text(self._atom_child(entry, "published"))
        updated = _text(self._atom_child(entry, "updated"))
        if published or updated:
            data["pub_date"] = published or updated

        summary = _text(self._atom_child(entry, "summary"))
        if summary is not None:
            data["description"] = summary

        content = self._atom_child(entry, "content")
        if content is not None:
            data["content"] = self._atom_content(content)

        author = self._atom_child(entry, "author")
        if author is not None:
            name = _text(self._atom_child(author, "name"))
            if name:
                data["author"] = name

        for link in entry:
            if _local(link.tag) != "link" or not link.get("href"):
                continue
            if link.get("rel", "alternate") == "alternate":
                data["link"] = link.get("href")
                break

        categories = [
            c.get("term") for c in entry if _local(c.tag) == "category" and c.get("term")
        ]
        if categories:
            data["categories"] = categories
        return data

    @staticmethod
    def _atom_content(content: ET.Element) -> str:
        """Return entry content as markup; xhtml content is serialized back."""
        if content.get("type") == "xhtml" and len(content):
            return "".join(ET.tostring(child, encoding="unicode") for child in content).strip()
        return (content.text or "").strip()
