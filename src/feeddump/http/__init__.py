"""feeddump HTTP utilities.

Example:
    >>> from feeddump.http import HttpClient
    >>>
    >>> async with HttpClient(timeout=10.0) as client:
    ...     xml = await client.get_bytes("https://example.com/rss.xml")
"""

from feeddump.http.client import HttpClient, HttpClientError, http_client

__all__ = [
    "HttpClient",
    "HttpClientError",
    "http_client",
]
