"""Custom exceptions.

feeddump uses a hierarchy of exceptions so callers can tell recoverable
checkpoint problems apart from run-fatal ones:

Example:
    >>> from feeddump.core.exceptions import (
    ...     CheckpointParseError, FeedDumpError, FeedError
    ... )
    >>> isinstance(CheckpointParseError("bad json"), FeedDumpError)
    True
    >>> try:
    ...     raise FeedError("timed out", source="blog")
    ... except FeedDumpError as e:
    ...     print(f"Caught: {type(e).__name__}")
    Caught: FeedError
"""

from __future__ import annotations


class FeedDumpError(Exception):
    """Base exception for feeddump.

    Example:
        >>> from feeddump.core.exceptions import FeedDumpError
        >>> e = FeedDumpError("something went wrong")
        >>> str(e)
        'something went wrong'
    """


class ConfigurationError(FeedDumpError):
    """Configuration file is unreadable or invalid."""


class ConfigNotFoundError(ConfigurationError):
    """Configuration file does not exist.

    Example:
        >>> from feeddump.core.exceptions import ConfigNotFoundError
        >>> raise ConfigNotFoundError("no config")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigNotFoundError: no config
    """


class PathResolutionError(FeedDumpError):
    """A default directory could not be resolved (no HOME on this system)."""


class CheckpointError(FeedDumpError):
    """Checkpoint store operation failed."""


class CheckpointNotFoundError(CheckpointError):
    """No checkpoint has been written yet.

    Recovered by the run coordinator as an empty collection.
    """


class CheckpointParseError(CheckpointError):
    """Checkpoint exists but does not deserialize.

    Recovered by the run coordinator as an empty collection, which makes
    the next run re-emit every entry once.
    """


class CheckpointDumpError(CheckpointError):
    """Checkpoint collection could not be serialized."""


class FeedError(FeedDumpError):
    """Fetching or parsing a feed failed. Aborts the run.

    Example:
        >>> from feeddump.core.exceptions import FeedError
        >>> err = FeedError("Connection failed", source="blog")
        >>> err.source
        'blog'
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.cause = cause


class UnsupportedFormatError(FeedDumpError):
    """Configured output format has no renderer.

    Example:
        >>> from feeddump.core.exceptions import UnsupportedFormatError
        >>> raise UnsupportedFormatError("markdown")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        UnsupportedFormatError: markdown
    """
