"""Base model shared by all feeddump models.

Example:
    >>> from feeddump.models.base import FeedDumpModel
    >>> class Point(FeedDumpModel):
    ...     x: int
    >>> Point(x=1).x
    1
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FeedDumpModel(BaseModel):
    """Base model with standard configuration.

    Models are immutable: a run builds new values instead of mutating the
    ones it received.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )
