"""Checkpoint support for incremental feed dumps.

A checkpoint records, per feed alias, the `FeedSummary` seen on the last
run. The next run uses its fingerprint as a watermark to find which
fetched entries are new. The collection is loaded once per run, updated
in memory, and saved back exactly once.

Example:
    >>> from feeddump.core.checkpoint import CheckpointCollection, MemoryCheckpointStore
    >>> from feeddump.models.entry import FeedSummary
    >>> store = MemoryCheckpointStore()
    >>> collection, previous = CheckpointCollection().replace(
    ...     "blog", FeedSummary(title="Blog", fingerprint="x")
    ... )
    >>> previous is None
    True
    >>> store.save(collection)
    >>> store.load().get("blog").fingerprint
    'x'
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from pydantic import Field, ValidationError

from feeddump.core.exceptions import (
    CheckpointDumpError,
    CheckpointNotFoundError,
    CheckpointParseError,
)
from feeddump.models.base import FeedDumpModel
from feeddump.models.entry import FeedSummary

logger = logging.getLogger(__name__)

CHECKPOINT_FILENAME = "collections.json"


class CheckpointCollection(FeedDumpModel):
    """Mapping from feed alias to the last-synced `FeedSummary`.

    Immutable: every update returns a new collection, so a snapshot handed
    to one feed's sync can never be changed behind its back.

    Example:
        >>> from feeddump.core.checkpoint import CheckpointCollection
        >>> from feeddump.models.entry import FeedSummary
        >>> c1, _ = CheckpointCollection().replace("a", FeedSummary(fingerprint="1"))
        >>> c2, prev = c1.replace("a", FeedSummary(fingerprint="2"))
        >>> prev.fingerprint, c2.get("a").fingerprint, c1.get("a").fingerprint
        ('1', '2', '1')
    """

    metadata: dict[str, FeedSummary] = Field(default_factory=dict)

    @property
    def aliases(self) -> list[str]:
        """Stored aliases in sorted order."""
        return sorted(self.metadata)

    def get(self, alias: str) -> FeedSummary | None:
        """Return the checkpoint stored for ``alias``, if any."""
        return self.metadata.get(alias)

    def replace(
        self, alias: str, summary: FeedSummary
    ) -> tuple[CheckpointCollection, FeedSummary | None]:
        """Store ``summary`` under ``alias``, overwriting any prior value.

        Returns:
            The updated collection and the summary previously stored for
            ``alias`` (None on first sync).
        """
        previous = self.metadata.get(alias)
        updated = {**self.metadata, alias: summary}
        return CheckpointCollection(metadata=updated), previous

    def retain(self, aliases: Iterable[str]) -> CheckpointCollection:
        """Return a collection holding only the given aliases.

        Example:
            >>> from feeddump.models.entry import FeedSummary
            >>> c, _ = CheckpointCollection().replace("old", FeedSummary(fingerprint="1"))
            >>> c.retain(["new"]).aliases
            []
        """
        keep = set(aliases)
        return CheckpointCollection(
            metadata={k: v for k, v in self.metadata.items() if k in keep}
        )

    def __len__(self) -> int:
        return len(self.metadata)

    def __contains__(self, alias: object) -> bool:
        return alias in self.metadata

    def dumps(self) -> str:
        """Serialize the whole collection to JSON, aliases in sorted order.

        Raises:
            CheckpointDumpError: If serialization fails.
        """
        try:
            ordered = CheckpointCollection(metadata=dict(sorted(self.metadata.items())))
            return ordered.model_dump_json(indent=2)
        except (ValueError, TypeError) as e:
            raise CheckpointDumpError(f"Failed to serialize checkpoints: {e}") from e

    @classmethod
    def loads(cls, data: str | bytes) -> CheckpointCollection:
        """Deserialize a collection from JSON.

        Raises:
            CheckpointParseError: If the data is not a valid checkpoint document.
        """
        try:
            return cls.model_validate(json.loads(data))
        except (ValueError, ValidationError) as e:
            raise CheckpointParseError(f"Failed to parse checkpoints: {e}") from e


class CheckpointStore(ABC):
    """Abstract base class for checkpoint storage backends.

    Stores only whole collections: there is no per-alias update.
    """

    @abstractmethod
    def load(self) -> CheckpointCollection:
        """Load the stored collection.

        Raises:
            CheckpointNotFoundError: Nothing has been saved yet.
            CheckpointParseError: The stored data does not deserialize.
        """
        ...

    @abstractmethod
    def save(self, collection: CheckpointCollection) -> None:
        """Replace the stored collection.

        Raises:
            CheckpointDumpError: The collection could not be serialized.
        """
        ...


class MemoryCheckpointStore(CheckpointStore):
    """In-memory checkpoint store for testing.

    Keeps the serialized form so that loads go through the same parsing
    path as the file store.
    """

    def __init__(self, data: str | None = None) -> None:
        self._data = data
        self.save_count = 0

    def load(self) -> CheckpointCollection:
        if self._data is None:
            raise CheckpointNotFoundError("No checkpoint saved")
        return CheckpointCollection.loads(self._data)

    def save(self, collection: CheckpointCollection) -> None:
        self._data = collection.dumps()
        self.save_count += 1


class FileCheckpointStore(CheckpointStore):
    """File-based checkpoint store using a single JSON document.

    Saves are atomic: the collection is written to a temporary file in the
    same directory and moved over the target, so an interrupted save
    leaves the previous checkpoint intact.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> from feeddump.core.checkpoint import CheckpointCollection, FileCheckpointStore
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     store = FileCheckpointStore(Path(tmpdir) / "collections.json")
        ...     store.save(CheckpointCollection())
        ...     len(store.load())
        0
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize file checkpoint store.

        Args:
            path: Location of the checkpoint document.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Location of the checkpoint document."""
        return self._path

    def load(self) -> CheckpointCollection:
        """Load the collection from disk.

        Other I/O failures, such as permission errors, propagate.
        """
        try:
            data = self._path.read_bytes()
        except FileNotFoundError as e:
            raise CheckpointNotFoundError(f"No checkpoint at {self._path}") from e
        return CheckpointCollection.loads(data)

    def save(self, collection: CheckpointCollection) -> None:
        """Atomically replace the checkpoint document."""
        payload = collection.dumps()
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved %d checkpoints to %s", len(collection), self._path)


def load_collection(store: CheckpointStore) -> CheckpointCollection:
    """Load checkpoints, starting from empty when there are none usable.

    A missing checkpoint is normal on first run. A corrupt one is logged
    and treated the same way; the next run then re-emits every entry of
    every feed once instead of failing.

    Example:
        >>> from feeddump.core.checkpoint import MemoryCheckpointStore, load_collection
        >>> len(load_collection(MemoryCheckpointStore("not valid json{{{")))
        0
    """
    try:
        return store.load()
    except CheckpointNotFoundError as e:
        logger.info("%s; starting from an empty checkpoint", e)
    except CheckpointParseError as e:
        logger.warning(
            "Ignoring unreadable checkpoint, all entries will be dumped again: %s", e
        )
    return CheckpointCollection()
