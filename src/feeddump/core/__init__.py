"""Core checkpointing and synchronization."""

from feeddump.core.checkpoint import (
    CheckpointCollection,
    CheckpointStore,
    FileCheckpointStore,
    MemoryCheckpointStore,
    load_collection,
)
from feeddump.core.sync import SyncResult, find_boundary, sync_feed

__all__ = [
    # Checkpointing
    "CheckpointCollection",
    "CheckpointStore",
    "FileCheckpointStore",
    "MemoryCheckpointStore",
    "load_collection",
    # Sync engine
    "SyncResult",
    "find_boundary",
    "sync_feed",
]
