"""Shared workflow layer between the CLI and the reminder scanner.

Each command runs synchronously against the in-memory Matrix, then the
new state is written back best-effort. A failed write is logged and never
undoes the in-memory change.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from .adapters.file_store import FileSnapshotStore
from .config import Config
from .core.matrix import Matrix
from .core.snapshot import from_snapshot, to_snapshot
from .ports.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


def get_store(config: Config) -> FileSnapshotStore:
    """Resolve the snapshot file for the configured identity scope."""
    return FileSnapshotStore(config.data_path, scope=config.scope)


def open_matrix(store: SnapshotStore, config: Config) -> Matrix:
    """Load the matrix, falling back to a fresh one section by section."""
    return from_snapshot(store.load(), default_board_name=config.default_board_name)


def persist(matrix: Matrix, store: SnapshotStore) -> bool:
    """Best-effort write of the current state."""
    try:
        saved = store.save(to_snapshot(matrix))
    except Exception as e:
        logger.warning(f"Snapshot save raised: {e}")
        return False
    if not saved:
        logger.warning("Snapshot was not saved; in-memory state kept")
    return saved


@contextmanager
def session(config: Config, store: SnapshotStore | None = None) -> Iterator[Matrix]:
    """
    Open the matrix for one command and persist it afterwards.

    State is written even when the command raised after mutating, since
    the in-memory state is authoritative. Validation errors raise before
    any mutation so nothing changes in that case.
    """
    store = store or get_store(config)
    matrix = open_matrix(store, config)
    try:
        yield matrix
    finally:
        persist(matrix, store)
