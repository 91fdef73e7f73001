"""Snapshot persistence interface."""

from typing import Protocol


class SnapshotStore(Protocol):
    """Interface for the single durability boundary of the matrix state."""

    def load(self) -> dict | None:
        """Load the raw snapshot. Returns None if nothing was saved yet."""
        ...

    def save(self, snapshot: dict) -> bool:
        """Write the snapshot. Returns False on failure, never raises."""
        ...
