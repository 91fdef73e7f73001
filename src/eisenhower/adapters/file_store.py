"""File-based snapshot storage adapter."""

import json
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_UNSAFE_SCOPE = re.compile(r"[^A-Za-z0-9_.-]")


class FileSnapshotStore:
    """
    JSON file snapshot storage.

    Implements SnapshotStore protocol. Each identity scope gets its own
    file, so the core never has to know who is signed in.
    """

    def __init__(self, data_dir: Path | str, scope: str = "guest"):
        self.data_dir = Path(data_dir).expanduser()
        self.scope = _UNSAFE_SCOPE.sub("_", scope) or "guest"

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.scope}.json"

    def load(self) -> dict | None:
        """Read the snapshot. Returns None if missing or undecodable."""
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text())
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read snapshot {self.path}: {e}")
            return None

    def save(self, snapshot: dict) -> bool:
        """Write the snapshot via a temp file. Returns False on failure."""
        tmp_path = self.path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(snapshot, indent=2))
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to save snapshot {self.path}: {e}")
            return False
        return True
