"""
JSON file-based adapter implementing PersistenceInterface.
Stores one <key>.json file per collection key. Data persists between restarts,
no database setup needed.
"""
import json
import os
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Optional

from .base import PersistenceInterface, StorageReadError, StorageWriteError
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class JSONFileAdapter(PersistenceInterface):
    """
    JSON file-based persistence adapter.

    Writes go to a temporary file first and are moved into place, so a crash
    mid-write never leaves a truncated blob behind. A blob that cannot be
    decoded is renamed to <key>.corrupt-<timestamp>.json before the read
    error is raised, so the data is kept for manual recovery and the next
    save does not overwrite it.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize JSON adapter.

        Args:
            data_dir: Directory to store JSON files (defaults to <repo>/data)
        """
        if data_dir is None:
            base_dir = Path(__file__).resolve().parent.parent.parent.parent
            data_dir = base_dir / "data"

        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # Lock for thread-safe file operations
        self._lock = Lock()

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> Optional[Any]:
        """Load data for key from its JSON file."""
        path = self._path_for(key)
        with self._lock:
            if not path.exists():
                return None
            try:
                with open(path, "r", encoding="utf-8") as f:
                    return json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                backup = self._quarantine(path)
                raise StorageReadError(
                    f"Could not decode {path.name} (moved to {backup.name if backup else 'nowhere'}): {e}"
                ) from e
            except OSError as e:
                raise StorageReadError(f"Could not read {path.name}: {e}") from e

    def save(self, key: str, data: Any) -> None:
        """Save data for key to its JSON file."""
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        with self._lock:
            try:
                payload = json.dumps(data, indent=2, ensure_ascii=False)
            except (TypeError, ValueError) as e:
                raise StorageWriteError(f"Data for '{key}' is not JSON serializable: {e}") from e
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_path, path)
            except OSError as e:
                raise StorageWriteError(f"Error saving {path.name}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        with self._lock:
            if not path.exists():
                return False
            try:
                path.unlink()
            except OSError as e:
                raise StorageWriteError(f"Error deleting {path.name}: {e}") from e
            return True

    def _quarantine(self, path: Path) -> Optional[Path]:
        """Move an undecodable file aside. Returns the new path, or None if the move failed."""
        stamp = datetime.now().strftime("%Y%m%d%H%M%S")
        backup = path.with_name(f"{path.stem}.corrupt-{stamp}.json")
        try:
            os.replace(path, backup)
        except OSError as e:
            logger.error(f"Could not move corrupt file {path.name} aside: {e}")
            return None
        logger.warning(f"Moved undecodable {path.name} to {backup.name}")
        return backup
