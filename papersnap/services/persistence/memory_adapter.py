"""
In-memory adapter implementing PersistenceInterface.
Perfect for demos and testing - data is lost on restart.
"""
import json
from typing import Any, Dict, Optional

from .base import PersistenceInterface, StorageWriteError


class MemoryAdapter(PersistenceInterface):
    """
    In-memory persistence adapter using a Python dict.

    Values are stored as JSON text so that saving something the JSON file
    backend could not save fails here too.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._blobs: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._blobs[key] = json.dumps(value)
        self.save_count = 0

    def load(self, key: str) -> Optional[Any]:
        blob = self._blobs.get(key)
        return json.loads(blob) if blob is not None else None

    def save(self, key: str, data: Any) -> None:
        try:
            self._blobs[key] = json.dumps(data)
        except (TypeError, ValueError) as e:
            raise StorageWriteError(f"Data for '{key}' is not JSON serializable: {e}") from e
        self.save_count += 1

    def delete(self, key: str) -> bool:
        return self._blobs.pop(key, None) is not None

    def keys(self):
        return list(self._blobs.keys())
