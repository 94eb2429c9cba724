"""
Abstract base class for persistence adapters.
All key/value backends the stores write through to must inherit from this class.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class StorageError(Exception):
    """Base class for persistence failures."""
    pass


class StorageReadError(StorageError):
    """Raised when a stored blob exists but cannot be read or decoded."""
    pass


class StorageWriteError(StorageError):
    """Raised when a blob cannot be written (disk full, permissions, unserializable data)."""
    pass


class PersistenceInterface(ABC):
    """
    Synchronous key/value store of JSON-compatible blobs.

    Keys are fixed per collection. Implementations must not keep references
    to the objects passed to save(); callers mutate their own copies freely.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """
        Load the blob stored under key.

        Returns:
            The decoded value, or None if nothing is stored under key

        Raises:
            StorageReadError: If the stored value cannot be decoded
        """
        pass

    @abstractmethod
    def save(self, key: str, data: Any) -> None:
        """
        Store data under key, replacing any previous value.

        Raises:
            StorageWriteError: If the value cannot be written
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. Returns True if something was removed."""
        pass
