"""
Persistence abstraction layer for plug-and-play storage support.
Supports JSON (file-based) and Memory (in-memory) backends.
"""
from .base import PersistenceInterface, StorageError, StorageReadError, StorageWriteError
from .memory_adapter import MemoryAdapter
from .json_adapter import JSONFileAdapter
from .factory import PersistenceFactory

__all__ = [
    "PersistenceInterface",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "MemoryAdapter",
    "JSONFileAdapter",
    "PersistenceFactory",
]
