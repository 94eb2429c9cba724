"""
Persistence Factory for creating storage adapters.
Implements Factory Pattern for plug-and-play storage support.
"""
import os
from pathlib import Path
from typing import Optional

from .base import PersistenceInterface
from .json_adapter import JSONFileAdapter
from .memory_adapter import MemoryAdapter
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class PersistenceFactory:
    """
    Factory for creating persistence adapters.
    Supports JSON (file-based) and Memory (in-memory) backends.
    """

    @staticmethod
    def create(storage_type: Optional[str] = None, **kwargs) -> PersistenceInterface:
        """
        Create a persistence adapter instance.

        Args:
            storage_type: 'json', 'memory', or None to read STORAGE_TYPE from the environment
            **kwargs: Additional arguments for specific adapters (data_dir for 'json')

        Returns:
            PersistenceInterface instance

        Examples:
            store = PersistenceFactory.create('json', data_dir=Path('data'))
            store = PersistenceFactory.create('memory')
        """
        if storage_type is None:
            storage_type = os.getenv("STORAGE_TYPE", "json")

        storage_type = storage_type.lower()

        if storage_type == "json":
            return PersistenceFactory._create_json(**kwargs)
        elif storage_type == "memory":
            logger.info("Using in-memory persistence (data is lost on restart)")
            return MemoryAdapter()
        else:
            raise ValueError(
                f"Unsupported storage type: {storage_type}. "
                f"Supported types: 'json', 'memory'"
            )

    @staticmethod
    def _create_json(**kwargs) -> JSONFileAdapter:
        data_dir = kwargs.get("data_dir")
        if data_dir:
            data_dir = Path(data_dir) if isinstance(data_dir, str) else data_dir
        adapter = JSONFileAdapter(data_dir=data_dir)
        logger.info(f"Using JSON file persistence at {adapter.data_dir}")
        return adapter
