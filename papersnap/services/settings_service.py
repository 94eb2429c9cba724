"""
Settings Service - user preferences (category list, currency, tax rate, OCR options).

Persisted as a single JSON object under its own key with the same
write-through, log-and-continue policy as the document store.
"""
from threading import RLock
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..api.exceptions import InvalidCategoryError
from ..core.config import SETTINGS_KEY
from ..core.logging_config import get_logger
from ..domain.entities import AppSettings
from ..utils.validators import validate_category_name
from .persistence.base import PersistenceInterface, StorageReadError, StorageWriteError

logger = get_logger(__name__)


class SettingsService:
    """Owns the AppSettings instance and keeps it in sync with persistence."""

    def __init__(self, persistence: PersistenceInterface):
        self._persistence = persistence
        self._lock = RLock()
        self.last_save_error: Optional[str] = None
        self._settings = self._load()

    def _load(self) -> AppSettings:
        try:
            raw = self._persistence.load(SETTINGS_KEY)
        except StorageReadError as e:
            logger.error(f"Could not load settings, using defaults: {e}")
            return AppSettings()
        if raw is None:
            return AppSettings()
        try:
            return AppSettings.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Stored settings are invalid, using defaults: {e.error_count()} validation error(s)")
            return AppSettings()

    def _save(self) -> None:
        try:
            self._persistence.save(SETTINGS_KEY, self._settings.to_storage())
        except StorageWriteError as e:
            self.last_save_error = str(e)
            logger.error(f"Failed to persist settings, keeping in-memory state: {e}")
        else:
            self.last_save_error = None

    @property
    def settings(self) -> AppSettings:
        with self._lock:
            return self._settings.model_copy(deep=True)

    @property
    def categories(self) -> List[str]:
        with self._lock:
            return list(self._settings.categories)

    def update(self, changes: Dict[str, Any]) -> AppSettings:
        """
        Apply a partial update. Keys may be field names or their camelCase aliases.

        Raises:
            pydantic.ValidationError: If the merged settings are invalid
        """
        aliases = {name: (field.alias or name) for name, field in AppSettings.model_fields.items()}
        normalized = {aliases.get(key, key): value for key, value in changes.items()}
        with self._lock:
            self._settings = AppSettings.model_validate({**self._settings.to_storage(), **normalized})
            self._save()
            return self._settings.model_copy(deep=True)

    def add_category(self, name: str) -> List[str]:
        """Append a category. Duplicates are ignored."""
        name = validate_category_name(name)
        with self._lock:
            if name not in self._settings.categories:
                self._settings.categories.append(name)
                self._save()
                logger.info(f"Added category {name!r}")
            return list(self._settings.categories)

    def remove_category(self, name: str) -> List[str]:
        """
        Remove a category from the list.

        Documents already tagged with it keep the stale value.

        Raises:
            InvalidCategoryError: If the category is not in the list
        """
        with self._lock:
            if name not in self._settings.categories:
                raise InvalidCategoryError(f"Category '{name}' does not exist")
            self._settings.categories.remove(name)
            self._save()
            logger.info(f"Removed category {name!r}")
            return list(self._settings.categories)

    def reset(self) -> AppSettings:
        with self._lock:
            self._settings = AppSettings()
            self._save()
            return self._settings.model_copy(deep=True)
