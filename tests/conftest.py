import pytest
from fastapi.testclient import TestClient

from papersnap.domain.entities import DocumentRecord
from papersnap.domain.value_objects import DocType
from papersnap.routers import dependencies
from papersnap.services.document_store import DocumentStore
from papersnap.services.persistence import MemoryAdapter, StorageReadError, StorageWriteError
from papersnap.services.providers import MockProvider
from papersnap.services.settings_service import SettingsService


class FailingWriteAdapter(MemoryAdapter):
    """Loads normally but every save fails, like a full browser quota."""

    def save(self, key, data):
        raise StorageWriteError("quota exceeded")


class KeyFailingAdapter(MemoryAdapter):
    """Fails writes for the listed keys only."""

    def __init__(self, failing_keys, initial=None):
        super().__init__(initial)
        self.failing_keys = set(failing_keys)

    def save(self, key, data):
        if key in self.failing_keys:
            raise StorageWriteError("quota exceeded")
        super().save(key, data)


class UnreadableAdapter(MemoryAdapter):
    def load(self, key):
        raise StorageReadError(f"{key} is corrupt")


def make_record(doc_id="doc-1", **overrides) -> DocumentRecord:
    fields = {
        "id": doc_id,
        "kind": DocType.RECEIPT,
        "vendor": "Shell Station",
        "date": "2024-03-15",
        "amount": 150.0,
        "currency": "USD",
        "tax": 28.05,
        "category": "Fuel",
        "summary": "Fuel purchase",
        "file_data": "aGVsbG8=",
        "mime_type": "image/png",
        "created_at": "2024-03-15T10:00:00+00:00",
    }
    fields.update(overrides)
    return DocumentRecord(**fields)


@pytest.fixture
def memory_adapter():
    return MemoryAdapter()


@pytest.fixture
def store(memory_adapter):
    return DocumentStore(memory_adapter)


@pytest.fixture
def settings_service(memory_adapter):
    return SettingsService(memory_adapter)


@pytest.fixture
def client(memory_adapter):
    """Application client backed by in-memory persistence and the mock provider."""
    from papersnap.main import app

    dependencies.reset_services()
    dependencies.initialize_services(memory_adapter, MockProvider())
    with TestClient(app) as test_client:
        yield test_client
    dependencies.reset_services()
