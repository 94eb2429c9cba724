import json

import pytest

from papersnap.services.persistence import (
    JSONFileAdapter,
    MemoryAdapter,
    PersistenceFactory,
    StorageReadError,
    StorageWriteError,
)


def test_json_adapter_missing_key_returns_none(tmp_path):
    adapter = JSONFileAdapter(data_dir=tmp_path)
    assert adapter.load("papersnap_documents") is None


def test_json_adapter_save_and_load(tmp_path):
    adapter = JSONFileAdapter(data_dir=tmp_path)
    adapter.save("papersnap_folders", [{"id": "f1", "name": "Zażółć"}])

    assert adapter.load("papersnap_folders") == [{"id": "f1", "name": "Zażółć"}]
    assert (tmp_path / "papersnap_folders.json").exists()
    assert not (tmp_path / "papersnap_folders.json.tmp").exists()


def test_json_adapter_survives_new_instance(tmp_path):
    JSONFileAdapter(data_dir=tmp_path).save("papersnap_documents", [{"id": "A"}])
    assert JSONFileAdapter(data_dir=tmp_path).load("papersnap_documents") == [{"id": "A"}]


def test_json_adapter_quarantines_corrupt_file(tmp_path):
    (tmp_path / "papersnap_documents.json").write_text("[{not json", encoding="utf-8")
    adapter = JSONFileAdapter(data_dir=tmp_path)

    with pytest.raises(StorageReadError):
        adapter.load("papersnap_documents")

    backups = list(tmp_path.glob("papersnap_documents.corrupt-*.json"))
    assert len(backups) == 1
    assert backups[0].read_text(encoding="utf-8") == "[{not json"
    assert adapter.load("papersnap_documents") is None


def test_json_adapter_rejects_unserializable_data(tmp_path):
    adapter = JSONFileAdapter(data_dir=tmp_path)
    with pytest.raises(StorageWriteError):
        adapter.save("papersnap_documents", [object()])


def test_json_adapter_rejects_path_like_keys(tmp_path):
    adapter = JSONFileAdapter(data_dir=tmp_path)
    with pytest.raises(ValueError):
        adapter.save("../escape", [])


def test_json_adapter_delete(tmp_path):
    adapter = JSONFileAdapter(data_dir=tmp_path)
    adapter.save("papersnap_settings", {"categories": []})

    assert adapter.delete("papersnap_settings") is True
    assert adapter.delete("papersnap_settings") is False


def test_memory_adapter_stores_copies():
    adapter = MemoryAdapter()
    data = [{"id": "A"}]
    adapter.save("k", data)
    data[0]["id"] = "changed"

    assert adapter.load("k") == [{"id": "A"}]
    assert adapter.save_count == 1


def test_memory_adapter_initial_data_and_keys():
    adapter = MemoryAdapter({"papersnap_folders": []})
    assert adapter.keys() == ["papersnap_folders"]
    assert adapter.load("papersnap_folders") == []


def test_memory_adapter_rejects_unserializable_data():
    with pytest.raises(StorageWriteError):
        MemoryAdapter().save("k", {"when": object()})


def test_factory_creates_adapters(tmp_path):
    assert isinstance(PersistenceFactory.create("memory"), MemoryAdapter)
    json_adapter = PersistenceFactory.create("json", data_dir=str(tmp_path))
    assert isinstance(json_adapter, JSONFileAdapter)
    assert json_adapter.data_dir == tmp_path


def test_factory_rejects_unknown_type():
    with pytest.raises(ValueError):
        PersistenceFactory.create("redis")


def test_json_file_is_readable_json(tmp_path):
    adapter = JSONFileAdapter(data_dir=tmp_path)
    adapter.save("papersnap_documents", [{"id": "A", "amount": 1.5}])

    raw = json.loads((tmp_path / "papersnap_documents.json").read_text(encoding="utf-8"))
    assert raw == [{"id": "A", "amount": 1.5}]
