import pytest
from fastapi.testclient import TestClient

from papersnap.core.config import DOCUMENTS_KEY
from papersnap.routers import dependencies
from papersnap.services.providers import MockProvider

from conftest import KeyFailingAdapter, make_record


def seed(*records):
    store = dependencies.get_document_store()
    for record in records:
        store.add_document(record)
    return store


def upload(client, content=b"RECEIPT\nTotal 12.00", filename="receipt.txt", mime="text/plain", scan_mode="finance"):
    return client.post(
        "/upload",
        files={"file": (filename, content, mime)},
        data={"scan_mode": scan_mode},
    )


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "x-request-id" in response.headers


def test_incoming_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["x-request-id"] == "req-42"


@pytest.fixture
def failing_documents_client():
    from papersnap.main import app

    dependencies.reset_services()
    dependencies.initialize_services(KeyFailingAdapter([DOCUMENTS_KEY]), MockProvider())
    with TestClient(app) as test_client:
        yield test_client
    dependencies.reset_services()


def test_failed_write_is_reported_without_blocking(failing_documents_client):
    seed(make_record("A"))

    response = failing_documents_client.post("/documents/A/seen")

    assert response.status_code == 200
    assert response.headers["x-storage-warning"] == "unsaved-changes"
    health = failing_documents_client.get("/health").json()
    assert health["storage"] == "degraded"
    assert "quota exceeded" in health["last_save_error"]


def test_failed_documents_write_survives_folder_write(failing_documents_client):
    seed(make_record("A"))

    response = failing_documents_client.post("/folders", json={"name": "Taxes"})

    assert response.status_code == 201
    assert response.headers["x-storage-warning"] == "unsaved-changes"


def test_successful_write_has_no_storage_warning(client):
    response = client.post("/folders", json={"name": "Taxes"})
    assert "x-storage-warning" not in response.headers


def test_unknown_route_is_404(client):
    assert client.get("/non-existent-route").status_code == 404


def test_cors_headers(client):
    response = client.options(
        "/documents",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_upload_creates_new_document(client, memory_adapter):
    response = upload(client)

    assert response.status_code == 201
    doc = response.json()
    assert doc["type"] == "RECEIPT"
    assert doc["vendor"] == "RECEIPT"
    assert doc["status"] == "completed"
    assert doc["isNew"] is True
    assert doc["mimeType"] == "text/plain"
    assert memory_adapter.load(DOCUMENTS_KEY)[0]["id"] == doc["id"]


def test_upload_rejects_empty_file(client):
    response = upload(client, content=b"")
    assert response.status_code == 400


def test_upload_rejects_unknown_scan_mode(client):
    assert upload(client, scan_mode="poetry").status_code == 422


def test_list_documents_filters_and_sorts(client):
    seed(
        make_record("A", vendor="Shell", date="2024-03-15", category="Fuel"),
        make_record("B", vendor="IKEA", date="2024-05-01", category="Office"),
        make_record("C", vendor="Orlen", date="2024-01-10", category="Fuel"),
    )

    assert [d["id"] for d in client.get("/documents").json()] == ["B", "A", "C"]
    assert [d["id"] for d in client.get("/documents", params={"category": "Fuel"}).json()] == ["A", "C"]
    assert [d["id"] for d in client.get("/documents", params={"search": "ikea"}).json()] == ["B"]
    assert [d["id"] for d in client.get("/documents", params={"date_from": "2024-03-01"}).json()] == ["B", "A"]


def test_get_missing_document_is_404(client):
    response = client.get("/documents/missing")
    assert response.status_code == 404
    assert response.json()["status_code"] == 404


def test_update_document(client):
    seed(make_record("A"))

    response = client.put("/documents/A", json={"vendor": "Shell Polska", "amount": 99.5, "currency": "pln"})

    assert response.status_code == 200
    body = response.json()
    assert body["vendor"] == "Shell Polska"
    assert body["amount"] == 99.5
    assert body["currency"] == "PLN"
    assert body["category"] == "Fuel"


def test_update_document_rejects_invalid_currency(client):
    seed(make_record("A"))
    assert client.put("/documents/A", json={"currency": "dollars"}).status_code == 422
    assert client.get("/documents/A").json()["currency"] == "USD"


def test_update_document_rejects_non_iso_date(client):
    seed(make_record("A"))
    assert client.put("/documents/A", json={"date": "yesterday"}).status_code == 422
    assert client.put("/documents/A", json={"date": "2024-13-01"}).status_code == 422
    assert client.get("/documents/A").json()["date"] == "2024-03-15"
    assert client.put("/documents/A", json={"date": "2024-04-01"}).json()["date"] == "2024-04-01"


def test_soft_delete_restore_and_purge(client):
    seed(make_record("A"), make_record("B"))

    assert client.delete("/documents/A").json()["isDeleted"] is True
    assert [d["id"] for d in client.get("/documents").json()] == ["B"]
    assert [d["id"] for d in client.get("/trash").json()] == ["A"]

    assert client.post("/trash/A/restore").json()["isDeleted"] is False
    assert client.get("/trash").json() == []

    client.delete("/documents/A")
    client.delete("/documents/B")
    assert client.delete("/trash").json() == {"count": 2}
    assert client.get("/trash").json() == []
    assert client.get("/documents").json() == []


def test_delete_from_trash_requires_trashed_document(client):
    seed(make_record("A"))

    assert client.delete("/trash/A").status_code == 404
    client.delete("/documents/A")
    assert client.delete("/trash/A").json() == {"count": 1}
    assert client.get("/documents/A").status_code == 404


def test_mark_seen(client):
    seed(make_record("A"))
    assert client.post("/documents/A/seen").json()["isNew"] is False
    assert client.post("/documents/missing/seen").status_code == 404


def test_folder_flow(client):
    seed(make_record("A"), make_record("B"))

    folder = client.post("/folders", json={"name": "  Taxes  "}).json()
    assert folder["name"] == "Taxes"

    assert client.post("/documents/A/move", json={"folderId": folder["id"]}).json()["folderId"] == folder["id"]
    assert [d["id"] for d in client.get(f"/folders/{folder['id']}/documents").json()] == ["A"]
    assert [d["id"] for d in client.get("/documents", params={"unfiled": True}).json()] == ["B"]
    assert client.get("/folders").json()[0]["documentCount"] == 1

    assert client.delete(f"/folders/{folder['id']}").json() == {"count": 1}
    assert client.get("/folders").json() == []
    assert "folderId" not in client.get("/documents/A").json()


def test_folder_name_cannot_be_blank(client):
    assert client.post("/folders", json={"name": "   "}).status_code == 400


def test_move_to_unknown_folder_is_404(client):
    seed(make_record("A"))
    assert client.post("/documents/A/move", json={"folderId": "nope"}).status_code == 404


def test_move_with_empty_folder_unfiles(client):
    seed(make_record("A"))
    folder = client.post("/folders", json={"name": "Work"}).json()
    client.post("/documents/A/move", json={"folderId": folder["id"]})

    body = client.post("/documents/A/move", json={"folderId": ""}).json()

    assert "folderId" not in body


def test_bulk_move(client):
    seed(make_record("A"), make_record("B"), make_record("C"))
    folder = client.post("/folders", json={"name": "Q1"}).json()

    response = client.post("/documents/move", json={"ids": ["A", "C", "missing"], "folderId": folder["id"]})

    assert response.json() == {"count": 2}
    assert sorted(d["id"] for d in client.get(f"/folders/{folder['id']}/documents").json()) == ["A", "C"]


def test_flashcards_flow(client):
    seed(make_record("A", summary="Photosynthesis converts light to energy"))

    created = client.post("/flashcards", json={"title": "Biology", "documentIds": ["A"]})

    assert created.status_code == 201
    flashcard_set = created.json()
    assert flashcard_set["sourceDocIds"] == ["A"]
    assert len(flashcard_set["cards"]) >= 1
    assert [fs["id"] for fs in client.get("/flashcards").json()] == [flashcard_set["id"]]

    assert client.delete(f"/flashcards/{flashcard_set['id']}").json() == {"count": 1}
    assert client.delete(f"/flashcards/{flashcard_set['id']}").status_code == 404


def test_flashcards_require_existing_documents(client):
    assert client.post("/flashcards", json={"title": "X", "documentIds": ["missing"]}).status_code == 404


def test_chat_flow(client):
    seed(make_record("A"))

    session = client.post("/chat/sessions", json={}).json()
    assert session["document_count"] == 1

    reply = client.post(f"/chat/sessions/{session['session_id']}/messages", json={"message": "Total?"})
    assert reply.status_code == 200
    assert "Total?" in reply.json()["reply"]

    assert client.delete(f"/chat/sessions/{session['session_id']}").status_code == 200
    missing = client.post(f"/chat/sessions/{session['session_id']}/messages", json={"message": "Hi"})
    assert missing.status_code == 404


def test_chat_failure_is_503(client):
    session = dependencies.get_chat_manager().create_session([])

    class Broken:
        def chat(self, system_instruction, history, message):
            raise ConnectionError("offline")

    session.provider = Broken()
    response = client.post(f"/chat/sessions/{session.id}/messages", json={"message": "Hi"})

    assert response.status_code == 503
    assert "try again" in response.json()["error"]


def test_settings_endpoints(client):
    assert client.get("/settings").json()["defaultCurrency"] == "USD"

    updated = client.put("/settings", json={"defaultCurrency": "eur", "ocrLanguage": "pl"}).json()
    assert updated["defaultCurrency"] == "EUR"
    assert updated["ocrLanguage"] == "pl"

    assert client.put("/settings", json={"defaultTaxRate": 500}).status_code == 422

    assert "Software" in client.post("/settings/categories", json={"name": "Software"}).json()
    assert "Software" not in client.delete("/settings/categories/Software").json()
    assert client.delete("/settings/categories/Software").status_code == 400


def test_export_csv(client):
    seed(make_record("A", vendor='Joe "Pump"'), make_record("B", category="Office", vendor="IKEA"))

    response = client.get("/export/csv", params={"category": "Fuel"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "papersnap_export_" in response.headers["content-disposition"]
    lines = response.text.split("\n")
    assert lines[0] == "Type,Name,Date,Amount,Currency,Tax,Category,Summary"
    assert lines[1].startswith('RECEIPT,"Joe ""Pump""",2024-03-15,150,USD')
    assert len(lines) == 2


def test_export_pdf(client):
    seed(make_record("A"))

    response = client.get("/documents/A/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert "Shell Station_2024-03-15.pdf" in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_dashboard(client):
    seed(make_record("A"), make_record("B"))
    client.delete("/documents/B")

    stats = client.get("/dashboard").json()

    assert stats["total_docs"] == 1
    assert stats["ready_to_export"] == 1
    assert stats["has_new_documents"] is True
    assert [d["id"] for d in stats["recent_documents"]] == ["A"]
