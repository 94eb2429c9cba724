import json
from datetime import date

import pytest

from papersnap.api.exceptions import AssistantError, ChatSessionNotFoundError
from papersnap.services.assistant_service import (
    ChatSession,
    ChatSessionManager,
    FlashcardService,
    redact_documents,
)
from papersnap.services.prompts import FLASHCARD_CONTEXT_LIMIT, chat_system_instruction
from papersnap.services.providers import AIProvider

from conftest import make_record


class ScriptedProvider(AIProvider):
    """Chat and flashcard answers come from fixed values; errors can be injected."""

    def __init__(self, cards=None, reply="ok", error=None):
        self.cards = cards if cards is not None else []
        self.reply = reply
        self.error = error
        self.prompts = []
        self.chat_calls = []

    def extract_document(self, file_bytes, mime_type, scan_mode, instructions, schema):
        raise NotImplementedError

    def generate_flashcards(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.cards

    def chat(self, system_instruction, history, message):
        self.chat_calls.append({"system": system_instruction, "history": history, "message": message})
        if self.error:
            raise self.error
        return self.reply


def test_redact_documents_drops_file_payload():
    redacted = redact_documents([make_record("A", invoice_number="INV-7")])

    assert redacted == [{
        "id": "A",
        "type": "RECEIPT",
        "vendor": "Shell Station",
        "date": "2024-03-15",
        "amount": 150.0,
        "currency": "USD",
        "category": "Fuel",
        "summary": "Fuel purchase",
    }]


def test_system_instruction_contains_context_and_rules():
    docs = redact_documents([make_record("A")])
    text = chat_system_instruction(docs, today=date(2024, 4, 1))

    assert "You are PaperSnap AI" in text
    assert "Current Date: 2024-04-01" in text
    assert json.dumps(docs, ensure_ascii=False) in text
    assert "1. Answer based ONLY on the provided documents." in text
    assert "5. If asked about specific dates" in text
    assert "aGVsbG8=" not in text


def test_chat_session_keeps_history():
    provider = ScriptedProvider(reply="USD 150.00")
    session = ChatSession(provider, [make_record("A")])

    assert session.send_message("How much on fuel?") == "USD 150.00"
    session.send_message("And tax?")

    assert provider.chat_calls[1]["history"] == [
        {"role": "user", "text": "How much on fuel?"},
        {"role": "assistant", "text": "USD 150.00"},
    ]
    assert len(session.history) == 4


def test_chat_failure_raises_and_keeps_history_clean():
    session = ChatSession(ScriptedProvider(error=ConnectionError("offline")), [])

    with pytest.raises(AssistantError):
        session.send_message("Hello")
    assert session.history == []


def test_session_manager_lifecycle():
    manager = ChatSessionManager(ScriptedProvider(reply="hi"))
    session = manager.create_session([make_record("A")])

    assert manager.send_message(session.id, "hello") == "hi"
    assert manager.close_session(session.id) is True
    assert manager.close_session(session.id) is False
    with pytest.raises(ChatSessionNotFoundError):
        manager.get_session(session.id)


def test_generate_cards_truncates_context():
    provider = ScriptedProvider(cards=[{"front": "Q", "back": "A"}])
    cards = FlashcardService(provider).generate_cards("x" * (FLASHCARD_CONTEXT_LIMIT + 500))

    assert [(c.front, c.back) for c in cards] == [("Q", "A")]
    assert provider.prompts[0].rsplit("Text:\n", 1)[1] == "x" * FLASHCARD_CONTEXT_LIMIT


def test_generate_cards_failure_returns_empty_list():
    assert FlashcardService(ScriptedProvider(error=ValueError("bad json"))).generate_cards("text") == []


def test_generate_cards_skips_malformed_entries():
    provider = ScriptedProvider(cards=[{"front": "Q"}, {"front": "Q2", "back": "A2"}])
    cards = FlashcardService(provider).generate_cards("text")
    assert [c.front for c in cards] == ["Q2"]


def test_build_set_combines_documents():
    provider = ScriptedProvider(cards=[{"front": "Q", "back": "A"}])
    docs = [
        make_record("A", vendor="Lecture 1", summary="Cells"),
        make_record("B", vendor="Lecture 2", summary="DNA"),
    ]

    flashcard_set = FlashcardService(provider).build_set("Biology", docs)

    assert "--- Document: Lecture 1 ---\nCells\n\n--- Document: Lecture 2 ---\nDNA" in provider.prompts[0]
    assert flashcard_set.title == "Biology"
    assert flashcard_set.source_doc_ids == ["A", "B"]
    assert flashcard_set.created_at == date.today().isoformat()
    assert len(flashcard_set.cards) == 1
