"""
Assistant Service - document chat and flashcard generation.

Chat sessions see a redacted copy of the user's documents (never the
file payload). Flashcard generation degrades to an empty list; chat
failures surface as AssistantError so the caller can offer a retry.
"""
import uuid
from datetime import date
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from ..api.exceptions import AssistantError, ChatSessionNotFoundError
from ..core.logging_config import get_logger
from ..domain.entities import DocumentRecord, Flashcard, FlashcardSet
from .prompts import chat_system_instruction, flashcard_prompt
from .providers import AIProvider, AIProviderFactory

logger = get_logger(__name__)

CHAT_CONTEXT_FIELDS = ("id", "type", "vendor", "date", "amount", "currency", "category", "summary")


def redact_documents(documents: Iterable[DocumentRecord]) -> List[Dict[str, Any]]:
    """Strip everything but the fields the assistant may see."""
    redacted = []
    for doc in documents:
        stored = doc.to_storage()
        redacted.append({field: stored.get(field) for field in CHAT_CONTEXT_FIELDS})
    return redacted


class ChatSession:
    """
    One conversation with the document assistant.

    The document context is fixed when the session is created; later
    changes to the store are not visible to an existing session.
    """

    def __init__(self, provider: AIProvider, documents: Iterable[DocumentRecord], today: Optional[date] = None):
        self.id = str(uuid.uuid4())
        self.provider = provider
        self.system_instruction = chat_system_instruction(redact_documents(documents), today)
        self.history: List[Dict[str, str]] = []

    def send_message(self, text: str) -> str:
        """
        Send one user message and return the model's reply.

        Both turns are appended to the history only when the reply succeeds.

        Raises:
            AssistantError: If the model call fails
        """
        try:
            reply = self.provider.chat(self.system_instruction, list(self.history), text)
        except Exception as e:
            logger.error(f"Chat session {self.id} failed: {e}", exc_info=True)
            raise AssistantError(str(e)) from e

        self.history.append({"role": "user", "text": text})
        self.history.append({"role": "assistant", "text": reply})
        return reply


class ChatSessionManager:
    """Keeps chat sessions by id in process memory."""

    def __init__(self, provider: Optional[AIProvider] = None):
        self.provider = provider or AIProviderFactory.get_provider()
        self._sessions: Dict[str, ChatSession] = {}
        self._lock = Lock()

    def create_session(self, documents: Iterable[DocumentRecord]) -> ChatSession:
        session = ChatSession(self.provider, documents)
        with self._lock:
            self._sessions[session.id] = session
        logger.info(f"Started chat session {session.id}")
        return session

    def get_session(self, session_id: str) -> ChatSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise ChatSessionNotFoundError(f"Chat session {session_id} not found")
        return session

    def send_message(self, session_id: str, text: str) -> str:
        return self.get_session(session_id).send_message(text)

    def close_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None


class FlashcardService:
    """Generates study sets from document summaries."""

    def __init__(self, provider: Optional[AIProvider] = None):
        self.provider = provider or AIProviderFactory.get_provider()

    def generate_cards(self, text: str) -> List[Flashcard]:
        """Ask the model for question/answer pairs. Any failure yields an empty list."""
        try:
            raw_cards = self.provider.generate_flashcards(flashcard_prompt(text))
        except Exception as e:
            logger.error(f"Flashcard generation error: {e}", exc_info=True)
            return []

        cards = []
        for entry in raw_cards or []:
            try:
                cards.append(Flashcard.model_validate(entry))
            except ValidationError:
                logger.warning(f"Skipping malformed flashcard: {entry!r}")
        return cards

    @staticmethod
    def combine_documents(documents: Iterable[DocumentRecord]) -> str:
        return "\n\n".join(f"--- Document: {doc.vendor} ---\n{doc.summary}" for doc in documents)

    def build_set(self, title: str, documents: List[DocumentRecord]) -> FlashcardSet:
        """
        Generate a flashcard set from the selected documents.

        The set is returned unsaved; an empty card list means generation failed.
        """
        cards = self.generate_cards(self.combine_documents(documents))
        return FlashcardSet(
            id=str(uuid.uuid4()),
            title=title,
            created_at=date.today().isoformat(),
            cards=cards,
            source_doc_ids=[doc.id for doc in documents],
        )
