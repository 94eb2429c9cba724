"""
Shared dependencies for routers.
Provides persistence and service initialization.

Services are module-level singletons created once at startup and
shared by every request handler.
"""
from typing import Optional

from ..core.config import AI_PROVIDER, DATA_DIR, STORAGE_TYPE
from ..core.logging_config import get_logger
from ..services.assistant_service import ChatSessionManager, FlashcardService
from ..services.document_store import DocumentStore
from ..services.extraction_service import ExtractionService
from ..services.persistence import PersistenceFactory, PersistenceInterface
from ..services.providers import AIProvider, AIProviderFactory
from ..services.settings_service import SettingsService

logger = get_logger(__name__)

# Global services (will be initialized on startup)
persistence = None
document_store = None
settings_service = None
extraction_service = None
flashcard_service = None
chat_manager = None


def initialize_services(
    persistence_adapter: Optional[PersistenceInterface] = None,
    provider: Optional[AIProvider] = None
):
    """
    Initialize all services.

    Already-initialized services are kept, so tests can install their own
    adapter and provider before the application starts.

    Args:
        persistence_adapter: Storage adapter; built from STORAGE_TYPE when omitted
        provider: AI provider shared by extraction, chat and flashcards
    """
    global persistence, document_store, settings_service, extraction_service, flashcard_service, chat_manager

    if document_store is not None:
        logger.debug("Services already initialized")
        return

    logger.info("Initializing services...")

    logger.info(f"  → Persistence: {STORAGE_TYPE}")
    persistence = persistence_adapter or PersistenceFactory.create(STORAGE_TYPE, data_dir=DATA_DIR)

    logger.info("  → Starting Document Store...")
    document_store = DocumentStore(persistence)
    settings_service = SettingsService(persistence)
    logger.info("  ✅ Document Store initialized")

    logger.info(f"  → Starting AI services (provider: {AI_PROVIDER})...")
    provider = provider or AIProviderFactory.get_provider()
    extraction_service = ExtractionService(provider, settings_service)
    flashcard_service = FlashcardService(provider)
    chat_manager = ChatSessionManager(provider)
    logger.info(f"  ✅ AI services initialized with {type(provider).__name__}")


def reset_services():
    """Drop every service so the next initialize_services() starts fresh."""
    global persistence, document_store, settings_service, extraction_service, flashcard_service, chat_manager
    persistence = None
    document_store = None
    settings_service = None
    extraction_service = None
    flashcard_service = None
    chat_manager = None


def get_document_store() -> DocumentStore:
    """Get document store (dependency injection)."""
    if document_store is None:
        raise RuntimeError("Document store not initialized")
    return document_store


def get_settings_service() -> SettingsService:
    """Get settings service (dependency injection)."""
    if settings_service is None:
        raise RuntimeError("Settings service not initialized")
    return settings_service


def get_extraction_service() -> ExtractionService:
    """Get extraction service (dependency injection)."""
    if extraction_service is None:
        raise RuntimeError("Extraction service not initialized")
    return extraction_service


def get_flashcard_service() -> FlashcardService:
    """Get flashcard service (dependency injection)."""
    if flashcard_service is None:
        raise RuntimeError("Flashcard service not initialized")
    return flashcard_service


def get_chat_manager() -> ChatSessionManager:
    """Get chat session manager (dependency injection)."""
    if chat_manager is None:
        raise RuntimeError("Chat manager not initialized")
    return chat_manager
