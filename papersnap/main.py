from contextlib import asynccontextmanager

from .core.config import AI_PROVIDER, DATA_DIR, ENVIRONMENT, STORAGE_TYPE
from .core.logging_config import get_logger, setup_logging
from .gateway import APIGateway
from .routers import chat, dashboard, documents, exports, flashcards, folders, settings, trash, uploads
from .routers.dependencies import initialize_services

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app):
    """Load the document store and AI services on startup."""
    logger.info("=" * 60)
    logger.info("Starting PaperSnap Backend...")
    logger.info("=" * 60)
    logger.info(f"  → Environment: {ENVIRONMENT}")
    logger.info(f"  → Storage: {STORAGE_TYPE} ({DATA_DIR})")
    logger.info(f"  → AI Provider: {AI_PROVIDER}")

    initialize_services()

    logger.info("✅ PaperSnap Backend initialized successfully")
    yield
    logger.info("PaperSnap Backend shutdown complete")


gateway = APIGateway(
    title="PaperSnap API",
    description="Scan receipts, invoices and documents; organize, search, export and chat with them",
    version="1.0.0",
    lifespan=lifespan
)

gateway.setup_middleware()

gateway.register_router(documents.router, tags=["Documents"])
gateway.register_router(trash.router, tags=["Trash"])
gateway.register_router(folders.router, tags=["Folders"])
gateway.register_router(uploads.router, tags=["Uploads"])
gateway.register_router(flashcards.router, tags=["Flashcards"])
gateway.register_router(chat.router, tags=["Chat"])
gateway.register_router(settings.router, tags=["Settings"])
gateway.register_router(exports.router, tags=["Exports"])
gateway.register_router(dashboard.router, tags=["Dashboard"])

gateway.register_health_endpoints()

app = gateway.get_app()
