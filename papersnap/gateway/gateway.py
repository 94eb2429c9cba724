"""
API Gateway

Main gateway class that builds the FastAPI application, installs
middleware and registers routers and health endpoints.
"""
from typing import List, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core.config import CORS_ORIGINS, ENVIRONMENT
from ..core.logging_config import get_logger
from .middleware import (
    ErrorHandlingMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    register_exception_handlers
)

logger = get_logger(__name__)


class APIGateway:
    """
    API Gateway that manages routing and middleware.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, logging, request ids, error handling)
    - Register routers
    - Provide health check endpoints
    """

    def __init__(
        self,
        title: str = "PaperSnap API",
        description: str = "Document vault with AI extraction",
        version: str = "1.0.0",
        enable_docs: Optional[bool] = None,
        lifespan=None
    ):
        self.title = title
        self.version = version
        self.enable_docs = enable_docs if enable_docs is not None else ENVIRONMENT != "production"
        self.routers: List[str] = []

        self.app = FastAPI(
            title=title,
            description=description,
            version=version,
            docs_url="/docs" if self.enable_docs else None,
            redoc_url="/redoc" if self.enable_docs else None,
            lifespan=lifespan
        )
        register_exception_handlers(self.app)
        logger.info("API Gateway initialized")

    def setup_middleware(self):
        """Configure all middleware."""
        logger.info("Setting up middleware...")

        # Error handling wraps everything below it
        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  → Error handling middleware added")

        self.app.add_middleware(
            RequestLoggingMiddleware,
            skip_paths=["/health", "/docs", "/redoc", "/openapi.json"]
        )
        logger.debug("  → Request logging middleware added")

        # Added after logging so it runs first and the id is available when logging
        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Content-Disposition", "X-Request-ID"],
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")

        logger.info("✅ All middleware configured")

    def register_router(self, router: APIRouter, prefix: str = "", tags: Optional[List[str]] = None):
        """
        Register a router with the gateway.

        Args:
            router: FastAPI router instance
            prefix: URL prefix for the router
            tags: OpenAPI tags for documentation
        """
        self.app.include_router(router, prefix=prefix, tags=tags or [])
        self.routers.extend(tags or [])
        logger.debug(f"Registered router {tags} at prefix '{prefix}'")

    def register_health_endpoints(self):
        """Register health check endpoints."""

        @self.app.get("/")
        def root():
            """Root endpoint - API information."""
            return {
                "message": f"{self.title} is running",
                "version": self.version,
                "status": "healthy",
            }

        @self.app.get("/health")
        def health_check():
            """
            Health check endpoint for container orchestration.

            Returns 200 if the store is loaded, 503 otherwise. A failed last
            write is reported but does not make the service unhealthy.
            """
            from ..routers import dependencies

            if dependencies.document_store is None:
                logger.warning("Health check failed: Document store not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "reason": "Document store not initialized"}
                )
            return {
                "status": "healthy",
                "storage": "degraded" if dependencies.document_store.last_save_error else "ok",
                "last_save_error": dependencies.document_store.last_save_error,
            }

        logger.info("Health check endpoints registered")

    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app
