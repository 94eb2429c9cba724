"""
Custom exceptions for API layer.
Separates business exceptions from HTTP exceptions.
"""
from fastapi import HTTPException, status


class DocumentNotFoundError(Exception):
    """Raised when document is not found."""
    pass


class FolderNotFoundError(Exception):
    """Raised when folder is not found."""
    pass


class FlashcardSetNotFoundError(Exception):
    """Raised when a flashcard set is not found."""
    pass


class ChatSessionNotFoundError(Exception):
    """Raised when a chat session id is unknown or expired."""
    pass


class InvalidFolderNameError(Exception):
    """Raised when folder name is invalid."""
    pass


class InvalidCategoryError(Exception):
    """Raised when a category name is invalid or unknown."""
    pass


class InvalidUploadError(Exception):
    """Raised when an uploaded file is empty or too large."""
    pass


class AssistantError(Exception):
    """Raised when the chat or flashcard model cannot produce an answer."""
    pass


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    if isinstance(e, (DocumentNotFoundError, FolderNotFoundError, FlashcardSetNotFoundError, ChatSessionNotFoundError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, (InvalidFolderNameError, InvalidCategoryError, InvalidUploadError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    elif isinstance(e, AssistantError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="The assistant is unavailable right now. Please try again."
        )
    else:
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


BUSINESS_EXCEPTIONS = (
    DocumentNotFoundError,
    FolderNotFoundError,
    FlashcardSetNotFoundError,
    ChatSessionNotFoundError,
    InvalidFolderNameError,
    InvalidCategoryError,
    InvalidUploadError,
    AssistantError,
)
