"""
Domain layer - Core business entities and value objects.
"""
from .entities import AppSettings, DocumentRecord, ExtractedData, Flashcard, FlashcardSet, Folder
from .value_objects import DEFAULT_CATEGORIES, DocStatus, DocType, ScanMode

__all__ = [
    "AppSettings",
    "DocumentRecord",
    "ExtractedData",
    "Flashcard",
    "FlashcardSet",
    "Folder",
    "DEFAULT_CATEGORIES",
    "DocStatus",
    "DocType",
    "ScanMode",
]
