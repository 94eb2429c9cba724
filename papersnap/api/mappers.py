"""
Mappers between domain entities and API payloads.
Separates domain layer from API layer.
"""
from typing import Any, Dict, Iterable, List

from ..domain.entities import DocumentRecord, FlashcardSet, Folder
from .dto import DocumentUpdateDTO


class DocumentMapper:
    """Maps between DocumentRecord and its JSON payload."""

    @staticmethod
    def to_payload(document: DocumentRecord) -> Dict[str, Any]:
        """Serialize in the stored (camelCase) shape, file payload included."""
        return document.to_storage()

    @staticmethod
    def to_payload_list(documents: Iterable[DocumentRecord]) -> List[Dict[str, Any]]:
        return [DocumentMapper.to_payload(doc) for doc in documents]

    @staticmethod
    def apply_update(existing: DocumentRecord, changes: DocumentUpdateDTO) -> DocumentRecord:
        """
        Merge the submitted fields into a full record for DocumentStore.update_document.

        The merged record is re-validated, so an invalid currency or a
        negative amount is rejected here rather than stored.
        """
        merged = existing.model_dump()
        merged.update(changes.model_dump(exclude_unset=True))
        return DocumentRecord.model_validate(merged)


class FolderMapper:
    """Maps Folder entities to payloads."""

    @staticmethod
    def to_payload(folder: Folder, document_count: int = None) -> Dict[str, Any]:
        payload = folder.to_storage()
        if document_count is not None:
            payload["documentCount"] = document_count
        return payload


class FlashcardSetMapper:
    """Maps FlashcardSet entities to payloads."""

    @staticmethod
    def to_payload(flashcard_set: FlashcardSet) -> Dict[str, Any]:
        return flashcard_set.to_storage()
