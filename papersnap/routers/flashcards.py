"""
Flashcards Router - generate, list and delete study sets.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, status

from ..api.dto import BulkResultDTO, FlashcardCreateDTO
from ..api.exceptions import AssistantError, DocumentNotFoundError, FlashcardSetNotFoundError
from ..api.mappers import FlashcardSetMapper
from ..core.logging_config import get_logger
from .dependencies import get_document_store, get_flashcard_service

logger = get_logger(__name__)

router = APIRouter()


@router.get("/flashcards")
def get_flashcard_sets() -> List[Dict[str, Any]]:
    """List study sets, newest first."""
    return [FlashcardSetMapper.to_payload(fs) for fs in get_document_store().flashcard_sets]


@router.post("/flashcards", status_code=status.HTTP_201_CREATED)
def create_flashcard_set(request: FlashcardCreateDTO) -> Dict[str, Any]:
    """
    Generate a study set from the selected documents and store it.

    Status Codes:
        201: Set stored
        404: A selected document does not exist
        503: The model produced no cards (nothing is stored)
    """
    store = get_document_store()
    documents = []
    for doc_id in dict.fromkeys(request.document_ids):
        doc = store.get_document(doc_id)
        if doc is None or doc.is_deleted:
            raise DocumentNotFoundError(f"Document {doc_id} not found")
        documents.append(doc)

    flashcard_set = get_flashcard_service().build_set(request.title.strip(), documents)
    if not flashcard_set.cards:
        raise AssistantError("No flashcards were generated")

    stored = store.create_flashcard_set(flashcard_set)
    return FlashcardSetMapper.to_payload(stored)


@router.delete("/flashcards/{set_id}", response_model=BulkResultDTO)
def delete_flashcard_set(set_id: str):
    if not get_document_store().delete_flashcard_set(set_id):
        raise FlashcardSetNotFoundError(f"Flashcard set {set_id} not found")
    return BulkResultDTO(count=1)
