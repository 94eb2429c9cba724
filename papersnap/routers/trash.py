"""
Trash Router - soft-deleted documents: list, restore, purge.
"""
from typing import Any, Dict, List

from fastapi import APIRouter

from ..api.dto import BulkResultDTO
from ..api.exceptions import DocumentNotFoundError
from ..api.mappers import DocumentMapper
from .dependencies import get_document_store

router = APIRouter()


@router.get("/trash")
def get_trash() -> List[Dict[str, Any]]:
    return DocumentMapper.to_payload_list(get_document_store().deleted_documents)


@router.post("/trash/{doc_id}/restore")
def restore_document(doc_id: str) -> Dict[str, Any]:
    doc = get_document_store().restore_document(doc_id)
    if doc is None:
        raise DocumentNotFoundError(f"Document {doc_id} not found")
    return DocumentMapper.to_payload(doc)


@router.delete("/trash/{doc_id}", response_model=BulkResultDTO)
def delete_permanently(doc_id: str):
    """Remove one trashed document for good."""
    store = get_document_store()
    doc = store.get_document(doc_id)
    if doc is None or not doc.is_deleted:
        raise DocumentNotFoundError(f"Document {doc_id} is not in the trash")
    store.permanent_delete_document(doc_id)
    return BulkResultDTO(count=1)


@router.delete("/trash", response_model=BulkResultDTO)
def empty_trash():
    """Remove every trashed document for good."""
    return BulkResultDTO(count=get_document_store().empty_trash())
