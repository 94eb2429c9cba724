"""
Documents Router - Handles document listing, editing, filing and soft delete.

Architecture:
- Router handles HTTP request/response only
- State changes delegated to the DocumentStore
- Unknown ids surface as DocumentNotFoundError (404)

Example Usage:
    GET /documents?search=fuel&category=Travel - Filtered, sorted list
    PUT /documents/{doc_id} - Edit extracted fields
    DELETE /documents/{doc_id} - Move to trash
    POST /documents/move - File several documents at once
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import ValidationError

from ..api.dto import BulkMoveDTO, BulkResultDTO, DocumentUpdateDTO, MoveDocumentDTO
from ..api.exceptions import DocumentNotFoundError, FolderNotFoundError
from ..api.mappers import DocumentMapper
from ..core.logging_config import get_logger
from ..utils.document_utils import normalize_folder_id
from ..utils.search_utils import filter_documents, sort_documents
from .dependencies import get_document_store

logger = get_logger(__name__)

router = APIRouter()


def _require_folder(folder_id: Optional[str]) -> Optional[str]:
    """Normalize a target folder and check that it exists."""
    folder_id = normalize_folder_id(folder_id)
    if folder_id is not None and get_document_store().get_folder(folder_id) is None:
        raise FolderNotFoundError(f"Folder {folder_id} not found")
    return folder_id


def list_filtered_documents(
    search: Optional[str] = None,
    category: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    folder_id: Optional[str] = None,
    unfiled: bool = False
):
    """Active documents after folder scoping, filters and sorting."""
    store = get_document_store()
    if unfiled:
        docs = store.documents_in_folder(None)
    elif normalize_folder_id(folder_id):
        docs = store.documents_in_folder(_require_folder(folder_id))
    else:
        docs = store.active_documents
    return sort_documents(filter_documents(docs, search, category, date_from, date_to))


@router.get("/documents")
def get_documents(
    search: Optional[str] = None,
    category: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    folder_id: Optional[str] = None,
    unfiled: bool = False
) -> List[Dict[str, Any]]:
    """
    List active documents, newest document date first.

    Args:
        search: Case-insensitive match on vendor, summary or amount
        category: Exact category ("All" disables the filter)
        date_from: Inclusive lower bound (YYYY-MM-DD)
        date_to: Inclusive upper bound (YYYY-MM-DD)
        folder_id: Only documents filed in this folder
        unfiled: Only documents without a folder
    """
    docs = list_filtered_documents(search, category, date_from, date_to, folder_id, unfiled)
    return DocumentMapper.to_payload_list(docs)


@router.post("/documents/move", response_model=BulkResultDTO)
def move_documents(request: BulkMoveDTO):
    """File every listed document under one folder (or unfile them)."""
    folder_id = _require_folder(request.folder_id)
    moved = get_document_store().move_documents_to_folder(request.ids, folder_id)
    return BulkResultDTO(count=moved)


@router.get("/documents/{doc_id}")
def get_document(doc_id: str) -> Dict[str, Any]:
    """Get one document, trashed or not."""
    doc = get_document_store().get_document(doc_id)
    if doc is None:
        raise DocumentNotFoundError(f"Document {doc_id} not found")
    return DocumentMapper.to_payload(doc)


@router.put("/documents/{doc_id}")
def update_document(doc_id: str, changes: DocumentUpdateDTO) -> Dict[str, Any]:
    """Edit the extracted fields of a document."""
    store = get_document_store()
    existing = store.get_document(doc_id)
    if existing is None:
        raise DocumentNotFoundError(f"Document {doc_id} not found")

    try:
        record = DocumentMapper.apply_update(existing, changes)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False)
        )

    updated = store.update_document(record)
    if updated is None:
        raise DocumentNotFoundError(f"Document {doc_id} not found")
    logger.info(f"Updated document {doc_id}")
    return DocumentMapper.to_payload(updated)


@router.delete("/documents/{doc_id}")
def delete_document(doc_id: str) -> Dict[str, Any]:
    """Move a document to the trash."""
    doc = get_document_store().soft_delete_document(doc_id)
    if doc is None:
        raise DocumentNotFoundError(f"Document {doc_id} not found")
    return DocumentMapper.to_payload(doc)


@router.post("/documents/{doc_id}/seen")
def mark_document_seen(doc_id: str) -> Dict[str, Any]:
    """Clear the new-document badge."""
    doc = get_document_store().mark_as_seen(doc_id)
    if doc is None:
        raise DocumentNotFoundError(f"Document {doc_id} not found")
    return DocumentMapper.to_payload(doc)


@router.post("/documents/{doc_id}/move")
def move_document(doc_id: str, request: MoveDocumentDTO) -> Dict[str, Any]:
    folder_id = _require_folder(request.folder_id)
    doc = get_document_store().move_document_to_folder(doc_id, folder_id)
    if doc is None:
        raise DocumentNotFoundError(f"Document {doc_id} not found")
    return DocumentMapper.to_payload(doc)
