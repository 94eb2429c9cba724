"""
Folders Router - Handles folder operations.

Folders are flat and names need not be unique. Deleting a folder never
deletes documents; they become unfiled.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, status

from ..api.dto import BulkResultDTO, FolderCreateDTO
from ..api.exceptions import FolderNotFoundError
from ..api.mappers import DocumentMapper, FolderMapper
from ..core.logging_config import get_logger
from ..utils.search_utils import sort_documents
from ..utils.validators import validate_folder_name
from .dependencies import get_document_store

logger = get_logger(__name__)

router = APIRouter()


@router.get("/folders")
def get_folders() -> List[Dict[str, Any]]:
    """List folders in creation order with their active document counts."""
    store = get_document_store()
    return [
        FolderMapper.to_payload(folder, len(store.documents_in_folder(folder.id)))
        for folder in store.folders
    ]


@router.post("/folders", status_code=status.HTTP_201_CREATED)
def create_folder(request: FolderCreateDTO) -> Dict[str, Any]:
    name = validate_folder_name(request.name)
    folder = get_document_store().create_folder(name)
    return FolderMapper.to_payload(folder, 0)


@router.delete("/folders/{folder_id}", response_model=BulkResultDTO)
def delete_folder(folder_id: str):
    """Delete a folder; the returned count is how many documents were unfiled."""
    store = get_document_store()
    if store.get_folder(folder_id) is None:
        raise FolderNotFoundError(f"Folder {folder_id} not found")
    return BulkResultDTO(count=store.delete_folder(folder_id))


@router.get("/folders/{folder_id}/documents")
def get_folder_documents(folder_id: str) -> List[Dict[str, Any]]:
    store = get_document_store()
    if store.get_folder(folder_id) is None:
        raise FolderNotFoundError(f"Folder {folder_id} not found")
    return DocumentMapper.to_payload_list(sort_documents(store.documents_in_folder(folder_id)))
