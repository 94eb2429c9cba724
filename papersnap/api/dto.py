"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.

Request bodies accept both snake_case and the camelCase names the
records are stored with.
"""
from datetime import date as Date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.value_objects import DocType


class _RequestDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DocumentUpdateDTO(_RequestDTO):
    """Editable fields of a document; omitted fields keep their value."""
    kind: Optional[DocType] = Field(default=None, alias="type")
    vendor: Optional[str] = None
    date: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = None
    tax: Optional[float] = Field(default=None, ge=0)
    invoice_number: Optional[str] = Field(default=None, alias="invoiceNumber")
    category: Optional[str] = None
    summary: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _iso_date(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            return Date.fromisoformat(value.strip()).isoformat()
        except ValueError:
            raise ValueError(f"Date must be YYYY-MM-DD, got '{value}'")


class MoveDocumentDTO(_RequestDTO):
    """Target folder; null or "" unfiles the document."""
    folder_id: Optional[str] = Field(default=None, alias="folderId")


class BulkMoveDTO(MoveDocumentDTO):
    ids: List[str]


class FolderCreateDTO(_RequestDTO):
    name: str


class CategoryCreateDTO(_RequestDTO):
    name: str


class FlashcardCreateDTO(_RequestDTO):
    title: str = Field(min_length=1)
    document_ids: List[str] = Field(alias="documentIds", min_length=1)


class ChatSessionCreateDTO(_RequestDTO):
    """Documents the assistant may see; all active documents when omitted."""
    document_ids: Optional[List[str]] = Field(default=None, alias="documentIds")


class ChatMessageDTO(_RequestDTO):
    message: str = Field(min_length=1)


class ChatSessionDTO(BaseModel):
    session_id: str
    document_count: int


class ChatReplyDTO(BaseModel):
    session_id: str
    reply: str


class BulkResultDTO(BaseModel):
    """Count of records affected by a bulk operation."""
    count: int


class DashboardDTO(BaseModel):
    total_docs: int
    ready_to_export: int
    storage_used_mb: float
    type_distribution: List[Dict[str, Any]]
    recent_documents: List[Dict[str, Any]]
    has_new_documents: bool = False


class ErrorResponseDTO(BaseModel):
    """Error response DTO."""
    error: str
    detail: Optional[str] = None
    code: Optional[str] = None
