"""
Domain entities - Core business objects.

Field names are Pythonic; aliases keep the camelCase shape the records
have always been persisted with (fileData, mimeType, isNew, folderId, ...).
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .value_objects import DEFAULT_CATEGORIES, UNCATEGORIZED, DocStatus, DocType


class _Entity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_storage(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ExtractedData(_Entity):
    """Structured fields returned by the extraction model."""
    kind: DocType = Field(alias="type")
    vendor: str
    date: str  # YYYY-MM-DD, the document's own date
    amount: float = Field(default=0.0, ge=0)
    currency: str = "USD"
    tax: float = Field(default=0.0, ge=0)
    invoice_number: Optional[str] = Field(default=None, alias="invoiceNumber")
    category: str = UNCATEGORIZED
    summary: str = ""

    @field_validator("currency")
    @classmethod
    def _normalize_currency(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 3 or not value.isalpha():
            raise ValueError(f"Currency must be a 3-letter code, got '{value}'")
        return value

    def is_text(self) -> bool:
        return self.kind == DocType.TEXT


class DocumentRecord(ExtractedData):
    """
    Document entity - one processed upload.

    folder_id is None for unfiled documents; the empty string is never
    stored as a folder reference.
    """
    id: str
    file_data: str = Field(default="", alias="fileData")  # base64, opaque
    mime_type: str = Field(default="application/octet-stream", alias="mimeType")
    created_at: str = Field(alias="createdAt")
    status: DocStatus = DocStatus.COMPLETED
    is_new: bool = Field(default=False, alias="isNew")
    is_deleted: bool = Field(default=False, alias="isDeleted")
    folder_id: Optional[str] = Field(default=None, alias="folderId")

    @field_validator("folder_id", mode="before")
    @classmethod
    def _empty_folder_is_unfiled(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def is_completed(self) -> bool:
        return self.status == DocStatus.COMPLETED

    def is_unfiled(self) -> bool:
        return self.folder_id is None


class Folder(_Entity):
    """Flat, user-defined bucket. Names are not unique."""
    id: str
    name: str


class Flashcard(_Entity):
    front: str
    back: str


class FlashcardSet(_Entity):
    """Study set generated from documents. Immutable once stored."""
    id: str
    title: str
    created_at: str = Field(alias="createdAt")
    cards: List[Flashcard] = Field(default_factory=list)
    source_doc_ids: List[str] = Field(default_factory=list, alias="sourceDocIds")

    @field_validator("source_doc_ids")
    @classmethod
    def _dedupe_sources(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))


class AppSettings(_Entity):
    """User preferences shown on the settings page."""
    categories: List[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    default_currency: str = Field(default="USD", alias="defaultCurrency")
    default_tax_rate: float = Field(default=0.0, ge=0, le=100, alias="defaultTaxRate")
    ocr_language: str = Field(default="auto", alias="ocrLanguage")
    enable_preprocessing: bool = Field(default=True, alias="enablePreprocessing")

    @field_validator("default_currency")
    @classmethod
    def _normalize_currency(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 3 or not value.isalpha():
            raise ValueError(f"Currency must be a 3-letter code, got '{value}'")
        return value
