"""
Exports Router - CSV spreadsheet and per-document PDF downloads.
"""
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import Response

from ..api.exceptions import DocumentNotFoundError
from ..services.export_service import csv_filename, document_to_pdf, documents_to_csv, pdf_filename
from .dependencies import get_document_store
from .documents import list_filtered_documents

router = APIRouter()


def _attachment(filename: str) -> dict:
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return {"Content-Disposition": f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"}


@router.get("/export/csv")
def export_csv(
    search: Optional[str] = None,
    category: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    folder_id: Optional[str] = None,
    unfiled: bool = False
):
    """Export the documents the list view would show for the same filters."""
    docs = list_filtered_documents(search, category, date_from, date_to, folder_id, unfiled)
    return Response(
        content=documents_to_csv(docs),
        media_type="text/csv; charset=utf-8",
        headers=_attachment(csv_filename())
    )


@router.get("/documents/{doc_id}/pdf")
def export_pdf(doc_id: str):
    doc = get_document_store().get_document(doc_id)
    if doc is None:
        raise DocumentNotFoundError(f"Document {doc_id} not found")
    return Response(
        content=document_to_pdf(doc),
        media_type="application/pdf",
        headers=_attachment(pdf_filename(doc))
    )
