"""
Upload Router - Handles file upload and extraction.

Example Usage:
    POST /upload (multipart: file, scan_mode=finance|document|text)

The upload always yields a stored document. When extraction fails the
record carries the fallback values and status "error" so the user can
correct it by hand.
"""
import mimetypes
from typing import Any, Dict

from fastapi import APIRouter, File, Form, UploadFile, status

from ..api.exceptions import InvalidUploadError
from ..api.mappers import DocumentMapper
from ..core.config import MAX_UPLOAD_BYTES, MAX_UPLOAD_MB
from ..core.logging_config import get_logger
from ..domain.value_objects import ScanMode
from .dependencies import get_document_store, get_extraction_service

logger = get_logger(__name__)

router = APIRouter()


def _resolve_mime_type(file: UploadFile) -> str:
    if file.content_type and file.content_type != "application/octet-stream":
        return file.content_type
    guessed, _ = mimetypes.guess_type(file.filename or "")
    return guessed or "application/octet-stream"


@router.post("/upload", status_code=status.HTTP_201_CREATED)
def upload_file(
    file: UploadFile = File(...),
    scan_mode: ScanMode = Form(ScanMode.FINANCE)
) -> Dict[str, Any]:
    """
    Upload a photo, PDF or text file and extract its data.

    Args:
        file: The document to analyze
        scan_mode: finance (receipts/invoices), document (letters, contracts)
                   or text (OCR to Markdown)

    Returns:
        The stored document record

    Status Codes:
        201: Document stored
        400: Empty or oversized file
    """
    file_bytes = file.file.read(MAX_UPLOAD_BYTES + 1)
    if not file_bytes:
        raise InvalidUploadError("Uploaded file is empty")
    if len(file_bytes) > MAX_UPLOAD_BYTES:
        raise InvalidUploadError(f"File exceeds the {MAX_UPLOAD_MB} MB upload limit")

    mime_type = _resolve_mime_type(file)
    logger.info(f"Received upload {file.filename!r} ({mime_type}, {len(file_bytes)} bytes, mode={scan_mode.value})")

    record = get_extraction_service().process_upload(file_bytes, mime_type, scan_mode)
    stored = get_document_store().add_document(record)
    return DocumentMapper.to_payload(stored)
