"""
Extraction Service - turns an uploaded file into structured document data.

The provider is asked for the extraction JSON; whatever comes back is
coerced into a valid ExtractedData. Any failure (network, quota, bad JSON,
unusable fields) yields the fallback record instead of an exception, so an
upload always produces a document the user can review and edit.
"""
import base64
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..core.logging_config import get_logger
from ..domain.entities import DocumentRecord, ExtractedData
from ..domain.value_objects import UNCATEGORIZED, DocStatus, DocType, ScanMode
from .prompts import extraction_instructions, extraction_schema
from .providers import AIProvider, AIProviderFactory

logger = get_logger(__name__)

FALLBACK_VENDOR = "Unknown"
FALLBACK_SUMMARY = "Failed to extract data."


class ExtractionService:
    """
    Extraction service implementation.

    Wraps an AIProvider and owns the prompt selection, response
    validation and fallback policy for document extraction.
    """

    def __init__(self, provider: Optional[AIProvider] = None, settings_service=None):
        self.provider = provider or AIProviderFactory.get_provider()
        self.settings_service = settings_service
        logger.info(f"Initialized ExtractionService with provider: {type(self.provider).__name__}")

    def _categories(self) -> List[str]:
        categories = self.settings_service.categories if self.settings_service else []
        if UNCATEGORIZED not in categories:
            categories = list(categories) + [UNCATEGORIZED]
        return categories

    def _default_currency(self) -> str:
        if self.settings_service:
            return self.settings_service.settings.default_currency
        return "USD"

    @staticmethod
    def fallback_data() -> ExtractedData:
        """The record used when extraction fails; marks the document for manual review."""
        return ExtractedData(
            kind=DocType.OTHER,
            vendor=FALLBACK_VENDOR,
            date=date.today().isoformat(),
            amount=0,
            currency="USD",
            tax=0,
            category=UNCATEGORIZED,
            summary=FALLBACK_SUMMARY,
        )

    def _coerce(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """Repair the fields models most often get slightly wrong."""
        data = dict(raw)

        kind = str(data.get("type") or "").strip().upper()
        data["type"] = kind if kind in DocType.__members__ else DocType.OTHER.value

        data["vendor"] = str(data.get("vendor") or "").strip() or FALLBACK_VENDOR

        try:
            data["date"] = date.fromisoformat(str(data.get("date") or "")[:10]).isoformat()
        except ValueError:
            data["date"] = date.today().isoformat()

        currency = str(data.get("currency") or "").strip().upper()
        data["currency"] = currency if len(currency) == 3 and currency.isalpha() else self._default_currency()

        for field in ("amount", "tax"):
            value = data.get(field)
            try:
                data[field] = abs(float(value)) if value is not None else 0.0
            except (TypeError, ValueError):
                data[field] = 0.0

        # Stale or unknown categories are tolerated, only blanks are replaced
        data["category"] = str(data.get("category") or "").strip() or UNCATEGORIZED
        data["summary"] = str(data.get("summary") or "")

        if not data.get("invoiceNumber"):
            data.pop("invoiceNumber", None)

        if data["type"] == DocType.TEXT.value:
            data["amount"] = 0.0
            data["tax"] = 0.0
        return data

    def _extract(self, file_bytes: bytes, mime_type: str, scan_mode: ScanMode) -> ExtractedData:
        if not file_bytes:
            raise ValueError("Uploaded file is empty")
        categories = self._categories()
        raw = self.provider.extract_document(
            file_bytes,
            mime_type,
            scan_mode,
            extraction_instructions(scan_mode, categories),
            extraction_schema(categories),
        )
        return ExtractedData.model_validate(self._coerce(raw))

    def _analyze(self, file_bytes: bytes, mime_type: str, scan_mode: ScanMode) -> Tuple[ExtractedData, bool]:
        logger.debug(f"Analyzing {mime_type} upload ({len(file_bytes)} bytes, mode={scan_mode.value})")
        try:
            extracted = self._extract(file_bytes, mime_type, scan_mode)
        except ValidationError as e:
            logger.error(f"Extraction returned unusable data, using fallback: {e.error_count()} validation error(s)")
            return self.fallback_data(), False
        except Exception as e:
            logger.error(f"Extraction failed, using fallback: {e}", exc_info=True)
            return self.fallback_data(), False
        logger.info(f"Extracted {extracted.kind.value} from {extracted.vendor!r}")
        return extracted, True

    def analyze_document(self, file_bytes: bytes, mime_type: str, scan_mode: ScanMode = ScanMode.FINANCE) -> ExtractedData:
        """
        Extract structured data from an uploaded file.

        Never raises: failures produce fallback_data().
        """
        extracted, _ = self._analyze(file_bytes, mime_type, scan_mode)
        return extracted

    @staticmethod
    def build_record(extracted: ExtractedData, file_bytes: bytes, mime_type: str, succeeded: bool = True) -> DocumentRecord:
        """Wrap extracted data into a new DocumentRecord ready for DocumentStore.add_document."""
        return DocumentRecord(
            **extracted.model_dump(),
            id=str(uuid.uuid4()),
            file_data=base64.b64encode(file_bytes).decode("ascii"),
            mime_type=mime_type,
            created_at=datetime.now(timezone.utc).isoformat(),
            status=DocStatus.COMPLETED if succeeded else DocStatus.ERROR,
            is_new=True,
        )

    def process_upload(self, file_bytes: bytes, mime_type: str, scan_mode: ScanMode = ScanMode.FINANCE) -> DocumentRecord:
        """Analyze an upload and build its record; status is error when the fallback was used."""
        extracted, succeeded = self._analyze(file_bytes, mime_type, scan_mode)
        return self.build_record(extracted, file_bytes, mime_type, succeeded)
