"""
Export Service - CSV spreadsheets and single-document PDF reports.
"""
import io
import re
from datetime import date
from typing import Iterable, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from ..core.logging_config import get_logger
from ..domain.entities import DocumentRecord
from ..utils.document_utils import format_amount

logger = get_logger(__name__)

CSV_HEADERS = ["Type", "Name", "Date", "Amount", "Currency", "Tax", "Category", "Summary"]

PDF_TITLE = "PaperSnap Document Report"
TITLE_COLOR = colors.Color(37 / 255, 99 / 255, 235 / 255)
LEFT_MARGIN = 20 * mm
VALUE_X = 60 * mm
TOP_MARGIN = 20 * mm
BOTTOM_MARGIN = 20 * mm
LINE_HEIGHT = 10 * mm
TEXT_WIDTH = 170 * mm
BODY_FONT_SIZE = 12

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def documents_to_csv(documents: Iterable[DocumentRecord]) -> str:
    """
    Render documents as CSV text.

    Name and Summary are always quoted with embedded quotes doubled; the
    other columns are written as-is. Rows are joined by a bare newline.
    """
    lines = [",".join(CSV_HEADERS)]
    for doc in documents:
        lines.append(",".join([
            doc.kind.value,
            _quote(doc.vendor),
            doc.date,
            format_amount(doc.amount),
            doc.currency,
            format_amount(doc.tax),
            doc.category,
            _quote(doc.summary),
        ]))
    return "\n".join(lines)


def csv_filename(today: Optional[date] = None) -> str:
    return f"papersnap_export_{(today or date.today()).isoformat()}.csv"


def pdf_filename(doc: DocumentRecord) -> str:
    name = _UNSAFE_FILENAME_CHARS.sub("_", f"{doc.vendor}_{doc.date}").strip() or "document"
    return f"{name}.pdf"


class _PdfWriter:
    """Top-down text cursor over a reportlab canvas with automatic page breaks."""

    def __init__(self, buffer: io.BytesIO):
        self.canvas = canvas.Canvas(buffer, pagesize=A4)
        self.width, self.height = A4
        self.y = self.height - TOP_MARGIN

    def _ensure_room(self, needed: float) -> None:
        if self.y - needed < BOTTOM_MARGIN:
            self.canvas.showPage()
            self.canvas.setFont("Helvetica", BODY_FONT_SIZE)
            self.y = self.height - TOP_MARGIN

    def title(self, text: str) -> None:
        self.canvas.setFont("Helvetica", 20)
        self.canvas.setFillColor(TITLE_COLOR)
        self.canvas.drawString(LEFT_MARGIN, self.y, text)
        self.canvas.setFillColor(colors.black)
        self.y -= 2 * LINE_HEIGHT

    def field(self, label: str, value: str) -> None:
        self._ensure_room(LINE_HEIGHT)
        self.canvas.setFont("Helvetica-Bold", BODY_FONT_SIZE)
        self.canvas.drawString(LEFT_MARGIN, self.y, f"{label}:")
        self.canvas.setFont("Helvetica", BODY_FONT_SIZE)
        self.canvas.drawString(VALUE_X, self.y, value)
        self.y -= LINE_HEIGHT

    def block(self, heading: str, text: str) -> None:
        self.y -= 5 * mm
        self._ensure_room(LINE_HEIGHT)
        self.canvas.setFont("Helvetica-Bold", BODY_FONT_SIZE)
        self.canvas.drawString(LEFT_MARGIN, self.y, heading)
        self.y -= 7 * mm

        self.canvas.setFont("Helvetica", BODY_FONT_SIZE)
        line_height = BODY_FONT_SIZE * 1.25
        for paragraph in (text or "").splitlines() or [""]:
            for line in simpleSplit(paragraph, "Helvetica", BODY_FONT_SIZE, TEXT_WIDTH) or [""]:
                self._ensure_room(line_height)
                self.canvas.drawString(LEFT_MARGIN, self.y, line)
                self.y -= line_height

    def finish(self) -> None:
        self.canvas.showPage()
        self.canvas.save()


def document_to_pdf(doc: DocumentRecord) -> bytes:
    """Render a one-document report with its metadata and summary (or full text)."""
    buffer = io.BytesIO()
    writer = _PdfWriter(buffer)
    writer.title(PDF_TITLE)

    writer.field("Name", doc.vendor)
    writer.field("Date", doc.date)
    writer.field("Type", doc.kind.value)
    writer.field("Category", doc.category)
    if not doc.is_text():
        writer.field("Amount", f"{doc.currency} {doc.amount:.2f}")
        writer.field("Tax/VAT", f"{doc.currency} {doc.tax:.2f}")
    writer.field("Status", doc.status.value)

    writer.block("Content:" if doc.is_text() else "Summary:", doc.summary)
    writer.finish()

    logger.debug(f"Rendered PDF report for document {doc.id}")
    return buffer.getvalue()
