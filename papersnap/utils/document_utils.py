"""
Document utility functions for display formatting and dashboard statistics.
"""
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from ..domain.entities import DocumentRecord

RECENT_DOCUMENTS_LIMIT = 5

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def created_timestamp(doc: DocumentRecord) -> datetime:
    """
    createdAt as an aware datetime for ordering.

    Older records use a trailing Z, newer ones +00:00 with microseconds;
    naive values are taken as UTC and unparseable ones sort oldest.
    """
    try:
        parsed = datetime.fromisoformat(doc.created_at.strip().replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_amount(value: float) -> str:
    """Render a number the way the UI shows it: 150, 12.5, never 150.0."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def normalize_folder_id(folder_id: Optional[str]) -> Optional[str]:
    """
    Normalize a folder reference from a request.

    The empty string (the "Unfiled" choice in a folder picker) means no folder.
    """
    if folder_id is None:
        return None
    folder_id = folder_id.strip()
    return folder_id or None


def compute_dashboard_stats(documents: Iterable[DocumentRecord]) -> Dict[str, Any]:
    """
    Summary numbers for the dashboard.

    Storage is approximated by the length of the base64 payloads.
    """
    documents = list(documents)
    total_bytes = sum(len(doc.file_data) for doc in documents)
    type_counts = Counter(doc.kind.value for doc in documents)
    recent = sorted(documents, key=created_timestamp, reverse=True)[:RECENT_DOCUMENTS_LIMIT]

    return {
        "total_docs": len(documents),
        "ready_to_export": sum(1 for doc in documents if doc.is_completed()),
        "storage_used_mb": round(total_bytes / (1024 * 1024), 2),
        "type_distribution": [{"name": name, "value": count} for name, count in type_counts.items()],
        "recent_documents": recent,
    }
