"""
Search utility functions for filtering and ordering document lists.
"""
from typing import Iterable, List, Optional

from ..domain.entities import DocumentRecord
from .document_utils import created_timestamp, format_amount

ALL_CATEGORIES = "All"


def matches_search(doc: DocumentRecord, term: str) -> bool:
    """Case-insensitive match on vendor or summary; the amount is matched as plain text."""
    if not term:
        return True
    term_lower = term.lower()
    return (
        term_lower in doc.vendor.lower()
        or term_lower in doc.summary.lower()
        or term in format_amount(doc.amount)
    )


def filter_documents(
    documents: Iterable[DocumentRecord],
    search: Optional[str] = None,
    category: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None
) -> List[DocumentRecord]:
    """
    Apply the document list filters.

    Args:
        documents: Documents to filter
        search: Free-text term (vendor, summary, amount)
        category: Exact category, or "All"/None for no filter
        date_from: Inclusive lower bound, YYYY-MM-DD
        date_to: Inclusive upper bound, YYYY-MM-DD

    Returns:
        The matching documents in their original order
    """
    result = []
    for doc in documents:
        if not matches_search(doc, search or ""):
            continue
        if category and category != ALL_CATEGORIES and doc.category != category:
            continue
        if date_from and doc.date < date_from:
            continue
        if date_to and doc.date > date_to:
            continue
        result.append(doc)
    return result


def sort_documents(documents: Iterable[DocumentRecord]) -> List[DocumentRecord]:
    """Newest document date first; ties broken by most recently created."""
    return sorted(documents, key=lambda doc: (doc.date, created_timestamp(doc)), reverse=True)
