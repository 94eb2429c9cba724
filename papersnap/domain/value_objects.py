"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from enum import Enum
from typing import NewType

# Value objects for type safety and domain clarity
DocumentId = NewType("DocumentId", str)
FolderId = NewType("FolderId", str)
FlashcardSetId = NewType("FlashcardSetId", str)


class DocType(str, Enum):
    """Classification assigned by extraction."""
    RECEIPT = "RECEIPT"
    INVOICE = "INVOICE"
    CONTRACT = "CONTRACT"
    TEXT = "TEXT"
    OTHER = "OTHER"


class DocStatus(str, Enum):
    """Lifecycle of the extraction, not of the record."""
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class ScanMode(str, Enum):
    """How the extraction model should read an upload."""
    FINANCE = "finance"
    DOCUMENT = "document"
    TEXT = "text"


DEFAULT_CATEGORIES = [
    "Fuel",
    "Equipment",
    "Services",
    "Marketing",
    "Travel",
    "Office",
    "Uncategorized",
]

UNCATEGORIZED = "Uncategorized"
