"""
Utility functions - Pure functions with no dependencies.
These can be used across all layers.
"""
from .document_utils import compute_dashboard_stats, created_timestamp, format_amount, normalize_folder_id
from .search_utils import filter_documents, sort_documents
from .validators import validate_category_name, validate_folder_name

__all__ = [
    "compute_dashboard_stats",
    "created_timestamp",
    "filter_documents",
    "format_amount",
    "normalize_folder_id",
    "sort_documents",
    "validate_category_name",
    "validate_folder_name",
]
