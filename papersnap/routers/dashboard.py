"""
Dashboard Router - summary numbers for the home screen.
"""
from fastapi import APIRouter

from ..api.dto import DashboardDTO
from ..api.mappers import DocumentMapper
from ..utils.document_utils import compute_dashboard_stats
from .dependencies import get_document_store

router = APIRouter()


@router.get("/dashboard", response_model=DashboardDTO)
def get_dashboard():
    store = get_document_store()
    stats = compute_dashboard_stats(store.active_documents)
    stats["recent_documents"] = DocumentMapper.to_payload_list(stats["recent_documents"])
    stats["has_new_documents"] = store.has_new_documents
    return DashboardDTO(**stats)
