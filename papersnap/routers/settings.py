"""
Settings Router - user preferences and the category list.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, HTTPException, status
from pydantic import ValidationError

from ..api.dto import CategoryCreateDTO
from .dependencies import get_settings_service

router = APIRouter()


@router.get("/settings")
def get_settings() -> Dict[str, Any]:
    return get_settings_service().settings.to_storage()


@router.put("/settings")
def update_settings(changes: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Apply a partial update (camelCase or snake_case keys)."""
    try:
        updated = get_settings_service().update(changes)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False)
        )
    return updated.to_storage()


@router.post("/settings/categories", status_code=status.HTTP_201_CREATED)
def add_category(request: CategoryCreateDTO) -> List[str]:
    return get_settings_service().add_category(request.name)


@router.delete("/settings/categories/{name}")
def remove_category(name: str) -> List[str]:
    """Remove a category. Documents keep whatever category they already have."""
    return get_settings_service().remove_category(name)
