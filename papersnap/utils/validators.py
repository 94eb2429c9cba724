"""
Validation utilities - Pure validation functions.
"""
from ..api.exceptions import InvalidCategoryError, InvalidFolderNameError

MAX_NAME_LENGTH = 100


def validate_folder_name(name: str) -> str:
    """
    Validate and normalize a folder name.

    Folders are flat, so any character is allowed; only blank or overly
    long names are rejected.

    Returns:
        The stripped name

    Raises:
        InvalidFolderNameError: If folder name is invalid
    """
    name = (name or "").strip()
    if not name:
        raise InvalidFolderNameError("Folder name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidFolderNameError(f"Folder name cannot be longer than {MAX_NAME_LENGTH} characters")
    return name


def validate_category_name(name: str) -> str:
    """
    Validate and normalize a category name.

    Raises:
        InvalidCategoryError: If category name is invalid
    """
    name = (name or "").strip()
    if not name:
        raise InvalidCategoryError("Category name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidCategoryError(f"Category name cannot be longer than {MAX_NAME_LENGTH} characters")
    return name
