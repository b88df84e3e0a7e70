"""Input validation utilities for Wildberries API parameters."""

from typing import Any, Dict, List

from ..constants import DOCUMENT_SORT_FIELDS, DOCUMENT_SORT_ORDERS


def validate_required_string(value: Any) -> bool:
    """Validate that a value is a non-blank string.

    Args:
        value: The value to validate

    Returns:
        True if value is a non-empty string
    """
    return isinstance(value, str) and len(value.strip()) > 0


def validate_sort_field(sort: str) -> bool:
    """Validate the document list sort field."""
    return sort in DOCUMENT_SORT_FIELDS


def validate_sort_order(order: str) -> bool:
    """Validate the document list sort order."""
    return order in DOCUMENT_SORT_ORDERS


def validate_document_extension(extension: str) -> bool:
    """Validate a document format such as ``zip``, ``pdf`` or ``xlsx``.

    Args:
        extension: Extension without the leading dot

    Returns:
        True if the extension is a short alphanumeric token
    """
    return validate_required_string(extension) and extension.isalnum() and len(extension) <= 10


def validate_document_params(params: List[Dict[str, Any]]) -> tuple[bool, List[str]]:
    """Validate bulk download items.

    Args:
        params: List of ``{"serviceName": ..., "extension": ...}`` items

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    if not params:
        errors.append("Document list cannot be empty")
        return False, errors

    for idx, item in enumerate(params):
        if not isinstance(item, dict):
            errors.append(f"Item {idx}: Expected an object")
            continue

        if "serviceName" not in item:
            errors.append(f"Item {idx}: Missing required field 'serviceName'")
        elif not validate_required_string(item["serviceName"]):
            errors.append(f"Item {idx}: Invalid serviceName")

        if "extension" not in item:
            errors.append(f"Item {idx}: Missing required field 'extension'")
        elif not validate_document_extension(item["extension"]):
            errors.append(f"Item {idx}: Invalid extension")

    return len(errors) == 0, errors
