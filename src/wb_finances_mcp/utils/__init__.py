"""Utility modules for Wildberries API operations."""

from .decorators import error_response, handle_wb_api_errors
from .rate_limiter import FixedDelayLimiter, Limiter, RateLimiter, TokenBucket
from .validators import (
    validate_document_extension,
    validate_document_params,
    validate_required_string,
    validate_sort_field,
    validate_sort_order,
)

__all__ = [
    "FixedDelayLimiter",
    "Limiter",
    "RateLimiter",
    "TokenBucket",
    "error_response",
    "handle_wb_api_errors",
    "validate_document_extension",
    "validate_document_params",
    "validate_required_string",
    "validate_sort_field",
    "validate_sort_order",
]
