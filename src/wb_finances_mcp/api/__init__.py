"""Wildberries API client modules."""

from .base import BaseAPIClient
from .documents import DocumentsAPIClient
from .reports import ReportsAPIClient

__all__ = ["BaseAPIClient", "DocumentsAPIClient", "ReportsAPIClient"]
