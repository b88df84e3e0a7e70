"""Documents API client for seller documents (acts, commission reports, notices)."""

import logging
from typing import Any, Optional

from ..constants import DOCUMENTS_API_PATH, DOCUMENTS_API_URL, DOCUMENTS_TIMEOUT
from ..exceptions import ValidationError
from ..models import DocumentCategory, DocumentItem, DownloadedDocument, parse_model, parse_model_list
from ..utils.rate_limiter import RateLimiter
from ..utils.validators import (
    validate_document_extension,
    validate_document_params,
    validate_required_string,
    validate_sort_field,
    validate_sort_order,
)
from .base import BaseAPIClient

logger = logging.getLogger(__name__)


class DocumentsAPIClient(BaseAPIClient):
    """Client for the seller documents endpoints."""

    default_timeout = DOCUMENTS_TIMEOUT
    bad_request_hint = "Bad request. serviceName and extension are required."
    rate_limit_message = "Rate limit exceeded. Maximum 1 request per 10 seconds."

    def __init__(
        self,
        api_key: str,
        endpoint: str = DOCUMENTS_API_URL,
        timeout: Optional[float] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        super().__init__(api_key, endpoint, timeout=timeout, rate_limiter=rate_limiter)

    def get_api_path(self) -> str:
        """Return the base API path for documents operations."""
        return DOCUMENTS_API_PATH

    def get_document_categories(self, locale: str = "en") -> list[DocumentCategory]:
        """List document categories usable as the ``category`` filter."""
        result = self._make_request(
            "GET", f"{self.get_api_path()}/categories", params={"locale": locale or "en"}
        )
        return parse_model_list(DocumentCategory, self._unwrap(result, "categories"))

    def get_document_list(
        self,
        begin_time: str,
        end_time: str,
        locale: str = "ru",
        sort: str = "category",
        order: str = "desc",
        category: Optional[str] = None,
        service_name: Optional[str] = None,
    ) -> list[DocumentItem]:
        """List seller documents created in a period.

        Args:
            begin_time: Period start (RFC3339)
            end_time: Period end (RFC3339)
            locale: Language of document titles
            sort: ``date`` or ``category``
            order: ``desc`` or ``asc``
            category: Category ``name`` from get_document_categories
            service_name: Unique document ID

        Returns:
            The documents, validated
        """
        validation_errors = []

        if not validate_required_string(begin_time):
            validation_errors.append("begin_time is required")
        if not validate_required_string(end_time):
            validation_errors.append("end_time is required")
        if not validate_sort_field(sort):
            validation_errors.append(f"Invalid sort: {sort}. Valid values: date, category")
        if not validate_sort_order(order):
            validation_errors.append(f"Invalid order: {order}. Valid values: desc, asc")

        if validation_errors:
            raise ValidationError("Input validation failed", details=validation_errors)

        params: dict[str, Any] = {
            "locale": locale or "en",
            "beginTime": begin_time,
            "endTime": end_time,
            "sort": sort,
            "order": order,
        }
        if category:
            params["category"] = category
        if service_name:
            params["serviceName"] = service_name

        result = self._make_request("GET", f"{self.get_api_path()}/list", params=params)
        return parse_model_list(DocumentItem, self._unwrap(result, "documents"))

    def download_document(self, service_name: str, extension: str) -> DownloadedDocument:
        """Download one document; the content comes back base64 encoded."""
        validation_errors = []

        if not validate_required_string(service_name):
            validation_errors.append("service_name is required")
        if not validate_document_extension(extension):
            validation_errors.append(f"Invalid extension: {extension}")

        if validation_errors:
            raise ValidationError("Input validation failed", details=validation_errors)

        result = self._make_request(
            "GET",
            f"{self.get_api_path()}/download",
            params={"serviceName": service_name, "extension": extension},
        )
        return parse_model(DownloadedDocument, self._unwrap(result))

    def download_documents_all(self, params: list[dict[str, Any]]) -> DownloadedDocument:
        """Download several documents at once as a single archive.

        Args:
            params: ``[{"serviceName": ..., "extension": ...}, ...]``

        Returns:
            The archive, base64 encoded
        """
        is_valid, errors = validate_document_params(params)
        if not is_valid:
            raise ValidationError("Input validation failed", details=errors)

        result = self._make_request("POST", f"{self.get_api_path()}/download/all", data={"params": params})
        return parse_model(DownloadedDocument, self._unwrap(result))

    @staticmethod
    def _unwrap(result: Any, key: Optional[str] = None) -> Any:
        """Return ``result["data"]`` (or ``result["data"][key]``)."""
        data = result.get("data") if isinstance(result, dict) else None
        if not isinstance(data, dict):
            raise ValidationError("Validation error: data: missing from response", details=["data: missing"])
        if key is None:
            return data
        if key not in data:
            raise ValidationError(
                f"Validation error: data.{key}: missing from response", details=[f"data.{key}: missing"]
            )
        return data[key]
