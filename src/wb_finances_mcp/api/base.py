"""Base API client for Wildberries API interactions."""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from ..constants import USER_AGENT
from ..exceptions import AuthError, BadRequestError, HttpError, RateLimitError, ValidationError
from ..utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class BaseAPIClient(ABC):
    """Base class for all Wildberries API clients."""

    # Overridden per API family
    default_timeout: float = 30
    bad_request_hint = "Bad request. Check the request parameters."
    rate_limit_message = "Too many requests."

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        timeout: Optional[float] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        """Initialize the base API client.

        Args:
            api_key: Seller API key, sent as the Authorization header
            endpoint: API base URL
            timeout: Request timeout in seconds (client default when None)
            rate_limiter: Shared limiter consulted before every request
        """
        self.api_key = api_key
        self.endpoint = endpoint.rstrip("/")
        self.timeout = self.default_timeout if timeout is None else timeout
        self.rate_limiter = rate_limiter

        # Common headers
        self.headers = {
            "Authorization": api_key,
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
        }

    def _make_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Any] = None,
    ) -> Any:
        """Make an authenticated request and return the decoded JSON body.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (without base URL)
            params: Query parameters
            data: Request body data

        Returns:
            The decoded JSON response, or None on 204 No Content

        Raises:
            BadRequestError: On 400
            AuthError: On 401
            RateLimitError: On 429
            HttpError: On any other non-2xx status
            ValidationError: When a 2xx body is not JSON
            requests.RequestException: On transport failures
        """
        request_id = str(uuid.uuid4())

        logger.info(f"Request {request_id}: Starting {method} {path}")

        if self.rate_limiter is not None:
            self.rate_limiter.wait_if_needed(path)

        url = f"{self.endpoint}{path}"
        start_time = datetime.now()

        try:
            response = requests.request(
                method=method,
                url=url,
                params=params,
                json=data,
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.error(f"Request {request_id}: Transport error in {duration_ms}ms: {e}")
            raise

        duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)

        if not response.ok:
            logger.warning(
                f"Request {request_id}: Failed in {duration_ms}ms, status={response.status_code}"
            )
            self._raise_for_status(response)

        if response.status_code == 204:
            logger.info(f"Request {request_id}: No content in {duration_ms}ms")
            return None

        try:
            result = response.json()
        except ValueError as e:
            raise ValidationError("Validation error: response body is not valid JSON") from e

        logger.info(f"Request {request_id}: Success in {duration_ms}ms, status={response.status_code}")

        return result

    def _raise_for_status(self, response: requests.Response) -> None:
        """Translate a non-2xx response into the matching exception."""
        status_code = response.status_code
        body = self._error_body(response)

        if status_code == 400:
            details = self._error_details(body)
            if details:
                raise BadRequestError(f"Bad request: {', '.join(details)}", details=details)
            raise BadRequestError(self.bad_request_hint)

        if status_code == 401:
            raise AuthError()

        if status_code == 429:
            raise RateLimitError(self.rate_limit_message, self._retry_after(response))

        message = response.reason or ""
        if isinstance(body, dict):
            message = body.get("detail") or body.get("title") or message
        raise HttpError(status_code, message or "request failed")

    @staticmethod
    def _error_body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return {"raw_response": response.text}

    @staticmethod
    def _error_details(body: Any) -> list[str]:
        """Extract upstream error text; ``errors`` may be a list or a string."""
        if not isinstance(body, dict):
            return []

        errors = body.get("errors")
        if isinstance(errors, list):
            return [str(error) for error in errors]
        if isinstance(errors, str) and errors:
            return [errors]

        detail = body.get("detail")
        if isinstance(detail, str) and detail:
            return [detail]

        return []

    @staticmethod
    def _retry_after(response: requests.Response, default: int = 60) -> int:
        for header in ("X-Ratelimit-Retry", "Retry-After"):
            value = response.headers.get(header)
            if value is None:
                continue
            try:
                return max(int(float(value)), 0)
            except ValueError:
                continue
        return default

    @abstractmethod
    def get_api_path(self) -> str:
        """Return the base API path for this client."""
