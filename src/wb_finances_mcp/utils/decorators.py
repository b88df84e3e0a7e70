"""Decorators for Wildberries API error handling in MCP tools."""

import functools
import json
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Optional

import requests

from ..exceptions import RateLimitError, WBAPIError

logger = logging.getLogger(__name__)


def error_response(
    error_code: str,
    message: str,
    request_id: Optional[str] = None,
    details: Optional[list] = None,
    retry_after: Optional[int] = None,
) -> str:
    """Format a tool error as a JSON string.

    Args:
        error_code: Standard error code (auth_failed, rate_limit_exceeded, etc.)
        message: Human-readable error message
        request_id: Request id to echo; a fresh one is generated when omitted
        details: Optional error details
        retry_after: For rate limit errors, seconds to wait

    Returns:
        JSON-encoded error envelope
    """
    response: dict[str, Any] = {
        "success": False,
        "error": error_code,
        "message": message,
        "metadata": {
            "timestamp": datetime.now().isoformat() + "Z",
            "request_id": request_id or str(uuid.uuid4()),
        },
    }

    if details:
        response["details"] = details
    if retry_after is not None:
        response["retry_after"] = retry_after

    return json.dumps(response, indent=2, ensure_ascii=False)


def handle_wb_api_errors(func: Callable[..., str]) -> Callable[..., str]:
    """Decorator to turn API failures into JSON error responses.

    Every exception kind in ``exceptions`` maps to its own error code, so
    the calling agent can branch on ``error`` instead of parsing text.

    Args:
        func: The tool function to decorate

    Returns:
        Decorated function that handles errors consistently
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        request_id = str(uuid.uuid4())
        start_time = datetime.now()

        def elapsed_ms() -> int:
            return int((datetime.now() - start_time).total_seconds() * 1000)

        try:
            logger.info(f"Request {request_id}: Starting {func.__name__}")
            result = func(*args, **kwargs)
            logger.info(f"Request {request_id}: Completed {func.__name__} in {elapsed_ms()}ms")
            return result

        except RateLimitError as e:
            logger.warning(f"Request {request_id}: Rate limit exceeded in {elapsed_ms()}ms")
            return error_response(
                e.error_code,
                e.message,
                request_id=request_id,
                retry_after=e.retry_after,
            )

        except WBAPIError as e:
            logger.error(f"Request {request_id}: {e.error_code} in {elapsed_ms()}ms: {e.message}")
            return error_response(e.error_code, e.message, request_id=request_id, details=e.details)

        except requests.RequestException as e:
            logger.exception(f"Request {request_id}: Network error in {elapsed_ms()}ms")
            return error_response("network_error", f"Network error: {e!s}", request_id=request_id)

        except ValueError as e:
            logger.exception(f"Request {request_id}: Validation error in {elapsed_ms()}ms: {e}")
            return error_response("invalid_input", str(e), request_id=request_id)

        except Exception as e:
            logger.exception(f"Request {request_id}: Unexpected error in {elapsed_ms()}ms: {e}")
            return error_response(
                "unexpected_error",
                f"An unexpected error occurred: {e!s}",
                request_id=request_id,
            )

    return wrapper
