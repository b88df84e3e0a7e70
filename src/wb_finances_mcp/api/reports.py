"""Reports API client for the realization report detail (statistics API)."""

import logging
from typing import Optional

from ..constants import API_PATHS, REPORT_TIMEOUT, STATISTICS_API_URL
from ..models import ReportQuery, ReportRow, parse_model_list
from ..utils.rate_limiter import RateLimiter
from .base import BaseAPIClient

logger = logging.getLogger(__name__)


class ReportsAPIClient(BaseAPIClient):
    """Client for the weekly realization report detail endpoint."""

    default_timeout = REPORT_TIMEOUT
    bad_request_hint = "Bad request. Check the dateFrom and dateTo parameters."
    rate_limit_message = "Rate limit exceeded. Maximum 1 request per minute."

    def __init__(
        self,
        api_key: str,
        endpoint: str = STATISTICS_API_URL,
        timeout: Optional[float] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        super().__init__(api_key, endpoint, timeout=timeout, rate_limiter=rate_limiter)

    def get_api_path(self) -> str:
        """Return the API path of the report detail endpoint."""
        return API_PATHS["report_detail"]

    def get_report_detail_by_period(self, query: ReportQuery) -> list[ReportRow]:
        """Fetch one page of the realization report detail.

        Data is available from 29 January 2024. Pages are ordered by
        ``rrd_id``; pass the last ``rrd_id`` seen as ``query.rrdid`` to get
        the next page. An empty list means there is nothing after the cursor.

        Args:
            query: Period, page size and cursor

        Returns:
            The rows of this page, validated

        Raises:
            BadRequestError: Upstream rejected the parameters
            AuthError: API key invalid or missing
            RateLimitError: More than one request per minute
            HttpError: Any other non-2xx response
            ValidationError: A row is missing required fields
        """
        result = self._make_request("GET", self.get_api_path(), params=query.to_params())
        if result is None:
            # 204 No Content: nothing after the cursor
            return []

        rows = parse_model_list(ReportRow, result)
        logger.info(f"Fetched {len(rows)} report rows (rrdid={query.rrdid})")
        return rows
