"""Report pipeline: fetch rows, aggregate them, render the weekly document."""

import logging
from typing import Optional

from .api.reports import ReportsAPIClient
from .constants import DEFAULT_REPORT_LIMIT, REPORT_START_CURSOR
from .models import ReportQuery, ReportRow
from .pagination import ProgressCallback, fetch_full_report
from .rendering import render_weekly_report
from .utils.rate_limiter import Limiter

logger = logging.getLogger(__name__)


def load_report_rows(
    client: ReportsAPIClient,
    query: ReportQuery,
    full_report: bool = False,
    limiter: Optional[Limiter] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> list[ReportRow]:
    """Fetch one page for ``query``, or every page when ``full_report`` is set."""
    if full_report:
        return fetch_full_report(
            client.get_report_detail_by_period, query, limiter=limiter, on_progress=on_progress
        )
    return client.get_report_detail_by_period(query)


def generate_weekly_report(
    client: ReportsAPIClient,
    query: ReportQuery,
    full_report: bool = False,
    limiter: Optional[Limiter] = None,
) -> dict[str, str]:
    """Build the weekly sales and commission report for a period.

    A single page is fetched with ``limit`` defaulting to 100000 and
    ``rrdid`` to 0; ``full_report`` follows the cursor through every page
    instead, pausing between pages.

    Returns:
        ``{"document": <markdown>}``
    """
    query = query.model_copy(
        update={
            "limit": DEFAULT_REPORT_LIMIT if query.limit is None else query.limit,
            "rrdid": REPORT_START_CURSOR if query.rrdid is None else query.rrdid,
        }
    )

    rows = load_report_rows(client, query, full_report=full_report, limiter=limiter)
    logger.info(f"Rendering weekly report for {query.date_from}..{query.date_to} from {len(rows)} rows")

    return {"document": render_weekly_report(query, rows)}
