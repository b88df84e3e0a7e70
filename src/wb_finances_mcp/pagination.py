"""Cursor pagination over the realization report detail.

The endpoint pages by ``rrdid``: each request returns rows after the given
row id, and an empty page means the period is exhausted. There is no
iteration cap; a source that never returns an empty page keeps the loop
running.
"""

import logging
from typing import Callable, Iterator, Optional

from .constants import REPORT_PAGE_DELAY, REPORT_START_CURSOR
from .models import ReportQuery, ReportRow
from .utils.rate_limiter import FixedDelayLimiter, Limiter

logger = logging.getLogger(__name__)

FetchPage = Callable[[ReportQuery], list[ReportRow]]
ProgressCallback = Callable[[int, int], None]


def iter_report_pages(fetch_page: FetchPage, query: ReportQuery, limiter: Limiter) -> Iterator[list[ReportRow]]:
    """Yield report pages in cursor order until an empty page.

    Args:
        fetch_page: Fetches one page for a query, e.g.
            ``ReportsAPIClient.get_report_detail_by_period``
        query: Period and page size; ``rrdid`` is the starting cursor (0 when unset)
        limiter: Acquired after every non-empty page, before the next request

    Yields:
        Each non-empty page, strictly sequentially
    """
    cursor = REPORT_START_CURSOR if query.rrdid is None else query.rrdid

    while True:
        page = fetch_page(query.with_cursor(cursor))
        if not page:
            return

        cursor = page[-1].rrd_id
        yield page
        limiter.acquire()


def fetch_full_report(
    fetch_page: FetchPage,
    query: ReportQuery,
    limiter: Optional[Limiter] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> list[ReportRow]:
    """Fetch every row of a period by following the cursor.

    Any failure aborts the whole run and propagates; rows fetched so far
    are dropped. The last good cursor is logged so the fetch can be resumed
    by hand with ``rrdid``.

    Args:
        fetch_page: Fetches one page for a query
        query: Period and page size
        limiter: Pause between pages (61s fixed delay by default)
        on_progress: Called with (rows loaded so far, last rrd_id) after each page

    Returns:
        All rows, in cursor order
    """
    if limiter is None:
        limiter = FixedDelayLimiter(REPORT_PAGE_DELAY)

    rows: list[ReportRow] = []
    last_rrd_id: Optional[int] = None

    try:
        for page in iter_report_pages(fetch_page, query, limiter):
            rows.extend(page)
            last_rrd_id = page[-1].rrd_id
            logger.info(f"Loaded {len(rows)} report rows, last rrd_id={last_rrd_id}")
            if on_progress:
                on_progress(len(rows), last_rrd_id)
    except Exception:
        if last_rrd_id is not None:
            logger.warning(
                f"Report fetch for {query.date_from}..{query.date_to} failed after {len(rows)} rows; "
                f"resume with rrdid={last_rrd_id}"
            )
        raise

    return rows
