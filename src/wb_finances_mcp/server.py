#!/usr/bin/env python3
"""MCP Server for the Wildberries seller finances API using FastMCP.

This server exposes the realization report detail (with automatic cursor
pagination), commission and metrics aggregation, a weekly markdown report,
and the seller documents endpoints.
"""

import json
import logging
import sys
from typing import Annotated, Any, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP

from . import aggregation
from .api.documents import DocumentsAPIClient
from .api.reports import ReportsAPIClient
from .config import get_api_key, get_settings
from .constants import API_KEY_ENV_VAR, MAX_REPORT_LIMIT
from .models import ReportQuery, parse_model
from .pagination import fetch_full_report
from .reports_service import generate_weekly_report as build_weekly_report
from .utils.decorators import error_response, handle_wb_api_errors
from .utils.rate_limiter import FixedDelayLimiter, RateLimiter

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

mcp: FastMCP = FastMCP(
    "wb-finances-mcp",
    instructions=(
        "Tools for Wildberries seller finances: realization report detail, "
        "commission and VAT totals, report metrics, a weekly sales report, and seller documents. "
        "The report endpoint allows 1 request per minute per seller account."
    ),
)

# Shared across tool calls; paces the documents endpoints
rate_limiter = RateLimiter()

MISSING_API_KEY_MESSAGE = (
    f"API key is required. Please set {API_KEY_ENV_VAR} environment variable or provide --apiKey argument."
)


def _to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _build_query(date_from: str, date_to: str, limit: Optional[int] = None, rrdid: Optional[int] = None) -> ReportQuery:
    return parse_model(ReportQuery, {"date_from": date_from, "date_to": date_to, "limit": limit, "rrdid": rrdid})


def _reports_client(api_key: str) -> ReportsAPIClient:
    return ReportsAPIClient(api_key, endpoint=get_settings().statistics_api_url)


def _documents_client(api_key: str) -> DocumentsAPIClient:
    return DocumentsAPIClient(api_key, endpoint=get_settings().documents_api_url, rate_limiter=rate_limiter)


DateFrom = Annotated[str, "Report start in RFC3339 format (e.g. '2024-01-01' or '2024-01-01T00:00:00')"]
DateTo = Annotated[str, "Report end date (e.g. '2024-01-31')"]
Limit = Annotated[Optional[int], f"Maximum number of rows per response (1-{MAX_REPORT_LIMIT})"]
RrdId = Annotated[Optional[int], "Row id to continue after, for pagination (start with 0)"]


@handle_wb_api_errors
def get_report_detail_by_period(
    date_from: DateFrom,
    date_to: DateTo,
    limit: Limit = None,
    rrdid: RrdId = None,
) -> str:
    """Get the detail of the weekly realization reports for a period (one page).

    Data is available from 29 January 2024.

    Limit: at most 1 request per minute per seller account.

    Requires the WB_FINANCES_OAUTH_TOKEN environment variable or --apiKey argument.
    """
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    query = _build_query(date_from, date_to, limit, rrdid)
    rows = _reports_client(api_key).get_report_detail_by_period(query)

    return _to_json({"items": [row.model_dump() for row in rows]})


@handle_wb_api_errors
def get_full_report_detail_by_period(
    date_from: DateFrom,
    date_to: DateTo,
    limit: Limit = None,
) -> str:
    """Get the complete realization report detail for a period, following pagination.

    Pages are requested one per minute (61s apart) until the API returns an
    empty page, so large periods take several minutes. A failure on any page
    fails the whole call.
    """
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    query = _build_query(date_from, date_to, limit)
    rows = fetch_full_report(
        _reports_client(api_key).get_report_detail_by_period,
        query,
        limiter=FixedDelayLimiter(get_settings().report_page_delay),
    )

    return _to_json({"items": [row.model_dump() for row in rows], "count": len(rows)})


@handle_wb_api_errors
def get_total_commission_by_period(
    date_from: DateFrom,
    date_to: DateTo,
    limit: Limit = None,
    rrdid: RrdId = None,
) -> str:
    """Sum the Wildberries commission plus the VAT on it for a period."""
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    query = _build_query(date_from, date_to, limit, rrdid)
    rows = _reports_client(api_key).get_report_detail_by_period(query)

    return _to_json({"total_commission": aggregation.calc_commission_and_vat(rows).to_dict()})


@handle_wb_api_errors
def calculate_report_metrics(
    date_from: DateFrom,
    date_to: DateTo,
    limit: Limit = None,
    rrdid: RrdId = None,
) -> str:
    """Compute headline metrics of the report: quantity, sales, payout, commission, penalties, storage, articles."""
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    query = _build_query(date_from, date_to, limit, rrdid)
    rows = _reports_client(api_key).get_report_detail_by_period(query)

    return _to_json(aggregation.calculate_report_metrics(rows).to_dict())


@handle_wb_api_errors
def get_sales_by_brand(
    date_from: DateFrom,
    date_to: DateTo,
    limit: Limit = None,
    rrdid: RrdId = None,
) -> str:
    """Sum quantity, sales amount and commission per brand, in order of first appearance."""
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    query = _build_query(date_from, date_to, limit, rrdid)
    rows = _reports_client(api_key).get_report_detail_by_period(query)

    brands = [{"brand": brand, **agg.to_dict()} for brand, agg in aggregation.group_by_brand(rows).items()]
    return _to_json({"brands": brands})


@handle_wb_api_errors
def generate_weekly_report(
    date_from: DateFrom,
    date_to: DateTo,
    limit: Limit = None,
    rrdid: RrdId = None,
    full_report: Annotated[bool, "Follow pagination through the whole period (one page per minute)"] = False,
) -> str:
    """Weekly sales and commission report as markdown: totals, per-brand table and chart."""
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    query = _build_query(date_from, date_to, limit, rrdid)
    report = build_weekly_report(
        _reports_client(api_key),
        query,
        full_report=full_report,
        limiter=FixedDelayLimiter(get_settings().report_page_delay),
    )

    return _to_json(report)


@handle_wb_api_errors
def get_document_categories(
    locale: Annotated[str, "Language of category titles: 'ru', 'en' or 'zh'"] = "en",
) -> str:
    """List seller document categories, for filtering get_document_list."""
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    categories = _documents_client(api_key).get_document_categories(locale)
    return _to_json({"categories": [category.model_dump() for category in categories]})


@handle_wb_api_errors
def get_document_list(
    begin_time: Annotated[str, "Period start in RFC3339 format"],
    end_time: Annotated[str, "Period end in RFC3339 format"],
    locale: Annotated[str, "Language of document titles"] = "ru",
    sort: Annotated[str, "Sort by 'date' or 'category'"] = "category",
    order: Annotated[str, "Sort order: 'desc' or 'asc'"] = "desc",
    category: Annotated[str, "Category name from get_document_categories (optional)"] = "",
    service_name: Annotated[str, "Unique document ID (optional)"] = "",
) -> str:
    """List the seller's documents for a period."""
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    documents = _documents_client(api_key).get_document_list(
        begin_time,
        end_time,
        locale=locale,
        sort=sort,
        order=order,
        category=category or None,
        service_name=service_name or None,
    )
    return _to_json({"documents": [document.model_dump(by_alias=True) for document in documents]})


@handle_wb_api_errors
def download_document(
    service_name: Annotated[str, "Unique document ID"],
    extension: Annotated[str, "Document format (e.g. zip, pdf, xlsx)"],
) -> str:
    """Download one seller document; content is returned base64 encoded.

    Limit: at most 1 request per 10 seconds.
    """
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    document = _documents_client(api_key).download_document(service_name, extension)
    return _to_json({"data": document.model_dump(by_alias=True)})


@handle_wb_api_errors
def download_documents_all(
    params: Annotated[list[dict[str, str]], "Documents to download: [{'serviceName': ..., 'extension': ...}]"],
) -> str:
    """Download several seller documents as one base64 encoded archive."""
    api_key = get_api_key()
    if not api_key:
        return error_response("auth_failed", MISSING_API_KEY_MESSAGE)

    document = _documents_client(api_key).download_documents_all(params)
    return _to_json({"data": document.model_dump(by_alias=True)})


# Registered here rather than with stacked @mcp.tool(): fastmcp's decorator
# returns a FunctionTool, and the module-level names must stay plain callables.
TOOLS = [
    get_report_detail_by_period,
    get_full_report_detail_by_period,
    get_total_commission_by_period,
    calculate_report_metrics,
    get_sales_by_brand,
    generate_weekly_report,
    get_document_categories,
    get_document_list,
    download_document,
    download_documents_all,
]

for _tool in TOOLS:
    mcp.tool()(_tool)


def main() -> None:
    """Entry point for the MCP server."""
    # stdout carries the MCP protocol
    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("WB Finances MCP Server running")
    mcp.run()


if __name__ == "__main__":
    main()
