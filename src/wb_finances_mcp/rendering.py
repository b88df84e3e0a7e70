"""Markdown rendering of the weekly sales and commission report."""

import math
from collections.abc import Mapping, Sequence
from typing import Optional

from .aggregation import BrandAggregate, CommissionTotals, calc_commission_and_vat, group_by_brand
from .constants import CHART_LABEL_WIDTH, CHART_WIDTH, CURRENCY_PLACEHOLDER
from .models import ReportQuery, ReportRow

BAR_CHAR = "█"


def format_currency(value: Optional[float]) -> str:
    """Two decimals, or a dash when the value is missing."""
    if value is None:
        return CURRENCY_PLACEHOLDER
    return f"{value:.2f}"


def render_brand_table(brands: Mapping[str, BrandAggregate]) -> str:
    lines = [
        "| Brand | Qty | Sales amount | Commission |",
        "|-------|-----|--------------|------------|",
    ]
    for brand, agg in brands.items():
        lines.append(
            f"| {brand} | {agg.quantity} | {format_currency(agg.retail_amount)} | {format_currency(agg.commission)} |"
        )
    return "\n".join(lines) + "\n"


def bar_length(quantity: float, max_quantity: float, width: int = CHART_WIDTH) -> int:
    """Bar length scaled so ``max_quantity`` fills ``width``, rounded half up."""
    return max(0, math.floor(quantity / max_quantity * width + 0.5))


def render_brand_chart(brands: Mapping[str, BrandAggregate], width: int = CHART_WIDTH) -> str:
    """ASCII bar chart of quantity per brand, one line per brand."""
    if not brands:
        return ""

    # Floor of 1 keeps all-zero reports from dividing by zero
    max_quantity = max(max(agg.quantity for agg in brands.values()), 1)

    lines = []
    for brand, agg in brands.items():
        bar = BAR_CHAR * bar_length(agg.quantity, max_quantity, width)
        lines.append(f"{brand:<{CHART_LABEL_WIDTH}} | {bar} {agg.quantity}")
    return "\n".join(lines) + "\n"


def render_weekly_report(
    query: ReportQuery,
    rows: Sequence[ReportRow],
    totals: Optional[CommissionTotals] = None,
) -> str:
    """Render the weekly report document.

    The brand table and the chart are drawn from the same grouping, so
    both list brands in the order they first appear in ``rows``.

    Args:
        query: Report period, echoed verbatim in the header
        rows: Report rows (may be empty)
        totals: Precomputed commission totals; computed from rows when None

    Returns:
        Markdown document
    """
    if totals is None:
        totals = calc_commission_and_vat(rows)
    brands = group_by_brand(rows)

    parts = [
        "# Weekly sales and commission report\n\n",
        f"Period: **{query.date_from}** - **{query.date_to}**\n\n",
        "## Totals\n\n",
        f"- Total commission: **{format_currency(totals.commission)}** RUB\n",
        f"- Total VAT: **{format_currency(totals.vat)}** RUB\n",
        f"- Commission with VAT: **{format_currency(totals.total)}** RUB\n\n",
        "## Sales by brand\n\n",
        render_brand_table(brands),
        "\n## Sales by brand chart (qty)\n\n",
        render_brand_chart(brands),
    ]
    return "".join(parts)
