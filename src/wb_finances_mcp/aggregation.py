"""Aggregations over report rows.

All functions are pure: same rows in, same numbers out. Optional numeric
fields that are missing count as zero.
"""

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass

from .constants import UNKNOWN_BRAND
from .models import ReportRow


@dataclass(frozen=True)
class CommissionTotals:
    """Marketplace commission and the VAT charged on it."""

    commission: float
    vat: float
    total: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ReportMetrics:
    total_quantity: int
    total_retail_amount: float
    total_for_pay: float
    total_commission: float
    total_penalty: float
    total_storage_fee: float
    unique_articles: int
    total_orders: int

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass
class BrandAggregate:
    """Running per-brand sums."""

    quantity: int = 0
    retail_amount: float = 0.0
    commission: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def brand_of(row: ReportRow) -> str:
    return row.brand_name or UNKNOWN_BRAND


def calc_commission_and_vat(rows: Iterable[ReportRow]) -> CommissionTotals:
    """Sum the sales commission and the VAT on it."""
    commission = 0.0
    vat = 0.0

    for row in rows:
        commission += row.ppvz_sales_commission or 0
        vat += row.ppvz_vw_nds or 0

    return CommissionTotals(commission=commission, vat=vat, total=commission + vat)


def calculate_report_metrics(rows: Sequence[ReportRow]) -> ReportMetrics:
    """Headline metrics of a report: quantities, money flows, distinct articles."""
    return ReportMetrics(
        total_quantity=sum(row.quantity or 0 for row in rows),
        total_retail_amount=sum(row.retail_amount or 0 for row in rows),
        total_for_pay=sum(row.ppvz_for_pay or 0 for row in rows),
        total_commission=sum(row.ppvz_sales_commission or 0 for row in rows),
        total_penalty=sum(row.penalty or 0 for row in rows),
        total_storage_fee=sum(row.storage_fee or 0 for row in rows),
        unique_articles=len({row.nm_id for row in rows}),
        total_orders=len(rows),
    )


def group_by_brand(rows: Iterable[ReportRow]) -> dict[str, BrandAggregate]:
    """Sum quantity, sales and commission per brand.

    Brands keep the order in which they first appear; rows without a brand
    go under ``Unknown``.
    """
    brands: dict[str, BrandAggregate] = {}

    for row in rows:
        agg = brands.setdefault(brand_of(row), BrandAggregate())
        agg.quantity += row.quantity or 0
        agg.retail_amount += row.retail_amount or 0
        agg.commission += row.ppvz_sales_commission or 0

    return brands


def group_by_article(rows: Iterable[ReportRow]) -> dict[int, list[ReportRow]]:
    """Group rows by WB article (``nm_id``), first-seen order."""
    groups: dict[int, list[ReportRow]] = {}
    for row in rows:
        groups.setdefault(row.nm_id, []).append(row)
    return groups
