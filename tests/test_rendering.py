"""Tests for the weekly report renderer."""

from wb_finances_mcp.aggregation import BrandAggregate, CommissionTotals
from wb_finances_mcp.models import ReportQuery
from wb_finances_mcp.rendering import (
    bar_length,
    format_currency,
    render_brand_chart,
    render_brand_table,
    render_weekly_report,
)

QUERY = ReportQuery(date_from="2025-05-19", date_to="2025-05-25")


class TestFormatCurrency:
    def test_two_decimals(self):
        assert format_currency(1234.5) == "1234.50"
        assert format_currency(0) == "0.00"
        assert format_currency(-3.456) == "-3.46"

    def test_missing_value_is_dash(self):
        assert format_currency(None) == "-"


class TestBrandTable:
    def test_rows_in_grouping_order(self):
        brands = {
            "Zeta": BrandAggregate(quantity=2, retail_amount=10.0, commission=1.5),
            "Alpha": BrandAggregate(quantity=1, retail_amount=5.25, commission=0.75),
        }

        lines = render_brand_table(brands).splitlines()

        assert lines[0] == "| Brand | Qty | Sales amount | Commission |"
        assert lines[2] == "| Zeta | 2 | 10.00 | 1.50 |"
        assert lines[3] == "| Alpha | 1 | 5.25 | 0.75 |"

    def test_empty_table_has_header_only(self):
        assert len(render_brand_table({}).splitlines()) == 2


class TestBrandChart:
    def test_largest_brand_gets_full_width(self):
        brands = {
            "A": BrandAggregate(quantity=10),
            "B": BrandAggregate(quantity=5),
        }

        lines = render_brand_chart(brands, width=40).splitlines()

        assert lines[0] == f"{'A':<20} | {'█' * 40} 10"
        assert lines[1] == f"{'B':<20} | {'█' * 20} 5"

    def test_rounds_half_up(self):
        assert bar_length(1, 16, width=40) == 3  # 2.5
        assert bar_length(1, 8, width=4) == 1  # 0.5

    def test_zero_quantities(self):
        lines = render_brand_chart({"A": BrandAggregate(quantity=0)}).splitlines()
        assert lines == [f"{'A':<20} |  0"]

    def test_negative_quantity_draws_no_bar(self):
        assert bar_length(-4, 10) == 0

    def test_empty(self):
        assert render_brand_chart({}) == ""


class TestWeeklyReport:
    def test_full_document(self, make_row):
        rows = [
            make_row(rrd_id=1, brand_name="A", quantity=3, retail_amount=300.0,
                     ppvz_sales_commission=10.0, ppvz_vw_nds=2.0),
            make_row(rrd_id=2, brand_name="B", quantity=1, retail_amount=100.0,
                     ppvz_sales_commission=1.0, ppvz_vw_nds=0.2),
            make_row(rrd_id=3, brand_name="A", quantity=2, retail_amount=200.0,
                     ppvz_sales_commission=5.0, ppvz_vw_nds=1.0),
        ]

        document = render_weekly_report(QUERY, rows)

        assert "Period: **2025-05-19** - **2025-05-25**" in document
        assert "- Total commission: **16.00** RUB" in document
        assert "- Total VAT: **3.20** RUB" in document
        assert "- Commission with VAT: **19.20** RUB" in document
        assert "| A | 5 | 500.00 | 15.00 |" in document
        assert "| B | 1 | 100.00 | 1.00 |" in document

        # Table and chart list brands in the same order
        table = document.split("## Sales by brand\n")[1]
        chart = document.split("## Sales by brand chart (qty)\n")[1]
        assert table.index("| A |") < table.index("| B |")
        assert chart.index("A  ") < chart.index("B  ")
        assert f"{'A':<20} | {'█' * 40} 5" in chart

    def test_echoes_dates_verbatim(self, make_row):
        query = ReportQuery(date_from="2025-05-19T00:00:00", date_to="2025-05-25")
        assert "**2025-05-19T00:00:00** - **2025-05-25**" in render_weekly_report(query, [])

    def test_empty_rows(self):
        document = render_weekly_report(QUERY, [])

        assert "- Total commission: **0.00** RUB" in document
        assert "- Total VAT: **0.00** RUB" in document
        assert "- Commission with VAT: **0.00** RUB" in document
        assert "|-------|-----|--------------|------------|\n" in document
        assert "█" not in document
        assert document.endswith("## Sales by brand chart (qty)\n\n")

    def test_uses_given_totals(self):
        totals = CommissionTotals(commission=1.0, vat=2.0, total=3.0)
        document = render_weekly_report(QUERY, [], totals=totals)
        assert "**3.00** RUB" in document
