"""Shared fixtures: report rows and mocked HTTP responses."""

from typing import Any, Optional
from unittest.mock import Mock

import pytest

from wb_finances_mcp.models import ReportRow


def row_payload(**overrides: Any) -> dict[str, Any]:
    """A complete reportDetailByPeriod row as the API returns it."""
    payload = {
        "realizationreport_id": 1234567,
        "date_from": "2025-05-19",
        "date_to": "2025-05-25",
        "create_dt": "2025-05-26",
        "currency_name": "RUB",
        "suppliercontract_code": None,
        "rrd_id": 1,
        "gi_id": 111,
        "dlv_prc": 1.8,
        "fix_tariff_date_from": "",
        "fix_tariff_date_to": "",
        "subject_name": "Dresses",
        "nm_id": 1001,
        "brand_name": "Acme",
        "sa_name": "ACME-DRESS-01",
        "ts_name": "42",
        "barcode": "2000000000017",
        "doc_type_name": "Sale",
        "quantity": 1,
        "retail_price": 2500.0,
        "retail_amount": 2000.0,
        "sale_percent": 20.0,
        "commission_percent": 0.2,
        "office_name": "Koledino",
        "supplier_oper_name": "Sale",
        "order_dt": "2025-05-18T10:00:00",
        "sale_dt": "2025-05-20T10:00:00",
        "rr_dt": "2025-05-20",
        "shk_id": 555,
        "retail_price_withdisc_rub": 2000.0,
        "delivery_amount": 0,
        "return_amount": 0,
        "delivery_rub": 0.0,
        "gi_box_type_name": "Mono",
        "product_discount_for_report": 20.0,
        "supplier_promo": 0.0,
        "rid": 0,
        "ppvz_spp_prc": 0.1,
        "ppvz_kvw_prc_base": 0.15,
        "ppvz_kvw_prc": 0.15,
        "ppvz_sales_commission": 300.0,
        "ppvz_for_pay": 1640.0,
        "ppvz_reward": 0.0,
        "acquiring_fee": 30.0,
        "acquiring_percent": 1.5,
        "payment_processing": "Card",
        "acquiring_bank": "Bank",
        "ppvz_vw": 250.0,
        "ppvz_vw_nds": 50.0,
        "ppvz_office_name": "Pickup point",
        "ppvz_office_id": 77,
        "ppvz_supplier_id": 88,
        "ppvz_supplier_name": "Acme LLC",
        "ppvz_inn": "7700000000",
        "declaration_number": "",
        "sticker_id": "0",
        "site_country": "Russia",
        "srv_dbs": False,
        "penalty": 0.0,
        "additional_payment": 0.0,
        "rebill_logistic_cost": 0.0,
        "srid": "abc123",
        "report_type": 1,
        "is_legal_entity": False,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_row():
    """Factory building validated rows from ``row_payload`` overrides."""

    def _make_row(**overrides: Any) -> ReportRow:
        return ReportRow.model_validate(row_payload(**overrides))

    return _make_row


def mock_response(
    status_code: int = 200,
    json_data: Any = None,
    headers: Optional[dict[str, str]] = None,
    text: str = "",
    reason: str = "",
) -> Mock:
    """A stand-in for ``requests.Response``."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.headers = headers or {}
    response.text = text
    response.reason = reason
    if json_data is None and text:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def make_payload():
    return row_payload


@pytest.fixture
def make_response():
    return mock_response
