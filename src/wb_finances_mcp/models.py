"""Data contracts for Wildberries reporting and documents responses."""

from typing import Any, Optional, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from .constants import MAX_REPORT_LIMIT
from .exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ReportRow(BaseModel):
    """
    One line of the realization report detail (reportDetailByPeriod).

    Fields marked optional may be missing upstream depending on the
    document type. Unknown columns are kept as extras so callers still
    see them when the API grows.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    realizationreport_id: int
    date_from: str
    date_to: str
    create_dt: str
    currency_name: str
    suppliercontract_code: Optional[Any] = None
    rrd_id: int
    gi_id: int
    dlv_prc: float
    fix_tariff_date_from: str
    fix_tariff_date_to: str
    subject_name: str
    nm_id: int
    brand_name: Optional[str] = None
    sa_name: str
    ts_name: str
    barcode: str
    doc_type_name: str
    quantity: int
    retail_price: float
    retail_amount: float
    sale_percent: float
    commission_percent: float
    office_name: str
    supplier_oper_name: str
    order_dt: str
    sale_dt: str
    rr_dt: str
    shk_id: int
    retail_price_withdisc_rub: float
    delivery_amount: int
    return_amount: int
    delivery_rub: float
    gi_box_type_name: str
    product_discount_for_report: float
    supplier_promo: float
    rid: int
    ppvz_spp_prc: float
    ppvz_kvw_prc_base: float
    ppvz_kvw_prc: float
    sup_rating_prc_up: Optional[float] = None
    is_kgvp_v2: Optional[float] = None
    ppvz_sales_commission: float
    ppvz_for_pay: float
    ppvz_reward: float
    acquiring_fee: float
    acquiring_percent: float
    payment_processing: str
    acquiring_bank: str
    ppvz_vw: float
    ppvz_vw_nds: float
    ppvz_office_name: str
    ppvz_office_id: int
    ppvz_supplier_id: int
    ppvz_supplier_name: str
    ppvz_inn: str
    declaration_number: str
    bonus_type_name: Optional[str] = None
    sticker_id: str
    site_country: str
    srv_dbs: bool
    penalty: float
    additional_payment: float
    rebill_logistic_cost: float
    rebill_logistic_org: Optional[str] = None
    storage_fee: Optional[float] = None
    deduction: Optional[float] = None
    acceptance: Optional[float] = None
    assembly_id: Optional[int] = None
    kiz: Optional[str] = None
    srid: str
    report_type: int
    is_legal_entity: bool
    trbx_id: Optional[str] = None
    installment_cofinancing_amount: Optional[float] = None
    wibes_wb_discount_percent: Optional[float] = None


class ReportQuery(BaseModel):
    """Parameters of one reportDetailByPeriod request."""

    model_config = ConfigDict(frozen=True)

    date_from: str = Field(min_length=1, description="Report start, RFC3339 or date (e.g. 2024-01-01)")
    date_to: str = Field(min_length=1, description="Report end date (e.g. 2024-01-31)")
    limit: Optional[int] = Field(default=None, ge=1, le=MAX_REPORT_LIMIT)
    rrdid: Optional[int] = Field(default=None, ge=0)

    def with_cursor(self, rrdid: int) -> "ReportQuery":
        """Return a copy of this query starting after row ``rrdid``."""
        return self.model_copy(update={"rrdid": rrdid})

    def to_params(self) -> dict[str, Any]:
        """Query parameters; limit and rrdid are sent only when set."""
        params: dict[str, Any] = {"dateFrom": self.date_from, "dateTo": self.date_to}
        if self.limit is not None:
            params["limit"] = self.limit
        if self.rrdid is not None:
            params["rrdid"] = self.rrdid
        return params


class DocumentCategory(BaseModel):
    name: str
    title: str


class DocumentItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    service_name: str = Field(alias="serviceName")
    name: str
    category: str
    extensions: list[str] = Field(default_factory=list)
    creation_time: str = Field(alias="creationTime")
    viewed: bool = False


class DownloadedDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName")
    extension: str
    document: str  # base64


def format_validation_errors(error: pydantic.ValidationError) -> list[str]:
    """Flatten pydantic errors into ``"<location>: <message>"`` strings."""
    messages = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        messages.append(f"{location}: {err['msg']}")
    return messages


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate ``data`` as ``model``, raising our ValidationError on failure."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        details = format_validation_errors(e)
        raise ValidationError(f"Validation error: {', '.join(details)}", details=details) from e


def parse_model_list(model: type[ModelT], data: Any) -> list[ModelT]:
    """Validate a JSON array where every element must be a valid ``model``."""
    adapter = pydantic.TypeAdapter(list[model])  # type: ignore[valid-type]
    try:
        return adapter.validate_python(data)
    except pydantic.ValidationError as e:
        details = format_validation_errors(e)
        raise ValidationError(f"Validation error: {', '.join(details)}", details=details) from e
