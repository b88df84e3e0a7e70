"""Tests for the realization report client and its error mapping."""

import logging
from datetime import datetime
from unittest.mock import Mock, patch

import pytest
import requests

from wb_finances_mcp.api.reports import ReportsAPIClient
from wb_finances_mcp.exceptions import (
    AuthError,
    BadRequestError,
    HttpError,
    RateLimitError,
    ValidationError,
)
from wb_finances_mcp.models import ReportQuery, ReportRow
from wb_finances_mcp.utils.rate_limiter import RateLimiter

QUERY = ReportQuery(date_from="2025-05-20", date_to="2025-05-21")


@pytest.fixture
def client():
    return ReportsAPIClient("test-api-key")


@pytest.fixture
def mock_request():
    with patch("wb_finances_mcp.api.base.requests.request") as mock:
        yield mock


class TestGetReportDetailByPeriod:
    def test_success(self, client, mock_request, make_response, make_payload):
        mock_request.return_value = make_response(json_data=[make_payload(rrd_id=1), make_payload(rrd_id=2)])

        rows = client.get_report_detail_by_period(QUERY)

        assert [row.rrd_id for row in rows] == [1, 2]
        assert all(isinstance(row, ReportRow) for row in rows)

    def test_request_shape(self, client, mock_request, make_response):
        mock_request.return_value = make_response(json_data=[])

        client.get_report_detail_by_period(QUERY)

        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "https://statistics-api.wildberries.ru/api/v5/supplier/reportDetailByPeriod"
        assert kwargs["params"] == {"dateFrom": "2025-05-20", "dateTo": "2025-05-21"}
        assert kwargs["headers"]["Authorization"] == "test-api-key"
        assert kwargs["timeout"] == 60

    def test_sends_limit_and_cursor_when_set(self, client, mock_request, make_response):
        mock_request.return_value = make_response(json_data=[])

        client.get_report_detail_by_period(QUERY.model_copy(update={"limit": 1, "rrdid": 0}))

        assert mock_request.call_args.kwargs["params"] == {
            "dateFrom": "2025-05-20",
            "dateTo": "2025-05-21",
            "limit": 1,
            "rrdid": 0,
        }

    def test_empty_page(self, client, mock_request, make_response):
        mock_request.return_value = make_response(json_data=[])
        assert client.get_report_detail_by_period(QUERY) == []

    def test_keeps_unknown_columns(self, client, mock_request, make_response, make_payload):
        mock_request.return_value = make_response(json_data=[make_payload(new_upstream_column="x")])

        rows = client.get_report_detail_by_period(QUERY)

        assert rows[0].model_dump()["new_upstream_column"] == "x"

    def test_missing_required_field_fails(self, client, mock_request, make_response, make_payload):
        payload = make_payload()
        del payload["nm_id"]
        mock_request.return_value = make_response(json_data=[make_payload(rrd_id=1), payload])

        with pytest.raises(ValidationError) as exc_info:
            client.get_report_detail_by_period(QUERY)

        assert exc_info.value.details == ["1.nm_id: Field required"]
        assert "1.nm_id" in str(exc_info.value)

    def test_non_list_body_fails(self, client, mock_request, make_response):
        mock_request.return_value = make_response(json_data={"unexpected": True})

        with pytest.raises(ValidationError):
            client.get_report_detail_by_period(QUERY)

    def test_non_json_body_fails(self, client, mock_request, make_response):
        mock_request.return_value = make_response(text="<html>")

        with pytest.raises(ValidationError):
            client.get_report_detail_by_period(QUERY)

    def test_no_content_is_empty_page(self, client, mock_request, make_response):
        response = make_response(204)
        response.json.side_effect = ValueError("No JSON object could be decoded")
        mock_request.return_value = response

        assert client.get_report_detail_by_period(QUERY) == []

    def test_duration_excludes_limiter_wait(self, mock_request, make_response, caplog):
        events = []
        limiter = Mock(spec=RateLimiter)
        limiter.wait_if_needed.side_effect = lambda path: events.append("wait")
        times = iter([datetime(2025, 5, 20, 12, 0, 0), datetime(2025, 5, 20, 12, 0, 0, 250000)])

        def now():
            events.append("now")
            return next(times)

        client = ReportsAPIClient("test-api-key", rate_limiter=limiter)
        mock_request.return_value = make_response(json_data=[])

        with patch("wb_finances_mcp.api.base.datetime") as mock_datetime, caplog.at_level(logging.INFO):
            mock_datetime.now.side_effect = now
            client.get_report_detail_by_period(QUERY)

        assert events == ["wait", "now", "now"]
        assert "Success in 250ms" in caplog.text


class TestErrorMapping:
    def test_400_with_error_list(self, client, mock_request, make_response):
        mock_request.return_value = make_response(400, {"errors": ["dateFrom is invalid", "dateTo is invalid"]})

        with pytest.raises(BadRequestError) as exc_info:
            client.get_report_detail_by_period(QUERY)

        assert str(exc_info.value) == "Bad request: dateFrom is invalid, dateTo is invalid"
        assert exc_info.value.details == ["dateFrom is invalid", "dateTo is invalid"]

    def test_400_with_error_string(self, client, mock_request, make_response):
        mock_request.return_value = make_response(400, {"errors": "can't parse dateFrom"})

        with pytest.raises(BadRequestError) as exc_info:
            client.get_report_detail_by_period(QUERY)

        assert str(exc_info.value) == "Bad request: can't parse dateFrom"

    def test_400_without_details(self, client, mock_request, make_response):
        mock_request.return_value = make_response(400, {})

        with pytest.raises(BadRequestError) as exc_info:
            client.get_report_detail_by_period(QUERY)

        assert "dateFrom and dateTo" in str(exc_info.value)

    def test_401(self, client, mock_request, make_response):
        mock_request.return_value = make_response(401, {"title": "unauthorized"})

        with pytest.raises(AuthError) as exc_info:
            client.get_report_detail_by_period(QUERY)

        assert exc_info.value.status_code == 401

    def test_429(self, client, mock_request, make_response):
        mock_request.return_value = make_response(429, {}, headers={"X-Ratelimit-Retry": "42"})

        with pytest.raises(RateLimitError) as exc_info:
            client.get_report_detail_by_period(QUERY)

        assert exc_info.value.retry_after == 42
        assert "1 request per minute" in str(exc_info.value)
        assert mock_request.call_count == 1

    def test_429_default_retry_after(self, client, mock_request, make_response):
        mock_request.return_value = make_response(429, {})

        with pytest.raises(RateLimitError) as exc_info:
            client.get_report_detail_by_period(QUERY)

        assert exc_info.value.retry_after == 60

    def test_other_status(self, client, mock_request, make_response):
        mock_request.return_value = make_response(503, text="Service Unavailable", reason="Service Unavailable")

        with pytest.raises(HttpError) as exc_info:
            client.get_report_detail_by_period(QUERY)

        assert exc_info.value.status_code == 503
        assert str(exc_info.value) == "HTTP error 503: Service Unavailable"

    def test_transport_error_propagates_unchanged(self, client, mock_request):
        error = requests.ConnectionError("connection refused")
        mock_request.side_effect = error

        with pytest.raises(requests.ConnectionError) as exc_info:
            client.get_report_detail_by_period(QUERY)

        assert exc_info.value is error
