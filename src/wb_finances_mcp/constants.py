"""Constants and configuration for the Wildberries financial reporting API."""

# Base URLs
STATISTICS_API_URL = "https://statistics-api.wildberries.ru"
DOCUMENTS_API_URL = "https://documents-api.wildberries.ru"

# API Paths
DOCUMENTS_API_PATH = "/api/v1/documents"

API_PATHS = {
    "report_detail": "/api/v5/supplier/reportDetailByPeriod",
    "document_categories": f"{DOCUMENTS_API_PATH}/categories",
    "document_list": f"{DOCUMENTS_API_PATH}/list",
    "document_download": f"{DOCUMENTS_API_PATH}/download",
    "document_download_all": f"{DOCUMENTS_API_PATH}/download/all",
}

# Request timeouts (seconds)
REPORT_TIMEOUT = 60  # Large reports take a while
DOCUMENTS_TIMEOUT = 30

USER_AGENT = "WBFinancesMCP/1.0 (Language=Python)"

# Report paging
MAX_REPORT_LIMIT = 100000
DEFAULT_REPORT_LIMIT = MAX_REPORT_LIMIT
REPORT_START_CURSOR = 0

# Upstream allows 1 report request per minute, plus a second of margin
REPORT_PAGE_DELAY = 61

# Rate limits by API path (requests per second, burst capacity)
RATE_LIMITS = {
    API_PATHS["document_categories"]: (1, 5),
    API_PATHS["document_list"]: (1, 5),
    API_PATHS["document_download"]: (0.1, 1),
    API_PATHS["document_download_all"]: (0.1, 1),
}

# Weekly report rendering
UNKNOWN_BRAND = "Unknown"
CHART_WIDTH = 40
CHART_LABEL_WIDTH = 20
CURRENCY_PLACEHOLDER = "-"

# Document list options
DOCUMENT_SORT_FIELDS = ["date", "category"]
DOCUMENT_SORT_ORDERS = ["desc", "asc"]

# Environment
API_KEY_ENV_VAR = "WB_FINANCES_OAUTH_TOKEN"
API_KEY_ARG_PREFIX = "--apiKey="

# Tool error codes
ERROR_CODES = {
    "invalid_input": "Validation failures (input or upstream response)",
    "auth_failed": "Missing or rejected API key",
    "rate_limit_exceeded": "429 errors",
    "bad_request": "Upstream rejected the request parameters",
    "api_error": "Upstream returned another HTTP error",
    "network_error": "Connection issues",
    "unexpected_error": "Unhandled exceptions",
}
