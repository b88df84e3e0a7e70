"""Runtime configuration read from the environment and command line."""

import os
import sys
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    API_KEY_ARG_PREFIX,
    API_KEY_ENV_VAR,
    DOCUMENTS_API_URL,
    REPORT_PAGE_DELAY,
    STATISTICS_API_URL,
)


class Settings(BaseSettings):
    """Endpoint and pacing settings, overridable through ``WB_*`` environment variables.

    Attributes:
        statistics_api_url: Base URL of the report endpoint (``WB_STATISTICS_API_URL``)
        documents_api_url: Base URL of the documents endpoints (``WB_DOCUMENTS_API_URL``)
        report_page_delay: Seconds between report pages (``WB_REPORT_PAGE_DELAY``)
    """

    model_config = SettingsConfigDict(env_prefix="WB_", env_ignore_empty=True, extra="ignore", frozen=True)

    statistics_api_url: str = STATISTICS_API_URL
    documents_api_url: str = DOCUMENTS_API_URL
    report_page_delay: float = Field(REPORT_PAGE_DELAY, ge=0, allow_inf_nan=False)

    @field_validator("statistics_api_url", "documents_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def get_api_key(argv: Optional[list[str]] = None) -> Optional[str]:
    """Resolve the seller API key.

    The environment variable wins over a ``--apiKey=<key>`` argument.

    Args:
        argv: Command line to search; defaults to ``sys.argv``

    Returns:
        The API key, or None when neither source provides one
    """
    api_key = os.getenv(API_KEY_ENV_VAR)
    if api_key:
        return api_key

    for arg in sys.argv if argv is None else argv:
        if arg.startswith(API_KEY_ARG_PREFIX):
            return arg[len(API_KEY_ARG_PREFIX) :] or None

    return None


def get_settings() -> Settings:
    """Build settings from the current environment.

    Raises:
        pydantic.ValidationError: An override is malformed or out of range
    """
    return Settings()
