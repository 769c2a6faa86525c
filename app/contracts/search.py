from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchParams(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    company: str | None = None
    job_title: str | None = Field(default=None, alias="jobTitle")
    location: str | None = None

    @field_validator("company", "job_title", "location", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            cleaned = value.strip()
            return cleaned or None
        return value


class EmployeeRecord(BaseModel):
    first_name: str
    last_name: str
    job_title: str
    job_company_name: str
    linkedin_url: str
    work_email: str | None
    profile_pic_url: str | None


class EmployeeSearchOutput(BaseModel):
    data: list[EmployeeRecord]
    total: int = Field(description="Match count reported by the provider; may exceed len(data).")
    credits_used: int = Field(description="Estimate: number of records returned, not the provider's billed cost.")
    provider: str


class ErrorCategory(str, Enum):
    INVALID_PARAMS = "InvalidParams"
    AUTH_FAILURE = "AuthFailure"
    CREDITS_EXHAUSTED = "CreditsExhausted"
    ACCESS_DENIED = "AccessDenied"
    RATE_LIMITED = "RateLimited"
    PROVIDER_MISCONFIGURED = "ProviderMisconfigured"
    UPSTREAM_ERROR = "UpstreamError"


class NormalizedError(BaseModel):
    category: ErrorCategory
    http_status: int
    message: str
    details: str | None = None
