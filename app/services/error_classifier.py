from __future__ import annotations

from typing import Any

from app.contracts.search import ErrorCategory, NormalizedError
from app.providers.client import (
    ProviderHTTPError,
    ProviderMisconfiguredError,
)
from app.providers.common import as_dict, as_str

_STATUS_CATEGORIES: dict[int, ErrorCategory] = {
    400: ErrorCategory.INVALID_PARAMS,
    401: ErrorCategory.AUTH_FAILURE,
    402: ErrorCategory.CREDITS_EXHAUSTED,
    403: ErrorCategory.ACCESS_DENIED,
    429: ErrorCategory.RATE_LIMITED,
}

_CATEGORY_STATUS: dict[ErrorCategory, int] = {
    ErrorCategory.INVALID_PARAMS: 400,
    ErrorCategory.AUTH_FAILURE: 401,
    ErrorCategory.CREDITS_EXHAUSTED: 402,
    ErrorCategory.ACCESS_DENIED: 403,
    ErrorCategory.RATE_LIMITED: 429,
    ErrorCategory.PROVIDER_MISCONFIGURED: 500,
    ErrorCategory.UPSTREAM_ERROR: 500,
}

_CATEGORY_MESSAGES: dict[ErrorCategory, str] = {
    ErrorCategory.INVALID_PARAMS: "Invalid search parameters",
    ErrorCategory.AUTH_FAILURE: "Invalid API key",
    ErrorCategory.CREDITS_EXHAUSTED: "Provider credits exhausted",
    ErrorCategory.ACCESS_DENIED: "Access denied by provider",
    ErrorCategory.RATE_LIMITED: "Rate limit exceeded, try again later",
    ErrorCategory.PROVIDER_MISCONFIGURED: "Search provider is not configured",
    ErrorCategory.UPSTREAM_ERROR: "Employee data extraction failed",
}


def provider_error_text(body: Any) -> str | None:
    """Pull the provider's own error text out of an error body, if it has one."""
    payload = as_dict(body)
    error = payload.get("error")
    if isinstance(error, str) and error.strip():
        return error.strip()
    error_obj = as_dict(error)
    for key in ("message", "detail", "type"):
        candidate = as_str(error_obj.get(key))
        if candidate:
            return candidate
    for key in ("message", "detail", "error_message", "raw"):
        candidate = as_str(payload.get(key))
        if candidate:
            return candidate
    return None


def build_normalized_error(category: ErrorCategory, details: str | None = None) -> NormalizedError:
    return NormalizedError(
        category=category,
        http_status=_CATEGORY_STATUS[category],
        message=_CATEGORY_MESSAGES[category],
        details=details,
    )


def category_for_status(status_code: int) -> ErrorCategory:
    return _STATUS_CATEGORIES.get(status_code, ErrorCategory.UPSTREAM_ERROR)


def classify_provider_error(exc: Exception) -> NormalizedError:
    if isinstance(exc, ProviderMisconfiguredError):
        return build_normalized_error(ErrorCategory.PROVIDER_MISCONFIGURED, str(exc))
    if isinstance(exc, ProviderHTTPError):
        return build_normalized_error(
            category_for_status(exc.status_code),
            provider_error_text(exc.body) or str(exc),
        )
    return build_normalized_error(ErrorCategory.UPSTREAM_ERROR, str(exc) or type(exc).__name__)
