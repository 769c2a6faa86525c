from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.providers.common import ProviderAttempt, now_ms, parse_json_or_raw

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base class for failures raised while talking to a people-data provider."""

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider


class ProviderMisconfiguredError(ProviderError):
    def __init__(self, provider: str, credential_ref: str):
        super().__init__(provider, f"No API key configured for provider '{provider}' ({credential_ref.upper()})")
        self.credential_ref = credential_ref


class ProviderHTTPError(ProviderError):
    def __init__(self, provider: str, status_code: int, body: dict[str, Any]):
        super().__init__(provider, f"{provider} responded with HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class ProviderTransportError(ProviderError):
    pass


@dataclass(frozen=True)
class ProviderRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] | None = None
    json: dict[str, Any] | None = None


async def send_provider_request(
    request: ProviderRequest,
    *,
    provider: str,
    timeout_seconds: float,
) -> dict[str, Any]:
    """Issue exactly one call to the provider and return its parsed body.

    No retries. Status >= 400 raises ProviderHTTPError carrying the provider body,
    connection failures, timeouts and other httpx errors raise ProviderTransportError.
    """
    start_ms = now_ms()
    try:
        async with httpx.AsyncClient(timeout=timeout_seconds) as client:
            res = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                params=request.params,
                json=request.json,
            )
            body = parse_json_or_raw(res.text, res.json)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        attempt: ProviderAttempt = {
            "provider": provider,
            "action": "employee_search",
            "status": "failed",
            "duration_ms": now_ms() - start_ms,
        }
        logger.warning("Provider request failed before a response", extra={**attempt, "error": type(exc).__name__})
        raise ProviderTransportError(provider, str(exc) or type(exc).__name__) from exc

    attempt = {
        "provider": provider,
        "action": "employee_search",
        "status": "failed" if res.status_code >= 400 else "succeeded",
        "http_status": res.status_code,
        "duration_ms": now_ms() - start_ms,
    }
    if res.status_code >= 400:
        logger.warning("Provider responded with an error status", extra=attempt)
        raise ProviderHTTPError(provider, res.status_code, body)
    logger.info("Provider request completed", extra=attempt)
    return body
