from __future__ import annotations

import logging

from app.config import Settings, get_settings
from app.contracts.search import EmployeeSearchOutput, NormalizedError, SearchParams
from app.providers.base import ProviderAdapter
from app.providers.client import ProviderError, ProviderMisconfiguredError
from app.providers.common import as_str
from app.providers.registry import build_provider_adapter

logger = logging.getLogger(__name__)


def resolve_api_key(
    *,
    adapter: ProviderAdapter,
    settings: Settings,
    client_api_key: str | None,
) -> str:
    """Caller-supplied key first (when the deployment allows it), then the configured key."""
    if settings.allow_client_api_key:
        candidate = as_str(client_api_key)
        if candidate:
            return candidate
    configured = as_str(getattr(settings, adapter.config.credential_ref, None))
    if not configured:
        raise ProviderMisconfiguredError(adapter.name, adapter.config.credential_ref)
    return configured


async def execute_employee_search(
    *,
    search_params: SearchParams,
    api_key: str | None = None,
    adapter: ProviderAdapter | None = None,
    settings: Settings | None = None,
) -> EmployeeSearchOutput | NormalizedError:
    settings = settings or get_settings()
    adapter = adapter or build_provider_adapter(settings)

    try:
        resolved_key = resolve_api_key(adapter=adapter, settings=settings, client_api_key=api_key)
        request = adapter.build_request(search_params, api_key=resolved_key)
        body = await adapter.execute(request, timeout_seconds=settings.provider_timeout_seconds)
    except ProviderError as exc:
        error = adapter.classify_error(exc)
        logger.warning(
            "Employee search failed",
            extra={
                "provider": adapter.name,
                "category": error.category.value,
                "http_status": error.http_status,
            },
        )
        return error

    return adapter.normalize(body, search_params)
