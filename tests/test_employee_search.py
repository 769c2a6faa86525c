from __future__ import annotations

from typing import Any

import httpx
import pytest

from app.config import Settings
from app.contracts.search import EmployeeSearchOutput, ErrorCategory, NormalizedError, SearchParams
from app.providers import client as provider_client
from app.services.employee_search import execute_employee_search


class _FakeResponse:
    def __init__(self, *, status_code: int, payload: Any) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = "{}"

    def json(self) -> Any:
        return self._payload


def _install_fake_request(monkeypatch: pytest.MonkeyPatch, response: _FakeResponse) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []

    async def _mock_request(self, method: str, url: str, headers=None, params=None, json=None):  # noqa: ANN001
        _ = self
        calls.append({"method": method, "url": url, "headers": headers, "params": params, "json": json})
        return response

    monkeypatch.setattr(provider_client.httpx.AsyncClient, "request", _mock_request)
    return calls


@pytest.mark.asyncio
async def test_pdl_search_sends_one_request_and_normalizes(monkeypatch: pytest.MonkeyPatch):
    calls = _install_fake_request(
        monkeypatch,
        _FakeResponse(
            status_code=200,
            payload={"status": 200, "total": 250, "data": [{"first_name": "Jane", "work_email": "jane@acme.com"}]},
        ),
    )

    result = await execute_employee_search(
        search_params=SearchParams(company="Acme"),
        api_key="client-key",
        settings=Settings(search_provider="peopledatalabs"),
    )

    assert isinstance(result, EmployeeSearchOutput)
    assert len(calls) == 1
    assert calls[0]["headers"]["X-Api-Key"] == "client-key"
    assert calls[0]["json"]["query"]["bool"]["must"] == [{"match": {"job_company_name": "Acme"}}]
    assert result.total == 250
    assert result.credits_used == 1
    assert result.data[0].job_company_name == "Acme"


@pytest.mark.asyncio
async def test_configured_key_used_when_client_key_absent(monkeypatch: pytest.MonkeyPatch):
    calls = _install_fake_request(monkeypatch, _FakeResponse(status_code=200, payload={"people": [], "pagination": {}}))

    result = await execute_employee_search(
        search_params=SearchParams(jobTitle="CTO"),
        settings=Settings(search_provider="apollo", apollo_api_key="server-key"),
    )

    assert isinstance(result, EmployeeSearchOutput)
    assert result.provider == "apollo"
    assert calls[0]["headers"]["X-Api-Key"] == "server-key"


@pytest.mark.asyncio
async def test_client_key_ignored_when_deployment_disallows_it(monkeypatch: pytest.MonkeyPatch):
    calls = _install_fake_request(monkeypatch, _FakeResponse(status_code=200, payload={"results": []}))

    await execute_employee_search(
        search_params=SearchParams(),
        api_key="client-key",
        settings=Settings(search_provider="proxycurl", proxycurl_api_key="server-key", allow_client_api_key=False),
    )

    assert calls[0]["method"] == "GET"
    assert calls[0]["headers"] == {"Authorization": "Bearer server-key"}


@pytest.mark.asyncio
async def test_missing_credential_makes_no_network_call(monkeypatch: pytest.MonkeyPatch):
    async def _never_called(*args, **kwargs):
        raise AssertionError("No provider request should be made without a credential")

    monkeypatch.setattr(provider_client.httpx.AsyncClient, "request", _never_called)

    result = await execute_employee_search(
        search_params=SearchParams(company="Acme"),
        api_key="   ",
        settings=Settings(search_provider="peopledatalabs", peopledatalabs_api_key=None),
    )

    assert isinstance(result, NormalizedError)
    assert result.category == ErrorCategory.PROVIDER_MISCONFIGURED
    assert result.http_status == 500


@pytest.mark.asyncio
async def test_rate_limited_response_is_classified(monkeypatch: pytest.MonkeyPatch):
    _install_fake_request(
        monkeypatch,
        _FakeResponse(status_code=429, payload={"error": {"type": "rate_limit", "message": "Slow down"}}),
    )

    result = await execute_employee_search(
        search_params=SearchParams(company="Acme"),
        api_key="client-key",
        settings=Settings(search_provider="peopledatalabs"),
    )

    assert isinstance(result, NormalizedError)
    assert result.category == ErrorCategory.RATE_LIMITED
    assert result.http_status == 429
    assert result.details == "Slow down"


@pytest.mark.asyncio
async def test_pdl_no_matches_404_is_an_empty_batch(monkeypatch: pytest.MonkeyPatch):
    _install_fake_request(
        monkeypatch,
        _FakeResponse(
            status_code=404,
            payload={"status": 404, "error": {"type": "not_found", "message": "No records were found matching your search"}},
        ),
    )

    result = await execute_employee_search(
        search_params=SearchParams(company="Nowhere Inc"),
        api_key="client-key",
        settings=Settings(search_provider="peopledatalabs"),
    )

    assert isinstance(result, EmployeeSearchOutput)
    assert result.data == []
    assert result.total == 0


@pytest.mark.asyncio
async def test_apollo_404_is_upstream_error(monkeypatch: pytest.MonkeyPatch):
    _install_fake_request(monkeypatch, _FakeResponse(status_code=404, payload={"error": "Not found"}))

    result = await execute_employee_search(
        search_params=SearchParams(),
        api_key="client-key",
        settings=Settings(search_provider="apollo"),
    )

    assert isinstance(result, NormalizedError)
    assert result.category == ErrorCategory.UPSTREAM_ERROR
    assert result.details == "Not found"


@pytest.mark.asyncio
async def test_timeout_is_upstream_error(monkeypatch: pytest.MonkeyPatch):
    async def _mock_timeout(self, method: str, url: str, headers=None, params=None, json=None):  # noqa: ANN001
        _ = (self, method, url, headers, params, json)
        raise httpx.ReadTimeout("read timed out")

    monkeypatch.setattr(provider_client.httpx.AsyncClient, "request", _mock_timeout)

    result = await execute_employee_search(
        search_params=SearchParams(company="Acme"),
        api_key="client-key",
        settings=Settings(search_provider="peopledatalabs", provider_timeout_seconds=5),
    )

    assert isinstance(result, NormalizedError)
    assert result.category == ErrorCategory.UPSTREAM_ERROR
    assert result.http_status == 500
    assert result.details == "read timed out"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raised",
    [
        httpx.DecodingError("bad gzip"),
        httpx.TooManyRedirects("too many redirects"),
        httpx.InvalidURL("invalid url"),
    ],
)
async def test_non_transport_httpx_failures_are_upstream_errors(monkeypatch: pytest.MonkeyPatch, raised: Exception):
    async def _mock_failure(self, method: str, url: str, headers=None, params=None, json=None):  # noqa: ANN001
        _ = (self, method, url, headers, params, json)
        raise raised

    monkeypatch.setattr(provider_client.httpx.AsyncClient, "request", _mock_failure)

    result = await execute_employee_search(
        search_params=SearchParams(company="Acme"),
        api_key="client-key",
        settings=Settings(search_provider="peopledatalabs"),
    )

    assert isinstance(result, NormalizedError)
    assert result.category == ErrorCategory.UPSTREAM_ERROR
    assert result.http_status == 500
    assert result.details == str(raised)
