from __future__ import annotations

from typing import Any

from app.contracts.search import SearchParams
from app.providers.base import ProviderAdapter, RequestStyle
from app.providers.client import ProviderHTTPError, ProviderRequest
from app.providers.common import as_list

_PAGE_SIZE = 20

_MATCH_FIELDS = (
    ("company", "job_company_name"),
    ("job_title", "job_title"),
    ("location", "location_name"),
)


def build_elastic_query(params: SearchParams) -> dict[str, Any]:
    must: list[dict[str, Any]] = []
    for attr, field_name in _MATCH_FIELDS:
        value = getattr(params, attr)
        if value:
            must.append({"match": {field_name: value}})
    return {"bool": {"must": must}}


class PeopleDataLabsAdapter(ProviderAdapter):
    request_style = RequestStyle.QUERY_DSL

    def build_request(self, params: SearchParams, *, api_key: str) -> ProviderRequest:
        return ProviderRequest(
            method="POST",
            url=self.config.endpoint,
            headers={"X-Api-Key": api_key, "Content-Type": "application/json"},
            json={"query": build_elastic_query(params), "size": _PAGE_SIZE},
        )

    async def execute(self, request: ProviderRequest, *, timeout_seconds: float) -> dict[str, Any]:
        try:
            return await super().execute(request, timeout_seconds=timeout_seconds)
        except ProviderHTTPError as exc:
            # Person search answers "no matches" with a 404.
            if exc.status_code == 404:
                return {"data": [], "total": 0}
            raise

    def extract_records(self, body: dict[str, Any]) -> list[Any]:
        return as_list(body.get("data"))

    def reported_total(self, body: dict[str, Any]) -> Any:
        return body.get("total")

    def map_record(self, record: dict[str, Any]) -> dict[str, Any]:
        return {
            "first_name": record.get("first_name"),
            "last_name": record.get("last_name"),
            "job_title": record.get("job_title"),
            "job_company_name": record.get("job_company_name"),
            "linkedin_url": record.get("linkedin_url"),
            "profile_pic_url": record.get("profile_pic_url"),
        }
