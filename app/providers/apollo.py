from __future__ import annotations

from typing import Any

from app.contracts.search import SearchParams
from app.providers.base import ProviderAdapter, RequestStyle
from app.providers.client import ProviderRequest
from app.providers.common import as_dict, as_list


_PAGE_SIZE = 10


def build_people_filters(params: SearchParams) -> dict[str, Any]:
    filters: dict[str, Any] = {
        "q_organization_name": params.company,
        "person_titles": [params.job_title] if params.job_title else None,
        "person_locations": [params.location] if params.location else None,
        "page": 1,
        "per_page": _PAGE_SIZE,
    }
    return {key: value for key, value in filters.items() if value is not None}


class ApolloAdapter(ProviderAdapter):
    request_style = RequestStyle.JSON_FILTER

    def build_request(self, params: SearchParams, *, api_key: str) -> ProviderRequest:
        return ProviderRequest(
            method="POST",
            url=self.config.endpoint,
            headers={
                "X-Api-Key": api_key,
                "Content-Type": "application/json",
                "Cache-Control": "no-cache",
            },
            json=build_people_filters(params),
        )

    def extract_records(self, body: dict[str, Any]) -> list[Any]:
        return as_list(body.get("people")) + as_list(body.get("contacts"))

    def reported_total(self, body: dict[str, Any]) -> Any:
        pagination = as_dict(body.get("pagination"))
        if pagination.get("total_entries") is not None:
            return pagination.get("total_entries")
        return body.get("total_entries")

    def map_record(self, record: dict[str, Any]) -> dict[str, Any]:
        organization = as_dict(record.get("organization"))
        return {
            "first_name": record.get("first_name"),
            "last_name": record.get("last_name"),
            "job_title": record.get("title"),
            "job_company_name": organization.get("name") or record.get("organization_name"),
            "linkedin_url": record.get("linkedin_url"),
            "profile_pic_url": record.get("photo_url"),
        }
