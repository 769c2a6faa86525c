from __future__ import annotations

from typing import Any

from app.contracts.search import SearchParams
from app.providers.base import ProviderAdapter, ProviderConfig, RequestStyle
from app.providers.client import ProviderRequest
from app.providers.common import as_dict, as_list, as_str

_PAGE_SIZE = 10
_ENRICH_MODE = "enrich"

_PARAM_FIELDS = (
    ("company", "current_company_name"),
    ("job_title", "current_role_title"),
    ("location", "region"),
)


def _current_experience(profile: dict[str, Any]) -> dict[str, Any]:
    experiences = [exp for exp in as_list(profile.get("experiences")) if isinstance(exp, dict)]
    current = next((exp for exp in experiences if exp.get("ends_at") is None), None)
    if current is None:
        current = experiences[0] if experiences else {}
    return current


class ProxycurlAdapter(ProviderAdapter):
    request_style = RequestStyle.QUERY_PARAMS

    def __init__(self, config: ProviderConfig, *, default_country: str = "US"):
        super().__init__(config)
        self.default_country = as_str(default_country) or "US"

    def build_request(self, params: SearchParams, *, api_key: str) -> ProviderRequest:
        query: dict[str, Any] = {"country": self.default_country}
        for attr, param_name in _PARAM_FIELDS:
            value = getattr(params, attr)
            if value:
                query[param_name] = value
        query["enrich_profiles"] = _ENRICH_MODE
        query["page_size"] = _PAGE_SIZE
        return ProviderRequest(
            method="GET",
            url=self.config.endpoint,
            headers={"Authorization": f"Bearer {api_key}"},
            params=query,
        )

    def extract_records(self, body: dict[str, Any]) -> list[Any]:
        return as_list(body.get("results"))

    def reported_total(self, body: dict[str, Any]) -> Any:
        return body.get("total_result_count")

    def map_record(self, record: dict[str, Any]) -> dict[str, Any]:
        profile = as_dict(record.get("profile"))
        current = _current_experience(profile)
        return {
            "first_name": profile.get("first_name"),
            "last_name": profile.get("last_name"),
            "job_title": as_str(current.get("title")) or profile.get("occupation") or profile.get("headline"),
            "job_company_name": current.get("company"),
            "linkedin_url": record.get("linkedin_profile_url") or profile.get("public_identifier_url"),
            "profile_pic_url": profile.get("profile_pic_url"),
        }

    def email_source(self, record: dict[str, Any]) -> dict[str, Any]:
        # Enriched results nest contact fields under "profile".
        merged = dict(as_dict(record.get("profile")))
        merged.update({key: value for key, value in record.items() if key != "profile"})
        return merged
