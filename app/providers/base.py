from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from app.contracts.search import EmployeeSearchOutput, NormalizedError, SearchParams
from app.providers.client import ProviderError, ProviderRequest, send_provider_request
from app.providers.common import as_dict
from app.services.error_classifier import classify_provider_error
from app.services.normalization import normalize_search_response


class RequestStyle(str, Enum):
    QUERY_DSL = "QueryDSL"
    QUERY_PARAMS = "QueryParams"
    JSON_FILTER = "JSONFilter"


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    credential_ref: str
    endpoint: str
    request_style: RequestStyle


class ProviderAdapter(ABC):
    """One people-data provider: query building, the outbound call and record mapping.

    Subclasses describe where their payload keeps the records and the reported
    total, and how one record maps onto the canonical employee fields. Email
    extraction, fallbacks and error classification are shared.
    """

    request_style: ClassVar[RequestStyle]

    def __init__(self, config: ProviderConfig):
        if config.request_style != self.request_style:
            raise ValueError(
                f"{type(self).__name__} expects request style {self.request_style.value}, "
                f"got {config.request_style.value}"
            )
        self.config = config

    @property
    def name(self) -> str:
        return self.config.name

    @abstractmethod
    def build_request(self, params: SearchParams, *, api_key: str) -> ProviderRequest:
        ...

    async def execute(self, request: ProviderRequest, *, timeout_seconds: float) -> dict[str, Any]:
        return await send_provider_request(request, provider=self.name, timeout_seconds=timeout_seconds)

    @abstractmethod
    def extract_records(self, body: dict[str, Any]) -> list[Any]:
        ...

    @abstractmethod
    def reported_total(self, body: dict[str, Any]) -> Any:
        ...

    @abstractmethod
    def map_record(self, record: dict[str, Any]) -> dict[str, Any]:
        """Return canonical field candidates; missing values may be None or non-strings."""

    def email_source(self, record: dict[str, Any]) -> dict[str, Any]:
        return record

    def normalize(self, body: dict[str, Any], params: SearchParams) -> EmployeeSearchOutput:
        return normalize_search_response(self, as_dict(body), params)

    def classify_error(self, exc: ProviderError | Exception) -> NormalizedError:
        return classify_provider_error(exc)
