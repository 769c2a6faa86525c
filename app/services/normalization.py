from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.contracts.search import EmployeeRecord, EmployeeSearchOutput, SearchParams
from app.providers.common import as_dict, as_int, as_str
from app.services.email_extraction import extract_work_email

if TYPE_CHECKING:
    from app.providers.base import ProviderAdapter

logger = logging.getLogger(__name__)


def canonical_employee_record(
    *,
    fields: dict[str, Any],
    email_source: dict[str, Any],
    fallback_company_name: str | None,
) -> EmployeeRecord:
    return EmployeeRecord(
        first_name=as_str(fields.get("first_name")) or "",
        last_name=as_str(fields.get("last_name")) or "",
        job_title=as_str(fields.get("job_title")) or "",
        job_company_name=as_str(fields.get("job_company_name")) or fallback_company_name or "",
        linkedin_url=as_str(fields.get("linkedin_url")) or "",
        work_email=extract_work_email(email_source),
        profile_pic_url=as_str(fields.get("profile_pic_url")),
    )


def normalize_search_response(
    adapter: ProviderAdapter,
    body: dict[str, Any],
    params: SearchParams,
) -> EmployeeSearchOutput:
    """Map a provider's success payload onto the canonical batch.

    Records keep the provider's order. ``credits_used`` counts returned records
    and is only an estimate of what the provider billed.
    """
    data: list[EmployeeRecord] = []
    for item in adapter.extract_records(body):
        record = as_dict(item)
        data.append(
            canonical_employee_record(
                fields=adapter.map_record(record) if record else {},
                email_source=adapter.email_source(record) if record else {},
                fallback_company_name=params.company,
            )
        )

    total = as_int(adapter.reported_total(body))
    output = EmployeeSearchOutput(
        data=data,
        total=total if total is not None and total >= 0 else 0,
        credits_used=len(data),
        provider=adapter.name,
    )
    logger.debug(
        "Normalized provider response",
        extra={
            "provider": adapter.name,
            "result_count": len(data),
            "reported_total": output.total,
            "with_work_email": sum(1 for item in data if item.work_email),
        },
    )
    return output
