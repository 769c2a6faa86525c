# app/routers/search.py — POST /api/search-employees

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from app.config import Settings, get_settings
from app.contracts.search import EmployeeSearchOutput, NormalizedError, SearchParams
from app.providers.base import ProviderAdapter
from app.providers.registry import get_provider_adapter
from app.routers._responses import ErrorEnvelope, error_response
from app.services.employee_search import execute_employee_search

router = APIRouter()


class EmployeeSearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    search_params: SearchParams = Field(default_factory=SearchParams, alias="searchParams")
    api_key: str | None = Field(default=None, alias="apiKey")


@router.post(
    "/search-employees",
    response_model=EmployeeSearchOutput,
    responses={
        400: {"model": ErrorEnvelope},
        401: {"model": ErrorEnvelope},
        402: {"model": ErrorEnvelope},
        403: {"model": ErrorEnvelope},
        429: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
    },
)
async def search_employees(
    payload: EmployeeSearchRequest,
    adapter: ProviderAdapter = Depends(get_provider_adapter),
    settings: Settings = Depends(get_settings),
):
    """Search one provider for employees matching company, job title and location."""
    result = await execute_employee_search(
        search_params=payload.search_params,
        api_key=payload.api_key,
        adapter=adapter,
        settings=settings,
    )
    if isinstance(result, NormalizedError):
        return error_response(result.message, result.http_status, details=result.details)
    return result
