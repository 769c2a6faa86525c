# app/routers/_responses.py — shared API response envelopes

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    error: str
    details: str | None = None


def error_response(message: str, status_code: int, details: str | None = None) -> JSONResponse:
    content: dict[str, str] = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)
