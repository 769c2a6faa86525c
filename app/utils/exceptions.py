# app/utils/exceptions.py — Custom exception classes

from collections.abc import Iterable

from fastapi import HTTPException, status


class UnsupportedProviderError(HTTPException):
    def __init__(self, provider: str, supported: Iterable[str]):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Unsupported search provider '{provider}' (expected one of: {', '.join(supported)})",
        )
        self.provider = provider
