# util/errors.py
from typing import Optional
from fastapi import HTTPException
from util.enums import ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed code, status & message.
    def __init__(self, error: ErrorMessage, message: Optional[str] = None) -> None:
        info = error.value
        super().__init__(status_code=info.http_status, detail=message or info.message)
        self.code = info.code


class ConfigError(Exception):
    """Required configuration is absent or unusable."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Config missing: {', '.join(missing)}")
        self.missing = missing


class SnapshotError(Exception):
    """The gallery snapshot could not be fetched; nothing is safe to do."""


class StoreError(Exception):
    """Transport failure talking to the gallery store."""


class ProviderError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
