"""Pieces shared by the tool handlers: client lifetime and error mapping."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from pydantic import ValidationError

from trial_finder.config import get_settings
from trial_finder.data_sources.base_client import DataSourceError
from trial_finder.data_sources.clinical_trials import ClinicalTrialsClient
from trial_finder.models.model_errors import ErrorCode, ErrorRecord


@asynccontextmanager
async def client_scope(
    client: ClinicalTrialsClient | None,
) -> AsyncIterator[ClinicalTrialsClient]:
    """Yield the caller's client, or a fresh one that is closed afterwards."""
    if client is not None:
        yield client
        return
    async with ClinicalTrialsClient.from_settings(get_settings()) as owned:
        yield owned


def to_error_record(error: Exception) -> ErrorRecord:
    """Classify any failure into the closed ErrorCode taxonomy."""
    if isinstance(error, DataSourceError):
        return error.to_record()
    if isinstance(error, ValidationError):
        details = "; ".join(
            f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in error.errors()
        )
        return ErrorRecord(
            message=f"Invalid input parameters: {details}",
            code=ErrorCode.VALIDATION,
        )
    return ErrorRecord(message="An unexpected error occurred", code=ErrorCode.UNKNOWN)
