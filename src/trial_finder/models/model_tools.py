"""
Pydantic models for the search_trials and get_study_details tool contracts.

Inputs are validated here before any registry work happens.  Outputs carry
either a result or an error message plus an ErrorCode, never both.
"""

from typing import Any

from pydantic import Field, field_validator

from trial_finder.constants import (
    DEFAULT_SEARCH_PAGE_SIZE,
    MAX_SEARCH_PAGE_SIZE,
    NCT_ID_PATTERN,
)
from trial_finder.models.base import CamelModel
from trial_finder.models.model_errors import ErrorCode, ErrorRecord
from trial_finder.models.model_search import SearchOptions, SortOrder
from trial_finder.models.model_trials import NormalizedStudy, NormalizedTrial

# ------------------------------------------------------------------
# search_trials
# ------------------------------------------------------------------


class SearchTrialsInput(SearchOptions):
    """Search criteria plus request-level overrides."""

    query: str | None = None  # replaces the built free-text term
    page_size: int | None = Field(default=None, ge=1, le=MAX_SEARCH_PAGE_SIZE)
    page_number: int = Field(default=1, ge=1)
    page_token: str | None = None
    fields: list[str] | None = None
    sort_field: str | None = None
    sort_order: SortOrder = "desc"


class SearchMetadata(CamelModel):
    execution_time: int  # milliseconds
    query: dict[str, Any] | None = None
    warnings: list[str] = []


class SearchTrialsResponse(CamelModel):
    success: bool
    total_count: int = 0
    page_number: int = 1
    page_size: int = DEFAULT_SEARCH_PAGE_SIZE
    next_page_token: str | None = None
    trials: list[NormalizedTrial] = []
    search_metadata: SearchMetadata | None = None
    error: str | None = None
    error_code: ErrorCode | None = None

    @classmethod
    def failure(
        cls,
        record: ErrorRecord,
        *,
        page_number: int = 1,
        page_size: int = DEFAULT_SEARCH_PAGE_SIZE,
        execution_time: int = 0,
    ) -> "SearchTrialsResponse":
        return cls(
            success=False,
            page_number=page_number,
            page_size=page_size,
            error=record.message,
            error_code=record.code,
            search_metadata=SearchMetadata(
                execution_time=execution_time,
                warnings=[f"Search failed: {record.message}"],
            ),
        )


# ------------------------------------------------------------------
# get_study_details
# ------------------------------------------------------------------


class StudyDetailsInput(CamelModel):
    nct_id: str
    fields: list[str] | None = None
    include_eligibility_parsed: bool = False

    @field_validator("nct_id")
    @classmethod
    def _check_nct_id(cls, value: str) -> str:
        value = value.strip()
        if not NCT_ID_PATTERN.match(value):
            raise ValueError("NCT ID must be in format NCT12345678")
        return value.upper()


class StudyDetailsResponse(CamelModel):
    success: bool
    study: NormalizedStudy | None = None
    error: str | None = None
    error_code: ErrorCode | None = None

    @classmethod
    def failure(cls, record: ErrorRecord) -> "StudyDetailsResponse":
        return cls(success=False, error=record.message, error_code=record.code)
