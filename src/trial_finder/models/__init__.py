"""Data models for trial-finder."""

from trial_finder.models.model_errors import ErrorCode, ErrorRecord
from trial_finder.models.model_registry import RawStudy, StudySearchPage
from trial_finder.models.model_search import (
    Biomarker,
    LocationFilter,
    RegistryQueryParams,
    SearchOptions,
)
from trial_finder.models.model_tools import (
    SearchTrialsInput,
    SearchTrialsResponse,
    StudyDetailsInput,
    StudyDetailsResponse,
)
from trial_finder.models.model_trials import NormalizedStudy, NormalizedTrial

__all__ = [
    "Biomarker",
    "ErrorCode",
    "ErrorRecord",
    "LocationFilter",
    "NormalizedStudy",
    "NormalizedTrial",
    "RawStudy",
    "RegistryQueryParams",
    "SearchOptions",
    "SearchTrialsInput",
    "SearchTrialsResponse",
    "StudyDetailsInput",
    "StudyDetailsResponse",
    "StudySearchPage",
]
