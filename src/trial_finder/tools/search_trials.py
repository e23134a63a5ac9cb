"""Handler for the search_trials operation."""

import logging
import time
from typing import Any

from pydantic import ValidationError

from trial_finder.config import get_settings
from trial_finder.constants import (
    LIMITED_RESULTS_THRESHOLD,
    LIMITED_RESULTS_WARNING,
    NO_RESULTS_WARNING,
)
from trial_finder.data_sources.base_client import DataSourceError
from trial_finder.data_sources.clinical_trials import ClinicalTrialsClient
from trial_finder.models.model_errors import ErrorCode, ErrorRecord
from trial_finder.models.model_tools import (
    SearchMetadata,
    SearchTrialsInput,
    SearchTrialsResponse,
)
from trial_finder.services.query_builder import build_search_params
from trial_finder.services.trial_transformer import to_trial_list
from trial_finder.tools.common import client_scope, to_error_record

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def search_warnings(total_count: int) -> list[str]:
    """Advisories for empty or thin result sets."""
    if total_count == 0:
        return [NO_RESULTS_WARNING]
    if total_count < LIMITED_RESULTS_THRESHOLD:
        return [LIMITED_RESULTS_WARNING]
    return []


async def search_trials(
    payload: SearchTrialsInput | dict[str, Any],
    client: ClinicalTrialsClient | None = None,
) -> SearchTrialsResponse:
    """Search the registry and return normalized trials.

    Never raises: validation, registry, and unexpected failures all come back
    as a response with ``success=False`` and an ErrorCode.
    """
    start = time.monotonic()
    try:
        default_page_size = get_settings().default_page_size
    except ValidationError:
        logger.exception("search_trials could not load settings")
        return SearchTrialsResponse.failure(
            ErrorRecord(message="An unexpected error occurred", code=ErrorCode.UNKNOWN),
            execution_time=_elapsed_ms(start),
        )

    try:
        request = (
            payload
            if isinstance(payload, SearchTrialsInput)
            else SearchTrialsInput.model_validate(payload)
        )
    except ValidationError as e:
        logger.info("search_trials rejected invalid input: %s", e)
        return SearchTrialsResponse.failure(
            to_error_record(e),
            page_size=default_page_size,
            execution_time=_elapsed_ms(start),
        )

    page_size = request.page_size or default_page_size
    logger.info(
        "search_trials called: conditions=%s location=%s biomarkers=%s phases=%s",
        request.conditions,
        request.location,
        request.biomarkers,
        request.phases,
    )

    try:
        params = build_search_params(request)
        params.page_size = page_size
        if request.query:
            params.query = request.query
        if request.page_token:
            params.page_token = request.page_token
        if request.fields:
            params.fields = request.fields
        if request.sort_field:
            params.sort_field = request.sort_field
            params.sort_order = request.sort_order

        async with client_scope(client) as registry:
            page = await registry.search_studies(params)

        trials = to_trial_list(page.studies, request)
    except DataSourceError as e:
        logger.warning("search_trials failed: %s", e)
        return SearchTrialsResponse.failure(
            e.to_record(),
            page_number=request.page_number,
            page_size=page_size,
            execution_time=_elapsed_ms(start),
        )
    except Exception as e:
        logger.exception("search_trials failed unexpectedly")
        return SearchTrialsResponse.failure(
            to_error_record(e),
            page_number=request.page_number,
            page_size=page_size,
            execution_time=_elapsed_ms(start),
        )

    return SearchTrialsResponse(
        success=True,
        total_count=page.total_count,
        page_number=request.page_number,
        page_size=page_size,
        next_page_token=page.next_page_token,
        trials=trials,
        search_metadata=SearchMetadata(
            execution_time=_elapsed_ms(start),
            query=params.model_dump(exclude_none=True),
            warnings=search_warnings(page.total_count),
        ),
    )
