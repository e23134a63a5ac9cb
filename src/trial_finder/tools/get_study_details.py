"""Handler for the get_study_details operation."""

import logging
from typing import Any

from pydantic import ValidationError

from trial_finder.data_sources.base_client import DataSourceError
from trial_finder.data_sources.clinical_trials import ClinicalTrialsClient
from trial_finder.models.model_tools import StudyDetailsInput, StudyDetailsResponse
from trial_finder.services.study_transformer import to_study_detail
from trial_finder.tools.common import client_scope, to_error_record

logger = logging.getLogger(__name__)


async def get_study_details(
    payload: StudyDetailsInput | dict[str, Any],
    client: ClinicalTrialsClient | None = None,
) -> StudyDetailsResponse:
    """Fetch one study by NCT ID and return its full normalized record.

    An identifier that fails the NCT format check is rejected before any
    request is made.
    """
    try:
        request = (
            payload
            if isinstance(payload, StudyDetailsInput)
            else StudyDetailsInput.model_validate(payload)
        )
    except ValidationError as e:
        logger.info("get_study_details rejected invalid input: %s", e)
        return StudyDetailsResponse.failure(to_error_record(e))

    logger.info("get_study_details called: nct_id=%s", request.nct_id)

    try:
        async with client_scope(client) as registry:
            raw = await registry.get_study(request.nct_id, request.fields)
        study = to_study_detail(raw, request.include_eligibility_parsed)
    except DataSourceError as e:
        logger.warning("get_study_details failed for %s: %s", request.nct_id, e)
        return StudyDetailsResponse.failure(e.to_record())
    except Exception as e:
        logger.exception("get_study_details failed unexpectedly")
        return StudyDetailsResponse.failure(to_error_record(e))

    return StudyDetailsResponse(success=True, study=study)
