"""
ClinicalTrials.gov REST API v2 client.

Two methods:
  1. search_studies: RegistryQueryParams -> one page of raw studies
  2. get_study:      NCT ID -> one raw study
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from trial_finder.config import Settings
from trial_finder.constants import (
    CLINICAL_TRIALS_API_URL,
    DEFAULT_STUDY_FIELDS,
    REGISTRY_PAGE_SIZE,
)
from trial_finder.data_sources.base_client import (
    BaseClient,
    ClientConfig,
    DataSourceError,
    RateLimitConfig,
    RequestContext,
    RetryConfig,
)
from trial_finder.models.model_errors import ErrorCode
from trial_finder.models.model_registry import RawStudy, StudySearchPage
from trial_finder.models.model_search import RegistryQueryParams

logger = logging.getLogger(__name__)


class ClinicalTrialsClient(BaseClient):
    def __init__(
        self,
        config: ClientConfig | None = None,
        max_retries: int | None = None,
        base_url: str = CLINICAL_TRIALS_API_URL,
    ) -> None:
        super().__init__(config, max_retries=max_retries)
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> ClinicalTrialsClient:
        config = ClientConfig(
            retry=RetryConfig(max_retries=settings.max_retries),
            rate_limit=RateLimitConfig(
                requests_per_second=settings.requests_per_second,
                burst=settings.rate_limit_burst,
            ),
            timeout_seconds=settings.request_timeout,
        )
        return cls(config, base_url=settings.clinical_trials_base_url)

    @property
    def _source_name(self) -> str:
        return "clinical_trials"

    @property
    def studies_url(self) -> str:
        return f"{self.base_url}/studies"

    # ------------------------------------------------------------------
    # Public: search_studies
    # ------------------------------------------------------------------

    async def search_studies(self, params: RegistryQueryParams) -> StudySearchPage:
        """Fetch one page of studies matching the given parameters."""
        query = self._build_query_params(params)
        logger.debug("Search query: %s", query)
        data = await self._rest_get(
            self.studies_url,
            query,
            context=RequestContext(
                source=self._source_name, method="search_studies", params=query
            ),
        )
        if not isinstance(data, dict) or not data.get("studies"):
            return StudySearchPage()

        try:
            page = StudySearchPage.model_validate(data)
        except ValidationError as e:
            raise DataSourceError(
                self._source_name, f"Malformed search response: {e}"
            ) from e

        # totalCount is only present when countTotal was honoured
        if "totalCount" not in data:
            page.total_count = len(page.studies)
        return page

    # ------------------------------------------------------------------
    # Public: get_study
    # ------------------------------------------------------------------

    async def get_study(self, nct_id: str, fields: list[str] | None = None) -> RawStudy:
        """Fetch a single study by NCT ID.

        Raises DataSourceError with ErrorCode.NOT_FOUND when the registry has
        no record for the identifier.
        """
        query = {
            "format": "json",
            "fields": ",".join(fields or DEFAULT_STUDY_FIELDS),
        }
        data = await self._rest_get(
            f"{self.studies_url}/{nct_id}",
            query,
            context=RequestContext(
                source=self._source_name, method="get_study", params={"nct_id": nct_id}
            ),
        )

        record = self._extract_study_record(data)
        if record is None:
            raise DataSourceError(
                self._source_name,
                f"Study {nct_id} not found",
                status_code=404,
                code=ErrorCode.NOT_FOUND,
            )

        try:
            return RawStudy.model_validate(record)
        except ValidationError as e:
            raise DataSourceError(
                self._source_name, f"Malformed study record for {nct_id}: {e}"
            ) from e

    # ------------------------------------------------------------------
    # Private: parameter building
    # ------------------------------------------------------------------

    def _build_query_params(self, params: RegistryQueryParams) -> dict[str, Any]:
        """RegistryQueryParams -> v2 query string."""
        query: dict[str, Any] = {
            "format": "json",
            "pageSize": str(params.page_size or REGISTRY_PAGE_SIZE),
            "countTotal": "true",
        }

        if params.query:
            query["query.term"] = params.query
        if params.condition:
            query["query.cond"] = params.condition

        # distance(...) terms go to the geo filter; place names to query.locn
        if params.location:
            if params.location.startswith("distance("):
                query["filter.geo"] = params.location
            else:
                query["query.locn"] = params.location

        if params.sponsor:
            query["query.lead"] = params.sponsor
        if params.status:
            query["filter.overallStatus"] = ",".join(params.status)
        if params.nct_id:
            query["filter.ids"] = params.nct_id

        advanced = self._build_advanced_filter(params)
        if advanced:
            query["filter.advanced"] = advanced

        query["fields"] = ",".join(params.fields or DEFAULT_STUDY_FIELDS)

        if params.page_token:
            query["pageToken"] = params.page_token
        if params.sort_field:
            query["sort"] = f"{params.sort_field}:{params.sort_order or 'asc'}"

        return query

    @staticmethod
    def _build_advanced_filter(params: RegistryQueryParams) -> str | None:
        """AND-join AREA[...] clauses for the code filters v2 has no parameter for."""
        clauses: list[str] = []
        if params.phase:
            clauses.append(f"AREA[Phase]({' OR '.join(params.phase)})")
        if params.intervention_type:
            clauses.append(
                f"AREA[InterventionType]({' OR '.join(params.intervention_type)})"
            )
        if params.study_type:
            clauses.append(f"AREA[StudyType]({' OR '.join(params.study_type)})")
        if params.advanced_filter:
            clauses.append(params.advanced_filter)
        return " AND ".join(clauses) or None

    @staticmethod
    def _extract_study_record(data: Any) -> dict | None:
        """GET /studies/{id} returns the study itself; tolerate a studies list too."""
        if not isinstance(data, dict):
            return None
        if "protocolSection" in data:
            return data
        studies = data.get("studies") or []
        return studies[0] if studies else None
