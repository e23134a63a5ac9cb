"""FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from trial_finder import __version__
from trial_finder.config import get_settings
from trial_finder.data_sources.clinical_trials import ClinicalTrialsClient
from trial_finder.models.model_errors import ErrorCode
from trial_finder.tools import get_study_details, search_trials

logger = logging.getLogger(__name__)

# Failed tool responses keep their JSON body; only the status line changes.
ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.RATE_LIMIT: 429,
    ErrorCode.NETWORK: 502,
    ErrorCode.API_ERROR: 502,
    ErrorCode.UNKNOWN: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    app.state.client = ClinicalTrialsClient.from_settings(settings)
    logger.info("Registry client ready: %s", settings.clinical_trials_base_url)
    try:
        yield
    finally:
        await app.state.client.close()


app = FastAPI(
    title="Trial Finder API",
    description="Search and inspect ClinicalTrials.gov studies",
    version=__version__,
    lifespan=lifespan,
)


def _client(request: Request) -> ClinicalTrialsClient | None:
    return getattr(request.app.state, "client", None)


def _respond(response) -> JSONResponse:
    status = 200 if response.success else ERROR_STATUS[response.error_code]
    return JSONResponse(
        status_code=status,
        content=response.model_dump(by_alias=True, exclude_none=True, mode="json"),
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/tools/search_trials")
async def search_trials_endpoint(
    request: Request, payload: dict[str, Any] | None = Body(None)
) -> JSONResponse:
    return _respond(await search_trials(payload or {}, client=_client(request)))


@app.post("/tools/get_study_details")
async def get_study_details_endpoint(
    request: Request, payload: dict[str, Any] = Body(...)
) -> JSONResponse:
    return _respond(await get_study_details(payload, client=_client(request)))


@app.get("/clinical-trials/study/{nct_id}")
async def study_endpoint(
    request: Request,
    nct_id: str,
    include_eligibility_parsed: bool = Query(
        False, alias="includeEligibilityParsed"
    ),
    fields: str | None = Query(None, description="Comma-separated field list"),
) -> JSONResponse:
    """Full record for one study, the GET counterpart of get_study_details."""
    payload: dict[str, Any] = {
        "nctId": nct_id,
        "includeEligibilityParsed": include_eligibility_parsed,
    }
    if fields:
        payload["fields"] = [f.strip() for f in fields.split(",") if f.strip()]
    return _respond(await get_study_details(payload, client=_client(request)))
