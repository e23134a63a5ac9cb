"""
Pydantic models for search criteria and registry query parameters.

SearchOptions is what a caller asks for; RegistryQueryParams is what the
ClinicalTrials.gov client sends.  The query builder is the only code that
turns one into the other.
"""

from typing import Literal

from pydantic import BaseModel, Field

from trial_finder.models.base import CamelModel

SexFilter = Literal["male", "female", "all"]
SponsorType = Literal["industry", "nih", "academic", "other"]
SortOrder = Literal["asc", "desc"]


# ------------------------------------------------------------------
# Caller-facing search criteria
# ------------------------------------------------------------------


class LocationFilter(CamelModel):
    """Place name and/or coordinates to search around."""

    city: str | None = None
    state: str | None = None
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    distance: float | None = None  # search radius in miles

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class Biomarker(CamelModel):
    """A biomarker and optional status, e.g. HER2 positive."""

    name: str
    status: str | None = None  # "positive", "negative", "mutated", ...


class SearchOptions(CamelModel):
    """Structured search criteria.  Every field left unset is unconstrained."""

    conditions: list[str] | None = None
    keywords: list[str] | None = None
    location: LocationFilter | None = None
    age: int | None = Field(default=None, ge=0)
    sex: SexFilter | None = None
    biomarkers: list[Biomarker] | None = None
    interventions: list[str] | None = None
    phases: list[str] | None = None
    recruiting_only: bool | None = None
    expanded_access_only: bool | None = None
    sponsor_types: list[SponsorType] | None = None
    specific_sponsors: list[str] | None = None
    expand_biomarker_aliases: bool = False


# ------------------------------------------------------------------
# Registry-facing parameters
# ------------------------------------------------------------------


class RegistryQueryParams(BaseModel):
    """Flat parameter set understood by the ClinicalTrials.gov client.

    Codes (status, phase, study type, intervention type) only ever come from
    the vocabulary tables, never from raw user text.
    """

    query: str | None = None  # free-text term
    condition: str | None = None
    location: str | None = None  # place name or distance(lat,lon,Nmi)
    distance: str | None = None  # e.g. "50mi"
    status: list[str] | None = None
    phase: list[str] | None = None
    study_type: list[str] | None = None
    intervention_type: list[str] | None = None
    sponsor: str | None = None
    nct_id: str | None = None
    advanced_filter: str | None = None  # AREA[...] clauses
    page_size: int | None = None
    page_token: str | None = None
    fields: list[str] | None = None
    sort_field: str | None = None
    sort_order: SortOrder | None = None
