"""
Pydantic models for normalized trial data.

These are the flat, stable shapes handed to callers.  Field names do not
follow the registry's nesting; anything the registry left out is None and is
dropped when the model is dumped with ``exclude_none=True``.
"""

from pydantic import Field

from trial_finder.models.base import CamelModel

# ------------------------------------------------------------------
# Shared pieces
# ------------------------------------------------------------------


class SponsorInfo(CamelModel):
    name: str | None = None
    sponsor_class: str | None = Field(default=None, alias="class")


class Enrollment(CamelModel):
    count: int | None = None
    type: str | None = None


class EligibilitySummary(CamelModel):
    criteria: str | None = None
    healthy_volunteers: bool | None = None
    sex: str | None = None
    minimum_age: str | None = None
    maximum_age: str | None = None
    std_ages: list[str] | None = None


class ParsedCriteria(CamelModel):
    """Eligibility text split into inclusion and exclusion lines."""

    inclusion: list[str] = []
    exclusion: list[str] = []


class ContactInfo(CamelModel):
    name: str | None = None
    role: str | None = None
    phone: str | None = None
    phone_ext: str | None = None
    email: str | None = None


# ------------------------------------------------------------------
# Search result
# ------------------------------------------------------------------


class TrialIntervention(CamelModel):
    type: str | None = None
    name: str | None = None
    description: str | None = None


class PrimaryContact(CamelModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None


class TrialLocation(CamelModel):
    facility: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    status: str | None = None
    distance: int | None = None  # miles from the search origin
    contact: PrimaryContact | None = None


class TrialUrls(CamelModel):
    clinical_trials_gov: str


class NormalizedTrial(CamelModel):
    """One row of a search result."""

    nct_id: str
    title: str
    official_title: str | None = None
    status: str
    phase: list[str] | None = None
    study_type: str | None = None
    conditions: list[str] = []
    interventions: list[TrialIntervention] | None = None
    brief_summary: str | None = None
    detailed_description: str | None = None
    eligibility: EligibilitySummary | None = None
    enrollment: Enrollment | None = None
    sponsor: SponsorInfo
    collaborators: list[SponsorInfo] | None = None
    locations: list[TrialLocation] = []
    start_date: str | None = None
    primary_completion_date: str | None = None
    completion_date: str | None = None
    last_update_date: str | None = None
    urls: TrialUrls


# ------------------------------------------------------------------
# Detail result
# ------------------------------------------------------------------


class Organization(CamelModel):
    full_name: str | None = None
    org_class: str | None = Field(default=None, alias="class")


class StudyStatus(CamelModel):
    overall_status: str
    status_verified_date: str | None = None
    has_expanded_access: bool | None = None
    start_date: str | None = None
    primary_completion_date: str | None = None
    completion_date: str | None = None
    study_first_post_date: str | None = None
    last_update_post_date: str | None = None


class ResponsiblePartyInfo(CamelModel):
    type: str | None = None
    investigator_full_name: str | None = None
    investigator_title: str | None = None
    investigator_affiliation: str | None = None


class StudySponsor(CamelModel):
    lead_sponsor: SponsorInfo
    collaborators: list[SponsorInfo] | None = None
    responsible_party: ResponsiblePartyInfo | None = None


class StudyDescription(CamelModel):
    brief_summary: str | None = None
    detailed_description: str | None = None


class Masking(CamelModel):
    masking: str | None = None
    who_masked: list[str] | None = None


class StudyDesign(CamelModel):
    study_type: str | None = None
    phases: list[str] | None = None
    allocation: str | None = None
    intervention_model: str | None = None
    primary_purpose: str | None = None
    masking: Masking | None = None
    enrollment: Enrollment | None = None


class StudyArm(CamelModel):
    label: str | None = None
    type: str | None = None
    description: str | None = None
    intervention_names: list[str] | None = None


class StudyIntervention(CamelModel):
    type: str | None = None
    name: str | None = None
    description: str | None = None
    arm_group_labels: list[str] | None = None
    other_names: list[str] | None = None


class StudyEligibility(EligibilitySummary):
    parsed_criteria: ParsedCriteria | None = None


class Outcome(CamelModel):
    measure: str | None = None
    description: str | None = None
    time_frame: str | None = None


class StudyOutcomes(CamelModel):
    primary: list[Outcome] | None = None
    secondary: list[Outcome] | None = None


class Coordinates(CamelModel):
    latitude: float
    longitude: float


class StudyLocation(CamelModel):
    facility: str | None = None
    status: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    coordinates: Coordinates | None = None
    contacts: list[ContactInfo] | None = None


class Official(CamelModel):
    name: str | None = None
    affiliation: str | None = None
    role: str | None = None


class StudyUrls(CamelModel):
    clinical_trials_gov: str
    results_url: str | None = None


class NormalizedStudy(CamelModel):
    """Full detail for a single study."""

    nct_id: str
    title: str
    official_title: str | None = None
    acronym: str | None = None
    organization: Organization | None = None
    status: StudyStatus
    sponsor: StudySponsor
    description: StudyDescription | None = None
    conditions: list[str] | None = None
    keywords: list[str] | None = None
    design: StudyDesign | None = None
    arms: list[StudyArm] | None = None
    interventions: list[StudyIntervention] | None = None
    eligibility: StudyEligibility | None = None
    outcomes: StudyOutcomes | None = None
    locations: list[StudyLocation] | None = None
    central_contacts: list[ContactInfo] | None = None
    overall_officials: list[Official] | None = None
    urls: StudyUrls
    has_results: bool | None = None
    last_update_submit_date: str | None = None
