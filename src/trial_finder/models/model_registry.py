"""
Pydantic models for raw ClinicalTrials.gov v2 study records.

These mirror the registry's nesting.  The registry guarantees the
identification, status, and sponsor modules; every other module, and every
field inside one, may be missing and is modelled as optional.
"""

from pydantic import Field

from trial_finder.models.base import CamelModel

# ------------------------------------------------------------------
# Shared structs
# ------------------------------------------------------------------


class DateStruct(CamelModel):
    date: str | None = None
    type: str | None = None  # "ACTUAL" or "ESTIMATED"


class RawContact(CamelModel):
    name: str | None = None
    role: str | None = None
    phone: str | None = None
    phone_ext: str | None = None
    email: str | None = None


class RawOrganization(CamelModel):
    full_name: str | None = None
    org_class: str | None = Field(default=None, alias="class")


# ------------------------------------------------------------------
# Required modules
# ------------------------------------------------------------------


class IdentificationModule(CamelModel):
    nct_id: str
    brief_title: str = ""
    official_title: str | None = None
    acronym: str | None = None
    organization: RawOrganization | None = None


class ExpandedAccessInfo(CamelModel):
    has_expanded_access: bool | None = None


class StatusModule(CamelModel):
    overall_status: str
    status_verified_date: str | None = None
    expanded_access_info: ExpandedAccessInfo | None = None
    start_date_struct: DateStruct | None = None
    primary_completion_date_struct: DateStruct | None = None
    completion_date_struct: DateStruct | None = None
    study_first_post_date_struct: DateStruct | None = None
    last_update_submit_date: str | None = None
    last_update_post_date_struct: DateStruct | None = None


class RawSponsor(CamelModel):
    name: str | None = None
    sponsor_class: str | None = Field(default=None, alias="class")


class ResponsibleParty(CamelModel):
    type: str | None = None
    investigator_full_name: str | None = None
    investigator_title: str | None = None
    investigator_affiliation: str | None = None


class SponsorCollaboratorsModule(CamelModel):
    lead_sponsor: RawSponsor
    collaborators: list[RawSponsor] | None = None
    responsible_party: ResponsibleParty | None = None


# ------------------------------------------------------------------
# Optional modules
# ------------------------------------------------------------------


class DescriptionModule(CamelModel):
    brief_summary: str | None = None
    detailed_description: str | None = None


class ConditionsModule(CamelModel):
    conditions: list[str] | None = None
    keywords: list[str] | None = None


class MaskingInfo(CamelModel):
    masking: str | None = None
    who_masked: list[str] | None = None


class DesignInfo(CamelModel):
    allocation: str | None = None
    intervention_model: str | None = None
    primary_purpose: str | None = None
    masking_info: MaskingInfo | None = None


class EnrollmentInfo(CamelModel):
    count: int | None = None
    type: str | None = None


class DesignModule(CamelModel):
    study_type: str | None = None
    phases: list[str] | None = None
    design_info: DesignInfo | None = None
    enrollment_info: EnrollmentInfo | None = None


class ArmGroup(CamelModel):
    label: str | None = None
    type: str | None = None
    description: str | None = None
    intervention_names: list[str] | None = None


class RawIntervention(CamelModel):
    type: str | None = None
    name: str | None = None
    description: str | None = None
    arm_group_labels: list[str] | None = None
    other_names: list[str] | None = None


class ArmsInterventionsModule(CamelModel):
    arm_groups: list[ArmGroup] | None = None
    interventions: list[RawIntervention] | None = None


class EligibilityModule(CamelModel):
    eligibility_criteria: str | None = None
    healthy_volunteers: bool | None = None
    sex: str | None = None
    minimum_age: str | None = None
    maximum_age: str | None = None
    std_ages: list[str] | None = None


class GeoPoint(CamelModel):
    lat: float | None = None
    lon: float | None = None

    @property
    def is_complete(self) -> bool:
        return self.lat is not None and self.lon is not None


class RawLocation(CamelModel):
    facility: str | None = None
    status: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    geo_point: GeoPoint | None = None
    contacts: list[RawContact] | None = None


class RawOfficial(CamelModel):
    name: str | None = None
    affiliation: str | None = None
    role: str | None = None


class ContactsLocationsModule(CamelModel):
    central_contacts: list[RawContact] | None = None
    overall_officials: list[RawOfficial] | None = None
    locations: list[RawLocation] | None = None


class RawOutcome(CamelModel):
    measure: str | None = None
    description: str | None = None
    time_frame: str | None = None


class OutcomesModule(CamelModel):
    primary_outcomes: list[RawOutcome] | None = None
    secondary_outcomes: list[RawOutcome] | None = None


# ------------------------------------------------------------------
# Study record
# ------------------------------------------------------------------


class ProtocolSection(CamelModel):
    identification_module: IdentificationModule
    status_module: StatusModule
    sponsor_collaborators_module: SponsorCollaboratorsModule
    description_module: DescriptionModule | None = None
    conditions_module: ConditionsModule | None = None
    design_module: DesignModule | None = None
    arms_interventions_module: ArmsInterventionsModule | None = None
    eligibility_module: EligibilityModule | None = None
    contacts_locations_module: ContactsLocationsModule | None = None
    outcomes_module: OutcomesModule | None = None


class RawStudy(CamelModel):
    """One study as returned by GET /studies or GET /studies/{nctId}."""

    protocol_section: ProtocolSection
    has_results: bool | None = None


class StudySearchPage(CamelModel):
    """One page of GET /studies."""

    studies: list[RawStudy] = []
    total_count: int = 0
    next_page_token: str | None = None
