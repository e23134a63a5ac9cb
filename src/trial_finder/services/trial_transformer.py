"""
Flatten raw registry studies into search-result rows.

Only the identification, status, and sponsor modules are assumed present;
every other module degrades to an absent field.
"""

from trial_finder.constants import CLINICAL_TRIALS_STUDY_PAGE_URL
from trial_finder.models.model_registry import (
    DateStruct,
    EligibilityModule,
    RawLocation,
    RawStudy,
)
from trial_finder.models.model_search import LocationFilter, SearchOptions
from trial_finder.models.model_trials import (
    EligibilitySummary,
    Enrollment,
    NormalizedTrial,
    PrimaryContact,
    SponsorInfo,
    TrialIntervention,
    TrialLocation,
    TrialUrls,
)
from trial_finder.services.geo import distance_miles

# Sort key for locations without a computed distance.
_UNKNOWN_DISTANCE = float("inf")


def study_url(nct_id: str) -> str:
    return f"{CLINICAL_TRIALS_STUDY_PAGE_URL}/{nct_id}"


def to_trial_list(
    raw_studies: list[RawStudy], options: SearchOptions | None = None
) -> list[NormalizedTrial]:
    """Normalize every study, keeping the registry's ordering."""
    origin = options.location if options and options.location else None
    if origin is not None and not origin.has_coordinates:
        origin = None
    return [to_trial(study, origin) for study in raw_studies]


def to_trial(study: RawStudy, origin: LocationFilter | None = None) -> NormalizedTrial:
    """Normalize one study.  ``origin`` must carry coordinates when given."""
    proto = study.protocol_section
    ident = proto.identification_module
    status = proto.status_module
    sponsor = proto.sponsor_collaborators_module
    desc = proto.description_module
    design = proto.design_module
    arms = proto.arms_interventions_module
    eligibility = proto.eligibility_module
    contacts = proto.contacts_locations_module

    raw_locations = contacts.locations if contacts and contacts.locations else []
    locations = [_to_location(loc, origin) for loc in raw_locations]
    if origin is not None:
        locations.sort(key=_distance_key)

    interventions = None
    if arms and arms.interventions is not None:
        interventions = [
            TrialIntervention(type=i.type, name=i.name, description=i.description)
            for i in arms.interventions
        ]

    enrollment = None
    if design and design.enrollment_info:
        enrollment = Enrollment(
            count=design.enrollment_info.count,
            type=design.enrollment_info.type,
        )

    collaborators = None
    if sponsor.collaborators is not None:
        collaborators = [
            SponsorInfo(name=c.name, sponsor_class=c.sponsor_class)
            for c in sponsor.collaborators
        ]

    return NormalizedTrial(
        nct_id=ident.nct_id,
        title=ident.brief_title,
        official_title=ident.official_title,
        status=status.overall_status,
        phase=design.phases if design else None,
        study_type=design.study_type if design else None,
        conditions=_conditions(study),
        interventions=interventions,
        brief_summary=desc.brief_summary if desc else None,
        detailed_description=desc.detailed_description if desc else None,
        eligibility=_to_eligibility(eligibility) if eligibility else None,
        enrollment=enrollment,
        sponsor=SponsorInfo(
            name=sponsor.lead_sponsor.name,
            sponsor_class=sponsor.lead_sponsor.sponsor_class,
        ),
        collaborators=collaborators,
        locations=locations,
        start_date=extract_date(status.start_date_struct),
        primary_completion_date=extract_date(status.primary_completion_date_struct),
        completion_date=extract_date(status.completion_date_struct),
        last_update_date=extract_date(status.last_update_post_date_struct),
        urls=TrialUrls(clinical_trials_gov=study_url(ident.nct_id)),
    )


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _to_location(
    location: RawLocation, origin: LocationFilter | None
) -> TrialLocation:
    result = TrialLocation(
        facility=location.facility,
        city=location.city,
        state=location.state,
        zip=location.zip,
        country=location.country,
        status=location.status,
    )

    if origin is not None and location.geo_point and location.geo_point.is_complete:
        result.distance = distance_miles(
            origin.latitude,
            origin.longitude,
            location.geo_point.lat,
            location.geo_point.lon,
        )

    if location.contacts:
        primary = location.contacts[0]
        result.contact = PrimaryContact(
            name=primary.name, phone=primary.phone, email=primary.email
        )

    return result


def _to_eligibility(eligibility: EligibilityModule) -> EligibilitySummary:
    return EligibilitySummary(
        criteria=eligibility.eligibility_criteria,
        healthy_volunteers=eligibility.healthy_volunteers,
        sex=eligibility.sex,
        minimum_age=eligibility.minimum_age,
        maximum_age=eligibility.maximum_age,
        std_ages=eligibility.std_ages,
    )


def extract_date(date_struct: DateStruct | None) -> str | None:
    """{"date": "2021-03-15"} -> "2021-03-15"."""
    if date_struct is None:
        return None
    return date_struct.date


def _conditions(study: RawStudy) -> list[str]:
    module = study.protocol_section.conditions_module
    if module is None or module.conditions is None:
        return []
    return module.conditions


def _distance_key(location: TrialLocation) -> float:
    if location.distance is None:
        return _UNKNOWN_DISTANCE
    return location.distance
