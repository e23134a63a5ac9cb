"""
Flatten a single raw registry study into the full detail shape.

Unlike search rows, detail keeps every arm, intervention, location contact,
and outcome.  Absent modules stay absent.
"""

from trial_finder.models.model_registry import (
    ContactsLocationsModule,
    DesignModule,
    OutcomesModule,
    RawContact,
    RawLocation,
    RawStudy,
)
from trial_finder.models.model_trials import (
    ContactInfo,
    Coordinates,
    Enrollment,
    Masking,
    NormalizedStudy,
    Official,
    Organization,
    Outcome,
    ResponsiblePartyInfo,
    SponsorInfo,
    StudyArm,
    StudyDescription,
    StudyDesign,
    StudyEligibility,
    StudyIntervention,
    StudyLocation,
    StudyOutcomes,
    StudySponsor,
    StudyStatus,
    StudyUrls,
)
from trial_finder.services.eligibility import parse_eligibility_criteria
from trial_finder.services.trial_transformer import extract_date, study_url


def to_study_detail(
    study: RawStudy, include_eligibility_parsed: bool = False
) -> NormalizedStudy:
    """Normalize one study for get_study_details."""
    proto = study.protocol_section
    ident = proto.identification_module
    status = proto.status_module
    sponsor = proto.sponsor_collaborators_module
    desc = proto.description_module
    conditions = proto.conditions_module
    arms = proto.arms_interventions_module
    eligibility = proto.eligibility_module
    contacts = proto.contacts_locations_module

    organization = None
    if ident.organization is not None:
        organization = Organization(
            full_name=ident.organization.full_name,
            org_class=ident.organization.org_class,
        )

    study_eligibility = None
    if eligibility is not None:
        study_eligibility = StudyEligibility(
            criteria=eligibility.eligibility_criteria,
            healthy_volunteers=eligibility.healthy_volunteers,
            sex=eligibility.sex,
            minimum_age=eligibility.minimum_age,
            maximum_age=eligibility.maximum_age,
            std_ages=eligibility.std_ages,
        )
        if include_eligibility_parsed and eligibility.eligibility_criteria:
            study_eligibility.parsed_criteria = parse_eligibility_criteria(
                eligibility.eligibility_criteria
            )

    responsible_party = None
    if sponsor.responsible_party is not None:
        responsible_party = ResponsiblePartyInfo(
            **sponsor.responsible_party.model_dump()
        )

    results_url = None
    if study.has_results:
        results_url = f"{study_url(ident.nct_id)}?tab=results"

    return NormalizedStudy(
        nct_id=ident.nct_id,
        title=ident.brief_title,
        official_title=ident.official_title,
        acronym=ident.acronym,
        organization=organization,
        status=StudyStatus(
            overall_status=status.overall_status,
            status_verified_date=status.status_verified_date,
            has_expanded_access=(
                status.expanded_access_info.has_expanded_access
                if status.expanded_access_info
                else None
            ),
            start_date=extract_date(status.start_date_struct),
            primary_completion_date=extract_date(
                status.primary_completion_date_struct
            ),
            completion_date=extract_date(status.completion_date_struct),
            study_first_post_date=extract_date(status.study_first_post_date_struct),
            last_update_post_date=extract_date(status.last_update_post_date_struct),
        ),
        sponsor=StudySponsor(
            lead_sponsor=SponsorInfo(
                name=sponsor.lead_sponsor.name,
                sponsor_class=sponsor.lead_sponsor.sponsor_class,
            ),
            collaborators=(
                [
                    SponsorInfo(name=c.name, sponsor_class=c.sponsor_class)
                    for c in sponsor.collaborators
                ]
                if sponsor.collaborators is not None
                else None
            ),
            responsible_party=responsible_party,
        ),
        description=(
            StudyDescription(
                brief_summary=desc.brief_summary,
                detailed_description=desc.detailed_description,
            )
            if desc is not None
            else None
        ),
        conditions=conditions.conditions if conditions else None,
        keywords=conditions.keywords if conditions else None,
        design=_to_design(proto.design_module),
        arms=(
            [
                StudyArm(
                    label=arm.label,
                    type=arm.type,
                    description=arm.description,
                    intervention_names=arm.intervention_names,
                )
                for arm in arms.arm_groups
            ]
            if arms and arms.arm_groups is not None
            else None
        ),
        interventions=(
            [
                StudyIntervention(
                    type=i.type,
                    name=i.name,
                    description=i.description,
                    arm_group_labels=i.arm_group_labels,
                    other_names=i.other_names,
                )
                for i in arms.interventions
            ]
            if arms and arms.interventions is not None
            else None
        ),
        eligibility=study_eligibility,
        outcomes=_to_outcomes(proto.outcomes_module),
        locations=_to_locations(contacts),
        central_contacts=(
            _to_contacts(contacts.central_contacts) if contacts else None
        ),
        overall_officials=(
            [
                Official(name=o.name, affiliation=o.affiliation, role=o.role)
                for o in contacts.overall_officials
            ]
            if contacts and contacts.overall_officials is not None
            else None
        ),
        urls=StudyUrls(
            clinical_trials_gov=study_url(ident.nct_id),
            results_url=results_url,
        ),
        has_results=study.has_results,
        last_update_submit_date=status.last_update_submit_date,
    )


# ------------------------------------------------------------------
# Section builders
# ------------------------------------------------------------------


def _to_design(design: DesignModule | None) -> StudyDesign | None:
    if design is None:
        return None

    info = design.design_info
    masking = None
    if info and info.masking_info:
        masking = Masking(
            masking=info.masking_info.masking,
            who_masked=info.masking_info.who_masked,
        )

    enrollment = None
    if design.enrollment_info:
        enrollment = Enrollment(
            count=design.enrollment_info.count,
            type=design.enrollment_info.type,
        )

    return StudyDesign(
        study_type=design.study_type,
        phases=design.phases,
        allocation=info.allocation if info else None,
        intervention_model=info.intervention_model if info else None,
        primary_purpose=info.primary_purpose if info else None,
        masking=masking,
        enrollment=enrollment,
    )


def _to_outcomes(outcomes: OutcomesModule | None) -> StudyOutcomes | None:
    if outcomes is None:
        return None

    def convert(raw_outcomes):
        if raw_outcomes is None:
            return None
        return [
            Outcome(
                measure=o.measure,
                description=o.description,
                time_frame=o.time_frame,
            )
            for o in raw_outcomes
        ]

    return StudyOutcomes(
        primary=convert(outcomes.primary_outcomes),
        secondary=convert(outcomes.secondary_outcomes),
    )


def _to_locations(
    contacts: ContactsLocationsModule | None,
) -> list[StudyLocation] | None:
    if contacts is None or contacts.locations is None:
        return None
    return [_to_location(loc) for loc in contacts.locations]


def _to_location(location: RawLocation) -> StudyLocation:
    coordinates = None
    if location.geo_point and location.geo_point.is_complete:
        coordinates = Coordinates(
            latitude=location.geo_point.lat,
            longitude=location.geo_point.lon,
        )
    return StudyLocation(
        facility=location.facility,
        status=location.status,
        city=location.city,
        state=location.state,
        zip=location.zip,
        country=location.country,
        coordinates=coordinates,
        contacts=_to_contacts(location.contacts),
    )


def _to_contacts(contacts: list[RawContact] | None) -> list[ContactInfo] | None:
    if contacts is None:
        return None
    return [
        ContactInfo(
            name=c.name,
            role=c.role,
            phone=c.phone,
            phone_ext=c.phone_ext,
            email=c.email,
        )
        for c in contacts
    ]
