"""Unit tests for the study detail transformer."""

from trial_finder.models.model_registry import RawStudy
from trial_finder.services.study_transformer import to_study_detail

# Output field that goes missing when each optional module is absent
ABSENT_FIELD = {
    "descriptionModule": "description",
    "conditionsModule": "conditions",
    "designModule": "design",
    "armsInterventionsModule": "arms",
    "eligibilityModule": "eligibility",
    "contactsLocationsModule": "locations",
    "outcomesModule": "outcomes",
}


class TestToStudyDetail:
    def test_full_study(self, full_study):
        study = to_study_detail(full_study)

        assert study.nct_id == "NCT04567890"
        assert study.acronym == "DESTINY-B"
        assert study.organization.org_class == "INDUSTRY"
        assert study.status.overall_status == "RECRUITING"
        assert study.status.has_expanded_access is False
        assert study.status.primary_completion_date == "2025-12"
        assert study.sponsor.lead_sponsor.name == "Daiichi Sankyo"
        assert study.sponsor.responsible_party.type == "SPONSOR"
        assert study.description.detailed_description.startswith("Randomized")
        assert study.keywords == ["HER2", "ADC"]
        assert study.design.allocation == "RANDOMIZED"
        assert study.design.masking.masking == "NONE"
        assert study.design.enrollment.count == 540
        assert [arm.label for arm in study.arms] == ["T-DXd", "Chemotherapy"]
        assert study.interventions[0].other_names == ["T-DXd", "DS-8201a"]
        assert study.outcomes.primary[0].measure == "Progression-free survival"
        assert study.outcomes.secondary[0].time_frame is None
        assert study.central_contacts[0].phone == "555-0100"
        assert study.overall_officials[0].role == "STUDY_DIRECTOR"
        assert study.last_update_submit_date == "2024-05-10"

    def test_every_location_keeps_all_contacts_and_coordinates(self, full_study):
        study = to_study_detail(full_study)

        boston, remote, nyu = study.locations
        assert [c.name for c in boston.contacts] == [
            "Boston Coordinator",
            "Boston Backup",
        ]
        assert boston.coordinates.latitude == 42.3601
        assert remote.coordinates is None
        assert remote.contacts is None
        assert nyu.coordinates.longitude == -74.0060

    def test_criteria_not_parsed_by_default(self, full_study):
        study = to_study_detail(full_study)
        assert study.eligibility.criteria.startswith("Inclusion Criteria")
        assert study.eligibility.parsed_criteria is None

    def test_criteria_parsed_on_request(self, full_study):
        study = to_study_detail(full_study, include_eligibility_parsed=True)
        parsed = study.eligibility.parsed_criteria
        assert parsed.inclusion == ["* Age 18 or older", "* HER2-low status"]
        assert parsed.exclusion == ["* Prior T-DXd", "* Pregnant"]

    def test_results_url_only_when_results_posted(self, full_study_data):
        without = to_study_detail(RawStudy.model_validate(full_study_data))
        assert without.urls.results_url is None

        full_study_data["hasResults"] = True
        with_results = to_study_detail(RawStudy.model_validate(full_study_data))
        assert with_results.urls.results_url == (
            "https://clinicaltrials.gov/study/NCT04567890?tab=results"
        )

    def test_missing_description_module(self, full_study_data):
        del full_study_data["protocolSection"]["descriptionModule"]
        study = to_study_detail(RawStudy.model_validate(full_study_data))

        assert study.description is None
        assert "description" not in study.model_dump(exclude_none=True)

    def test_each_optional_module_may_be_absent(self, study_without_module):
        module, raw = study_without_module
        study = to_study_detail(raw, include_eligibility_parsed=True)

        assert study.nct_id == "NCT04567890"
        assert getattr(study, ABSENT_FIELD[module]) is None

    def test_minimal_study(self, minimal_study):
        study = to_study_detail(minimal_study, include_eligibility_parsed=True)

        assert study.title == "Minimal"
        assert study.eligibility is None
        assert study.arms is None
        assert study.central_contacts is None
        assert study.urls.clinical_trials_gov.endswith("NCT00000001")


class TestPartialSubObjects:
    def test_missing_sub_fields_do_not_fail(self, partial_study):
        study = to_study_detail(partial_study)

        assert study.arms[0].label is None
        assert study.arms[0].type == "EXPERIMENTAL"
        assert study.interventions[0].name == "Aspirin"
        assert study.interventions[0].type is None
        assert study.outcomes.primary[0].measure is None
        assert study.outcomes.primary[0].time_frame == "1 year"
        assert study.outcomes.secondary[0].description == "Quality of life"
        assert study.sponsor.lead_sponsor.name is None

    def test_incomplete_geo_point_has_no_coordinates(self, partial_study):
        half, full = to_study_detail(partial_study).locations

        assert half.coordinates is None
        assert full.coordinates.latitude == 40.7128
