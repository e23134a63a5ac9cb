"""Unit tests for the search-result transformer."""

from trial_finder.models.model_search import LocationFilter, SearchOptions
from trial_finder.services.trial_transformer import to_trial, to_trial_list

NYC_ORIGIN = SearchOptions(
    location=LocationFilter(latitude=40.7128, longitude=-74.0060, distance=500)
)


class TestToTrial:
    def test_full_study(self, full_study):
        trial = to_trial(full_study)

        assert trial.nct_id == "NCT04567890"
        assert trial.title == "Trastuzumab Deruxtecan in HER2-Low Breast Cancer"
        assert trial.status == "RECRUITING"
        assert trial.phase == ["PHASE3"]
        assert trial.study_type == "INTERVENTIONAL"
        assert trial.conditions == ["Breast Cancer", "HER2-low Breast Cancer"]
        assert [i.name for i in trial.interventions] == [
            "Trastuzumab deruxtecan",
            "Capecitabine",
        ]
        assert trial.enrollment.count == 540
        assert trial.sponsor.name == "Daiichi Sankyo"
        assert trial.sponsor.sponsor_class == "INDUSTRY"
        assert trial.collaborators[0].name == "AstraZeneca"
        assert trial.eligibility.minimum_age == "18 Years"
        assert trial.start_date == "2021-03-15"
        assert trial.last_update_date == "2024-05-14"
        assert trial.urls.clinical_trials_gov == (
            "https://clinicaltrials.gov/study/NCT04567890"
        )

    def test_first_location_contact_is_primary(self, full_study):
        trial = to_trial(full_study)
        boston = trial.locations[0]
        assert boston.contact.name == "Boston Coordinator"
        assert boston.contact.phone == "555-0101"
        assert trial.locations[1].contact is None

    def test_minimal_study(self, minimal_study):
        trial = to_trial(minimal_study)

        assert trial.nct_id == "NCT00000001"
        assert trial.conditions == []
        assert trial.locations == []
        assert trial.phase is None
        assert trial.interventions is None
        assert trial.eligibility is None
        assert trial.brief_summary is None
        assert trial.sponsor.name == "Some University"

    def test_wire_shape_is_camel_case(self, full_study):
        data = to_trial(full_study).model_dump(by_alias=True, exclude_none=True)
        assert data["nctId"] == "NCT04567890"
        assert data["sponsor"] == {"name": "Daiichi Sankyo", "class": "INDUSTRY"}
        assert data["urls"]["clinicalTrialsGov"].endswith("NCT04567890")


class TestLocationDistance:
    def test_locations_sorted_by_distance_with_unknown_last(self, full_study):
        [trial] = to_trial_list([full_study], NYC_ORIGIN)

        assert [loc.facility for loc in trial.locations] == [
            "NYU Langone",
            "Boston Medical Center",
            "Remote Clinic",
        ]
        assert trial.locations[0].distance == 0
        assert 185 <= trial.locations[1].distance <= 195
        assert trial.locations[2].distance is None

    def test_no_origin_keeps_registry_order(self, full_study):
        [trial] = to_trial_list([full_study])

        assert [loc.facility for loc in trial.locations] == [
            "Boston Medical Center",
            "Remote Clinic",
            "NYU Langone",
        ]
        assert all(loc.distance is None for loc in trial.locations)

    def test_place_name_origin_computes_nothing(self, full_study):
        options = SearchOptions(location=LocationFilter(city="New York"))
        [trial] = to_trial_list([full_study], options)

        assert trial.locations[0].facility == "Boston Medical Center"
        assert all(loc.distance is None for loc in trial.locations)


class TestToTrialList:
    def test_keeps_study_order(self, full_study, minimal_study):
        trials = to_trial_list([minimal_study, full_study])
        assert [t.nct_id for t in trials] == ["NCT00000001", "NCT04567890"]

    def test_empty(self):
        assert to_trial_list([]) == []

    def test_each_optional_module_may_be_absent(self, study_without_module):
        _, study = study_without_module
        [trial] = to_trial_list([study], NYC_ORIGIN)
        assert trial.nct_id == "NCT04567890"


class TestPartialSubObjects:
    def test_missing_sub_fields_do_not_fail(self, partial_study):
        [trial] = to_trial_list([partial_study], NYC_ORIGIN)

        assert trial.nct_id == "NCT00000002"
        assert trial.title == ""
        assert trial.sponsor.name is None
        assert trial.sponsor.sponsor_class == "OTHER"
        assert trial.collaborators[0].name is None
        assert [(i.type, i.name) for i in trial.interventions] == [
            (None, "Aspirin"),
            ("DRUG", None),
        ]

    def test_incomplete_geo_point_sorts_last(self, partial_study):
        [trial] = to_trial_list([partial_study], NYC_ORIGIN)

        assert [loc.facility for loc in trial.locations] == ["Full Site", "Half Site"]
        assert trial.locations[0].distance == 0
        assert trial.locations[1].distance is None
