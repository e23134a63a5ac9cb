"""Pytest configuration and fixtures."""

import copy

import pytest

from trial_finder.models.model_registry import RawStudy

FULL_STUDY: dict = {
    "protocolSection": {
        "identificationModule": {
            "nctId": "NCT04567890",
            "briefTitle": "Trastuzumab Deruxtecan in HER2-Low Breast Cancer",
            "officialTitle": "A Phase 3 Study of T-DXd Versus Chemotherapy",
            "acronym": "DESTINY-B",
            "organization": {"fullName": "Daiichi Sankyo", "class": "INDUSTRY"},
        },
        "statusModule": {
            "overallStatus": "RECRUITING",
            "statusVerifiedDate": "2024-05",
            "expandedAccessInfo": {"hasExpandedAccess": False},
            "startDateStruct": {"date": "2021-03-15", "type": "ACTUAL"},
            "primaryCompletionDateStruct": {"date": "2025-12", "type": "ESTIMATED"},
            "completionDateStruct": {"date": "2026-06", "type": "ESTIMATED"},
            "studyFirstPostDateStruct": {"date": "2021-02-01", "type": "ACTUAL"},
            "lastUpdateSubmitDate": "2024-05-10",
            "lastUpdatePostDateStruct": {"date": "2024-05-14", "type": "ACTUAL"},
        },
        "sponsorCollaboratorsModule": {
            "leadSponsor": {"name": "Daiichi Sankyo", "class": "INDUSTRY"},
            "collaborators": [{"name": "AstraZeneca", "class": "INDUSTRY"}],
            "responsibleParty": {"type": "SPONSOR"},
        },
        "descriptionModule": {
            "briefSummary": "Compares T-DXd with physician's choice chemotherapy.",
            "detailedDescription": "Randomized, open-label, multicenter study.",
        },
        "conditionsModule": {
            "conditions": ["Breast Cancer", "HER2-low Breast Cancer"],
            "keywords": ["HER2", "ADC"],
        },
        "designModule": {
            "studyType": "INTERVENTIONAL",
            "phases": ["PHASE3"],
            "designInfo": {
                "allocation": "RANDOMIZED",
                "interventionModel": "PARALLEL",
                "primaryPurpose": "TREATMENT",
                "maskingInfo": {"masking": "NONE"},
            },
            "enrollmentInfo": {"count": 540, "type": "ESTIMATED"},
        },
        "armsInterventionsModule": {
            "armGroups": [
                {
                    "label": "T-DXd",
                    "type": "EXPERIMENTAL",
                    "interventionNames": ["Drug: Trastuzumab deruxtecan"],
                },
                {"label": "Chemotherapy", "type": "ACTIVE_COMPARATOR"},
            ],
            "interventions": [
                {
                    "type": "DRUG",
                    "name": "Trastuzumab deruxtecan",
                    "description": "5.4 mg/kg IV every 3 weeks",
                    "armGroupLabels": ["T-DXd"],
                    "otherNames": ["T-DXd", "DS-8201a"],
                },
                {"type": "DRUG", "name": "Capecitabine"},
            ],
        },
        "eligibilityModule": {
            "eligibilityCriteria": (
                "Inclusion Criteria:\n\n* Age 18 or older\n* HER2-low status\n\n"
                "Exclusion Criteria:\n\n* Prior T-DXd\n* Pregnant"
            ),
            "healthyVolunteers": False,
            "sex": "ALL",
            "minimumAge": "18 Years",
            "stdAges": ["ADULT", "OLDER_ADULT"],
        },
        "contactsLocationsModule": {
            "centralContacts": [
                {"name": "Study Director", "role": "CONTACT", "phone": "555-0100"}
            ],
            "overallOfficials": [
                {"name": "Jane Roe", "affiliation": "Daiichi Sankyo", "role": "STUDY_DIRECTOR"}
            ],
            "locations": [
                {
                    "facility": "Boston Medical Center",
                    "status": "RECRUITING",
                    "city": "Boston",
                    "state": "Massachusetts",
                    "zip": "02118",
                    "country": "United States",
                    "geoPoint": {"lat": 42.3601, "lon": -71.0589},
                    "contacts": [
                        {"name": "Boston Coordinator", "role": "CONTACT", "phone": "555-0101"},
                        {"name": "Boston Backup", "role": "CONTACT"},
                    ],
                },
                {
                    "facility": "Remote Clinic",
                    "city": "Nowhere",
                    "country": "United States",
                },
                {
                    "facility": "NYU Langone",
                    "status": "RECRUITING",
                    "city": "New York",
                    "state": "New York",
                    "country": "United States",
                    "geoPoint": {"lat": 40.7128, "lon": -74.0060},
                },
            ],
        },
        "outcomesModule": {
            "primaryOutcomes": [
                {"measure": "Progression-free survival", "timeFrame": "Up to 4 years"}
            ],
            "secondaryOutcomes": [{"measure": "Overall survival"}],
        },
    },
    "hasResults": False,
}

MINIMAL_STUDY: dict = {
    "protocolSection": {
        "identificationModule": {"nctId": "NCT00000001", "briefTitle": "Minimal"},
        "statusModule": {"overallStatus": "COMPLETED"},
        "sponsorCollaboratorsModule": {"leadSponsor": {"name": "Some University"}},
    }
}

OPTIONAL_MODULES = (
    "descriptionModule",
    "conditionsModule",
    "designModule",
    "armsInterventionsModule",
    "eligibilityModule",
    "contactsLocationsModule",
    "outcomesModule",
)


@pytest.fixture
def full_study_data() -> dict:
    """Registry JSON for a study with every module populated."""
    return copy.deepcopy(FULL_STUDY)


@pytest.fixture
def full_study(full_study_data) -> RawStudy:
    return RawStudy.model_validate(full_study_data)


@pytest.fixture
def minimal_study() -> RawStudy:
    """Only the three modules the registry always returns."""
    return RawStudy.model_validate(copy.deepcopy(MINIMAL_STUDY))


@pytest.fixture(params=OPTIONAL_MODULES)
def study_without_module(request) -> tuple[str, RawStudy]:
    """The full study with one optional module removed, per parameter."""
    data = copy.deepcopy(FULL_STUDY)
    del data["protocolSection"][request.param]
    return request.param, RawStudy.model_validate(data)


# Registry output when the caller asks for a narrow field list: sub-objects
# carry only the requested keys.
PARTIAL_STUDY: dict = {
    "protocolSection": {
        "identificationModule": {"nctId": "NCT00000002"},
        "statusModule": {"overallStatus": "RECRUITING"},
        "sponsorCollaboratorsModule": {
            "leadSponsor": {"class": "OTHER"},
            "collaborators": [{"class": "NIH"}],
        },
        "armsInterventionsModule": {
            "armGroups": [{"type": "EXPERIMENTAL"}],
            "interventions": [{"name": "Aspirin"}, {"type": "DRUG"}],
        },
        "outcomesModule": {
            "primaryOutcomes": [{"timeFrame": "1 year"}],
            "secondaryOutcomes": [{"description": "Quality of life"}],
        },
        "contactsLocationsModule": {
            "locations": [
                {"facility": "Half Site", "geoPoint": {"lat": 40.0}},
                {"facility": "Full Site", "geoPoint": {"lat": 40.7128, "lon": -74.006}},
            ]
        },
    }
}


@pytest.fixture
def partial_study_data() -> dict:
    return copy.deepcopy(PARTIAL_STUDY)


@pytest.fixture
def partial_study(partial_study_data) -> RawStudy:
    return RawStudy.model_validate(partial_study_data)
