"""Project-wide constants."""

import re

# -- Base client defaults ---------------------------------------------------
DEFAULT_TIMEOUT: float = 30.0
DEFAULT_MAX_RETRIES: int = 0

# -- ClinicalTrials.gov -----------------------------------------------------
CLINICAL_TRIALS_API_URL: str = "https://clinicaltrials.gov/api/v2"
CLINICAL_TRIALS_STUDY_PAGE_URL: str = "https://clinicaltrials.gov/study"

# Page size the query builder emits; callers may override it downstream.
BUILDER_PAGE_SIZE: int = 100
# Page size the registry client falls back to when none is given.
REGISTRY_PAGE_SIZE: int = 50
# Page size reported by search_trials when the caller gives none.
DEFAULT_SEARCH_PAGE_SIZE: int = 20
MAX_SEARCH_PAGE_SIZE: int = 100

# Field list requested from the registry when the caller gives none.
DEFAULT_STUDY_FIELDS: tuple[str, ...] = (
    "NCTId",
    "BriefTitle",
    "OfficialTitle",
    "OverallStatus",
    "Phase",
    "StudyType",
    "Condition",
    "InterventionType",
    "InterventionName",
    "BriefSummary",
    "DetailedDescription",
    "EligibilityCriteria",
    "HealthyVolunteers",
    "Sex",
    "MinimumAge",
    "MaximumAge",
    "StdAge",
    "EnrollmentCount",
    "EnrollmentType",
    "LeadSponsorName",
    "LeadSponsorClass",
    "LocationFacility",
    "LocationCity",
    "LocationState",
    "LocationZip",
    "LocationCountry",
    "LocationGeoPoint",
    "LocationStatus",
    "LocationContactName",
    "LocationContactRole",
    "LocationContactPhone",
    "LocationContactEMail",
    "StartDate",
    "PrimaryCompletionDate",
    "CompletionDate",
    "StudyFirstPostDate",
    "LastUpdatePostDate",
)

NCT_ID_PATTERN: re.Pattern[str] = re.compile(r"^NCT\d{8}$", re.IGNORECASE)

# -- Geography --------------------------------------------------------------
EARTH_RADIUS_MILES: float = 3959.0

# -- Search advisories ------------------------------------------------------
LIMITED_RESULTS_THRESHOLD: int = 5
NO_RESULTS_WARNING: str = (
    "No trials found matching your criteria. Consider broadening your search."
)
LIMITED_RESULTS_WARNING: str = (
    "Limited trials found. Consider removing some filters or expanding search radius."
)

# -- Integration tests ------------------------------------------------------
LIVE_TESTS_ENV_VAR: str = "TRIAL_FINDER_LIVE_TESTS"
