"""
Translate structured search options into ClinicalTrials.gov query parameters.

The builder is pure and total: input it cannot map is passed through or
dropped, never rejected.  Every code it emits comes from a Vocabulary table.
"""

from trial_finder.constants import BUILDER_PAGE_SIZE
from trial_finder.models.model_search import (
    Biomarker,
    LocationFilter,
    RegistryQueryParams,
    SearchOptions,
    SponsorType,
)
from trial_finder.vocabulary import DEFAULT_VOCABULARY, Vocabulary

_OR = " OR "


def _number(value: float) -> str:
    """50.0 -> '50', 40.7128 -> '40.7128'."""
    return str(int(value)) if float(value).is_integer() else str(value)


def build_search_params(
    options: SearchOptions,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> RegistryQueryParams:
    """Build the registry parameter set for one search."""
    params = RegistryQueryParams(page_size=BUILDER_PAGE_SIZE)

    if options.conditions:
        params.condition = build_condition_query(options.conditions, vocabulary)

    query_terms: list[str] = list(options.keywords or [])
    if options.biomarkers:
        if options.expand_biomarker_aliases:
            query_terms.append(build_biomarker_query(options.biomarkers, vocabulary))
        else:
            query_terms.extend(_biomarker_term(b) for b in options.biomarkers)
    if query_terms:
        params.query = _OR.join(query_terms)

    if options.location:
        params.location = build_location_term(options.location) or None
        if options.location.has_coordinates and options.location.distance:
            params.distance = f"{_number(options.location.distance)}mi"

    if options.recruiting_only:
        params.status = list(vocabulary.recruiting_statuses)

    if options.phases:
        params.phase = normalize_phases(options.phases, vocabulary)

    if options.interventions:
        params.intervention_type = (
            categorize_interventions(options.interventions, vocabulary) or None
        )

    if options.expanded_access_only:
        params.study_type = ["EXPANDED_ACCESS"]

    if options.sponsor_types or options.specific_sponsors:
        params.sponsor = (
            build_sponsor_query(
                options.sponsor_types, options.specific_sponsors, vocabulary
            )
            or None
        )

    params.advanced_filter = build_demographic_filter(options.sex, options.age)

    return params


# ------------------------------------------------------------------
# Conditions
# ------------------------------------------------------------------


def build_condition_query(
    conditions: list[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> str:
    """Join every condition and its variations with OR."""
    expanded: list[str] = []
    for condition in conditions:
        expanded.append(condition)
        expanded.extend(condition_variations(condition, vocabulary))
    return _OR.join(expanded)


def condition_variations(
    condition: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> list[str]:
    """Synonyms and abbreviations for a single condition name."""
    variations: list[str] = []
    lower = condition.lower()

    if any(marker in lower for marker in vocabulary.cancer_markers):
        for organ, organ_variations in vocabulary.cancer_variations:
            if organ in lower:
                variations.extend(organ_variations)
                break

    variations.extend(vocabulary.condition_abbreviations.get(lower, ()))
    return variations


# ------------------------------------------------------------------
# Biomarkers
# ------------------------------------------------------------------


def _biomarker_term(biomarker: Biomarker) -> str:
    if biomarker.status:
        return f"{biomarker.name} {biomarker.status}"
    return biomarker.name


def build_biomarker_query(
    biomarkers: list[Biomarker], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> str:
    """Biomarker terms expanded with their aliases, status appended to each."""
    groups: list[str] = []
    for biomarker in biomarkers:
        terms = [biomarker.name]
        terms.extend(vocabulary.biomarker_aliases.get(biomarker.name.upper(), ()))
        if biomarker.status:
            terms = [f"{term} {biomarker.status}" for term in terms]
        groups.append(_OR.join(terms))
    return _OR.join(groups)


# ------------------------------------------------------------------
# Location
# ------------------------------------------------------------------


def build_location_term(location: LocationFilter) -> str:
    """distance(lat,lon,Nmi) when coordinates and radius are all given,
    otherwise the place name.

    A radius without coordinates is dropped.
    """
    if location.has_coordinates and location.distance:
        lat = _number(location.latitude)
        lon = _number(location.longitude)
        return f"distance({lat},{lon},{_number(location.distance)}mi)"

    parts = [p for p in (location.city, location.state, location.country) if p]
    return ", ".join(parts)


# ------------------------------------------------------------------
# Phases and interventions
# ------------------------------------------------------------------


def normalize_phase(phase: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    """'phase II', '2', 'Phase 2' -> 'PHASE2'.  Unknown input is upper-cased."""
    return vocabulary.phase_codes.get(phase.lower().strip(), phase.upper())


def normalize_phases(
    phases: list[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> list[str]:
    return [normalize_phase(phase, vocabulary) for phase in phases]


def categorize_interventions(
    interventions: list[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> list[str]:
    """Registry intervention types implied by free-text interventions.

    The result is a set; it is returned sorted so requests are reproducible.
    """
    categories: set[str] = set()
    for intervention in interventions:
        lower = intervention.lower()
        for category, keywords in vocabulary.intervention_keywords.items():
            if any(keyword in lower for keyword in keywords):
                categories.add(category)
    return sorted(categories)


# ------------------------------------------------------------------
# Sponsors
# ------------------------------------------------------------------


def build_sponsor_query(
    sponsor_types: list[SponsorType] | None,
    specific_sponsors: list[str] | None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> str:
    """Specific sponsors first, then the stand-in names for each sponsor type."""
    sponsors: list[str] = list(specific_sponsors or [])
    for sponsor_type in sponsor_types or []:
        sponsors.extend(vocabulary.sponsor_type_names.get(sponsor_type, ()))
    return _OR.join(sponsors)


# ------------------------------------------------------------------
# Demographics
# ------------------------------------------------------------------


def build_demographic_filter(sex: str | None, age: int | None) -> str | None:
    """AREA[...] clauses restricting by participant sex and age.

    "all" does not constrain sex.  Returns None when nothing applies.
    """
    clauses: list[str] = []
    if sex in ("male", "female"):
        clauses.append(f"AREA[Sex](ALL OR {sex.upper()})")
    if age is not None:
        clauses.append(
            f"AREA[MinimumAge]RANGE[MIN, {age} years]"
            f" AND AREA[MaximumAge]RANGE[{age} years, MAX]"
        )
    return " AND ".join(clauses) or None
