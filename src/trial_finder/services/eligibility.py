"""
Line-oriented segmentation of free-text eligibility criteria.

This is a heading heuristic, not a parser: it tolerates missing or reordered
headings and never raises.
"""

from trial_finder.models.model_trials import ParsedCriteria

_INCLUSION_HEADINGS: tuple[str, ...] = ("inclusion criteria", "eligibility criteria")
_EXCLUSION_HEADINGS: tuple[str, ...] = ("exclusion criteria",)
_MIN_LINE_LENGTH = 3


def parse_eligibility_criteria(criteria: str | None) -> ParsedCriteria:
    """Split criteria text into inclusion and exclusion lines.

    Heading lines switch the current section and are dropped.  Lines shorter
    than three characters or ending in ``:`` are dropped as sub-headings.
    Lines seen before any heading count as inclusion.
    """
    parsed = ParsedCriteria()
    if not criteria:
        return parsed

    lines = [line.strip() for line in criteria.splitlines()]
    current = parsed.inclusion

    for line in lines:
        if not line:
            continue
        lower = line.lower()
        if any(heading in lower for heading in _INCLUSION_HEADINGS):
            current = parsed.inclusion
            continue
        if any(heading in lower for heading in _EXCLUSION_HEADINGS):
            current = parsed.exclusion
            continue
        if len(line) < _MIN_LINE_LENGTH or line.endswith(":"):
            continue
        current.append(line)

    return parsed
