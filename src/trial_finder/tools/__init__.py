"""The search_trials and get_study_details operations."""

from trial_finder.tools.get_study_details import get_study_details
from trial_finder.tools.search_trials import search_trials

__all__ = ["get_study_details", "search_trials"]
