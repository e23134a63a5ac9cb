"""trial-finder: clinical trial search backed by ClinicalTrials.gov."""

__version__ = "0.1.0"
