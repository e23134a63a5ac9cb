"""
Vocabulary tables for translating user search criteria into registry terms.

The literal tables below are assembled once into ``DEFAULT_VOCABULARY``, a
frozen model that the query builder receives by reference.  Nothing updates
these tables at runtime; pass a different ``Vocabulary`` to swap a table out.
"""

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

# -- Conditions -------------------------------------------------------------

# A condition mentioning one of these is eligible for the cancer families below.
CANCER_MARKERS: tuple[str, ...] = ("cancer", "carcinoma")

# Checked in order; the first organ found in the condition wins.
CANCER_VARIATIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("lung", ("NSCLC", "SCLC", "non-small cell lung", "small cell lung")),
    ("breast", ("mammary", "TNBC", "triple negative breast")),
    ("colorectal", ("colon", "rectal", "CRC")),
)

# Looked up by the whole lower-cased condition.
CONDITION_ABBREVIATIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "acute myeloid leukemia": ("AML",),
        "chronic myeloid leukemia": ("CML",),
        "acute lymphoblastic leukemia": ("ALL",),
        "chronic lymphocytic leukemia": ("CLL",),
        "non-hodgkin lymphoma": ("NHL",),
        "multiple myeloma": ("MM",),
        "glioblastoma multiforme": ("GBM",),
        "hepatocellular carcinoma": ("HCC",),
        "renal cell carcinoma": ("RCC",),
    }
)

# -- Biomarkers -------------------------------------------------------------

# Keyed by upper-cased biomarker name.
BIOMARKER_ALIASES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "HER2": ("ERBB2", "HER-2", "HER2/neu"),
        "PD-L1": ("PDL1", "PD-L1", "CD274"),
        "PD-1": ("PD1", "PDCD1"),
        "EGFR": ("ERBB1", "HER1"),
        "ALK": ("ALK1", "CD246"),
        "ROS1": ("ROS-1",),
        "BRAF": ("B-RAF",),
        "KRAS": ("K-RAS",),
        "NRAS": ("N-RAS",),
        "MSI": ("MSI-H", "microsatellite instability"),
        "TMB": ("tumor mutational burden",),
        "BRCA1": ("BRCA-1",),
        "BRCA2": ("BRCA-2",),
    }
)

# -- Phases -----------------------------------------------------------------

# Registry phase codes: NA, EARLY_PHASE1, PHASE1, PHASE2, PHASE3, PHASE4
PHASE_CODES: Mapping[str, str] = MappingProxyType(
    {
        "0": "EARLY_PHASE1",
        "1": "PHASE1",
        "2": "PHASE2",
        "3": "PHASE3",
        "4": "PHASE4",
        "early": "EARLY_PHASE1",
        "early phase 1": "EARLY_PHASE1",
        "phase 0": "EARLY_PHASE1",
        "phase 1": "PHASE1",
        "phase 2": "PHASE2",
        "phase 3": "PHASE3",
        "phase 4": "PHASE4",
        "phase i": "PHASE1",
        "phase ii": "PHASE2",
        "phase iii": "PHASE3",
        "phase iv": "PHASE4",
        "n/a": "NA",
        "not applicable": "NA",
    }
)

# -- Interventions ----------------------------------------------------------

# Registry intervention type -> keywords that imply it.
INTERVENTION_KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "DRUG": ("drug", "medication", "chemotherapy", "antibody"),
        "PROCEDURE": ("surgery", "surgical"),
        "RADIATION": ("radiation", "radiotherapy"),
        "DEVICE": ("device",),
        "BEHAVIORAL": ("behavioral", "counseling"),
        "BIOLOGICAL": ("vaccine", "immunotherapy"),
    }
)

# -- Sponsors ---------------------------------------------------------------

# Name lists standing in for a sponsor category.  "other" adds nothing.
SPONSOR_TYPE_NAMES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "industry": ("Pfizer", "Roche", "Novartis", "Merck", "AstraZeneca"),
        "nih": ("National Cancer Institute", "National Institutes of Health"),
        "academic": ("University", "Medical Center", "Hospital"),
        "other": (),
    }
)

# -- Statuses ---------------------------------------------------------------

RECRUITING_STATUSES: tuple[str, ...] = ("RECRUITING", "NOT_YET_RECRUITING")


class Vocabulary(BaseModel):
    """Immutable bundle of the lookup tables used by the query builder."""

    model_config = ConfigDict(frozen=True)

    cancer_markers: tuple[str, ...] = CANCER_MARKERS
    cancer_variations: tuple[tuple[str, tuple[str, ...]], ...] = CANCER_VARIATIONS
    condition_abbreviations: Mapping[str, tuple[str, ...]] = Field(default_factory=lambda: CONDITION_ABBREVIATIONS)
    biomarker_aliases: Mapping[str, tuple[str, ...]] = Field(default_factory=lambda: BIOMARKER_ALIASES)
    phase_codes: Mapping[str, str] = Field(default_factory=lambda: PHASE_CODES)
    intervention_keywords: Mapping[str, tuple[str, ...]] = Field(default_factory=lambda: INTERVENTION_KEYWORDS)
    sponsor_type_names: Mapping[str, tuple[str, ...]] = Field(default_factory=lambda: SPONSOR_TYPE_NAMES)
    recruiting_statuses: tuple[str, ...] = RECRUITING_STATUSES

    # Lookup tables are shared by every request; keep them read-only.
    @field_validator(
        "condition_abbreviations",
        "biomarker_aliases",
        "phase_codes",
        "intervention_keywords",
        "sponsor_type_names",
    )
    @classmethod
    def _read_only(cls, value: Mapping) -> Mapping:
        return MappingProxyType(dict(value))


DEFAULT_VOCABULARY = Vocabulary()
