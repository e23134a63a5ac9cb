"""Command-line interface for trial-finder."""

import asyncio
import logging

import click

from trial_finder.config import get_settings
from trial_finder.tools import get_study_details, search_trials


def _echo(response) -> None:
    click.echo(response.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    if not response.success:
        raise SystemExit(1)


@click.group()
@click.version_option(package_name="trial-finder")
def main():
    """trial-finder: search ClinicalTrials.gov for matching studies."""
    logging.basicConfig(level=get_settings().log_level)


@main.command()
@click.option("-c", "--condition", "conditions", multiple=True, help="Condition")
@click.option("-k", "--keyword", "keywords", multiple=True, help="Free-text keyword")
@click.option("-q", "--query", help="Raw query term, replaces the built one")
@click.option("-b", "--biomarker", "biomarkers", multiple=True, help="e.g. HER2 or HER2:positive")
@click.option("-i", "--intervention", "interventions", multiple=True)
@click.option("-p", "--phase", "phases", multiple=True, help="e.g. 2, phase ii or early")
@click.option("--sponsor-type", "sponsor_types", multiple=True,
              type=click.Choice(["industry", "nih", "academic", "other"]))
@click.option("--sponsor", "specific_sponsors", multiple=True, help="Lead sponsor name")
@click.option("--recruiting/--any-status", "recruiting_only", default=None)
@click.option("--expanded-access", is_flag=True, default=False)
@click.option("--sex", type=click.Choice(["male", "female", "all"]))
@click.option("--age", type=int)
@click.option("--city")
@click.option("--state")
@click.option("--country")
@click.option("--lat", "latitude", type=float)
@click.option("--lon", "longitude", type=float)
@click.option("--distance", type=float, help="Radius in miles around --lat/--lon")
@click.option("--expand-aliases", is_flag=True, default=False,
              help="Search biomarker synonyms too")
@click.option("--page-size", type=int)
@click.option("--page-token")
@click.option("--sort", "sort_field", help="Registry field to sort by")
@click.option("--order", "sort_order", type=click.Choice(["asc", "desc"]), default="desc")
def search(**kwargs):
    """Search for trials and print the JSON response."""
    location = {
        key: kwargs.pop(key)
        for key in ("city", "state", "country", "latitude", "longitude", "distance")
    }
    biomarkers = []
    for value in kwargs.pop("biomarkers"):
        name, _, status = value.partition(":")
        biomarkers.append({"name": name, "status": status or None})

    payload = {
        "conditions": list(kwargs.pop("conditions")) or None,
        "keywords": list(kwargs.pop("keywords")) or None,
        "interventions": list(kwargs.pop("interventions")) or None,
        "phases": list(kwargs.pop("phases")) or None,
        "sponsor_types": list(kwargs.pop("sponsor_types")) or None,
        "specific_sponsors": list(kwargs.pop("specific_sponsors")) or None,
        "biomarkers": biomarkers or None,
        "expanded_access_only": kwargs.pop("expanded_access") or None,
        "expand_biomarker_aliases": kwargs.pop("expand_aliases"),
        **kwargs,
    }
    if any(v is not None for v in location.values()):
        payload["location"] = location

    _echo(asyncio.run(search_trials(payload)))


@main.command()
@click.argument("nct_id")
@click.option("--parse-eligibility", is_flag=True, default=False,
              help="Split criteria into inclusion/exclusion lists")
@click.option("-f", "--field", "fields", multiple=True, help="Registry field to fetch")
def details(nct_id: str, parse_eligibility: bool, fields: tuple[str, ...]):
    """Fetch one study by NCT ID and print the JSON response."""
    payload = {
        "nct_id": nct_id,
        "include_eligibility_parsed": parse_eligibility,
        "fields": list(fields) or None,
    }
    _echo(asyncio.run(get_study_details(payload)))


if __name__ == "__main__":
    main()
