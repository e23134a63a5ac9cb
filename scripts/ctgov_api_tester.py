"""Standalone script to hit the ClinicalTrials.gov v2 API and inspect raw responses."""

import asyncio
import json
import logging

import aiohttp

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

BASE_URL = "https://clinicaltrials.gov/api/v2/studies"
CONDITION = "breast cancer"
NCT_ID = "NCT04379596"


async def search(session: aiohttp.ClientSession, condition: str, page_size: int = 3) -> dict:
    """One page of recruiting phase 2/3 studies for a condition."""
    params = {
        "format": "json",
        "query.cond": condition,
        "filter.overallStatus": "RECRUITING,NOT_YET_RECRUITING",
        "filter.advanced": "AREA[Phase](PHASE2 OR PHASE3)",
        "fields": "NCTId,BriefTitle,OverallStatus,Phase",
        "pageSize": page_size,
        "countTotal": "true",
    }
    async with session.get(BASE_URL, params=params) as resp:
        logger.info("search status: %s", resp.status)
        return await resp.json()


async def get_study(session: aiohttp.ClientSession, nct_id: str) -> dict:
    """A single study document, all fields."""
    async with session.get(f"{BASE_URL}/{nct_id}", params={"format": "json"}) as resp:
        logger.info("get_study status: %s", resp.status)
        return await resp.json()


async def main() -> None:
    async with aiohttp.ClientSession() as session:
        logger.info("--- search for '%s' ---", CONDITION)
        page = await search(session, CONDITION)
        print(json.dumps(page, indent=2))

        logger.info("--- get_study %s ---", NCT_ID)
        study = await get_study(session, NCT_ID)
        print(json.dumps(study.get("protocolSection", {}).get("identificationModule"), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
