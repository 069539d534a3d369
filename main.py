import sys
import asyncio
from typing import Dict

# --- Settings/Logging ---
from sports_venues.logging.setup import setup_logging
from sports_venues.config.settings import settings

setup_logging()

from loguru import logger

# Data Models and Core Logic Imports
from sports_venues.models.enums import League
from sports_venues.models.raw_table import RawLeagueTable
from sports_venues.scrapers.base_scraper import ScraperError
from sports_venues.scrapers.wikipedia_scraper import WikipediaTableScraper
from sports_venues.normalization.normalizer import NormalizationError
from sports_venues.pipeline.venue_pipeline import VenuePipeline
from sports_venues.storage.dataset_store import (
    CoordinateFileError,
    load_coordinate_reference,
    write_dataset,
)
from sports_venues.reporting.summary import render_summary, summarize

from rich import print
from rich.panel import Panel


async def run_scrape_cycle() -> Dict[League, RawLeagueTable]:
    """Fetches the venue table of every league."""
    logger.info("Starting scrape cycle...")
    scraper = WikipediaTableScraper()
    try:
        return await scraper.fetch_league_tables(list(League))
    finally:
        await scraper.close()


async def main() -> int:
    """Main entry point: one full refresh of the venue dataset."""
    logger.info("Starting Sports Venues refresh - Scrape, Normalize, Reconcile, Enrich")

    try:
        # Fail on a bad reference file before spending time on the network
        reference = load_coordinate_reference(settings.coordinates_path)
        raw_tables = await run_scrape_cycle()

        result = VenuePipeline().run(raw_tables, reference)
        output = write_dataset(result.records, settings.output_path)

        render_summary(summarize(result.records))
        print(
            Panel(
                f"{len(result.records)} venues written to {output}\n"
                f"{len(result.missing_coordinates)} without coordinates, "
                f"parse failures: {result.parse_failures or 'none'}",
                title="Venue dataset refreshed",
            )
        )
        return 0

    except CoordinateFileError as e:
        logger.critical(f"Coordinate reference unusable: {e}")
    except ScraperError as e:
        logger.critical(f"Venue table extraction failed: {e}")
    except NormalizationError as e:
        logger.critical(f"Scraped tables do not match the venue schema: {e}")
    except Exception:
        logger.exception("An error occurred during the venue refresh.")
    return 1


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
