# sports_venues/scrapers/wikipedia_scraper.py

import asyncio
import re
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from loguru import logger

from sports_venues.models.enums import League
from sports_venues.models.raw_table import RawLeagueTable
from .base_scraper import BaseScraper, ScraperError, TableNotFoundError


class TableSource(NamedTuple):
    url: str
    table_index: int  # 0-based position among all <table> elements on the page


# Venue list pages and the table holding current venues on each.
# MLB and NFL pages lead with an infobox-style table, hence index 1.
LEAGUE_SOURCES: Dict[League, TableSource] = {
    League.MLB: TableSource(
        "https://en.wikipedia.org/wiki/List_of_current_Major_League_Baseball_stadiums",
        1,
    ),
    League.NBA: TableSource(
        "https://en.wikipedia.org/wiki/List_of_National_Basketball_Association_arenas",
        0,
    ),
    League.NFL: TableSource(
        "https://en.wikipedia.org/wiki/List_of_current_National_Football_League_stadiums",
        1,
    ),
    League.NHL: TableSource(
        "https://en.wikipedia.org/wiki/List_of_National_Hockey_League_arenas",
        0,
    ),
}

_WHITESPACE_RE = re.compile(r"\s+")


def _cell_text(cell: Tag) -> str:
    """Visible text of a cell with line breaks turned into single spaces."""
    for br in cell.find_all("br"):
        br.replace_with("\n")
    return _WHITESPACE_RE.sub(" ", cell.get_text()).strip()


def _span(cell: Tag, attribute: str) -> int:
    try:
        return max(1, int(str(cell.get(attribute, "1")).strip() or 1))
    except ValueError:
        return 1


def parse_table(table: Tag) -> Tuple[List[str], List[List[str]]]:
    """Flattens an HTML table into header texts and data rows.

    Cells spanning several rows or columns are repeated into every grid
    position they cover. The first row is the header; subsequent rows made
    only of <th> cells (repeated headers) are dropped.
    """
    grid: List[List[str]] = []
    header_only: List[bool] = []
    # column index -> (remaining rows, text) for cells carried down by rowspan
    pending: Dict[int, Tuple[int, str]] = {}

    for tr in table.find_all("tr"):
        cells = tr.find_all(["th", "td"], recursive=False)
        if not cells and not pending:
            continue

        row: List[str] = []
        col = 0
        queue = list(cells)
        while queue or any(c >= col for c in pending):
            if col in pending:
                remaining, text = pending[col]
                row.append(text)
                if remaining > 1:
                    pending[col] = (remaining - 1, text)
                else:
                    del pending[col]
                col += 1
                continue
            if not queue:
                # Only rowspans further right remain; fill the gap
                row.append("")
                col += 1
                continue

            cell = queue.pop(0)
            text = _cell_text(cell)
            rowspan = _span(cell, "rowspan")
            for _ in range(_span(cell, "colspan")):
                row.append(text)
                if rowspan > 1:
                    pending[col] = (rowspan - 1, text)
                col += 1

        grid.append(row)
        header_only.append(all(cell.name == "th" for cell in cells) if cells else False)

    if not grid:
        return [], []

    columns = grid[0]
    rows = [
        row for row, is_header in zip(grid[1:], header_only[1:]) if not is_header
    ]
    return columns, rows


class WikipediaTableScraper(BaseScraper):
    """Fetches venue list tables from Wikipedia pages."""

    source_name: str = "Wikipedia"

    def __init__(
        self,
        *args,
        sources: Optional[Dict[League, TableSource]] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.sources = sources if sources is not None else LEAGUE_SOURCES

    async def fetch_table(
        self, url: str, table_index: int, league: League
    ) -> RawLeagueTable:
        html = await self.fetch_page(url)
        soup = BeautifulSoup(html, "html.parser")
        tables = soup.find_all("table")
        logger.debug(f"Found {len(tables)} tables on {url}")

        if table_index < 0 or table_index >= len(tables):
            raise TableNotFoundError(
                f"No table at index {table_index} on {url} (page has {len(tables)})"
            )

        columns, rows = parse_table(tables[table_index])
        if not columns:
            raise TableNotFoundError(
                f"Table {table_index} on {url} has no header row"
            )

        logger.info(
            f"Extracted {len(rows)} rows from table {table_index} for {league.value}"
        )
        return RawLeagueTable(
            league=league,
            source_url=url,
            table_index=table_index,
            columns=columns,
            rows=rows,
        )

    async def fetch_league_tables(
        self, leagues: Iterable[League]
    ) -> Dict[League, RawLeagueTable]:
        """Fetches every requested league's table concurrently.

        Any failed league aborts the whole refresh: the first error is raised
        after all fetches have settled.
        """
        targets = list(leagues)
        missing = [league for league in targets if league not in self.sources]
        if missing:
            raise ScraperError(
                f"No table source configured for: {[m.value for m in missing]}"
            )

        logger.info(f"Fetching venue tables for {[t.value for t in targets]}")
        results = await asyncio.gather(
            *(
                self.fetch_table(
                    self.sources[league].url, self.sources[league].table_index, league
                )
                for league in targets
            ),
            return_exceptions=True,
        )

        tables: Dict[League, RawLeagueTable] = {}
        errors: List[Tuple[League, BaseException]] = []
        for league, result in zip(targets, results):
            if isinstance(result, BaseException):
                logger.error(f"Error fetching {league.value} venues: {result}")
                errors.append((league, result))
            else:
                tables[league] = result

        if errors:
            league, error = errors[0]
            if isinstance(error, ScraperError):
                raise error
            raise ScraperError(f"Unexpected error fetching {league.value} venues") from error

        logger.success(f"Fetched venue tables for {len(tables)} leagues")
        return tables
