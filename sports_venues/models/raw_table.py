# sports_venues/models/raw_table.py
from typing import Dict, Iterator, List

from pydantic import BaseModel, Field

from .enums import League


class RawLeagueTable(BaseModel):
    """One scraped HTML table: header texts plus rows of raw cell text."""

    league: League
    source_url: str
    table_index: int = Field(..., ge=0, description="0-based index of the table on the page.")
    columns: List[str]
    rows: List[List[str]] = []

    def records(self) -> Iterator[Dict[str, str]]:
        """Yields each row as a dict keyed by header text, padding short rows with ''.

        When a header repeats, the first column with that text wins.
        """
        width = len(self.columns)
        for row in self.rows:
            padded = list(row[:width]) + [""] * (width - len(row))
            record: Dict[str, str] = {}
            for column, value in zip(self.columns, padded):
                record.setdefault(column, value)
            yield record
