from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger

from sports_venues.models.enums import CanonicalField, League
from sports_venues.models.raw_table import RawLeagueTable
from sports_venues.models.venue import RawVenueRecord
from sports_venues.utils.misc_utils import strip_annotations

# Source column -> canonical field, per league.
# Wikipedia uses "Arena" on the arena pages and "Team(s)" wherever a venue can host several teams.
LEAGUE_COLUMN_MAP: Dict[League, Dict[str, CanonicalField]] = {
    League.MLB: {
        "Name": CanonicalField.NAME,
        "Capacity": CanonicalField.CAPACITY,
        "Location": CanonicalField.LOCATION,
        "Team": CanonicalField.TEAM,
        "Opened": CanonicalField.OPENED,
    },
    League.NBA: {
        "Arena": CanonicalField.NAME,
        "Capacity": CanonicalField.CAPACITY,
        "Location": CanonicalField.LOCATION,
        "Team(s)": CanonicalField.TEAM,
        "Opened": CanonicalField.OPENED,
    },
    League.NFL: {
        "Name": CanonicalField.NAME,
        "Capacity": CanonicalField.CAPACITY,
        "Location": CanonicalField.LOCATION,
        "Team(s)": CanonicalField.TEAM,
        "Opened": CanonicalField.OPENED,
    },
    League.NHL: {
        "Arena": CanonicalField.NAME,
        "Capacity": CanonicalField.CAPACITY,
        "Location": CanonicalField.LOCATION,
        "Team(s)": CanonicalField.TEAM,
        "Opened": CanonicalField.OPENED,
    },
}


class NormalizationError(Exception):
    """Custom exception for data normalization errors."""

    pass


class SchemaMismatchError(NormalizationError):
    """A table or record does not fit the canonical venue schema."""

    pass


class LeagueNormalizer:
    """Maps each league's scraped table onto the canonical venue schema."""

    def __init__(
        self, column_map: Optional[Mapping[League, Mapping[str, CanonicalField]]] = None
    ):
        self.column_map: Dict[League, Dict[str, CanonicalField]] = {
            league: dict(mapping)
            for league, mapping in (column_map or LEAGUE_COLUMN_MAP).items()
        }
        for league, mapping in self.column_map.items():
            mapped = set(mapping.values())
            if mapped != set(CanonicalField):
                raise SchemaMismatchError(
                    f"Column map for {league.value} must cover every canonical field; "
                    f"missing {sorted(f.value for f in set(CanonicalField) - mapped)}"
                )
        logger.info(
            f"LeagueNormalizer initialized for leagues: {[l.value for l in self.column_map]}"
        )

    def normalize(self, table: RawLeagueTable, league: League) -> List[RawVenueRecord]:
        """Selects and renames a league table's columns and tags rows with the league.

        No cleaning happens here; cell text is carried over verbatim.

        Raises:
            SchemaMismatchError: If the league has no mapping or the table lacks
                one of the mapped source columns.
        """
        mapping = self.column_map.get(league)
        if mapping is None:
            raise SchemaMismatchError(f"No column mapping defined for league {league}")

        header_lookup = self._resolve_headers(table.columns)
        missing = [source for source in mapping if source not in header_lookup]
        if missing:
            raise SchemaMismatchError(
                f"{league.value} table from {table.source_url} is missing columns {missing}; "
                f"found {table.columns}"
            )

        records: List[RawVenueRecord] = []
        for row in table.records():
            values = {
                canonical.value: row[header_lookup[source]]
                for source, canonical in mapping.items()
            }
            records.append(RawVenueRecord(league=league, **values))

        logger.debug(f"Normalized {len(records)} {league.value} rows")
        return records

    @staticmethod
    def _resolve_headers(columns: Sequence[str]) -> Dict[str, str]:
        """Maps footnote-free header text to the header as scraped.

        The first occurrence wins when two headers clean to the same text.
        """
        lookup: Dict[str, str] = {}
        for column in columns:
            lookup.setdefault(strip_annotations(column), column)
        return lookup


def unify(tables: Mapping[League, Sequence[RawVenueRecord]]) -> List[RawVenueRecord]:
    """Concatenates per-league records in League declaration order (MLB, NBA, NFL, NHL).

    Raises:
        SchemaMismatchError: If an element is not a RawVenueRecord or carries a
            league tag different from the key it was supplied under.
    """
    unknown = [key for key in tables if key not in set(League)]
    if unknown:
        raise SchemaMismatchError(f"Unknown league keys supplied to unify: {unknown}")

    unified: List[RawVenueRecord] = []
    included = 0
    for league in League:
        records = tables.get(league)
        if records is None:
            logger.warning(f"No {league.value} records supplied to unify, skipping.")
            continue
        for record in records:
            if not isinstance(record, RawVenueRecord):
                raise SchemaMismatchError(
                    f"Expected RawVenueRecord in {league.value} input, got {type(record).__name__}"
                )
            if record.league != league:
                raise SchemaMismatchError(
                    f"Record tagged {record.league.value} supplied under {league.value}: {record.name!r}"
                )
        unified.extend(records)
        included += 1

    logger.info(f"Unified {len(unified)} venue records across {included} leagues")
    return unified
