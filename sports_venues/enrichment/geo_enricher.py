from typing import List, Sequence, Tuple

import pandas as pd
from loguru import logger

from sports_venues.models.coordinates import CoordinateReference
from sports_venues.models.venue import VenueRecord

PUBLISHED_COLUMNS: Tuple[str, ...] = (
    "League",
    "Name",
    "Capacity",
    "City",
    "State",
    "Team",
    "Opened",
    "Latitude",
    "Longitude",
)

# Nullable dtypes so missing capacities/years stay integers instead of turning into floats
PUBLISHED_DTYPES = {
    "League": "string",
    "Name": "string",
    "Capacity": "Int64",
    "City": "string",
    "State": "string",
    "Team": "string",
    "Opened": "Int64",
    "Latitude": "Float64",
    "Longitude": "Float64",
}


class GeoEnricher:
    """Left-joins reference coordinates onto venue records by exact team name."""

    def enrich(
        self, records: Sequence[VenueRecord], reference: CoordinateReference
    ) -> List[VenueRecord]:
        enriched: List[VenueRecord] = []
        misses = 0
        for record in records:
            coordinate = reference.lookup(record.team)
            if coordinate is None:
                misses += 1
                logger.debug(f"No coordinates for team {record.team!r} ({record.name})")
                enriched.append(
                    record.model_copy(update={"latitude": None, "longitude": None})
                )
                continue
            enriched.append(
                record.model_copy(
                    update={
                        "latitude": coordinate.latitude,
                        "longitude": coordinate.longitude,
                    }
                )
            )

        if misses:
            logger.warning(
                f"Geo enrichment left {misses} of {len(enriched)} records without coordinates"
            )
        else:
            logger.success(f"Geo enrichment matched all {len(enriched)} records")
        return enriched


def find_missing_coordinates(records: Sequence[VenueRecord]) -> List[VenueRecord]:
    """Records lacking latitude or longitude, for manual follow-up."""
    return [record for record in records if not record.has_coordinates]


def to_dataframe(records: Sequence[VenueRecord]) -> pd.DataFrame:
    """Builds the published table: one row per record, columns in PUBLISHED_COLUMNS order."""
    frame = pd.DataFrame(
        [record.published_row() for record in records],
        columns=list(PUBLISHED_COLUMNS),
    )
    return frame.astype(PUBLISHED_DTYPES)
