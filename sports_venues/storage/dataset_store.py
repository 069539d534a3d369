# sports_venues/storage/dataset_store.py
import csv
from pathlib import Path
from typing import Dict, Sequence, Union

import pandas as pd
from loguru import logger
from pydantic import ValidationError

from sports_venues.enrichment.geo_enricher import to_dataframe
from sports_venues.models.coordinates import Coordinate, CoordinateReference
from sports_venues.models.venue import VenueRecord

REQUIRED_COORDINATE_COLUMNS = ("team_name", "lat", "lon")

PathLike = Union[str, Path]


class CoordinateFileError(Exception):
    """The coordinate reference file is missing or lacks required columns."""

    pass


def load_coordinate_reference(path: PathLike) -> CoordinateReference:
    """Reads the team coordinate CSV wholesale into a CoordinateReference.

    Rows with a blank team or unusable coordinates are skipped with a warning;
    when a team appears twice the first row wins.
    """
    path = Path(path)
    if not path.exists():
        raise CoordinateFileError(f"Coordinate reference file not found: {path}")

    try:
        frame = pd.read_csv(path, dtype={"team_name": "string"})
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise CoordinateFileError(f"Could not read coordinate reference {path}: {e}") from e

    missing = [column for column in REQUIRED_COORDINATE_COLUMNS if column not in frame.columns]
    if missing:
        raise CoordinateFileError(
            f"Coordinate reference {path} is missing columns {missing}; found {list(frame.columns)}"
        )

    coordinates: Dict[str, Coordinate] = {}
    skipped = 0
    for row in frame.itertuples(index=False):
        team = row.team_name
        if pd.isna(team) or not str(team).strip():
            skipped += 1
            continue
        team = str(team)
        if team in coordinates:
            logger.warning(f"Duplicate coordinates for {team!r} in {path}; keeping the first")
            continue
        try:
            coordinates[team] = Coordinate(latitude=row.lat, longitude=row.lon)
        except ValidationError as e:
            logger.warning(f"Skipping coordinates for {team!r}: {e.errors()[0]['msg']}")
            skipped += 1

    if skipped:
        logger.warning(f"Skipped {skipped} unusable rows in {path}")
    logger.info(f"Loaded coordinates for {len(coordinates)} teams from {path}")
    return CoordinateReference(coordinates=coordinates)


def write_dataset(records: Sequence[VenueRecord], path: PathLike) -> Path:
    """Writes the published venue table as CSV.

    Text is quoted only when it contains the delimiter and nulls become empty fields.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = to_dataframe(records)
    frame.to_csv(path, index=False, quoting=csv.QUOTE_MINIMAL, na_rep="")
    logger.success(f"Wrote {len(frame)} venue records to {path}")
    return path
