from collections import Counter
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from sports_venues.models.venue import (
    MAX_OPENED_YEAR,
    MIN_OPENED_YEAR,
    AnyVenueRecord,
    RawVenueRecord,
    VenueRecord,
)
from sports_venues.utils.misc_utils import strip_annotations, strip_thousands_separators

LOCATION_DELIMITER = ", "


class FieldCleaner:
    """Turns canonical-schema text records into typed VenueRecords.

    Parse failures never drop a record: the affected field becomes None and
    the failure is counted in ``parse_failures`` (keyed by field name).
    Cleaning is idempotent, so already-clean VenueRecords may be passed back in.
    """

    def __init__(self):
        self.parse_failures: Counter = Counter()

    def clean(self, records: Iterable[AnyVenueRecord]) -> List[VenueRecord]:
        self.parse_failures = Counter()
        cleaned = [self.clean_record(record) for record in records]
        if self.parse_failures:
            logger.warning(
                f"Field cleaning finished with parse failures: {dict(self.parse_failures)}"
            )
        else:
            logger.info(f"Field cleaning finished for {len(cleaned)} records")
        return cleaned

    def clean_record(self, record: AnyVenueRecord) -> VenueRecord:
        if isinstance(record, VenueRecord):
            # Typed fields were validated on construction; only text can still carry markers
            return record.model_copy(
                update={
                    "name": strip_annotations(record.name),
                    "team": strip_annotations(record.team),
                }
            )

        city, state = self.split_location(record.location, record.name)
        return VenueRecord(
            league=record.league,
            name=strip_annotations(record.name),
            capacity=self.parse_capacity(record.capacity, record.name),
            city=city,
            state=state,
            team=strip_annotations(record.team),
            opened=self.parse_opened(record.opened, record.name),
        )

    def split_location(self, location: str, venue: str = "") -> Tuple[str, Optional[str]]:
        """Splits "City, State" on the first delimiter.

        Without a delimiter the whole text is kept as the city and state is None.
        """
        text = location.strip()
        city, delimiter, state = text.partition(LOCATION_DELIMITER)
        if not delimiter:
            logger.warning(f"Location {location!r} for {venue!r} has no city/state delimiter")
            self.parse_failures["location"] += 1
            return text, None
        return city.strip(), state.strip()

    def parse_capacity(self, capacity: str, venue: str = "") -> Optional[int]:
        text = strip_thousands_separators(strip_annotations(capacity))
        if text.isascii() and text.isdigit():
            return int(text)
        logger.warning(f"Unparsable capacity {capacity!r} for {venue!r}")
        self.parse_failures["capacity"] += 1
        return None

    def parse_opened(self, opened: str, venue: str = "") -> Optional[int]:
        """Reads the year from the first four characters ("1912 (renovated 2012)" -> 1912)."""
        text = opened.strip()[:4]
        if len(text) == 4 and text.isascii() and text.isdigit():
            year = int(text)
            if MIN_OPENED_YEAR <= year <= MAX_OPENED_YEAR:
                return year
        logger.warning(f"Unparsable opening year {opened!r} for {venue!r}")
        self.parse_failures["opened"] += 1
        return None
