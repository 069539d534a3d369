from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import League

# Bounds for a plausible venue opening year
MIN_OPENED_YEAR = 1850
MAX_OPENED_YEAR = 2100


class RawVenueRecord(BaseModel):
    """A venue row mapped into the canonical schema, still as scraped text."""

    model_config = ConfigDict(frozen=True)

    league: League
    name: str
    capacity: str
    location: str
    team: str
    opened: str


class VenueRecord(BaseModel):
    """One venue-team-league association after cleaning.

    Records are immutable; every pipeline stage returns new instances via
    ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    league: League
    name: str
    capacity: Optional[int] = Field(None, ge=0)
    city: str
    state: Optional[str] = None
    team: str
    opened: Optional[int] = Field(None, ge=MIN_OPENED_YEAR, le=MAX_OPENED_YEAR)
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def published_row(
        self,
    ) -> Tuple[
        str,
        str,
        Optional[int],
        str,
        Optional[str],
        str,
        Optional[int],
        Optional[float],
        Optional[float],
    ]:
        """Field values in published column order (League ... Longitude)."""
        return (
            self.league.value,
            self.name,
            self.capacity,
            self.city,
            self.state,
            self.team,
            self.opened,
            self.latitude,
            self.longitude,
        )


# Anything the field cleaner accepts
AnyVenueRecord = Union[RawVenueRecord, VenueRecord]
