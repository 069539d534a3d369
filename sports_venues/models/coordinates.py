from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


class CoordinateReference(BaseModel):
    """Read-only mapping of team name to venue coordinates.

    Lookups are exact and case-sensitive; no fuzzy matching is attempted.
    """

    model_config = ConfigDict(frozen=True)

    coordinates: Dict[str, Coordinate] = {}

    def lookup(self, team: str) -> Optional[Coordinate]:
        return self.coordinates.get(team)

    def __contains__(self, team: object) -> bool:
        return team in self.coordinates

    def __len__(self) -> int:
        return len(self.coordinates)
