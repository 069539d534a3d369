from enum import Enum


class League(str, Enum):
    # Declaration order is the order leagues are unified in
    MLB = "MLB"
    NBA = "NBA"
    NFL = "NFL"
    NHL = "NHL"


class CanonicalField(str, Enum):
    """Fields of the unified venue schema that source columns map onto."""

    NAME = "name"
    CAPACITY = "capacity"
    LOCATION = "location"
    TEAM = "team"
    OPENED = "opened"
