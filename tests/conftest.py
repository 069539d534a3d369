"""Shared fixtures: small scraped tables shaped like the four Wikipedia pages."""

import pytest

from sports_venues.models.coordinates import Coordinate, CoordinateReference
from sports_venues.models.enums import League
from sports_venues.models.raw_table import RawLeagueTable


@pytest.fixture
def mlb_table():
    return RawLeagueTable(
        league=League.MLB,
        source_url="https://example.org/mlb",
        table_index=1,
        columns=["Image", "Name", "Capacity", "Surface", "Location", "Team", "Opened"],
        rows=[
            ["", "Fenway Park[5]", "37,755", "Grass", "Boston, Massachusetts", "Boston Red Sox", "1912"],
            ["", "Wrigley Field", "41,649[6]", "Grass", "Chicago, Illinois", "Chicago Cubs", "1914"],
        ],
    )


@pytest.fixture
def nba_table():
    return RawLeagueTable(
        league=League.NBA,
        source_url="https://example.org/nba",
        table_index=0,
        columns=["Image", "Arena", "Location", "Team(s)", "Capacity", "Opened"],
        rows=[
            ["", "Madison Square Garden", "New York City, New York", "New York Knicks", "19,812", "1968"],
        ],
    )


@pytest.fixture
def nfl_table():
    return RawLeagueTable(
        league=League.NFL,
        source_url="https://example.org/nfl",
        table_index=1,
        columns=["Image", "Name", "Capacity", "Location", "Surface", "Roof type", "Team(s)", "Opened"],
        rows=[
            ["", "MetLife Stadium[1]", "82,500[2]", "East Rutherford, New Jersey", "FieldTurf", "Open", "New York Giants & New York Jets", "2010"],
            ["", "Lambeau Field", "81,441", "Green Bay, Wisconsin", "Grass", "Open", "Green Bay Packers", "1957"],
        ],
    )


@pytest.fixture
def nhl_table():
    return RawLeagueTable(
        league=League.NHL,
        source_url="https://example.org/nhl",
        table_index=0,
        columns=["Image", "Arena", "Location", "Team(s)", "Capacity", "Opened"],
        rows=[
            ["", "UBS Arena", "Elmont, New York", "New York Islanders", "17,255", "2021"],
            ["", "Nassau Coliseum", "Uniondale, New York", "New York Islanders", "13,917", "1972"],
        ],
    )


@pytest.fixture
def raw_tables(mlb_table, nba_table, nfl_table, nhl_table):
    return {
        League.MLB: mlb_table,
        League.NBA: nba_table,
        League.NFL: nfl_table,
        League.NHL: nhl_table,
    }


@pytest.fixture
def giants_reference():
    return CoordinateReference(
        coordinates={
            "New York Giants": Coordinate(latitude=40.81, longitude=-74.07),
            "Boston Red Sox": Coordinate(latitude=42.35, longitude=-71.10),
        }
    )
