"""Tests for anomaly reconciliation."""

import pytest

from sports_venues.models.enums import League
from sports_venues.models.venue import VenueRecord
from sports_venues.reconciliation.reconciler import (
    MULTI_TEAM_PATTERN,
    AnomalyReconciler,
    SharedVenue,
    find_multi_venue_teams,
    longest_team_record,
)


def _venue(name, team, league=League.NFL, **overrides):
    values = {
        "league": league,
        "name": name,
        "capacity": 70000,
        "city": "Somewhere",
        "state": "Somestate",
        "team": team,
        "opened": 2000,
    }
    values.update(overrides)
    return VenueRecord(**values)


@pytest.fixture
def metlife():
    return _venue(
        "MetLife Stadium",
        "New York Giants & New York Jets",
        capacity=82500,
        city="East Rutherford",
        state="New Jersey",
        opened=2010,
    )


@pytest.fixture
def dataset(metlife):
    return [
        _venue("Fenway Park", "Boston Red Sox", league=League.MLB),
        _venue("Lambeau Field", "Green Bay Packers"),
        metlife,
        _venue("Soldier Field", "Chicago Bears"),
        _venue("UBS Arena", "New York Islanders", league=League.NHL),
        _venue("Nassau Coliseum", "New York Islanders", league=League.NHL),
    ]


class TestSharedVenueSplit:
    """MetLife Stadium is split into one record per team."""

    @pytest.fixture
    def reconciler(self):
        return AnomalyReconciler()

    def test_split_produces_one_record_per_team(self, reconciler, metlife):
        giants, jets = reconciler.reconcile([metlife])
        assert giants == metlife.model_copy(update={"team": "New York Giants"})
        assert jets == metlife.model_copy(update={"team": "New York Jets"})

    def test_split_keeps_position(self, reconciler, dataset):
        reconciled = reconciler.reconcile(dataset)
        names = [r.name for r in reconciled]
        assert names == [
            "Fenway Park",
            "Lambeau Field",
            "MetLife Stadium",
            "MetLife Stadium",
            "Soldier Field",
            "UBS Arena",
            "Nassau Coliseum",
        ]

    def test_nfl_count_grows_by_one(self, reconciler, dataset):
        before = sum(r.league == League.NFL for r in dataset)
        after = sum(r.league == League.NFL for r in reconciler.reconcile(dataset))
        assert after == before + 1

    def test_split_matches_on_venue_not_team_text(self, reconciler):
        """Team text glued together by the scraper is still split."""
        record = _venue("MetLife Stadium", "New York GiantsNew York Jets")
        teams = [r.team for r in reconciler.reconcile([record])]
        assert teams == ["New York Giants", "New York Jets"]

    def test_single_listed_team_still_split(self, reconciler, dataset, metlife):
        """Footnote stripping can leave only the first team; the second is restored."""
        truncated = metlife.model_copy(update={"team": "New York Giants"})
        records = [truncated if r is metlife else r for r in dataset]
        reconciled = reconciler.reconcile(records)
        metlife_teams = [r.team for r in reconciled if r.name == "MetLife Stadium"]
        assert metlife_teams == ["New York Giants", "New York Jets"]
        before = sum(r.league == League.NFL for r in records)
        assert sum(r.league == League.NFL for r in reconciled) == before + 1

    def test_extra_rows_for_shared_venue_collapse(self, reconciler, metlife):
        """Stray rows for the venue are replaced by exactly one record per team."""
        records = [
            metlife.model_copy(update={"team": "New York Jets"}),
            metlife.model_copy(update={"team": "New York Jets"}),
        ]
        reconciled = reconciler.reconcile(records)
        assert [r.team for r in reconciled] == ["New York Giants", "New York Jets"]

    def test_idempotent(self, reconciler, dataset):
        once = reconciler.reconcile(dataset)
        twice = reconciler.reconcile(once)
        assert twice == once

    def test_no_conjunction_remains(self, reconciler, dataset):
        for record in reconciler.reconcile(dataset):
            assert not MULTI_TEAM_PATTERN.search(record.team)

    def test_never_shrinks(self, reconciler, dataset):
        assert len(reconciler.reconcile(dataset)) >= len(dataset)

    def test_other_league_same_name_untouched(self, reconciler):
        record = _venue("MetLife Stadium", "Some Team", league=League.NBA)
        assert reconciler.reconcile([record]) == [record]

    def test_missing_shared_venue_is_not_an_error(self, reconciler):
        records = [_venue("Lambeau Field", "Green Bay Packers")]
        assert reconciler.reconcile(records) == records

    def test_custom_exception_table(self):
        reconciler = AnomalyReconciler(
            shared_venues=[
                SharedVenue(League.NBA, "Crypto.com Arena", ("Los Angeles Lakers", "Los Angeles Clippers"))
            ]
        )
        record = _venue("Crypto.com Arena", "Los Angeles Lakers & Los Angeles Clippers", league=League.NBA)
        assert [r.team for r in reconciler.reconcile([record])] == [
            "Los Angeles Lakers",
            "Los Angeles Clippers",
        ]

    def test_single_team_entry_rejected(self):
        with pytest.raises(ValueError, match="at least two teams"):
            AnomalyReconciler(shared_venues=[SharedVenue(League.NFL, "X", ("Only",))])


class TestMultiVenueTeams:
    """Teams with two venues are reported, never collapsed."""

    def test_multi_venue_team_left_alone(self, dataset):
        reconciled = AnomalyReconciler().reconcile(dataset)
        islanders = [r for r in reconciled if r.team == "New York Islanders"]
        assert len(islanders) == 2

    def test_find_multi_venue_teams(self, dataset):
        assert find_multi_venue_teams(dataset) == {
            "New York Islanders": ["UBS Arena", "Nassau Coliseum"]
        }


class TestLongestTeamRecord:
    def test_picks_shared_venue_row(self, dataset, metlife):
        assert longest_team_record(dataset, League.NFL) == metlife

    def test_empty_league(self, dataset):
        assert longest_team_record(dataset, League.NBA) is None
