import re
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from loguru import logger

from sports_venues.models.enums import League
from sports_venues.models.venue import VenueRecord

# Conjunction left behind when one row lists two teams ("New York Giants & New York Jets")
MULTI_TEAM_PATTERN = re.compile(r"\s&\s")


class SharedVenue(NamedTuple):
    league: League
    venue: str
    teams: Tuple[str, ...]


# Venues known to host more than one team of the same league.
# The scraped row names both teams in one cell; it is replaced by one record per team.
SHARED_VENUES: Tuple[SharedVenue, ...] = (
    SharedVenue(League.NFL, "MetLife Stadium", ("New York Giants", "New York Jets")),
)


class AnomalyReconciler:
    """Applies the known data-quality corrections to cleaned venue records."""

    def __init__(self, shared_venues: Optional[Sequence[SharedVenue]] = None):
        self.shared_venues: Tuple[SharedVenue, ...] = tuple(
            SHARED_VENUES if shared_venues is None else shared_venues
        )
        for entry in self.shared_venues:
            if len(entry.teams) < 2:
                raise ValueError(f"Shared venue {entry.venue!r} must list at least two teams")
        logger.info(
            f"AnomalyReconciler initialized with {len(self.shared_venues)} shared venue(s)."
        )

    def reconcile(self, records: Sequence[VenueRecord]) -> List[VenueRecord]:
        """Splits shared-venue records into one record per team.

        All records of a shared venue are judged together: if their teams
        already equal the entry's teams they pass through unchanged, so
        reconciling twice gives the same result. Otherwise the first matching
        record is replaced in place by one copy per listed team and any other
        matches are dropped. Multi-venue teams are not corrected.
        """
        lookup: Dict[Tuple[League, str], SharedVenue] = {
            (entry.league, entry.venue): entry for entry in self.shared_venues
        }
        groups: Dict[Tuple[League, str], List[VenueRecord]] = {}
        for record in records:
            key = (record.league, record.name)
            if key in lookup:
                groups.setdefault(key, []).append(record)

        emitted = set()
        reconciled: List[VenueRecord] = []
        for record in records:
            key = (record.league, record.name)
            entry = lookup.get(key)
            if entry is None:
                reconciled.append(record)
                continue

            group = groups[key]
            if [r.team for r in group] == list(entry.teams):
                reconciled.append(record)
                continue
            if key in emitted:
                continue
            emitted.add(key)

            first = group[0]
            conjunction = " & ".join(entry.teams)
            if len(group) > 1 or first.team != conjunction:
                logger.warning(
                    f"Shared venue {entry.venue!r} ({entry.league.value}) had unexpected team text "
                    f"{[r.team for r in group]!r}; replacing with {list(entry.teams)}"
                )
            logger.info(
                f"Splitting shared {entry.league.value} venue {entry.venue!r} "
                f"({first.team!r}) into {list(entry.teams)}"
            )
            reconciled.extend(
                first.model_copy(update={"team": team}) for team in entry.teams
            )

        for entry in self.shared_venues:
            if (entry.league, entry.venue) not in groups:
                logger.warning(
                    f"Shared venue {entry.venue!r} ({entry.league.value}) not found in dataset"
                )

        for record in reconciled:
            if MULTI_TEAM_PATTERN.search(record.team):
                logger.warning(
                    f"Record for {record.name!r} ({record.league.value}) still lists several teams: {record.team!r}"
                )

        multi_venue = find_multi_venue_teams(reconciled)
        if multi_venue:
            logger.info(f"Teams playing in more than one venue (kept as-is): {multi_venue}")

        logger.info(
            f"Reconciliation complete: {len(records)} -> {len(reconciled)} records"
        )
        return reconciled


def find_multi_venue_teams(records: Sequence[VenueRecord]) -> Dict[str, List[str]]:
    """Teams associated with more than one venue, mapped to those venue names."""
    venues_by_team: Dict[str, List[str]] = {}
    for record in records:
        venues = venues_by_team.setdefault(record.team, [])
        if record.name not in venues:
            venues.append(record.name)
    return {team: venues for team, venues in venues_by_team.items() if len(venues) > 1}


def longest_team_record(
    records: Sequence[VenueRecord], league: League
) -> Optional[VenueRecord]:
    """The record with the longest team text in a league.

    A quick way to eyeball multi-team rows; reconciliation itself relies on
    SHARED_VENUES rather than this heuristic.
    """
    candidates = [record for record in records if record.league == league]
    if not candidates:
        return None
    return max(candidates, key=lambda record: len(record.team))
