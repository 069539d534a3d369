from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sports_venues.enrichment.geo_enricher import find_missing_coordinates, to_dataframe
from sports_venues.models.enums import League
from sports_venues.models.venue import VenueRecord
from sports_venues.reconciliation.reconciler import (
    find_multi_venue_teams,
    longest_team_record,
)


class LeagueSummary(BaseModel):
    league: League
    venue_count: int
    total_capacity: int
    mean_capacity: Optional[float] = None
    max_capacity: Optional[int] = None
    oldest_opened: Optional[int] = None
    newest_opened: Optional[int] = None


class DatasetSummary(BaseModel):
    """Descriptive statistics and follow-up lists for a finished dataset."""

    record_count: int
    leagues: List[LeagueSummary]
    multi_venue_teams: Dict[str, List[str]]
    missing_coordinates: List[VenueRecord]
    longest_nfl_team: Optional[VenueRecord] = None


def summarize(records: Sequence[VenueRecord]) -> DatasetSummary:
    frame = to_dataframe(records)
    leagues: List[LeagueSummary] = []
    for league in League:
        subset = frame[frame["League"] == league.value]
        if subset.empty:
            continue
        capacity = subset["Capacity"].dropna()
        opened = subset["Opened"].dropna()
        leagues.append(
            LeagueSummary(
                league=league,
                venue_count=len(subset),
                total_capacity=int(capacity.sum()),
                mean_capacity=round(float(capacity.mean()), 1) if len(capacity) else None,
                max_capacity=int(capacity.max()) if len(capacity) else None,
                oldest_opened=int(opened.min()) if len(opened) else None,
                newest_opened=int(opened.max()) if len(opened) else None,
            )
        )

    return DatasetSummary(
        record_count=len(frame),
        leagues=leagues,
        multi_venue_teams=find_multi_venue_teams(records),
        missing_coordinates=find_missing_coordinates(records),
        longest_nfl_team=longest_team_record(records, League.NFL),
    )


def render_summary(summary: DatasetSummary, console: Optional[Console] = None) -> None:
    """Prints the summary as rich tables."""
    console = console or Console()

    table = Table(title=f"Venues by league ({summary.record_count} records)")
    table.add_column("League", style="cyan")
    table.add_column("Venues", justify="right")
    table.add_column("Mean capacity", justify="right")
    table.add_column("Max capacity", justify="right")
    table.add_column("Opened", justify="right")
    for league in summary.leagues:
        opened = (
            f"{league.oldest_opened}-{league.newest_opened}"
            if league.oldest_opened is not None
            else "-"
        )
        table.add_row(
            league.league.value,
            str(league.venue_count),
            f"{league.mean_capacity:,.0f}" if league.mean_capacity is not None else "-",
            f"{league.max_capacity:,}" if league.max_capacity is not None else "-",
            opened,
        )
    console.print(table)

    if summary.multi_venue_teams:
        lines = [
            f"{team}: {', '.join(venues)}"
            for team, venues in summary.multi_venue_teams.items()
        ]
        console.print(Panel("\n".join(lines), title="Teams with several venues"))

    if summary.missing_coordinates:
        missing = Table(title="Records without coordinates", style="yellow")
        missing.add_column("League")
        missing.add_column("Team")
        missing.add_column("Venue")
        for record in summary.missing_coordinates:
            missing.add_row(record.league.value, record.team, record.name)
        console.print(missing)
    else:
        console.print("[green]Every record has coordinates.[/green]")
