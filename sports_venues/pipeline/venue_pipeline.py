from typing import Dict, List, Mapping, Optional

from loguru import logger
from pydantic import BaseModel

from sports_venues.enrichment.geo_enricher import GeoEnricher, find_missing_coordinates
from sports_venues.models.coordinates import CoordinateReference
from sports_venues.models.enums import League
from sports_venues.models.raw_table import RawLeagueTable
from sports_venues.models.venue import RawVenueRecord, VenueRecord
from sports_venues.normalization.cleaner import FieldCleaner
from sports_venues.normalization.normalizer import LeagueNormalizer, unify
from sports_venues.reconciliation.reconciler import AnomalyReconciler


class PipelineResult(BaseModel):
    records: List[VenueRecord]
    missing_coordinates: List[VenueRecord]
    parse_failures: Dict[str, int]


class VenuePipeline:
    """Normalize -> unify -> clean -> reconcile -> enrich, each stage returning new records."""

    def __init__(
        self,
        normalizer: Optional[LeagueNormalizer] = None,
        cleaner: Optional[FieldCleaner] = None,
        reconciler: Optional[AnomalyReconciler] = None,
        enricher: Optional[GeoEnricher] = None,
    ):
        self.normalizer = normalizer or LeagueNormalizer()
        self.cleaner = cleaner or FieldCleaner()
        self.reconciler = reconciler or AnomalyReconciler()
        self.enricher = enricher or GeoEnricher()

    def run(
        self,
        raw_tables: Mapping[League, RawLeagueTable],
        reference: CoordinateReference,
    ) -> PipelineResult:
        normalized: Dict[League, List[RawVenueRecord]] = {
            league: self.normalizer.normalize(table, league)
            for league, table in raw_tables.items()
        }
        unified = unify(normalized)
        cleaned = self.cleaner.clean(unified)
        reconciled = self.reconciler.reconcile(cleaned)
        enriched = self.enricher.enrich(reconciled, reference)

        missing = find_missing_coordinates(enriched)
        for record in missing:
            logger.warning(
                f"Missing coordinates: {record.team} ({record.league.value}, {record.name})"
            )
        logger.success(f"Venue pipeline produced {len(enriched)} records")
        return PipelineResult(
            records=enriched,
            missing_coordinates=missing,
            parse_failures=dict(self.cleaner.parse_failures),
        )
