"""
SMPDB Catalog Adapter for pathway-catalog

SMPDB has no species-scoped endpoint. The whole `pathways.json` catalog is
fetched once, cached at source level, and both species and pathway lists
are derived from it client-side.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pathway_catalog.adapters.base import CatalogAdapter, FetchContext, PathwayDatabase
from pathway_catalog.cache import GLOBAL_KEY
from pathway_catalog.errors import RecordFormatError
from pathway_catalog.models import Pathway, Species, sort_records

SOURCE_LABEL = 'SMPDB'


@dataclass(frozen=True)
class _RawPathway:
    """One entry of the global catalog; either half may be missing."""
    smp_id: Optional[str]
    name: Optional[str]
    taxonomy_id: Optional[str]
    species_name: Optional[str]

    @classmethod
    def from_payload(cls, raw: Any) -> '_RawPathway':
        if not isinstance(raw, dict):
            raise RecordFormatError(SOURCE_LABEL, f"catalog entry is {type(raw).__name__}")

        def text(key: str) -> Optional[str]:
            value = raw.get(key)
            if value is None or value == '' or isinstance(value, bool):
                return None
            return str(value)

        record = cls(text('smp_id'), text('name'),
                     text('species_taxonomy_id'), text('species_name'))
        if record.taxonomy_id is None:
            raise RecordFormatError(SOURCE_LABEL, "entry without species_taxonomy_id")
        return record

    @property
    def has_species(self) -> bool:
        return self.taxonomy_id is not None and self.species_name is not None

    @property
    def has_pathway(self) -> bool:
        return self.smp_id is not None and self.name is not None


class SMPDBAdapter(CatalogAdapter):
    """Adapter for the SMPDB global pathway dump."""

    @property
    def source(self) -> PathwayDatabase:
        return PathwayDatabase.SMPDB

    @property
    def label(self) -> str:
        return SOURCE_LABEL

    def _load_catalog(self, ctx: FetchContext) -> List[_RawPathway]:
        def fetch() -> List[_RawPathway]:
            url = ctx.config.proxied(f"{ctx.config.smpdb_url}/pathways.json")
            payload = ctx.client.get_json(self.label, url)
            if payload is None:
                return []
            if not isinstance(payload, list):
                logging.warning(f"Unexpected SMPDB response format: {type(payload).__name__}")
                return []
            records = self._collect(payload, _RawPathway.from_payload)
            logging.info(f"Loaded {len(records)} SMPDB catalog entries")
            return records

        return ctx.cache.get_or_fetch((self.source, GLOBAL_KEY), fetch)

    def fetch_species(self, ctx: FetchContext) -> List[Species]:
        species: Dict[str, str] = {}
        for record in self._load_catalog(ctx):
            if record.has_species:
                # later entries overwrite earlier names for the same taxon
                species[record.taxonomy_id] = record.species_name
        return sort_records(Species(id=k, display_name=v) for k, v in species.items())

    def fetch_pathways(self, ctx: FetchContext, species_id: str) -> List[Pathway]:
        return sort_records(
            Pathway(id=r.smp_id, display_name=r.name)
            for r in self._load_catalog(ctx)
            if r.taxonomy_id == species_id and r.has_pathway
        )
