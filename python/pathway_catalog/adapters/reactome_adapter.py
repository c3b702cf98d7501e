"""
Reactome Catalog Adapter for pathway-catalog
Lists species and pathways from the Reactome Content Service and maps
identifiers with its analysis mapping endpoint.
"""

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, List, Sequence

from pathway_catalog.adapters.base import (
    CatalogAdapter, FetchContext, IdentifierMapper, PathwayDatabase
)
from pathway_catalog.errors import RecordFormatError
from pathway_catalog.models import MatchSet, Pathway, Species, sort_records

SOURCE_LABEL = 'Reactome'


@dataclass(frozen=True)
class _RawSpecies:
    """`/data/species/all` entry: numeric dbId plus displayName."""
    db_id: int
    display_name: str

    @classmethod
    def from_payload(cls, raw: Any) -> '_RawSpecies':
        if not isinstance(raw, dict):
            raise RecordFormatError(SOURCE_LABEL, f"species entry is {type(raw).__name__}")
        db_id = raw.get('dbId')
        name = raw.get('displayName')
        # bool is an int subclass but never a valid dbId
        if not isinstance(db_id, int) or isinstance(db_id, bool):
            raise RecordFormatError(SOURCE_LABEL, f"species dbId {db_id!r}")
        if not isinstance(name, str) or not name:
            raise RecordFormatError(SOURCE_LABEL, f"species displayName {name!r}")
        return cls(db_id, name)

    def normalize(self) -> Species:
        return Species(id=str(self.db_id), display_name=self.display_name)


@dataclass(frozen=True)
class _RawPathway:
    """Pathway entry: stable id (stId) plus displayName."""
    st_id: str
    display_name: str

    @classmethod
    def from_payload(cls, raw: Any) -> '_RawPathway':
        if not isinstance(raw, dict):
            raise RecordFormatError(SOURCE_LABEL, f"pathway entry is {type(raw).__name__}")
        st_id = raw.get('stId')
        name = raw.get('displayName')
        if not isinstance(st_id, str) or not st_id:
            raise RecordFormatError(SOURCE_LABEL, f"pathway stId {st_id!r}")
        if not isinstance(name, str) or not name:
            raise RecordFormatError(SOURCE_LABEL, f"pathway displayName {name!r}")
        return cls(st_id, name)

    def normalize(self) -> Pathway:
        return Pathway(id=self.st_id, display_name=self.display_name)


@dataclass(frozen=True)
class _RawMapping:
    """Mapping answer: the `pathways` array, reduced to its stable ids."""
    pathway_ids: FrozenSet[str]

    @classmethod
    def from_payload(cls, raw: Any) -> '_RawMapping':
        if raw is None:
            return cls(frozenset())
        if not isinstance(raw, dict):
            raise RecordFormatError(SOURCE_LABEL, f"mapping answer is {type(raw).__name__}")
        entries = raw.get('pathways')
        if entries is None:
            return cls(frozenset())
        if not isinstance(entries, list):
            raise RecordFormatError(SOURCE_LABEL, f"mapping pathways is {type(entries).__name__}")
        return cls(frozenset(
            entry['stId'] for entry in entries
            if isinstance(entry, dict) and isinstance(entry.get('stId'), str) and entry['stId']
        ))


def _as_list(payload: Any) -> List:
    if payload is None:
        return []
    if not isinstance(payload, list):
        logging.warning(f"Unexpected Reactome response format: {type(payload).__name__}")
        return []
    return payload


class ReactomeAdapter(CatalogAdapter, IdentifierMapper):
    """Adapter for Reactome via the Content Service REST API."""

    @property
    def source(self) -> PathwayDatabase:
        return PathwayDatabase.REACTOME

    @property
    def label(self) -> str:
        return SOURCE_LABEL

    def fetch_species(self, ctx: FetchContext) -> List[Species]:
        url = f"{ctx.config.reactome_url}/data/species/all"
        payload = ctx.client.get_json(self.label, url)
        raw = self._collect(_as_list(payload), _RawSpecies.from_payload)
        return sort_records(r.normalize() for r in raw)

    def fetch_pathways(self, ctx: FetchContext, species_id: str) -> List[Pathway]:
        # 404 here means the species exists but has no pathways
        url = f"{ctx.config.reactome_url}/data/pathways/low/species/{species_id}"
        payload = ctx.client.get_json(self.label, url, empty_on_404=True)
        raw = self._collect(_as_list(payload), _RawPathway.from_payload)
        return sort_records(r.normalize() for r in raw)

    def map_identifiers(self, ctx: FetchContext, species_id: str,
                        identifiers: Sequence[str]) -> MatchSet:
        """
        Map identifiers with one POST.

        The request body is the identifiers joined by commas in input
        order; the answer lists the pathways that reference them.
        """
        if not identifiers:
            return frozenset()

        url = f"{ctx.config.reactome_url}/data/mapping/{species_id}/identifier"
        payload = ctx.client.post_json(self.label, url, ','.join(identifiers),
                                       empty_on_404=True)
        try:
            matches = _RawMapping.from_payload(payload).pathway_ids
        except RecordFormatError as e:
            logging.warning(str(e))
            return frozenset()

        logging.info(f"Reactome mapped {len(identifiers)} identifiers to {len(matches)} pathways")
        return frozenset(matches)
