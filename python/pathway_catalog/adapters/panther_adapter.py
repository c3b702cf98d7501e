"""
PANTHER Catalog Adapter for pathway-catalog
Reads the nested `search.<list>.<item>` JSON of the PANTHER REST API.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, List, Sequence, Set

from pathway_catalog.adapters.base import CatalogAdapter, FetchContext, PathwayDatabase
from pathway_catalog.errors import RecordFormatError
from pathway_catalog.models import Pathway, Species, sort_records

SOURCE_LABEL = 'PANTHER'


@dataclass(frozen=True)
class _RawOrganism:
    taxon_id: str
    long_name: str

    @classmethod
    def from_payload(cls, raw: Any) -> '_RawOrganism':
        if not isinstance(raw, dict):
            raise RecordFormatError(SOURCE_LABEL, f"organism entry is {type(raw).__name__}")
        taxon_id = raw.get('taxon_id')
        long_name = raw.get('long_name')
        if taxon_id in (None, '') or isinstance(taxon_id, bool):
            raise RecordFormatError(SOURCE_LABEL, f"organism taxon_id {taxon_id!r}")
        if not isinstance(long_name, str) or not long_name:
            raise RecordFormatError(SOURCE_LABEL, f"organism long_name {long_name!r}")
        return cls(str(taxon_id), long_name)


@dataclass(frozen=True)
class _RawPathway:
    id: str
    name: str

    @classmethod
    def from_payload(cls, raw: Any) -> '_RawPathway':
        if not isinstance(raw, dict):
            raise RecordFormatError(SOURCE_LABEL, f"pathway entry is {type(raw).__name__}")
        pathway_id = raw.get('id')
        name = raw.get('name')
        if not isinstance(pathway_id, str) or not pathway_id:
            raise RecordFormatError(SOURCE_LABEL, f"pathway id {pathway_id!r}")
        if not isinstance(name, str) or not name:
            raise RecordFormatError(SOURCE_LABEL, f"pathway name {name!r}")
        return cls(pathway_id, name)


class PANTHERAdapter(CatalogAdapter):
    """Adapter for the PANTHER REST API."""

    def __init__(self):
        self._warned: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def source(self) -> PathwayDatabase:
        return PathwayDatabase.PANTHER

    @property
    def label(self) -> str:
        return SOURCE_LABEL

    def _url(self, ctx: FetchContext, path: str) -> str:
        return ctx.config.proxied(f"{ctx.config.panther_url}/{path}")

    def _nested(self, payload: Any, path: Sequence[str], endpoint: str) -> List:
        """
        Walk `path` into the payload.

        A missing level means no data. It is logged once per endpoint so a
        species browser does not flood the log.
        """
        node = payload
        for key in path:
            if not isinstance(node, dict) or key not in node:
                with self._lock:
                    first = endpoint not in self._warned
                    self._warned.add(endpoint)
                if first:
                    logging.warning(
                        f"Unexpected PANTHER {endpoint} response format: missing {'.'.join(path)}"
                    )
                return []
            node = node[key]
        # A single result comes back as an object instead of a list
        if isinstance(node, dict):
            return [node]
        return node if isinstance(node, list) else []

    def fetch_species(self, ctx: FetchContext) -> List[Species]:
        payload = ctx.client.get_json(self.label, self._url(ctx, 'organism/list'))
        organisms = self._nested(payload, ('search', 'organism_list', 'organism'), 'organism')
        raw = self._collect(organisms, _RawOrganism.from_payload)
        return sort_records(Species(id=o.taxon_id, display_name=o.long_name) for o in raw)

    def fetch_pathways(self, ctx: FetchContext, species_id: str) -> List[Pathway]:
        url = self._url(ctx, 'pathway/pathwaysForOrganism')
        payload = ctx.client.get_json(self.label, url, params={'organism': species_id})
        pathways = self._nested(payload, ('search', 'pathway_list', 'pathway'), 'pathway')
        raw = self._collect(pathways, _RawPathway.from_payload)
        return sort_records(Pathway(id=p.id, display_name=p.name) for p in raw)
