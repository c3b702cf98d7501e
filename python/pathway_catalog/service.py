"""
Pathway catalog facade.

One entry point for the presentation layer: species and pathway listings
for any registered source, cached per service instance, and identifier
mapping that never fails the caller.
"""

import logging
from typing import Iterable, List, Optional

import requests

from pathway_catalog.adapters import AdapterRegistry, FetchContext, default_registry
from pathway_catalog.adapters.base import PathwayDatabase, SourceKey, resolve_source
from pathway_catalog.cache import TransientCache
from pathway_catalog.config import CatalogConfig
from pathway_catalog.errors import CatalogError
from pathway_catalog.models import EMPTY_MATCHES, MatchSet, Pathway, Species
from pathway_catalog.transport import CatalogHttpClient

logger = logging.getLogger("PathwayCatalog.Service")


def normalize_identifiers(identifiers: Iterable[str]) -> List[str]:
    """Strip, drop blanks and deduplicate, keeping first-seen order."""
    seen = {}
    for identifier in identifiers or []:
        if identifier is None:
            continue
        value = str(identifier).strip()
        if value:
            seen.setdefault(value, None)
    return list(seen)


class PathwayCatalogService:
    """
    Facade over every catalog source.

    The cache belongs to this instance: create one service per session
    (or request context) and share it by reference.
    """

    def __init__(self, config: Optional[CatalogConfig] = None,
                 client: Optional[CatalogHttpClient] = None,
                 cache: Optional[TransientCache] = None,
                 registry: Optional[AdapterRegistry] = None):
        self.config = config or CatalogConfig()
        self.client = client or CatalogHttpClient(self.config)
        self.cache = cache if cache is not None else TransientCache()
        self.registry = registry or default_registry()
        self._selected_source: Optional[PathwayDatabase] = None

    @property
    def context(self) -> FetchContext:
        return FetchContext(client=self.client, cache=self.cache, config=self.config)

    def list_sources(self) -> List[PathwayDatabase]:
        return self.registry.list_sources()

    def supports_mapping(self, source: SourceKey) -> bool:
        return self.registry.supports_mapping(source)

    def is_approximate(self, source: SourceKey) -> bool:
        """True for sources whose listings are curated, not real catalog data."""
        return self.registry.get(source).adapter.approximate

    def select_source(self, source: SourceKey) -> PathwayDatabase:
        """
        Make `source` the active selection.

        Switching away from a source drops everything cached for it, so
        lists are replaced wholesale when the selection changes.
        """
        key = resolve_source(source)
        previous = self._selected_source
        if previous is not None and previous != key:
            self.cache.invalidate(previous)
        self._selected_source = key
        return key

    def fetch_species(self, source: SourceKey) -> List[Species]:
        """
        Species of one source, sorted by display name.

        Raises:
            TransportError: the source could not be reached
        """
        descriptor = self.registry.get(source)
        adapter = descriptor.adapter
        ctx = self.context

        def fetch():
            species = adapter.fetch_species(ctx)
            logger.info(f"Fetched {len(species)} species from {adapter.label}")
            return species

        return list(self.cache.get_or_fetch((adapter.source,), fetch))

    def fetch_pathways(self, source: SourceKey, species_id: str) -> List[Pathway]:
        """
        Pathways of one species, sorted by display name.

        An unknown or empty species yields an empty list.

        Raises:
            TransportError: the source could not be reached
        """
        descriptor = self.registry.get(source)
        if not species_id:
            return []
        adapter = descriptor.adapter
        ctx = self.context

        def fetch():
            pathways = adapter.fetch_pathways(ctx, species_id)
            logger.info(f"Fetched {len(pathways)} pathways from {adapter.label} for {species_id}")
            return pathways

        return list(self.cache.get_or_fetch((adapter.source, species_id), fetch))

    def map_identifiers(self, source: SourceKey, species_id: str,
                        identifiers: Iterable[str]) -> MatchSet:
        """
        Pathway ids referencing at least one of `identifiers`.

        Highlighting is an enhancement, so this never raises for source
        failures: no mapper, no identifiers and any transport error all
        give an empty set.
        """
        descriptor = self.registry.get(source)
        if descriptor.mapper is None:
            logger.debug(f"{descriptor.adapter.label} has no identifier mapping")
            return EMPTY_MATCHES

        ids = normalize_identifiers(identifiers)
        if not species_id or not ids:
            return EMPTY_MATCHES

        try:
            return frozenset(descriptor.mapper.map_identifiers(self.context, species_id, ids))
        except (CatalogError, requests.RequestException) as e:
            logger.error(f"Failed to map identifiers to {descriptor.adapter.label} pathways: {e}")
            return EMPTY_MATCHES

    def close(self):
        self.client.close()
