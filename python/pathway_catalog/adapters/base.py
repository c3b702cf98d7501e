"""
Catalog adapter base classes and source registry for pathway-catalog.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Union

from pathway_catalog.cache import TransientCache
from pathway_catalog.config import CatalogConfig
from pathway_catalog.errors import RecordFormatError
from pathway_catalog.models import MatchSet, Pathway, Species
from pathway_catalog.transport import CatalogHttpClient


class PathwayDatabase(str, Enum):
    """Catalog sources known to the registry."""
    REACTOME = "reactome"
    KEGG = "kegg"
    PANTHER = "panther"
    SMPDB = "smpdb"
    METACYC = "metacyc"
    METACROP = "metacrop"


@dataclass
class FetchContext:
    """Everything an adapter needs for one call."""
    client: CatalogHttpClient
    cache: TransientCache
    config: CatalogConfig


class CatalogAdapter(ABC):
    """
    Abstract base class for catalog source adapters.
    Each source (Reactome, KEGG, PANTHER, ...) implements this interface
    and returns NormalizedModel records only.
    """

    # Set on sources whose listings are curated rather than fetched
    approximate = False

    @property
    @abstractmethod
    def source(self) -> PathwayDatabase:
        """Return the registry key of this source."""
        pass

    @property
    @abstractmethod
    def label(self) -> str:
        """Human readable source name used in messages."""
        pass

    @abstractmethod
    def fetch_species(self, ctx: FetchContext) -> List[Species]:
        """
        List the species this source catalogs.

        Args:
            ctx: Transport, cache and config of the caller

        Returns:
            Species sorted by display name, unique by id

        Raises:
            TransportError: the listing could not be retrieved
        """
        pass

    @abstractmethod
    def fetch_pathways(self, ctx: FetchContext, species_id: str) -> List[Pathway]:
        """
        List the pathways of one species.

        Args:
            ctx: Transport, cache and config of the caller
            species_id: Source-native species key

        Returns:
            Pathways sorted by display name, unique by id; empty when the
            source has no data for the species

        Raises:
            TransportError: the listing could not be retrieved
        """
        pass

    def _collect(self, raw_records: Iterable, parse) -> List:
        """Parse raw records one by one, dropping malformed ones."""
        parsed = []
        dropped = 0
        for raw in raw_records:
            try:
                parsed.append(parse(raw))
            except RecordFormatError as e:
                dropped += 1
                logging.debug(str(e))
        if dropped:
            logging.warning(f"{self.label}: dropped {dropped} malformed record(s)")
        return parsed


class IdentifierMapper(ABC):
    """Resolves caller identifiers to the pathways referencing them."""

    @abstractmethod
    def map_identifiers(self, ctx: FetchContext, species_id: str,
                        identifiers: Sequence[str]) -> MatchSet:
        """
        Map identifiers to pathway ids.

        Args:
            ctx: Transport, cache and config of the caller
            species_id: Source-native species key
            identifiers: Deduplicated, non-blank identifiers

        Returns:
            Ids of pathways referencing at least one identifier

        Raises:
            TransportError: the source failed; the service degrades this
                to an empty match set
        """
        pass


@dataclass(frozen=True)
class SourceDescriptor:
    """
    Capabilities of one source.

    `mapper` is None for sources without identifier mapping; that is a
    capability gap, not a failure.
    """
    adapter: CatalogAdapter
    mapper: Optional[IdentifierMapper] = None

    @property
    def source(self) -> PathwayDatabase:
        return self.adapter.source

    @property
    def supports_mapping(self) -> bool:
        return self.mapper is not None


SourceKey = Union[PathwayDatabase, str]


def resolve_source(source: SourceKey) -> PathwayDatabase:
    """Accept an enum member or its (case-insensitive) string value."""
    if isinstance(source, PathwayDatabase):
        return source
    try:
        return PathwayDatabase(str(source).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown pathway database: {source!r}") from None


class AdapterRegistry:
    """Registry dispatching a source key to its adapter and mapper."""

    def __init__(self):
        self._descriptors: Dict[PathwayDatabase, SourceDescriptor] = {}

    def register(self, adapter: CatalogAdapter,
                 mapper: Optional[IdentifierMapper] = None) -> None:
        """Register an adapter, with its identifier mapper if it has one."""
        self._descriptors[adapter.source] = SourceDescriptor(adapter, mapper)

    def get(self, source: SourceKey) -> SourceDescriptor:
        """Get the descriptor of a source."""
        key = resolve_source(source)
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            raise ValueError(f"No adapter registered for {key.value}")
        return descriptor

    def list_sources(self) -> List[PathwayDatabase]:
        """List all registered sources."""
        return list(self._descriptors.keys())

    def supports_mapping(self, source: SourceKey) -> bool:
        return self.get(source).supports_mapping
