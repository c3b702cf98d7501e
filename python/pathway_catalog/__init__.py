"""
pathway-catalog
Species and pathway listings from several public pathway databases,
normalized into one model, with gene/compound identifier mapping.
"""

from pathway_catalog.adapters import AdapterRegistry, PathwayDatabase, default_registry
from pathway_catalog.cache import TransientCache
from pathway_catalog.config import CatalogConfig
from pathway_catalog.errors import CatalogError, RecordFormatError, TransportError
from pathway_catalog.identifiers import parse_identifiers
from pathway_catalog.models import (
    MatchSet, Pathway, Species, filter_records, partition_by_matches, sort_records
)
from pathway_catalog.service import PathwayCatalogService
from pathway_catalog.session import MappingRequest, MappingSession

__version__ = "1.0.0"
__all__ = [
    "AdapterRegistry",
    "PathwayDatabase",
    "default_registry",
    "TransientCache",
    "CatalogConfig",
    "CatalogError",
    "RecordFormatError",
    "TransportError",
    "parse_identifiers",
    "MatchSet",
    "Pathway",
    "Species",
    "filter_records",
    "partition_by_matches",
    "sort_records",
    "PathwayCatalogService",
    "MappingRequest",
    "MappingSession",
]
