"""
Catalog adapters for pathway-catalog
"""

from pathway_catalog.adapters.base import (
    AdapterRegistry,
    CatalogAdapter,
    FetchContext,
    IdentifierMapper,
    PathwayDatabase,
    SourceDescriptor,
    resolve_source,
)
from pathway_catalog.adapters.kegg_adapter import KEGGAdapter
from pathway_catalog.adapters.metacrop_adapter import MetaCropAdapter
from pathway_catalog.adapters.metacyc_adapter import MetaCycAdapter
from pathway_catalog.adapters.panther_adapter import PANTHERAdapter
from pathway_catalog.adapters.reactome_adapter import ReactomeAdapter
from pathway_catalog.adapters.smpdb_adapter import SMPDBAdapter


def default_registry() -> AdapterRegistry:
    """Registry with every known source; Reactome and KEGG also map identifiers."""
    registry = AdapterRegistry()

    reactome = ReactomeAdapter()
    registry.register(reactome, mapper=reactome)
    kegg = KEGGAdapter()
    registry.register(kegg, mapper=kegg)

    registry.register(PANTHERAdapter())
    registry.register(SMPDBAdapter())
    registry.register(MetaCycAdapter())
    registry.register(MetaCropAdapter())
    return registry


__all__ = [
    'AdapterRegistry',
    'CatalogAdapter',
    'FetchContext',
    'IdentifierMapper',
    'PathwayDatabase',
    'SourceDescriptor',
    'resolve_source',
    'default_registry',
    'KEGGAdapter',
    'MetaCropAdapter',
    'MetaCycAdapter',
    'PANTHERAdapter',
    'ReactomeAdapter',
    'SMPDBAdapter',
]
