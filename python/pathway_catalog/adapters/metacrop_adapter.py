"""
MetaCrop Catalog Adapter for pathway-catalog

MetaCrop has no public listing API. Species and pathways below are a
curated enumeration, and pathway ids are built as `{species_id}_{slug}`
following the website's URL scheme. They are approximations, not catalog
keys, and every record is flagged `approximate`.
"""

import re
from typing import List

from pathway_catalog.adapters.base import CatalogAdapter, FetchContext, PathwayDatabase
from pathway_catalog.models import Pathway, Species, sort_records

METACROP_SPECIES = [
    ('bdi', 'Brachypodium distachyon (Purple False Brome)'),
    ('gma', 'Glycine max (Soybean)'),
    ('hvu', 'Hordeum vulgare (Barley)'),
    ('mtr', 'Medicago truncatula (Barrel Medick)'),
    ('osa', 'Oryza sativa (Rice)'),
    ('sly', 'Solanum lycopersicum (Tomato)'),
    ('stu', 'Solanum tuberosum (Potato)'),
    ('zma', 'Zea mays (Maize)'),
]

# Generic pathways available for most MetaCrop species
METACROP_PATHWAYS = [
    'Alanine Metabolism',
    'Arginine and Proline Metabolism',
    'Aspartate and Glutamate Metabolism',
    'C4-Dicarboxylic Acid Cycle',
    'Calvin Cycle',
    'Cysteine and Methionine Metabolism',
    'Fatty Acid Biosynthesis',
    'Glycolysis',
    'Glyoxylate Cycle',
    'Histidine Metabolism',
    'Photorespiration',
    'Starch Biosynthesis',
    'Sucrose Biosynthesis',
    'TCA Cycle',
    'Threonine and Lysine Metabolism',
    'Valine, Leucine, and Isoleucine Metabolism',
]

_STOPWORDS = {'and'}


def slugify(name: str) -> str:
    """'Arginine and Proline Metabolism' -> 'arginine_proline_metabolism'."""
    words = re.findall(r'[a-z0-9]+', name.lower())
    return '_'.join(w for w in words if w not in _STOPWORDS)


class MetaCropAdapter(CatalogAdapter):
    """Curated MetaCrop listings. No network access."""

    approximate = True

    @property
    def source(self) -> PathwayDatabase:
        return PathwayDatabase.METACROP

    @property
    def label(self) -> str:
        return 'MetaCrop'

    def fetch_species(self, ctx: FetchContext) -> List[Species]:
        return sort_records(Species(id=k, display_name=v) for k, v in METACROP_SPECIES)

    def fetch_pathways(self, ctx: FetchContext, species_id: str) -> List[Pathway]:
        if species_id not in dict(METACROP_SPECIES):
            return []
        return sort_records(
            Pathway(id=f"{species_id}_{slugify(name)}", display_name=name, approximate=True)
            for name in METACROP_PATHWAYS
        )
