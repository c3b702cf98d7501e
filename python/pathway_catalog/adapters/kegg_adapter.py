"""
KEGG Catalog Adapter for pathway-catalog
Parses the tab-separated KEGG REST listings and maps gene identifiers to
pathways in two phases: a bounded fan-out of gene lookups followed by a
single batched link request.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence
from urllib.parse import quote

from pathway_catalog.adapters.base import (
    CatalogAdapter, FetchContext, IdentifierMapper, PathwayDatabase
)
from pathway_catalog.errors import CatalogError, RecordFormatError
from pathway_catalog.models import MatchSet, Pathway, Species, sort_records

SOURCE_LABEL = 'KEGG'
PATHWAY_PREFIX = 'path:'

# Characters that would break the `+`-joined link URL
_LINK_UNSAFE = set('+/?#% \t')


def strip_prefix(value: str, prefix: str = PATHWAY_PREFIX) -> str:
    """'path:hsa04110' -> 'hsa04110'; values without the prefix pass through."""
    return value[len(prefix):] if value.startswith(prefix) else value


def _lines(text: str) -> List[str]:
    return [line for line in text.strip().split('\n') if line.strip()]


def parse_organism_line(line: str) -> Species:
    """`T01001<TAB>hsa<TAB>Homo sapiens (human)<TAB>lineage` -> Species('hsa', ...)."""
    parts = line.rstrip('\r').split('\t')
    if len(parts) < 3 or not parts[1].strip() or not parts[2].strip():
        raise RecordFormatError(SOURCE_LABEL, f"organism line {line!r}")
    return Species(id=parts[1].strip(), display_name=parts[2].strip())


def parse_pathway_line(line: str) -> Pathway:
    """`path:hsa00010<TAB>Glycolysis / Gluconeogenesis` -> Pathway('hsa00010', ...)."""
    parts = line.rstrip('\r').split('\t')
    if len(parts) < 2 or not parts[0].strip() or not parts[1].strip():
        raise RecordFormatError(SOURCE_LABEL, f"pathway line {line!r}")
    return Pathway(id=strip_prefix(parts[0].strip()), display_name=parts[1].strip())


class KEGGAdapter(CatalogAdapter, IdentifierMapper):
    """Adapter for the KEGG REST API (plain-text listings)."""

    @property
    def source(self) -> PathwayDatabase:
        return PathwayDatabase.KEGG

    @property
    def label(self) -> str:
        return SOURCE_LABEL

    def _url(self, ctx: FetchContext, path: str) -> str:
        return ctx.config.proxied(f"{ctx.config.kegg_url}/{path}")

    def fetch_species(self, ctx: FetchContext) -> List[Species]:
        text = ctx.client.get_text(self.label, self._url(ctx, 'list/organism'))
        return sort_records(self._collect(_lines(text), parse_organism_line))

    def fetch_pathways(self, ctx: FetchContext, species_id: str) -> List[Pathway]:
        text = ctx.client.get_text(self.label, self._url(ctx, f'list/pathway/{species_id}'))
        if not text.strip():
            return []
        return sort_records(self._collect(_lines(text), parse_pathway_line))

    # ------------------------------------------------------------------
    # Identifier mapping
    # ------------------------------------------------------------------

    def _find_gene(self, ctx: FetchContext, species_id: str, identifier: str) -> List[str]:
        """
        Phase 1 lookup for one identifier.

        Returns the KEGG gene ids of the active species only. A failed
        lookup contributes nothing instead of aborting the batch.
        """
        url = self._url(ctx, f"find/genes/{quote(identifier, safe='')}")
        try:
            text = ctx.client.get_text(self.label, url, empty_on_404=True)
        except CatalogError as e:
            logging.warning(f"KEGG gene lookup failed for {identifier}: {e}")
            return []

        prefix = f"{species_id}:"
        genes = []
        for line in _lines(text):
            gene_id = line.split('\t')[0].strip()
            if gene_id.startswith(prefix):
                genes.append(gene_id)
        return genes

    def resolve_genes(self, ctx: FetchContext, species_id: str,
                      identifiers: Sequence[str],
                      max_workers: Optional[int] = None) -> List[str]:
        """
        Resolve identifiers to KEGG gene ids of one species.

        Lookups run in parallel on a pool bounded by `max_lookup_workers`,
        however many identifiers are supplied.

        Returns:
            Deduplicated gene ids in identifier order
        """
        if not identifiers:
            return []

        workers = min(max_workers or ctx.config.max_lookup_workers, len(identifiers))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._find_gene, ctx, species_id, identifier)
                for identifier in identifiers
            ]
            found: Dict[str, None] = {}
            for future in futures:
                for gene_id in future.result():
                    found.setdefault(gene_id, None)

        gene_ids = []
        for gene_id in found:
            if _LINK_UNSAFE.intersection(gene_id):
                logging.warning(f"Skipping KEGG gene id with reserved characters: {gene_id!r}")
                continue
            gene_ids.append(gene_id)
        return gene_ids

    def link_pathways(self, ctx: FetchContext, gene_ids: Sequence[str]) -> MatchSet:
        """
        Phase 2: one request linking every gene id to its pathways.

        A 404 means no links exist. Other failures raise TransportError.
        """
        if not gene_ids:
            return frozenset()

        url = self._url(ctx, f"link/pathway/{'+'.join(gene_ids)}")
        text = ctx.client.get_text(self.label, url, empty_on_404=True)

        matches = set()
        for line in _lines(text):
            parts = line.split('\t')
            if len(parts) > 1 and parts[1].strip():
                matches.add(strip_prefix(parts[1].strip()))
        return frozenset(matches)

    def map_identifiers(self, ctx: FetchContext, species_id: str,
                        identifiers: Sequence[str]) -> MatchSet:
        if not species_id or not identifiers:
            return frozenset()

        gene_ids = self.resolve_genes(ctx, species_id, identifiers)
        if not gene_ids:
            logging.info(f"No KEGG genes resolved for {len(identifiers)} identifiers in {species_id}")
            return frozenset()

        matches = self.link_pathways(ctx, gene_ids)
        logging.info(
            f"KEGG mapped {len(identifiers)} identifiers ({len(gene_ids)} genes) "
            f"to {len(matches)} pathways"
        )
        return matches
