"""
MetaCyc Catalog Adapter for pathway-catalog
Parses the XML listings of the BioCyc web services.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Iterator, List

from pathway_catalog.adapters.base import CatalogAdapter, FetchContext, PathwayDatabase
from pathway_catalog.errors import RecordFormatError, TransportError
from pathway_catalog.models import Pathway, Species, sort_records

SOURCE_LABEL = 'MetaCyc'


def _elements(text: str, tag: str) -> Iterator[ET.Element]:
    """Yield every `tag` element of an XML document, at any depth."""
    if not text.strip():
        return iter(())
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise TransportError(SOURCE_LABEL, f"invalid XML body: {e}") from e
    return root.iter(tag)


def parse_database(element: ET.Element) -> Species:
    """`<ptools-db orgid="ECOLI" name="Escherichia coli K-12"/>` -> Species."""
    org_id = (element.get('orgid') or '').strip()
    name = (element.get('name') or '').strip()
    if not org_id or not name:
        raise RecordFormatError(SOURCE_LABEL, f"ptools-db {element.attrib!r}")
    return Species(id=org_id, display_name=name)


def parse_pathway(element: ET.Element) -> Pathway:
    """`<Pathway ID="ECOLI:GLYCOLYSIS" common-name="glycolysis"/>` -> Pathway."""
    pathway_id = (element.get('ID') or '').strip()
    name = (element.get('common-name') or '').strip()
    if not pathway_id or not name:
        raise RecordFormatError(SOURCE_LABEL, f"Pathway {element.attrib!r}")
    return Pathway(id=pathway_id, display_name=name)


class MetaCycAdapter(CatalogAdapter):
    """Adapter for BioCyc/MetaCyc XML web services."""

    @property
    def source(self) -> PathwayDatabase:
        return PathwayDatabase.METACYC

    @property
    def label(self) -> str:
        return SOURCE_LABEL

    def _url(self, ctx: FetchContext, path: str) -> str:
        return ctx.config.proxied(f"{ctx.config.biocyc_url}/{path}")

    def fetch_species(self, ctx: FetchContext) -> List[Species]:
        text = ctx.client.get_text(self.label, self._url(ctx, 'dbs'))
        species = self._collect(_elements(text, 'ptools-db'), parse_database)
        logging.debug(f"Parsed {len(species)} MetaCyc databases")
        return sort_records(species)

    def fetch_pathways(self, ctx: FetchContext, species_id: str) -> List[Pathway]:
        # 404 means the organism database has no pathway listing
        text = ctx.client.get_text(self.label, self._url(ctx, f'{species_id}/pathways'),
                                   empty_on_404=True)
        return sort_records(self._collect(_elements(text, 'Pathway'), parse_pathway))
