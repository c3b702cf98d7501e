"""
Command line access to the pathway catalogs.

Usage:
    pathway-catalog sources
    pathway-catalog species kegg --search sapiens
    pathway-catalog pathways kegg hsa --genes counts.csv
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pathway_catalog.config import CatalogConfig
from pathway_catalog.errors import CatalogError
from pathway_catalog.identifiers import parse_identifiers
from pathway_catalog.models import filter_records, partition_by_matches
from pathway_catalog.service import PathwayCatalogService

MAX_IDENTIFIERS = 500


def _cmd_sources(service: PathwayCatalogService, args) -> int:
    for source in service.list_sources():
        flags = []
        if service.supports_mapping(source):
            flags.append('mapping')
        if service.is_approximate(source):
            flags.append('approximate')
        print(f"{source.value}\t{','.join(flags)}")
    return 0


def _cmd_species(service: PathwayCatalogService, args) -> int:
    species = filter_records(service.fetch_species(args.source), args.search)
    for s in species:
        print(f"{s.id}\t{s.display_name}")
    return 0


def _cmd_pathways(service: PathwayCatalogService, args) -> int:
    service.select_source(args.source)
    pathways = filter_records(service.fetch_pathways(args.source, args.species), args.search)

    matches = frozenset()
    if args.genes:
        text = Path(args.genes).read_text(encoding='utf-8')
        identifiers = parse_identifiers(text, limit=MAX_IDENTIFIERS)
        matches = service.map_identifiers(args.source, args.species, identifiers)
        logging.info(f"{len(matches)} pathways reference the supplied identifiers")

    highlighted, other = partition_by_matches(pathways, matches)
    for p in highlighted:
        print(f"*\t{p.id}\t{p.display_name}")
    for p in other:
        print(f"\t{p.id}\t{p.display_name}")
    if service.is_approximate(args.source):
        print("# pathway ids are approximate, not catalog keys", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='pathway-catalog',
                                     description='Browse public pathway catalogs')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    sub = parser.add_subparsers(dest='command', required=True)

    p_sources = sub.add_parser('sources', help='list catalog sources')
    p_sources.set_defaults(handler=_cmd_sources)

    p_species = sub.add_parser('species', help='list species of a source')
    p_species.add_argument('source')
    p_species.add_argument('--search', default='', help='substring filter')
    p_species.set_defaults(handler=_cmd_species)

    p_pathways = sub.add_parser('pathways', help='list pathways of a species')
    p_pathways.add_argument('source')
    p_pathways.add_argument('species')
    p_pathways.add_argument('--search', default='', help='substring filter')
    p_pathways.add_argument('--genes', help='CSV/TSV file, identifiers in first column')
    p_pathways.set_defaults(handler=_cmd_pathways)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        config = CatalogConfig.from_env()
    except ValueError as e:
        logging.error(f"Invalid configuration: {e}")
        return 1

    service = PathwayCatalogService(config)
    try:
        return args.handler(service, args)
    except (OSError, UnicodeDecodeError) as e:
        logging.error(f"Could not read identifiers file: {e}")
        return 1
    except (CatalogError, ValueError) as e:
        logging.error(str(e))
        return 1
    finally:
        service.close()


if __name__ == "__main__":
    sys.exit(main())
