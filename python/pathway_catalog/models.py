"""
Normalized catalog models for pathway-catalog.
Every source converges to these records before anything else sees them.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Set, Tuple, TypeVar, Union


@dataclass(frozen=True)
class Species:
    """
    A species (organism) as listed by one catalog.

    `id` is the source-native key: a numeric database id, a taxonomic
    code, an organism accession or a constructed slug. It is unique
    within a source and opaque across sources.
    """
    id: str
    display_name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {'id': self.id, 'displayName': self.display_name}


@dataclass(frozen=True)
class Pathway:
    """
    A pathway as listed by one catalog for one species.

    `approximate` marks ids synthesized from the species id and a name
    slug: those are not real catalog keys.
    """
    id: str
    display_name: str
    approximate: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'displayName': self.display_name,
            'approximate': self.approximate,
        }


Record = TypeVar('Record', Species, Pathway)

# Pathway ids matched by one identifier-mapping request
MatchSet = FrozenSet[str]

EMPTY_MATCHES: MatchSet = frozenset()


def sort_key(record: Union[Species, Pathway]) -> Tuple[str, str]:
    """
    Case-insensitive ordering, raw name breaks ties.

    Uses `str.casefold()` rather than `locale.strxfrm`, so the order does
    not depend on the process locale.
    """
    return (record.display_name.casefold(), record.display_name)


def sort_records(records: Iterable[Record]) -> List[Record]:
    """
    Deduplicate records by id and sort them by display name.

    The first record seen for an id wins.

    Args:
        records: Parsed records of one fetch result

    Returns:
        New list ordered case-insensitively by display name
    """
    seen: Set[str] = set()
    unique = []
    for record in records:
        if record.id in seen:
            continue
        seen.add(record.id)
        unique.append(record)
    return sorted(unique, key=sort_key)


def filter_records(records: Iterable[Record], query: str) -> List[Record]:
    """Keep records whose display name contains `query`, ignoring case."""
    needle = (query or '').strip().casefold()
    if not needle:
        return list(records)
    return [r for r in records if needle in r.display_name.casefold()]


def partition_by_matches(
    pathways: Iterable[Pathway],
    matches: Iterable[str]
) -> Tuple[List[Pathway], List[Pathway]]:
    """
    Split a pathway list into (highlighted, other).

    Both halves keep the incoming order, so a sorted list stays sorted
    and matched pathways can be shown first.
    """
    match_ids = set(matches)
    highlighted: List[Pathway] = []
    other: List[Pathway] = []
    for pathway in pathways:
        (highlighted if pathway.id in match_ids else other).append(pathway)
    return highlighted, other
