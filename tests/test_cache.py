"""
Unit tests for the transient cache.
"""

from pathway_catalog.adapters import PathwayDatabase
from pathway_catalog.cache import GLOBAL_KEY, TransientCache


class TestTransientCache:
    """Test memoization and invalidation."""

    def test_get_or_fetch_calls_once(self):
        """The fetch callable runs only on the first miss."""
        cache = TransientCache()
        calls = []

        def fetch():
            calls.append(1)
            return ['value']

        first = cache.get_or_fetch(('kegg',), fetch)
        second = cache.get_or_fetch(('kegg',), fetch)

        assert first == second == ['value']
        assert len(calls) == 1
        assert cache.hits == 1

    def test_empty_result_is_cached(self):
        """An empty list is a valid result and is not refetched."""
        cache = TransientCache()
        calls = []

        def fetch():
            calls.append(1)
            return []

        cache.get_or_fetch(('reactome', '48887'), fetch)
        cache.get_or_fetch(('reactome', '48887'), fetch)

        assert len(calls) == 1

    def test_set_overwrites(self):
        cache = TransientCache()
        cache.set(('kegg',), ['old'])
        cache.set(('kegg',), ['new'])

        assert cache.get(('kegg',)) == ['new']

    def test_invalidate_drops_one_source(self):
        """Invalidation removes every key of a source and nothing else."""
        cache = TransientCache()
        cache.set((PathwayDatabase.SMPDB,), ['species'])
        cache.set((PathwayDatabase.SMPDB, GLOBAL_KEY), ['catalog'])
        cache.set((PathwayDatabase.SMPDB, '9606'), ['pathways'])
        cache.set((PathwayDatabase.KEGG,), ['kegg species'])

        removed = cache.invalidate(PathwayDatabase.SMPDB)

        assert removed == 3
        assert len(cache) == 1
        assert (PathwayDatabase.KEGG,) in cache

    def test_clear(self):
        cache = TransientCache()
        cache.set(('a',), 1)
        cache.set(('b',), 2)

        cache.clear()

        assert len(cache) == 0
        assert cache.get(('a',)) is None
