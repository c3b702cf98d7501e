"""
Unit tests for the per-source catalog adapters.

Each source is fed its own wire format through a fake session.
"""

import pytest

from pathway_catalog.adapters import (
    KEGGAdapter,
    MetaCropAdapter,
    MetaCycAdapter,
    PANTHERAdapter,
    PathwayDatabase,
    ReactomeAdapter,
    SMPDBAdapter,
)
from pathway_catalog.adapters.metacrop_adapter import slugify
from pathway_catalog.cache import GLOBAL_KEY
from pathway_catalog.errors import TransportError
from pathway_catalog.models import Pathway, Species

REACTOME = 'https://reactome.org/ContentService'
KEGG = 'https://rest.kegg.jp'
PANTHER = 'http://pantherdb.org/services/rest'
SMPDB = 'https://smpdb.ca'
BIOCYC = 'https://websvc.biocyc.org'


def assert_sorted_unique(records):
    ids = [r.id for r in records]
    names = [r.display_name.casefold() for r in records]
    assert len(ids) == len(set(ids))
    assert names == sorted(names)


class TestReactomeAdapter:
    """Flat JSON arrays keyed by numeric dbId / stId."""

    def test_species_normalized_and_sorted(self, ctx, session):
        session.add('GET', f'{REACTOME}/data/species/all', 200, [
            {'dbId': 48892, 'displayName': 'Mus musculus'},
            {'dbId': 48887, 'displayName': 'Homo sapiens'},
            {'dbId': 'x', 'displayName': 'Broken'},
            {'dbId': 170905, 'displayName': 'arabidopsis thaliana'},
            {'dbId': 48887, 'displayName': 'Duplicate'},
            None,
        ])

        species = ReactomeAdapter().fetch_species(ctx)

        assert species == [
            Species('170905', 'arabidopsis thaliana'),
            Species('48887', 'Homo sapiens'),
            Species('48892', 'Mus musculus'),
        ]

    def test_pathways(self, ctx, session):
        session.add('GET', f'{REACTOME}/data/pathways/low/species/48887', 200, [
            {'stId': 'R-HSA-1640170', 'displayName': 'Cell Cycle'},
            {'stId': 'R-HSA-109581', 'displayName': 'Apoptosis'},
            {'displayName': 'No id'},
        ])

        pathways = ReactomeAdapter().fetch_pathways(ctx, '48887')

        assert [p.id for p in pathways] == ['R-HSA-109581', 'R-HSA-1640170']

    def test_pathways_404_is_empty(self, ctx, session):
        session.add('GET', f'{REACTOME}/data/pathways/low/species/999', 404, 'Not found')

        assert ReactomeAdapter().fetch_pathways(ctx, '999') == []

    def test_pathways_500_raises(self, ctx, session):
        session.add('GET', f'{REACTOME}/data/pathways/low/species/48887', 500, 'error')

        with pytest.raises(TransportError):
            ReactomeAdapter().fetch_pathways(ctx, '48887')

    def test_species_failure_raises(self, ctx, session):
        session.add('GET', f'{REACTOME}/data/species/all', 503, '')

        with pytest.raises(TransportError):
            ReactomeAdapter().fetch_species(ctx)


class TestKEGGAdapter:
    """Tab-separated plain-text listings."""

    def test_species_use_organism_code(self, ctx, session):
        session.add('GET', f'{KEGG}/list/organism', 200,
                    "T01001\thsa\tHomo sapiens (human)\tEukaryotes;Animals\n"
                    "T01002\tptr\tPan troglodytes (chimpanzee)\tEukaryotes;Animals\n"
                    "garbage line\n"
                    "T00005\tsce\tSaccharomyces cerevisiae\tEukaryotes;Fungi\n")

        species = KEGGAdapter().fetch_species(ctx)

        assert [s.id for s in species] == ['hsa', 'ptr', 'sce']
        assert species[0].display_name == 'Homo sapiens (human)'

    def test_pathways_strip_prefix(self, ctx, session):
        session.add('GET', f'{KEGG}/list/pathway/hsa', 200,
                    "path:hsa04110\tCell cycle - Homo sapiens (human)\n"
                    "path:hsa00010\tGlycolysis / Gluconeogenesis - Homo sapiens (human)\n"
                    "hsa04210\tApoptosis - Homo sapiens (human)\n")

        pathways = KEGGAdapter().fetch_pathways(ctx, 'hsa')

        assert [p.id for p in pathways] == ['hsa04210', 'hsa04110', 'hsa00010']
        assert_sorted_unique(pathways)

    def test_empty_body_is_empty(self, ctx, session):
        session.add('GET', f'{KEGG}/list/pathway/xyz', 200, "\n")

        assert KEGGAdapter().fetch_pathways(ctx, 'xyz') == []

    def test_pathways_500_raises(self, ctx, session):
        session.add('GET', f'{KEGG}/list/pathway/hsa', 500, '')

        with pytest.raises(TransportError):
            KEGGAdapter().fetch_pathways(ctx, 'hsa')

    def test_proxy_prefix(self, ctx, session):
        """A configured proxy is prepended to every KEGG URL."""
        from dataclasses import replace
        ctx.config = replace(ctx.config, proxy_url='https://proxy/?')
        session.add('GET', f'https://proxy/?{KEGG}/list/organism', 200, "T01001\thsa\tHomo sapiens\n")

        assert KEGGAdapter().fetch_species(ctx) == [Species('hsa', 'Homo sapiens')]


class TestPANTHERAdapter:
    """Nested search.*_list.* JSON."""

    def test_species(self, ctx, session):
        session.add('GET', f'{PANTHER}/organism/list', 200, {
            'search': {'organism_list': {'organism': [
                {'taxon_id': 10090, 'long_name': 'Mus musculus'},
                {'taxon_id': 9606, 'long_name': 'Homo sapiens'},
                {'taxon_id': 7227},
            ]}}
        })

        species = PANTHERAdapter().fetch_species(ctx)

        assert species == [Species('9606', 'Homo sapiens'), Species('10090', 'Mus musculus')]

    def test_pathways_scoped_by_query_param(self, ctx, session):
        url = f'{PANTHER}/pathway/pathwaysForOrganism'
        session.add('GET', url, 200, {
            'search': {'pathway_list': {'pathway': [
                {'id': 'P00004', 'name': 'Alzheimer disease-presenilin pathway'},
                {'id': 'P00005', 'name': 'Angiogenesis'},
            ]}}
        })

        pathways = PANTHERAdapter().fetch_pathways(ctx, '9606')

        assert [p.id for p in pathways] == ['P00004', 'P00005']
        assert session.calls[0]['params'] == {'organism': '9606'}

    def test_single_pathway_object(self, ctx, session):
        session.add('GET', f'{PANTHER}/pathway/pathwaysForOrganism', 200, {
            'search': {'pathway_list': {'pathway': {'id': 'P00001', 'name': 'Adrenaline'}}}
        })

        assert PANTHERAdapter().fetch_pathways(ctx, '9606') == [Pathway('P00001', 'Adrenaline')]

    def test_missing_nested_path_is_empty_and_logged_once(self, ctx, session, caplog):
        session.add('GET', f'{PANTHER}/pathway/pathwaysForOrganism', 200, {'search': {}})
        adapter = PANTHERAdapter()

        assert adapter.fetch_pathways(ctx, '1') == []
        assert adapter.fetch_pathways(ctx, '2') == []

        warnings = [r for r in caplog.records if 'PANTHER' in r.getMessage()]
        assert len(warnings) == 1

    def test_pathways_500_raises(self, ctx, session):
        session.add('GET', f'{PANTHER}/pathway/pathwaysForOrganism', 500, '')

        with pytest.raises(TransportError):
            PANTHERAdapter().fetch_pathways(ctx, '9606')


SMPDB_CATALOG = [
    {'smp_id': 'SMP0000055', 'name': 'Glycolysis', 'species_taxonomy_id': '9606',
     'species_name': 'Homo sapiens'},
    {'smp_id': 'SMP0000057', 'name': 'Citric Acid Cycle', 'species_taxonomy_id': '9606',
     'species_name': 'Homo sapiens'},
    {'smp_id': 'SMP0002034', 'name': 'Glycolysis', 'species_taxonomy_id': '10090',
     'species_name': 'Mus musculus'},
    {'smp_id': 'SMP0009999', 'species_taxonomy_id': '10090', 'species_name': 'Mus musculus'},
    {'smp_id': 'SMP0000001', 'name': 'Orphan'},
]


class TestSMPDBAdapter:
    """One global JSON array pivoted client-side."""

    def test_species_pivot(self, ctx, session):
        session.add('GET', f'{SMPDB}/pathways.json', 200, SMPDB_CATALOG)

        species = SMPDBAdapter().fetch_species(ctx)

        assert species == [Species('9606', 'Homo sapiens'), Species('10090', 'Mus musculus')]

    def test_pathways_filtered_by_taxonomy(self, ctx, session):
        session.add('GET', f'{SMPDB}/pathways.json', 200, SMPDB_CATALOG)

        pathways = SMPDBAdapter().fetch_pathways(ctx, '9606')

        assert pathways == [Pathway('SMP0000057', 'Citric Acid Cycle'),
                            Pathway('SMP0000055', 'Glycolysis')]

    def test_catalog_fetched_once(self, ctx, session):
        """Species and every species' pathways share one download."""
        session.add('GET', f'{SMPDB}/pathways.json', 200, SMPDB_CATALOG)
        adapter = SMPDBAdapter()

        adapter.fetch_species(ctx)
        adapter.fetch_pathways(ctx, '9606')
        adapter.fetch_pathways(ctx, '10090')

        assert session.count('GET', f'{SMPDB}/pathways.json') == 1
        assert (PathwayDatabase.SMPDB, GLOBAL_KEY) in ctx.cache

    def test_species_without_data(self, ctx, session):
        session.add('GET', f'{SMPDB}/pathways.json', 200, SMPDB_CATALOG)

        assert SMPDBAdapter().fetch_pathways(ctx, '7955') == []

    def test_500_raises(self, ctx, session):
        session.add('GET', f'{SMPDB}/pathways.json', 500, '')

        with pytest.raises(TransportError):
            SMPDBAdapter().fetch_pathways(ctx, '9606')


class TestMetaCycAdapter:
    """XML listings."""

    def test_species(self, ctx, session):
        session.add('GET', f'{BIOCYC}/dbs', 200, """<?xml version="1.0"?>
<ptools-dbs>
  <ptools-db orgid="META" name="MetaCyc"/>
  <ptools-db orgid="ECOLI" name="Escherichia coli K-12 substr. MG1655"/>
  <ptools-db orgid="BROKEN"/>
</ptools-dbs>""")

        species = MetaCycAdapter().fetch_species(ctx)

        assert species == [
            Species('ECOLI', 'Escherichia coli K-12 substr. MG1655'),
            Species('META', 'MetaCyc'),
        ]

    def test_pathways(self, ctx, session):
        session.add('GET', f'{BIOCYC}/ECOLI/pathways', 200, """<ptools-xml>
  <Pathway ID="ECOLI:TCA" common-name="TCA cycle I (prokaryotic)"/>
  <Pathway ID="ECOLI:GLYCOLYSIS" common-name="glycolysis I"/>
  <Pathway ID="ECOLI:NONAME"/>
</ptools-xml>""")

        pathways = MetaCycAdapter().fetch_pathways(ctx, 'ECOLI')

        assert [p.id for p in pathways] == ['ECOLI:GLYCOLYSIS', 'ECOLI:TCA']

    def test_pathways_404_is_empty(self, ctx, session):
        session.add('GET', f'{BIOCYC}/NOPE/pathways', 404, '')

        assert MetaCycAdapter().fetch_pathways(ctx, 'NOPE') == []

    def test_pathways_500_raises(self, ctx, session):
        session.add('GET', f'{BIOCYC}/ECOLI/pathways', 500, '')

        with pytest.raises(TransportError):
            MetaCycAdapter().fetch_pathways(ctx, 'ECOLI')

    def test_invalid_xml_raises(self, ctx, session):
        session.add('GET', f'{BIOCYC}/dbs', 200, '<ptools-dbs><unclosed>')

        with pytest.raises(TransportError):
            MetaCycAdapter().fetch_species(ctx)


class TestMetaCropAdapter:
    """Curated listings, no network."""

    def test_species_without_network(self, ctx, session):
        species = MetaCropAdapter().fetch_species(ctx)

        assert len(species) == 8
        assert_sorted_unique(species)
        assert session.calls == []

    def test_pathway_ids_are_synthesized_and_flagged(self, ctx):
        pathways = MetaCropAdapter().fetch_pathways(ctx, 'osa')

        ids = {p.id for p in pathways}
        assert 'osa_calvin_cycle' in ids
        assert 'osa_arginine_proline_metabolism' in ids
        assert 'osa_valine_leucine_isoleucine_metabolism' in ids
        assert all(p.approximate for p in pathways)
        assert_sorted_unique(pathways)

    def test_unknown_species_is_empty(self, ctx):
        assert MetaCropAdapter().fetch_pathways(ctx, 'hsa') == []

    def test_adapter_is_flagged_approximate(self):
        assert MetaCropAdapter.approximate is True
        assert ReactomeAdapter.approximate is False

    def test_slugify(self):
        assert slugify('C4-Dicarboxylic Acid Cycle') == 'c4_dicarboxylic_acid_cycle'
        assert slugify('TCA Cycle') == 'tca_cycle'
