"""
Tests for sample/gene selector construction and annotation lookups.
"""

import warnings

import pandas as pd
import pytest

from isoplotter.core.annotations import AnnotationTable
from isoplotter.core.errors import AmbiguousSelectorWarning, UsageError
from isoplotter.core.selection import (
    AllSamples,
    ExplicitSamples,
    GeneSymbols,
    IsoformIds,
    MetadataSamples,
    build_gene_selection,
    build_sample_selection,
)


class TestSampleSelection:
    """The four argument combinations, plus return_all."""

    def test_neither_selects_all(self, caplog):
        with caplog.at_level("WARNING"):
            selection = build_sample_selection()

        assert isinstance(selection, AllSamples)
        assert "all samples" in caplog.text
        assert selection.requested(pd.Index(['S1', 'S2'])) == ['S1', 'S2']

    def test_explicit_only(self):
        selection = build_sample_selection(sample_ids=['S2', 'S1', 'S2'])

        assert selection == ExplicitSamples(ids=('S2', 'S1'))

    def test_single_string_sample(self):
        selection = build_sample_selection(sample_ids='S1')
        assert selection == ExplicitSamples(ids=('S1',))

    def test_metadata_only(self):
        metadata = pd.DataFrame({'sample_id': ['S1', 'S3'], 'group': ['a', 'b']})
        selection = build_sample_selection(samples_metadata=metadata)

        assert isinstance(selection, MetadataSamples)
        assert selection.requested(pd.Index(['S1'])) == ['S1', 'S3']

    def test_metadata_without_sample_id_column(self):
        metadata = pd.DataFrame({'id': ['S1']})
        with pytest.raises(UsageError, match="no column named 'sample_id'"):
            build_sample_selection(samples_metadata=metadata)

    def test_custom_sample_id_column(self):
        metadata = pd.DataFrame({'Sample': ['S2']})
        selection = build_sample_selection(samples_metadata=metadata, sample_id_column='Sample')
        assert selection.requested(pd.Index([])) == ['S2']

    def test_both_prefers_metadata(self):
        metadata = pd.DataFrame({'sample_id': ['S1']})
        with pytest.warns(AmbiguousSelectorWarning, match="metadata"):
            selection = build_sample_selection(sample_ids=['S2'], samples_metadata=metadata)

        assert isinstance(selection, MetadataSamples)
        assert selection.requested(pd.Index([])) == ['S1']

    def test_return_all_overrides_selectors(self):
        with pytest.warns(AmbiguousSelectorWarning, match="return_all"):
            selection = build_sample_selection(sample_ids=['S2'], return_all=True)
        assert isinstance(selection, AllSamples)

    def test_return_all_alone_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert isinstance(build_sample_selection(return_all=True), AllSamples)


class TestGeneSelection:

    def test_neither_is_usage_error(self):
        with pytest.raises(UsageError, match="Either genes or isoforms"):
            build_gene_selection()

    def test_genes_only(self):
        assert build_gene_selection(genes=['SPP1']) == GeneSymbols(symbols=('SPP1',))

    def test_isoforms_only(self):
        assert build_gene_selection(isoforms='ENST1') == IsoformIds(ids=('ENST1',))

    def test_both_prefers_isoforms(self):
        with pytest.warns(AmbiguousSelectorWarning):
            selection = build_gene_selection(genes=['SPP1'], isoforms=['ENST1'])
        assert selection == IsoformIds(ids=('ENST1',))


class TestAnnotationTable:

    def test_missing_columns(self):
        with pytest.raises(UsageError, match="gene_symbol"):
            AnnotationTable(pd.DataFrame({'isoform': ['A'], 'entrez_id': [1]}))

    def test_isoforms_for_genes(self, scenario_annotation_table):
        assert scenario_annotation_table.isoforms_for_genes(['GENE1']) == ['A', 'B']
        assert scenario_annotation_table.isoforms_for_genes(['GENE2', 'NOPE']) == ['C']
        assert scenario_annotation_table.isoforms_for_genes([]) == []

    def test_lookup_does_not_mutate_input(self, scenario_annotations):
        before = scenario_annotations.copy()
        table = AnnotationTable(scenario_annotations)
        table.isoforms_for_genes(['GENE1'])
        pd.testing.assert_frame_equal(scenario_annotations, before)

    def test_known_isoforms_and_symbols(self, scenario_annotation_table):
        assert scenario_annotation_table.known_isoforms().tolist() == ['A', 'B', 'C']
        assert scenario_annotation_table.known_symbols().tolist() == ['GENE1', 'GENE2']

    def test_genes_for_isoforms(self, scenario_annotation_table):
        genes = scenario_annotation_table.genes_for_isoforms(['C', 'A'])
        assert genes.loc['C', 'gene_symbol'] == 'GENE2'
        assert set(genes.index) == {'A', 'C'}
