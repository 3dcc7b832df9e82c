import pandas as pd
import pytest

from genopage.assembly import Assembly, HG38_CHROM_SIZES
from genopage.error import InvalidInputError
from genopage.page import Page
from genopage.plot.genes import collapse_genes, plot_genes, plot_transcripts
from genopage.readers import read_gene_table

from ...util import get_data, svg_elements

GENES = get_data('genes.tsv')
REGION = dict(chrom='chr21', chromstart=28000000, chromend=28400000)


@pytest.fixture
def page():
    return Page(8.5, 11, showguides=False)


class TestCollapseGenes:
    def test_union_of_exons(self):
        genes = collapse_genes(read_gene_table(GENES))
        assert genes['gene_id'].tolist() == ['G1', 'G2', 'G3', 'G4']
        assert genes['label'].tolist() == ['GENEA', 'GENEB', 'GENEC', 'GENED']
        first = genes.iloc[0]
        assert (first.start, first.end) == (28000000, 28050000)
        assert [(e.start, e.end) for e in first.exons] == [
            (28000000, 28005000), (28010000, 28015000), (28020000, 28025000), (28040000, 28050000)]

    def test_missing_display_column(self):
        transcripts = read_gene_table(GENES).drop(columns=['gene_name'])
        genes = collapse_genes(transcripts)
        assert genes['label'].tolist() == ['G1', 'G2', 'G3', 'G4']

    def test_empty(self):
        genes = collapse_genes(read_gene_table(GENES).iloc[0:0])
        assert not len(genes.index)


class TestPlotGenes:
    def test_genes(self, page):
        plot = plot_genes(page, gene_table=GENES, x=1, y=1, width=4, height=1, **REGION)
        assert plot.genes['label'].tolist() == ['GENEA', 'GENEB', 'GENEC']
        assert len(svg_elements(plot.group, 'gene')) == 3
        assert len(svg_elements(plot.group, 'strand_label')) == 2
        assert len(svg_elements(plot.group, 'exon')) == 7
        # the strand label covers the start of the plus strand track
        labels = [label.text for label in svg_elements(plot.group, 'label')]
        assert sorted(labels) == ['GENEB', 'GENEC']

    def test_without_strand_labels(self, page):
        plot = plot_genes(page, gene_table=GENES, strand_labels=False, x=1, y=1, width=4, height=1, **REGION)
        assert not svg_elements(plot.group, 'strand_label')
        assert len(svg_elements(plot.group, 'label')) == 3

    def test_highlights(self, page):
        plot = plot_genes(
            page, gene_table=GENES, gene_highlights={'GENEB': '#ff0000'}, x=1, y=1, width=4, height=1, **REGION)
        fills = {}
        for gene in svg_elements(plot.group, 'gene'):
            for exon in svg_elements(gene, 'exon'):
                fills.setdefault(exon['fill'], 0)
                fills[exon['fill']] += 1
        assert fills == {'#ff0000': 2, '#bdbdbd': 5}

    def test_highlight_data_frame(self, page):
        highlights = pd.DataFrame({'gene': ['GENEA'], 'color': ['#00ff00']})
        plot = plot_genes(page, gene_table=GENES, gene_highlights=highlights, x=1, y=1, width=4, height=1, **REGION)
        fills = [exon['fill'] for exon in svg_elements(plot.group, 'exon')]
        assert fills.count('#00ff00') == 4

    def test_strand_colors(self, page):
        plot = plot_genes(
            page, gene_table=GENES, fill=['#111111', '#222222'], x=1, y=1, width=4, height=1, **REGION)
        fills = set([exon['fill'] for exon in svg_elements(plot.group, 'exon')])
        assert fills == {'#111111', '#222222'}

    def test_assembly_gene_table(self):
        assembly = Assembly('custom', HG38_CHROM_SIZES, gene_table=GENES)
        plot = plot_genes(None, assembly=assembly, **REGION)
        assert len(plot.genes.index) == 3

    def test_no_gene_table(self):
        with pytest.raises(InvalidInputError):
            plot_genes(None, **REGION)

    def test_missing_chrom(self):
        with pytest.raises(InvalidInputError):
            plot_genes(None, gene_table=GENES)

    def test_no_genes(self, page):
        with pytest.warns(UserWarning, match='No data found'):
            plot_genes(page, gene_table=GENES, chrom='chr1', chromstart=1, chromend=1000, x=1, y=1, width=4, height=1)


class TestPlotTranscripts:
    def test_rows(self, page):
        plot = plot_transcripts(page, gene_table=GENES, x=1, y=1, width=4, height=1, **REGION)
        assert plot.transcripts['transcript_id'].tolist() == ['T1', 'T2', 'T3', 'T4']
        assert plot.rows == 2
        assert len(svg_elements(plot.group, 'transcript')) == 4
        labels = sorted([label.text for label in svg_elements(plot.group, 'label')])
        assert labels == ['T1', 'T2', 'T3', 'T4']

    def test_gene_labels(self, page):
        plot = plot_transcripts(page, gene_table=GENES, labels='gene', x=1, y=1, width=4, height=1, **REGION)
        labels = sorted([label.text for label in svg_elements(plot.group, 'label')])
        assert labels == ['GENEA', 'GENEA', 'GENEB', 'GENEC']

    def test_both_labels(self, page):
        plot = plot_transcripts(page, gene_table=GENES, labels='both', x=1, y=1, width=4, height=1, **REGION)
        labels = [label.text for label in svg_elements(plot.group, 'label')]
        assert 'GENEB:T3' in labels

    def test_no_labels(self, page):
        plot = plot_transcripts(page, gene_table=GENES, labels=None, x=1, y=1, width=4, height=1, **REGION)
        assert not svg_elements(plot.group, 'label')

    def test_not_enough_space(self, page):
        with pytest.warns(UserWarning, match='Not enough plotting space'):
            plot = plot_transcripts(page, gene_table=GENES, x=1, y=1, width=4, height=(8, 'mm'), **REGION)
        assert plot.rows == 1
        assert len(svg_elements(plot.group, 'transcript')) == 3

    def test_single_exon(self, page):
        plot = plot_transcripts(page, gene_table=GENES, chrom='chr21', chromstart=28290000, chromend=28330000,
                                x=1, y=1, width=4, height=1)
        assert len(svg_elements(plot.group, 'exon')) == 1

    def test_bad_labels(self):
        with pytest.raises(InvalidInputError):
            plot_transcripts(None, gene_table=GENES, labels='name', **REGION)

    def test_unplaced(self):
        plot = plot_transcripts(None, gene_table=GENES, **REGION)
        assert plot.rows == 0
        assert plot.group is None
