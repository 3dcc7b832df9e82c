import pandas as pd
import pytest

from genopage.assembly import parse_assembly
from genopage.colors import colorby
from genopage.error import InvalidInputError
from genopage.page import Page
from genopage.plot.manhattan import chrom_offsets, plot_manhattan

from ...util import svg_elements


@pytest.fixture
def page():
    return Page(8.5, 11, showguides=False)


@pytest.fixture
def gwas():
    return pd.DataFrame({
        'chrom': ['chr1', 'chr1', 'chr2', 'chr21', 'chr21'],
        'pos': [1000000, 2000000, 500000, 28100000, 28200000],
        'p': [0.5, 1e-9, 0.01, 2e-10, 0.2],
        'snp': ['rs1', 'rs2', 'rs3', 'rs4', 'rs5'],
    })


class TestChromOffsets:
    def test_offsets(self):
        assembly = parse_assembly('hg38')
        offsets, mapping, total = chrom_offsets(assembly, ['chr21', 'chr2', 'chr1'])
        assert list(offsets.keys()) == ['chr1', 'chr2', 'chr21']
        assert offsets['chr1'] == 0
        assert offsets['chr2'] == 254335021
        assert offsets['chr21'] == 501907149
        assert total == 548617132
        assert mapping.convert_pos(254335021 + 10) == 10

    def test_no_space(self):
        assembly = parse_assembly('hg38')
        offsets, _, total = chrom_offsets(assembly, ['chr1', 'chr2'], space=0)
        assert offsets['chr2'] == 248956422
        assert total == 248956422 + 242193529


class TestPlotManhattan:
    def test_whole_genome(self, page, gwas):
        plot = plot_manhattan(page, data=gwas, x=1, y=1, width=4, height=1)
        assert plot.chrom is None
        assert (plot.chromstart, plot.chromend) == (0, 548617132)
        assert sorted(plot.chrom_offsets.keys()) == ['chr1', 'chr2', 'chr21']
        assert plot.range == pytest.approx((0, 9.69897), abs=1e-5)
        assert len(svg_elements(plot.group, 'variant')) == 5

    def test_region(self, page, gwas):
        plot = plot_manhattan(
            page, data=gwas, chrom='chr21', chromstart=28000000, chromend=28300000, x=1, y=1, width=4, height=1)
        assert plot.chrom_offsets is None
        assert plot.gwas['snp'].tolist() == ['rs4', 'rs5']
        assert len(svg_elements(plot.group, 'variant')) == 2

    def test_density_compares_all_drawn_points(self, page):
        data = pd.DataFrame({
            'chrom': ['chr1', 'chr1', 'chr1'],
            'pos': [1000000, 200000000, 1000000],
            'p': [1e-5, 1.1e-5, 1.2e-5],
            'snp': ['a', 'b', 'c'],
        })
        # every variant is clamped to the top of the range so a and c share a center
        plot = plot_manhattan(page, data=data, chrom='chr1', range=(0, 4), x=1, y=1, width=4, height=1)
        assert len(svg_elements(plot.group, 'variant')) == 2

    def test_density_threshold(self, page):
        data = pd.DataFrame({
            'chrom': ['chr1', 'chr1'], 'pos': [1000000, 1100000], 'p': [1e-5, 1e-5], 'snp': ['a', 'b'],
        })
        plot = plot_manhattan(page, data=data, chrom='chr1', x=1, y=1, width=4, height=1)
        assert len(svg_elements(plot.group, 'variant')) == 1
        plot = plot_manhattan(page, data=data, chrom='chr1', density=1, x=1, y='b0.1', width=4, height=1)
        assert len(svg_elements(plot.group, 'variant')) == 2

    def test_lead_snp(self, page, gwas):
        plot = plot_manhattan(page, data=gwas, lead_snp={}, x=1, y=1, width=4, height=1)
        assert plot.lead_snp == 'rs4'
        assert len(svg_elements(plot.group, 'lead_snp')) == 1

    def test_named_lead_snp(self, page, gwas):
        plot = plot_manhattan(page, data=gwas, lead_snp={'snp': 'rs2', 'fill': '#00ff00'}, x=1, y=1, width=4, height=1)
        assert plot.lead_snp == 'rs2'
        assert svg_elements(plot.group, 'lead_snp')[0]['fill'] == '#00ff00'

    def test_missing_lead_snp(self, page, gwas):
        plot = plot_manhattan(page, data=gwas, lead_snp={'snp': 'rs100'}, x=1, y=1, width=4, height=1)
        assert not svg_elements(plot.group, 'lead_snp')

    def test_sig_line(self, page, gwas):
        plot = plot_manhattan(
            page, data=gwas, sig_line=True, sig_col='#ff0000', baseline=True, x=1, y=1, width=4, height=1)
        assert len(svg_elements(plot.group, 'sig_line')) == 1
        assert len(svg_elements(plot.group, 'baseline')) == 1
        assert plot.gwas.loc[plot.gwas['color'] == '#ff0000', 'snp'].tolist() == ['rs2', 'rs4']

    def test_alternating_colors(self, gwas):
        plot = plot_manhattan(None, data=gwas, fill=['#000000', '#ffffff'])
        assert plot.gwas['color'].tolist() == ['#000000', '#000000', '#ffffff', '#000000', '#000000']

    def test_colorby(self, gwas):
        plot = plot_manhattan(None, data=gwas, chrom='chr1', fill=colorby('snp', palette=['#000000', '#ffffff']))
        assert plot.gwas['color'].tolist() == ['#000', '#fff']

    def test_range(self, gwas):
        plot = plot_manhattan(None, data=gwas, range=(0, 12))
        assert plot.range == (0, 12)
        plot = plot_manhattan(None, data=gwas, ymax=0.5)
        assert plot.range[1] == pytest.approx(4.849485, abs=1e-5)

    def test_range_error(self, gwas):
        with pytest.raises(InvalidInputError):
            plot_manhattan(None, data=gwas, range=(2, 1))

    def test_region_without_chrom(self, gwas):
        with pytest.raises(InvalidInputError):
            plot_manhattan(None, data=gwas, chromstart=1, chromend=100)

    def test_missing_data(self):
        with pytest.raises(InvalidInputError):
            plot_manhattan(None)

    def test_no_data(self, page, gwas):
        with pytest.warns(UserWarning, match='No data found'):
            plot = plot_manhattan(page, data=gwas, chrom='chrX', x=1, y=1, width=4, height=1)
        assert plot.range == (0, 1)
