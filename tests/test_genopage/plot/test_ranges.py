import pandas as pd
import pytest

from genopage.colors import colorby
from genopage.error import InvalidInputError, InvalidRegionError, PlacementError
from genopage.page import Page
from genopage.plot.pairs import arch_heights, plot_pairs, plot_pairs_arches
from genopage.plot.ranges import element_colors, fit_rows, pack_rows, plot_ranges

from ...util import get_data, path_data, svg_elements

RANGES = get_data('ranges.bed')
PAIRS = get_data('loops.bedpe')


@pytest.fixture
def page():
    return Page(8.5, 11, showguides=False)


class TestRows:
    def test_pack_rows(self):
        rows = pack_rows([(0, 10, 'a'), (5, 15, 'b'), (20, 30, 'c')])
        assert rows == {'a': 0, 'b': 1, 'c': 0}

    def test_pack_rows_spacing(self):
        rows = pack_rows([(0, 10, 'a'), (15, 20, 'b')], spacing=10)
        assert rows == {'a': 0, 'b': 1}

    def test_fit_rows(self):
        assert fit_rows({'a': 0, 'b': 1}, 100, 10, 2) == 2
        assert fit_rows({}, 100, 10, 2) == 0
        with pytest.warns(UserWarning, match='Not enough plotting space'):
            assert fit_rows({'a': 0, 'b': 1, 'c': 2}, 20, 10, 0) == 2

    def test_element_colors(self):
        data = pd.DataFrame({'type': ['x', 'y', 'x']})
        assert element_colors(data, None, 'none') == ['none'] * 3
        assert element_colors(data, '#ff0000', 'none') == ['#ff0000'] * 3
        assert element_colors(data, ['#000', '#fff'], 'none') == ['#000', '#fff', '#000']
        colors = element_colors(data, colorby('type', palette=['#000000', '#ffffff']), 'none')
        assert colors == ['#000', '#fff', '#000']


class TestPlotRanges:
    def test_rows(self, page):
        plot = plot_ranges(
            page, data=RANGES, chrom='chr21', chromstart=28000000, chromend=28500000, x=1, y=1, width=4, height=1)
        assert plot.ranges['row'].tolist() == [0, 1, 0]
        assert plot.rows == 2
        assert len(svg_elements(plot.group, 'range')) == 3

    def test_collapse(self, page):
        plot = plot_ranges(
            page, data=RANGES, chrom='chr21', chromstart=28000000, chromend=28500000, collapse=True,
            x=1, y=1, width=4, height=1)
        assert plot.rows == 1
        assert set(plot.ranges['row']) == {0}

    def test_limit(self, page):
        with pytest.warns(UserWarning, match='Not enough plotting space'):
            plot = plot_ranges(
                page, data=RANGES, chrom='chr21', chromstart=28000000, chromend=28500000,
                x=1, y=1, width=4, height=(3, 'mm'))
        assert plot.rows == 1
        assert len(svg_elements(plot.group, 'range')) == 2

    def test_colorby(self, page):
        data = pd.DataFrame({
            'chrom': ['chr1', 'chr1'], 'start': [100, 500], 'end': [200, 600], 'type': ['enhancer', 'promoter'],
        })
        plot = plot_ranges(
            page, data=data, chrom='chr1', chromstart=1, chromend=1000,
            fill=colorby('type', palette=['#000000', '#ffffff']), x=1, y=1, width=4, height=1)
        fills = [rect['fill'] for rect in svg_elements(plot.group, 'range')]
        assert fills == ['#000', '#fff']

    def test_whole_chromosome(self):
        plot = plot_ranges(None, data=RANGES, chrom='chr22')
        assert (plot.chromstart, plot.chromend) == (1, 50818468)
        assert len(plot.ranges.index) == 1

    def test_errors(self, page):
        with pytest.raises(InvalidInputError):
            plot_ranges(page, chrom='chr21')
        with pytest.raises(InvalidInputError):
            plot_ranges(page, data=RANGES)
        with pytest.raises(InvalidRegionError):
            plot_ranges(page, data=RANGES, chrom='chr21', chromstart=100)
        with pytest.raises(InvalidRegionError):
            plot_ranges(page, data=RANGES, chrom='chr21', chromstart=100, chromend=50)
        with pytest.raises(PlacementError):
            plot_ranges(page, data=RANGES, chrom='chr21', x=1, width=2)

    def test_no_data(self, page):
        with pytest.warns(UserWarning, match='No data found'):
            plot_ranges(page, data=RANGES, chrom='chr1', x=1, y=1, width=4, height=1)


class TestPlotPairs:
    def test_pairs(self, page):
        plot = plot_pairs(
            page, data=PAIRS, chrom='chr21', chromstart=28000000, chromend=29100000, x=1, y=1, width=4, height=1)
        assert len(plot.pairs.index) == 2
        assert plot.pairs['row'].tolist() == [0, 1]
        assert len(svg_elements(plot.group, 'pair')) == 2
        assert len(svg_elements(plot.group, 'anchor')) == 4
        assert len(svg_elements(plot.group, 'link')) == 2

    def test_one_anchor_in_region(self):
        plot = plot_pairs(None, data=PAIRS, chrom='chr21', chromstart=28900000, chromend=29100000)
        assert len(plot.pairs.index) == 1


class TestPlotPairsArches:
    def test_2d(self, page):
        plot = plot_pairs_arches(
            page, data=PAIRS, chrom='chr21', chromstart=28000000, chromend=29100000, x=1, y=1, width=4, height=1)
        arches = svg_elements(plot.group, 'arch')
        assert len(arches) == 2
        assert arches[0]['fill'] == 'none'
        assert path_data(arches[0]).startswith('M')

    def test_3d_flipped(self, page):
        plot = plot_pairs_arches(
            page, data=PAIRS, chrom='chr21', chromstart=28000000, chromend=29100000, style='3D', flip=True,
            alpha=0.5, x=1, y=1, width=4, height=1)
        arch = svg_elements(plot.group, 'arch')[0]
        assert arch['fill-opacity'] == 0.5
        assert path_data(arch).endswith('Z')

    def test_style_error(self):
        with pytest.raises(InvalidInputError):
            plot_pairs_arches(None, data=PAIRS, chrom='chr21', style='4D')

    def test_arch_heights(self):
        pairs = pd.DataFrame({'score': [2, 4]})
        assert arch_heights(pairs).tolist() == [1, 1]
        assert arch_heights(pairs, 0.5).tolist() == [0.5, 0.5]
        assert arch_heights(pairs, 'score').tolist() == [0.5, 1]
        assert arch_heights(pairs, [1, 4]).tolist() == [0.25, 1]

    def test_arch_heights_errors(self):
        pairs = pd.DataFrame({'score': [2, 4]})
        with pytest.raises(InvalidInputError):
            arch_heights(pairs, 'counts')
        with pytest.raises(InvalidInputError):
            arch_heights(pairs, [1, 2, 3])
