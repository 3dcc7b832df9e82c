import pandas as pd
import pytest

from genopage.annotate.genome_label import annotate_genome_label, chrom_label, format_coordinate, plot_genome_label
from genopage.error import AnnotationError, InvalidInputError, PageError, PlacementError
from genopage.page import Page
from genopage.plot.manhattan import plot_manhattan
from genopage.plot.shapes import plot_legend
from genopage.plot.signal import plot_signal

from ...util import get_data, svg_elements


@pytest.fixture
def page():
    return Page(8.5, 11, showguides=False)


@pytest.fixture
def signal(page):
    return plot_signal(
        page, data=get_data('signal.bedgraph'), chrom='chr21', chromstart=28000000, chromend=28200000,
        x=1, y=1, width=4, height=1,
    )


def labels(group):
    return [label.text for label in svg_elements(group, 'label')]


class TestFormatCoordinate:
    def test_scales(self):
        assert format_coordinate(1500000) == '1,500,000 bp'
        assert format_coordinate(1500000, 'Mb') == '1.5 Mb'
        assert format_coordinate(28000000, 'Kb') == '28,000 Kb'

    def test_digits(self):
        assert format_coordinate(1500000, 'Mb', digits=2) == '1.50 Mb'
        assert format_coordinate(1234567, 'Mb') == '1.235 Mb'

    def test_no_commas(self):
        assert format_coordinate(1500000, commas=False) == '1500000 bp'

    def test_bad_scale(self):
        with pytest.raises(KeyError):
            format_coordinate(1, 'Gb')

    def test_chrom_label(self):
        assert chrom_label('chr21') == '21'
        assert chrom_label('chrX') == 'X'
        assert chrom_label('2') == '2'


class TestPlotGenomeLabel:
    def test_region(self, page):
        label = plot_genome_label(
            page, chrom='chr21', chromstart=28000000, chromend=29000000, x=1, y=3, length=4, at=[28500000])
        assert labels(label.group) == ['28,000,000 bp', '29,000,000 bp', 'chr21']
        assert len(svg_elements(label.group, 'axis_line')) == 1
        assert len(svg_elements(label.group, 'tick')) == 1
        assert page.viewports() == ['genome_label1']
        assert label.viewport.width == 4

    def test_whole_chromosome(self, page):
        label = plot_genome_label(page, chrom='chr21', scale='Mb', digits=0, x=1, y=3, length=4)
        assert labels(label.group) == ['0 Mb', '47 Mb', 'chr21']

    def test_vertical(self, page):
        label = plot_genome_label(
            page, chrom='chr21', chromstart=28000000, chromend=29000000, axis='y', x=1, y=3, length=4)
        assert label.viewport.height == 4
        for element in svg_elements(label.group, 'label'):
            assert element['transform'].startswith('rotate(-90')

    def test_missing_inputs(self, page):
        with pytest.raises(InvalidInputError):
            plot_genome_label(page, chrom='chr21', x=1, y=3)
        with pytest.raises(InvalidInputError):
            plot_genome_label(page, x=1, y=3, length=4)
        with pytest.raises(PageError):
            plot_genome_label(None, chrom='chr21', x=1, y=3, length=4)


class TestAnnotateGenomeLabel:
    def test_signal(self, page, signal):
        label = annotate_genome_label(page, plot=signal, x=1, y='b0.1', scale='Mb')
        assert labels(label.group) == ['28 Mb', '28.2 Mb', 'chr21']
        assert label.viewport.y == pytest.approx(2.1)
        assert label in signal.annotations

    def test_removed_with_plot(self, page, signal):
        label = annotate_genome_label(page, plot=signal, x=1, y='b0')
        assert page.viewports()[-1] == label.viewport.name
        page.remove(signal)
        assert page.viewports() == []
        assert label.group not in page.drawing.elements
        with pytest.raises(PlacementError):
            page.parse_y('b0.1')

    def test_whole_genome(self, page):
        gwas = pd.DataFrame({
            'chrom': ['chr1', 'chr2', 'chr21'], 'pos': [1000000, 2000000, 3000000], 'p': [0.1, 0.01, 0.001],
        })
        plot = plot_manhattan(page, data=gwas, x=1, y=1, width=4, height=1)
        label = annotate_genome_label(page, plot=plot, x=1, y=2)
        assert labels(label.group) == ['1', '2', '21']

    def test_no_coordinates(self, page):
        legend = plot_legend(page, legend=['a'], fill='#000000', x=1, y=1, width=1, height=1)
        with pytest.raises(AnnotationError):
            annotate_genome_label(page, plot=legend, x=1, y=3)
