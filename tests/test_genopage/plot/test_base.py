import pytest

from genopage.error import InvalidRegionError, PageError, PlacementError
from genopage.page import Page
from genopage.plot.base import GenomicPlot, check_page, check_placement, check_region, finish, genomic_scale, place


@pytest.fixture
def page():
    return Page(8.5, 11, showguides=False)


class TestGenomicPlot:
    def test_placement(self):
        plot = GenomicPlot('signal', chrom='chr1', chromstart=1, chromend=100, x=1, y=1, width=2, height=1)
        assert plot.is_placed
        assert plot.xscale == (1, 100)
        assert repr(plot) == 'signal(chr1:1-100)'
        assert not GenomicPlot('signal', x=1).is_placed

    def test_extra_attributes(self):
        plot = GenomicPlot('hic_square', resolution=5000)
        assert plot.resolution == 5000
        assert plot.xscale is None
        assert plot.annotations == []

    def test_height_in(self, page):
        assert GenomicPlot('signal', height=(25.4, 'mm')).height_in('inches') == pytest.approx(1)
        assert GenomicPlot('signal', height=2).height_in('cm') == pytest.approx(5.08)
        assert GenomicPlot('signal', height=2.54, default_units='cm').height_in('inches', page) == pytest.approx(1)


class TestChecks:
    def test_check_placement(self):
        check_placement(GenomicPlot('signal'))
        check_placement(GenomicPlot('signal', x=1, y=1, width=1, height=1))
        with pytest.raises(PlacementError) as err:
            check_placement(GenomicPlot('signal', x=1, y=1))
        assert 'width, height' in str(err.value)

    def test_check_page(self):
        check_page(None, GenomicPlot('signal'))
        with pytest.raises(PageError):
            check_page(None, GenomicPlot('signal', x=1, y=1, width=1, height=1))

    def test_check_region(self):
        check_region(None, None)
        check_region(0, 10)
        for start, end in [(1, None), (None, 1), (10, 10), (20, 10), (1.5, 10), (-5, 10), ('1', 10)]:
            with pytest.raises(InvalidRegionError):
                check_region(start, end)

    def test_genomic_scale_whole_chromosome(self):
        plot = GenomicPlot('signal', chrom='chr21')
        assert genomic_scale(plot, 'hg38') == (1, 46709983)

    def test_genomic_scale_region(self):
        plot = GenomicPlot('signal', chrom='chr21', chromstart=10.0, chromend=20)
        assert genomic_scale(plot, 'hg38') == (10, 20)
        assert isinstance(plot.chromstart, int)

    def test_genomic_scale_unknown_chrom(self):
        with pytest.raises(InvalidRegionError):
            genomic_scale(GenomicPlot('signal', chrom='chrZ'), 'hg38')


class TestPlace:
    def test_place_and_finish(self, page):
        plot = GenomicPlot('signal', x=1, y=1, width=2, height=1, just=('left', 'top'))
        viewport = place(page, plot, xscale=(0, 10))
        assert viewport.name == 'signal1'
        assert viewport.xscale == (0, 10)
        assert plot.group['clip-path'] == 'url(#clip_signal1)'
        assert plot.group not in page.drawing.elements
        finish(page, plot)
        assert plot.group in page.drawing.elements

    def test_unplaced(self, page):
        plot = GenomicPlot('signal')
        assert place(page, plot) is None
        assert finish(page, plot) is plot

    def test_not_drawn(self, page):
        plot = GenomicPlot('signal', x=1, y=1, width=2, height=1)
        place(page, plot, clip=False, draw=False)
        finish(page, plot, draw=False)
        assert page.viewports() == []
        assert plot.group not in page.drawing.elements
        assert 'clip-path' not in plot.group.attribs
