import numpy as np
import pandas as pd
import pytest

from genopage.error import InvalidInputError
from genopage.page import Page
from genopage.plot.signal import bin_signal, plot_signal, signal_range

from ...util import get_data, svg_elements

SIGNAL = get_data('signal.bedgraph')
REGION = dict(chrom='chr21', chromstart=28000000, chromend=28200000)


@pytest.fixture
def page():
    return Page(8.5, 11, showguides=False)


class TestBinSignal:
    def test_bins(self):
        signal = pd.DataFrame({'start': [10, 60], 'end': [30, 70], 'score': [5.0, -2.0]})
        edges, positive, negative = bin_signal(signal, 0, 100, 4)
        assert edges.tolist() == [0, 25, 50, 75, 100]
        assert positive.tolist() == [5, 5, 0, 0]
        assert negative.tolist() == [0, 0, -2, 0]

    def test_largest_value_kept(self):
        signal = pd.DataFrame({'start': [0, 10], 'end': [20, 20], 'score': [5.0, 3.0]})
        _, positive, _ = bin_signal(signal, 0, 100, 2)
        assert positive.tolist() == [5, 0]

    def test_signal_range(self):
        assert signal_range(np.array([0, 4]), np.array([-2, 0])) == (0, 4)
        assert signal_range(np.array([0, 4]), np.array([-2, 0]), include_negative=True) == (-2, 4)
        assert signal_range(np.array([0, 4]), np.array([0, 0]), ymax=0.5) == (0, 2)
        assert signal_range(np.array([0, 0]), np.array([0, 0])) == (0, 1)


class TestPlotSignal:
    def test_positive_only(self, page):
        plot = plot_signal(page, data=SIGNAL, x=1, y=1, width=4, height=1, **REGION)
        assert plot.range == (0, 10)
        assert len(plot.signal.index) == 4
        assert len(svg_elements(plot.group, 'signal')) == 1
        assert not svg_elements(plot.group, 'signal_negative')
        assert len(svg_elements(plot.group, 'baseline')) == 1

    def test_negative(self, page):
        plot = plot_signal(
            page, data=SIGNAL, negative=True, fill=['#ff0000', '#0000ff'], scale=True,
            x=1, y=1, width=4, height=1, **REGION)
        assert plot.range == (-1.5, 10)
        negative = svg_elements(plot.group, 'signal_negative')[0]
        assert negative['fill'] == '#0000ff'
        scale = svg_elements(plot.group, 'scale')[0]
        assert scale.text == '[-1.50 - 10]'

    def test_range(self, page):
        plot = plot_signal(page, data=SIGNAL, range=(0, 4), baseline=False, x=1, y=1, width=4, height=1, **REGION)
        assert plot.viewport.yscale == (0, 4)
        assert not svg_elements(plot.group, 'baseline')

    def test_ymax(self):
        plot = plot_signal(None, data=SIGNAL, ymax=0.5, **REGION)
        assert plot.range == (0, 5)
        assert plot.viewport is None

    def test_range_error(self):
        with pytest.raises(InvalidInputError):
            plot_signal(None, data=SIGNAL, range=(4, 0), **REGION)

    def test_missing_data(self):
        with pytest.raises(InvalidInputError):
            plot_signal(None, chrom='chr21')

    def test_no_data(self, page):
        with pytest.warns(UserWarning, match='No data found'):
            plot = plot_signal(page, data=SIGNAL, chrom='chrX', x=1, y=1, width=4, height=1)
        assert plot.range == (0, 1)
