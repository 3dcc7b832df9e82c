"""
signal tracks (ex. bedGraph coverage) drawn as filled step polygons
"""
import numpy as np

from ..assembly import parse_assembly
from ..config import DEFAULTS
from ..error import InvalidInputError, missing_argument
from ..params import accepts_params
from ..readers import read_signal
from ..util import format_number
from .base import GenomicPlot, check_page, check_placement, check_region, finish, genomic_scale, place, warn_no_data


DEFAULT_BINS = 2000


def _pair(value):
    if isinstance(value, (list, tuple)):
        if len(value) == 1:
            return (value[0], value[0])
        return (value[0], value[1])
    return (value, value)


def bin_signal(signal, chromstart, chromend, bins):
    """
    collapse a signal into at most one value per bin. Each bin takes the largest positive and the smallest
    negative score of the intervals overlapping it, bins without any signal are 0

    Returns:
        Tuple[numpy.ndarray,numpy.ndarray,numpy.ndarray]: bin edges (bins + 1), positive values and negative values
    """
    bins = max(int(bins), 1)
    edges = np.linspace(chromstart, chromend, bins + 1)
    positive = np.zeros(bins)
    negative = np.zeros(bins)
    step = edges[1] - edges[0]
    for row in signal.itertuples():
        if row.end < chromstart or row.start > chromend:
            continue
        first = int(np.clip(np.floor((row.start - chromstart) / step), 0, bins - 1))
        last = int(np.clip(np.floor((row.end - chromstart) / step), 0, bins - 1))
        if row.score > 0:
            positive[first:last + 1] = np.maximum(positive[first:last + 1], row.score)
        elif row.score < 0:
            negative[first:last + 1] = np.minimum(negative[first:last + 1], row.score)
    return edges, positive, negative


def signal_range(positive, negative, ymax=1, include_negative=False):
    """
    default y range of a signal plot from 0 (or the smallest negative value) to the largest value
    """
    high = float(positive.max()) * ymax if len(positive) else 0
    low = float(negative.min()) * ymax if include_negative and len(negative) else 0
    if high == low:
        high = low + 1
    return (low, high)


def _step_polygon(viewport, edges, values, baseline):
    points = [(viewport.px_x(edges[0]), viewport.px_y(baseline))]
    for i, value in enumerate(values):
        points.append((viewport.px_x(edges[i]), viewport.px_y(value)))
        points.append((viewport.px_x(edges[i + 1]), viewport.px_y(value)))
    points.append((viewport.px_x(edges[-1]), viewport.px_y(baseline)))
    return points


@accepts_params
def plot_signal(
    page,
    data=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    assembly=None,
    linecolor='#37a7db',
    fill=None,
    negative=False,
    range=None,
    ymax=1,
    scale=False,
    baseline=True,
    baseline_color='#bebebe',
    baseline_width=1,
    bins=None,
    x=None,
    y=None,
    width=None,
    height=None,
    just=('left', 'top'),
    default_units=None,
    draw=True,
    params=None,
):
    """
    plot a signal track

    Args:
        linecolor: outline color, or a (positive, negative) pair of colors
        fill: fill color, or a (positive, negative) pair of colors
        negative (bool): draw negative scores below the baseline, otherwise they are ignored
        range (Tuple[float,float]): y range, defaults to 0 (or the smallest negative score) to the largest score
        ymax (float): fraction of the largest score used as the top of the default range
        scale (bool): label the y range in the top left corner
        bins (int): number of bins the signal is collapsed into, defaults to one per pixel column
    """
    if data is None:
        raise missing_argument('data')
    if chrom is None:
        raise missing_argument('chrom')
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    plot = GenomicPlot(
        'signal', chrom=chrom, chromstart=chromstart, chromend=chromend, assembly=assembly,
        x=x, y=y, width=width, height=height, just=just, default_units=default_units,
    )
    check_placement(plot)
    check_page(page, plot)
    check_region(plot.chromstart, plot.chromend)
    if range is not None and (len(range) != 2 or range[0] >= range[1]):
        raise InvalidInputError('range must be given as (low, high) with low less than high', range)
    genomic_scale(plot, assembly)

    signal = read_signal(data, plot.chrom, plot.chromstart, plot.chromend)
    if bins is None:
        bins = DEFAULT_BINS
        if plot.is_placed:
            bins = max(int(page.px(page.convert(plot.width, plot.default_units))), 1)
    edges, pos_values, neg_values = bin_signal(signal, plot.chromstart, plot.chromend, bins)
    plot.range = tuple(range) if range is not None else signal_range(pos_values, neg_values, ymax, negative)
    plot.signal = signal

    pos_line, neg_line = _pair(linecolor)
    pos_fill, neg_fill = _pair(fill)

    viewport = place(page, plot, xscale=plot.xscale, yscale=plot.range, draw=draw)
    if viewport is not None:
        config = page.settings
        dwg = page.drawing
        base = min(max(0, plot.range[0]), plot.range[1])
        clamped = np.clip(pos_values, plot.range[0], plot.range[1])
        plot.group.add(dwg.polyline(
            _step_polygon(viewport, edges, clamped, base),
            fill=pos_fill if pos_fill else 'none',
            stroke=pos_line if pos_line else 'none',
            class_='signal',
        ))
        if negative:
            clamped = np.clip(neg_values, plot.range[0], plot.range[1])
            plot.group.add(dwg.polyline(
                _step_polygon(viewport, edges, clamped, base),
                fill=neg_fill if neg_fill else 'none',
                stroke=neg_line if neg_line else 'none',
                class_='signal_negative',
            ))
        if baseline:
            plot.group.add(dwg.line(
                (viewport.px_x(plot.chromstart), viewport.px_y(base)),
                (viewport.px_x(plot.chromend), viewport.px_y(base)),
                stroke=baseline_color, stroke_width=baseline_width, class_='baseline',
            ))
        if scale:
            label = '[{} - {}]'.format(
                format_number(plot.range[0], digits=_digits(plot.range[0])),
                format_number(plot.range[1], digits=_digits(plot.range[1])))
            left, top, _, _ = viewport.px_box
            plot.group.add(dwg.text(
                label,
                insert=(left + config.padding, top + config.signal_scale_font_size),
                fill=config.label_color,
                style=config.text_style(config.signal_scale_font_size, 'start'),
                class_='scale',
            ))
    if not len(signal.index):
        warn_no_data()
    return finish(page, plot, draw)


def _digits(value):
    return 0 if float(value).is_integer() else 2
