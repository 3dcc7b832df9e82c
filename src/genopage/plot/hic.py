"""
Hi-C heatmaps: square, triangle and rectangle renderings of a sparse contact matrix

The matrix is a table of pixels (x, y, counts) where x and y are the bin starts on the two axes. The triangle and
rectangle plots show the upper half of an intrachromosomal matrix rotated 45 degrees so that the diagonal lies
along the bottom of the plot
"""
import math
import warnings

import numpy as np
import pandas as pd

from ..assembly import parse_assembly
from ..colors import map_colors, resolve_palette
from ..config import DEFAULTS
from ..constants import COLOR_TRANS, HIC_HALF, MATRIX_TYPE, UNITS
from ..error import InvalidInputError, missing_argument
from ..params import accepts_params
from ..readers import read_hic
from ..util import logger
from .base import (
    GenomicPlot, check_page, check_placement, check_region, finish, genomic_scale, place, warn_no_data
)


RESOLUTION_THRESHOLDS = [
    (150000000, 500000),
    (75000000, 250000),
    (35000000, 100000),
    (20000000, 50000),
    (5000000, 25000),
    (3000000, 10000),
]
MIN_RESOLUTION = 5000
MIN_TRIANGLE_HEIGHT = 0.05  # inches
SQRT2 = math.sqrt(2)


def adjust_resolution(chromstart, chromend):
    """
    automatic resolution for a region based on its size

    Example:
        >>> adjust_resolution(1, 249250621)
        500000
        >>> adjust_resolution(1000000, 2000000)
        5000
    """
    size = chromend - chromstart
    for threshold, resolution in RESOLUTION_THRESHOLDS:
        if size >= threshold:
            return resolution
    return MIN_RESOLUTION


def infer_resolution(hic):
    """
    the bin size of a sparse matrix, the most common distance between consecutive bin starts

    Returns:
        int: the resolution or None if there are not enough bins to tell
    """
    positions = np.unique(np.concatenate([hic['x'].values, hic['y'].values]))
    if len(positions) < 2:
        return None
    steps, counts = np.unique(np.diff(positions), return_counts=True)
    return int(steps[np.argmax(counts)])


def _bin_range(start, end, resolution):
    return math.floor(start / resolution) * resolution, end


def _in_range(values, bounds):
    return (values >= bounds[0]) & (values < bounds[1])


def subset_hic(hic, chromstart, chromend, resolution, altchromstart=None, altchromend=None, intra=True):
    """
    keep the pixels whose bins fall inside the region (x) and the alternate region (y), region starts are rounded
    down to a bin boundary. Intrachromosomal pixels are stored with x <= y, so they are kept when they fall inside
    the regions in either orientation
    """
    if not len(hic.index):
        return hic
    altchromstart = chromstart if altchromstart is None else altchromstart
    altchromend = chromend if altchromend is None else altchromend
    xbins = _bin_range(chromstart, chromend, resolution)
    ybins = _bin_range(altchromstart, altchromend, resolution)
    keep = _in_range(hic['x'], xbins) & _in_range(hic['y'], ybins)
    if intra:
        keep = keep | (_in_range(hic['y'], xbins) & _in_range(hic['x'], ybins))
    return hic[keep].reset_index(drop=True)


def log_base(color_trans):
    if color_trans == COLOR_TRANS.LOG2:
        return 2
    elif color_trans == COLOR_TRANS.LOG10:
        return 10
    return math.e


def set_zrange(counts, zrange=None, color_trans=COLOR_TRANS.LINEAR):
    """
    the range of counts mapped onto the palette

    When not given: a linear transform uses 0 to the 95th percentile of the counts (symmetric around 0 when there
    are negative counts) and a log transform uses the smallest positive count to the largest count

    Returns:
        Tuple[float,float]: the range, or None when there are no counts
    """
    if zrange is not None:
        return (float(zrange[0]), float(zrange[1]))
    counts = np.asarray(counts, dtype=float)
    counts = counts[~np.isnan(counts)]
    if not len(counts):
        return None
    if len(np.unique(counts)) == 1:
        return (float(counts[0]), float(counts[0]))
    if color_trans != COLOR_TRANS.LINEAR:
        positive = counts[counts > 0]
        if not len(positive):
            return (float(counts.min()), float(counts.max()))
        return (float(positive.min()), float(counts.max()))
    if counts.min() < 0:
        bound = float(np.percentile(np.abs(counts), 95))
        return (-bound, bound)
    high = float(np.percentile(counts, 95))
    if high <= 0:
        high = float(counts.max())
    return (0.0, high)


def check_zrange(zrange):
    if zrange is None:
        return
    if len(zrange) != 2 or not all([isinstance(z, (int, float, np.number)) for z in zrange]):
        raise InvalidInputError('zrange must be a pair of numbers', zrange)
    if zrange[0] >= zrange[1]:
        raise InvalidInputError('zrange must be given as (low, high) with low less than high', zrange)


def scale_counts(hic, zrange, color_trans=COLOR_TRANS.LINEAR, palette=None):
    """
    clamp the counts to the zrange and attach a color to each pixel

    Returns:
        Tuple[pandas.DataFrame,bool]: the pixels with counts and color columns, and whether the counts could be
        mapped onto the palette (requires a zrange with two distinct values)

    Raises:
        InvalidInputError: log transform of negative counts
    """
    COLOR_TRANS.enforce(color_trans)
    hic = hic.copy()
    if zrange is None or not len(hic.index):
        hic['color'] = pd.Series([None] * len(hic.index), index=hic.index, dtype=object)
        return hic, False
    hic['counts'] = hic['counts'].clip(lower=zrange[0], upper=zrange[1])
    palette = palette if palette is not None else DEFAULTS.hic_palette
    if zrange[0] == zrange[1]:
        hic['color'] = map_colors(hic['counts'], palette, range=zrange)
        return hic, False

    if color_trans != COLOR_TRANS.LINEAR:
        if (hic['counts'] < 0).any():
            raise InvalidInputError(
                'Negative values in Hi-C data. Cannot scale colors on a log scale. Use color_trans="linear"')
        if zrange[0] <= 0:
            raise InvalidInputError('zrange must be positive to scale colors on a log scale', zrange)
        base = log_base(color_trans)
        hic['counts'] = np.log(hic['counts']) / math.log(base)
        hic['color'] = map_colors(hic['counts'], palette, range=(math.log(zrange[0], base), math.log(zrange[1], base)))
    else:
        hic['color'] = map_colors(hic['counts'], palette, range=zrange)
    return hic, True


def clip_triangle(hic, chromstart, chromend, resolution):
    """
    trim the pixels crossing the left edge (x < chromstart) or the top edge (y + resolution > chromend) of the
    region so that the rotated matrix ends exactly at the region boundaries

    Off-diagonal pixels (y > x) stay rectangles, diagonal pixels (y == x) are drawn as the half of the bin above
    the diagonal and stay triangles with equal width and height

    Returns:
        pandas.DataFrame: pixels with x, y, width, height and a diagonal flag
    """
    hic = hic[hic['y'] >= hic['x']].copy()
    if 'width' not in hic.columns:
        hic['width'] = resolution
    if 'height' not in hic.columns:
        hic['height'] = resolution
    hic['diagonal'] = hic['y'] == hic['x']
    if not len(hic.index):
        return hic

    left = hic['x'] < chromstart
    top = (hic['y'] + resolution) > chromend
    corner = left & top
    left_only = left & ~top
    top_only = top & ~left
    square = ~hic['diagonal']
    diagonal = hic['diagonal']

    x = hic['x'].astype(float)
    y = hic['y'].astype(float)
    width = hic['width'].astype(float)
    height = hic['height'].astype(float)

    clipped_width = resolution - (chromstart - x)

    mask = square & left_only
    width[mask] = clipped_width[mask]
    x[mask] = chromstart

    mask = square & top_only
    height[mask] = chromend - y[mask]

    mask = square & corner
    width[mask] = clipped_width[mask]
    height[mask] = chromend - y[mask]
    x[mask] = chromstart

    mask = diagonal & top_only
    height[mask] = chromend - y[mask]
    width[mask] = height[mask]

    mask = diagonal & left_only
    width[mask] = clipped_width[mask]
    height[mask] = width[mask]
    x[mask] = chromstart
    y[mask] = chromstart

    # a single bin covering the whole region
    mask = diagonal & corner
    width[mask] = chromend - chromstart
    height[mask] = chromend - chromstart
    x[mask] = chromstart
    y[mask] = chromstart

    hic['x'] = x
    hic['y'] = y
    hic['width'] = width
    hic['height'] = height
    return hic[(hic['width'] > 0) & (hic['height'] > 0)]


class TriangleProjection:
    """
    maps genomic (x, y) matrix coordinates onto the page for a matrix rotated 45 degrees. The square matrix of the
    region has a side of base_width / sqrt(2) and is rotated about its bottom left corner so that its diagonal
    lies along the bottom of the triangle

    Args:
        left (float): page x of the start of the diagonal
        bottom (float): page y of the diagonal
        base_width (float): page width of the diagonal
        start (int): genomic start of the diagonal
        end (int): genomic end of the diagonal
    """

    def __init__(self, left, bottom, base_width, start, end):
        self.left = left
        self.bottom = bottom
        self.base_width = base_width
        self.start = start
        self.end = end
        self.side = base_width / SQRT2

    @property
    def apex_height(self):
        return self.base_width / 2

    def project(self, x, y):
        """
        Example:
            >>> proj = TriangleProjection(0, 10, 4, 0, 100)
            >>> proj.project(0, 100)
            (2.0, 8.0)
        """
        u = (x - self.start) / (self.end - self.start) * self.side
        v = (y - self.start) / (self.end - self.start) * self.side
        return (self.left + (u + v) / SQRT2, self.bottom - (v - u) / SQRT2)

    def square_to_polygon(self, x, y, width, height):
        return [
            self.project(x, y),
            self.project(x + width, y),
            self.project(x + width, y + height),
            self.project(x, y + height),
        ]

    def diagonal_to_polygon(self, x, y, width, height):
        return [
            self.project(x, y),
            self.project(x, y + height),
            self.project(x + width, y + height),
        ]


def _check_hic_inputs(page, plot, data, assembly, zrange):
    if data is None:
        raise missing_argument('data')
    if plot.chrom is None:
        raise missing_argument('chrom')
    check_placement(plot)
    check_page(page, plot)
    if assembly.genome == 'hg19' and not str(plot.chrom).startswith('chr'):
        raise InvalidInputError(
            "'{0}' is an invalid input for an hg19 chromosome. Please specify chromosome as 'chr{0}'.".format(
                plot.chrom))
    check_region(plot.chromstart, plot.chromend)
    check_zrange(zrange)


def _hic_resolution(hic, plot, resolution):
    if resolution == 'auto':
        inferred = infer_resolution(hic)
        resolution = inferred if inferred else adjust_resolution(plot.chromstart, plot.chromend)
        logger.debug('{} resolution: {}'.format(plot.plot_type, resolution))
    try:
        resolution = int(resolution)
    except (TypeError, ValueError):
        raise InvalidInputError('resolution must be "auto" or a bin size', resolution)
    if resolution <= 0:
        raise InvalidInputError('resolution must be a positive bin size', resolution)
    return resolution


def _prepare(plot, data, resolution, zrange, palette, color_trans, norm, matrix, altchrom=None, altchromstart=None, altchromend=None):
    """
    read, subset and color the pixels for a plot, sets the plot resolution, zrange and palette
    """
    MATRIX_TYPE.enforce(matrix)
    COLOR_TRANS.enforce(color_trans)
    hic = read_hic(data, plot.chrom, altchrom=altchrom)
    plot.resolution = _hic_resolution(hic, plot, resolution)
    plot.norm = norm
    plot.matrix = matrix
    plot.color_trans = color_trans
    hic = subset_hic(
        hic, plot.chromstart, plot.chromend, plot.resolution,
        altchromstart=altchromstart, altchromend=altchromend, intra=altchrom is None or altchrom == plot.chrom,
    )
    plot.zrange = set_zrange(hic['counts'], zrange, color_trans)
    palette = palette if palette is not None else DEFAULTS.hic_palette
    hic, mapped = scale_counts(hic, plot.zrange, color_trans, palette)
    plot.color_palette = resolve_palette(palette) if mapped else None
    return hic


def _hic_plot(plot_type, chrom, chromstart, chromend, assembly, x, y, width, height, just, default_units):
    return GenomicPlot(
        plot_type, chrom=chrom, chromstart=chromstart, chromend=chromend, assembly=parse_assembly(assembly),
        x=x, y=y, width=width, height=height, just=just, default_units=default_units,
        resolution=None, zrange=None, color_palette=None, color_trans=None,
    )


def _draw_triangle_pixels(page, plot, hic, projection, start, end):
    """
    add the clipped pixels of the rotated matrix to the plot group
    """
    dwg = page.drawing
    viewport = plot.viewport
    pixels = clip_triangle(hic, start, end, plot.resolution)
    for row in pixels.itertuples():
        if row.diagonal:
            points = projection.diagonal_to_polygon(row.x, row.y, row.width, row.height)
        else:
            points = projection.square_to_polygon(row.x, row.y, row.width, row.height)
        plot.group.add(dwg.polygon(
            [(viewport.px(px), viewport.px(py)) for px, py in points],
            fill=row.color if row.color else 'none',
            stroke='none',
            class_='pixel',
        ))
    return len(pixels.index)


@accepts_params
def plot_hic_triangle(
    page,
    data=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    resolution='auto',
    zrange=None,
    norm='KR',
    matrix=MATRIX_TYPE.OBSERVED,
    assembly=None,
    palette=None,
    color_trans=COLOR_TRANS.LINEAR,
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
    plot the upper triangle of a Hi-C matrix rotated 45 degrees. The width is the base of the triangle (the
    region), the full triangle is width / 2 high and smaller heights crop its top

    Raises:
        InvalidInputError: the height is smaller than 0.05 inches
    """
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    plot = _hic_plot('hic_triangle', chrom, chromstart, chromend, assembly, x, y, width, height, just, default_units)
    _check_hic_inputs(page, plot, data, assembly, zrange)
    if plot.height is not None and plot.height_in(UNITS.INCHES, page) < MIN_TRIANGLE_HEIGHT:
        raise InvalidInputError('height is too small for a valid triangle Hi-C plot', plot.height)
    genomic_scale(plot, assembly)
    hic = _prepare(plot, data, resolution, zrange, palette, color_trans, norm, matrix)

    viewport = place(page, plot, xscale=plot.xscale, draw=draw)
    if viewport is not None:
        projection = TriangleProjection(
            viewport.x, viewport.y + viewport.height, viewport.width, plot.chromstart, plot.chromend)
        if not _draw_triangle_pixels(page, plot, hic, projection, plot.chromstart, plot.chromend):
            warn_no_data()
    elif not len(hic.index):
        warn_no_data()
    return finish(page, plot, draw)


@accepts_params
def plot_hic_rectangle(
    page,
    data=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    resolution='auto',
    zrange=None,
    norm='KR',
    matrix=MATRIX_TYPE.OBSERVED,
    assembly=None,
    palette=None,
    color_trans=COLOR_TRANS.LINEAR,
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
    plot the upper triangle of a Hi-C matrix rotated 45 degrees and filling a rectangle. The matrix is extended
    past both ends of the region by the genomic distance matching the plot height so the top corners are filled
    """
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    plot = _hic_plot('hic_rectangle', chrom, chromstart, chromend, assembly, x, y, width, height, just, default_units)
    _check_hic_inputs(page, plot, data, assembly, zrange)
    genomic_scale(plot, assembly)

    span = plot.chromend - plot.chromstart
    extension = 0
    if plot.is_placed and page is not None:
        page_width = page.convert(plot.width, plot.default_units)
        page_height = page.convert(plot.height, plot.default_units)
        extension = int(math.ceil(page_height * span / page_width))
    plot.extension = extension
    start = max(plot.chromstart - extension, 0)
    end = plot.chromend + extension

    region = GenomicPlot(plot.plot_type, chrom=plot.chrom, chromstart=start, chromend=end)
    hic = _prepare(region, data, resolution, zrange, palette, color_trans, norm, matrix)
    for attr in ['resolution', 'norm', 'matrix', 'color_trans', 'zrange', 'color_palette']:
        setattr(plot, attr, getattr(region, attr))
    # pixels entirely above the top of the rectangle
    hic = hic[(hic['y'] - hic['x'] - plot.resolution) <= 2 * extension]

    viewport = place(page, plot, xscale=plot.xscale, draw=draw)
    if viewport is not None:
        scale = viewport.width / span
        projection = TriangleProjection(
            viewport.x - (plot.chromstart - start) * scale,
            viewport.y + viewport.height,
            (end - start) * scale,
            start,
            end,
        )
        if not _draw_triangle_pixels(page, plot, hic, projection, start, end):
            warn_no_data()
    elif not len(hic.index):
        warn_no_data()
    return finish(page, plot, draw)


@accepts_params
def plot_hic_square(
    page,
    data=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    altchrom=None,
    altchromstart=None,
    altchromend=None,
    resolution='auto',
    zrange=None,
    norm='KR',
    matrix=MATRIX_TYPE.OBSERVED,
    assembly=None,
    palette=None,
    color_trans=COLOR_TRANS.LINEAR,
    half=HIC_HALF.BOTH,
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
    plot a Hi-C matrix as a square heatmap with the diagonal running from the top left to the bottom right

    Args:
        half (str): draw the upper half (top), the lower half (bottom) or both halves of the matrix
        altchrom (str): chromosome along the y-axis for interchromosomal matrices, defaults to chrom
    """
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    HIC_HALF.enforce(half)
    plot = _hic_plot('hic_square', chrom, chromstart, chromend, assembly, x, y, width, height, just, default_units)
    _check_hic_inputs(page, plot, data, assembly, zrange)
    genomic_scale(plot, assembly)

    plot.altchrom = altchrom if altchrom is not None else plot.chrom
    if plot.altchrom == plot.chrom:
        if altchromstart is None and altchromend is None:
            altchromstart, altchromend = plot.chromstart, plot.chromend
    else:
        if half != HIC_HALF.BOTH:
            warnings.warn('interchromosomal Hi-C matrices can only be drawn with half="both"')
            half = HIC_HALF.BOTH
    check_region(altchromstart, altchromend)
    alt = GenomicPlot('hic_square', chrom=plot.altchrom, chromstart=altchromstart, chromend=altchromend)
    genomic_scale(alt, assembly)
    plot.altchromstart = alt.chromstart
    plot.altchromend = alt.chromend
    plot.half = half

    hic = _prepare(
        plot, data, resolution, zrange, palette, color_trans, norm, matrix,
        altchrom=plot.altchrom, altchromstart=plot.altchromstart, altchromend=plot.altchromend,
    )
    pixels = _square_pixels(hic, plot, half)

    viewport = place(page, plot, xscale=plot.xscale, yscale=(plot.altchromend, plot.altchromstart), draw=draw)
    if viewport is not None:
        dwg = page.drawing
        res = plot.resolution
        for row in pixels.itertuples():
            left = viewport.px_x(row.col)
            right = viewport.px_x(row.col + res)
            top = viewport.px_y(row.row)
            bottom = viewport.px_y(row.row + res)
            plot.group.add(dwg.rect(
                (min(left, right), min(top, bottom)),
                (abs(right - left), abs(bottom - top)),
                fill=row.color if row.color else 'none',
                stroke='none',
                class_='pixel',
            ))
    if not len(pixels.index):
        warn_no_data()
    return finish(page, plot, draw)


def _square_pixels(hic, plot, half):
    """
    column (x-axis) and row (y-axis) bins for each drawn pixel of a square plot. Intrachromosomal pixels are drawn
    in every orientation that falls inside both regions. The half only applies when the regions overlap, the top half
    has columns after rows and the bottom half the reverse
    """
    if plot.altchrom != plot.chrom:
        return hic.assign(col=hic['x'], row=hic['y'])
    xbins = _bin_range(plot.chromstart, plot.chromend, plot.resolution)
    ybins = _bin_range(plot.altchromstart, plot.altchromend, plot.resolution)
    upper = hic.assign(col=hic['y'], row=hic['x'])
    lower = hic.assign(col=hic['x'], row=hic['y'])
    upper = upper[_in_range(upper['col'], xbins) & _in_range(upper['row'], ybins)]
    lower = lower[_in_range(lower['col'], xbins) & _in_range(lower['row'], ybins)]
    overlapping = plot.chromstart < plot.altchromend and plot.altchromstart < plot.chromend
    if overlapping and half == HIC_HALF.TOP:
        return upper.reset_index(drop=True)
    elif overlapping and half == HIC_HALF.BOTTOM:
        return lower.reset_index(drop=True)
    return pd.concat([upper, lower[lower['x'] != lower['y']]], ignore_index=True)
