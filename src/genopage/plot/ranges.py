"""
generic genomic ranges (ex. BED files) packed into rows
"""
import itertools
import warnings

from ..assembly import parse_assembly
from ..colors import ColorBy, apply_colorby
from ..config import DEFAULTS
from ..error import missing_argument
from ..interval import split_intervals_into_tracks
from ..params import accepts_params
from ..readers import read_range_data
from .base import GenomicPlot, check_page, check_placement, check_region, finish, genomic_scale, place, warn_no_data


NO_SPACE_WARNING = 'Not enough plotting space for all provided elements.'


def element_colors(data, color, default):
    """
    one color per row of data from a single color, a list of colors (recycled) or a :class:`ColorBy`
    """
    if color is None:
        color = default
    if isinstance(color, ColorBy):
        return apply_colorby(data, color)
    if isinstance(color, (list, tuple)):
        return list(itertools.islice(itertools.cycle(color), len(data.index)))
    return [color] * len(data.index)


def pack_rows(extents, spacing=0):
    """
    assign (start, end, key) extents to rows so no two extents on a row are closer than spacing

    Returns:
        Dict: row index by key
    """
    rows = {}
    for index, track in enumerate(split_intervals_into_tracks(extents, spacing=spacing)):
        for extent in track:
            rows[extent[2]] = index
    return rows


def fit_rows(rows, available, row_height, space):
    """
    the number of rows that fit in the available height, warns when rows have to be dropped
    """
    count = max(rows.values()) + 1 if rows else 0
    fit = int((available + space) // row_height) if row_height > 0 else 0
    if count > fit:
        warnings.warn(NO_SPACE_WARNING)
        return fit
    return count


@accepts_params
def plot_ranges(
    page,
    data=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    assembly=None,
    fill='#7ecdbb',
    linecolor=None,
    collapse=False,
    box_height=(2, 'mm'),
    space_height=0.3,
    space_width=0.02,
    limit=True,
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
    plot ranges packed into rows from the bottom of the plot up

    Args:
        fill: a color, a list of colors (recycled over the ranges) or a :class:`ColorBy`
        linecolor: outline color(s) in the same forms as fill
        collapse (bool): draw every range on a single row
        box_height: height of each range
        space_height (float): space between rows as a fraction of the box height
        space_width (float): minimum space between ranges on a row as a fraction of the region width
        limit (bool): drop (with a warning) rows that do not fit in the plot
    """
    if data is None:
        raise missing_argument('data')
    if chrom is None:
        raise missing_argument('chrom')
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    plot = GenomicPlot(
        'ranges', chrom=chrom, chromstart=chromstart, chromend=chromend, assembly=assembly,
        x=x, y=y, width=width, height=height, just=just, default_units=default_units,
    )
    check_placement(plot)
    check_page(page, plot)
    check_region(plot.chromstart, plot.chromend)
    genomic_scale(plot, assembly)

    ranges = read_range_data(data, assembly)
    ranges = ranges[
        (ranges['chrom'] == plot.chrom) & (ranges['end'] >= plot.chromstart) & (ranges['start'] <= plot.chromend)
    ].sort_values(['start', 'end'])
    ranges = ranges.reset_index(drop=True)
    fills = element_colors(ranges, fill, '#7ecdbb')
    lines = element_colors(ranges, linecolor, 'none')
    if collapse:
        rows = {i: 0 for i in ranges.index}
    else:
        spacing = space_width * (plot.chromend - plot.chromstart)
        rows = pack_rows([(r.start, r.end, r.Index) for r in ranges.itertuples()], spacing=spacing)
    ranges['row'] = [rows.get(i, 0) for i in ranges.index]
    plot.ranges = ranges

    viewport = place(page, plot, xscale=plot.xscale, draw=draw)
    if viewport is not None:
        dwg = page.drawing
        config = page.settings
        left, top, vp_width, vp_height = viewport.px_box
        box_px = page.px(page.convert(box_height, plot.default_units))
        space_px = box_px * space_height
        if collapse:
            box_px = min(box_px, vp_height)
            bottom = top + vp_height / 2 + box_px / 2
            nrows = 1
        else:
            bottom = top + vp_height
            nrows = fit_rows(rows, vp_height, box_px + space_px, space_px) if limit else len(set(rows.values()))
        plot.rows = nrows
        for row in ranges.itertuples():
            if row.row >= nrows:
                continue
            start_px = viewport.px_x(row.start)
            box_bottom = bottom - row.row * (box_px + space_px)
            plot.group.add(dwg.rect(
                (start_px, box_bottom - box_px),
                (max(viewport.px_x(row.end) - start_px, config.range_stroke_width), box_px),
                fill=fills[row.Index] or 'none',
                stroke=lines[row.Index] or 'none',
                stroke_width=config.range_stroke_width,
                class_='range',
            ))
    if not len(ranges.index):
        warn_no_data()
    return finish(page, plot, draw)
