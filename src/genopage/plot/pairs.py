"""
paired ranges (ex. chromatin loops, split reads) drawn as linked boxes or as arches
"""
import numpy as np

from ..assembly import parse_assembly
from ..config import DEFAULTS
from ..error import InvalidInputError, missing_argument
from ..params import accepts_params
from ..readers import read_paired_data
from .base import GenomicPlot, check_page, check_placement, check_region, finish, genomic_scale, place, warn_no_data
from .ranges import element_colors, fit_rows, pack_rows


ARCH_STYLES = ['2D', '3D']


def _region_pairs(pairs, chrom, chromstart, chromend):
    """
    pairs with both anchors on the chromosome and at least one anchor overlapping the region
    """
    same = (pairs['chrom1'] == chrom) & (pairs['chrom2'] == chrom)
    first = (pairs['end1'] >= chromstart) & (pairs['start1'] <= chromend)
    second = (pairs['end2'] >= chromstart) & (pairs['start2'] <= chromend)
    return pairs[same & (first | second)].reset_index(drop=True)


def _new_plot(plot_type, page, data, chrom, chromstart, chromend, assembly, x, y, width, height, just, default_units):
    if data is None:
        raise missing_argument('data')
    if chrom is None:
        raise missing_argument('chrom')
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    plot = GenomicPlot(
        plot_type, chrom=chrom, chromstart=chromstart, chromend=chromend, assembly=assembly,
        x=x, y=y, width=width, height=height, just=just, default_units=default_units,
    )
    check_placement(plot)
    check_page(page, plot)
    check_region(plot.chromstart, plot.chromend)
    genomic_scale(plot, assembly)
    pairs = read_paired_data(data, assembly)
    return plot, _region_pairs(pairs, plot.chrom, plot.chromstart, plot.chromend)


@accepts_params
def plot_pairs(
    page,
    data=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    assembly=None,
    fill='#1f4297',
    linecolor=None,
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
    plot each pair as two boxes joined by a line, pairs are packed into rows from the bottom of the plot up

    Args:
        fill: a color, a list of colors (recycled over the pairs) or a :class:`ColorBy`
        linecolor: color(s) of the joining line, defaults to the fill
    """
    plot, pairs = _new_plot(
        'pairs', page, data, chrom, chromstart, chromend, assembly, x, y, width, height, just, default_units)
    fills = element_colors(pairs, fill, '#1f4297')
    lines = element_colors(pairs, linecolor, None)
    spacing = space_width * (plot.chromend - plot.chromstart)
    rows = pack_rows(
        [(min(r.start1, r.start2), max(r.end1, r.end2), r.Index) for r in pairs.itertuples()], spacing=spacing)
    pairs['row'] = [rows.get(i, 0) for i in pairs.index]
    plot.pairs = pairs

    viewport = place(page, plot, xscale=plot.xscale, draw=draw)
    if viewport is not None:
        dwg = page.drawing
        left, top, vp_width, vp_height = viewport.px_box
        box_px = page.px(page.convert(box_height, plot.default_units))
        space_px = box_px * space_height
        nrows = fit_rows(rows, vp_height, box_px + space_px, space_px) if limit else len(set(rows.values()))
        plot.rows = nrows
        bottom = top + vp_height
        for row in pairs.itertuples():
            if row.row >= nrows:
                continue
            color = fills[row.Index] or 'none'
            box_bottom = bottom - row.row * (box_px + space_px)
            group = dwg.g(class_='pair')
            anchors = sorted([(row.start1, row.end1), (row.start2, row.end2)])
            for start, end in anchors:
                start_px = viewport.px_x(start)
                group.add(dwg.rect(
                    (start_px, box_bottom - box_px), (max(viewport.px_x(end) - start_px, 0.5), box_px),
                    fill=color, class_='anchor',
                ))
            group.add(dwg.line(
                (viewport.px_x(anchors[0][1]), box_bottom - box_px / 2),
                (viewport.px_x(anchors[1][0]), box_bottom - box_px / 2),
                stroke=lines[row.Index] or color, class_='link',
            ))
            plot.group.add(group)
    if not len(pairs.index):
        warn_no_data()
    return finish(page, plot, draw)


def arch_heights(pairs, arch_height=None):
    """
    relative height (0 to 1) of each arch: constant, or proportional to a numeric column or list of values
    """
    if arch_height is None:
        return np.ones(len(pairs.index))
    if isinstance(arch_height, str):
        if arch_height not in pairs.columns:
            raise InvalidInputError('arch height column not found in data', arch_height)
        values = pairs[arch_height].astype(float).values
    elif isinstance(arch_height, (int, float)):
        return np.full(len(pairs.index), float(arch_height))
    else:
        values = np.asarray(arch_height, dtype=float)
        if len(values) != len(pairs.index):
            raise InvalidInputError('arch heights must be given for each pair', len(values), len(pairs.index))
    if not len(values):
        return values
    highest = np.nanmax(np.abs(values))
    return values / highest if highest else np.ones(len(values))


def _arch_path(x_start, x_end, base, height, curvature):
    """
    cubic bezier path from x_start to x_end whose peak is height above (negative: below) the base
    """
    pull = (x_end - x_start) / max(curvature, 1)
    # control points 4/3 of the height above the base put the peak of the curve at the height
    control = base - height * 4 / 3
    return 'M{},{} C{},{} {},{} {},{}'.format(
        x_start, base, x_start + pull, control, x_end - pull, control, x_end, base)


@accepts_params
def plot_pairs_arches(
    page,
    data=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    assembly=None,
    style='2D',
    flip=False,
    curvature=5,
    arch_height=None,
    fill='#1f4297',
    linecolor=None,
    alpha=0.4,
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
    plot each pair as an arch from the first anchor to the second

    Args:
        style (str): 2D arches are lines between the anchor centers, 3D arches are ribbons spanning both anchors
        flip (bool): draw the arches downwards from the top of the plot
        curvature (float): larger values give rounder arches
        arch_height: None for arches of the full plot height, a constant fraction, a numeric column name or a
            list of values the arch heights are made proportional to
        fill: a color, a list of colors (recycled over the pairs) or a :class:`ColorBy`
        alpha (float): opacity of the ribbon fill
    """
    if style not in ARCH_STYLES:
        raise InvalidInputError('style must be one of {}'.format(ARCH_STYLES), style)
    plot, pairs = _new_plot(
        'pairs_arches', page, data, chrom, chromstart, chromend, assembly, x, y, width, height, just, default_units)
    fills = element_colors(pairs, fill, '#1f4297')
    lines = element_colors(pairs, linecolor, None)
    heights = arch_heights(pairs, arch_height)
    plot.pairs = pairs.assign(arch_height=heights)

    viewport = place(page, plot, xscale=plot.xscale, draw=draw)
    if viewport is not None:
        dwg = page.drawing
        left, top, vp_width, vp_height = viewport.px_box
        base = top if flip else top + vp_height
        direction = -1 if flip else 1
        for row in plot.pairs.itertuples():
            color = fills[row.Index] or 'none'
            arch = direction * row.arch_height * vp_height
            (start1, end1), (start2, end2) = sorted([(row.start1, row.end1), (row.start2, row.end2)])
            if style == '2D':
                path = dwg.path(
                    d=_arch_path(
                        viewport.px_x((start1 + end1) / 2), viewport.px_x((start2 + end2) / 2), base, arch, curvature),
                    fill='none', stroke=lines[row.Index] or color, class_='arch',
                )
            else:
                outer = _arch_path(viewport.px_x(start1), viewport.px_x(end2), base, arch, curvature)
                inner_height = arch * (start2 - end1) / max(end2 - start1, 1)
                inner = _arch_path(viewport.px_x(start2), viewport.px_x(end1), base, inner_height, curvature)
                path = dwg.path(
                    d='{} L{},{} {} Z'.format(outer, viewport.px_x(start2), base, inner[inner.index('C'):]),
                    fill=color, fill_opacity=alpha, stroke=lines[row.Index] or 'none', class_='arch',
                )
            plot.group.add(path)
    if not len(pairs.index):
        warn_no_data()
    return finish(page, plot, draw)
