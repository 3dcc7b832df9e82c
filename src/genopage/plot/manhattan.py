"""
GWAS Manhattan plots of -log10(p) by genomic position, for a region or the whole genome
"""
import itertools
import math

import numpy as np
from shapely.geometry import Point

from ..assembly import parse_assembly
from ..colors import ColorBy, apply_colorby
from ..config import DEFAULTS
from ..error import InvalidInputError, missing_argument
from ..interval import IntervalMapping
from ..params import accepts_params
from ..readers import read_gwas
from ..util import logger, natural_sort_key
from .base import GenomicPlot, check_page, check_placement, check_region, finish, genomic_scale, place, warn_no_data


def chrom_offsets(assembly, chroms=None, space=0.01):
    """
    position of each chromosome on a single whole-genome axis. Chromosomes are separated by space (fraction of the
    total genome length)

    Returns:
        Tuple[Dict[str,int],IntervalMapping,int]: start offset by chromosome, mapping from the whole-genome axis back to
        chromosome positions, and the length of the axis
    """
    chroms = chroms if chroms is not None else assembly.chroms()
    chroms = sorted(chroms, key=natural_sort_key)
    total = sum([assembly.chrom_length(c) for c in chroms])
    gap = int(round(space * total))
    offsets = {}
    mapping = IntervalMapping()
    pos = 0
    for chrom in chroms:
        length = assembly.chrom_length(chrom)
        offsets[chrom] = pos
        mapping.add((pos + 1, pos + length), (1, length), opposing_directions=False)
        pos += length + gap
    return offsets, mapping, max(pos - gap, 1)


def _point_colors(data, fill, offsets=None):
    if isinstance(fill, ColorBy):
        return apply_colorby(data, fill)
    if isinstance(fill, (list, tuple)):
        if offsets:
            # alternate colors by chromosome
            lookup = dict(zip(offsets.keys(), itertools.cycle(fill)))
            return [lookup.get(c, fill[0]) for c in data['chrom']]
        return [fill[0]] * len(data.index)
    return [fill] * len(data.index)


@accepts_params
def plot_manhattan(
    page,
    data=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    assembly=None,
    fill='#a9a9a9',
    sig_line=False,
    sig_val=5e-8,
    sig_col=None,
    baseline=False,
    baseline_color='#bebebe',
    range=None,
    ymax=1,
    space=0.01,
    lead_snp=None,
    density=0.5,
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
    plot -log10(p) for each variant

    Without a chrom the whole genome is drawn with the chromosomes of the assembly laid end to end, separated
    by the space fraction. The chromosome offsets are stored on the plot for annotation

    Args:
        fill: a color, a list of colors alternating by chromosome, or a :class:`ColorBy`
        sig_line (bool): draw a line at the significance threshold
        sig_val (float): p-value significance threshold
        sig_col (str): color of the variants passing the significance threshold
        range (Tuple[float,float]): y range in -log10(p), defaults to 0 to the largest value
        ymax (float): fraction of the largest value used as the top of the default range
        lead_snp (dict): variant to highlight: snp (id in the snp column, or the smallest p-value when not given),
            fill, fontsize
        density (float): points overlapping the points already drawn by more than this fraction of their area are
            not drawn, more significant variants are drawn first
    """
    if data is None:
        raise missing_argument('data')
    if range is not None and (len(range) != 2 or range[0] >= range[1]):
        raise InvalidInputError('range must be given as (low, high) with low less than high', range)
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    plot = GenomicPlot(
        'manhattan', chrom=chrom, chromstart=chromstart, chromend=chromend, assembly=assembly,
        x=x, y=y, width=width, height=height, just=just, default_units=default_units,
        chrom_offsets=None, chrom_mapping=None, sig_val=sig_val,
    )
    check_placement(plot)
    check_page(page, plot)
    check_region(plot.chromstart, plot.chromend)

    gwas = read_gwas(data)
    if chrom is None:
        if plot.chromstart is not None:
            raise InvalidInputError('chromstart and chromend require a chrom')
        chroms = [c for c in assembly.chroms() if c in set(gwas['chrom'])] or assembly.chroms()
        offsets, mapping, total = chrom_offsets(assembly, chroms, space)
        gwas = gwas[gwas['chrom'].isin(offsets.keys())].copy()
        gwas['genome_pos'] = [offsets[c] + p for c, p in zip(gwas['chrom'], gwas['pos'])]
        plot.chrom_offsets = offsets
        plot.chrom_mapping = mapping
        plot.chromstart = 0
        plot.chromend = total
        colors = _point_colors(gwas, fill, offsets)
    else:
        genomic_scale(plot, assembly)
        gwas = gwas[
            (gwas['chrom'] == plot.chrom) & (gwas['pos'] >= plot.chromstart) & (gwas['pos'] <= plot.chromend)
        ].copy()
        gwas['genome_pos'] = gwas['pos']
        colors = _point_colors(gwas, fill)
    gwas['log_p'] = -np.log10(gwas['p'].astype(float))
    gwas['color'] = colors
    if sig_col is not None:
        gwas.loc[gwas['p'] <= sig_val, 'color'] = sig_col
    gwas = gwas.reset_index(drop=True)

    if range is None:
        high = float(gwas['log_p'].max()) * ymax if len(gwas.index) else 1
        range = (0, high if high > 0 else 1)
    plot.range = tuple(range)
    plot.gwas = gwas

    viewport = place(page, plot, xscale=(plot.chromstart, plot.chromend), yscale=plot.range, draw=draw)
    if viewport is not None:
        config = page.settings
        dwg = page.drawing
        radius = config.manhattan_point_radius
        kept = []
        covered = None
        # the most significant variants are kept first and drawn last (on top)
        for row in gwas.sort_values('log_p', ascending=False).itertuples():
            center = (viewport.px_x(row.genome_pos), viewport.px_y(min(row.log_p, plot.range[1])))
            current = Point(*center).buffer(radius)
            if covered is not None and covered.intersection(current).area / current.area > density:
                continue
            covered = current if covered is None else covered.union(current)
            kept.append((center, row.color))
        for center, color in reversed(kept):
            plot.group.add(dwg.circle(center=center, r=radius, fill=color or 'none', class_='variant'))
        logger.debug('drew {} of {} points (density={})'.format(len(kept), len(gwas.index), density))

        left, top, vp_width, vp_height = viewport.px_box
        if baseline:
            plot.group.add(dwg.line(
                (left, viewport.px_y(plot.range[0])), (left + vp_width, viewport.px_y(plot.range[0])),
                stroke=baseline_color, class_='baseline',
            ))
        if sig_line:
            sig_y = viewport.px_y(-math.log10(sig_val))
            plot.group.add(dwg.line(
                (left, sig_y), (left + vp_width, sig_y),
                stroke=sig_col or config.manhattan_sig_color, stroke_dasharray='3,3', class_='sig_line',
            ))
        if lead_snp is not None and len(gwas.index):
            _draw_lead_snp(dwg, plot, viewport, config, gwas, lead_snp)
    if not len(gwas.index):
        warn_no_data()
    return finish(page, plot, draw)


def _draw_lead_snp(dwg, plot, viewport, config, gwas, lead_snp):
    lead_snp = dict(lead_snp)
    snp = lead_snp.get('snp')
    if snp is None:
        lead = gwas.loc[gwas['p'].idxmin()]
    else:
        if 'snp' not in gwas.columns:
            raise InvalidInputError('a lead snp requires a snp column in the data')
        matches = gwas[gwas['snp'] == snp]
        if not len(matches.index):
            logger.warning('lead snp not found in region: {}'.format(snp))
            return
        lead = matches.iloc[0]
    color = lead_snp.get('fill', config.manhattan_lead_color)
    fontsize = lead_snp.get('fontsize', config.default_font_size)
    cx = viewport.px_x(lead['genome_pos'])
    cy = viewport.px_y(min(lead['log_p'], plot.range[1]))
    size = config.manhattan_point_radius * 2.5
    plot.group.add(dwg.polygon(
        [(cx, cy - size), (cx + size, cy), (cx, cy + size), (cx - size, cy)], fill=color, class_='lead_snp',
    ))
    label = str(lead['snp']) if 'snp' in gwas.columns else '{}:{}'.format(lead['chrom'], lead['pos'])
    plot.group.add(dwg.text(
        label, insert=(cx, cy - size - config.padding), fill=config.label_color,
        style=config.text_style(fontsize, 'middle'), class_='label',
    ))
    plot.lead_snp = label
