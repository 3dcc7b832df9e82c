"""
genomic coordinate labels: a line along the region with the start, end and chromosome names, or one label per
chromosome for whole-genome plots
"""
from ..assembly import parse_assembly
from ..config import DEFAULTS
from ..constants import AXIS, SCALE, SCALE_FACTOR
from ..error import AnnotationError, PageError, missing_argument
from ..params import accepts_params
from ..plot.base import GenomicPlot, check_region, finish, genomic_scale, place
from ..util import format_number, natural_sort_key
from .base import check_annotation, region_axis


def format_coordinate(pos, scale=SCALE.BP, commas=True, digits=None):
    """
    Example:
        >>> format_coordinate(1500000, 'Mb')
        '1.5 Mb'
        >>> format_coordinate(1500000)
        '1,500,000 bp'
    """
    SCALE.enforce(scale)
    value = pos / SCALE_FACTOR[scale]
    if digits is None:
        digits = 0
        while digits < 3 and abs(round(value, digits) - value) > 1e-9:
            digits += 1
    return '{} {}'.format(format_number(value, digits=digits, commas=commas), scale)


def chrom_label(chrom):
    """
    short chromosome name used when labelling every chromosome of a genome
    """
    return chrom[3:] if chrom.lower().startswith('chr') else chrom


def _label_size(page, fontsize, margin, tcl, default_units):
    """
    thickness (svg user units) of the label across its axis, and its parts
    """
    config = page.settings
    text_px = config.text_height(fontsize)
    tick_px = tcl * text_px
    margin_px = page.px(page.convert(margin, default_units))
    return text_px + tick_px + margin_px, tick_px, margin_px


@accepts_params
def plot_genome_label(
    page,
    chrom=None,
    chromstart=None,
    chromend=None,
    assembly=None,
    fontsize=10,
    fontcolor='#000000',
    linecolor='#000000',
    margin=(1, 'mm'),
    scale=SCALE.BP,
    commas=True,
    digits=None,
    axis=AXIS.X,
    at=None,
    tcl=0.5,
    chrom_offsets=None,
    x=None,
    y=None,
    length=None,
    just=('left', 'top'),
    default_units=None,
    draw=True,
    params=None,
):
    """
    plot the coordinates of a genomic region along a line of the given length

    Args:
        scale (str): label positions in bp, Kb or Mb
        commas (bool): separate thousands in the labels
        axis (str): x for a horizontal label (line above the text), y for a vertical label (line right of the text)
        at (List[int]): positions to add tick marks at
        tcl (float): length of the tick marks as a fraction of the text height
        chrom_offsets (Dict[str,int]): start of each chromosome on a whole-genome axis. Each chromosome is labelled
            instead of the region ends
        length: length of the line, the label spans it
    """
    AXIS.enforce(axis)
    SCALE.enforce(scale)
    if page is None:
        raise PageError('cannot plot a genome label without a page')
    for name, value in [('x', x), ('y', y), ('length', length)]:
        if value is None:
            raise missing_argument(name)
    if chrom is None and not chrom_offsets:
        raise missing_argument('chrom')
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    default_units = default_units if default_units is not None else DEFAULTS.default_units

    thickness, tick_px, margin_px = _label_size(page, fontsize, margin, tcl, default_units)
    thickness = (thickness / page.px_per_unit, page.units)
    width, height = (length, thickness) if axis == AXIS.X else (thickness, length)
    plot = GenomicPlot(
        'genome_label', chrom=chrom, chromstart=chromstart, chromend=chromend, assembly=assembly,
        x=x, y=y, width=width, height=height, just=just, default_units=default_units,
        axis=axis, scale=scale, chrom_offsets=chrom_offsets,
    )
    if chrom_offsets:
        plot.chromstart = 0 if chromstart is None else chromstart
        if chromend is None:
            plot.chromend = max([offset + assembly.chrom_length(c) for c, offset in chrom_offsets.items()])
    else:
        check_region(plot.chromstart, plot.chromend)
        genomic_scale(plot, assembly)

    if axis == AXIS.X:
        viewport = place(page, plot, xscale=plot.xscale, clip=False, draw=draw)
    else:
        viewport = place(page, plot, yscale=(plot.chromend, plot.chromstart), clip=False, draw=draw)
    config = page.settings
    dwg = page.drawing
    left, top, vp_width, vp_height = viewport.px_box
    stroke = {'stroke': linecolor, 'stroke_width': config.axis_stroke_width}
    text_offset = tick_px + margin_px

    def along(pos):
        return viewport.px_x(pos) if axis == AXIS.X else viewport.px_y(pos)

    def add_text(text, pos, anchor):
        if axis == AXIS.X:
            element = dwg.text(
                text, insert=(pos, top + text_offset + fontsize * 0.75), fill=fontcolor,
                style=config.text_style(fontsize, anchor), class_='label',
            )
        else:
            # rotated to read upwards
            xpos = left + vp_width - text_offset
            element = dwg.text(
                text, insert=(xpos, pos), fill=fontcolor, style=config.text_style(fontsize, anchor), class_='label',
            )
            element.rotate(-90, center=(xpos, pos))
        plot.group.add(element)

    if axis == AXIS.X:
        plot.group.add(dwg.line((left, top), (left + vp_width, top), class_='axis_line', **stroke))
    else:
        plot.group.add(dwg.line(
            (left + vp_width, top), (left + vp_width, top + vp_height), class_='axis_line', **stroke))
    for pos in ([at] if isinstance(at, (int, float)) else at or []):
        tick = along(pos)
        if axis == AXIS.X:
            plot.group.add(dwg.line((tick, top), (tick, top + tick_px), class_='tick', **stroke))
        else:
            plot.group.add(dwg.line(
                (left + vp_width, tick), (left + vp_width - tick_px, tick), class_='tick', **stroke))

    if chrom_offsets:
        drawn_end = None
        for chrom_name in sorted(chrom_offsets, key=natural_sort_key):
            center = chrom_offsets[chrom_name] + assembly.chrom_length(chrom_name) / 2
            pos = along(center)
            text = chrom_label(chrom_name)
            half_width = config.text_width(text, fontsize) / 2
            # skip labels that would overlap the previous one
            if drawn_end is not None and pos - half_width < drawn_end:
                continue
            add_text(text, pos, 'middle')
            drawn_end = pos + half_width + config.padding
    else:
        start_text = format_coordinate(plot.chromstart, scale, commas, digits)
        end_text = format_coordinate(plot.chromend, scale, commas, digits)
        if axis == AXIS.X:
            add_text(start_text, left, 'start')
            add_text(end_text, left + vp_width, 'end')
            add_text(plot.chrom, left + vp_width / 2, 'middle')
        else:
            add_text(start_text, top, 'end')
            add_text(end_text, top + vp_height, 'start')
            add_text(plot.chrom, top + vp_height / 2, 'middle')
    return finish(page, plot, draw)


@accepts_params
def annotate_genome_label(
    page,
    plot=None,
    x=None,
    y=None,
    just=('left', 'top'),
    axis=AXIS.X,
    fontsize=10,
    fontcolor='#000000',
    linecolor='#000000',
    margin=(1, 'mm'),
    scale=SCALE.BP,
    commas=True,
    digits=None,
    at=None,
    tcl=0.5,
    default_units=None,
    draw=True,
    params=None,
):
    """
    label the genomic region of a plot along its width (x) or height (y). The region, assembly and length of the
    label come from the plot, whole-genome Manhattan plots label each chromosome

    Raises:
        AnnotationError: the plot has no genomic coordinates
    """
    check_annotation(page, plot, 'a genome label')
    offsets = getattr(plot, 'chrom_offsets', None)
    if not offsets and (plot.chrom is None or plot.chromstart is None or plot.chromend is None):
        raise AnnotationError(
            'Invalid input plot. Please input a plot that has genomic coordinates associated with it.', plot)
    AXIS.enforce(axis)
    viewport = plot.viewport
    length = (viewport.width if axis == AXIS.X else viewport.height, page.units)
    if offsets:
        chrom, chromstart, chromend = None, plot.chromstart, plot.chromend
    else:
        chrom, chromstart, chromend = region_axis(plot, axis)
    label = plot_genome_label(
        page, chrom=chrom, chromstart=chromstart, chromend=chromend, assembly=plot.assembly,
        fontsize=fontsize, fontcolor=fontcolor, linecolor=linecolor, margin=margin, scale=scale, commas=commas,
        digits=digits, axis=axis, at=at, tcl=tcl, chrom_offsets=offsets,
        x=x, y=y, length=length, just=just, default_units=default_units, draw=draw,
    )
    if draw:
        plot.annotations.append(label)
    return label
