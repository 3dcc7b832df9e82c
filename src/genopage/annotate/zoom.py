"""
lines connecting a genomic sub-region of a plot to another part of the page, usually a plot of the zoomed in
region below it
"""
from ..error import InvalidInputError, missing_argument
from ..params import accepts_params
from ..plot.base import check_region
from ..plot.shapes import as_list, stroke_style
from .base import check_annotation, check_chrom, finish_annotation, genome_x, new_annotation


def _pair(value, name):
    """
    a single value recycled to a pair, or a pair of values
    """
    values = as_list(value)
    if len(values) == 1:
        return values * 2
    if len(values) != 2:
        raise InvalidInputError('{} must be a single value or a pair of values'.format(name), value)
    return values


@accepts_params
def annotate_zoom_lines(
    page,
    plot=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    y0=None,
    x1=None,
    y1=None,
    extend=0,
    default_units=None,
    linecolor=None,
    lwd=1,
    lty=2,
    draw=True,
    params=None,
):
    """
    draw two lines from the start and end of a region of a plot to the page positions x1, y1

    Args:
        chrom (str): chromosome of the region, must be shown in the plot
        chromstart (int): start of the region, defaults to the start of the chromosome
        chromend (int): end of the region, defaults to the end of the chromosome
        y0: page y position(s) the lines start at
        x1: page x position(s) the lines end at, defaults to the x positions of the region
        y1: page y position(s) the lines end at
        extend: length(s) the lines are extended above y0 (first) and below y1 (second)

    Raises:
        AnnotationError: the chromosome is not shown in the plot
    """
    check_annotation(page, plot, 'zoom lines')
    for name, value in [('chrom', chrom), ('y0', y0), ('y1', y1)]:
        if value is None:
            raise missing_argument(name)
    check_chrom(plot, chrom)
    check_region(chromstart, chromend)
    if chromstart is None:
        chromstart, chromend = 1, plot.assembly.chrom_length(chrom)
    viewport = plot.viewport
    x0 = [viewport.native_x(genome_x(plot, chrom, pos)) for pos in [chromstart, chromend]]

    zoom = new_annotation(
        page, plot, 'zoom', chrom=chrom, chromstart=chromstart, chromend=chromend, default_units=default_units)
    units = zoom.default_units
    y0 = [page.parse_y(v, units) for v in _pair(y0, 'y0')]
    y1 = [page.parse_y(v, units) for v in _pair(y1, 'y1')]
    x1 = x0 if x1 is None else [page.convert(v, units) for v in _pair(x1, 'x1')]
    extend = [page.convert(v, units) for v in _pair(extend, 'extend')]
    zoom.x0, zoom.y0, zoom.x1, zoom.y1 = x0, y0, x1, y1

    dwg = page.drawing
    config = page.settings
    style = stroke_style(config.zoom_color if linecolor is None else linecolor, lwd, lty)
    for start_x, start_y, end_x, end_y in zip(x0, y0, x1, y1):
        zoom.group.add(dwg.line(
            (page.px(start_x), page.px(start_y)), (page.px(end_x), page.px(end_y)), class_='zoom_line', **style))
        if extend[0]:
            zoom.group.add(dwg.line(
                (page.px(start_x), page.px(start_y)), (page.px(start_x), page.px(start_y - extend[0])),
                class_='zoom_extend', **style))
        if extend[1]:
            zoom.group.add(dwg.line(
                (page.px(end_x), page.px(end_y)), (page.px(end_x), page.px(end_y + extend[1])),
                class_='zoom_extend', **style))
    return finish_annotation(page, plot, zoom, draw)
