"""
translucent boxes marking a genomic sub-region of a plot
"""
from ..error import InvalidRegionError
from ..params import accepts_params
from ..plot.base import check_region
from .base import check_annotation, check_chrom, finish_annotation, genome_x, new_annotation


@accepts_params
def annotate_highlight(
    page,
    plot=None,
    chrom=None,
    chromstart=None,
    chromend=None,
    y=None,
    height=None,
    just=('left', 'top'),
    fill=None,
    linecolor=None,
    alpha=None,
    default_units=None,
    draw=True,
    params=None,
):
    """
    highlight a region of a plot. The box spans the region across the plot and the given y and height, which
    default to the top and height of the plot

    Args:
        chrom (str): chromosome of the region, defaults to the chromosome of the plot
        chromstart (int): start of the region, defaults to the start of the plot
        chromend (int): end of the region, defaults to the end of the plot
        y: y position of the box (may be relative to the previous plot, see :meth:`Page.parse_y`)
        just: justification of the box, only the vertical justification is used

    Raises:
        AnnotationError: the chromosome is not shown in the plot
    """
    check_annotation(page, plot, 'a highlight')
    config = page.settings
    viewport = plot.viewport
    chrom = plot.chrom if chrom is None else chrom
    check_chrom(plot, chrom)
    check_region(chromstart, chromend)
    if chromstart is None:
        if getattr(plot, 'chrom_offsets', None):
            chromstart, chromend = 1, plot.assembly.chrom_length(chrom)
        else:
            chromstart, chromend = plot.chromstart, plot.chromend
    start = genome_x(plot, chrom, chromstart)
    end = genome_x(plot, chrom, chromend)
    if end < viewport.xscale[0] or start > viewport.xscale[1]:
        raise InvalidRegionError('highlight region is outside of the plot', chrom, chromstart, chromend)

    highlight = new_annotation(
        page, plot, 'highlight', chrom=chrom, chromstart=chromstart, chromend=chromend,
        y=y, height=height, just=just, default_units=default_units,
    )
    if y is None or height is None:
        top, box_height = viewport.y, viewport.height
    else:
        box = page.new_viewport(
            'highlight', viewport.x, y, 1, height, just=just, default_units=highlight.default_units,
            register=False, name=highlight.name,
        )
        top, box_height = box.y, box.height
    left = max(viewport.native_x(start), viewport.x)
    right = min(viewport.native_x(end), viewport.x + viewport.width)
    highlight.group.add(page.drawing.rect(
        (page.px(left), page.px(top)), (page.px(max(right - left, 0)), page.px(box_height)),
        fill=config.highlight_fill if fill is None else fill,
        fill_opacity=config.highlight_opacity if alpha is None else alpha,
        stroke=linecolor or 'none',
        class_='highlight',
    ))
    return finish_annotation(page, plot, highlight, draw)
