"""
mark paired-range pixels (ex. called loops) on square Hi-C plots
"""
import math

import pandas as pd

from ..constants import HIC_HALF, PIXEL_TYPE
from ..error import AnnotationError, missing_argument
from ..params import accepts_params
from ..plot.shapes import arrow_head, stroke_style
from ..readers import read_paired_data
from .base import check_annotation, finish_annotation, new_annotation


INHERIT = 'inherit'


def pixel_boxes(pairs, plot, half):
    """
    native column (x-axis) and row (y-axis) extents of each pair on a square plot. Intrachromosomal pairs are
    drawn above the diagonal (column after row) for the top half and below it for the bottom half

    Returns:
        pandas.DataFrame: col_start, col_end, row_start, row_end and half columns
    """
    columns = ['col_start', 'col_end', 'row_start', 'row_end', 'half']
    boxes = []
    for pair in pairs.itertuples():
        first = (pair.chrom1, pair.start1, pair.end1)
        second = (pair.chrom2, pair.start2, pair.end2)
        if plot.altchrom != plot.chrom:
            if first[0] == plot.altchrom and second[0] == plot.chrom:
                first, second = second, first
            if first[0] != plot.chrom or second[0] != plot.altchrom:
                continue
            boxes.append((first[1], first[2], second[1], second[2], HIC_HALF.BOTH))
            continue
        if first[0] != plot.chrom or second[0] != plot.chrom:
            continue
        low, high = sorted([first, second], key=lambda anchor: anchor[1])
        if half in [HIC_HALF.TOP, HIC_HALF.BOTH]:
            boxes.append((high[1], high[2], low[1], low[2], HIC_HALF.TOP))
        if half in [HIC_HALF.BOTTOM, HIC_HALF.BOTH]:
            boxes.append((low[1], low[2], high[1], high[2], HIC_HALF.BOTTOM))
    boxes = pd.DataFrame(boxes, columns=columns)
    keep = (
        (boxes['col_end'] >= plot.chromstart) & (boxes['col_start'] <= plot.chromend)
        & (boxes['row_end'] >= plot.altchromstart) & (boxes['row_start'] <= plot.altchromend)
    )
    return boxes[keep].reset_index(drop=True)


@accepts_params
def annotate_pixels(
    page,
    plot=None,
    data=None,
    type=PIXEL_TYPE.BOX,
    half=INHERIT,
    shift=4,
    linecolor=None,
    lwd=None,
    lty=1,
    draw=True,
    params=None,
):
    """
    annotate pixels of a square Hi-C plot from paired ranges

    Args:
        data: paired ranges (see :func:`genopage.readers.read_paired_data`)
        type (str): box outlines the pixel, circle circles it and arrow points at it
        half (str): half of the plot to annotate, inherit uses the half of the plot
        shift (float): distance (points) between an arrow and its pixel, the arrow is twice as long

    Raises:
        AnnotationError: the plot is not a square Hi-C plot or the half is not shown in it
    """
    check_annotation(page, plot, 'pixel annotations')
    if data is None:
        raise missing_argument('data')
    if plot.plot_type != 'hic_square':
        raise AnnotationError('pixels can only be annotated on square Hi-C plots', plot.plot_type)
    PIXEL_TYPE.enforce(type)
    half = plot.half if half == INHERIT else HIC_HALF.enforce(half)
    if plot.half != HIC_HALF.BOTH and half != plot.half:
        raise AnnotationError('cannot annotate the {} half of a plot showing the {} half'.format(half, plot.half))

    config = page.settings
    dwg = page.drawing
    viewport = plot.viewport
    linecolor = config.pixel_color if linecolor is None else linecolor
    lwd = config.pixel_stroke_width if lwd is None else lwd
    style = stroke_style(linecolor, lwd, lty)

    boxes = pixel_boxes(read_paired_data(data, plot.assembly), plot, half)
    pixels = new_annotation(page, plot, 'pixels', chrom=plot.chrom, type=type, half=half, boxes=boxes)
    left_edge, top_edge, width, height = viewport.px_box
    for box in boxes.itertuples():
        left = max(viewport.px_x(box.col_start), left_edge)
        right = min(viewport.px_x(box.col_end), left_edge + width)
        top = max(viewport.px_y(box.row_start), top_edge)
        bottom = min(viewport.px_y(box.row_end), top_edge + height)
        if type == PIXEL_TYPE.BOX:
            pixels.group.add(dwg.rect(
                (left, top), (max(right - left, 0), max(bottom - top, 0)), fill='none', class_='pixel', **style))
        elif type == PIXEL_TYPE.CIRCLE:
            pixels.group.add(dwg.circle(
                center=((left + right) / 2, (top + bottom) / 2), r=math.hypot(right - left, bottom - top) / 2,
                fill='none', class_='pixel', **style))
        else:
            # arrows point at the pixel from the side away from the diagonal
            if box.half == HIC_HALF.BOTTOM:
                tip = (left - shift, bottom + shift)
                tail = (tip[0] - 2 * shift, tip[1] + 2 * shift)
            else:
                tip = (right + shift, top - shift)
                tail = (tip[0] + 2 * shift, tip[1] - 2 * shift)
            arrow = dwg.g(class_='pixel')
            arrow.add(dwg.line(tail, tip, **style))
            arrow.add(dwg.polyline(
                arrow_head(tail, tip, shift), fill='none', stroke=linecolor, stroke_width=lwd))
            pixels.group.add(arrow)
    return finish_annotation(page, plot, pixels, draw)
