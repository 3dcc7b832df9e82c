"""
color ramp legends for plots colored by a continuous palette (ex. Hi-C plots)
"""
import math
import warnings

import numpy as np

from ..colors import map_colors
from ..constants import COLOR_TRANS, ORIENTATION
from ..error import AnnotationError, missing_argument
from ..params import accepts_params
from ..plot.hic import log_base
from ..util import format_number
from .base import check_annotation, finish_annotation, new_annotation


LEGEND_STEPS = 100


def nice_ticks(low, high, count=5):
    """
    round numbers spanning low to high, about count of them

    Example:
        >>> nice_ticks(0, 70)
        [0.0, 20.0, 40.0, 60.0, 80.0]
    """
    if high < low:
        low, high = high, low
    if high == low:
        return [float(low)]
    raw = (high - low) / max(count, 1)
    magnitude = 10 ** math.floor(math.log10(raw))
    step = magnitude
    for multiple in [1, 2, 5, 10]:
        step = multiple * magnitude
        if step >= raw:
            break
    first = math.floor(low / step) * step
    last = math.ceil(high / step) * step
    return [float(v) for v in np.round(np.arange(first, last + step / 2, step), 10)]


def legend_breaks(zrange, color_trans=COLOR_TRANS.LINEAR, breaks=None):
    """
    tick values of a heatmap legend, in the untransformed scale

    Given breaks outside the zrange are dropped. Otherwise linear scales use round numbers across the range and log
    scales use the five largest powers of round exponents within the range
    """
    low, high = sorted(zrange)
    if breaks is not None:
        return [b for b in breaks if low <= b <= high]
    if color_trans == COLOR_TRANS.LINEAR:
        return [b for b in nice_ticks(low, high) if low <= b <= high]
    base = log_base(color_trans)
    log_low, log_high = math.log(low, base), math.log(high, base)
    exponents = [e for e in nice_ticks(log_low, log_high, 20) if log_low < e < log_high]
    return [base ** e for e in exponents[-5:]]


@accepts_params
def annotate_heatmap_legend(
    page,
    plot=None,
    orientation=ORIENTATION.VERTICAL,
    fontsize=8,
    fontcolor=None,
    linecolor=None,
    scientific=False,
    digits=0,
    ticks=False,
    breaks=None,
    border=False,
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
    add a legend of the color palette of a plot, labelled with the low and high values of its zrange

    Args:
        orientation (str): v for a vertical ramp (high at the top), h for a horizontal ramp (high on the right)
        scientific (bool): label values in scientific notation
        digits (int): decimal places of the labels
        ticks (bool): add tick marks to both sides of the ramp
        breaks (List[float]): values to put the tick marks at
        border (bool): draw a border around the ramp

    Raises:
        AnnotationError: the plot does not have a color palette or a zrange
    """
    check_annotation(page, plot, 'a heatmap legend', placed=False)
    if getattr(plot, 'color_palette', None) is None:
        raise AnnotationError('Cannot add heatmap legend to an input plot that does not have a color palette.')
    if getattr(plot, 'zrange', None) is None:
        raise AnnotationError('Cannot add heatmap legend to an input plot that does not have a zrange.')
    ORIENTATION.enforce(orientation)
    for name, value in [('x', x), ('y', y), ('width', width), ('height', height)]:
        if value is None:
            raise missing_argument(name)
    min_val, max_val = plot.zrange
    if min_val > max_val:
        warnings.warn('min_val is larger than max_val. Legend labels may be incorrect.')

    config = page.settings
    dwg = page.drawing
    fontcolor = config.legend_font_color if fontcolor is None else fontcolor
    linecolor = config.legend_line_color if linecolor is None else linecolor
    color_trans = getattr(plot, 'color_trans', None) or COLOR_TRANS.LINEAR
    low, high = min_val, max_val
    if color_trans != COLOR_TRANS.LINEAR:
        base = log_base(color_trans)
        low, high = math.log(min_val, base), math.log(max_val, base)
    colors = map_colors(
        np.linspace(low, high, LEGEND_STEPS), plot.color_palette, range=(min(low, high), max(low, high)))

    legend = new_annotation(
        page, plot, 'heatmap_legend', x=x, y=y, width=width, height=height, just=just, default_units=default_units,
        orientation=orientation, zrange=plot.zrange, colors=colors,
    )
    viewport = page.new_viewport(
        'heatmap_legend', x, y, width, height, just=just, default_units=legend.default_units, register=False,
        name=legend.name,
    )
    legend.viewport = viewport
    left, top, vp_width, vp_height = viewport.px_box
    low_text = format_number(min_val, digits=digits, scientific=scientific)
    high_text = format_number(max_val, digits=digits, scientific=scientific)
    text_px = config.text_height(fontsize)
    style = {'fill': fontcolor, 'class_': 'label'}

    if orientation == ORIENTATION.VERTICAL:
        gradient = dwg.linearGradient(start=(0, 1), end=(0, 0), id='{}_ramp'.format(legend.name))
        ramp_top = top + text_px * 1.5
        ramp_box = ((left, ramp_top), (vp_width, max(vp_height - 3 * text_px, 0)))
        legend.group.add(dwg.text(
            low_text, insert=(left + vp_width / 2, top + vp_height), style=config.text_style(fontsize, 'middle'),
            **style))
        legend.group.add(dwg.text(
            high_text, insert=(left + vp_width / 2, top + fontsize * 0.75), style=config.text_style(fontsize, 'middle'),
            **style))
    else:
        gradient = dwg.linearGradient(start=(0, 0), end=(1, 0), id='{}_ramp'.format(legend.name))
        low_px = config.text_width(low_text, fontsize)
        high_px = config.text_width(high_text, fontsize)
        digit_px = config.text_width('0', fontsize)
        ramp_left = left + low_px + digit_px / 2
        ramp_box = ((ramp_left, top), (max(vp_width - low_px - high_px - digit_px, 0), vp_height))
        baseline = top + vp_height / 2 + config.font_central_shift_ratio * fontsize
        legend.group.add(dwg.text(
            low_text, insert=(left, baseline), style=config.text_style(fontsize, 'start'), **style))
        legend.group.add(dwg.text(
            high_text, insert=(left + vp_width, baseline), style=config.text_style(fontsize, 'end'), **style))

    for index, color in enumerate(colors):
        gradient.add_stop_color(offset=index / (len(colors) - 1), color=color)
    if draw:
        page.add_def(legend, gradient)
    legend.group.add(dwg.rect(ramp_box[0], ramp_box[1], fill=gradient.get_paint_server(), class_='color_ramp'))

    legend.ticks = None
    if ticks:
        legend.ticks = legend_breaks((min_val, max_val), color_trans, breaks)
        (ramp_x, ramp_y), (ramp_w, ramp_h) = ramp_box
        span = high - low
        fraction = config.legend_tick_fraction
        for value in legend.ticks:
            native = math.log(value, log_base(color_trans)) if color_trans != COLOR_TRANS.LINEAR else value
            pos = (native - low) / span if span else 0
            if orientation == ORIENTATION.VERTICAL:
                ypos = ramp_y + ramp_h * (1 - pos)
                segments = [((ramp_x, ypos), (ramp_x + fraction * ramp_w, ypos)),
                            ((ramp_x + (1 - fraction) * ramp_w, ypos), (ramp_x + ramp_w, ypos))]
            else:
                xpos = ramp_x + ramp_w * pos
                segments = [((xpos, ramp_y + ramp_h), (xpos, ramp_y + (1 - fraction) * ramp_h)),
                            ((xpos, ramp_y + fraction * ramp_h), (xpos, ramp_y))]
            for start, end in segments:
                legend.group.add(dwg.line(start, end, stroke=linecolor, class_='tick'))
    if border:
        legend.group.add(dwg.rect(ramp_box[0], ramp_box[1], fill='none', stroke=linecolor, class_='border'))
    return finish_annotation(page, plot, legend, draw)
