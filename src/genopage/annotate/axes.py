"""
x and y axes in the native scale of a placed plot
"""
from ..error import InvalidInputError
from ..params import accepts_params
from ..util import format_number
from .base import check_annotation, finish_annotation, new_annotation


def tick_labels(at, label, digits=None):
    """
    Args:
        at (List[float]): tick positions
        label: True to label with the tick positions, False for no labels or a list of labels matching at

    Returns:
        List[str]: one label (or None) per tick
    """
    if label is True:
        return [format_number(a, digits=_digits(at) if digits is None else digits) for a in at]
    elif label is False or label is None:
        return [None] * len(at)
    label = [str(lab) for lab in label]
    if len(label) != len(at):
        raise InvalidInputError('labels must be given for each tick', label, at)
    return label


def _digits(values):
    """
    fewest decimal places (up to 3) that represent all values exactly
    """
    for digits in range(0, 4):
        if all([abs(round(v, digits) - v) < 1e-9 for v in values]):
            return digits
    return 3


def _ticks(scale, at):
    if at is None:
        return list(scale)
    if isinstance(at, (int, float)):
        return [at]
    return list(at)


@accepts_params
def annotate_xaxis(
    page, plot=None, at=None, label=True, main=True, axis_line=False, fontsize=None, fontcolor=None,
    linecolor=None, digits=None, draw=True, params=None,
):
    """
    add an x-axis to a plot

    Args:
        at (List[float]): native x values of the ticks, defaults to both ends of the scale
        label: True to label the ticks with their values, False for no labels, or the labels to use
        main (bool): draw the axis below the plot, otherwise above it
        axis_line (bool): draw the line along the axis
    """
    check_annotation(page, plot, 'an x-axis')
    viewport = plot.viewport
    config = page.settings
    dwg = page.drawing
    fontsize = config.default_font_size if fontsize is None else fontsize
    fontcolor = config.label_color if fontcolor is None else fontcolor
    linecolor = config.axis_color if linecolor is None else linecolor
    at = _ticks(viewport.xscale, at)
    labels = tick_labels(at, label, digits)

    axis = new_annotation(page, plot, 'xaxis', at=at, main=main)
    left, top, width, height = viewport.px_box
    base = top + height if main else top
    direction = 1 if main else -1
    stroke = {'stroke': linecolor, 'stroke_width': config.axis_stroke_width}
    if axis_line:
        axis.group.add(dwg.line((left, base), (left + width, base), class_='axis_line', **stroke))
    for pos, text in zip(at, labels):
        xpos = viewport.px_x(pos)
        tick_end = base + direction * config.tick_length
        axis.group.add(dwg.line((xpos, base), (xpos, tick_end), class_='tick', **stroke))
        if text is None:
            continue
        if main:
            ypos = tick_end + config.padding + fontsize * 0.75
        else:
            ypos = tick_end - config.padding
        axis.group.add(dwg.text(
            text, insert=(xpos, ypos), fill=fontcolor, style=config.text_style(fontsize, 'middle'), class_='label',
        ))
    return finish_annotation(page, plot, axis, draw)


@accepts_params
def annotate_yaxis(
    page, plot=None, at=None, label=True, main=True, axis_line=False, fontsize=None, fontcolor=None,
    linecolor=None, digits=None, draw=True, params=None,
):
    """
    add a y-axis to a plot

    Args:
        at (List[float]): native y values of the ticks, defaults to both ends of the scale
        label: True to label the ticks with their values, False for no labels, or the labels to use
        main (bool): draw the axis left of the plot, otherwise right of it
        axis_line (bool): draw the line along the axis
    """
    check_annotation(page, plot, 'a y-axis')
    viewport = plot.viewport
    config = page.settings
    dwg = page.drawing
    fontsize = config.default_font_size if fontsize is None else fontsize
    fontcolor = config.label_color if fontcolor is None else fontcolor
    linecolor = config.axis_color if linecolor is None else linecolor
    at = _ticks(viewport.yscale, at)
    labels = tick_labels(at, label, digits)

    axis = new_annotation(page, plot, 'yaxis', at=at, main=main)
    left, top, width, height = viewport.px_box
    base = left if main else left + width
    direction = -1 if main else 1
    stroke = {'stroke': linecolor, 'stroke_width': config.axis_stroke_width}
    if axis_line:
        axis.group.add(dwg.line((base, top), (base, top + height), class_='axis_line', **stroke))
    for value, text in zip(at, labels):
        ypos = viewport.px_y(value)
        tick_end = base + direction * config.tick_length
        axis.group.add(dwg.line((base, ypos), (tick_end, ypos), class_='tick', **stroke))
        if text is None:
            continue
        axis.group.add(dwg.text(
            text,
            insert=(tick_end + direction * config.padding, ypos + config.font_central_shift_ratio * fontsize),
            fill=fontcolor,
            style=config.text_style(fontsize, 'end' if main else 'start'),
            class_='label',
        ))
    return finish_annotation(page, plot, axis, draw)
