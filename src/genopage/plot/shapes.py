"""
basic elements placed directly in page coordinates: circles, rectangles, segments, polygons, text and legends
"""
import itertools
import math
import numbers

from ..constants import ORIENTATION
from ..error import InvalidInputError, PageError, missing_argument
from ..page import parse_just
from ..params import accepts_params
from ..util import logger
from .base import GenomicPlot


LINE_TYPES = {
    1: None,
    2: '4,4',
    3: '1,3',
    4: '1,3,4,3',
    5: '7,3',
    6: '2,2,6,2',
    'solid': None,
    'dashed': '4,4',
    'dotted': '1,3',
    'dotdash': '1,3,4,3',
    'longdash': '7,3',
    'twodash': '2,2,6,2',
}
""":class:`dict`: svg stroke-dasharray by line type"""

ARROW_ENDS = [None, 'first', 'last', 'both']


def dasharray(lty):
    try:
        return LINE_TYPES[lty]
    except KeyError:
        raise InvalidInputError('invalid line type', lty)


def stroke_style(linecolor, lwd=1, lty=1):
    """
    svg stroke attributes for a line color, width (points) and line type
    """
    style = {'stroke': linecolor if linecolor else 'none', 'stroke_width': lwd}
    dashes = dasharray(lty)
    if dashes:
        style['stroke_dasharray'] = dashes
    return style


def _is_unit(value):
    return isinstance(value, tuple) and len(value) == 2 and isinstance(value[1], str)


def as_list(value):
    if value is None:
        return []
    if _is_unit(value) or isinstance(value, (str, numbers.Number)):
        return [value]
    return list(value)


def _recycle(values, length):
    if not values:
        return [None] * length
    return list(itertools.islice(itertools.cycle(values), length))


def _convert_x(page, values, units):
    return [page.px(page.convert(v, units)) for v in values]


def _convert_y(page, values, units):
    return [page.px(page.parse_y(v, units)) for v in values]


def _shape(page, shape_type, default_units, **kwargs):
    if page is None:
        raise PageError('cannot plot a {} without a page'.format(shape_type))
    shape = GenomicPlot(shape_type, default_units=default_units, **kwargs)
    name = page.new_element_name(shape_type)
    shape.group = page.drawing.g(id=name, class_=shape_type)
    shape.name = name
    return shape


def _finish_shape(page, shape, draw=True):
    if draw:
        page.add(shape)
    logger.info('{}[{}]'.format(shape.plot_type, shape.name))
    return shape


@accepts_params
def plot_circle(
    page, x=None, y=None, r=None, default_units=None, linecolor='#000000', lwd=1, lty=1, fill=None, alpha=1, draw=True,
    params=None,
):
    """
    plot one or more circles, x, y and r are recycled to the longest of them
    """
    for name, value in [('x', x), ('y', y), ('r', r)]:
        if value is None:
            raise missing_argument(name)
    shape = _shape(page, 'circle', default_units, x=x, y=y, r=r)
    xs, ys, rs = as_list(x), as_list(y), as_list(r)
    length = max(len(xs), len(ys), len(rs))
    xs = _convert_x(page, _recycle(xs, length), shape.default_units)
    ys = _convert_y(page, _recycle(ys, length), shape.default_units)
    rs = _convert_x(page, _recycle(rs, length), shape.default_units)
    for cx, cy, radius in zip(xs, ys, rs):
        shape.group.add(page.drawing.circle(
            center=(cx, cy), r=radius, fill=fill or 'none', opacity=alpha, **stroke_style(linecolor, lwd, lty)
        ))
    return _finish_shape(page, shape, draw)


def _justified_box(page, x, y, width, height, just, units):
    hjust, vjust = parse_just(just)
    width = page.convert(width, units)
    height = page.convert(height, units)
    left = page.convert(x, units) - hjust * width
    top = page.parse_y(y, units) - (1 - vjust) * height
    return page.px(left), page.px(top), page.px(width), page.px(height)


@accepts_params
def plot_rect(
    page, x=None, y=None, width=None, height=None, just='center', default_units=None,
    linecolor='#000000', lwd=1, lty=1, fill=None, alpha=1, draw=True, params=None,
):
    """
    plot one or more rectangles justified around their (x, y) points
    """
    for name, value in [('x', x), ('y', y), ('width', width), ('height', height)]:
        if value is None:
            raise missing_argument(name)
    shape = _shape(page, 'rect', default_units, x=x, y=y, width=width, height=height, just=just)
    values = [as_list(v) for v in [x, y, width, height]]
    length = max([len(v) for v in values])
    for rx, ry, rw, rh in zip(*[_recycle(v, length) for v in values]):
        left, top, w, h = _justified_box(page, rx, ry, rw, rh, just, shape.default_units)
        shape.group.add(page.drawing.rect(
            (left, top), (w, h), fill=fill or 'none', opacity=alpha, **stroke_style(linecolor, lwd, lty)
        ))
    return _finish_shape(page, shape, draw)


def arrow_head(start, end, size):
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    return [
        (end[0] - size * math.cos(angle - math.pi / 6), end[1] - size * math.sin(angle - math.pi / 6)),
        end,
        (end[0] - size * math.cos(angle + math.pi / 6), end[1] - size * math.sin(angle + math.pi / 6)),
    ]


@accepts_params
def plot_segments(
    page, x0=None, y0=None, x1=None, y1=None, default_units=None, linecolor='#000000', lwd=1, lty=1,
    arrow=None, arrow_size=4, draw=True, params=None,
):
    """
    plot line segments from (x0, y0) to (x1, y1)

    Args:
        arrow (str): add an arrow head to the first, last or both ends of each segment
    """
    for name, value in [('x0', x0), ('y0', y0), ('x1', x1), ('y1', y1)]:
        if value is None:
            raise missing_argument(name)
    if arrow not in ARROW_ENDS:
        raise InvalidInputError('arrow must be one of {}'.format(ARROW_ENDS), arrow)
    shape = _shape(page, 'segments', default_units, x0=x0, y0=y0, x1=x1, y1=y1)
    values = [as_list(v) for v in [x0, y0, x1, y1]]
    length = max([len(v) for v in values])
    values = [_recycle(v, length) for v in values]
    starts = zip(_convert_x(page, values[0], shape.default_units), _convert_y(page, values[1], shape.default_units))
    ends = zip(_convert_x(page, values[2], shape.default_units), _convert_y(page, values[3], shape.default_units))
    style = stroke_style(linecolor, lwd, lty)
    for start, end in zip(starts, ends):
        shape.group.add(page.drawing.line(start, end, **style))
        heads = []
        if arrow in ['last', 'both']:
            heads.append(arrow_head(start, end, arrow_size))
        if arrow in ['first', 'both']:
            heads.append(arrow_head(end, start, arrow_size))
        for head in heads:
            shape.group.add(page.drawing.polyline(head, fill='none', stroke=style['stroke'], stroke_width=lwd))
    return _finish_shape(page, shape, draw)


@accepts_params
def plot_polygon(
    page, x=None, y=None, default_units=None, linecolor='#000000', lwd=1, lty=1, fill=None, alpha=1, draw=True,
    params=None,
):
    """
    plot a polygon through the (x, y) points
    """
    for name, value in [('x', x), ('y', y)]:
        if value is None:
            raise missing_argument(name)
    xs, ys = as_list(x), as_list(y)
    if len(xs) != len(ys) or len(xs) < 3:
        raise InvalidInputError('a polygon requires at least 3 points with matching x and y values', len(xs), len(ys))
    shape = _shape(page, 'polygon', default_units, x=x, y=y)
    points = zip(_convert_x(page, xs, shape.default_units), _convert_y(page, ys, shape.default_units))
    shape.group.add(page.drawing.polygon(
        list(points), fill=fill or 'none', opacity=alpha, **stroke_style(linecolor, lwd, lty)
    ))
    return _finish_shape(page, shape, draw)


def text_anchor(hjust):
    if hjust <= 0:
        return 'start'
    elif hjust >= 1:
        return 'end'
    return 'middle'


def baseline_shift(vjust, fontsize, central_shift_ratio):
    """
    distance from the justification point down to the text baseline
    """
    if vjust >= 1:
        return fontsize * 0.75
    elif vjust <= 0:
        return 0
    return fontsize * central_shift_ratio


@accepts_params
def plot_text(
    page, label=None, x=None, y=None, just='center', default_units=None, fontsize=12, fontcolor='#000000',
    fontface='plain', rot=0, alpha=1, draw=True, params=None,
):
    """
    plot one or more text labels

    Args:
        fontface (str): plain, bold, italic or bold.italic
        rot (float): counter-clockwise rotation in degrees around the justification point
    """
    for name, value in [('label', label), ('x', x), ('y', y)]:
        if value is None:
            raise missing_argument(name)
    shape = _shape(page, 'text', default_units, label=label, x=x, y=y, just=just)
    config = page.settings
    hjust, vjust = parse_just(just)
    labels, xs, ys = as_list(label), as_list(x), as_list(y)
    length = max(len(labels), len(xs), len(ys))
    xs = _convert_x(page, _recycle(xs, length), shape.default_units)
    ys = _convert_y(page, _recycle(ys, length), shape.default_units)
    style = config.text_style(fontsize, text_anchor(hjust))
    if 'bold' in fontface:
        style += ';font-weight:bold'
    if 'italic' in fontface:
        style += ';font-style:italic'
    for text, tx, ty in zip(_recycle(labels, length), xs, ys):
        element = page.drawing.text(
            str(text),
            insert=(tx, ty + baseline_shift(vjust, fontsize, config.font_central_shift_ratio)),
            fill=fontcolor, style=style, opacity=alpha, class_='label',
        )
        if rot:
            element.rotate(-rot, center=(tx, ty))
        shape.group.add(element)
    return _finish_shape(page, shape, draw)


@accepts_params
def plot_legend(
    page, legend=None, fill=None, x=None, y=None, width=None, height=None, just=('left', 'top'), default_units=None,
    orientation=ORIENTATION.VERTICAL, title=None, fontsize=10, fontcolor='#000000', border=True, bg=None,
    draw=True, params=None,
):
    """
    plot a legend of color swatches and their labels

    Args:
        legend (List[str]): the labels
        fill (List[str]): the swatch colors, recycled to the number of labels
        orientation (str): v to stack the entries, h to lay them out in a row
    """
    for name, value in [('legend', legend), ('fill', fill)]:
        if value is None:
            raise missing_argument(name)
    ORIENTATION.enforce(orientation)
    shape = GenomicPlot(
        'legend', x=x, y=y, width=width, height=height, just=just, default_units=default_units,
    )
    if page is None:
        raise PageError('cannot plot a legend without a page')
    if not shape.is_placed:
        raise missing_argument([n for n, v in zip(['x', 'y', 'width', 'height'], shape.placement) if v is None][0])
    viewport = page.new_viewport(
        'legend', x, y, width, height, just=just, default_units=shape.default_units, register=draw)
    shape.viewport = viewport
    shape.name = viewport.name
    config = page.settings
    dwg = page.drawing
    group = dwg.g(id=viewport.name, class_='legend')
    shape.group = group

    labels = [str(label) for label in as_list(legend)]
    colors = _recycle(as_list(fill), len(labels))
    left, top, width_px, height_px = viewport.px_box
    if bg:
        group.add(dwg.rect((left, top), (width_px, height_px), fill=bg))
    if border:
        group.add(dwg.rect((left, top), (width_px, height_px), fill='none', stroke=config.legend_line_color))

    inner_top = top + config.padding
    if title:
        group.add(dwg.text(
            str(title), insert=(left + width_px / 2, inner_top + fontsize * 0.75), fill=fontcolor,
            style=config.text_style(fontsize, 'middle') + ';font-weight:bold', class_='title',
        ))
        inner_top += config.text_height(fontsize) + config.padding
    swatch = fontsize
    if orientation == ORIENTATION.VERTICAL:
        step = max((top + height_px - config.padding - inner_top) / max(len(labels), 1), swatch)
        positions = [(left + config.padding, inner_top + i * step + (step - swatch) / 2) for i in range(len(labels))]
    else:
        step = (width_px - 2 * config.padding) / max(len(labels), 1)
        middle = inner_top + (top + height_px - config.padding - inner_top - swatch) / 2
        positions = [(left + config.padding + i * step, middle) for i in range(len(labels))]
    for (sx, sy), label, color in zip(positions, labels, colors):
        entry = dwg.g(class_='entry')
        entry.add(dwg.rect((sx, sy), (swatch, swatch), fill=color))
        entry.add(dwg.text(
            label,
            insert=(sx + swatch + config.padding, sy + swatch / 2 + config.font_central_shift_ratio * fontsize),
            fill=fontcolor, style=config.text_style(fontsize, 'start'), class_='label',
        ))
        group.add(entry)
    return _finish_shape(page, shape, draw)
