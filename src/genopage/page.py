"""
The page is the svg drawing every plot is placed on. Placement values are given in page units (inches by
default) measured from the top left corner of the page and are converted to svg user units (pixels) only
when the elements are created
"""
import os
import re

import svgwrite

from .config import DEFAULTS, DrawingSettings
from .constants import JUST, UNITS, UNITS_PER_INCH
from .error import InvalidInputError, PageError, PlacementError
from .util import format_number, logger, mkdirp


def convert_units(value, from_units, to_units):
    """
    Example:
        >>> convert_units(1, 'inches', 'cm')
        2.54
    """
    UNITS.enforce(from_units)
    UNITS.enforce(to_units)
    return value * UNITS_PER_INCH[to_units] / UNITS_PER_INCH[from_units]


class Unit:
    """
    a numeric value with its units

    Example:
        >>> Unit(2.54, 'cm').to('inches')
        1.0
    """

    def __init__(self, value, units):
        self.value = float(value)
        self.units = UNITS(units)

    def to(self, units):
        return convert_units(self.value, self.units, units)

    def __repr__(self):
        return 'Unit({}, {})'.format(self.value, repr(self.units))


_HJUST = {JUST.LEFT: 0, JUST.RIGHT: 1, JUST.CENTER: 0.5, JUST.CENTRE: 0.5}
_VJUST = {JUST.BOTTOM: 0, JUST.TOP: 1, JUST.CENTER: 0.5, JUST.CENTRE: 0.5}


def parse_just(just):
    """
    convert justification keywords to fractions of the width and height

    Returns:
        Tuple[float,float]: the horizontal and vertical justification (left and bottom are 0)

    Example:
        >>> parse_just(['left', 'top'])
        (0, 1)
        >>> parse_just('right')
        (1, 0.5)
        >>> parse_just(['top', 'right'])
        (1, 1)
    """
    if just is None:
        return (0, 1)
    if isinstance(just, str):
        just = [just]
    just = list(just)
    if not just or len(just) > 2:
        raise InvalidInputError('justification must be one or two values', just)
    if all(isinstance(j, (int, float)) for j in just):
        if len(just) == 1:
            return (just[0], just[0])
        return tuple(just)

    for j in just:
        if j not in _HJUST and j not in _VJUST:
            raise InvalidInputError('invalid justification', j)
    if len(just) == 1:
        j = just[0]
        if j in _HJUST and j not in _VJUST:
            return (_HJUST[j], 0.5)
        elif j in _VJUST and j not in _HJUST:
            return (0.5, _VJUST[j])
        return (0.5, 0.5)

    first, second = just
    if first in _VJUST and first not in _HJUST or second in _HJUST and second not in _VJUST:
        first, second = second, first
    if first not in _HJUST or second not in _VJUST:
        raise InvalidInputError('justification must combine a horizontal and a vertical value', just)
    return (_HJUST[first], _VJUST[second])


class Viewport:
    """
    rectangular region of the page a plot is drawn in. The box is stored in page units with y measured
    down from the top of the page

    Attributes:
        name (str): unique name on the page
        x (float): left edge
        y (float): top edge
        width (float): width
        height (float): height
        xscale (Tuple[float,float]): native data range across the width
        yscale (Tuple[float,float]): native data range from the bottom to the top
        clip (bool): clip drawn elements to the box
        px_per_unit (float): svg user units per page unit
    """

    def __init__(self, name, x, y, width, height, xscale=(0, 1), yscale=(0, 1), clip=True, px_per_unit=1):
        if width < 0 or height < 0:
            raise PlacementError('viewport dimensions must be non-negative', width, height)
        self.name = name
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.xscale = tuple(xscale) if xscale is not None else (0, 1)
        self.yscale = tuple(yscale) if yscale is not None else (0, 1)
        self.clip = clip
        self.px_per_unit = px_per_unit

    def __repr__(self):
        return 'Viewport({}, x={}, y={}, width={}, height={})'.format(
            self.name, self.x, self.y, self.width, self.height)

    @property
    def top_left(self):
        return (self.x, self.y)

    @property
    def bottom_left(self):
        return (self.x, self.y + self.height)

    @property
    def bottom_right(self):
        return (self.x + self.width, self.y + self.height)

    @property
    def center(self):
        return (self.x + self.width / 2, self.y + self.height / 2)

    def native_x(self, pos):
        """
        page x position of a native x value, values outside the xscale extrapolate past the edges
        """
        start, end = self.xscale
        if end == start:
            return self.x
        return self.x + (pos - start) / (end - start) * self.width

    def native_y(self, value):
        """
        page y position of a native y value (the bottom of the viewport is the start of the yscale)
        """
        start, end = self.yscale
        if end == start:
            return self.y + self.height
        return self.y + self.height - (value - start) / (end - start) * self.height

    def native_width(self, length):
        start, end = self.xscale
        return abs(length / (end - start) * self.width) if end != start else 0

    def contains(self, x, y):
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height

    def px(self, value):
        """convert page units to svg user units"""
        return value * self.px_per_unit

    def px_x(self, pos):
        return self.px(self.native_x(pos))

    def px_y(self, value):
        return self.px(self.native_y(value))

    @property
    def px_box(self):
        return (self.px(self.x), self.px(self.y), self.px(self.width), self.px(self.height))


class Page:
    """
    page holding the svg drawing and the stack of placed viewports

    Args:
        width (float): width of the page in default_units
        height (float): height of the page in default_units
        default_units (str): units of the page and any numeric placement value given to it
        xgrid (float): spacing of the vertical guide lines, 0 for no grid
        ygrid (float): spacing of the horizontal guide lines, 0 for no grid
        showguides (bool): draw the page ruler and guide lines
    """

    GUIDE_ID = 'page_guides'

    def __init__(self, width=8.5, height=11, default_units=None, xgrid=0.5, ygrid=0.5, showguides=True, settings=None):
        self.units = UNITS(default_units if default_units is not None else DEFAULTS.default_units)
        if width is None or height is None or width <= 0 or height <= 0:
            raise PageError('page width and height must be positive numbers', width, height)
        self.width = float(width)
        self.height = float(height)
        self.xgrid = xgrid
        self.ygrid = ygrid
        self.settings = settings if settings is not None else DrawingSettings()
        self.px_per_unit = DEFAULTS.dpi / UNITS_PER_INCH[self.units]
        self.drawing = svgwrite.Drawing(size=(self.px(self.width), self.px(self.height)))
        self._viewports = []
        self._clip_paths = {}
        self._element_counts = {}
        self.guides = None
        if showguides:
            self.show_guides()
        logger.debug('created page {}x{} {}'.format(self.width, self.height, self.units))

    def __repr__(self):
        return 'Page(width={}, height={}, units={})'.format(self.width, self.height, repr(self.units))

    def px(self, value):
        """convert page units to svg user units"""
        return value * self.px_per_unit

    def convert(self, value, units=None):
        """
        convert a placement value to page units

        Args:
            value: a number in the given units or a (number, units) pair
            units (str): the units of a plain number, defaults to the page units

        Example:
            >>> page = Page(8.5, 11, showguides=False)
            >>> page.convert(2.54, 'cm')
            1.0
            >>> page.convert((72.27, 'points'))
            1.0
        """
        if value is None:
            return None
        if isinstance(value, Unit):
            return value.to(self.units)
        if isinstance(value, (tuple, list)):
            if len(value) != 2:
                raise InvalidInputError('unit values must be a (value, units) pair', value)
            return convert_units(float(value[0]), UNITS(value[1]), self.units)
        if isinstance(value, str):
            raise InvalidInputError('cannot convert a string to page units', value)
        units = self.units if units is None else UNITS(units)
        return convert_units(float(value), units, self.units)

    def parse_y(self, y, units=None):
        """
        convert a y placement value to page units. Strings starting with "b" are placed relative to the
        bottom of the most recently placed viewport

        Example:
            "b0.1" is 0.1 (units) below the previous plot
        """
        if isinstance(y, str):
            match = re.match(r'^\s*b\s*(-?\d*\.?\d+(e-?\d+)?)\s*$', y)
            if not match:
                raise InvalidInputError('y position string must be of the form "b<value>"', y)
            previous = self.last_viewport()
            if previous is None:
                raise PlacementError('cannot place relative to the previous plot, no plot has been placed', y)
            return previous.bottom_left[1] + self.convert(float(match.group(1)), units)
        return self.convert(y, units)

    def viewports(self):
        """
        Returns:
            List[str]: names of the placed viewports in the order they were placed
        """
        return [vp.name for vp in self._viewports]

    def get_viewport(self, name):
        for vp in self._viewports:
            if vp.name == name:
                return vp
        raise KeyError('no viewport with the given name', name)

    def last_viewport(self):
        return self._viewports[-1] if self._viewports else None

    def next_viewport_name(self, prefix):
        pattern = re.compile(r'^' + re.escape(prefix) + r'\d+$')
        return '{}{}'.format(prefix, len([n for n in self.viewports() if pattern.match(n)]) + 1)

    def new_element_name(self, prefix):
        """
        unique name for an element drawn directly on the page (not in a viewport)
        """
        self._element_counts[prefix] = self._element_counts.get(prefix, 0) + 1
        return '{}{}'.format(prefix, self._element_counts[prefix])

    def new_viewport(
        self, prefix, x, y, width, height, just=None, xscale=None, yscale=None, clip=True, default_units=None, register=True,
        name=None,
    ):
        """
        create a new viewport from placement values

        Args:
            prefix (str): name prefix, the name is the prefix followed by the count of viewports with the same prefix
            x: x position of the justification point
            y: y position of the justification point (may be relative to the previous plot, see :meth:`parse_y`)
            width: width of the viewport
            height: height of the viewport
            just: justification of the (x, y) point relative to the viewport (see :func:`parse_just`)
            register (bool): add the viewport to the page stack
            name (str): use this name instead of one generated from the prefix

        Raises:
            PlacementError: if the placement is incomplete
        """
        if any([v is None for v in [x, y, width, height]]):
            raise PlacementError('placement requires x, y, width and height', x, y, width, height)
        hjust, vjust = parse_just(just)
        width = self.convert(width, default_units)
        height = self.convert(height, default_units)
        x = self.convert(x, default_units)
        y = self.parse_y(y, default_units)
        viewport = Viewport(
            name or self.next_viewport_name(prefix),
            x - hjust * width,
            y - (1 - vjust) * height,
            width,
            height,
            xscale=xscale,
            yscale=yscale,
            clip=clip,
            px_per_unit=self.px_per_unit,
        )
        if register:
            self._viewports.append(viewport)
        return viewport

    def clip_path(self, viewport):
        """
        the clipPath element matching a viewport box, created on first use
        """
        if viewport.name not in self._clip_paths:
            clip = self.drawing.defs.add(self.drawing.clipPath(id='clip_{}'.format(viewport.name)))
            x, y, w, h = viewport.px_box
            clip.add(self.drawing.rect((x, y), (w, h)))
            self._clip_paths[viewport.name] = clip
        return self._clip_paths[viewport.name]

    def add(self, plot):
        """
        draw a plot (or any svg element) on the page
        """
        group = getattr(plot, 'group', plot)
        if group is None:
            raise PlacementError('cannot draw a plot that has not been placed', plot)
        if group in self.drawing.elements:
            return plot
        if self.guides is not None and self.guides in self.drawing.elements:
            self.drawing.elements.insert(self.drawing.elements.index(self.guides), group)
        else:
            self.drawing.add(group)
        viewport = getattr(plot, 'viewport', None)
        if viewport is not None and viewport not in self._viewports:
            self._viewports.append(viewport)
        return plot

    def add_def(self, plot, element):
        """
        add an element to the page defs on behalf of a plot or annotation, it is removed along with it
        """
        self.drawing.defs.add(element)
        plot.defs.append(element)
        return element

    def remove(self, plot):
        """
        remove a placed plot from the page along with its viewport, defs and annotations
        """
        for annotation in plot.annotations:
            self.remove(annotation)
        if plot.group is not None and plot.group in self.drawing.elements:
            self.drawing.elements.remove(plot.group)
        viewport = plot.viewport
        if viewport is not None:
            if viewport in self._viewports:
                self._viewports.remove(viewport)
            clip = self._clip_paths.pop(viewport.name, None)
            if clip is not None:
                plot.defs.append(clip)
        for element in plot.defs:
            if element in self.drawing.defs.elements:
                self.drawing.defs.elements.remove(element)
        plot.defs = []

    def show_guides(self):
        """
        draw the page ruler labels and guide lines on top of the page
        """
        self.hide_guides()
        config = self.settings
        dwg = self.drawing
        color = DEFAULTS.page_guide_color
        guides = dwg.g(id=self.GUIDE_ID, class_='guides')
        width_px, height_px = self.px(self.width), self.px(self.height)
        if self.xgrid:
            xpos = self.xgrid
            while xpos < self.width:
                guides.add(dwg.line(
                    (self.px(xpos), 0), (self.px(xpos), height_px),
                    stroke=color, stroke_width=config.guide_stroke_width, stroke_dasharray='2,2', class_='guide',
                ))
                xpos += self.xgrid
        if self.ygrid:
            ypos = self.ygrid
            while ypos < self.height:
                guides.add(dwg.line(
                    (0, self.px(ypos)), (width_px, self.px(ypos)),
                    stroke=color, stroke_width=config.guide_stroke_width, stroke_dasharray='2,2', class_='guide',
                ))
                ypos += self.ygrid

        # ruler labels at every whole page unit
        for pos in range(1, int(self.width) + 1):
            guides.add(dwg.text(
                format_number(pos), insert=(self.px(pos), config.guide_font_size),
                fill=color, style=config.text_style(config.guide_font_size, 'middle'), class_='ruler',
            ))
        for pos in range(1, int(self.height) + 1):
            guides.add(dwg.text(
                format_number(pos), insert=(1, self.px(pos) + config.font_central_shift_ratio * config.guide_font_size),
                fill=color, style=config.text_style(config.guide_font_size, 'start'), class_='ruler',
            ))
        guides.add(dwg.rect(
            (0, 0), (width_px, height_px), fill='none', stroke=color, stroke_width=config.guide_stroke_width,
        ))
        dwg.add(guides)
        self.guides = guides
        return guides

    def hide_guides(self):
        if self.guides is not None and self.guides in self.drawing.elements:
            self.drawing.elements.remove(self.guides)
        self.guides = None

    def tostring(self):
        return self.drawing.tostring()

    def save(self, filename):
        dirname = os.path.dirname(filename)
        if dirname and not os.path.isdir(dirname):
            mkdirp(dirname)
        logger.info('writing: {}'.format(filename))
        self.drawing.saveas(filename)
