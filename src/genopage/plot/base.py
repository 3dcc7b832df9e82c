"""
shared record and placement helpers for all plot types
"""
import warnings

import svgwrite

from ..assembly import parse_assembly
from ..config import DEFAULTS
from ..error import InvalidRegionError, PageError, PlacementError
from ..page import convert_units
from ..util import logger


NO_DATA_WARNING = (
    'No data found in region. Suggestions: check that chromosome names match genome assembly; check region.'
)


class Tag(svgwrite.base.BaseElement):

    def __init__(self, elementname, content='', **kwargs):
        self.elementname = elementname
        super(Tag, self).__init__(**kwargs)
        self.content = content

    def get_xml(self):
        xml = super(Tag, self).get_xml()
        xml.text = self.content
        return xml


class GenomicPlot:
    """
    record of a plot: the region it shows, where it was placed and the svg group holding its elements

    Attributes:
        plot_type (str): kind of plot, also the prefix of its viewport name
        chrom (str): chromosome shown
        chromstart (int): first position shown
        chromend (int): last position shown
        assembly (Assembly): the genome assembly
        x, y, width, height: the placement as given
        just: the justification of the placement
        viewport (Viewport): the viewport once placed
        group (svgwrite.container.Group): the drawn elements once placed
        annotations (List[GenomicPlot]): records of the annotations drawn on the plot
        defs (list): elements the plot added to the page defs, other than its clip path
    """

    def __init__(
        self, plot_type, chrom=None, chromstart=None, chromend=None, assembly=None,
        x=None, y=None, width=None, height=None, just=None, default_units=None, **kwargs
    ):
        self.plot_type = plot_type
        self.chrom = chrom
        self.chromstart = chromstart
        self.chromend = chromend
        self.assembly = assembly
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.just = just
        self.default_units = default_units if default_units is not None else DEFAULTS.default_units
        self.viewport = None
        self.group = None
        self.annotations = []
        self.defs = []
        for attr, value in kwargs.items():
            setattr(self, attr, value)

    def __repr__(self):
        if self.chrom is None:
            return '{}()'.format(self.plot_type)
        return '{}({}:{}-{})'.format(self.plot_type, self.chrom, self.chromstart, self.chromend)

    @property
    def placement(self):
        return (self.x, self.y, self.width, self.height)

    @property
    def is_placed(self):
        return all([v is not None for v in self.placement])

    @property
    def xscale(self):
        if self.chromstart is None or self.chromend is None:
            return None
        return (self.chromstart, self.chromend)

    def height_in(self, units, page=None):
        """
        height of the placement converted to the given units
        """
        if page is not None:
            return convert_units(page.convert(self.height, self.default_units), page.units, units)
        if isinstance(self.height, (tuple, list)):
            return convert_units(float(self.height[0]), self.height[1], units)
        return convert_units(float(self.height), self.default_units, units)


def check_placement(plot):
    """
    Raises:
        PlacementError: some but not all of x, y, width and height are given
    """
    given = [v is not None for v in plot.placement]
    if any(given) and not all(given):
        missing = [name for name, is_given in zip(['x', 'y', 'width', 'height'], given) if not is_given]
        raise PlacementError(
            'plot placement requires all of x, y, width and height. Missing: {}'.format(', '.join(missing)))


def check_page(page, plot, message=None):
    if page is None and plot.is_placed:
        raise PageError(message or 'must have a page before placing a {} plot'.format(plot.plot_type))


def _is_integer(value):
    try:
        return int(value) == value and not isinstance(value, bool)
    except (TypeError, ValueError):
        return False


def check_region(chromstart, chromend):
    """
    Raises:
        InvalidRegionError: only one of chromstart or chromend is given, either is not an integer, or chromstart
            is not less than chromend
    """
    if chromstart is None and chromend is None:
        return
    if chromstart is None or chromend is None:
        raise InvalidRegionError('chromstart and chromend must be given together', chromstart, chromend)
    if not _is_integer(chromstart) or not _is_integer(chromend):
        raise InvalidRegionError('chromstart and chromend must be integers', chromstart, chromend)
    if chromstart >= chromend:
        raise InvalidRegionError('chromstart must be less than chromend', chromstart, chromend)
    if chromstart < 0:
        raise InvalidRegionError('chromstart cannot be negative', chromstart)


def genomic_scale(plot, assembly=None):
    """
    fill in the whole chromosome when no region is given

    Returns:
        Tuple[int,int]: the xscale of the plot

    Raises:
        InvalidRegionError: the chromosome is not part of the assembly
    """
    assembly = parse_assembly(assembly if assembly is not None else plot.assembly)
    if plot.chromstart is None and plot.chromend is None:
        plot.chromstart = 1
        plot.chromend = assembly.chrom_length(plot.chrom)
    else:
        plot.chromstart = int(plot.chromstart)
        plot.chromend = int(plot.chromend)
    return plot.xscale


def place(page, plot, xscale=None, yscale=None, clip=True, draw=True):
    """
    create the viewport and group of a plot, the plot is not drawn until :func:`finish`

    Returns:
        Viewport: the new viewport or None if the plot has no placement
    """
    check_page(page, plot)
    if not plot.is_placed:
        return None
    viewport = page.new_viewport(
        plot.plot_type, plot.x, plot.y, plot.width, plot.height,
        just=plot.just, xscale=xscale, yscale=yscale, clip=clip,
        default_units=plot.default_units, register=draw
    )
    group = page.drawing.g(id=viewport.name, class_=plot.plot_type)
    if clip:
        group['clip-path'] = 'url(#{})'.format(page.clip_path(viewport).get_id())
    plot.viewport = viewport
    plot.group = group
    return viewport


def finish(page, plot, draw=True):
    """
    draw a placed plot on the page
    """
    if plot.group is not None and draw:
        page.add(plot)
    if plot.viewport is not None:
        logger.info('{}[{}]'.format(plot.plot_type, plot.viewport.name))
    else:
        logger.info('{}[unplaced]'.format(plot.plot_type))
    return plot


def warn_no_data():
    warnings.warn(NO_DATA_WARNING)
