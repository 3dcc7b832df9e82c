"""
chromosome ideograms drawn from cytobands
"""
import warnings

from ..assembly import parse_assembly
from ..colors import dynamic_label_color
from ..config import DEFAULTS
from ..constants import GIEMSA_STAIN, ORIENTATION
from ..error import InvalidInputError, missing_argument
from ..interval import IntervalMapping
from ..params import accepts_params
from ..readers import read_cytobands
from .base import GenomicPlot, Tag, check_page, check_placement, finish, place


def _cytobands(data, assembly):
    if data is None:
        return assembly.cytobands
    if isinstance(data, dict):
        return data
    if isinstance(data, str):
        return read_cytobands(data)
    return read_cytobands(*data)


def centromere(template):
    """
    the first and last position of the acen bands of a chromosome, None when it has none
    """
    acen = [b for b in template.bands if b.giemsa_stain == GIEMSA_STAIN.ACEN]
    if not acen:
        return None
    return (min([b.start for b in acen]), max([b.end for b in acen]))


class _Frame:
    """
    converts (along, across) chromosome coordinates into page pixels for either orientation
    """

    def __init__(self, viewport, orientation, start, end):
        self.orientation = orientation
        left, top, width, height = viewport.px_box
        self.left = left
        self.top = top
        if orientation == ORIENTATION.HORIZONTAL:
            self.mapping = IntervalMapping.linear((start, end), (left, left + width))
            self.thickness = height
        else:
            self.mapping = IntervalMapping.linear((start, end), (top, top + height))
            self.thickness = width

    def point(self, pos, across):
        """
        Args:
            pos: genomic position along the chromosome
            across (float): fraction of the chromosome thickness (0 is the top or left edge)
        """
        along = self.mapping.convert_pos(pos)
        if self.orientation == ORIENTATION.HORIZONTAL:
            return (along, self.top + across * self.thickness)
        return (self.left + across * self.thickness, along)

    def box(self, start, end):
        """
        insert and size of the rectangle spanning start to end
        """
        x1, y1 = self.point(start, 0)
        x2, y2 = self.point(end, 1)
        return (min(x1, x2), min(y1, y2)), (abs(x2 - x1), abs(y2 - y1))


@accepts_params
def plot_ideogram(
    page,
    chrom=None,
    assembly=None,
    data=None,
    orientation=ORIENTATION.HORIZONTAL,
    show_bands=True,
    band_labels=False,
    fill='#ffffff',
    linecolor='#000000',
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
    plot a chromosome with rounded ends, centromere triangles and bands filled by their Giemsa stain

    Args:
        data: cytobands by chromosome (see :func:`genopage.readers.read_cytobands`) or the cytoBand file(s) to
            read them from, defaults to the cytobands of the assembly
        orientation (str): h for a horizontal chromosome, v for a vertical chromosome drawn from the top down
        show_bands (bool): fill the bands, otherwise only the outline (and centromere) is drawn
        band_labels (bool): label each band that is wide enough for its name
    """
    if chrom is None:
        raise missing_argument('chrom')
    ORIENTATION.enforce(orientation)
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    plot = GenomicPlot(
        'ideogram', chrom=chrom, assembly=assembly,
        x=x, y=y, width=width, height=height, just=just, default_units=default_units, orientation=orientation,
    )
    check_placement(plot)
    check_page(page, plot)

    cytobands = _cytobands(data, assembly)
    template = cytobands.get(chrom)
    if template is None:
        if not assembly.has_chrom(chrom):
            raise InvalidInputError('chromosome not found in the cytobands or the assembly', chrom)
        if show_bands:
            warnings.warn('no cytobands for {}, drawing the chromosome outline only'.format(chrom))
        plot.chromstart, plot.chromend = 1, assembly.chrom_length(chrom)
        bands = []
        cen = None
    else:
        plot.chromstart, plot.chromend = template.start, template.end
        bands = template.bands
        cen = centromere(template)
    plot.template = template

    viewport = place(page, plot, xscale=plot.xscale, clip=False, draw=draw)
    if viewport is None:
        return finish(page, plot, draw)

    config = page.settings
    dwg = page.drawing
    frame = _Frame(viewport, orientation, plot.chromstart, plot.chromend)
    radius = frame.thickness / 2
    arms = [(plot.chromstart, plot.chromend)]
    if cen is not None:
        arms = [(plot.chromstart, cen[0] - 1), (cen[1] + 1, plot.chromend)]
        arms = [(s, t) for s, t in arms if t > s]

    clip = page.add_def(plot, dwg.clipPath(id='{}_arms'.format(viewport.name)))
    for start, end in arms:
        insert, size = frame.box(start, end)
        clip.add(dwg.rect(insert, size, rx=radius, ry=radius))

    band_group = dwg.g(class_='cytobands')
    band_group['clip-path'] = 'url(#{})'.format(clip.get_id())
    for band in bands:
        if band.giemsa_stain == GIEMSA_STAIN.ACEN:
            continue
        band_fill = config.template_band_fill.get(band.giemsa_stain, config.template_default_fill) if show_bands else fill
        insert, size = frame.box(band.start, band.end)
        rect = dwg.rect(insert, size, fill=band_fill, class_='cytoband')
        rect.add(Tag('title', 'cytoband {}{} {}:{}-{}'.format(chrom, band.name, chrom, band.start, band.end)))
        band_group.add(rect)
        if band_labels and show_bands:
            label_size = config.text_width(band.name, config.legend_font_size)
            if label_size <= max(size):
                cx, cy = insert[0] + size[0] / 2, insert[1] + size[1] / 2
                text = dwg.text(
                    band.name,
                    insert=(cx, cy + config.font_central_shift_ratio * config.legend_font_size),
                    fill=dynamic_label_color(band_fill),
                    style=config.text_style(config.legend_font_size, 'middle'),
                    class_='band_label',
                )
                if orientation == ORIENTATION.VERTICAL:
                    text.rotate(90, center=(cx, cy))
                band_group.add(text)
    if not bands:
        for start, end in arms:
            insert, size = frame.box(start, end)
            band_group.add(dwg.rect(insert, size, fill=fill, class_='cytoband'))
    plot.group.add(band_group)

    for start, end in arms:
        insert, size = frame.box(start, end)
        plot.group.add(dwg.rect(
            insert, size, rx=radius, ry=radius, fill='none', stroke=linecolor,
            stroke_width=config.template_band_stroke_width, class_='outline',
        ))

    if cen is not None:
        acen_fill = config.template_band_fill[GIEMSA_STAIN.ACEN] if show_bands else fill
        for band in bands:
            if band.giemsa_stain != GIEMSA_STAIN.ACEN:
                continue
            if band.name and band.name[0] == 'p':
                points = [frame.point(band.start, 0), frame.point(band.end, 0.5), frame.point(band.start, 1)]
            else:
                points = [frame.point(band.end, 0), frame.point(band.start, 0.5), frame.point(band.end, 1)]
            plot.group.add(dwg.polygon(
                points, fill=acen_fill, stroke=linecolor, stroke_width=config.template_band_stroke_width,
                class_='centromere',
            ))
    return finish(page, plot, draw)
