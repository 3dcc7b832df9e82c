"""
helpers shared by the annotations. Annotations are drawn in their own group on the page and recorded on the
plot they annotate so they are removed along with it
"""
from ..error import AnnotationError, PageError, missing_argument
from ..plot.base import GenomicPlot
from ..util import logger


def check_annotation(page, plot, description, placed=True):
    """
    Raises:
        InvalidInputError: no plot is given
        PageError: no page is given
        AnnotationError: the plot has not been placed on the page
    """
    if plot is None:
        raise missing_argument('plot')
    if page is None:
        raise PageError('cannot add {} without a page'.format(description))
    if placed and getattr(plot, 'viewport', None) is None:
        raise AnnotationError('cannot add {} to a plot that has not been placed'.format(description), plot)


def new_annotation(page, plot, annotation_type, **kwargs):
    """
    record for an annotation with a uniquely named (empty) group
    """
    annotation = GenomicPlot(annotation_type, **kwargs)
    annotation.plot = plot
    annotation.name = page.new_element_name(annotation_type)
    annotation.group = page.drawing.g(id=annotation.name, class_=annotation_type)
    return annotation


def finish_annotation(page, plot, annotation, draw=True):
    if draw:
        page.add(annotation.group)
        plot.annotations.append(annotation)
    logger.info('{}[{}]'.format(annotation.plot_type, annotation.name))
    return annotation


def region_axis(plot, axis='x'):
    """
    the chromosome and range shown along an axis of a plot

    Returns:
        Tuple[str,int,int]: chromosome, start, end
    """
    if axis == 'y' and getattr(plot, 'altchrom', None) is not None:
        return plot.altchrom, plot.altchromstart, plot.altchromend
    return plot.chrom, plot.chromstart, plot.chromend


def check_chrom(plot, chrom):
    """
    Raises:
        AnnotationError: the chromosome is not shown in the plot
    """
    offsets = getattr(plot, 'chrom_offsets', None)
    if chrom not in (offsets or [plot.chrom]):
        raise AnnotationError('{} not found in input plot'.format(chrom), plot)


def genome_x(plot, chrom, pos):
    """
    native x value of a chromosome position, converted through the chromosome offsets of whole-genome plots

    Raises:
        AnnotationError: the chromosome is not shown in the plot
    """
    check_chrom(plot, chrom)
    offsets = getattr(plot, 'chrom_offsets', None)
    return offsets[chrom] + pos if offsets else pos
