"""
gene and transcript models drawn from the gene table of an assembly
"""
import warnings

import pandas as pd

from ..assembly import parse_assembly
from ..config import DEFAULTS
from ..constants import STRAND
from ..error import InvalidInputError, missing_argument
from ..interval import Interval, split_intervals_into_tracks
from ..params import accepts_params
from ..readers import read_gene_table
from ..util import logger
from .base import (
    GenomicPlot, Tag, check_page, check_placement, check_region, finish, genomic_scale, place, warn_no_data
)


TRANSCRIPT_LABELS = ['transcript', 'gene', 'both', None]
NO_SPACE_WARNING = 'Not enough plotting space for all provided elements.'


def _pair(value):
    if isinstance(value, (list, tuple)):
        if len(value) == 1:
            return (value[0], value[0])
        return (value[0], value[1])
    return (value, value)


def _gene_table(gene_table, assembly):
    if gene_table is not None:
        return read_gene_table(gene_table)
    if assembly.gene_table is None:
        raise InvalidInputError('no gene table given and the assembly {} has none'.format(assembly.genome))
    return assembly.gene_table


def _region_transcripts(table, chrom, chromstart, chromend):
    return table[
        (table['chrom'] == chrom) & (table['end'] >= chromstart) & (table['start'] <= chromend)
    ].reset_index(drop=True)


def collapse_genes(transcripts, gene_id_column='gene_id', display_column='gene_name'):
    """
    merge the transcripts of each gene into a single gene body with the union of their exons

    Returns:
        pandas.DataFrame: one row per gene with chrom, start, end, strand, gene_id, label and exons columns
    """
    rows = []
    for gene_id, group in transcripts.groupby(gene_id_column, sort=False):
        exons = []
        for starts, ends in zip(group['exon_starts'], group['exon_ends']):
            exons.extend(zip(starts, ends))
        rows.append({
            'chrom': group['chrom'].iloc[0],
            'start': int(group['start'].min()),
            'end': int(group['end'].max()),
            'strand': group['strand'].iloc[0],
            'gene_id': gene_id,
            'label': str(group[display_column].iloc[0]) if display_column in group.columns else str(gene_id),
            'exons': Interval.min_nonoverlapping(*exons) if exons else [],
        })
    return pd.DataFrame(rows, columns=['chrom', 'start', 'end', 'strand', 'gene_id', 'label', 'exons'])


def _highlight_lookup(gene_highlights):
    if gene_highlights is None:
        return {}
    if isinstance(gene_highlights, pd.DataFrame):
        return dict(zip(gene_highlights.iloc[:, 0].astype(str), gene_highlights.iloc[:, 1]))
    return dict(gene_highlights)


def _draw_arrow(dwg, group, x_pos, y_pos, size, strand, color):
    direction = 1 if strand == STRAND.POS else -1
    group.add(dwg.polyline(
        [(x_pos - direction * size, y_pos - size), (x_pos, y_pos), (x_pos - direction * size, y_pos + size)],
        fill='none', stroke=color, class_='arrow',
    ))


@accepts_params
def plot_genes(
    page,
    chrom=None,
    chromstart=None,
    chromend=None,
    assembly=None,
    gene_table=None,
    fontsize=8,
    fontcolor=None,
    fill=None,
    strand_labels=True,
    gene_highlights=None,
    gene_background=None,
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
    plot collapsed gene bodies for a region. Plus strand genes are drawn in the top half of the plot and minus
    strand genes in the bottom half. Labels that would overlap an already placed label are dropped, longer genes
    are labelled first

    Args:
        fill: color of the genes, or a (plus strand, minus strand) pair of colors
        fontcolor: color of the labels, or a (plus strand, minus strand) pair of colors
        gene_highlights: gene names and their colors (dict or 2-column data frame); all other genes are drawn in
            gene_background
        strand_labels (bool): label the strand of each track at the left edge
    """
    if chrom is None:
        raise missing_argument('chrom')
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    plot = GenomicPlot(
        'genes', chrom=chrom, chromstart=chromstart, chromend=chromend, assembly=assembly,
        x=x, y=y, width=width, height=height, just=just, default_units=default_units,
    )
    check_placement(plot)
    check_page(page, plot)
    check_region(plot.chromstart, plot.chromend)
    genomic_scale(plot, assembly)

    table = _gene_table(gene_table, assembly)
    transcripts = _region_transcripts(table, plot.chrom, plot.chromstart, plot.chromend)
    genes = collapse_genes(transcripts, assembly.gene_id_column, assembly.display_column)
    plot.genes = genes

    viewport = place(page, plot, xscale=plot.xscale, draw=draw)
    if viewport is not None:
        config = page.settings
        dwg = page.drawing
        plus_fill, minus_fill = _pair(fill if fill is not None else (config.gene_plus_color, config.gene_minus_color))
        plus_font, minus_font = _pair(fontcolor if fontcolor is not None else (plus_fill, minus_fill))
        highlights = _highlight_lookup(gene_highlights)
        background = gene_background if gene_background is not None else config.gene_background_color

        left, top, vp_width, vp_height = viewport.px_box
        track_height = vp_height / 2
        exon_height = track_height * config.gene_exon_height_ratio
        centers = {
            STRAND.POS: top + track_height - exon_height / 2 - config.padding,
            STRAND.NEG: top + track_height + exon_height / 2 + config.padding,
        }
        placed_labels = {STRAND.POS: [], STRAND.NEG: []}

        if strand_labels:
            for strand, center in centers.items():
                plot.group.add(dwg.text(
                    strand,
                    insert=(left + config.padding, center + config.font_central_shift_ratio * fontsize),
                    fill=config.label_color,
                    style=config.text_style(fontsize, 'start'),
                    class_='strand_label',
                ))
            strand_label_width = config.gene_strand_label_width
            placed_labels = {
                s: [Interval(left, left + strand_label_width)] for s in placed_labels
            }

        order = sorted(genes.itertuples(), key=lambda g: g.end - g.start, reverse=True)
        for gene in order:
            strand = STRAND.NEG if gene.strand == STRAND.NEG else STRAND.POS
            center = centers[strand]
            if highlights:
                color = highlights.get(gene.label, background)
                font_color = color
            else:
                color = plus_fill if strand == STRAND.POS else minus_fill
                font_color = plus_font if strand == STRAND.POS else minus_font

            gene_group = dwg.g(class_='gene')
            gene_group.add(Tag('title', 'gene {} {}:{}-{}'.format(gene.label, gene.chrom, gene.start, gene.end)))
            start_px = viewport.px_x(gene.start)
            end_px = viewport.px_x(gene.end)
            gene_group.add(dwg.line(
                (start_px, center), (end_px, center),
                stroke=color, stroke_width=config.transcript_intron_stroke_width, class_='gene_body',
            ))
            for exon in gene.exons:
                exon_start = viewport.px_x(exon.start)
                exon_width = max(viewport.px_x(exon.end) - exon_start, config.transcript_intron_stroke_width)
                gene_group.add(dwg.rect(
                    (exon_start, center - exon_height / 2), (exon_width, exon_height),
                    fill=color, class_='exon',
                ))
            arrow_x = end_px if strand == STRAND.POS else start_px
            _draw_arrow(dwg, gene_group, arrow_x, center, config.gene_arrow_size, strand, color)

            label_width = config.text_width(gene.label, fontsize)
            label_center = (start_px + end_px) / 2
            label_px = Interval(label_center - label_width / 2, label_center + label_width / 2)
            visible = label_px.start >= left and label_px.end <= left + vp_width
            overlapping = any([Interval.overlaps(label_px, other) for other in placed_labels[strand]])
            if visible and not overlapping:
                placed_labels[strand].append(label_px)
                if strand == STRAND.POS:
                    label_y = center - exon_height / 2 - config.padding
                else:
                    label_y = center + exon_height / 2 + config.padding + fontsize
                gene_group.add(dwg.text(
                    gene.label,
                    insert=(label_center, label_y),
                    fill=font_color,
                    style=config.text_style(fontsize, 'middle'),
                    class_='label',
                ))
            else:
                logger.debug('dropped overlapping gene label: {}'.format(gene.label))
            plot.group.add(gene_group)
    if not len(genes.index):
        warn_no_data()
    return finish(page, plot, draw)


def _transcript_label(row, labels):
    if labels == 'transcript':
        return str(row.transcript_id)
    elif labels == 'gene':
        return str(row.gene_name)
    elif labels == 'both':
        return '{}:{}'.format(row.gene_name, row.transcript_id)
    return ''


@accepts_params
def plot_transcripts(
    page,
    chrom=None,
    chromstart=None,
    chromend=None,
    assembly=None,
    gene_table=None,
    labels='transcript',
    fontsize=8,
    fontcolor=None,
    fill=None,
    stroke=0.5,
    box_height=(2, 'mm'),
    space_height=0.3,
    limit_label=True,
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
    plot each transcript of a region on its own row. Exons are boxes and introns lines, transcripts are packed
    into as few rows as possible without their (labelled) extents overlapping. Rows that do not fit in the plot
    are dropped with a warning

    Args:
        labels (str): label transcripts by transcript id, gene name, both, or not at all (None)
        fill: color of the transcripts, or a (plus strand, minus strand) pair of colors
        stroke (float): width of the intron lines
        box_height: height of the exon boxes
        space_height (float): space between rows as a fraction of the box height
        limit_label (bool): only draw labels that fit inside the plot
    """
    if chrom is None:
        raise missing_argument('chrom')
    if labels not in TRANSCRIPT_LABELS:
        raise InvalidInputError('labels must be one of {}'.format(TRANSCRIPT_LABELS), labels)
    assembly = parse_assembly(assembly if assembly is not None else DEFAULTS.default_assembly)
    plot = GenomicPlot(
        'transcripts', chrom=chrom, chromstart=chromstart, chromend=chromend, assembly=assembly,
        x=x, y=y, width=width, height=height, just=just, default_units=default_units,
    )
    check_placement(plot)
    check_page(page, plot)
    check_region(plot.chromstart, plot.chromend)
    genomic_scale(plot, assembly)

    table = _gene_table(gene_table, assembly)
    transcripts = _region_transcripts(table, plot.chrom, plot.chromstart, plot.chromend)
    plot.transcripts = transcripts
    plot.rows = 0

    viewport = place(page, plot, xscale=plot.xscale, draw=draw)
    if viewport is not None:
        config = page.settings
        dwg = page.drawing
        plus_fill, minus_fill = _pair(fill if fill is not None else (config.gene_plus_color, config.gene_minus_color))
        plus_font, minus_font = _pair(fontcolor if fontcolor is not None else (plus_fill, minus_fill))
        box_px = page.px(page.convert(box_height, plot.default_units))
        space_px = box_px * space_height
        label_px_height = config.text_height(fontsize) if labels else 0
        row_height = box_px + space_px + label_px_height
        left, top, vp_width, vp_height = viewport.px_box

        extents = {}
        for row in transcripts.itertuples():
            start_px = viewport.px_x(row.start)
            end_px = viewport.px_x(row.end)
            label = _transcript_label(row, labels)
            if label:
                center = (start_px + end_px) / 2
                half_label = config.text_width(label, fontsize) / 2
                start_px, end_px = min(start_px, center - half_label), max(end_px, center + half_label)
            extents[(start_px, end_px, row.Index)] = (row, label)
        tracks = split_intervals_into_tracks(extents.keys(), spacing=config.padding)

        max_rows = int((vp_height + space_px) // row_height) if row_height > 0 else 0
        if len(extents) and len(tracks) > max_rows:
            warnings.warn(NO_SPACE_WARNING)
            tracks = tracks[:max_rows]
        plot.rows = len(tracks)

        for track_index, track in enumerate(tracks):
            row_bottom = top + vp_height - track_index * row_height
            box_top = row_bottom - box_px
            for extent in track:
                row, label = extents[extent]
                is_plus = row.strand != STRAND.NEG
                color = plus_fill if is_plus else minus_fill
                group = dwg.g(class_='transcript')
                group.add(Tag('title', 'transcript {} {}:{}-{}'.format(row.transcript_id, row.chrom, row.start, row.end)))
                group.add(dwg.line(
                    (viewport.px_x(row.start), box_top + box_px / 2),
                    (viewport.px_x(row.end), box_top + box_px / 2),
                    stroke=color, stroke_width=stroke, class_='intron',
                ))
                for exon_start, exon_end in zip(row.exon_starts, row.exon_ends):
                    exon_x = viewport.px_x(exon_start)
                    group.add(dwg.rect(
                        (exon_x, box_top), (max(viewport.px_x(exon_end) - exon_x, stroke), box_px),
                        fill=color, class_='exon',
                    ))
                if label:
                    center = (viewport.px_x(row.start) + viewport.px_x(row.end)) / 2
                    half_label = config.text_width(label, fontsize) / 2
                    fits = center - half_label >= left and center + half_label <= left + vp_width
                    if fits or not limit_label:
                        group.add(dwg.text(
                            label,
                            insert=(center, box_top - config.padding),
                            fill=plus_font if is_plus else minus_font,
                            style=config.text_style(fontsize, 'middle'),
                            class_='label',
                        ))
                plot.group.add(group)
    if not len(transcripts.index):
        warn_no_data()
    return finish(page, plot, draw)
