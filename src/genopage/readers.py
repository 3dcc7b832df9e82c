"""
readers normalizing data frames and tab-delimited text files into the tables the plot functions expect
"""
import math
import warnings
from typing import Dict, List

import numpy as np
import pandas as pd

from .assembly import Band, Template, check_assembly_match
from .constants import GIEMSA_STAIN
from .error import InvalidInputError
from .util import logger, read_tabbed_file


RANGE_COLUMNS = ['chrom', 'start', 'end']
PAIRED_COLUMNS = ['chrom1', 'start1', 'end1', 'chrom2', 'start2', 'end2']
SIGNAL_COLUMNS = ['chrom', 'start', 'end', 'score']
HIC_COLUMNS = ['x', 'y', 'counts']
GENE_COLUMNS = ['chrom', 'start', 'end', 'strand', 'gene_id', 'gene_name', 'transcript_id', 'exon_starts', 'exon_ends']
GWAS_COLUMNS = ['chrom', 'pos', 'p']
CYTOBAND_COLUMNS = ['chrom', 'start', 'end', 'band_name', 'giemsa_stain']

# column names used by other tools for the same fields
_ALIASES = {
    'seqnames': 'chrom',
    'chr': 'chrom',
    'chromosome': 'chrom',
    'chromStart': 'start',
    'chromEnd': 'end',
    'seqnames1': 'chrom1',
    'seqnames2': 'chrom2',
    'bp': 'pos',
    'position': 'pos',
    'pval': 'p',
    'pvalue': 'p',
    'P': 'p',
}


def _is_number(value):
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def _read_text(filename, numeric_column=1):
    """
    read a tab-delimited file with or without a header line
    """
    df = read_tabbed_file(filename, header=None)
    if len(df.index) and len(df.columns) > numeric_column and not _is_number(df.iloc[0, numeric_column]):
        df = read_tabbed_file(filename, header=0)
    return df


def _load(data, numeric_column=1):
    if isinstance(data, pd.DataFrame):
        return data.copy()
    if isinstance(data, str):
        return _read_text(data, numeric_column)
    try:
        return pd.DataFrame(data)
    except (TypeError, ValueError):
        raise InvalidInputError('expected a data frame or the path to a tab-delimited file', type(data))


def _name_columns(df, names):
    """
    use the known column names where given, otherwise the leading columns take the names in order
    """
    df = df.rename(columns={c: _ALIASES[c] for c in df.columns if c in _ALIASES and _ALIASES[c] not in df.columns})
    if all([name in df.columns for name in names]):
        others = [c for c in df.columns if c not in names]
        return df[names + others]
    if len(df.columns) < len(names):
        raise InvalidInputError(
            'data must have at least {} columns ({})'.format(len(names), ', '.join(names)), list(df.columns))
    df.columns = names + list(df.columns[len(names):])
    return df


def _enforce_integer(df, columns):
    for col in columns:
        series = df[col]
        if not pd.api.types.is_numeric_dtype(series) or pd.api.types.is_bool_dtype(series):
            raise InvalidInputError('column "{}" must be an integer'.format(col), series.dtype)
        if not pd.api.types.is_integer_dtype(series):
            values = series.dropna()
            if (values != np.floor(values)).any():
                raise InvalidInputError('column "{}" must be an integer'.format(col), series.dtype)
            if len(values) == len(series):
                df[col] = series.astype(int)
    return df


def _check_genome(data, assembly):
    genome = getattr(data, 'attrs', {}).get('genome') if isinstance(data, pd.DataFrame) else None
    if assembly is not None and genome is not None:
        check_assembly_match(genome, assembly)


def read_range_data(data, assembly=None) -> pd.DataFrame:
    """
    read BED-like ranges into a data frame with the columns chrom, start, end followed by any other columns

    Raises:
        InvalidInputError: start or end are not integers
    """
    _check_genome(data, assembly)
    df = _name_columns(_load(data), RANGE_COLUMNS)
    df = _enforce_integer(df, ['start', 'end'])
    df['chrom'] = df['chrom'].astype(str)
    if 'strand' in df.columns:
        df['strand'] = df['strand'].fillna('*').astype(str)
    return df.reset_index(drop=True)


def read_paired_data(data, assembly=None) -> pd.DataFrame:
    """
    read paired ranges (ex. BEDPE, loop calls) into a data frame with the columns chrom1, start1, end1, chrom2,
    start2, end2 followed by any other columns

    Raises:
        InvalidInputError: the start or end columns are not integers
    """
    _check_genome(data, assembly)
    df = _name_columns(_load(data), PAIRED_COLUMNS)
    df = _enforce_integer(df, ['start1', 'end1', 'start2', 'end2'])
    df['chrom1'] = df['chrom1'].astype(str)
    df['chrom2'] = df['chrom2'].astype(str)
    return df.reset_index(drop=True)


def read_signal(data, chrom=None, chromstart=None, chromend=None) -> pd.DataFrame:
    """
    read a bedGraph-like signal and keep the intervals overlapping the given region
    """
    df = _name_columns(_load(data), SIGNAL_COLUMNS)
    df = _enforce_integer(df, ['start', 'end'])
    if not pd.api.types.is_numeric_dtype(df['score']):
        raise InvalidInputError('column "score" must be numeric', df['score'].dtype)
    df['chrom'] = df['chrom'].astype(str)
    if chrom is not None:
        df = df[df['chrom'] == chrom]
    if chromstart is not None:
        df = df[df['end'] >= chromstart]
    if chromend is not None:
        df = df[df['start'] <= chromend]
    return df.sort_values(['start', 'end']).reset_index(drop=True)


def read_hic(
    data,
    chrom=None,
    chromstart=None,
    chromend=None,
    altchrom=None,
    altchromstart=None,
    altchromend=None,
    resolution=None,
) -> pd.DataFrame:
    """
    read a sparse (upper triangular) Hi-C matrix with the columns x, y, counts. The x and y values are the
    starts of the bins on chrom and altchrom respectively

    For intrachromosomal data the pixels are reordered so that x <= y

    Raises:
        InvalidInputError: the bin positions are not integers or the counts are not numeric
    """
    df = _name_columns(_load(data, numeric_column=0), HIC_COLUMNS)[HIC_COLUMNS].copy()
    df = _enforce_integer(df, ['x', 'y'])
    if not pd.api.types.is_numeric_dtype(df['counts']):
        raise InvalidInputError('column "counts" must be numeric', df['counts'].dtype)
    df = df[~df['counts'].isnull()].copy()

    intra = altchrom is None or altchrom == chrom
    if intra:
        altchromstart = chromstart if altchromstart is None else altchromstart
        altchromend = chromend if altchromend is None else altchromend
        swap = df['x'] > df['y']
        df.loc[swap, ['x', 'y']] = df.loc[swap, ['y', 'x']].values

    def _bounds(start, end):
        if start is not None and resolution:
            start = math.floor(start / resolution) * resolution
        return start, end

    xstart, xend = _bounds(chromstart, chromend)
    ystart, yend = _bounds(altchromstart, altchromend)
    if xstart is not None:
        df = df[df['x'] >= xstart]
    if xend is not None:
        df = df[df['x'] <= xend]
    if ystart is not None:
        df = df[df['y'] >= ystart]
    if yend is not None:
        df = df[df['y'] <= yend]
    logger.debug('read {} Hi-C pixels'.format(len(df.index)))
    return df.sort_values(['x', 'y']).reset_index(drop=True)


def read_cytobands(*filepaths: str) -> Dict[str, Template]:
    """
    read UCSC cytoBand files. Assumes the input file is 0-indexed with [start,end) style. Columns are expected in
    the following order, tab-delimited. A header should not be given

    1. chrom
    2. start
    3. end
    4. band_name
    5. giemsa_stain

    for example

    .. code-block:: text

        chr1    0   2300000 p36.33  gneg
        chr1    2300000 5400000 p36.32  gpos25

    Returns:
        chromosome templates by name
    """
    templates: Dict[str, Template] = {}

    for filename in filepaths:
        df = read_tabbed_file(
            filename,
            dtype={
                'start': int,
                'end': int,
                'chrom': str,
                'band_name': str,
                'giemsa_stain': str,
            },
            names=CYTOBAND_COLUMNS,
        )
        df['giemsa_stain'].apply(lambda v: GIEMSA_STAIN.enforce(v))

        bands_by_template: Dict[str, List[Band]] = {}
        for row in df.to_dict('records'):
            band = Band(row['start'] + 1, row['end'], name=row['band_name'], giemsa_stain=row['giemsa_stain'])
            bands_by_template.setdefault(row['chrom'], []).append(band)

        for tname, bands in bands_by_template.items():
            start = min([b.start for b in bands])
            end = max([b.end for b in bands])
            templates[tname] = Template(tname, start, end, bands=bands)
    return templates


def _parse_positions(value):
    if isinstance(value, (list, tuple, np.ndarray)):
        return [int(v) for v in value]
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return []
    return [int(v) for v in str(value).split(',') if v.strip()]


def read_gene_table(data) -> pd.DataFrame:
    """
    read a transcript table (1-based inclusive coordinates) with the columns: chrom, start, end, strand, gene_id,
    gene_name, transcript_id, exon_starts, exon_ends. The exon columns are comma-separated lists of positions.
    Transcripts without exons are treated as a single exon

    Raises:
        InvalidInputError: a required column is missing or the exon lists do not match
    """
    if isinstance(data, pd.DataFrame) and 'exon_starts' in data.columns and len(data.index) and isinstance(
        data['exon_starts'].iloc[0], list
    ):
        return data
    df = _load(data)
    df = df.rename(columns={c: _ALIASES[c] for c in df.columns if c in _ALIASES and _ALIASES[c] not in df.columns})
    missing = [c for c in GENE_COLUMNS[:4] if c not in df.columns]
    if missing:
        raise InvalidInputError('gene table is missing required columns', missing)
    df = _enforce_integer(df, ['start', 'end'])
    df['chrom'] = df['chrom'].astype(str)
    if 'gene_id' not in df.columns:
        df['gene_id'] = df['gene_name'] if 'gene_name' in df.columns else df.index.astype(str)
    if 'gene_name' not in df.columns:
        df['gene_name'] = df['gene_id']
    if 'transcript_id' not in df.columns:
        df['transcript_id'] = df['gene_id']

    exon_starts = []
    exon_ends = []
    for row in df.to_dict('records'):
        starts = _parse_positions(row.get('exon_starts'))
        ends = _parse_positions(row.get('exon_ends'))
        if not starts and not ends:
            starts, ends = [row['start']], [row['end']]
        if len(starts) != len(ends):
            raise InvalidInputError('exon starts and ends must be the same length', row['transcript_id'])
        exon_starts.append(starts)
        exon_ends.append(ends)
    df['exon_starts'] = exon_starts
    df['exon_ends'] = exon_ends
    return df[GENE_COLUMNS + [c for c in df.columns if c not in GENE_COLUMNS]].reset_index(drop=True)


def read_gwas(data) -> pd.DataFrame:
    """
    read GWAS summary statistics with the columns chrom, pos, p. Rows without a valid p-value are dropped with a
    warning
    """
    df = _name_columns(_load(data), GWAS_COLUMNS)
    df = _enforce_integer(df, ['pos'])
    df['chrom'] = df['chrom'].astype(str)
    df['p'] = pd.to_numeric(df['p'], errors='coerce')
    invalid = df['p'].isnull() | (df['p'] <= 0) | (df['p'] > 1)
    if invalid.any():
        warnings.warn('dropping {} variants without a valid p-value'.format(invalid.sum()))
        df = df[~invalid]
    return df.reset_index(drop=True)
