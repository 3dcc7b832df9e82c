import errno
import logging
import os
import re

import pandas as pd

logger = logging.getLogger('genopage')


def mkdirp(dirname):
    """
    Make a directory or path of directories. Suppresses the error that is normally raised when the directory already exists
    """
    logger.info(f"creating output directory: '{dirname}'")
    try:
        os.makedirs(dirname)
    except OSError as exc:
        if exc.errno == errno.EEXIST and os.path.isdir(dirname):
            pass
        else:
            raise exc
    return dirname


def read_tabbed_file(filename, **kwargs):
    """
    read a tab-delimited text file into a dataframe. Lines starting with '#' are treated as comments
    """
    kwargs.setdefault('sep', '\t')
    kwargs.setdefault('comment', '#')
    logger.debug(f'reading: {filename}')
    return pd.read_csv(filename, **kwargs)


def format_number(value, digits=0, scientific=False, commas=False):
    """
    format a number for a label

    Example:
        >>> format_number(1234567, commas=True)
        '1,234,567'
        >>> format_number(0.000123, digits=2, scientific=True)
        '1.23e-04'
    """
    if scientific:
        return '{:.{}e}'.format(value, digits)
    if commas:
        return '{:,.{}f}'.format(value, digits)
    return '{:.{}f}'.format(value, digits)


def natural_sort_key(name):
    """
    key for sorting chromosome names so that chr2 comes before chr10

    Example:
        >>> sorted(['chr10', 'chr2', 'chrX'], key=natural_sort_key)
        ['chr2', 'chr10', 'chrX']
    """
    return [int(part) if part.isdigit() else part for part in re.split(r'(\d+)', str(name))]
