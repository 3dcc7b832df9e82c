"""
color palettes and the mapping of numeric or categorical values onto them
"""
import math

from colour import Color
import numpy as np
import pandas as pd

from .error import InvalidInputError


PALETTES = {
    'YlGnBu': ['#ffffd9', '#edf8b1', '#c7e9b4', '#7fcdbb', '#41b6c4', '#1d91c0', '#225ea8', '#253494', '#081d58'],
    'YlOrRd': ['#ffffcc', '#ffeda0', '#fed976', '#feb24c', '#fd8d3c', '#fc4e2a', '#e31a1c', '#bd0026', '#800026'],
    'Reds': ['#fff5f0', '#fee0d2', '#fcbba1', '#fc9272', '#fb6a4a', '#ef3b2c', '#cb181d', '#a50f15', '#67000d'],
    'Blues': ['#f7fbff', '#deebf7', '#c6dbef', '#9ecae1', '#6baed6', '#4292c6', '#2171b5', '#08519c', '#08306b'],
    'Greens': ['#f7fcf5', '#e5f5e0', '#c7e9c0', '#a1d99b', '#74c476', '#41ab5d', '#238b45', '#006d2c', '#00441b'],
    'Greys': ['#ffffff', '#f0f0f0', '#d9d9d9', '#bdbdbd', '#969696', '#737373', '#525252', '#252525', '#000000'],
    'RdBu': [
        '#67001f', '#b2182b', '#d6604d', '#f4a582', '#fddbc7', '#f7f7f7',
        '#d1e5f0', '#92c5de', '#4393c3', '#2166ac', '#053061',
    ],
    'Set1': ['#e41a1c', '#377eb8', '#4daf4a', '#984ea3', '#ff7f00', '#ffff33', '#a65628', '#f781bf', '#999999'],
    'Set2': ['#66c2a5', '#fc8d62', '#8da0cb', '#e78ac3', '#a6d854', '#ffd92f', '#e5c494', '#b3b3b3'],
}
""":class:`dict`: ColorBrewer palettes by name"""

COLOR_STEPS = 100
""":class:`int`: number of colors a continuous palette is expanded to before values are binned"""


def color_ramp(colors, n):
    """
    interpolate (in RGB space) a list of colors into n evenly spaced colors

    Example:
        >>> color_ramp(['#000000', '#ff0000', '#ffffff'], 3)
        ['#000', '#f00', '#fff']
    """
    if n < 1:
        return []
    stops = [Color(c).rgb for c in colors]
    if len(stops) == 1 or n == 1:
        return [Color(rgb=stops[0]).hex] * n
    positions = np.linspace(0, 1, len(stops))
    result = []
    for frac in np.linspace(0, 1, n):
        rgb = tuple(
            float(np.interp(frac, positions, [stop[i] for stop in stops]))
            for i in range(3)
        )
        result.append(Color(rgb=rgb).hex)
    return result


def palette(name):
    """
    returns a function which produces n colors from a named palette

    Raises:
        InvalidInputError: the palette name is not a built-in palette
    """
    if name not in PALETTES:
        raise InvalidInputError('unrecognized palette name', name, sorted(PALETTES.keys()))
    colors = PALETTES[name]

    def _ramp(n):
        return color_ramp(colors, n)
    _ramp.__name__ = name
    return _ramp


def resolve_palette(value):
    """
    palettes may be given as a built-in name, a list of colors or a function of the number of colors
    """
    if value is None:
        return None
    if callable(value):
        return value
    if isinstance(value, str):
        if value in PALETTES:
            return palette(value)
        return lambda n: [Color(value).hex] * n
    colors = list(value)
    if not colors:
        raise InvalidInputError('palette must contain at least one color')
    return lambda n: color_ramp(colors, n)


def map_colors(values, palette, range=None):
    """
    map numeric values onto a continuous palette

    Args:
        values (Iterable[float]): values to color
        palette: built-in palette name, list of colors, or function returning n colors
        range (Tuple[float,float]): values at or outside these bounds get the end colors. Defaults to the
            range of the values

    Returns:
        List[str]: hex colors, None for missing values
    """
    values = np.asarray(list(values), dtype=float)
    if not len(values):
        return []
    ramp = resolve_palette(palette)(COLOR_STEPS)
    finite = values[~np.isnan(values)]
    if range is None:
        if not len(finite):
            return [None] * len(values)
        range = (float(finite.min()), float(finite.max()))
    low, high = range
    result = []
    for value in values:
        if math.isnan(value):
            result.append(None)
        elif high <= low:
            result.append(ramp[0])
        else:
            frac = (min(max(value, low), high) - low) / (high - low)
            result.append(ramp[int(round(frac * (len(ramp) - 1)))])
    return result


class ColorBy:
    """
    request to color the elements of a plot by the values in one of the data columns

    Attributes:
        column (str): the data column
        palette: palette for the values (see :func:`resolve_palette`)
        range (Tuple[float,float]): optional range for numeric columns
    """

    def __init__(self, column, palette=None, range=None):
        self.column = column
        self.palette = palette
        self.range = range

    def __repr__(self):
        return 'ColorBy(column={})'.format(repr(self.column))


def colorby(column, palette=None, range=None):
    return ColorBy(column, palette=palette, range=range)


def apply_colorby(data, colorby, default_palette='Set1'):
    """
    compute a color for each row of a data frame from a :class:`ColorBy` request. Numeric columns use a
    continuous mapping, anything else is treated as categorical with categories taking the palette colors in
    sorted order

    Raises:
        InvalidInputError: the column is not in the data
    """
    if colorby.column not in data.columns:
        raise InvalidInputError('colorby column not found in data', colorby.column, list(data.columns))
    column = data[colorby.column]
    pal = colorby.palette if colorby.palette is not None else default_palette

    if pd.api.types.is_numeric_dtype(column) and not pd.api.types.is_bool_dtype(column):
        return map_colors(column, pal, range=colorby.range)

    categories = sorted(column.dropna().astype(str).unique())
    if not categories:
        return [None] * len(column)
    if isinstance(pal, str) and pal in PALETTES and len(categories) <= len(PALETTES[pal]):
        swatches = PALETTES[pal][:len(categories)]
    else:
        swatches = resolve_palette(pal)(len(categories))
    lookup = dict(zip(categories, swatches))
    return [None if pd.isnull(v) else lookup[str(v)] for v in column]


def dynamic_label_color(color):
    """
    calculates the luminance of a color and determines if a black or white label will be more contrasting
    """
    color = Color(color)
    if color.get_luminance() < 0.5:
        return '#FFFFFF'
    return '#000000'
