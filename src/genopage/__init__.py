"""
coordinate-based multi-panel figures of genomic data. A page is created, plots are placed on it at explicit page
coordinates and then annotated with axes, labels, legends, highlights and zoom lines
"""
from .page import Page, Unit
from .params import Params

__version__ = '0.3.0'
