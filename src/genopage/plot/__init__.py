"""
plot builders, one per kind of genomic data, and basic page elements
"""
from .genes import plot_genes, plot_transcripts
from .hic import plot_hic_rectangle, plot_hic_square, plot_hic_triangle
from .ideogram import plot_ideogram
from .manhattan import plot_manhattan
from .pairs import plot_pairs, plot_pairs_arches
from .ranges import plot_ranges
from .shapes import plot_circle, plot_legend, plot_polygon, plot_rect, plot_segments, plot_text
from .signal import plot_signal
