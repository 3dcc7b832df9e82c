"""
annotations of placed plots
"""
from .axes import annotate_xaxis, annotate_yaxis
from .genome_label import annotate_genome_label, plot_genome_label
from .heatmap_legend import annotate_heatmap_legend
from .highlight import annotate_highlight
from .pixels import annotate_pixels
from .zoom import annotate_zoom_lines
