from colour import Color

from .constants import GIEMSA_STAIN, UNITS, Namespace


class WeakNamespace(Namespace):
    def is_env_overwritable(self, attr):
        return True


DEFAULTS = WeakNamespace()
"""
page level defaults. Any of these can be overridden by the environment variable of the same name
prefixed by GENOPAGE_ (ex. GENOPAGE_DEFAULT_UNITS=cm)
"""
DEFAULTS.add('default_units', UNITS.INCHES, defn='units used for numeric placement values given without units', cast_type=UNITS)
DEFAULTS.add('dpi', 72, defn='number of svg user units (pixels) per inch of page')
DEFAULTS.add('default_assembly', 'hg38', defn='genome assembly used when none is given')
DEFAULTS.add('page_guide_color', '#2929ff', defn='color of the page ruler and guide lines')
DEFAULTS.add('font_family', 'Helvetica, Arial, sans-serif', defn='font family for all text elements')
DEFAULTS.add('hic_palette', 'YlGnBu', defn='name of the built-in palette used for Hi-C heatmaps')
DEFAULTS.add('text_height_ratio', 1.2, defn='line height of text relative to its font size')


class DrawingSettings:
    """
    holds settings related to colors/sizes for the drawing. All sizes are in svg user units (points)
    """

    def __init__(self, **kwargs):
        inputs = {}
        inputs.update(DEFAULTS.items())
        inputs.update(kwargs)
        for arg, val in inputs.items():
            if arg not in DEFAULTS:
                raise KeyError('unrecognized argument', arg)
            setattr(self, arg, val)
        self.padding = 2
        self.font_style = (
            'font-size:{font_size}px;text-anchor:{text_anchor};font-family:' + self.font_family
        )
        # average glyph width relative to font size, used to estimate label widths
        self.font_width_height_ratio = 0.55
        self.font_central_shift_ratio = 0.35
        self.default_font_size = 8
        self.label_color = '#000000'

        self.tick_length = 4
        self.axis_stroke_width = 0.75
        self.axis_color = '#000000'

        self.guide_stroke_width = 0.5
        self.guide_font_size = 6
        self.guide_ruler_size = 10

        self.gene_plus_color = '#669fd9'
        self.gene_minus_color = '#abcc8e'
        self.gene_highlight_color = '#e67b48'
        self.gene_background_color = '#bdbdbd'
        self.gene_font_size = 8
        self.gene_strand_label_width = 10
        self.gene_exon_height_ratio = 0.4
        self.gene_arrow_size = 3

        self.transcript_box_height = 2
        self.transcript_space_height = 2
        self.transcript_intron_stroke_width = 0.5

        self.range_fill = '#7ecdbb'
        self.range_stroke_width = 0.5

        self.signal_color = '#37a7db'
        self.signal_negative_color = '#a3a3a3'
        self.signal_scale_font_size = 8

        self.manhattan_fill = '#a9a9a9'
        self.manhattan_point_radius = 1
        self.manhattan_sig_color = '#ff0000'
        self.manhattan_lead_color = '#ff0000'

        self.zoom_color = '#bebebe'

        self.highlight_fill = '#d3d3d3'
        self.highlight_opacity = 0.4

        self.legend_font_size = 8
        self.legend_font_color = '#a9a9a9'
        self.legend_line_color = '#a9a9a9'
        self.legend_tick_fraction = 0.15

        self.pixel_color = '#000000'
        self.pixel_stroke_width = 1

        self.template_band_stroke_width = 0.5
        temp = [c.hex for c in Color('#ffffff').range_to(Color('#000000'), 7)]
        self.template_band_fill = {
            GIEMSA_STAIN.ACEN: '#800000',
            GIEMSA_STAIN.GPOS25: temp[1],
            GIEMSA_STAIN.GPOS33: temp[2],
            GIEMSA_STAIN.GPOS50: temp[3],
            GIEMSA_STAIN.GPOS66: temp[4],
            GIEMSA_STAIN.GPOS75: temp[5],
            GIEMSA_STAIN.GPOS100: temp[6],
            GIEMSA_STAIN.GNEG: '#ffffff',
            GIEMSA_STAIN.GVAR: '#b3b3b3',
            GIEMSA_STAIN.STALK: '#bfbfbf',
        }
        self.template_band_stroke = '#000000'
        self.template_default_fill = '#ffffff'

    def text_style(self, font_size=None, text_anchor='middle'):
        return self.font_style.format(
            font_size=self.default_font_size if font_size is None else font_size,
            text_anchor=text_anchor,
        )

    def text_width(self, label, font_size=None):
        """
        estimate of the width of a label in svg user units
        """
        font_size = self.default_font_size if font_size is None else font_size
        return len(str(label)) * font_size * self.font_width_height_ratio

    def text_height(self, font_size=None):
        font_size = self.default_font_size if font_size is None else font_size
        return font_size * self.text_height_ratio
