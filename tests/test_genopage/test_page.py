import os

import pytest

from genopage.error import InvalidInputError, PageError, PlacementError
from genopage.page import Page, Unit, Viewport, convert_units, parse_just
from genopage.plot.base import GenomicPlot, finish, place


@pytest.fixture
def page():
    return Page(8.5, 11, showguides=False)


class TestUnits:
    def test_convert_units(self):
        assert convert_units(1, 'inches', 'cm') == pytest.approx(2.54)
        assert convert_units(25.4, 'mm', 'inches') == pytest.approx(1)
        assert convert_units(72.27, 'points', 'inches') == pytest.approx(1)

    def test_unit(self):
        assert Unit(2.54, 'cm').to('inches') == pytest.approx(1)
        assert Unit(1, 'inches').to('mm') == pytest.approx(25.4)

    def test_bad_units(self):
        with pytest.raises(TypeError):
            Unit(1, 'feet')


class TestParseJust:
    def test_pair(self):
        assert parse_just(['left', 'top']) == (0, 1)
        assert parse_just(('right', 'bottom')) == (1, 0)

    def test_vertical_first(self):
        assert parse_just(['top', 'right']) == (1, 1)
        assert parse_just(['bottom', 'center']) == (0.5, 0)

    def test_single(self):
        assert parse_just('right') == (1, 0.5)
        assert parse_just('bottom') == (0.5, 0)
        assert parse_just('center') == (0.5, 0.5)

    def test_default(self):
        assert parse_just(None) == (0, 1)

    def test_numeric(self):
        assert parse_just([0.25, 0.75]) == (0.25, 0.75)
        assert parse_just([0.5]) == (0.5, 0.5)

    def test_invalid(self):
        with pytest.raises(InvalidInputError):
            parse_just('middle')
        with pytest.raises(InvalidInputError):
            parse_just(['left', 'right'])
        with pytest.raises(InvalidInputError):
            parse_just(['left', 'top', 'center'])


class TestViewport:
    @pytest.fixture
    def viewport(self):
        return Viewport('vp1', 1, 2, 4, 2, xscale=(0, 100), yscale=(0, 10), px_per_unit=72)

    def test_native_x(self, viewport):
        assert viewport.native_x(0) == 1
        assert viewport.native_x(50) == 3
        assert viewport.native_x(100) == 5

    def test_native_y_starts_at_bottom(self, viewport):
        assert viewport.native_y(0) == 4
        assert viewport.native_y(10) == 2
        assert viewport.native_y(5) == 3

    def test_reversed_yscale(self):
        viewport = Viewport('vp1', 0, 0, 1, 1, yscale=(10, 0))
        assert viewport.native_y(0) == 0
        assert viewport.native_y(10) == 1

    def test_px(self, viewport):
        assert viewport.px_x(100) == 360
        assert viewport.px_box == (72, 144, 288, 144)

    def test_corners(self, viewport):
        assert viewport.bottom_left == (1, 4)
        assert viewport.bottom_right == (5, 4)
        assert viewport.center == (3, 3)
        assert viewport.contains(3, 3)
        assert not viewport.contains(0, 3)

    def test_negative_size_error(self):
        with pytest.raises(PlacementError):
            Viewport('vp1', 0, 0, -1, 1)


class TestPage:
    def test_size_error(self):
        with pytest.raises(PageError):
            Page(0, 11)
        with pytest.raises(PageError):
            Page(8.5, None)

    def test_units(self):
        page = Page(20, 30, default_units='cm', showguides=False)
        assert page.units == 'cm'
        assert page.px_per_unit == pytest.approx(72 / 2.54)

    def test_convert(self, page):
        assert page.convert(2.54, 'cm') == pytest.approx(1)
        assert page.convert((72.27, 'points')) == pytest.approx(1)
        assert page.convert(Unit(10, 'mm')) == pytest.approx(10 / 25.4)
        assert page.convert(3) == 3
        assert page.convert(None) is None

    def test_convert_error(self, page):
        with pytest.raises(InvalidInputError):
            page.convert('1in')
        with pytest.raises(InvalidInputError):
            page.convert((1, 'cm', 2))

    def test_new_viewport_names(self, page):
        first = page.new_viewport('signal', 1, 1, 2, 1)
        second = page.new_viewport('signal', 1, 2, 2, 1)
        other = page.new_viewport('ranges', 1, 3, 2, 1)
        assert (first.name, second.name, other.name) == ('signal1', 'signal2', 'ranges1')
        assert page.viewports() == ['signal1', 'signal2', 'ranges1']
        assert page.get_viewport('signal2') is second
        assert page.last_viewport() is other

    def test_new_viewport_justification(self, page):
        viewport = page.new_viewport('plot', 4.25, 5.5, 2, 1, just='center')
        assert (viewport.x, viewport.y) == (3.25, 5)
        viewport = page.new_viewport('plot', 4, 5, 2, 1, just=['right', 'bottom'])
        assert (viewport.x, viewport.y) == (2, 4)

    def test_new_viewport_units(self, page):
        viewport = page.new_viewport('plot', (2.54, 'cm'), 1, 5.08, 1, default_units='inches')
        assert viewport.x == pytest.approx(1)
        assert viewport.width == pytest.approx(5.08)

    def test_new_viewport_unregistered(self, page):
        viewport = page.new_viewport('plot', 1, 1, 2, 1, register=False, name='custom')
        assert viewport.name == 'custom'
        assert page.viewports() == []

    def test_new_viewport_missing_placement(self, page):
        with pytest.raises(PlacementError):
            page.new_viewport('plot', 1, 1, None, 1)

    def test_get_viewport_error(self, page):
        with pytest.raises(KeyError):
            page.get_viewport('plot1')

    def test_parse_y_below_previous(self, page):
        page.new_viewport('plot', 1, 1, 2, 1)
        assert page.parse_y('b0.5') == 2.5
        assert page.parse_y('b 1') == 3
        assert page.parse_y('b2.54', 'cm') == pytest.approx(3)
        assert page.parse_y(4) == 4

    def test_parse_y_without_previous(self, page):
        with pytest.raises(PlacementError):
            page.parse_y('b0.5')

    def test_parse_y_bad_string(self, page):
        page.new_viewport('plot', 1, 1, 2, 1)
        with pytest.raises(InvalidInputError):
            page.parse_y('a0.5')

    def test_new_element_name(self, page):
        assert page.new_element_name('circle') == 'circle1'
        assert page.new_element_name('circle') == 'circle2'
        assert page.new_element_name('rect') == 'rect1'

    def test_add_before_guides(self):
        page = Page(4, 4)
        group = page.drawing.g(id='plot')
        page.add(group)
        elements = page.drawing.elements
        assert elements.index(group) < elements.index(page.guides)
        page.add(group)
        assert elements.count(group) == 1

    def test_add_unplaced_error(self, page):
        with pytest.raises(PlacementError):
            page.add(GenomicPlot('signal'))

    def test_remove(self, page):
        plot = GenomicPlot('test', x=1, y=1, width=2, height=1)
        place(page, plot)
        finish(page, plot)
        page.add_def(plot, page.drawing.linearGradient(id='test_ramp'))
        label = GenomicPlot('label', x=1, y='b0', width=2, height=0.5)
        place(page, label)
        finish(page, label)
        plot.annotations.append(label)
        assert page.viewports() == ['test1', 'label1']
        assert plot.group in page.drawing.elements
        assert len(page.drawing.defs.elements) == 3

        page.remove(plot)
        assert page.viewports() == []
        assert plot.group not in page.drawing.elements
        assert label.group not in page.drawing.elements
        assert not page.drawing.defs.elements

    def test_guides(self):
        page = Page(3, 2, xgrid=1, ygrid=1)
        assert page.guides in page.drawing.elements
        rulers = [e for e in page.guides.elements if e.attribs.get('class') == 'ruler']
        assert len(rulers) == 5
        page.hide_guides()
        assert page.guides is None
        assert [e for e in page.drawing.elements if e is not page.drawing.defs] == []

    def test_no_grid(self):
        page = Page(3, 2, xgrid=0, ygrid=0)
        assert not [e for e in page.guides.elements if e.attribs.get('class') == 'guide']

    def test_save(self, page, tmp_path):
        filename = os.path.join(str(tmp_path), 'figures', 'page.svg')
        page.save(filename)
        assert os.path.isfile(filename)
        with open(filename) as fh:
            assert '<svg' in fh.read()

    def test_tostring(self, page):
        assert page.tostring().startswith('<svg')
