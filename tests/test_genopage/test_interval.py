import pytest

from genopage.error import InvalidRegionError
from genopage.interval import Interval, IntervalMapping, split_intervals_into_tracks


class TestInterval:
    def test___init__error(self):
        with pytest.raises(InvalidRegionError):
            Interval(4, 3)

    def test_number_type(self):
        assert Interval(1, 2).number_type == int
        assert Interval(1, 2.5).number_type == float
        assert Interval(5).end == 5

    def test___contains__(self):
        assert Interval(1, 2) in Interval(1, 7)
        assert Interval(1, 7) not in Interval(1, 2)
        assert 1 in Interval(1, 7)
        assert 0 not in Interval(1, 7)

    def test___getitem__(self):
        temp = Interval(1, 2)
        assert temp[0] == 1
        assert temp[1] == 2
        assert temp['end'] == 2
        with pytest.raises(IndexError):
            temp[2]

    def test_overlaps(self):
        assert Interval.overlaps((1, 10), (10, 11))
        assert not Interval.overlaps((1, 4), (5, 7))

    def test_length(self):
        assert len(Interval(1, 11)) == 11
        assert Interval(0.5, 1.5).length() == 1
        assert Interval(1, 10).center == 5.5

    def test_equality(self):
        assert Interval(1, 3) == (1, 3)
        assert Interval(1, 3) != Interval(1, 4)
        assert Interval(1, 3) != 1
        assert sorted([Interval(5, 6), Interval(1, 9), Interval(1, 2)]) == [(1, 2), (1, 9), (5, 6)]

    def test_union(self):
        assert Interval.union((1, 2), (4, 9)) == Interval(1, 9)
        with pytest.raises(InvalidRegionError):
            Interval.union()

    def test_min_nonoverlapping(self):
        result = Interval.min_nonoverlapping((1, 10), (7, 8), (6, 14), (17, 20))
        assert result == [Interval(1, 14), Interval(17, 20)]
        assert Interval.min_nonoverlapping() == []


class TestIntervalMapping:
    def test_linear(self):
        mapping = IntervalMapping.linear((1000, 2000), (0, 4))
        assert mapping.convert_pos(1000) == 0
        assert mapping.convert_pos(1500) == pytest.approx(2)
        assert mapping.convert_pos(2000) == pytest.approx(4)

    def test_linear_opposing(self):
        mapping = IntervalMapping.linear((0, 100), (0, 10), opposing=True)
        assert mapping.convert_pos(0) == pytest.approx(10)
        assert mapping.convert_pos(100) == pytest.approx(0)

    def test_convert_pos(self):
        mapping = IntervalMapping(mapping={(1, 10): (101, 110), (11, 20): (555, 564)})
        assert mapping.convert_pos(5) == 105
        assert mapping.convert_pos(15) == 559
        with pytest.raises(IndexError):
            mapping.convert_pos(25)

    def test_add_overlap_error(self):
        mapping = IntervalMapping()
        mapping.add((1, 10), (1, 10))
        with pytest.raises(ValueError):
            mapping.add((5, 15), (11, 20))

    def test_opposing_unmapped_error(self):
        with pytest.raises(ValueError):
            IntervalMapping(mapping={(1, 10): (1, 10)}, opposing=[(11, 20)])


class TestSplitIntervalsIntoTracks:
    def test_packing(self):
        tracks = split_intervals_into_tracks([(1, 3), (3, 7), (2, 2), (4, 5), (3, 10)])
        assert tracks == [[(1, 3), (4, 5)], [(2, 2), (3, 7)], [(3, 10)]]

    def test_spacing(self):
        assert split_intervals_into_tracks([(1, 3), (5, 7)]) == [[(1, 3), (5, 7)]]
        assert split_intervals_into_tracks([(1, 3), (5, 7)], spacing=2) == [[(1, 3)], [(5, 7)]]

    def test_empty(self):
        assert split_intervals_into_tracks([]) == [[]]
