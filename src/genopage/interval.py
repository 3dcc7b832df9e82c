"""
closed intervals on a genomic or page axis, and piecewise-linear mappings between axes
"""
from .error import InvalidRegionError


class Interval:
    """
    closed interval [start, end]. Integer intervals are genomic (1-based inclusive) and have length end - start + 1,
    float intervals are page coordinates and have length end - start

    Example:
        >>> Interval(1, 10).center
        5.5
        >>> Interval(0.5, 2).length()
        1.5
    """

    def __init__(self, start, end=None):
        end = start if end is None else end
        self.number_type = float if isinstance(start, float) or isinstance(end, float) else int
        self.start = self.number_type(start)
        self.end = self.number_type(end)
        if self.start > self.end:
            raise InvalidRegionError('interval start is after its end', self.start, self.end)

    def __getitem__(self, index):
        if index in (0, 'start'):
            return self.start
        if index in (1, 'end'):
            return self.end
        raise IndexError('intervals have two positions: 0 (start) and 1 (end)', index)

    def __len__(self):
        return int(self.length())

    def length(self):
        if self.number_type == float:
            return self.end - self.start
        return self.end - self.start + 1

    @property
    def center(self):
        return (self.start + self.end) / 2

    def __lt__(self, other):
        return (self[0], self[1]) < (other[0], other[1])

    def __eq__(self, other):
        try:
            return self[0] == other[0] and self[1] == other[1]
        except (TypeError, IndexError):
            return False

    def __hash__(self):
        return hash((self.start, self.end))

    def __contains__(self, other):
        if isinstance(other, (Interval, tuple, list)):
            return self.start <= other[0] and other[1] <= self.end
        return self.start <= other <= self.end

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    @classmethod
    def overlaps(cls, first, other):
        """
        True when the two intervals (or start/end pairs) share at least one position, touching ends overlap

        Example:
            >>> Interval.overlaps((1, 10), (10, 11))
            True
        """
        return first[0] <= other[1] and other[0] <= first[1]

    @classmethod
    def union(cls, *intervals):
        """
        smallest interval covering all of the input intervals
        """
        if not intervals:
            raise InvalidRegionError('cannot compute the union of no intervals')
        return Interval(min([i[0] for i in intervals]), max([i[1] for i in intervals]))

    @classmethod
    def min_nonoverlapping(cls, *intervals):
        """
        sorted list of the merged intervals covering the same positions as the input

        Example:
            >>> Interval.min_nonoverlapping((1, 10), (7, 8), (6, 14), (17, 20))
            [Interval(1, 14), Interval(17, 20)]
        """
        merged = []
        for itvl in sorted(intervals, key=lambda i: (i[0], i[1])):
            if merged and Interval.overlaps(merged[-1], itvl):
                merged[-1] = Interval.union(merged[-1], itvl)
            else:
                merged.append(Interval(itvl[0], itvl[1]))
        return merged


class IntervalMapping:
    """
    piecewise-linear map from non-overlapping source intervals onto target intervals. A target may run in the
    opposing direction (ex. genomic positions onto a y axis that grows downwards)
    """

    def __init__(self, mapping=None, opposing=None):
        self.mapping = {}
        self.opposing_directions = {}
        for src, tgt in (mapping or {}).items():
            self.add(src, tgt, opposing_directions=False)
        for src in opposing or []:
            src = Interval(src[0], src[1])
            if src not in self.opposing_directions:
                raise ValueError('opposing direction given for an interval that is not mapped', src)
            self.opposing_directions[src] = True

    @classmethod
    def linear(cls, source, target, opposing=False):
        """
        single-segment mapping, ex. a genomic window onto the width of a viewport

        Example:
            >>> IntervalMapping.linear((1000, 2000), (0, 4)).convert_pos(1500)
            2.0
        """
        source = (float(source[0]), float(source[1]))
        return cls({source: (float(target[0]), float(target[1]))}, opposing=[source] if opposing else None)

    def keys(self):
        return self.mapping.keys()

    def __len__(self):
        return len(self.mapping)

    def add(self, src_interval, tgt_interval, opposing_directions=True):
        src_interval = Interval(src_interval[0], src_interval[1])
        if any([Interval.overlaps(src_interval, curr) for curr in self.mapping]):
            raise ValueError('source intervals of a mapping must not overlap', src_interval)
        self.mapping[src_interval] = Interval(tgt_interval[0], tgt_interval[1])
        self.opposing_directions[src_interval] = opposing_directions

    def convert_pos(self, pos):
        """
        position in the target coordinates of a position in the source coordinates

        Raises:
            IndexError: the position is not within any of the source intervals

        Example:
            >>> IntervalMapping(mapping={(1, 10): (101, 110), (11, 20): (555, 564)}).convert_pos(5)
            105.0
        """
        for src, tgt in self.mapping.items():
            if pos not in src:
                continue
            if not src.length():
                return float(tgt.start)
            shift = (pos - src.start) * tgt.length() / src.length()
            if self.opposing_directions[src]:
                return float(tgt.end - shift)
            return float(tgt.start + shift)
        raise IndexError('position is not in any mapped interval', pos)


def split_intervals_into_tracks(intervals, spacing=0):
    """
    pack intervals into the fewest tracks (rows) so that intervals sharing a track are at least spacing apart. Each
    interval goes onto the first track it fits, in order of start position

    Example:
        >>> split_intervals_into_tracks([(1, 3), (3, 7), (2, 2), (4, 5), (3, 10)])
        [[(1, 3), (4, 5)], [(2, 2), (3, 7)], [(3, 10)]]
    """
    tracks = [[]]
    for itvl in sorted(intervals, key=lambda i: i[0]):
        padded = (itvl[0] - spacing, itvl[1] + spacing)
        for track in tracks:
            if not any([Interval.overlaps(padded, other) for other in track]):
                track.append(itvl)
                break
        else:
            tracks.append([itvl])
    return tracks
