"""
controlled vocabulary of the genopage package and the namespace class holding it
"""
import os

PROGNAME = 'genopage'


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class Namespace:
    """
    fixed set of named values. Calling the namespace checks that a value is one of its members, so a namespace can be
    used as the cast type of another namespace attribute

    Example:
        >>> side = Namespace(LEFT='left', RIGHT='right')
        >>> side.LEFT
        'left'
        >>> side('right')
        'right'
    """

    def __init__(self, *pos, **kwargs):
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_defns', {})
        for attr, value in [(k, k) for k in pos] + list(kwargs.items()):
            if attr in self._members:
                raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
            self.add(attr, value)

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__, ', '.join(['{}={}'.format(k, repr(v)) for k, v in self.items()])
        )

    def add(self, attr, value, defn=None, cast_type=None):
        """
        Args:
            defn (str): description of the attribute
            cast_type (callable): casts the string value of an environment override, defaults to the type of value
        """
        cast_type = cast_type or type(value)
        self._types[attr] = cast_boolean if cast_type == bool else cast_type
        if defn:
            self._defns[attr] = defn
        self[attr] = value

    def is_env_overwritable(self, attr):
        return False

    def get_env_name(self, attr):
        """
        Example:
            >>> Namespace(a=1).get_env_name('a')
            'GENOPAGE_A'
        """
        return '{}_{}'.format(PROGNAME, attr).upper()

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            members = object.__getattribute__(self, '_members')
            if attr not in members:
                raise err
            env_name = self.get_env_name(attr)
            if self.is_env_overwritable(attr) and env_name in os.environ:
                return self._types[attr](os.environ[env_name].strip())
            return members[attr]

    def __getitem__(self, key):
        return getattr(self, key)

    def __setitem__(self, key, val):
        self.__setattr__(key, val)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        self._members[attr] = val

    def __contains__(self, attr):
        return attr in self._members

    def __iter__(self):
        return iter(self.keys())

    def keys(self):
        return list(self._members)

    def values(self):
        return [self[k] for k in self._members]

    def items(self):
        return [(k, self[k]) for k in self._members]

    def define(self, attr):
        return self._defns[attr]

    def enforce(self, value):
        """
        Raises:
            KeyError: the value is not a member of the namespace
        """
        if value not in self.values():
            raise KeyError('value {} is not a valid member of '.format(repr(value)), self.values())
        return value

    def reverse(self, value):
        """
        name of the (single) attribute holding a value

        Raises:
            KeyError: no attribute or more than one attribute holds the value
        """
        result = [k for k in self._members if self[k] == value]
        if len(result) != 1:
            raise KeyError('value is not held by exactly one attribute', value, result)
        return result[0]

    def __call__(self, value):
        try:
            return self.enforce(value)
        except KeyError:
            raise TypeError('Invalid value {} for {}. Must be a valid member: {}'.format(
                repr(value), self.__class__.__name__, self.values()))


UNITS = Namespace(INCHES='inches', CM='cm', MM='mm', POINTS='points')
""":class:`Namespace`: units a page (and any placement on it) can be given in"""

UNITS_PER_INCH = {
    UNITS.INCHES: 1,
    UNITS.CM: 2.54,
    UNITS.MM: 25.4,
    UNITS.POINTS: 72.27,
}

JUST = Namespace(LEFT='left', RIGHT='right', CENTER='center', CENTRE='centre', TOP='top', BOTTOM='bottom')
""":class:`Namespace`: justification keywords for placing an object relative to its (x, y) location"""

COLOR_TRANS = Namespace(LINEAR='linear', LOG='log', LOG2='log2', LOG10='log10')
""":class:`Namespace`: transformations applied to values before they are mapped to colors"""

MATRIX_TYPE = Namespace(OBSERVED='observed', OE='oe', LOG2OE='log2oe')
""":class:`Namespace`: types of Hi-C matrices the external readers may supply"""

HIC_HALF = Namespace(BOTH='both', TOP='top', BOTTOM='bottom')
""":class:`Namespace`: which half of a square Hi-C matrix to draw"""

SCALE = Namespace(BP='bp', KB='Kb', MB='Mb')
""":class:`Namespace`: scales used for genomic coordinate labels"""

SCALE_FACTOR = {SCALE.BP: 1, SCALE.KB: 1e3, SCALE.MB: 1e6}

STRAND = Namespace(POS='+', NEG='-', NS='*')
""":class:`Namespace`: holds controlled vocabulary for allowed strand values"""

ORIENTATION = Namespace(VERTICAL='v', HORIZONTAL='h')

AXIS = Namespace(X='x', Y='y')

PIXEL_TYPE = Namespace(BOX='box', CIRCLE='circle', ARROW='arrow')

GIEMSA_STAIN = Namespace(
    GNEG='gneg',
    GPOS33='gpos33',
    GPOS50='gpos50',
    GPOS66='gpos66',
    GPOS75='gpos75',
    GPOS25='gpos25',
    GPOS100='gpos100',
    ACEN='acen',
    GVAR='gvar',
    STALK='stalk',
)
""":class:`Namespace`: holds controlled vocabulary relating to stains of chromosome bands"""
