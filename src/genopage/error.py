class GenoPageError(Exception):
    """
    base class for all errors raised while building a page
    """
    pass


class PageError(GenoPageError):
    """
    raised when a plot or annotation requires a page and none has been given
    """
    pass


class PlacementError(GenoPageError):
    """
    raised when only some of the placement arguments (x, y, width, height) are given
    """
    pass


class InvalidRegionError(GenoPageError):
    pass


class InvalidInputError(GenoPageError):
    pass


class AnnotationError(GenoPageError):
    """
    raised when a plot cannot be annotated in the way requested (ex. a heatmap legend for a plot without a palette)
    """
    pass


def missing_argument(name):
    return InvalidInputError('argument "{}" is missing, with no default.'.format(name))
