"""
reusable bundles of arguments shared between plot and annotation functions

Values passed explicitly to a function take precedence over the values of its params argument, which in turn take
precedence over the defaults in the function signature
"""
import functools
import inspect


class Params(dict):
    """
    Example:
        >>> region = Params(chrom='chr21', chromstart=28000000, chromend=30300000)
        >>> style = Params(fontsize=8)
        >>> sorted((region + style).keys())
        ['chrom', 'chromend', 'chromstart', 'fontsize']
    """

    def __getattr__(self, attr):
        try:
            return self[attr]
        except KeyError:
            raise AttributeError(attr)

    def __add__(self, other):
        result = Params(self)
        result.update(other)
        return result

    def __repr__(self):
        return 'Params({})'.format(', '.join(['{}={}'.format(k, repr(v)) for k, v in sorted(self.items())]))


def resolve_params(params, defaults, declared):
    """
    merge function defaults, params and explicitly declared arguments

    Args:
        params (Params): bundle of argument values, keys not in defaults are ignored
        defaults (dict): the function defaults by argument name
        declared (dict): the arguments given explicitly in the call

    Returns:
        dict: argument values by name
    """
    result = dict(defaults)
    for key, value in (params or {}).items():
        if key in defaults:
            result[key] = value
    result.update(declared)
    return result


def accepts_params(func):
    """
    decorator for functions with a keyword argument named params
    """
    signature = inspect.signature(func)
    defaults = {
        name: param.default for name, param in signature.parameters.items() if name != 'params'
    }

    @functools.wraps(func)
    def wrapper(*pos, **kwargs):
        bound = signature.bind_partial(*pos, **kwargs)
        declared = dict(bound.arguments)
        params = declared.pop('params', None)
        args = resolve_params(params, defaults, declared)
        return func(**{k: v for k, v in args.items() if v is not inspect.Parameter.empty})
    return wrapper
