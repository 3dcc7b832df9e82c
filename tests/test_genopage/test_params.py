import pytest

from genopage.params import Params, accepts_params, resolve_params


@accepts_params
def styled(page, fontsize=8, fontcolor='black', label=None, params=None):
    return page, fontsize, fontcolor, label


class TestParams:
    def test_attribute_access(self):
        params = Params(chrom='chr21', chromstart=28000000)
        assert params.chrom == 'chr21'
        assert params['chromstart'] == 28000000
        with pytest.raises(AttributeError):
            params.chromend

    def test_add(self):
        region = Params(chrom='chr21', chromstart=1, chromend=10)
        style = Params(fontsize=8, chrom='chr22')
        merged = region + style
        assert merged == {'chrom': 'chr22', 'chromstart': 1, 'chromend': 10, 'fontsize': 8}
        assert isinstance(merged, Params)
        assert region.chrom == 'chr21'


class TestResolveParams:
    def test_precedence(self):
        result = resolve_params(Params(a=2, b=2, z=2), {'a': 1, 'b': 1, 'c': 1}, {'a': 3})
        assert result == {'a': 3, 'b': 2, 'c': 1}

    def test_no_params(self):
        assert resolve_params(None, {'a': 1}, {}) == {'a': 1}


class TestAcceptsParams:
    def test_defaults(self):
        assert styled('page') == ('page', 8, 'black', None)

    def test_params_override_defaults(self):
        assert styled('page', params=Params(fontsize=10, unused=1)) == ('page', 10, 'black', None)

    def test_declared_override_params(self):
        result = styled('page', fontsize=12, params=Params(fontsize=10, fontcolor='red'))
        assert result == ('page', 12, 'red', None)

    def test_positional(self):
        assert styled('page', 6) == ('page', 6, 'black', None)

    def test_declared_none_overrides_params(self):
        assert styled('page', label=None, params=Params(label='x')) == ('page', 8, 'black', None)

    def test_missing_required(self):
        with pytest.raises(TypeError):
            styled(params=Params(fontsize=10))

    def test_unknown_argument(self):
        with pytest.raises(TypeError):
            styled('page', size=10)

    def test_wraps(self):
        assert styled.__name__ == 'styled'
