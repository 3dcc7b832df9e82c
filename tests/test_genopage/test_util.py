import os

import pytest

from genopage.util import format_number, mkdirp, natural_sort_key, read_tabbed_file

from ..util import get_data


class TestFormatNumber:
    def test_default(self):
        assert format_number(12.6) == '13'
        assert format_number(12.345, digits=2) == '12.35'

    def test_commas(self):
        assert format_number(28000000, commas=True) == '28,000,000'

    def test_scientific(self):
        assert format_number(50000, digits=1, scientific=True) == '5.0e+04'


class TestNaturalSortKey:
    def test_chromosomes(self):
        names = ['chr10', 'chrX', 'chr2', 'chr1']
        assert sorted(names, key=natural_sort_key) == ['chr1', 'chr2', 'chr10', 'chrX']


class TestMkdirp:
    def test_nested(self, tmp_path):
        dirname = os.path.join(str(tmp_path), 'a', 'b')
        assert mkdirp(dirname) == dirname
        assert os.path.isdir(dirname)

    def test_existing(self, tmp_path):
        assert mkdirp(str(tmp_path)) == str(tmp_path)

    def test_file_in_the_way(self, tmp_path):
        filename = os.path.join(str(tmp_path), 'file')
        with open(filename, 'w') as fh:
            fh.write('')
        with pytest.raises(OSError):
            mkdirp(filename)


class TestReadTabbedFile:
    def test_header(self):
        df = read_tabbed_file(get_data('gwas.tsv'))
        assert list(df.columns) == ['chrom', 'pos', 'p', 'snp']
        assert df.shape[0] >= 4
