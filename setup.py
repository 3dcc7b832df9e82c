import re

from setuptools import find_packages, setup

VERSION = '0.3.0'

def parse_md_readme():
    """
    pypi won't render markdown. After conversion to rst it will still not render unless raw directives are removed
    """
    try:
        from m2r import parse_from_file

        rst_lines = parse_from_file('README.md').split('\n')
        long_description = []
        i = 0
        while i < len(rst_lines):
            if re.match(r'^..\s+raw::.*', rst_lines[i]):
                i += 1
                while re.match(r'^(\s\s+|\t|$).*', rst_lines[i]):
                    i += 1
            else:
                long_description.append(re.sub('>`_ ', '>`__ ', rst_lines[i]))  # anonymous links
                i += 1
        long_description = '\n'.join(long_description)
    except (ImportError, OSError):
        long_description = ''
    return long_description

TEST_REQS = [
    'coverage>=4.2',
    'pytest',
    'pytest-cov',
]

INSTALL_REQS = [
    'Shapely>=1.6.4.post1',
    'colour',
    'numpy>=1.13.1',
    'pandas>=1.1',
    'svgwrite',
]

DEPLOY_REQS = ['twine', 'm2r', 'wheel']

setup(
    name='genopage',
    version='{}'.format(VERSION),
    package_dir={'': 'src'},
    packages=find_packages(where='src', exclude=['tests']),
    description='Coordinate-based multi-panel genomic data figures',
    long_description=parse_md_readme(),
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS + DEPLOY_REQS,
        'deploy': DEPLOY_REQS,
    },
    tests_require=TEST_REQS,
    python_requires='>=3.6',
    test_suite='tests',
)
