import os
import re

import pytest

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


long_running_test = pytest.mark.skipif(
    os.environ.get('RUN_FULL') != '1',
    reason='Only running FAST tests subset',
)


def get_data(*paths):
    return os.path.join(DATA_DIR, *paths)


def svg_elements(group, class_name=None, tag=None):
    """
    all elements below an svg group, optionally only those of a given class or tag name
    """
    result = []
    for element in getattr(group, 'elements', []):
        if (class_name is None or element.attribs.get('class') == class_name) and (
            tag is None or element.elementname == tag
        ):
            result.append(element)
        result.extend(svg_elements(element, class_name, tag))
    return result


def path_data(path):
    """
    the d attribute of a path as written to the svg file
    """
    match = re.search(r'\sd="([^"]*)"', path.tostring())
    return match.group(1).strip() if match else ''
