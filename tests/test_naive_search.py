'''Sanity checks for the naive reference search used as the test oracle.'''
import os
import sys

import numpy as np
import pytest

_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from online_stree.python_backend.naive_search import (
    generate_random_string, generate_random_string_ensemble,
    naive_contains, naive_find_all, naive_match_length,
)


def test_naive_find_all_overlapping():
    assert naive_find_all("aaaa", "aa") == [0, 1, 2]
    assert naive_find_all("banana", "ana") == [1, 3]
    assert naive_find_all("banana", "xyz") == []
    assert naive_find_all("abc", "") == [0, 1, 2, 3]
    assert naive_find_all("", "a") == []


def test_naive_contains_and_match_length():
    assert naive_contains("banana", "nan")
    assert not naive_contains("banana", "nab")
    assert naive_match_length("banana", "nab") == 2
    assert naive_match_length("banana", "") == 0


def test_generate_random_string():
    np.random.seed(0)
    s = generate_random_string(50, ['x', 'y'])
    assert len(s) == 50
    assert set(s) <= {'x', 'y'}
    assert generate_random_string(0) == ""
    with pytest.raises(ValueError):
        generate_random_string(5, [])


def test_generate_random_string_ensemble():
    ensemble = generate_random_string_ensemble(4, 10)
    assert len(ensemble) == 4
    assert all(len(s) == 10 and set(s) <= {'0', '1'} for s in ensemble)
