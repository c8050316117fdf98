import numpy as np
import pytest
from locopt.base import as_bounds, from_pairs, project

def test_project_clips():
    bounds = from_pairs([(-1.0, 1.0)] * 3)
    x = np.array([ -2.0, 0.5,  5.0 ])
    y = project(x, bounds)
    assert np.allclose(y, np.array([-1.0, 0.5, 1.0]))

def test_pairs_and_rows_agree():
    pairs = [(-1.0, 1.0), (0.0, 2.0), (3.0, 4.0)]
    rows = [[-1.0, 0.0, 3.0], [1.0, 2.0, 4.0]]
    assert np.allclose(from_pairs(pairs), as_bounds(rows))

def test_pair_lists_need_from_pairs():
    with pytest.raises(AssertionError):
        as_bounds([(-1.0, 1.0), (0.0, 2.0), (3.0, 4.0)])
    # two pairs read as rows give lower > upper
    with pytest.raises(AssertionError):
        project(np.array([0.0, 0.0]), [(-1.0, 1.0), (-2.0, 2.0)])
    y = project(np.array([0.0, 0.0]), from_pairs([(-1.0, 1.0), (-2.0, 2.0)]))
    assert np.allclose(y, [0.0, 0.0])

def test_inverted_bounds_rejected():
    with pytest.raises(AssertionError):
        as_bounds([[1.0, 0.0], [0.0, 1.0]])
