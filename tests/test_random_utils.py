import numpy as np

from helpers import lottery
from helpers.generators import StandardRNG
from helpers.lottery import Lottery
from helpers.random_utils import (gauss_double, halfgauss_double, list_of_points, random_point_in_bounds,
                                  random_vector, rnd_list_of_points)


def test_gauss_double_in_interval():
    lot = Lottery(StandardRNG(1))
    vals = [gauss_double(-1.0, 3.0, lot=lot) for _ in range(500)]
    assert all(-1.0 <= v <= 3.0 for v in vals)
    assert abs(np.mean(vals) - 1.0) < 0.2


def test_halfgauss_double_peaks_at_low():
    lot = Lottery(StandardRNG(2))
    vals = [halfgauss_double(2.0, 4.0, 0.3, lot=lot) for _ in range(500)]
    assert all(2.0 <= v < 4.0 for v in vals)
    assert np.median(vals) < 3.0


def test_list_of_points_sorted_and_distinct():
    lot = Lottery(StandardRNG(3))
    pts = list_of_points(4, 10, 20, lot=lot)
    assert len(pts) == 4
    assert pts == sorted(set(pts))
    assert all(10 <= p < 20 for p in pts)


def test_rnd_list_of_points_is_a_permutation_of_a_subset():
    lot = Lottery(StandardRNG(4))
    pts = rnd_list_of_points(6, 0, 6, lot=lot)
    assert sorted(pts) == list(range(6))


def test_random_vector_has_norm():
    lot = Lottery(StandardRNG(5))
    v = random_vector(7, 2.5, lot=lot)
    assert v.shape == (7,)
    assert np.isclose(np.linalg.norm(v), 2.5)


def test_random_point_in_bounds():
    lot = Lottery(StandardRNG(6))
    b = np.array([[0.0, -5.0], [1.0, 5.0]])
    for _ in range(100):
        x = random_point_in_bounds(b, lot=lot)
        assert np.all((x >= b[0]) & (x <= b[1]))


def test_uses_process_wide_lottery_by_default():
    lottery.set_generator(StandardRNG(77))
    a = [gauss_double(0.0, 1.0) for _ in range(5)]
    lottery.set_generator(StandardRNG(77))
    b = [gauss_double(0.0, 1.0) for _ in range(5)]
    assert a == b
