from __future__ import annotations
import warnings
from typing import List, Optional
import numpy as np

from . import lottery as _lottery
from .lottery import Lottery

TRIES_TO_EMERGENCY = 10000


def _lot(lot: Optional[Lottery]) -> Lottery:
    return lot if lot is not None else _lottery.get_instance()


def gauss_double(low: float, high: float, std_dev: float = 1.0, lot: Optional[Lottery] = None) -> float:
    """
    Gaussian distributed number in [low, high], centered in the middle of the
    interval. std_dev is relative to the half width of the interval.
    """
    assert high > low
    assert std_dev > 0.0
    lot = _lot(lot)

    mid = (high - low) / 2 + low
    std = abs(std_dev * (high - low) / 2)
    for _ in range(TRIES_TO_EMERGENCY):
        d = lot.next_gaussian() * std + mid
        if low <= d <= high:
            return d

    warnings.warn(f"Emergency occured in gauss_double(). Returning {mid}.")
    return mid


def halfgauss_double(low: float, high: float, std_dev: float = 1.0, lot: Optional[Lottery] = None) -> float:
    """Half-Gaussian distributed number in [low, high), peaked at low."""
    assert high > low
    assert std_dev > 0.0
    lot = _lot(lot)

    std = abs(std_dev * (high - low))
    for _ in range(TRIES_TO_EMERGENCY):
        d = low + abs(lot.next_gaussian()) * std
        if d < high:
            return d

    warnings.warn(f"Emergency occured in halfgauss_double(). Returning {low}.")
    return low


def list_of_points(n_points: int, low: int, high: int, lot: Optional[Lottery] = None) -> List[int]:
    """n_points distinct random integers from [low, high), in ascending order."""
    assert n_points > 0
    assert high - low >= n_points
    lot = _lot(lot)

    points = list(range(low, high))
    while len(points) > n_points:
        points.pop(lot.next_int(len(points)))
    return points


def rnd_list_of_points(n_points: int, low: int, high: int, lot: Optional[Lottery] = None) -> List[int]:
    """Like list_of_points() but shuffled."""
    lot = _lot(lot)
    points = list_of_points(n_points, low, high, lot)
    for i in range(n_points):
        mv = lot.next_int(n_points)
        points.insert(mv, points.pop(i))
    return points


def random_vector(dim: int, norm: float = 1.0, lot: Optional[Lottery] = None) -> np.ndarray:
    """Random direction of length norm."""
    assert dim > 0
    lot = _lot(lot)
    x = np.array([lot.next_gaussian() for _ in range(dim)])
    length = np.linalg.norm(x)
    if length == 0.0:
        x[0] = 1.0
        length = 1.0
    return x * (norm / length)


def random_point_in_bounds(bounds, lot: Optional[Lottery] = None) -> np.ndarray:
    """Uniform random point inside [2][dim] bounds."""
    b = np.asarray(bounds, dtype=float)
    assert b.ndim == 2 and b.shape[0] == 2
    lot = _lot(lot)
    u = np.array([lot.next_double() for _ in range(b.shape[1])])
    return b[0] + u * (b[1] - b[0])
