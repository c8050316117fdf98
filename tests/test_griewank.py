import numpy as np
from benchmarks.griewank import GriewankObjective, griewank, griewank_gradient

def test_griewank_zero():
    assert griewank(np.zeros(5)) == 0.0

def test_griewank_gradient_matches_finite_differences():
    x = np.array([1.3, -2.1, 40.0])
    h = 1e-6
    num = np.array([(griewank(x + h * e) - griewank(x - h * e)) / (2 * h) for e in np.eye(3)])
    assert np.allclose(griewank_gradient(x), num, atol=1e-7)

def test_griewank_objective_fills_gradient():
    obj = GriewankObjective(dim=2)
    g = np.zeros(2)
    e = obj.gradient(np.array([0.5, 0.5]), g, 0)
    assert np.isclose(e, griewank(np.array([0.5, 0.5])))
    assert np.allclose(g, griewank_gradient(np.array([0.5, 0.5])))
    assert obj.bounds(np.zeros(2)).shape == (2, 2)
