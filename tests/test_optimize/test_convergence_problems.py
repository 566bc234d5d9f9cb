import numpy as np
import pytest

from descentkit.optimize import (
    Backtracking,
    Criterion,
    DescentConfig,
    ExactSearch,
    FixedStep,
    Problem,
    QuadraticObjective,
    descend,
    gradient_descent,
    line_search_descent,
)


def rosenbrock(x):
    return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2


def himmelblau(x):
    return (x[0] ** 2 + x[1] - 11) ** 2 + (x[0] + x[1] ** 2 - 7) ** 2


@pytest.fixture
def random_quadratic(rng) -> QuadraticObjective:
    A = rng.standard_normal((4, 4))
    return QuadraticObjective(A @ A.T + np.eye(4), rng.standard_normal(4), 1.0)


def _policies(quad: QuadraticObjective):
    lam_max = np.linalg.eigvalsh(quad.Q + quad.Q.T).max()
    return [FixedStep(1.0 / lam_max), Backtracking(), ExactSearch()]


def test_every_policy_reaches_quadratic_minimum(random_quadratic, rng):
    tol = 1e-8
    x0 = rng.standard_normal(4)
    for step in _policies(random_quadratic):
        config = DescentConfig(step=step, tol=tol, maxiter=20_000)
        res = descend(random_quadratic.as_problem(), x0, config)
        assert res.success, step
        assert abs(res.fun - random_quadratic.minimum()) < tol, step


def test_every_policy_with_autograd(random_quadratic, rng):
    x0 = rng.standard_normal(4)
    for step in _policies(random_quadratic):
        config = DescentConfig(step=step, tol=1e-6, maxiter=20_000)
        res = descend(Problem(fun=random_quadratic), x0, config)
        assert res.success, step
        assert np.allclose(res.x, random_quadratic.minimizer(), atol=1e-4), step


def test_iteration_count_never_exceeds_cap(random_quadratic, rng):
    x0 = rng.standard_normal(4)
    for maxiter in (0, 1, 2, 7):
        for criterion in Criterion:
            config = DescentConfig(
                step=FixedStep(1e-4), criterion=criterion, tol=1e-12, maxiter=maxiter
            )
            res = descend(random_quadratic, x0, config)
            assert 0 <= res.nit <= maxiter
            assert res.nit == maxiter


def test_backtracking_reduces_rosenbrock():
    x0 = np.array([-1.2, 1.0])
    res = line_search_descent(rosenbrock, x0, step=Backtracking(), maxiter=20_000)
    assert res.fun < rosenbrock(x0)
    assert res.fun < 1e-2


def test_backtracking_finds_himmelblau_minimum():
    res = line_search_descent(himmelblau, np.array([3.0, 1.5]), maxiter=5000)
    assert res.success
    assert np.allclose(res.x, np.array([3.0, 2.0]), atol=1e-6)


def test_fixed_step_bowl_converges_to_origin():
    def bowl(x):
        return x[0] ** 2 + x[1] ** 2 - 1

    res = gradient_descent(bowl, np.array([1.0, 1.0]), lr=0.1, maxiter=1000)
    assert res.success
    assert np.allclose(res.x, np.zeros(2), atol=1e-3)
    assert res.fun == pytest.approx(-1.0, abs=1e-6)
