import numpy as np
import pytest
import torch

from descentkit.optimize import (
    OptimizeResult,
    Problem,
    QuadraticObjective,
    check_convergence,
)


def test_quadratic_objective_value_and_gradient():
    quad = QuadraticObjective(
        np.array([[1.0, 2.0], [0.0, 3.0]]), np.array([1.0, -1.0]), 2.0
    )
    x = np.array([1.0, 2.0])
    assert quad(x) == pytest.approx(1.0 + 4.0 + 12.0 - 1.0 + 2.0)
    # Gradient of x^T Q x uses the symmetric part of Q.
    assert np.allclose(quad.gradient(x), np.array([7.0, 13.0]))


def test_quadratic_objective_accepts_tensors():
    quad = QuadraticObjective(np.diag([1.0, 2.0]), np.array([0.5, 0.0]))
    x = torch.tensor([1.0, -1.0], dtype=torch.float64, requires_grad=True)
    value = quad(x)
    value.backward()
    assert value.item() == pytest.approx(3.5)
    assert np.allclose(x.grad.numpy(), quad.gradient(np.array([1.0, -1.0])))


def test_quadratic_objective_minimizer():
    quad = QuadraticObjective(
        np.array([[2.0, 0.5], [0.5, 1.0]]), np.array([-1.0, 1.0]), 3.0
    )
    x_star = quad.minimizer()
    assert np.allclose(quad.gradient(x_star), 0.0, atol=1e-12)
    assert quad.minimum() == pytest.approx(quad(x_star))
    assert quad.minimum() < quad(x_star + 1e-3)


def test_quadratic_objective_validation():
    with pytest.raises(ValueError):
        QuadraticObjective(np.ones((2, 3)))
    with pytest.raises(ValueError):
        QuadraticObjective(np.eye(2), np.ones(3))
    with pytest.raises(ValueError):
        QuadraticObjective(np.diag([1.0, -1.0])).minimizer()


def test_quadratic_objective_as_problem():
    quad = QuadraticObjective(np.eye(3))
    problem = quad.as_problem()
    assert isinstance(problem, Problem)
    assert problem.fun is quad
    assert problem.dim == 3


def test_optimize_result_unpacks():
    res = OptimizeResult(
        x=np.zeros(2),
        fun=1.5,
        nit=4,
        success=True,
        message="ok",
        grad_norm=0.0,
        nfev=5,
        njev=5,
    )
    x, fx, nit = res
    assert x is res.x
    assert (fx, nit) == (1.5, 4)
    assert res.history == []


def test_check_convergence_is_strict():
    assert check_convergence(0.5e-8, 1e-8)
    assert not check_convergence(1e-8, 1e-8)
