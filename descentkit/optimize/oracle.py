"""Gradient oracles.

The descent loop never differentiates anything itself: it asks an oracle for
``grad f(x)``. The default oracle uses PyTorch autograd, so objectives meant
for it must be written with operations that accept a float64 tensor
(indexing, arithmetic, ``@`` and ``torch`` functions all do).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
import torch

from .core import Array, Gradient, Objective, Problem
from .errors import EvaluationError
from .utils import approx_grad


class GradientOracle(ABC):
    """Computes the gradient of a scalar objective at a point."""

    #: Objective evaluations spent computing gradients.
    nfev: int = 0

    def __call__(self, f: Objective, x: Array) -> Array:
        x = np.asarray(x, dtype=float)
        try:
            grad = self._gradient(f, x)
        except EvaluationError:
            raise
        except Exception as exc:
            raise EvaluationError(f"Gradient evaluation failed at x={x}: {exc}") from exc
        grad = np.asarray(grad, dtype=float).reshape(x.shape)
        if not np.all(np.isfinite(grad)):
            raise EvaluationError(
                f"Gradient is not finite at x={x}; the objective may not be "
                "differentiable there."
            )
        return grad

    @abstractmethod
    def _gradient(self, f: Objective, x: Array) -> Array:
        """Return the raw gradient of ``f`` at ``x``."""


class AutogradOracle(GradientOracle):
    """Exact gradients through ``torch.autograd``.

    ``f`` is called on a float64 tensor and must return a scalar tensor.
    """

    def _gradient(self, f: Objective, x: Array) -> Array:
        point = torch.tensor(x, dtype=torch.float64, requires_grad=True)
        value = f(point)
        if not isinstance(value, torch.Tensor) or value.numel() != 1:
            raise EvaluationError(
                "Objective must return a scalar torch.Tensor when differentiated "
                f"with autograd, got {type(value).__name__}."
            )
        if not value.requires_grad:
            # Output does not depend on the input.
            return np.zeros_like(x)
        (grad,) = torch.autograd.grad(value.reshape(()), point, allow_unused=True)
        if grad is None:
            return np.zeros_like(x)
        return grad.detach().cpu().numpy()


class AnalyticOracle(GradientOracle):
    """Wraps a hand-written gradient callable."""

    def __init__(self, grad: Gradient) -> None:
        self.grad = grad

    def _gradient(self, f: Objective, x: Array) -> Array:
        return self.grad(x)


class FiniteDifferenceOracle(GradientOracle):
    """Central-difference gradients; approximate, for objectives autograd cannot trace."""

    def __init__(self, eps: float = 1e-6) -> None:
        if eps <= 0:
            raise ValueError("eps must be positive")
        self.eps = eps
        self.nfev = 0

    def _gradient(self, f: Objective, x: Array) -> Array:
        grad, evals = approx_grad(f, x, eps=self.eps, return_evals=True)
        self.nfev += evals
        return grad


def resolve_oracle(problem: Problem, oracle: Optional[GradientOracle] = None) -> GradientOracle:
    """Pick the oracle for ``problem``: explicit, then analytic, then autograd."""
    if oracle is not None:
        return oracle
    if problem.grad is not None:
        return AnalyticOracle(problem.grad)
    return AutogradOracle()


__all__ = [
    "AnalyticOracle",
    "AutogradOracle",
    "FiniteDifferenceOracle",
    "GradientOracle",
    "resolve_oracle",
]
