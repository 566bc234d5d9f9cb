"""Core interfaces shared across the descent routines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Union

import numpy as np
import torch

from .utils import is_pos_def

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]

TOL = 1e-8
MAXITER = 1000


class Criterion(Enum):
    """Stopping rule applied by the descent loop."""

    VALUE_DELTA = "value_delta"
    GRADIENT_NORM = "gradient_norm"


@dataclass(frozen=True)
class Problem:
    """Container describing an unconstrained minimization problem."""

    fun: Objective
    grad: Optional[Gradient] = None
    dim: Optional[int] = None


@dataclass
class OptimizeResult:
    """Result returned by every descent routine.

    Unpacks as ``(x, fun, nit)``.
    """

    x: Array
    fun: float
    nit: int
    success: bool
    message: str
    grad_norm: float
    nfev: int
    njev: int
    history: List[Array] = field(default_factory=list)

    def __iter__(self) -> Iterator:
        return iter((self.x, self.fun, self.nit))


class QuadraticObjective:
    """
    Quadratic objective ``f(x) = x^T Q x + b^T x + c``.

    Accepts numpy arrays and torch tensors, so it can be differentiated by
    :class:`~descentkit.optimize.oracle.AutogradOracle` as well as evaluated
    by the loop.

    Parameters
    ----------
    Q:
        Square matrix. Only its symmetric part affects the value.
    b:
        Linear term. Defaults to zeros.
    c:
        Constant offset.
    """

    def __init__(self, Q: Array, b: Optional[Array] = None, c: float = 0.0) -> None:
        Q = np.asarray(Q, dtype=float)
        if Q.ndim != 2 or Q.shape[0] != Q.shape[1]:
            raise ValueError(f"Q must be a square matrix, got shape {Q.shape}.")
        n = Q.shape[0]
        b = np.zeros(n) if b is None else np.asarray(b, dtype=float)
        if b.shape != (n,):
            raise ValueError(f"b must have shape ({n},), got {b.shape}.")
        self.Q = Q
        self.b = b
        self.c = float(c)

    @property
    def dim(self) -> int:
        return self.Q.shape[0]

    def __call__(self, x: Union[Array, torch.Tensor]) -> Union[float, torch.Tensor]:
        if isinstance(x, torch.Tensor):
            Q = torch.as_tensor(self.Q, dtype=x.dtype, device=x.device)
            b = torch.as_tensor(self.b, dtype=x.dtype, device=x.device)
            return x @ (Q @ x) + b @ x + self.c
        x = np.asarray(x, dtype=float)
        return float(x @ (self.Q @ x) + self.b @ x + self.c)

    def gradient(self, x: Array) -> Array:
        x = np.asarray(x, dtype=float)
        return (self.Q + self.Q.T) @ x + self.b

    def minimizer(self) -> Array:
        """Return the unique minimizer; requires positive-definite ``Q``."""
        hess = self.Q + self.Q.T
        if not is_pos_def(hess):
            raise ValueError("Q must be positive definite to have a unique minimizer.")
        return np.linalg.solve(hess, -self.b)

    def minimum(self) -> float:
        return self(self.minimizer())

    def as_problem(self) -> Problem:
        return Problem(fun=self, grad=self.gradient, dim=self.dim)


def check_convergence(grad_norm: float, tol: float) -> bool:
    """Return True if the gradient norm lies strictly below ``tol``."""
    return grad_norm < tol


__all__ = [
    "Array",
    "Criterion",
    "Gradient",
    "MAXITER",
    "Objective",
    "OptimizeResult",
    "Problem",
    "QuadraticObjective",
    "TOL",
    "check_convergence",
]
