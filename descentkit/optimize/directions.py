"""Descent directions for steepest descent under different norms.

Each direction pairs the step direction with the norm used in the stopping
test (the dual of the norm the direction is steepest for). Both receive the
gradient the loop already computed for the iteration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .core import Array
from .utils import is_pos_def, safe_solve


class Direction(ABC):
    """Descent direction and matching stopping norm."""

    @abstractmethod
    def direction(self, grad: Array, x: Array) -> Array:
        """Return the search direction at ``x`` given ``grad f(x)``."""

    @abstractmethod
    def norm(self, grad: Array) -> float:
        """Return the norm of ``grad`` used in the stopping test."""


class NegativeGradient(Direction):
    """Plain gradient descent: Euclidean steepest descent."""

    def direction(self, grad: Array, x: Array) -> Array:
        return -grad

    def norm(self, grad: Array) -> float:
        return float(np.linalg.norm(grad))


class PreconditionedDirection(Direction):
    """
    Steepest descent for the quadratic norm ``||v||_P = sqrt(v^T P v)``.

    The direction is ``-P^{-1} grad`` and the stopping norm is the dual norm
    ``sqrt(grad^T P^{-1} grad)``.

    Parameters
    ----------
    P:
        Symmetric positive-definite preconditioner.
    """

    def __init__(self, P: Array) -> None:
        P = np.asarray(P, dtype=float)
        if P.ndim != 2 or P.shape[0] != P.shape[1]:
            raise ValueError(f"P must be a square matrix, got shape {P.shape}.")
        if not np.allclose(P, P.T):
            raise ValueError("P must be symmetric.")
        if not is_pos_def(P):
            raise ValueError("P must be positive definite.")
        self.P = P

    def direction(self, grad: Array, x: Array) -> Array:
        return -safe_solve(self.P, grad)

    def norm(self, grad: Array) -> float:
        return float(np.sqrt(grad @ safe_solve(self.P, grad)))


class CoordinateDirection(Direction):
    """Steepest descent for the l1 norm: move along the largest partial derivative."""

    def direction(self, grad: Array, x: Array) -> Array:
        i = int(np.argmax(np.abs(grad)))
        step = np.zeros_like(grad)
        step[i] = -grad[i]
        return step

    def norm(self, grad: Array) -> float:
        return float(np.max(np.abs(grad)))


__all__ = [
    "CoordinateDirection",
    "Direction",
    "NegativeGradient",
    "PreconditionedDirection",
]
