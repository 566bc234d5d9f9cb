"""Step-length policies for the descent loop.

A policy is one of three frozen dataclasses; :func:`step_length` is the only
place that branches on which one it got.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .core import Array, Objective
from .line_search import backtracking, exact_line_search
from .oracle import GradientOracle


@dataclass(frozen=True)
class FixedStep:
    """Constant step ``x_new = x + lr * direction``."""

    lr: float = 1e-2

    def __post_init__(self) -> None:
        if self.lr <= 0:
            raise ValueError(f"lr must be positive, got {self.lr}.")


@dataclass(frozen=True)
class Backtracking:
    """Armijo backtracking; see :func:`~descentkit.optimize.line_search.backtracking`."""

    t0: float = 1.0
    beta: float = 0.5
    alpha: float = 0.25
    max_iter: int = 50

    def __post_init__(self) -> None:
        if self.t0 <= 0:
            raise ValueError(f"t0 must be positive, got {self.t0}.")
        if not (0 < self.beta < 1):
            raise ValueError(f"beta must lie in (0, 1), got {self.beta}.")
        if not (0 < self.alpha < 0.5):
            raise ValueError(f"alpha must lie in (0, 0.5), got {self.alpha}.")
        if self.max_iter < 1:
            raise ValueError(f"max_iter must be >= 1, got {self.max_iter}.")


@dataclass(frozen=True)
class ExactSearch:
    """Bisection line search; see :func:`~descentkit.optimize.line_search.exact_line_search`."""

    tol: float = 1e-3
    max_iter: int = 100
    lower: float = -1e12
    upper: float = 1e12

    def __post_init__(self) -> None:
        if self.tol <= 0:
            raise ValueError(f"tol must be positive, got {self.tol}.")
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be >= 0, got {self.max_iter}.")
        if not self.lower < self.upper:
            raise ValueError(
                f"lower must be below upper, got [{self.lower}, {self.upper}]."
            )


StepPolicy = Union[FixedStep, Backtracking, ExactSearch]


def step_length(
    policy: StepPolicy,
    f: Objective,
    x: Array,
    direction: Array,
    grad: Array,
    oracle: GradientOracle,
) -> tuple[float, int, int]:
    """Return ``(t, nfev, njev)`` for one step of the loop."""
    if isinstance(policy, FixedStep):
        return policy.lr, 0, 0
    if isinstance(policy, Backtracking):
        t, nfev = backtracking(
            f,
            x,
            direction,
            grad,
            t0=policy.t0,
            beta=policy.beta,
            alpha=policy.alpha,
            max_iter=policy.max_iter,
            oracle=oracle,
        )
        return t, nfev, 0
    if isinstance(policy, ExactSearch):
        t, njev = exact_line_search(
            f,
            x,
            direction,
            tol=policy.tol,
            max_iter=policy.max_iter,
            lower=policy.lower,
            upper=policy.upper,
            oracle=oracle,
        )
        return t, 0, njev
    raise TypeError(f"Unknown step policy: {policy!r}")


__all__ = ["Backtracking", "ExactSearch", "FixedStep", "StepPolicy", "step_length"]
