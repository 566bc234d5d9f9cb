"""Exceptions raised by the descent routines."""

from __future__ import annotations


class DescentError(Exception):
    """Base class for every error raised by :mod:`descentkit.optimize`."""


class LineSearchError(DescentError):
    """A line search could not produce a step length."""


class InvalidDirection(LineSearchError, ValueError):
    """The search direction is not a descent direction at the current point."""

    def __init__(self, slope: float) -> None:
        super().__init__(
            f"Search direction must be a descent direction, got slope {slope:.6g}."
        )
        self.slope = slope


class LineSearchExhausted(LineSearchError, RuntimeError):
    """Backtracking ran out of trial steps before satisfying Armijo."""

    def __init__(self, step: float, nfev: int) -> None:
        super().__init__(
            f"Armijo condition not satisfied after {nfev} trial steps "
            f"(last step {step:.6g})."
        )
        self.step = step
        self.nfev = nfev


class EvaluationError(DescentError, ArithmeticError):
    """The objective or its gradient could not be evaluated at a point."""


__all__ = [
    "DescentError",
    "EvaluationError",
    "InvalidDirection",
    "LineSearchError",
    "LineSearchExhausted",
]
