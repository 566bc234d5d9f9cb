"""One-dimensional line searches along a fixed direction."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..logging import get_logger
from .core import Array, Objective
from .errors import InvalidDirection, LineSearchExhausted
from .oracle import AutogradOracle, GradientOracle

logger = get_logger(__name__)


def backtracking(
    f: Objective,
    x: Array,
    direction: Array,
    grad_fx: Optional[Array] = None,
    *,
    t0: float = 1.0,
    beta: float = 0.5,
    alpha: float = 0.25,
    max_iter: int = 50,
    oracle: Optional[GradientOracle] = None,
    check_direction: bool = True,
) -> tuple[float, int]:
    """Armijo backtracking line search.

    Shrinks ``t`` by ``beta`` starting from ``t0`` until

        f(x + t * direction) <= f(x) + alpha * t * <grad f(x), direction>

    Parameters
    ----------
    f:
        Objective function.
    x:
        Current point.
    direction:
        Search direction; must be a descent direction.
    grad_fx:
        Gradient at ``x`` if already known. Computed with ``oracle`` otherwise.
    t0:
        Initial trial step.
    beta:
        Shrink factor in (0, 1).
    alpha:
        Sufficient-decrease parameter in (0, 0.5).
    max_iter:
        Maximum number of trial steps.
    oracle:
        Gradient oracle used when ``grad_fx`` is not given.
    check_direction:
        Reject non-descent directions up front. When disabled, such a
        direction exhausts ``max_iter`` instead.

    Returns
    -------
    tuple[float, int]
        Accepted step and the number of objective evaluations.

    Raises
    ------
    InvalidDirection
        ``check_direction`` is set and ``<grad f(x), direction> >= 0``.
    LineSearchExhausted
        No trial step satisfied the Armijo condition.
    """
    if not (0 < beta < 1):
        raise ValueError("beta must lie in (0, 1)")
    if not (0 < alpha < 0.5):
        raise ValueError("alpha must lie in (0, 0.5)")
    if t0 <= 0:
        raise ValueError("t0 must be positive")
    if max_iter < 1:
        raise ValueError("max_iter must be at least 1")
    x = np.asarray(x, dtype=float)
    direction = np.asarray(direction, dtype=float)
    if grad_fx is None:
        grad_fx = (oracle or AutogradOracle())(f, x)
    slope = float(np.dot(grad_fx, direction))
    if check_direction and slope >= 0:
        logger.debug("rejecting direction with slope %.6g", slope)
        raise InvalidDirection(slope)

    t = float(t0)
    fx = float(f(x))
    nfev = 1
    for _ in range(max_iter):
        f_new = float(f(x + t * direction))
        nfev += 1
        if f_new <= fx + alpha * t * slope:
            return t, nfev
        t *= beta
    logger.debug("backtracking exhausted after %d trial steps", max_iter)
    raise LineSearchExhausted(t / beta, nfev)


def exact_line_search(
    f: Objective,
    x: Array,
    direction: Array,
    *,
    tol: float = 1e-3,
    max_iter: int = 100,
    lower: float = -1e12,
    upper: float = 1e12,
    oracle: Optional[GradientOracle] = None,
) -> tuple[float, int]:
    """Minimize ``h(s) = f(x + s * direction)`` by bisection on ``h'(s)``.

    The sign of the directional derivative at the midpoint decides which half
    of ``[lower, upper]`` is kept: positive keeps the left half, anything else
    the right half. The search stops once the bracket is narrower than ``tol``
    (absolute) or after ``max_iter`` halvings, and returns the midpoint.

    ``h`` is assumed unimodal on the bracket, which holds for convex ``f``.
    Nothing restricts the result to ``s >= 0``: along an ascent direction of a
    convex objective the returned step is negative.

    Returns
    -------
    tuple[float, int]
        Step length and the number of gradient evaluations.
    """
    if tol <= 0:
        raise ValueError("tol must be positive")
    if max_iter < 0:
        raise ValueError("max_iter must be non-negative")
    if not lower < upper:
        raise ValueError(f"lower must be below upper, got [{lower}, {upper}]")
    oracle = oracle or AutogradOracle()
    x = np.asarray(x, dtype=float)
    direction = np.asarray(direction, dtype=float)

    a, b = float(lower), float(upper)
    njev = 0
    for _ in range(max_iter):
        if b - a < tol:
            break
        mid = 0.5 * (a + b)
        slope = float(np.dot(oracle(f, x + mid * direction), direction))
        njev += 1
        if slope > 0:
            b = mid
        else:
            a = mid
    return 0.5 * (a + b), njev


__all__ = ["backtracking", "exact_line_search"]
