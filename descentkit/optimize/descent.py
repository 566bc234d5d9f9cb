"""Descent loops: fixed-step gradient descent, line-search descent and
steepest descent under a custom norm."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

import numpy as np

from ..logging import get_logger
from .core import (
    MAXITER,
    TOL,
    Array,
    Criterion,
    Objective,
    OptimizeResult,
    Problem,
    check_convergence,
)
from .directions import Direction, NegativeGradient, PreconditionedDirection
from .errors import LineSearchExhausted
from .oracle import GradientOracle, resolve_oracle
from .step import Backtracking, ExactSearch, FixedStep, StepPolicy, step_length

logger = get_logger(__name__)

Callback = Callable[[Array, float, Array], None]


@dataclass(frozen=True)
class DescentConfig:
    """
    Settings for :func:`descend`.

    ``criterion`` selects the stopping rule:

    - ``Criterion.GRADIENT_NORM``: stop before stepping once the stopping norm
      of the gradient at the current point drops below ``tol``.
    - ``Criterion.VALUE_DELTA``: stop after a step that changed the objective
      by less than ``tol``.
    """

    step: StepPolicy = field(default_factory=Backtracking)
    criterion: Criterion = Criterion.GRADIENT_NORM
    tol: float = TOL
    maxiter: int = MAXITER

    def __post_init__(self) -> None:
        if not isinstance(self.step, (FixedStep, Backtracking, ExactSearch)):
            raise TypeError(f"Unknown step policy: {self.step!r}")
        if not isinstance(self.criterion, Criterion):
            raise TypeError(f"criterion must be a Criterion, got {self.criterion!r}.")
        if self.tol <= 0:
            raise ValueError(f"tol must be positive, got {self.tol}.")
        if self.maxiter < 0:
            raise ValueError(f"maxiter must be >= 0, got {self.maxiter}.")


def _as_problem(problem: Union[Problem, Objective]) -> Problem:
    if isinstance(problem, Problem):
        return problem
    if callable(problem):
        return Problem(fun=problem)
    raise TypeError(f"Expected a Problem or a callable, got {type(problem).__name__}.")


def _initial_point(problem: Problem, x0: Array) -> Array:
    x = np.array(x0, dtype=float)
    if x.ndim != 1 or x.size == 0:
        raise ValueError(f"x0 must be a non-empty 1-D array, got shape {x.shape}.")
    if problem.dim is not None and x.size != problem.dim:
        raise ValueError(f"x0 has dimension {x.size}, problem expects {problem.dim}.")
    return x


def descend(
    problem: Union[Problem, Objective],
    x0: Array,
    config: Optional[DescentConfig] = None,
    *,
    direction: Optional[Direction] = None,
    oracle: Optional[GradientOracle] = None,
    callback: Optional[Callback] = None,
    history: bool = False,
) -> OptimizeResult:
    """Run a descent method until convergence or ``config.maxiter`` iterations.

    Parameters
    ----------
    problem:
        Problem to minimize, or a bare objective callable.
    x0:
        Starting point. Copied; never modified.
    config:
        Step policy, stopping rule, tolerance and iteration cap.
    direction:
        Descent direction and stopping norm. Defaults to the negative gradient.
    oracle:
        Gradient oracle. Defaults to the problem's analytic gradient when it
        has one, otherwise to autograd.
    callback:
        Called as ``callback(x, fx, grad)`` after every step, where ``grad``
        is the gradient the step was taken from.
    history:
        Record every iterate, starting with ``x0``.

    Returns
    -------
    OptimizeResult
        Unpacks as ``(x, fun, nit)``. Running out of iterations is not an
        error: ``success`` is False and ``nit == maxiter``.
    """
    problem = _as_problem(problem)
    config = config or DescentConfig()
    direction = direction or NegativeGradient()
    oracle = resolve_oracle(problem, oracle)
    f = problem.fun

    x = _initial_point(problem, x0)
    hist: list[Array] = []
    if history:
        hist.append(x.copy())
    fx = float(f(x))
    nfev = 1
    njev = 0
    nit = 0
    grad_norm = float("inf")
    success = False
    message = "Maximum iterations reached."

    def advance(x: Array, grad: Array) -> Array:
        nonlocal nfev, njev
        dx = direction.direction(grad, x)
        t, ls_fev, ls_jev = step_length(config.step, f, x, dx, grad, oracle)
        nfev += ls_fev
        njev += ls_jev
        return x + t * dx

    def record(x: Array, fx: float, grad: Array) -> None:
        if callback is not None:
            callback(x.copy(), fx, grad.copy())
        if history:
            hist.append(x.copy())

    oracle_fev = oracle.nfev
    stalled = "Line search could not decrease the objective."

    if config.criterion is Criterion.GRADIENT_NORM:
        while nit < config.maxiter:
            grad = oracle(f, x)
            njev += 1
            grad_norm = direction.norm(grad)
            if check_convergence(grad_norm, config.tol):
                success = True
                message = "Gradient tolerance satisfied."
                break
            try:
                x = advance(x, grad)
            except LineSearchExhausted as exc:
                nfev += exc.nfev
                message = stalled
                break
            fx = float(f(x))
            nfev += 1
            nit += 1
            logger.debug("iter %d: f=%.10g |grad|=%.3e", nit, fx, grad_norm)
            record(x, fx, grad)
        else:
            grad = oracle(f, x)
            njev += 1
            grad_norm = direction.norm(grad)
            if check_convergence(grad_norm, config.tol):
                success = True
                message = "Gradient tolerance satisfied."
    else:
        while nit < config.maxiter:
            grad = oracle(f, x)
            njev += 1
            grad_norm = direction.norm(grad)
            if not np.any(grad):
                # Stationary point: every step leaves f unchanged.
                nit += 1
                record(x, fx, grad)
                success = True
                message = "Function value change below tolerance."
                break
            try:
                x_new = advance(x, grad)
            except LineSearchExhausted as exc:
                nfev += exc.nfev
                message = stalled
                break
            nit += 1
            f_new = float(f(x_new))
            nfev += 1
            delta = abs(f_new - fx)
            x, fx = x_new, f_new
            logger.debug("iter %d: f=%.10g |df|=%.3e", nit, fx, delta)
            record(x, fx, grad)
            if delta < config.tol:
                success = True
                message = "Function value change below tolerance."
                break

    nfev += oracle.nfev - oracle_fev

    if success:
        logger.info("converged after %d iterations: f=%.10g", nit, fx)
    else:
        logger.warning(
            "stopped after %d iterations without converging (%s): f=%.10g",
            nit,
            message,
            fx,
        )

    return OptimizeResult(
        x=x,
        fun=fx,
        nit=nit,
        success=success,
        message=message,
        grad_norm=float(grad_norm),
        nfev=nfev,
        njev=njev,
        history=hist,
    )


def gradient_descent(
    problem: Union[Problem, Objective],
    x0: Array,
    lr: float = 1e-2,
    tol: float = TOL,
    maxiter: int = MAXITER,
    oracle: Optional[GradientOracle] = None,
    callback: Optional[Callback] = None,
    history: bool = False,
) -> OptimizeResult:
    """Fixed-step gradient descent, stopping on a small change in ``f``."""
    config = DescentConfig(
        step=FixedStep(lr), criterion=Criterion.VALUE_DELTA, tol=tol, maxiter=maxiter
    )
    return descend(problem, x0, config, oracle=oracle, callback=callback, history=history)


def line_search_descent(
    problem: Union[Problem, Objective],
    x0: Array,
    step: Optional[StepPolicy] = None,
    tol: float = TOL,
    maxiter: int = MAXITER,
    oracle: Optional[GradientOracle] = None,
    callback: Optional[Callback] = None,
    history: bool = False,
) -> OptimizeResult:
    """Gradient descent with a line search, stopping on a small gradient norm.

    ``step`` defaults to :class:`Backtracking`; pass :class:`ExactSearch` for
    bisection.
    """
    config = DescentConfig(
        step=step or Backtracking(),
        criterion=Criterion.GRADIENT_NORM,
        tol=tol,
        maxiter=maxiter,
    )
    return descend(problem, x0, config, oracle=oracle, callback=callback, history=history)


def steepest_descent(
    problem: Union[Problem, Objective],
    x0: Array,
    P: Array,
    step: Optional[StepPolicy] = None,
    tol: float = TOL,
    maxiter: int = MAXITER,
    oracle: Optional[GradientOracle] = None,
    callback: Optional[Callback] = None,
    history: bool = False,
) -> OptimizeResult:
    """Steepest descent for the quadratic norm induced by ``P``.

    Converges when ``sqrt(grad^T P^{-1} grad) < tol``.
    """
    config = DescentConfig(
        step=step or Backtracking(),
        criterion=Criterion.GRADIENT_NORM,
        tol=tol,
        maxiter=maxiter,
    )
    return descend(
        problem,
        x0,
        config,
        direction=PreconditionedDirection(P),
        oracle=oracle,
        callback=callback,
        history=history,
    )


__all__ = [
    "Callback",
    "DescentConfig",
    "descend",
    "gradient_descent",
    "line_search_descent",
    "steepest_descent",
]
