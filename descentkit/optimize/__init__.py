"""Gradient and steepest descent with fixed, backtracking and exact steps.

Example
-------
>>> import numpy as np
>>> from descentkit.optimize import Backtracking, line_search_descent
>>> def bowl(x):
...     return x[0] ** 2 + x[1] ** 2 - 1
>>> res = line_search_descent(bowl, np.array([1.0, 1.0]), step=Backtracking())
>>> x, fx, nit = res
>>> round(fx, 6)
-1.0
"""

from .core import (
    MAXITER,
    TOL,
    Criterion,
    OptimizeResult,
    Problem,
    QuadraticObjective,
    check_convergence,
)
from .descent import (
    DescentConfig,
    descend,
    gradient_descent,
    line_search_descent,
    steepest_descent,
)
from .directions import (
    CoordinateDirection,
    Direction,
    NegativeGradient,
    PreconditionedDirection,
)
from .errors import (
    DescentError,
    EvaluationError,
    InvalidDirection,
    LineSearchError,
    LineSearchExhausted,
)
from .line_search import backtracking, exact_line_search
from .oracle import (
    AnalyticOracle,
    AutogradOracle,
    FiniteDifferenceOracle,
    GradientOracle,
    resolve_oracle,
)
from .step import Backtracking, ExactSearch, FixedStep, StepPolicy, step_length
from .utils import approx_grad, is_pos_def, safe_solve

__all__ = [
    "AnalyticOracle",
    "AutogradOracle",
    "Backtracking",
    "CoordinateDirection",
    "Criterion",
    "DescentConfig",
    "DescentError",
    "Direction",
    "EvaluationError",
    "ExactSearch",
    "FiniteDifferenceOracle",
    "FixedStep",
    "GradientOracle",
    "InvalidDirection",
    "LineSearchError",
    "LineSearchExhausted",
    "MAXITER",
    "NegativeGradient",
    "OptimizeResult",
    "PreconditionedDirection",
    "Problem",
    "QuadraticObjective",
    "StepPolicy",
    "TOL",
    "approx_grad",
    "backtracking",
    "check_convergence",
    "descend",
    "exact_line_search",
    "gradient_descent",
    "is_pos_def",
    "line_search_descent",
    "resolve_oracle",
    "safe_solve",
    "steepest_descent",
    "step_length",
]
