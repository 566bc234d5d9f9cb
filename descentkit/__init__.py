"""descentkit - gradient descent, line searches and steepest descent on NumPy and PyTorch autograd."""

__version__ = "0.1.0"

from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    AutogradOracle,
    Backtracking,
    Criterion,
    DescentConfig,
    EvaluationError,
    ExactSearch,
    FixedStep,
    InvalidDirection,
    LineSearchExhausted,
    OptimizeResult,
    Problem,
    QuadraticObjective,
    backtracking,
    descend,
    exact_line_search,
    gradient_descent,
    line_search_descent,
    steepest_descent,
)

__all__ = [
    "AutogradOracle",
    "Backtracking",
    "Criterion",
    "DescentConfig",
    "EvaluationError",
    "ExactSearch",
    "FixedStep",
    "InvalidDirection",
    "LineSearchExhausted",
    "OptimizeResult",
    "Problem",
    "QuadraticObjective",
    "__version__",
    "backtracking",
    "configure_logging",
    "descend",
    "exact_line_search",
    "get_logger",
    "gradient_descent",
    "line_search_descent",
    "set_log_level",
    "steepest_descent",
]
