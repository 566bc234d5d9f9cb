"""
Example: gradient descent, line searches and steepest descent in descentkit.

Runs the fixed-step, backtracking, exact and preconditioned variants on small
hand-written objectives and prints the minimizer, the minimum, the iteration
count and the wall-clock time of each run.
"""

import time

import numpy as np

from descentkit import (
    Backtracking,
    ExactSearch,
    QuadraticObjective,
    backtracking,
    gradient_descent,
    line_search_descent,
    steepest_descent,
)


def report(label, run):
    start = time.perf_counter()
    x_min, f_min, iterations = run()
    elapsed = time.perf_counter() - start
    print(
        f"{label}: x* = {x_min}, f(x*) = {f_min:.10g} "
        f"({iterations} iterations, {elapsed:.4f}s)"
    )


def example_fixed_step():
    print("=" * 60)
    print("Example 1: Fixed-step gradient descent")
    print("=" * 60)

    def f(x):
        return x[0] ** 2 - x[0]

    def g(x):
        return x[0] ** 2 + x[1] ** 2 - 1

    report("1-D", lambda: gradient_descent(f, np.array([1000.0]), lr=0.1))
    report("2-D", lambda: gradient_descent(g, np.array([1.0, 1.0]), lr=0.1))


def example_line_search():
    print("=" * 60)
    print("Example 2: Backtracking and exact line search")
    print("=" * 60)

    def f(x):
        return x[0] ** 2 + x[1] ** 2 - 1

    x = np.array([2.5, 2.5])
    grad = 2 * x
    t, _ = backtracking(f, x, -grad, grad, beta=0.1, alpha=0.1)
    print(f"Step length is {t}")

    quad = QuadraticObjective(np.diag([10.0, 1.0]), np.array([1.0, -1.0]))
    x0 = np.array([1.0, 1.0])
    report("backtracking", lambda: line_search_descent(quad, x0, Backtracking()))
    report("exact", lambda: line_search_descent(quad, x0, ExactSearch()))


def example_steepest_descent():
    print("=" * 60)
    print("Example 3: Steepest descent under a quadratic norm")
    print("=" * 60)

    quad = QuadraticObjective(np.diag([10.0, 1.0]), np.array([1.0, -1.0]))
    P = np.diag([8.0, 1.0])
    report("P-norm", lambda: steepest_descent(quad, np.array([1.0, 1.0]), P))


if __name__ == "__main__":
    example_fixed_step()
    example_line_search()
    example_steepest_descent()
