from __future__ import annotations

from custom_types.types import ScalarFunction
from rootfinding.result import CountingFunction, IterationLog, SolveResult, StopReason
from rootfinding.settings import DEFAULT_MAXITER, DEFAULT_TOL, check_tolerances


def secant(
    f: ScalarFunction,
    x0: float,
    x1: float,
    tol: float = DEFAULT_TOL,
    maxiter: int = DEFAULT_MAXITER,
) -> SolveResult:
    """Secant method from two starting points; no derivative needed."""
    check_tolerances(tol, maxiter)
    f = CountingFunction(f)
    log = IterationLog(f)
    x0, x1 = float(x0), float(x1)
    f0, f1 = f(x0), f(x1)
    log.append(x0)
    log.append(x1)

    for k in range(1, maxiter + 1):
        # horizontal chord
        if f1 == f0:
            return log.finish(x1, k, StopReason.STALLED)

        if x1 != x0:
            log.slope = (f1 - f0) / (x1 - x0)
        x2 = x1 - f1 * (x1 - x0) / (f1 - f0)
        f2 = f(x2)
        log.append(x2)

        if abs(x2 - x1) < tol or abs(f2) < tol:
            return log.finish(x2, k, StopReason.CONVERGED)

        x0, f0 = x1, f1
        x1, f1 = x2, f2

    return log.finish(x1, maxiter, StopReason.MAX_ITER)
