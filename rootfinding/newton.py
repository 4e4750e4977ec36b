from __future__ import annotations
from typing import Optional

from custom_types.types import ScalarFunction
from rootfinding.derivative import central_difference
from rootfinding.result import CountingFunction, IterationLog, SolveResult, StopReason
from rootfinding.settings import DEFAULT_MAXITER, DEFAULT_TOL, check_tolerances


def newton(
    f: ScalarFunction,
    x0: float,
    df: Optional[ScalarFunction] = None,
    tol: float = DEFAULT_TOL,
    maxiter: int = DEFAULT_MAXITER,
) -> SolveResult:
    """
    Newton iteration from a single starting point.

    Without an analytic df the derivative is a central difference with a step
    scaled to |x|. A derivative of exactly zero ends the run unconverged.
    Convergence is either |f(x)| < tol or a Newton step shorter than tol.
    """
    check_tolerances(tol, maxiter)
    f = CountingFunction(f)
    log = IterationLog(f)
    x = float(x0)

    for k in range(1, maxiter + 1):
        fx = f(x)
        log.append(x)

        if abs(fx) < tol:
            return log.finish(x, k, StopReason.CONVERGED)

        dfx = central_difference(f, x) if df is None else float(df(x))
        if dfx == 0:
            return log.finish(x, k, StopReason.STALLED)
        log.slope = dfx

        x_new = x - fx / dfx

        # Small step on a flat f counts as converged even if |f| >= tol
        if abs(x_new - x) < tol:
            log.append(x_new)
            return log.finish(x_new, k, StopReason.CONVERGED)

        x = x_new

    return log.finish(x, maxiter, StopReason.MAX_ITER)
