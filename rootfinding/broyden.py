from __future__ import annotations

from custom_types.types import ScalarFunction
from rootfinding.result import CountingFunction, IterationLog, SolveResult, StopReason
from rootfinding.settings import DEFAULT_MAXITER, DEFAULT_TOL, check_tolerances


def broyden(
    f: ScalarFunction,
    x0: float,
    x1: float,
    tol: float = DEFAULT_TOL,
    maxiter: int = DEFAULT_MAXITER,
) -> SolveResult:
    """
    One-dimensional Broyden (quasi-Newton) iteration.

    Keeps a scalar derivative approximation B, seeded with the chord slope
    through (x0, x1) and refreshed after every step with the rank-1 update

        B_{k+1} = B_k + (y - B_k s) / s,  s = x_{k+1} - x_k,  y = f(x_{k+1}) - f(x_k)

    The final B is reported as SolveInfo.slope.
    """
    check_tolerances(tol, maxiter)
    f = CountingFunction(f)
    log = IterationLog(f)
    x0, x1 = float(x0), float(x1)
    f0, f1 = f(x0), f(x1)
    log.append(x0)
    log.append(x1)

    # Coincident seeds: fall back to the identity approximation
    B = 1.0 if x1 == x0 else (f1 - f0) / (x1 - x0)
    log.slope = B

    x, fx = x1, f1

    for k in range(1, maxiter + 1):
        if B == 0:
            return log.finish(x, k, StopReason.STALLED)

        s = -fx / B
        x_new = x + s
        fx_new = f(x_new)
        log.append(x_new)

        if abs(fx_new) < tol or abs(x_new - x) < tol:
            return log.finish(x_new, k, StopReason.CONVERGED)

        y = fx_new - fx
        if s != 0:
            B = B + (y - B * s) / s
            log.slope = B

        x, fx = x_new, fx_new

    return log.finish(x, maxiter, StopReason.MAX_ITER)
