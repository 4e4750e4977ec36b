from __future__ import annotations

from custom_types.types import ScalarFunction
from rootfinding.errors import InvalidBracketError
from rootfinding.result import CountingFunction, IterationLog, SolveResult, StopReason
from rootfinding.settings import DEFAULT_MAXITER, DEFAULT_TOL, check_tolerances


def bisection(
    f: ScalarFunction,
    a: float,
    b: float,
    tol: float = DEFAULT_TOL,
    maxiter: int = DEFAULT_MAXITER,
) -> SolveResult:
    """
    Bisection on the bracket [a, b].

    Stops once |f(mid)| < tol or the half-width of the current bracket drops
    below tol. Raises InvalidBracketError when f(a) and f(b) share a sign.
    """
    check_tolerances(tol, maxiter)
    f = CountingFunction(f)
    a, b = float(a), float(b)
    fa, fb = f(a), f(b)
    if fa * fb > 0:
        raise InvalidBracketError(a, b, fa, fb)
    if a > b:
        a, b, fa, fb = b, a, fb, fa

    log = IterationLog(f)
    left, right = a, b
    mid = 0.5 * (left + right)

    for k in range(1, maxiter + 1):
        mid = 0.5 * (left + right)
        fmid = f(mid)
        log.append(mid)

        if abs(fmid) < tol or (right - left) / 2 < tol:
            return log.finish(mid, k, StopReason.CONVERGED)

        # <= keeps an exact zero at the left endpoint inside [left, mid]
        if fa * fmid <= 0:
            right, fb = mid, fmid
        else:
            left, fa = mid, fmid

    return log.finish(mid, maxiter, StopReason.MAX_ITER)
