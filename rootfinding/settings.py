from __future__ import annotations
import math
import warnings
from dataclasses import dataclass

DEFAULT_TOL = 1e-8
DEFAULT_MAXITER = 100


def check_tolerances(tol: float, maxiter: int) -> None:
    """Reject tolerances no solver loop can work with."""
    if isinstance(tol, bool) or not isinstance(tol, (int, float)):
        raise ValueError(f"tol must be a real number, got {tol!r}")
    if not math.isfinite(tol) or tol <= 0.0:
        raise ValueError(f"tol must be finite and positive, got {tol}")
    if isinstance(maxiter, bool) or not isinstance(maxiter, int):
        raise ValueError(f"maxiter must be an integer, got {maxiter!r}")
    if maxiter < 1:
        raise ValueError(f"maxiter must be at least 1, got {maxiter}")


@dataclass(frozen=True)
class RootSettings:
    tol: float = DEFAULT_TOL
    maxiter: int = DEFAULT_MAXITER

    def __post_init__(self):
        """Validate tolerance and iteration cap"""
        check_tolerances(self.tol, self.maxiter)

        if self.tol < 1e-15:
            warnings.warn(
                f"Tolerance {self.tol:.1e} is below double precision resolution. "
                f"Solvers will likely stop on the step-size test or run to maxiter.",
                UserWarning,
                stacklevel=3
            )
