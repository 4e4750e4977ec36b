from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from custom_types.types import FloatArray, ScalarFunction, as_array


class StopReason(str, Enum):
    """Why a solver loop ended"""
    CONVERGED = "converged"
    STALLED = "stalled"      # zero derivative / divisor, no step possible
    MAX_ITER = "max_iter"


@dataclass(frozen=True)
class SolveInfo:
    """
    Diagnostics of a single solver call.

    history holds one entry per iterate in the order the solver produced it,
    including the two seed points for secant and Broyden.
    """
    converged: bool
    iterations: int
    history: Tuple[float, ...] = ()
    reason: StopReason = StopReason.MAX_ITER
    evaluations: int = 0
    slope: Optional[float] = None

    @property
    def history_array(self) -> FloatArray:
        return as_array(self.history)


SolveResult = Tuple[float, SolveInfo]


class CountingFunction:
    """Wraps f, coercing results to float and counting calls"""

    def __init__(self, f: ScalarFunction):
        self.f = f
        self.calls = 0

    def __call__(self, x: float) -> float:
        self.calls += 1
        return float(self.f(x))


@dataclass
class IterationLog:
    """Append-only iterate record owned by one solver call."""
    f: CountingFunction
    history: List[float] = field(default_factory=list)
    slope: Optional[float] = None

    def append(self, x: float) -> None:
        self.history.append(float(x))

    def finish(self, root: float, iterations: int, reason: StopReason) -> SolveResult:
        info = SolveInfo(
            converged=reason is StopReason.CONVERGED,
            iterations=iterations,
            history=tuple(self.history),
            reason=reason,
            evaluations=self.f.calls,
            slope=self.slope,
        )
        return float(root), info
