from __future__ import annotations
from enum import Enum
from typing import Optional, Tuple, Union

from custom_types.types import ScalarFunction
from rootfinding.bisection import bisection
from rootfinding.broyden import broyden
from rootfinding.newton import newton
from rootfinding.result import SolveResult
from rootfinding.secant import secant
from rootfinding.settings import RootSettings


class Method(Enum):
    """Solver menu; values are the codes shown to the user"""
    BISECTION = 1
    NEWTON = 2
    SECANT = 3
    BROYDEN = 4

    @property
    def title(self) -> str:
        return self.name.capitalize()

    @property
    def start_labels(self) -> Tuple[str, ...]:
        return _START_LABELS[self]

    @property
    def hint(self) -> str:
        return _HINTS[self]

    @classmethod
    def parse(cls, value: Union["Method", int, str]) -> "Method":
        """Accept a Method, a menu code (1-4) or a method name"""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Unknown method code {value}; choose 1-4") from None
        if isinstance(value, str):
            token = value.strip()
            if token.isdigit():
                return cls.parse(int(token))
            try:
                return cls[token.upper()]
            except KeyError:
                pass
        raise ValueError(
            f"Unknown method {value!r}; choose one of "
            f"{', '.join(f'{m.value}={m.name.lower()}' for m in cls)}"
        )


_START_LABELS = {
    Method.BISECTION: ("a", "b"),
    Method.NEWTON: ("x0",),
    Method.SECANT: ("x0", "x1"),
    Method.BROYDEN: ("x0", "x1"),
}

_HINTS = {
    Method.BISECTION: "Bisection method requires an interval [a, b] with f(a)*f(b) <= 0.",
    Method.NEWTON: "Newton method uses one initial guess x0.",
    Method.SECANT: "Secant method uses two initial guesses x0, x1.",
    Method.BROYDEN: "Broyden method (1D) uses two initial guesses x0, x1.",
}


class RootSolver:
    def __init__(self, s: RootSettings = RootSettings()):
        self.s = s

    def bisection(self, f: ScalarFunction, a: float, b: float) -> SolveResult:
        """Bracketed, always makes progress"""
        return bisection(f, a, b, tol=self.s.tol, maxiter=self.s.maxiter)

    def newton(self, f: ScalarFunction, x0: float,
               df: Optional[ScalarFunction] = None) -> SolveResult:
        """Newton with analytic or central-difference derivative"""
        return newton(f, x0, df=df, tol=self.s.tol, maxiter=self.s.maxiter)

    def secant(self, f: ScalarFunction, x0: float, x1: float) -> SolveResult:
        return secant(f, x0, x1, tol=self.s.tol, maxiter=self.s.maxiter)

    def broyden(self, f: ScalarFunction, x0: float, x1: float) -> SolveResult:
        return broyden(f, x0, x1, tol=self.s.tol, maxiter=self.s.maxiter)

    def solve(self, method: Union[Method, int, str], f: ScalarFunction, *start: float,
              df: Optional[ScalarFunction] = None) -> SolveResult:
        """Dispatch to one solver; start holds the method's starting values in order"""
        method = Method.parse(method)
        labels = method.start_labels
        if len(start) != len(labels):
            raise ValueError(
                f"{method.title} expects {len(labels)} starting value(s) "
                f"({', '.join(labels)}), got {len(start)}"
            )
        if df is not None and method is not Method.NEWTON:
            raise ValueError("df is only used by the Newton method")

        if method is Method.BISECTION:
            return self.bisection(f, *start)
        elif method is Method.NEWTON:
            return self.newton(f, *start, df=df)
        elif method is Method.SECANT:
            return self.secant(f, *start)
        else:
            return self.broyden(f, *start)
