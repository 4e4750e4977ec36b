"""Exception classes for the root finding solvers."""


class RootFindingError(Exception):
    """Base exception for root finding errors."""


class InvalidBracketError(RootFindingError, ValueError):
    """Raised when a bisection bracket has no sign change."""

    def __init__(self, a: float, b: float, fa: float, fb: float):
        self.a = a
        self.b = b
        self.fa = fa
        self.fb = fb
        super().__init__(
            f"Bisection method requires f(a) * f(b) <= 0. "
            f"Current: f({a}) = {fa}, f({b}) = {fb}"
        )
