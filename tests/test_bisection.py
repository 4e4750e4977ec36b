import math
import pytest
from scipy import optimize
from rootfinding.bisection import bisection
from rootfinding.errors import InvalidBracketError, RootFindingError
from rootfinding.result import StopReason


def sqrt2(x):
    return x * x - 2.0


class TestBisection:
    """Test suite for the bracketed bisection solver"""

    def test_sqrt2_converges(self):
        """x^2 - 2 on [0, 2] converges to sqrt(2), one history entry per iteration"""
        root, info = bisection(sqrt2, 0.0, 2.0, tol=1e-6)
        print(f"root = {root}, iterations = {info.iterations}")

        assert info.converged
        assert info.reason is StopReason.CONVERGED
        assert abs(root - math.sqrt(2.0)) < 1e-5
        assert len(info.history) == info.iterations
        assert info.history[-1] == root
        assert info.slope is None

    def test_no_sign_change_raises_before_iterating(self):
        """f(a)*f(b) > 0 is an input error; only the endpoints are evaluated"""
        calls = []

        def f(x):
            calls.append(x)
            return x * x + 1.0

        with pytest.raises(InvalidBracketError) as exc_info:
            bisection(f, -1.0, 1.0)

        assert calls == [-1.0, 1.0]
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value, RootFindingError)
        assert exc_info.value.fa == 2.0 and exc_info.value.fb == 2.0

    def test_exact_zero_at_first_midpoint(self):
        root, info = bisection(lambda x: x, -1.0, 1.0)

        assert root == 0.0
        assert info.converged
        assert info.iterations == 1
        assert info.history == (0.0,)

    def test_zero_at_left_endpoint(self):
        """f(a) = 0 is a valid bracket; the iterates close in on a"""
        root, info = bisection(lambda x: x - 1.0, 1.0, 3.0)

        assert info.converged
        assert abs(root - 1.0) < 1e-7

    def test_reversed_bracket_matches_ordered(self):
        r1, i1 = bisection(sqrt2, 0.0, 2.0)
        r2, i2 = bisection(sqrt2, 2.0, 0.0)

        assert r1 == r2
        assert i1.iterations == i2.iterations
        assert i2.iterations > 1

    def test_maxiter_exhausted(self):
        """Running out of iterations is reported, not raised"""
        root, info = bisection(sqrt2, 0.0, 2.0, tol=1e-12, maxiter=5)

        assert not info.converged
        assert info.reason is StopReason.MAX_ITER
        assert info.iterations == 5
        assert len(info.history) == 5
        assert root == info.history[-1]

    @pytest.mark.parametrize("f, a, b", [
        (sqrt2, 0.0, 2.0),
        (math.cos, 0.0, 3.0),
        (lambda x: x ** 3 - x - 2.0, 1.0, 2.0),
        (lambda x: math.exp(x) - 5.0, -3.0, 4.0),
        (lambda x: math.atan(x - 0.3), -10.0, 10.0),
    ])
    def test_stop_condition_holds(self, f, a, b):
        """|f(r)| < tol or the final half-width < tol, within maxiter"""
        tol = 1e-8
        root, info = bisection(f, a, b, tol=tol)

        if info.iterations > 1:
            half_width = abs(info.history[-1] - info.history[-2])
        else:
            half_width = abs(b - a) / 2
        # measured from the iterates, so allow for rounding in the midpoint
        assert abs(f(root)) < tol or half_width < 2 * tol
        assert info.iterations <= 100
        assert info.converged

        # independent reference
        ref = optimize.brentq(f, a, b, xtol=1e-14)
        print(f"bisection = {root:.12f}, brentq = {ref:.12f}")
        assert abs(root - ref) < 1e-6

    def test_evaluation_count(self):
        """Two endpoint evaluations plus one per iteration"""
        _, info = bisection(sqrt2, 0.0, 2.0, tol=1e-6)
        assert info.evaluations == info.iterations + 2

    def test_numpy_scalar_function(self):
        """Results are plain floats even when f returns numpy scalars"""
        import numpy as np

        root, info = bisection(lambda x: np.float64(x) - 0.25, 0.0, 1.0)
        assert type(root) is float
        assert all(type(x) is float for x in info.history)
        assert info.history_array.dtype == np.float64


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
