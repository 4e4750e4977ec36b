import math
import warnings
import pytest
from rootfinding.bisection import bisection
from rootfinding.broyden import broyden
from rootfinding.methods import Method, RootSolver
from rootfinding.newton import newton
from rootfinding.secant import secant
from rootfinding.settings import RootSettings


def cubic(x):
    return x ** 3 - x - 2.0


class TestRootSettings:
    """Validation of the per-call configuration"""

    def test_defaults(self):
        s = RootSettings()
        assert s.tol == 1e-8
        assert s.maxiter == 100

    @pytest.mark.parametrize("tol, maxiter", [
        (0.0, 100),
        (-1e-6, 100),
        (float("nan"), 100),
        (float("inf"), 100),
        (1e-8, 0),
        (1e-8, 2.5),
        (1e-8, True),
    ])
    def test_invalid_settings(self, tol, maxiter):
        with pytest.raises(ValueError):
            RootSettings(tol=tol, maxiter=maxiter)

    def test_solver_keywords_validated(self):
        with pytest.raises(ValueError):
            bisection(cubic, 1.0, 2.0, tol=-1.0)
        with pytest.raises(ValueError):
            secant(cubic, 1.0, 2.0, maxiter=0)

    def test_tiny_tolerance_warns(self):
        with pytest.warns(UserWarning, match="below double precision"):
            RootSettings(tol=1e-20)

    def test_regular_tolerance_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            RootSettings(tol=1e-12)


class TestMethod:

    @pytest.mark.parametrize("value, expected", [
        (1, Method.BISECTION),
        ("2", Method.NEWTON),
        (" secant ", Method.SECANT),
        ("Broyden", Method.BROYDEN),
        (Method.NEWTON, Method.NEWTON),
    ])
    def test_parse(self, value, expected):
        assert Method.parse(value) is expected

    @pytest.mark.parametrize("value", [0, 5, "7", "brent", "", True, 2.0])
    def test_parse_rejects(self, value):
        with pytest.raises(ValueError):
            Method.parse(value)

    def test_start_labels(self):
        assert Method.BISECTION.start_labels == ("a", "b")
        assert Method.NEWTON.start_labels == ("x0",)
        assert Method.SECANT.start_labels == ("x0", "x1")
        assert Method.BROYDEN.start_labels == ("x0", "x1")
        assert Method.BROYDEN.title == "Broyden"


class TestRootSolver:
    """Dispatch through the settings-holding facade"""

    def test_dispatch_matches_free_functions(self):
        solver = RootSolver(RootSettings(tol=1e-10, maxiter=50))

        assert solver.solve(1, cubic, 1.0, 2.0) == bisection(cubic, 1.0, 2.0, tol=1e-10, maxiter=50)
        assert solver.solve("newton", cubic, 1.5) == newton(cubic, 1.5, tol=1e-10, maxiter=50)
        assert solver.solve(Method.SECANT, cubic, 1.0, 2.0) == secant(cubic, 1.0, 2.0, tol=1e-10, maxiter=50)
        assert solver.solve("4", cubic, 1.0, 2.0) == broyden(cubic, 1.0, 2.0, tol=1e-10, maxiter=50)

    def test_newton_with_derivative(self):
        root, info = RootSolver().solve("newton", cubic, 1.5, df=lambda x: 3 * x * x - 1)
        assert info.converged
        assert abs(root - 1.5213797068045676) < 1e-8

    def test_wrong_number_of_start_values(self):
        with pytest.raises(ValueError, match="expects 2"):
            RootSolver().solve("secant", cubic, 1.0)
        with pytest.raises(ValueError, match="expects 1"):
            RootSolver().solve("newton", cubic, 1.0, 2.0)

    def test_derivative_only_for_newton(self):
        with pytest.raises(ValueError):
            RootSolver().solve("broyden", cubic, 1.0, 2.0, df=lambda x: 1.0)

    @pytest.mark.parametrize("method, start", [
        (Method.BISECTION, (1.0, 2.0)),
        (Method.NEWTON, (1.0,)),
        (Method.SECANT, (1.0, 2.0)),
        (Method.BROYDEN, (1.0, 2.0)),
    ])
    def test_repeated_calls_identical(self, method, start):
        """No state leaks between calls"""
        solver = RootSolver()
        first = solver.solve(method, cubic, *start)
        second = solver.solve(method, cubic, *start)
        assert first == second

    @pytest.mark.parametrize("method, start", [
        (Method.BISECTION, (-3.0, 3.0)),
        (Method.NEWTON, (2.0,)),
        (Method.SECANT, (2.0, 3.0)),
        (Method.BROYDEN, (2.0, 3.0)),
    ])
    def test_all_methods_agree(self, method, start):
        f = lambda x: math.exp(x) - 5.0
        root, info = RootSolver().solve(method, f, *start)
        print(f"{method.title}: root = {root:.10f} in {info.iterations} iterations")
        assert info.converged
        assert abs(root - math.log(5.0)) < 1e-7


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
