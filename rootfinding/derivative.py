from custom_types.types import ScalarFunction

REL_STEP = 1e-6


def central_step(x: float, rel_step: float = REL_STEP) -> float:
    """Step size scaled with |x|, never below rel_step itself."""
    return rel_step * max(1.0, abs(x))


def central_difference(f: ScalarFunction, x: float, rel_step: float = REL_STEP) -> float:
    """
    Estimate f'(x) with a central finite difference.

    f'(x) ≈ (f(x + h) - f(x - h)) / (2h), h = rel_step * max(1, |x|)
    """
    h = central_step(x, rel_step)
    return (f(x + h) - f(x - h)) / (2 * h)
