# core/eq.py
from numba import njit

# Absolute tolerance used by equal(). Fixed at import; numba freezes it into
# the compiled code.
EPSILON = 1e-6


@njit
def almost_equal(a, b, abs_tol):
    """
    Tells if a and b differ by no more than abs_tol.

    Equal values (including equal infinities) always compare equal. NaN is
    never equal to anything, itself included.
    """
    if a == b:
        return True
    return abs(a - b) <= abs_tol


@njit
def equal(a, b):
    """
    Near-equality of two floating-point values using the EPSILON tolerance.
    """
    return almost_equal(a, b, EPSILON)
