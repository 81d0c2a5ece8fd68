import numpy as np

from strassen_lib.errors import ArithmeticOverflow


def int_bits(dtype) -> int:
    dt = np.dtype(dtype)
    if not np.issubdtype(dt, np.signedinteger):
        raise TypeError(f"expected a signed integer dtype, got {dt}")
    return dt.itemsize * 8


def int_bounds(bits: int):
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def wrap(v: int, bits: int) -> int:
    """Value the fixed-width register would hold after computing ``v``."""
    v &= (1 << bits) - 1
    return v - (1 << bits) if v >> (bits - 1) else v


def _cdiv(x: int, y: int) -> int:
    # truncating division, as the hardware does it
    q = abs(x) // abs(y)
    return -q if (x < 0) != (y < 0) else q


def check_overflow(a: int, b: int, add: bool = False, mult: bool = False,
                   bits: int = 32, sub: bool = False):
    """
    Raise ArithmeticOverflow if the requested operation on (a, b) does not fit
    in a ``bits``-wide signed integer. Results are computed wrapped, then
    inspected for the two's-complement overflow signature.
    """
    a, b = int(a), int(b)
    if add:
        s = wrap(a + b, bits)
        if (a > 0 and b > 0 and s < 0) or (a < 0 and b < 0 and s >= 0):
            raise ArithmeticOverflow(a, b, "add")
    if sub:
        # a + (-b): operands of opposite sign, result flips to the sign of b
        s = wrap(a - b, bits)
        if (a >= 0 and b < 0 and s < 0) or (a < 0 and b > 0 and s >= 0):
            raise ArithmeticOverflow(a, b, "sub")
    if mult:
        s = wrap(a * b, bits)
        if a != 0 and _cdiv(s, a) != b:
            raise ArithmeticOverflow(a, b, "mul")
        if b != 0 and _cdiv(s, b) != a:
            raise ArithmeticOverflow(a, b, "mul")


def checked_add(a: int, b: int, bits: int = 32) -> int:
    check_overflow(a, b, add=True, bits=bits)
    return int(a) + int(b)


def checked_sub(a: int, b: int, bits: int = 32) -> int:
    check_overflow(a, b, sub=True, bits=bits)
    return int(a) - int(b)


def checked_mul(a: int, b: int, bits: int = 32) -> int:
    check_overflow(a, b, mult=True, bits=bits)
    return int(a) * int(b)


# ---------- element-wise (quadrant) variants ----------
def _first_offender(X: np.ndarray, Y: np.ndarray, mask: np.ndarray, op: str):
    i, j = np.argwhere(mask)[0]
    raise ArithmeticOverflow(X[i, j], Y[i, j], op)


def checked_add_arrays(X: np.ndarray, Y: np.ndarray) -> np.ndarray:
    """Element-wise X + Y in the arrays' dtype; every pair goes through the add check."""
    int_bits(X.dtype)
    S = np.add(X, Y, dtype=X.dtype)   # integer arrays wrap silently
    mask = ((X > 0) & (Y > 0) & (S < 0)) | ((X < 0) & (Y < 0) & (S >= 0))
    if mask.any():
        _first_offender(X, Y, mask, "add")
    return S


def checked_sub_arrays(X: np.ndarray, Y: np.ndarray) -> np.ndarray:
    """Element-wise X - Y in the arrays' dtype; every pair goes through the sub check."""
    int_bits(X.dtype)
    S = np.subtract(X, Y, dtype=X.dtype)
    mask = ((X >= 0) & (Y < 0) & (S < 0)) | ((X < 0) & (Y > 0) & (S >= 0))
    if mask.any():
        _first_offender(X, Y, mask, "sub")
    return S
