from functools import partial

import numpy as np

from strassen_lib.config import dtype_of
from strassen_lib.errors import DimensionError
from strassen_lib.matrix_io import check_range
from strassen_lib.overflow_guard import (
    checked_add, checked_sub, checked_mul,
    checked_add_arrays as add, checked_sub_arrays as subtract,
    int_bits,
)
from strassen_lib.runlog import get_logger


def is_power_of_two(n) -> bool:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        return False
    return n > 0 and (n & (n - 1)) == 0


def _as_matrix(M, dtype=None) -> np.ndarray:
    if isinstance(M, np.ndarray):
        return M
    check_range(M, dtype)
    return np.array(M, dtype=dtype_of(dtype))


def _check_operands(A: np.ndarray, B: np.ndarray, n, pow2: bool = True) -> int:
    if A.ndim != 2 or B.ndim != 2:
        raise DimensionError(f"expected 2-D matrices, got A{A.shape} B{B.shape}")
    if A.dtype != B.dtype:
        raise TypeError(f"dtype mismatch: A {A.dtype}, B {B.dtype}")
    int_bits(A.dtype)

    if n is None:
        n = A.shape[0]
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise DimensionError(f"dimension must be an integer, got {n!r}")
    n = int(n)
    if pow2 and (n < 2 or not is_power_of_two(n)):
        raise DimensionError(f"dimension must be a power of two >= 2, got {n}")
    if n < 1:
        raise DimensionError(f"dimension must be positive, got {n}")
    for name, M in (("A", A), ("B", B)):
        if M.shape[0] < n or M.shape[1] < n:
            raise DimensionError(f"{name}{M.shape} cannot hold a {n}x{n} matrix")
    return n


def split(matrix: np.ndarray):
    """Top-left, top-right, bottom-left, bottom-right views (no copy)."""
    mid = matrix.shape[0] // 2
    return matrix[:mid, :mid], matrix[:mid, mid:], matrix[mid:, :mid], matrix[mid:, mid:]


def combine_quadrants(C11, C12, C21, C22):
    n2 = C11.shape[0]
    C = np.empty((n2*2, n2*2), dtype=C11.dtype)
    C[:n2, :n2] = C11;  C[:n2, n2:] = C12
    C[n2:, :n2] = C21;  C[n2:, n2:] = C22
    return C


def _strassen_2x2(A: np.ndarray, B: np.ndarray, bits: int) -> np.ndarray:
    a00, a01, a10, a11 = (int(v) for v in A.ravel())
    b00, b01, b10, b11 = (int(v) for v in B.ravel())
    sadd = partial(checked_add, bits=bits)
    ssub = partial(checked_sub, bits=bits)
    smul = partial(checked_mul, bits=bits)

    # every sum feeding a product is checked, then the product itself
    m1 = smul(sadd(a00, a11), sadd(b00, b11))
    m2 = smul(sadd(a10, a11), b00)
    m3 = smul(a00, ssub(b01, b11))
    m4 = smul(a11, ssub(b10, b00))
    m5 = smul(sadd(a00, a01), b11)
    m6 = smul(ssub(a10, a00), sadd(b00, b01))
    m7 = smul(ssub(a01, a11), sadd(b10, b11))

    c00 = sadd(ssub(sadd(m1, m4), m5), m7)
    c01 = sadd(m3, m5)
    c10 = sadd(m2, m4)
    c11 = sadd(sadd(ssub(m1, m2), m3), m6)
    return np.array([[c00, c01], [c10, c11]], dtype=A.dtype)


def _strassen_recursive(A: np.ndarray, B: np.ndarray, bits: int, logger, depth: int = 0) -> np.ndarray:
    n = A.shape[0]
    if n == 2:
        logger.debug(f"[depth={depth}] base n=2")
        return _strassen_2x2(A, B, bits)

    A11, A12, A21, A22 = split(A)
    B11, B12, B21, B22 = split(B)

    logger.debug(f"[depth={depth}] split n={n} -> {n // 2}")

    M1 = _strassen_recursive(add(A11, A22), add(B11, B22), bits, logger, depth+1)
    M2 = _strassen_recursive(add(A21, A22), B11,           bits, logger, depth+1)
    M3 = _strassen_recursive(A11, subtract(B12, B22),      bits, logger, depth+1)
    M4 = _strassen_recursive(A22, subtract(B21, B11),      bits, logger, depth+1)
    M5 = _strassen_recursive(add(A11, A12), B22,           bits, logger, depth+1)
    M6 = _strassen_recursive(subtract(A21, A11), add(B11, B12), bits, logger, depth+1)
    M7 = _strassen_recursive(subtract(A12, A22), add(B21, B22), bits, logger, depth+1)

    C11 = add(subtract(add(M1, M4), M5), M7)
    C12 = add(M3, M5)
    C21 = add(M2, M4)
    C22 = add(add(subtract(M1, M2), M3), M6)
    return combine_quadrants(C11, C12, C21, C22)


def strassen(A, B, n: int = None, logger=None, dtype: str = None) -> np.ndarray:
    """
    C = A x B by Strassen's recurrence on fixed-width integers.

    A and B are integer arrays (nested lists are converted using ``dtype`` or
    MM_DTYPE) holding at least n x n elements; only the top-left n x n block is
    read. n defaults to A.shape[0] and must be a power of two >= 2; there is no
    padding, callers pad odd shapes themselves.

    Raises DimensionError for a bad n, TypeError for non-integer operands,
    MatrixInputError for list elements outside the dtype and ArithmeticOverflow
    as soon as any intermediate leaves the dtype's range.
    """
    A = _as_matrix(A, dtype)
    B = _as_matrix(B, dtype)
    n = _check_operands(A, B, n)
    logger = logger or get_logger("strassen.core")
    logger.debug(f"strassen n={n} dtype={A.dtype}")
    return _strassen_recursive(A[:n, :n], B[:n, :n], int_bits(A.dtype), logger)


def standard_multiply(A, B, n: int = None, dtype: str = None) -> np.ndarray:
    """Schoolbook O(n^3) product with the same overflow checks, for verification."""
    A = _as_matrix(A, dtype)
    B = _as_matrix(B, dtype)
    n = _check_operands(A, B, n, pow2=False)
    bits = int_bits(A.dtype)

    C = np.zeros((n, n), dtype=A.dtype)
    for i in range(n):
        for j in range(n):
            acc = 0
            for k in range(n):
                acc = checked_add(acc, checked_mul(A[i, k], B[k, j], bits), bits)
            C[i, j] = acc
    return C
