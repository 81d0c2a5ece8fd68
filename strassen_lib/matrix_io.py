import os

import numpy as np

from strassen_lib.config import RANDOM_HIGH_A, RANDOM_HIGH_B, dtype_of
from strassen_lib.errors import MatrixInputError
from strassen_lib.overflow_guard import int_bits, int_bounds


def element_bounds(dtype: str = None):
    return int_bounds(int_bits(dtype_of(dtype)))


def check_range(matrix, dtype: str = None):
    """Raise MatrixInputError if any element does not fit the element type."""
    lo, hi = element_bounds(dtype)
    for row in matrix:
        for v in row:
            if v < lo or v > hi:
                raise MatrixInputError(f"Element {v} does not fit {np.dtype(dtype_of(dtype)).name}")


def validate_matrices(matrix_a, matrix_b):
    for M in (matrix_a, matrix_b):
        if not isinstance(M, (list, tuple, np.ndarray)) or len(M) == 0:
            raise MatrixInputError("Input matrices cannot be empty.")
    for name, M in (("A", matrix_a), ("B", matrix_b)):
        if not all(isinstance(row, (list, tuple, np.ndarray)) and len(row) == len(M) for row in M):
            raise MatrixInputError(f"Matrix {name} must be square.")
        for row in M:
            for v in row:
                if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
                    raise MatrixInputError(f"Matrix {name} must contain integers only, got {v!r}.")
                if v < 0:
                    raise MatrixInputError(f"Matrix {name} contains negative element {v}.")
    if len(matrix_a) != len(matrix_b):
        raise MatrixInputError("Matrix A's column count must match Matrix B's row count.")


def _parse_row(path: str, lineno: int, line: str, n: int, lo: int, hi: int):
    tokens = line.split()[:n]
    if len(tokens) < n:
        raise MatrixInputError(f"{path}:{lineno}: expected {n} elements, found {len(tokens)}")
    row = []
    for tok in tokens:
        try:
            v = int(tok)
        except ValueError:
            raise MatrixInputError(f"{path}:{lineno}: not an integer: {tok!r}") from None
        if v < 0:
            raise MatrixInputError(f"{path}:{lineno}: negative element {v}")
        if v > hi or v < lo:
            raise MatrixInputError(f"{path}:{lineno}: {v} does not fit the element type")
        row.append(v)
    return row


def read_matrix(path: str, n: int, dtype: str = None) -> np.ndarray:
    """
    Read an n x n matrix from a text file, one row per line, whitespace
    separated. Blank lines are skipped; extra rows and extra tokens past n are
    ignored.
    """
    dt = dtype_of(dtype)
    lo, hi = element_bounds(dtype)
    if not os.path.isfile(path):
        raise MatrixInputError(f"{path} open error")

    rows = []
    with open(path, encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, 1):
            if not line.strip():
                continue
            rows.append(_parse_row(path, lineno, line, n, lo, hi))
            if len(rows) == n:
                break
    if len(rows) < n:
        raise MatrixInputError(f"{path}: expected {n} rows, found {len(rows)}")
    return np.array(rows, dtype=dt)


def read_pair(a_path: str, b_path: str, n: int, dtype: str = None):
    return read_matrix(a_path, n, dtype), read_matrix(b_path, n, dtype)


def random_pair(n: int, dtype: str = None, seed=None):
    rng = np.random.default_rng(seed)
    dt = dtype_of(dtype)
    A = rng.integers(0, RANDOM_HIGH_A, (n, n)).astype(dt)
    B = rng.integers(0, RANDOM_HIGH_B, (n, n)).astype(dt)
    return A, B


def format_matrix(M, sep: str = "\t", width: int = 0) -> str:
    return "\n".join(sep.join(str(int(v)).rjust(width) for v in row) for row in M)


def write_matrix(path: str, M):
    with open(path, mode="w", encoding="utf-8") as fh:
        fh.write(format_matrix(M, sep=" ") + "\n")
