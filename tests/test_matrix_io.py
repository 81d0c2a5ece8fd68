"""Unit tests for the matrix sources and sinks."""

from __future__ import annotations

import numpy as np
import pytest

from strassen_lib.errors import MatrixInputError
from strassen_lib.matrix_io import (
    check_range,
    element_bounds,
    format_matrix,
    random_pair,
    read_matrix,
    read_pair,
    validate_matrices,
    write_matrix,
)


def write(tmp_path, name: str, text: str) -> str:
    path = tmp_path / name
    path.write_text(text)
    return str(path)


class TestReadMatrix:
    def test_basic(self, tmp_path) -> None:
        path = write(tmp_path, "a.txt", "1 2\n3 4\n")
        M = read_matrix(path, 2)
        assert M.tolist() == [[1, 2], [3, 4]]
        assert M.dtype == np.int32

    def test_extra_tokens_and_rows_ignored(self, tmp_path) -> None:
        path = write(tmp_path, "a.txt", "1 2 99\n3 4 99\n5 6 7\n")
        assert read_matrix(path, 2).tolist() == [[1, 2], [3, 4]]

    def test_tabs_and_blank_lines(self, tmp_path) -> None:
        path = write(tmp_path, "a.txt", "\n1\t2\n\n  3   4  \n")
        assert read_matrix(path, 2).tolist() == [[1, 2], [3, 4]]

    def test_int64(self, tmp_path) -> None:
        path = write(tmp_path, "a.txt", "4294967296 0\n0 1\n")
        M = read_matrix(path, 2, "int64")
        assert M.dtype == np.int64
        assert M[0, 0] == 2**32

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(MatrixInputError, match="open error"):
            read_matrix(str(tmp_path / "nope.txt"), 2)

    def test_negative_element(self, tmp_path) -> None:
        path = write(tmp_path, "a.txt", "1 -2\n3 4\n")
        with pytest.raises(MatrixInputError, match="negative"):
            read_matrix(path, 2)

    def test_short_row(self, tmp_path) -> None:
        path = write(tmp_path, "a.txt", "1 2\n3\n")
        with pytest.raises(MatrixInputError, match=":2: expected 2 elements"):
            read_matrix(path, 2)

    def test_too_few_rows(self, tmp_path) -> None:
        path = write(tmp_path, "a.txt", "1 2\n")
        with pytest.raises(MatrixInputError, match="expected 2 rows"):
            read_matrix(path, 2)

    def test_not_an_integer(self, tmp_path) -> None:
        path = write(tmp_path, "a.txt", "1 x\n3 4\n")
        with pytest.raises(MatrixInputError, match="not an integer"):
            read_matrix(path, 2)

    def test_out_of_range(self, tmp_path) -> None:
        path = write(tmp_path, "a.txt", "2147483648 0\n0 0\n")
        with pytest.raises(MatrixInputError, match="does not fit"):
            read_matrix(path, 2)

    def test_read_pair(self, tmp_path) -> None:
        a = write(tmp_path, "a.txt", "1 2\n3 4\n")
        b = write(tmp_path, "b.txt", "5 6\n7 8\n")
        A, B = read_pair(a, b, 2)
        assert A.tolist() == [[1, 2], [3, 4]]
        assert B.tolist() == [[5, 6], [7, 8]]


class TestRandomPair:
    def test_ranges(self) -> None:
        A, B = random_pair(16, seed=1)
        assert A.shape == B.shape == (16, 16)
        assert A.dtype == np.int32
        assert 0 <= A.min() and A.max() < 100
        assert 0 <= B.min() and B.max() <= 100

    def test_seeded(self) -> None:
        A1, B1 = random_pair(4, "int64", seed=42)
        A2, B2 = random_pair(4, "int64", seed=42)
        assert A1.dtype == np.int64
        assert (A1 == A2).all() and (B1 == B2).all()


class TestFormat:
    def test_tabs(self) -> None:
        assert format_matrix([[1, 2], [30, 4]]) == "1\t2\n30\t4"

    def test_padded(self) -> None:
        assert format_matrix([[1, 22]], sep=" ", width=4) == "   1   22"

    def test_write_then_read(self, tmp_path) -> None:
        M = np.array([[7, 0], [12, 3]], dtype=np.int32)
        path = str(tmp_path / "m.txt")
        write_matrix(path, M)
        assert (tmp_path / "m.txt").read_text() == "7 0\n12 3\n"
        assert read_matrix(path, 2).tolist() == M.tolist()


class TestValidate:
    def test_ok(self) -> None:
        validate_matrices([[1, 2], [3, 4]], [[0, 0], [0, 0]])

    @pytest.mark.parametrize(
        "a, b, msg",
        [
            ([], [[1]], "empty"),
            (None, [[1]], "empty"),
            ([[1, 2]], [[1, 2]], "square"),
            ([[1, 2], [3]], [[1, 2], [3, 4]], "square"),
            ([[1, -2], [3, 4]], [[1, 2], [3, 4]], "negative"),
            ([[1.5, 2], [3, 4]], [[1, 2], [3, 4]], "integers"),
            ([[1]], [[1, 2], [3, 4]], "column count"),
        ],
    )
    def test_rejects(self, a, b, msg: str) -> None:
        with pytest.raises(MatrixInputError, match=msg):
            validate_matrices(a, b)


class TestRange:
    def test_bounds_follow_dtype(self) -> None:
        assert element_bounds("int32") == (-(2**31), 2**31 - 1)
        assert element_bounds("int64") == (-(2**63), 2**63 - 1)

    def test_in_range(self) -> None:
        check_range([[0, 2**31 - 1], [-(2**31), 5]], "int32")

    @pytest.mark.parametrize("value", [2**31, -(2**31) - 1, 2**32 + 3])
    def test_out_of_range(self, value: int) -> None:
        with pytest.raises(MatrixInputError, match=f"Element {value} does not fit int32"):
            check_range([[1, 2], [3, value]], "int32")

    def test_wider_dtype(self) -> None:
        check_range([[2**32 + 3]], "int64")
