# matrix-input generator for `strassen -f`
import os
import sys

from strassen_lib.matrix_io import random_pair, write_matrix


def generate_matrix_pair(n, seed=None, dtype=None):
    return random_pair(n, dtype, seed=seed)


def save_matrix_pair(a_path, b_path, matrix_a, matrix_b):
    write_matrix(a_path, matrix_a)
    write_matrix(b_path, matrix_b)
    return a_path, b_path


if __name__ == "__main__":
    n = int(sys.argv[1]) if len(sys.argv) > 1 else 4
    out_dir = sys.argv[2] if len(sys.argv) > 2 else "."
    matrix_a, matrix_b = generate_matrix_pair(n)
    paths = save_matrix_pair(os.path.join(out_dir, "a.txt"), os.path.join(out_dir, "b.txt"),
                             matrix_a, matrix_b)
    print("Wrote", *paths)
