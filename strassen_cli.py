"""Command-line interface for the Strassen multiplier.

Provides the `strassen` command:
- `-f`: read A and B from a.txt / b.txt
- `-r`: generate A and B randomly
- `-n <dim>`: dimension (power of two, at most MAX_DIM)

Both the Strassen result and the schoolbook product are printed so they can be
compared by eye.
"""

from __future__ import annotations

import argparse
import sys
import time

from strassen_lib import config
from strassen_lib.errors import ArithmeticOverflow, DimensionError, MatrixInputError
from strassen_lib.matrix_io import format_matrix, random_pair, read_pair
from strassen_lib.runlog import jlog, new_run_id
from strassen_lib.strassen_module import is_power_of_two, standard_multiply, strassen


class UsageError(Exception):
    """Bad or missing flags; the caller prints help and exits 0."""


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="strassen",
        add_help=False,
        description="This program uses strassen's algorithm to multiply two matrices",
    )
    parser.add_argument(
        "-f", dest="from_file", action="store_true",
        help="Read matrix A and B from files a.txt and b.txt respectively",
    )
    parser.add_argument(
        "-r", dest="random", action="store_true",
        help="Generate matrix A and B internally using a random generator",
    )
    parser.add_argument("-n", dest="n", metavar="<num_row_col>", help="Number of row/col")
    parser.add_argument("--a-file", default=config.A_FILE, help="Path of matrix A (with -f)")
    parser.add_argument("--b-file", default=config.B_FILE, help="Path of matrix B (with -f)")
    parser.add_argument("--seed", type=int, help="Seed for the random source (with -r)")
    parser.add_argument(
        "--dtype", choices=config.DTYPES, default=config.DEFAULT_DTYPE,
        help="Element width (default: MM_DTYPE or int32)",
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help")
    return parser


def parse_dimension(raw: str) -> int:
    try:
        n = int(raw)
    except ValueError:
        raise DimensionError(f"Invalid row/col count {raw!r}") from None
    if n > config.MAX_DIM:
        raise DimensionError(
            f"Input is greater than max array row/col elem size {config.MAX_DIM}"
        )
    if n < 2 or not is_power_of_two(n):
        raise DimensionError(f"Row/col count must be a power of two >= 2, got {n}")
    return n


def _print_inputs(A, B) -> None:
    print("Elements for matrix A")
    print(format_matrix(A, sep=" ", width=4))
    print("Elements for matrix B")
    print(format_matrix(B, sep=" ", width=4))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv

    try:
        args = parser.parse_args(argv)
    except UsageError:
        args = None
    if args is None or args.help or args.n is None or args.from_file == args.random:
        parser.print_help()
        return 0

    if args.dtype not in config.DTYPES:
        print(f"Error: unsupported dtype {args.dtype!r}", file=sys.stderr)
        return 1

    run_id = new_run_id()
    source = "file" if args.from_file else "random"

    try:
        n = parse_dimension(args.n)
        if args.from_file:
            A, B = read_pair(args.a_file, args.b_file, n, args.dtype)
        else:
            A, B = random_pair(n, args.dtype, seed=args.seed)
        _print_inputs(A, B)

        t0 = time.time()
        C = strassen(A, B, n)
        t1 = time.time()
        C_ref = standard_multiply(A, B, n)
    except ArithmeticOverflow as e:
        print(e, file=sys.stderr)
        jlog({"run_id": run_id, "op": "strassen", "source": source, "n": n,
              "dtype": args.dtype, "success": False, "error": str(e)})
        return 1
    except (DimensionError, MatrixInputError) as e:
        print(e, file=sys.stderr)
        return 1

    print("Result with strassen algo: ")
    print(format_matrix(C))
    print("Result with standard multiplication: ")
    print(format_matrix(C_ref))

    jlog({"run_id": run_id, "op": "strassen", "source": source, "n": n,
          "dtype": args.dtype, "dur_ms": int((t1 - t0) * 1000),
          "matches_standard": bool((C == C_ref).all())})
    return 0


if __name__ == "__main__":
    sys.exit(main())
