import argparse
import sys

from strassen_lib.errors import ArithmeticOverflow, InvalidDimension, MatrixFormatError
from strassen_lib.matrix_io import format_matrix, random_matrix, read_matrix_file
from strassen_lib.naive import multiply_naive
from strassen_lib.parallel import multiply_parallel
from strassen_lib.strassen import MAX_DIM, multiply, validate_dimension
from strassen_lib.utils import get_logger, resolve_level

USAGE = f"""This program uses strassen's algorithm to multiply two matrices
Usage: strassen-mult <option>
Options:
\t-f:\t\t\tRead matrix A and B from files a.txt and b.txt respectively
\t-r:\t\t\tGenerate matrix A and B internally at random
\t-n <num_row_col>:\tNumber of row/col (power of two, at most {MAX_DIM})
"""


class _UsageParser(argparse.ArgumentParser):
    # bad options print usage and exit successfully rather than with argparse's status 2
    def error(self, message):
        print(f"Invalid option: {message}")
        print(USAGE)
        raise SystemExit(0)


def _parser():
    p = _UsageParser(prog="strassen-mult", add_help=False)
    p.add_argument("-f", dest="from_file", action="store_true")
    p.add_argument("-r", dest="random", action="store_true")
    p.add_argument("-n", dest="n")
    p.add_argument("--a-file", default="a.txt")
    p.add_argument("--b-file", default="b.txt")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--parallel", action="store_true")
    p.add_argument("--log-level", default=None)
    p.add_argument("-h", "--help", action="store_true")
    return p


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = _parser().parse_args(argv)

    if not argv or args.help or args.from_file == args.random or args.n is None:
        print(USAGE)
        return 0

    logger = get_logger("strassen.cli")
    if args.log_level:
        get_logger("strassen").setLevel(resolve_level(args.log_level))

    try:
        n = validate_dimension(int(args.n))
    except ValueError as e:
        # InvalidDimension is a ValueError; so is int("abc")
        msg = str(e) if isinstance(e, InvalidDimension) else f"Invalid dimension n = {args.n!r}"
        print(msg)
        logger.error(msg)
        return 1

    try:
        if args.from_file:
            logger.info(f"reading A from {args.a_file}, B from {args.b_file}")
            A = read_matrix_file(args.a_file, n)
            B = read_matrix_file(args.b_file, n)
        else:
            rng_seed = args.seed
            A = random_matrix(n, high=100, seed=rng_seed)
            B = random_matrix(n, high=101, seed=None if rng_seed is None else rng_seed + 1)
    except MatrixFormatError as e:
        print(e)
        logger.error(f"input rejected: {e}")
        return 1

    print("Elements for matrix A")
    print(format_matrix(A))
    print("Elements for matrix B")
    print(format_matrix(B))

    try:
        C = multiply_parallel(A, B, n) if args.parallel else multiply(A, B, n)
        D = multiply_naive(A, B, n)
    except ArithmeticOverflow as e:
        print(e)
        logger.error(f"multiplication aborted: {e}")
        return 1

    print("Result with strassen algo: ")
    print(format_matrix(C, width=8))
    print("Result with standard multiplication: ")
    print(format_matrix(D, width=8))
    return 0


if __name__ == "__main__":
    sys.exit(main())
