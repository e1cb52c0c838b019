# generate_dataset.py: writes a.txt / b.txt for `strassen-mult -f -n N`
import argparse

import numpy as np

from strassen_lib.matrix_io import random_matrix, write_matrix_file


def generate_matrix_pair(n, high=100, seed=None):
    rng = np.random.default_rng(seed)
    matrix_a = random_matrix(n, high=high, seed=rng)
    matrix_b = random_matrix(n, high=high + 1, seed=rng)
    return matrix_a, matrix_b


def save_matrix_pair(n, a_path="a.txt", b_path="b.txt", high=100, seed=None):
    matrix_a, matrix_b = generate_matrix_pair(n, high=high, seed=seed)
    write_matrix_file(a_path, matrix_a)
    write_matrix_file(b_path, matrix_b)
    return matrix_a, matrix_b


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Write a random matrix pair for the -f input path")
    parser.add_argument("-n", type=int, default=4, help="Matrix dimension (NxN)")
    parser.add_argument("--high", type=int, default=100, help="Entries are drawn from [0, high)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--a-file", default="a.txt")
    parser.add_argument("--b-file", default="b.txt")
    args = parser.parse_args()
    save_matrix_pair(args.n, args.a_file, args.b_file, high=args.high, seed=args.seed)
    print(f"wrote {args.n}x{args.n} matrices to {args.a_file} and {args.b_file}")
