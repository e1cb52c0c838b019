import json
import os

import requests

from strassen_lib.errors import RemoteMultiplyError

# Configuration
API_URL = os.getenv("STRASSEN_API_URL", "http://localhost:7071/api/strassen_http")  # Adjust as needed
TIMEOUT = float(os.getenv("STRASSEN_API_TIMEOUT", "30"))


def _to_lists(m):
    return m.tolist() if hasattr(m, "tolist") else m


def post_matrices(api_url, matrix_a, matrix_b, timeout=TIMEOUT, parallel=False):
    """POST two matrices to the strassen_http function and return the product as lists."""
    payload = {
        "matrix_a": _to_lists(matrix_a),
        "matrix_b": _to_lists(matrix_b),
        "parallel": bool(parallel),
    }
    response = requests.post(api_url, json=payload, timeout=timeout)
    if response.status_code != 200:
        raise RemoteMultiplyError(response.status_code, response.text)
    return response.json()["result"]


if __name__ == "__main__":
    from strassen_lib.matrix_io import random_matrix

    matrix_size = int(os.getenv("STRASSEN_MATRIX_SIZE", "4"))  # You can increase this up to the max dim
    matrix_a = random_matrix(matrix_size, high=10)
    matrix_b = random_matrix(matrix_size, high=10)

    print("Matrix A:", matrix_a.tolist())
    print("Matrix B:", matrix_b.tolist())

    try:
        result = post_matrices(API_URL, matrix_a, matrix_b)
    except RemoteMultiplyError as e:
        print(e)
        raise SystemExit(1)
    print("Result Matrix:")
    print(json.dumps(result, indent=2))
