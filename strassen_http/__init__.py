import json
import time
import uuid

import azure.functions as func

from strassen_lib.errors import ArithmeticOverflow, InvalidDimension, MatrixFormatError
from strassen_lib.parallel import multiply_parallel
from strassen_lib.strassen import multiply
from strassen_lib.utils import get_logger, validate_matrices


def _respond(body: dict, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(json.dumps(body), status_code=status_code, mimetype="application/json")


def jlog(payload: dict):
    get_logger("strassen.http").info(json.dumps(payload, ensure_ascii=False))


def main(req: func.HttpRequest) -> func.HttpResponse:
    logger = get_logger("strassen.http")
    run_id = f"run_{uuid.uuid4().hex[:8]}"
    try:
        req_body = req.get_json()
    except ValueError:
        logger.warning(f"{run_id}: request body is not valid JSON")
        return _respond({"error": "Request body must be JSON."}, 400)
    if not isinstance(req_body, dict):
        return _respond({"error": "Request body must be a JSON object."}, 400)

    matrix_a = req_body.get("matrix_a")
    matrix_b = req_body.get("matrix_b")
    parallel = req_body.get("parallel", False)
    if not isinstance(parallel, bool):
        return _respond({"error": "'parallel' must be a JSON boolean."}, 400)
    try:
        validate_matrices(matrix_a, matrix_b)
        n = len(matrix_a)
        t0 = time.time()
        result = multiply_parallel(matrix_a, matrix_b, n) if parallel else multiply(matrix_a, matrix_b, n)
        t1 = time.time()
    except ArithmeticOverflow as e:
        logger.warning(f"{run_id}: {e}")
        return _respond({"error": str(e), "operation": e.operation, "a": e.a, "b": e.b}, 422)
    except (InvalidDimension, MatrixFormatError, ValueError) as e:
        logger.warning(f"{run_id}: rejected input: {e}")
        return _respond({"error": str(e)}, 400)
    except Exception:
        logger.exception(f"{run_id}: unhandled exception")
        return _respond({"error": "Internal error."}, 500)

    jlog({
        "ts": time.time(),
        "run_id": run_id,
        "N": n,
        "dtype": str(result.dtype),
        "mode": "parallel" if parallel else "inline",
        "compute_sec": round(t1 - t0, 6),
    })
    return _respond({"result": result.tolist(), "n": n}, 200)
