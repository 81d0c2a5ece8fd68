import json
import logging

import azure.functions as func

from strassen_lib import config
from strassen_lib.errors import ArithmeticOverflow, DimensionError, MatrixInputError
from strassen_lib.matrix_io import check_range, validate_matrices
from strassen_lib.runlog import jlog, new_run_id
from strassen_lib.strassen_module import strassen


def _json(body: dict, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(json.dumps(body), status_code=status_code,
                             mimetype="application/json")


def main(req: func.HttpRequest) -> func.HttpResponse:
    run_id = new_run_id()
    dtype = config.DEFAULT_DTYPE
    try:
        try:
            req_body = req.get_json()
        except ValueError:
            return _json({"error": "Request body must be JSON"}, 400)
        if not isinstance(req_body, dict):
            return _json({"error": "Request body must be a JSON object"}, 400)

        matrix_a = req_body.get("matrix_a")
        matrix_b = req_body.get("matrix_b")
        validate_matrices(matrix_a, matrix_b)
        n = len(matrix_a)
        if n > config.MAX_DIM:
            raise DimensionError(f"Input is greater than max array row/col elem size {config.MAX_DIM}")

        dtype = req_body.get("dtype") or dtype
        if dtype not in config.DTYPES:
            raise MatrixInputError(f"Unsupported dtype {dtype!r}")
        check_range(matrix_a, dtype)
        check_range(matrix_b, dtype)

        result = strassen(matrix_a, matrix_b, dtype=dtype)
        jlog({"run_id": run_id, "op": "strassen_http", "n": n, "dtype": dtype})
        return _json({"result": result.tolist(), "n": n, "dtype": dtype}, 200)
    except ArithmeticOverflow as e:
        logging.warning(f"strassen_http: {e}")
        jlog({"run_id": run_id, "op": "strassen_http", "dtype": dtype,
              "success": False, "error": str(e)})
        return _json({"error": str(e), "op": e.op, "a": e.a, "b": e.b}, 422)
    except (DimensionError, MatrixInputError) as e:
        return _json({"error": str(e)}, 400)
    except Exception as e:
        return func.HttpResponse(f"Error: {str(e)}", status_code=500)
