# product_api/app/validation.py

"""
Request validation gate.
FastAPI runs every declared path and body rule for a route before the
handler is called. When any of them fails, this handler answers 400 with
the full list of failures instead of FastAPI's default 422.
"""
import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .schemas import INVALID_ID, MISSING_FIELD_MESSAGES

logger = logging.getLogger(__name__)

PATH_PARAM_MESSAGES = {"product_id": INVALID_ID}


def shape_error(error: dict) -> dict:
    """Turn one pydantic/FastAPI error entry into a client-facing error item."""
    loc = tuple(error.get("loc", ()))
    location = str(loc[0]) if loc else "request"
    field = ".".join(str(part) for part in loc[1:]) or None

    if location == "path" and field in PATH_PARAM_MESSAGES:
        msg = PATH_PARAM_MESSAGES[field]
    elif error.get("type") == "missing":
        if field is None:
            msg = "Request body is required"
        else:
            msg = MISSING_FIELD_MESSAGES.get(field, error.get("msg", "Field required"))
    else:
        msg = error.get("msg", "Invalid value")

    return {"location": location, "field": field, "msg": msg}


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [shape_error(error) for error in exc.errors()]
    logger.info(
        f"Rejected {request.method} {request.url.path}: "
        f"{[e['msg'] for e in errors]}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": errors},
    )
