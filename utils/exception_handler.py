from typing import List, Dict
from pydantic import ValidationError
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from logger import logger


# format the validation errors into our desired output
def format_validation_errors(errors: List[dict]) -> Dict:
    formatted_errors = {}

    for error in errors:
        # body.to_address.zip -> to_address.zip
        location = [str(part) for part in error["loc"] if part != "body"]
        field = ".".join(location) if location else "Unknown"
        message = error["msg"]

        formatted_errors.setdefault(field, []).append(message)

    return {
        "data": {"fields": formatted_errors},
        "message": "Validation error occurred.",
        "status": False,
    }


async def handle_validation_error(
    request: Request, exc: ValidationError
) -> JSONResponse:
    return JSONResponse(status_code=422, content=format_validation_errors(exc.errors()))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.error(
        msg="422 on {} {}: {}".format(request.method, request.url.path, exc.errors())
    )
    return JSONResponse(status_code=422, content=format_validation_errors(exc.errors()))


# Custom internal server error handler
async def custom_http_exception_handler(
    request: Request, exc: HTTPException
) -> JSONResponse:
    if exc.status_code == 500:
        logger.error(f"Internal server error: {exc.detail}")
        return JSONResponse(
            status_code=500,
            content={
                "message": "An internal server error occurred. Please try again later.",
                "status": False,
            },
        )

    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"message": exc.detail, "status": False}

    return JSONResponse(status_code=exc.status_code, content=content)
