"""
Domain errors raised by services and turned into JSON responses in main.py
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from foreverr.utils.logger import logger


class ForeverrError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(ForeverrError):
    status_code = 400


class UnauthorizedError(ForeverrError):
    status_code = 401


class PermissionDeniedError(ForeverrError):
    status_code = 403


class NotFoundError(ForeverrError):
    status_code = 404


class ConflictError(ForeverrError):
    status_code = 409


class ExternalServiceError(ForeverrError):
    status_code = 502


async def foreverr_error_handler(request: Request, exc: ForeverrError):
    if exc.status_code >= 500:
        logger.error(f" {request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f" {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    logger.debug(f" Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation error", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError):
    # ctx may hold exception instances that are not JSON serialisable
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors
