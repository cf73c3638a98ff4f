import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.core.schemas import FieldError, JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def _field_errors(errors) -> list:
    result = []
    for err in errors:
        # drop the "body"/"query" prefix FastAPI puts in front of the field path
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        result.append(FieldError(field=".".join(loc) or "__root__", message=err.get("msg", "")))
    return result


def _validation_response(errors) -> JSONResponse:
    wrapped = JsonOutResult(
        data=None,
        status="Failure",
        status_code=str(AppStatusCode.VALIDATION_ERROR),
        message="Validation error",
        errors=_field_errors(errors)
    ).model_dump()
    return JSONResponse(content=wrapped, status_code=400)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # error_response() already built the envelope
        if isinstance(exc.detail, dict) and {"status", "status_code", "message"}.issubset(exc.detail.keys()):
            return JSONResponse(content=exc.detail, status_code=exc.status_code,
                                headers=getattr(exc, "headers", None))

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=str(exc.status_code),
            message=str(exc.detail)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=exc.status_code,
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _validation_response(exc.errors())

    # Query models built through Depends() raise plain pydantic errors
    @app.exception_handler(ValidationError)
    async def pydantic_exception_handler(request: Request, exc: ValidationError):
        return _validation_response(exc.errors())

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=str(AppStatusCode.INTERNAL_ERROR),
            message="Internal server error"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=500)
