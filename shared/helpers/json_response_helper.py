# shared/helpers/json_response_helper.py
from fastapi import HTTPException
from typing import Any, List, Optional

from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import FieldError, JsonOutResult


def success_response(data: Any, message: str = "Success", status_code: str = AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY):
    return JsonOutResult(
        data=data,
        status="Success",
        status_code=str(status_code),
        message=message
    )


def error_response(
    message: str,
    status_code: str = AppStatusCode.OPERATION_FAILED,
    http_status: int = 400,
    errors: Optional[List[FieldError]] = None,
):
    raise HTTPException(
        status_code=http_status,
        detail=JsonOutResult(
            data=None,
            status="Failure",
            status_code=str(status_code),
            message=message,
            errors=errors
        ).model_dump()
    )


# ---------------- Taxonomy shortcuts ----------------

def validation_error(message: str, field: Optional[str] = None):
    errors = [FieldError(field=field, message=message)] if field else None
    return error_response(message, AppStatusCode.VALIDATION_ERROR, 400, errors)


def not_part_of_family():
    return error_response(
        message="User not part of any family",
        status_code=AppStatusCode.NOT_PART_OF_FAMILY,
        http_status=404
    )


def forbidden(message: str = "Insufficient permissions"):
    return error_response(message, AppStatusCode.FORBIDDEN, 403)


def not_found(entity: str):
    return error_response(f"{entity} not found", AppStatusCode.NOT_FOUND, 404)


def conflict(message: str):
    return error_response(message, AppStatusCode.CONFLICT, 400)
