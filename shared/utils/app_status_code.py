from enum import Enum


class AppStatusCode(str, Enum):
    # ---------- Success ----------
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"
    CREATED_SUCCESSFULLY = "102"
    UPDATED_SUCCESSFULLY = "103"
    DELETED_SUCCESSFULLY = "104"

    # ---------- Authentication ----------
    AUTHENTICATION_TOKEN_INVALID = "201"
    AUTHENTICATION_TOKEN_EXPIRED = "202"
    AUTHENTICATION_USER_INVALID = "203"
    AUTHENTICATION_USER_INACTIVE = "204"

    # ---------- Request / domain failures ----------
    VALIDATION_ERROR = "300"
    NOT_PART_OF_FAMILY = "301"
    FORBIDDEN = "302"
    NOT_FOUND = "303"
    CONFLICT = "304"
    INVALID_STATUS = "305"
    INVALID_INVITE_CODE = "306"

    OPERATION_FAILED = "400"
    INTERNAL_ERROR = "500"

    def __str__(self) -> str:
        return self.value
