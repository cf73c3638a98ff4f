from pydantic import BaseModel, Field, field_validator
from typing import Any, Generic, List, Optional, TypeVar, Union
from uuid import UUID

from shared.core.config import settings
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: str
    name: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None
    exp: Optional[int] = None


class CommonQueryParams(EmptyStringModel):
    search: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = 20

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, value: int) -> int:
        if value < 1:
            raise ValueError("limit must be a positive integer")
        return min(value, settings.MAX_PAGE_LIMIT)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class Lookup(BaseModel):
    id: Union[str, UUID]  # accepts both UUID and str
    name: str

    class Config:
        from_attributes = True


class FieldError(BaseModel):
    field: str
    message: str


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
    errors: Optional[List[FieldError]] = None


class PagedResult(BaseModel):
    total: int
    page: int
    has_more: bool

    @classmethod
    def build(cls, total: int, page: int, limit: int, **kwargs: Any):
        return cls(total=total, page=page, has_more=page * limit < total, **kwargs)
