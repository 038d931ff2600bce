"""Shared listing envelope contracts."""

from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasNextPage: bool
    hasPreviousPage: bool


class PageEnvelope(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    pagination: PaginationOut
