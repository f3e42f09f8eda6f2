"""Pagination and sorting models."""

from __future__ import annotations

import math
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

MAX_PAGE_SIZE = 100


class SortField(str, Enum):
    """Fields a task listing may be sorted by."""

    DUE_DATE = "dueDate"
    PRIORITY = "priority"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class PageRequest(BaseModel):
    """A requested page of results.

    Attributes:
        page: 1-based page number
        size: Number of items per page (1-100)
        sort_by: Field to sort by
        sort_order: Sort direction
    """

    page: int = Field(default=1, ge=1)
    size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def of(
        cls,
        page: int = 1,
        limit: int = 10,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> PageRequest:
        """Build a page request from loosely validated caller input.

        Out-of-range page numbers and sizes are clamped, unknown sort fields
        fall back to createdAt, and anything other than "asc" sorts
        descending.
        """
        try:
            field = SortField(sort_by) if sort_by else SortField.CREATED_AT
        except ValueError:
            field = SortField.CREATED_AT

        direction = (
            SortOrder.ASC
            if sort_order is not None and sort_order.lower() == "asc"
            else SortOrder.DESC
        )

        return cls(
            page=max(1, page),
            size=max(1, min(MAX_PAGE_SIZE, limit)),
            sort_by=field,
            sort_order=direction,
        )

    @property
    def offset(self) -> int:
        """0-based offset of the first row on this page."""
        return (self.page - 1) * self.size


class Page(BaseModel, Generic[T]):
    """A bounded, sorted slice of a larger result set.

    Attributes:
        content: Items on this page
        total: Number of items across all pages
        page: 1-based page number that was requested
        size: Requested page size
        sort_by: Sort field that was applied
        sort_order: Sort direction that was applied
    """

    content: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    size: int = 10
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def from_request(
        cls, content: list[T], total: int, request: PageRequest
    ) -> Page[T]:
        return cls(
            content=content,
            total=total,
            page=request.page,
            size=request.size,
            sort_by=request.sort_by,
            sort_order=request.sort_order,
        )

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.total else 0
