"""
Core pagination utilities for API endpoints.
"""
from typing import TypeVar, Generic, List, Optional
from fastapi import Query
from sqlalchemy.orm import Query as SQLAlchemyQuery
import math

from ..config import settings
from .schemas import CamelModel

T = TypeVar("T")

class PageParams:
    """
    Page parameters for pagination.

    Attributes:
        page: Page number (1-indexed)
        limit: Number of items per page
    """
    def __init__(
        self,
        page: int = Query(1, ge=1, description="Page number"),
        limit: int = Query(
            settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page"
        )
    ):
        self.page = page
        self.limit = limit
        self.offset = (page - 1) * limit


class Pagination(CamelModel):
    """
    Pagination metadata.

    Attributes:
        page: Current page number
        limit: Number of items per page
        total: Total number of items
        total_pages: Total number of pages
    """
    page: int
    limit: int
    total: int
    total_pages: int


class PageResponse(CamelModel, Generic[T]):
    """
    Paginated response model: ``{"items": [...], "pagination": {...}}``.
    """
    items: List[T]
    pagination: Pagination


def paginate(
    query: SQLAlchemyQuery,
    page_params: PageParams,
    schema_class: Optional[type] = None
) -> PageResponse:
    """
    Paginate a SQLAlchemy query.

    Args:
        query: SQLAlchemy query to paginate (already filtered and ordered)
        page_params: Pagination parameters
        schema_class: Optional Pydantic model to convert items to

    Returns:
        PageResponse: Paginated response
    """
    total = query.count()
    items = query.offset(page_params.offset).limit(page_params.limit).all()

    response_class = PageResponse
    if schema_class:
        items = [schema_class.model_validate(item) for item in items]
        response_class = PageResponse[schema_class]

    return response_class(
        items=items,
        pagination=Pagination(
            page=page_params.page,
            limit=page_params.limit,
            total=total,
            total_pages=math.ceil(total / page_params.limit) if total > 0 else 0,
        )
    )
