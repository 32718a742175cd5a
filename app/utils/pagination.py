from math import ceil
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages_for(total: int, limit: int) -> int:
    return ceil(total / limit) if limit > 0 else 0


class Pagination(BaseModel):
    """Metadatos de paginación que acompañan a los listados de preguntas"""

    current_page: int
    limit: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    next_page: Optional[int] = None
    previous_page: Optional[int] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        total_pages = total_pages_for(total, limit)
        has_next = page < total_pages
        has_previous = page > 1
        return cls(
            current_page=page,
            limit=limit,
            total_count=total,
            total_pages=total_pages,
            has_next_page=has_next,
            has_previous_page=has_previous,
            next_page=page + 1 if has_next else None,
            previous_page=page - 1 if has_previous else None,
        )
