"""``limit``/``offset`` query handling shared by every list endpoint.

``offset`` is a 1-indexed page number on the wire; the ORM wants a row skip.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Query

from ..core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_NUMBER, MAX_PAGE_SIZE


def page_to_skip(limit: int, offset: Optional[int]) -> int:
    """Convert a 1-indexed page number to the number of rows to skip.

    A missing, zero or negative page counts as the first page.
    """
    if not offset or offset <= 0:
        return 0
    return (offset - 1) * limit


@dataclass
class Page:
    limit: int
    skip: int


def pagination(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Rows per page"),
    offset: Optional[int] = Query(None, le=MAX_PAGE_NUMBER, description="Page number, starting at 1"),
) -> Page:
    return Page(limit=limit, skip=page_to_skip(limit, offset))
