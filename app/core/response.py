"""Standardized JSON response envelope helpers."""


from collections.abc import Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginationResult(BaseModel, Generic[T]):
    """Paginated list response envelope: `{ items: [...], total: n }`"""

    items: list[T]
    total: int

    # Repositories carry ORM entities; routers validate them into response models.
    model_config = {"frozen": True, "arbitrary_types_allowed": True}


def paginated(items: Sequence[T], total: int) -> PaginationResult[T]:
    """Wrap one page of items and the total match count."""
    return PaginationResult(items=list(items), total=total)
