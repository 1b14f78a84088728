"""Pagination helpers for list endpoints."""


from fastapi import Query
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from app.core.config import settings
from app.core.exceptions import ValidationError


class PaginationRequest(BaseModel):
    """Normalized page/size/sort/search inputs for a list query."""

    page: int = Field(default=1, ge=1)
    items_per_page: int = Field(default=settings.default_items_per_page, gt=0)
    sort: str = "id"
    descending: bool = False
    search: str = ""

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    @field_validator("items_per_page")
    @classmethod
    def _cap_items_per_page(cls, value: int) -> int:
        if value > settings.max_items_per_page:
            raise ValueError(f"must be at most {settings.max_items_per_page}")
        return value

    @field_validator("sort", "search", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("sort")
    @classmethod
    def _default_sort(cls, value: str) -> str:
        return value or "id"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.items_per_page


def pagination_params(
    page: int = Query(default=1, description="Page number (1-based)"),
    items_per_page: int = Query(
        default=settings.default_items_per_page,
        alias="itemsPerPage",
        description="Items per page",
    ),
    descending: bool = Query(default=False, description="Sort descending"),
    sort: str = Query(default="id", description="Sort field"),
    search: str = Query(default="", description="Case-insensitive text search"),
) -> PaginationRequest:
    """FastAPI dependency for `?page=1&itemsPerPage=10&descending=false&sort=id&search=`."""
    try:
        return PaginationRequest(
            page=page,
            items_per_page=items_per_page,
            descending=descending,
            sort=sort,
            search=search,
        )
    except PydanticValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ValidationError(f"Invalid pagination parameters: {details}") from exc
