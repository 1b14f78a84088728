"""Product router — POST /product and paginated GET /product.

Routers only handle HTTP (request parsing, response shaping). Errors raised
below are rendered by app.core.exceptions as 500 plain-text responses.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import PaginationRequest, pagination_params
from app.core.response import PaginationResult, paginated
from app.db.base import get_db
from app.repositories.product import SqlProductRepository
from app.schemas.product import ProductCreate, ProductOut
from app.services.product import ProductService

router = APIRouter(prefix="/product", tags=["Products"])


# ------------------------------------------------------------------
# Helper — wire the service to the SQL repository for this session
# ------------------------------------------------------------------

def _svc(session: AsyncSession) -> ProductService:
    return ProductService(SqlProductRepository(session))


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", response_model=PaginationResult[ProductOut])
async def fetch_products(
    pagination: PaginationRequest = Depends(pagination_params),
    session: AsyncSession = Depends(get_db),
):
    """List products (paginated). Sort by id|name|price|description, search name and description."""
    result = await _svc(session).fetch_products(pagination)
    return paginated([ProductOut.model_validate(p) for p in result.items], result.total)


@router.post("", response_model=ProductOut)
async def create_product(
    body: ProductCreate,
    session: AsyncSession = Depends(get_db),
):
    """Create a new product."""
    product = await _svc(session).create_product(body)
    return ProductOut.model_validate(product)
