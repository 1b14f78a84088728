"""Product service — create and paginated listing.

Rule: No SQLAlchemy / no FastAPI here. The service talks to whatever
ProductRepository it is handed.
"""


from app.core.pagination import PaginationRequest
from app.core.response import PaginationResult
from app.domain.product import Product
from app.repositories.base import ProductRepository
from app.schemas.product import ProductCreate

class ProductService:
    def __init__(self, repository: ProductRepository):
        self._repo = repository

    async def create_product(self, data: ProductCreate) -> Product:
        return await self._repo.create(**data.model_dump())

    async def fetch_products(self, pagination: PaginationRequest) -> PaginationResult[Product]:
        return await self._repo.fetch(pagination)
