"""Product repository backed by SQLAlchemy (Postgres in production, SQLite locally)."""


import logging

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StorageError
from app.core.pagination import PaginationRequest
from app.core.query_builder import build_page_query
from app.core.response import PaginationResult, paginated
from app.domain.product import Product
from app.repositories.base import ProductRepository

logger = logging.getLogger(__name__)

BASE_QUERY = f"SELECT * FROM {Product.__tablename__}"
COLUMNS = tuple(Product.__table__.columns)
SEARCHABLE_COLUMNS = ("name", "description")
SORTABLE_COLUMNS = ("id", "name", "price", "description")


class SqlProductRepository(ProductRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def fetch(self, request: PaginationRequest) -> PaginationResult[Product]:
        # Build errors surface before any round trip.
        page = build_page_query(
            BASE_QUERY,
            request,
            columns=COLUMNS,
            searchable=SEARCHABLE_COLUMNS,
            sortable=SORTABLE_COLUMNS,
        )

        try:
            rows = (await self._session.execute(page.select)).mappings().all()
            items = [Product(**row) for row in rows]
            total = (await self._session.execute(page.count)).scalar_one()
        except SQLAlchemyError as exc:
            logger.error("Product fetch failed: %s", exc)
            raise StorageError(f"failed to fetch products: {exc}") from exc

        logger.debug(
            "Fetched %d of %d products (offset=%d, limit=%d, sort=%s %s, search=%r)",
            len(items), total, page.offset, page.limit,
            request.sort, "desc" if request.descending else "asc", request.search,
        )
        return paginated(items, total)

    async def create(self, *, name: str, price: float, description: str) -> Product:
        stmt = (
            insert(Product)
            .values(name=name, price=price, description=description)
            .returning(Product)
        )
        try:
            product = (await self._session.scalars(stmt)).one()
        except SQLAlchemyError as exc:
            logger.error("Product insert failed: %s", exc)
            raise StorageError(f"failed to create product: {exc}") from exc

        logger.info("Created product id=%s", product.id)
        return product
