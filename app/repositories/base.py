"""Storage contract for products — one conforming class per storage technology."""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.core.pagination import PaginationRequest
from app.core.response import PaginationResult
from app.domain.product import Product


class ProductRepository(ABC):
    """Create and paginated-fetch capability over a product store.

    Implementations raise :class:`app.core.exceptions.StorageError` for any
    failure talking to the store and never return a partial page.
    """

    @abstractmethod
    async def create(self, *, name: str, price: float, description: str) -> Product:
        """Insert one product and return it with its generated id."""

    @abstractmethod
    async def fetch(self, request: PaginationRequest) -> PaginationResult[Product]:
        """Return one page of products plus the total number of matches."""
