"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  product.py  — the Product catalog table
"""

from app.domain.product import Product

__all__ = ["Product"]
