"""Product Pydantic schemas (request DTOs and response models)."""


from app.schemas.common import CamelModel

class ProductCreate(CamelModel):
    name: str
    price: float
    description: str

class ProductOut(CamelModel):
    id: int
    name: str | None = None
    price: float | None = None
    description: str | None = None
