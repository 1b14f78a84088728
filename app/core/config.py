
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Product Catalog API"
    app_env: str = "development"
    app_port: int = 8000

    # Database (Postgres via asyncpg in production, SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./products_dev.db",
        alias="DATABASE_URL",
    )
    db_auto_create: bool = Field(
        default=True, alias="DB_AUTO_CREATE",
    )  # create missing tables at startup; production runs `alembic upgrade head`

    # List endpoint defaults
    default_items_per_page: int = Field(default=10, alias="DEFAULT_ITEMS_PER_PAGE")
    max_items_per_page: int = Field(default=100, alias="MAX_ITEMS_PER_PAGE")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
