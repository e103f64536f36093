
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Vendors Service"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Database (PostgreSQL via asyncpg or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./vendors_dev.db",
        alias="DATABASE_URL",
    )
    db_pool_size: int = Field(default=20, alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, alias="DB_MAX_OVERFLOW")
    db_pool_timeout: int = Field(default=30, alias="DB_POOL_TIMEOUT")  # seconds

    # External authentication service
    auth_service_url: str = Field(default="http://localhost:3000", alias="AUTH_SERVICE_URL")
    auth_validate_path: str = Field(default="/auth/validate", alias="AUTH_VALIDATE_PATH")
    auth_timeout: float = Field(default=5.0, alias="AUTH_TIMEOUT")

    # Menu item images
    upload_dir: str = Field(default="./uploads", alias="UPLOAD_DIR")
    upload_max_size_mb: int = Field(default=5, alias="UPLOAD_MAX_SIZE_MB")
    upload_allowed_types: list[str] = Field(
        default=["image/jpeg", "image/png", "image/webp"],
        alias="UPLOAD_ALLOWED_TYPES",
    )

    # Webhook subscribers (JSON list in the environment)
    webhook_urls: list[str] = Field(default_factory=list, alias="WEBHOOK_URLS")
    webhook_timeout: float = Field(default=10.0, alias="WEBHOOK_TIMEOUT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def max_upload_size_bytes(self) -> int:
        return self.upload_max_size_mb * 1024 * 1024

    @property
    def auth_validate_url(self) -> str:
        return f"{self.auth_service_url.rstrip('/')}{self.auth_validate_path}"

settings = Settings()
