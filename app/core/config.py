from typing import List, Literal

from pydantic import AliasChoices, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    # App
    app_name: str = "Documentary Catalog"
    app_host: str = "0.0.0.0"
    app_port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "APP_PORT"))
    environment: str = Field(default="development", validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"))
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # DB settings
    database_url: str = "sqlite+aiosqlite:///./catalog.db"
    seed_sample_data: bool = True

    # Admin seed
    admin_username: str = "admin"
    admin_password: str = "admin123"

    # Demo end-user seed
    demo_user_name: str = "Demo User"
    demo_user_email: str = "user@example.com"
    demo_user_password: str = "password123"

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_issuer: str = "documentary-catalog"
    jwt_audience: str = "documentary-catalog-clients"
    admin_token_expires_minutes: int = 60 * 12
    user_token_expires_minutes: int = 60 * 24 * 7

    # Comments
    comment_default_status: Literal["approved", "pending"] = "approved"

    # Uploads
    upload_dir: str = "uploads"
    upload_max_bytes: int = 50 * 1024 * 1024
    upload_allowed_image_types: List[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]
    upload_allowed_video_types: List[str] = ["video/mp4", "video/webm", "video/ogg"]
    upload_allowed_document_types: List[str] = ["application/pdf"]

    @computed_field
    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
