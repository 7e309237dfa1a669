"""pinifast — Configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8088
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # Security
    SECRET_KEY: str = "your-super-secret-jwt-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 12

    # Storage
    DATABASE_PATH: str = "./persistent/database.sqlite"
    UPLOAD_DIR: str = "./persistent/uploads"
    MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_FILE_TYPES: str = "jpg,jpeg,png,gif,pdf,doc,docx,txt"

    # Roles
    DEFAULT_ROLE: str = "user"
    ROLE_ASSIGNMENT_AUDIT: bool = True

    # Admin bootstrap
    ENABLE_ADMIN_BOOTSTRAP: bool = False
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_FIRST_NAME: str = "System"
    ADMIN_LAST_NAME: str = "Administrator"
    ADMIN_PASSWORD: str = "change-me-now"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def allowed_file_types(self) -> list[str]:
        return [ext.strip().lower() for ext in self.ALLOWED_FILE_TYPES.split(",") if ext.strip()]

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.DATABASE_PATH}"

    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


def validate_settings(settings: Settings) -> None:
    """Fail fast on configuration that cannot possibly work."""
    for key in ("HOST", "SECRET_KEY", "DATABASE_PATH", "UPLOAD_DIR"):
        if not getattr(settings, key):
            raise ValueError(f"Missing required configuration: {key}")

    if not 1 <= settings.PORT <= 65535:
        raise ValueError("Port must be between 1 and 65535")

    if settings.MAX_FILE_SIZE < 1:
        raise ValueError("Max file size must be greater than 0")


@lru_cache
def get_settings() -> Settings:
    return Settings()
