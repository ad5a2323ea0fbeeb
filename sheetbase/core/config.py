from typing import List, Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    session_secret: str
    session_algorithm: str = "HS256"
    session_cookie_name: str = "sid"
    session_max_age: int = 14 * 24 * 60 * 60

    # NODE_ENV оставлен для совместимости со старым окружением
    environment: str = Field(
        "development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )
    host: str = "0.0.0.0"
    port: int = 5000

    db_connect_timeout: float = 5.0
    db_echo: bool = False
    log_level: str = "INFO"
    cors_origins: str = "*"

    active_sheet_scope: Literal["process", "session"] = "process"
    require_login: bool = False
    default_sheet_name: str = "defaultCollection"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cookie_secure(self) -> bool:
        """Secure-флаг cookie включается только в продакшене"""
        return self.is_production

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def async_database_url(self) -> str:
        """URL базы данных с асинхронным драйвером"""
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url


settings = Settings()
