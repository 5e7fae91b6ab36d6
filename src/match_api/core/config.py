from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    env: str = Field(default="dev", validation_alias="ENV")
    api_title: str = Field(default="Match API", validation_alias="API_TITLE")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=9999, validation_alias="PORT")
    static_dir: str = Field(default="assets/api-docs", validation_alias="STATIC_DIR")
    static_prefix: str = Field(default="/static", validation_alias="STATIC_PREFIX")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
    cors_methods: str = Field(
        default="GET,HEAD,PUT,PATCH,POST,DELETE", validation_alias="CORS_METHODS"
    )
    match_variant: Literal["found", "not_found"] = Field(
        default="found", validation_alias="MATCH_VARIANT"
    )
    tracing_enabled: bool = Field(default=True, validation_alias="TRACING_ENABLED")
    service_name: str = Field(default="match", validation_alias="SERVICE_NAME")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    request_id_header: str = Field(default="X-Request-ID")

    @property
    def allowed_origins(self) -> list[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def allowed_methods(self) -> list[str]:
        return [method.strip().upper() for method in self.cors_methods.split(",") if method.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
