from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "AI Mock Server"
    app_version: str = "1.0.0"
    environment: str = "development"
    port: int = 8101
    allowed_origins: str = "*"
    log_level: str = "INFO"

    # Period between progress events on the rl_train / rl_test streams
    tick_interval_seconds: float = 1.0
    mock_image_url_prefix: str = "/mock_image"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()] or ["*"]

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
