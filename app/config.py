from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    database_url: str = "sqlite:///./catalog.sqlite3"
    database_echo: bool = False

    cdn_url_prefix: str = "/cdn"
    catalog_batched_lookups: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
