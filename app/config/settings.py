from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    store_backend: str = "flatfile"

    flatfile_api_base_url: str = "https://platform.flatfile.com/api"
    flatfile_api_key: str = ""
    flatfile_timeout_seconds: int = 30

    fetch_max_attempts: int = 5
    fetch_retry_delay_seconds: float = 2.0
    fetch_backoff: str = "fixed"
    fetch_jitter_seconds: float = 0.0
    fetch_max_delay_seconds: float = 30.0
