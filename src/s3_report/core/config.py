"""Configuration management for s3-report."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "s3-report"
    max_workers: int = 10
    page_size: int = 1000

    model_config = {
        "env_prefix": "S3_REPORT_",
        "case_sensitive": False,
    }


settings = Settings()
