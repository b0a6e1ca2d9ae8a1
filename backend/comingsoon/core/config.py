"""Application settings."""
import json
import logging
import os
from functools import lru_cache

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """App config from env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "Coming Soon"
    debug: bool = False
    # Structured logging: set LOG_JSON=1 for one-JSON-object-per-line (CloudWatch, etc.)
    log_json: bool = False
    # If set, /metrics requires the X-Metrics-Secret header to match
    metrics_secret: str | None = None

    # CORS (comma-separated allowlist; the page itself posts same-origin)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Landing page / theming
    brand: str = "CodeAssylum"
    tagline: str = "AI-powered developer tools and battle-tested boilerplates"
    owner: str = "Prince Jagaban · The Tech Monarch"
    primary_color: str = Field("#7c3aed", validation_alias=AliasChoices("PRIMARY_COLOR", "PRIMARY"))
    accent_color: str = Field("#06b6d4", validation_alias=AliasChoices("ACCENT_COLOR", "ACCENT"))
    dark_color: str = Field("#070814", validation_alias=AliasChoices("DARK_COLOR", "DARK"))
    light_color: str = Field("#f8fafc", validation_alias=AliasChoices("LIGHT_COLOR", "LIGHT"))
    launch_at: str = "2025-11-01T12:00:00Z"
    contact_email: str = "hello@codeassylum.com"
    github_url: str = "https://github.com/codeassylum"
    x_url: str = "https://x.com/codeassylum"
    linkedin_url: str = "https://www.linkedin.com/company/codeassylum"
    site_url: str = "https://codeassylum.com"

    # Signup rate limit (fixed window per client IP)
    signup_rate_window_seconds: int = 60 * 60
    signup_rate_max_per_window: int = 10
    # Bucket expiry in the store; longer than the window so a live bucket is never evicted early
    signup_rate_bucket_ttl_seconds: int = 60 * 60 * 2

    # Optional best-effort forward of each new signup (e.g. a Brevo automation webhook)
    signup_webhook_url: str | None = Field(
        None, validation_alias=AliasChoices("SIGNUP_WEBHOOK_URL", "BREVO_WEBHOOK")
    )

    # Key-value store: memory (dev, single process) or dynamodb (AWS)
    store_backend: str = "memory"  # memory | dynamodb
    dynamodb_table: str | None = None
    aws_region: str = "us-east-1"

    # Secrets Manager (optional; overlay env at startup)
    aws_secrets_arn: str | None = None

    @model_validator(mode="after")
    def _check_rate_limit(self) -> "Settings":
        if self.signup_rate_window_seconds <= 0 or self.signup_rate_max_per_window < 0:
            raise ValueError("signup rate window must be positive and max_per_window non-negative")
        if self.signup_rate_bucket_ttl_seconds <= self.signup_rate_window_seconds:
            raise ValueError("signup_rate_bucket_ttl_seconds must exceed signup_rate_window_seconds")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


def _secrets_client():
    import boto3
    return boto3.client("secretsmanager")


def apply_secrets_overlay() -> bool:
    """Copy string values from the AWS Secrets Manager secret named by aws_secrets_arn into os.environ.

    Runs before the cached settings are first used; clears the cache so the overlay takes effect.
    Never logs secret content. Returns True if the secret was applied.
    """
    arn = Settings().aws_secrets_arn
    if not arn:
        return False
    try:
        client = _secrets_client()
        resp = client.get_secret_value(SecretId=arn)
        data = json.loads(resp["SecretString"]) if resp.get("SecretString") else {}
    except Exception:
        logger.exception("Failed to load AWS Secrets Manager secret")
        return False
    for key, value in (data or {}).items():
        if isinstance(value, str):
            os.environ[key] = value
    get_settings.cache_clear()
    return True
