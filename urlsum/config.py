"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class RedditSettings(BaseModel):
    """Reddit public JSON API configuration."""

    base_url: str = "https://www.reddit.com"

    # Reddit blocks obvious bot agents on the anonymous endpoints
    user_agent: str = DESKTOP_USER_AGENT
    timeout: float = 30.0

    # Largest single page of comments Reddit will return for a post
    listing_limit: int = 1000

    # morechildren accepts at most 100 ids per request
    chunk_size: int = Field(default=100, ge=1, le=100)
    morechildren_depth: int = 10
    morechildren_sort: str = "confidence"

    # Shared across every extraction using the same client
    max_concurrent_requests: int = Field(default=3, ge=1)

    # Per extraction limits
    max_more_requests: int = Field(default=50, ge=0)
    max_retry_count: int = Field(default=5, ge=0)
    backoff_factor: float = 2.0
    max_consecutive_parse_failures: int = Field(default=5, ge=1)

    # Pacing (seconds)
    rate_limit_retry_delay: float = 1.0
    chunk_delay: float = 0.5


class APISettings(BaseModel):
    """HTTP interface configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Values come from environment variables (or a local .env file). Nested
    settings use a double underscore:

        REDDIT__MAX_MORE_REQUESTS=20
        REDDIT__USER_AGENT="my-agent/1.0"
        API__PORT=9000
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows REDDIT__TIMEOUT syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False
    version: str = "0.1.0"

    reddit: RedditSettings = RedditSettings()
    api: APISettings = APISettings()
    observability: ObservabilitySettings = ObservabilitySettings()
