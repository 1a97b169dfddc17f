"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _split_csv(value: Any) -> Any:
    # ENV values arrive as "a,b,c"; YAML/CLI already pass lists.
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class SiteConfig(BaseModel):
    """One upstream API site (YAML section: sites[])."""

    key: str = Field(..., min_length=1, description="Unique source key.")
    name: str = Field(..., min_length=1, description="Display name.")
    api: str = Field(..., min_length=1, description="Base API URL.")
    detail: Optional[str] = Field(
        default=None,
        description="Detail-page base URL; enables HTML detail scraping.",
    )

    @field_validator("api", "detail")
    @classmethod
    def _validate_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"site URL must be http(s): {v!r}")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/search/logging/cache/sites).
    - Environment variables are handled by EnvOverrides(BaseSettings) so that
      precedence stays explicit (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="vodhub", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/131.0.0.0 Safari/537.36"
        ),
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether the HTTP client follows redirects.",
    )

    # Search (YAML section: search.*)
    search_timeout_seconds: float = Field(
        default=8.0,
        validation_alias=AliasChoices(
            "search_timeout_seconds",
            AliasPath("search", "timeout_seconds"),
        ),
        description="Per-request timeout for search and page fetches.",
    )
    detail_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "detail_timeout_seconds",
            AliasPath("search", "detail_timeout_seconds"),
        ),
        description="Per-request timeout for detail lookups.",
    )
    max_search_pages: int = Field(
        default=5,
        validation_alias=AliasChoices(
            "max_search_pages",
            AliasPath("search", "max_pages"),
        ),
        description="Upper bound on result pages fetched per source.",
    )
    strict_pattern_sources: list[str] = Field(
        default_factory=lambda: ["ffzy"],
        validation_alias=AliasChoices(
            "strict_pattern_sources",
            AliasPath("search", "strict_pattern_sources"),
        ),
        description="Source keys whose detail pages use the dated hex-path rule.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Response cache duration handed to the serving layer (YAML: cache.time_seconds)
    cache_time_seconds: int = Field(
        default=7200,
        validation_alias=AliasChoices(
            "cache_time_seconds",
            AliasPath("cache", "time_seconds"),
        ),
        description="Cache-Control max-age for search responses.",
    )

    # Upstream sites, in fan-out order
    sites: list[SiteConfig] = Field(default_factory=list)

    @field_validator("search_timeout_seconds", "detail_timeout_seconds")
    @classmethod
    def _validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @field_validator("max_search_pages")
    @classmethod
    def _validate_max_pages(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_search_pages must be >= 1")
        return v

    @field_validator("cache_time_seconds")
    @classmethod
    def _validate_cache_time(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_time_seconds must be >= 0")
        return v

    @field_validator("strict_pattern_sources", mode="before")
    @classmethod
    def _validate_strict_sources(cls, v: Any) -> Any:
        return _split_csv(v)

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"

        keys = [site.key for site in self.sites]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"duplicate site keys: {', '.join(duplicates)}")
        return self


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read VODHUB_* variables, converts the
    set values to a dict, merges it over YAML/defaults, then validates AppConfig.

    Supported env var examples (flat, explicit):
    - VODHUB_MAX_SEARCH_PAGES
    - VODHUB_SEARCH_TIMEOUT_SECONDS
    - VODHUB_STRICT_PATTERN_SOURCES=ffzy,other
    - VODHUB_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="VODHUB_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_user_agent: Optional[str] = None
    http_follow_redirects: Optional[bool] = None

    search_timeout_seconds: Optional[float] = None
    detail_timeout_seconds: Optional[float] = None
    max_search_pages: Optional[int] = None
    strict_pattern_sources: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    cache_time_seconds: Optional[int] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
