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

from reelscout.infrastructure.http.fetcher import DEFAULT_USER_AGENT
from reelscout.infrastructure.resolution.signals import DEFAULT_DIRECT_LINK_SIGNALS

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (site/http/resolver/home_feed/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="reelscout", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Content site (YAML section: site.*)
    site_base_url: str = Field(
        default="https://www.filmyzilla13.com",
        validation_alias=AliasChoices(
            "site_base_url",
            AliasPath("site", "base_url"),
        ),
        description="Origin of the content site; relative links resolve here.",
    )
    site_brand: str = Field(
        default="filmyzilla",
        validation_alias=AliasChoices(
            "site_brand",
            AliasPath("site", "brand"),
        ),
        description="Brand token stripped from scraped page titles.",
    )

    # HTTP fetcher (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Per-request timeout in seconds.",
    )
    http_max_redirects: int = Field(
        default=10,
        validation_alias=AliasChoices(
            "http_max_redirects",
            AliasPath("http", "max_redirects"),
        ),
        description="Redirect hops followed per request.",
    )
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="Browser User-Agent for outgoing requests.",
    )

    # Link resolution (YAML section: resolver.*)
    resolver_timeout_seconds: float = Field(
        default=20.0,
        validation_alias=AliasChoices(
            "resolver_timeout_seconds",
            AliasPath("resolver", "timeout_seconds"),
        ),
        description="Hard ceiling for one resolution; cancelled afterwards.",
    )
    resolver_warning_seconds: float = Field(
        default=8.0,
        validation_alias=AliasChoices(
            "resolver_warning_seconds",
            AliasPath("resolver", "warning_seconds"),
        ),
        description="Elapsed time after which a slow resolution is reported.",
    )
    direct_link_signals: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_DIRECT_LINK_SIGNALS),
        validation_alias=AliasChoices(
            "direct_link_signals",
            AliasPath("resolver", "direct_link_signals"),
        ),
        description="URL substrings that mark a directly playable link.",
    )

    # Home feed fan-out (YAML section: home_feed.*)
    home_feed_category_timeout_seconds: float = Field(
        default=5.0,
        validation_alias=AliasChoices(
            "home_feed_category_timeout_seconds",
            AliasPath("home_feed", "category_timeout_seconds"),
        ),
        description="Timeout per category page fetched for the home feed.",
    )
    home_feed_max_concurrent: int = Field(
        default=10,
        validation_alias=AliasChoices(
            "home_feed_max_concurrent",
            AliasPath("home_feed", "max_concurrent"),
        ),
        description="Max category pages fetched in parallel.",
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

    @field_validator("site_base_url")
    @classmethod
    def _validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("site_base_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator(
        "http_timeout_seconds",
        "resolver_timeout_seconds",
        "resolver_warning_seconds",
        "home_feed_category_timeout_seconds",
    )
    @classmethod
    def _validate_positive_seconds(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @field_validator("http_max_redirects")
    @classmethod
    def _validate_max_redirects(cls, v: int) -> int:
        if v < 0:
            raise ValueError("http_max_redirects must be >= 0")
        return v

    @field_validator("home_feed_max_concurrent")
    @classmethod
    def _validate_max_concurrent(cls, v: int) -> int:
        if v < 1:
            raise ValueError("home_feed_max_concurrent must be >= 1")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        if self.resolver_warning_seconds >= self.resolver_timeout_seconds:
            raise ValueError(
                "resolver_warning_seconds must be below resolver_timeout_seconds"
            )
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "site": {"base_url": self.site_base_url, "brand": self.site_brand},
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "max_redirects": self.http_max_redirects,
                "user_agent": self.http_user_agent,
            },
            "resolver": {
                "timeout_seconds": self.resolver_timeout_seconds,
                "warning_seconds": self.resolver_warning_seconds,
                "direct_link_signals": dict(self.direct_link_signals),
            },
            "home_feed": {
                "category_timeout_seconds": self.home_feed_category_timeout_seconds,
                "max_concurrent": self.home_feed_max_concurrent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read REELSCOUT_* variables, keeps the
    values that were set and merges them over YAML/defaults.

    Supported env var examples (flat, explicit):
    - REELSCOUT_SITE_BASE_URL
    - REELSCOUT_HTTP_TIMEOUT_SECONDS
    - REELSCOUT_RESOLVER_TIMEOUT_SECONDS
    - REELSCOUT_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="REELSCOUT_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    site_base_url: Optional[str] = None
    site_brand: Optional[str] = None

    http_timeout_seconds: Optional[float] = None
    http_max_redirects: Optional[int] = None
    http_user_agent: Optional[str] = None

    resolver_timeout_seconds: Optional[float] = None
    resolver_warning_seconds: Optional[float] = None

    home_feed_category_timeout_seconds: Optional[float] = None
    home_feed_max_concurrent: Optional[int] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
