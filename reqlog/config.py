"""Application configuration using pydantic-settings."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from pydantic_settings import BaseSettings

from reqlog.core.filters import SkipRules, compile_pattern
from reqlog.core.logging import parse_level

PROFILES = ("short", "full")


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables (``REQLOG_*``)."""

    # App
    app_env: str = "development"

    # Request logging
    log_level: str = "debug"
    log_development: bool = False
    log_skip_methods: str = ""  # comma-separated, e.g. "OPTIONS,HEAD"
    log_skip_paths: str = "/health,/ready"
    log_skip_path_regexp: str = ""
    log_utc: bool = False
    log_profile: str = "short"  # "short" or "full"

    @property
    def log_skip_methods_list(self) -> list[str]:
        return _split(self.log_skip_methods)

    @property
    def log_skip_paths_list(self) -> list[str]:
        return _split(self.log_skip_paths)

    model_config = {
        "env_prefix": "REQLOG_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@dataclass(frozen=True)
class RequestLogConfig:
    """Immutable request-logging configuration.

    Collections are frozen and the path pattern is compiled on construction.
    An unknown ``level`` raises InvalidLevelError right away.
    """

    level: str = "debug"
    development: bool = False
    skip_methods: Iterable[str] = field(default_factory=frozenset)
    skip_paths: Iterable[str] = field(default_factory=frozenset)
    skip_path_regexp: "str | re.Pattern[str] | None" = None
    utc: bool = False
    profile: str = "short"

    def __post_init__(self):
        parse_level(self.level)
        if self.profile not in PROFILES:
            raise ValueError(f"unknown field profile: {self.profile!r}")
        object.__setattr__(self, "skip_methods", frozenset(m.upper() for m in self.skip_methods))
        object.__setattr__(self, "skip_paths", frozenset(self.skip_paths))
        object.__setattr__(self, "skip_path_regexp", compile_pattern(self.skip_path_regexp))

    @property
    def skip_rules(self) -> SkipRules:
        return SkipRules(
            methods=self.skip_methods,
            paths=self.skip_paths,
            pattern=self.skip_path_regexp,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "RequestLogConfig":
        return cls(
            level=settings.log_level,
            development=settings.log_development,
            skip_methods=settings.log_skip_methods_list,
            skip_paths=settings.log_skip_paths_list,
            skip_path_regexp=settings.log_skip_path_regexp or None,
            utc=settings.log_utc,
            profile=settings.log_profile,
        )


settings = Settings()
