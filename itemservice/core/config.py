"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
import re

DEFAULT_LOCALE = "en"
DEFAULT_VALIDATOR_MODE = "auto"
DEFAULT_SESSION_IDLE_TIMEOUT_SECONDS = 1800.0
DEFAULT_REPOSITORY_BACKEND = "memory"
DEFAULT_DATABASE_URL = "sqlite:///./itemservice.db"

VALIDATOR_MODES = frozenset({"auto", "manual"})
REPOSITORY_BACKENDS = frozenset({"memory", "sql"})

_URL_PASSWORD = re.compile(r"(?P<prefix>://[^:/@]+:)[^@]*(?P<suffix>@)")


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    return float(raw)


def _get_choice_env(name: str, default: str, choices: frozenset[str]) -> str:
    raw = os.getenv(name, default).strip().lower()
    if raw not in choices:
        raise ValueError(f"{name} must be one of {sorted(choices)}, got {raw!r}")
    return raw


def redact_url(url: str) -> str:
    """Return a database URL with any embedded password hidden."""
    return _URL_PASSWORD.sub(r"\g<prefix><redacted>\g<suffix>", url)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the item service."""

    default_locale: str
    validator_mode: str
    session_idle_timeout_seconds: float
    repository_backend: str
    database_url: str

    def safe_for_logging(self) -> dict[str, str | float]:
        """Return settings safe for logs."""
        return {
            "default_locale": self.default_locale,
            "validator_mode": self.validator_mode,
            "session_idle_timeout_seconds": self.session_idle_timeout_seconds,
            "repository_backend": self.repository_backend,
            "database_url": redact_url(self.database_url),
        }


def load_settings() -> Settings:
    """Build settings from the current environment without caching."""
    timeout = _get_float_env(
        "ITEMSERVICE_SESSION_IDLE_TIMEOUT_SECONDS",
        DEFAULT_SESSION_IDLE_TIMEOUT_SECONDS,
    )
    if timeout <= 0:
        raise ValueError("ITEMSERVICE_SESSION_IDLE_TIMEOUT_SECONDS must be positive")

    return Settings(
        default_locale=os.getenv("ITEMSERVICE_DEFAULT_LOCALE", DEFAULT_LOCALE).strip() or DEFAULT_LOCALE,
        validator_mode=_get_choice_env("ITEMSERVICE_VALIDATOR_MODE", DEFAULT_VALIDATOR_MODE, VALIDATOR_MODES),
        session_idle_timeout_seconds=timeout,
        repository_backend=_get_choice_env(
            "ITEMSERVICE_REPOSITORY_BACKEND",
            DEFAULT_REPOSITORY_BACKEND,
            REPOSITORY_BACKENDS,
        ),
        database_url=os.getenv("ITEMSERVICE_DATABASE_URL", DEFAULT_DATABASE_URL),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment once per process."""
    return load_settings()
