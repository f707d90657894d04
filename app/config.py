"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class AuthSettings:
    """
    Hosted identity provider settings and the role gate for bulk uploads.
    """

    url: str | None = None
    anon_key: str | None = None
    timeout_seconds: float = 10.0
    verifier_role: str = "verifier"


@dataclass(frozen=True)
class UploadSettings:
    """
    Runtime settings for bulk CSV uploads.
    """

    max_reported_errors: int = 1000
    log_row_errors: bool = True


@dataclass(frozen=True)
class DirectorySettings:
    """
    Public directory lookup settings.
    """

    public_url: str = "http://localhost:3000"
    page_size: int = 20
    max_page_size: int = 100
    similarity_threshold: int = 70
    similarity_candidate_limit: int = 5000


@lru_cache(maxsize=1)
def get_auth_settings() -> AuthSettings:
    """
    Return cached identity provider settings from environment variables.
    """

    return AuthSettings(
        url=_get_optional_str_env("AUTH_URL"),
        anon_key=_get_optional_str_env("AUTH_ANON_KEY"),
        timeout_seconds=max(1.0, _get_float_env("AUTH_TIMEOUT_SECONDS", 10.0)),
        verifier_role=_get_str_env("VERIFIER_ROLE", "verifier"),
    )


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload settings from environment variables.
    """

    return UploadSettings(
        max_reported_errors=max(1, _get_int_env("UPLOAD_MAX_REPORTED_ERRORS", 1000)),
        log_row_errors=_get_bool_env("UPLOAD_LOG_ROW_ERRORS", True),
    )


@lru_cache(maxsize=1)
def get_directory_settings() -> DirectorySettings:
    """
    Return cached directory settings from environment variables.
    """

    page_size = max(1, _get_int_env("DIRECTORY_PAGE_SIZE", 20))
    return DirectorySettings(
        public_url=_get_str_env("APP_PUBLIC_URL", "http://localhost:3000").rstrip("/"),
        page_size=page_size,
        max_page_size=max(page_size, _get_int_env("DIRECTORY_MAX_PAGE_SIZE", 100)),
        similarity_threshold=min(100, max(0, _get_int_env("SIMILARITY_THRESHOLD", 70))),
        similarity_candidate_limit=max(1, _get_int_env("SIMILARITY_CANDIDATE_LIMIT", 5000)),
    )
