"""
Environment-driven process settings.

Every value has a default suitable for local/containerized use; a blank
variable counts as unset.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

DEFAULT_SSL_MODE = "disable"


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def db_host() -> str:
    return _env_str("DB_HOST", "container_postgresql")


def db_user() -> str:
    return _env_str("DB_USER", "testuser")


def db_password() -> str:
    return _env_str("DB_PASSWORD", "testpass")


def db_name() -> str:
    return _env_str("DB_NAME", "testdb")


def db_port() -> int:
    return _env_int("DB_PORT", 5432)


def http_port() -> int:
    return _env_int("PORT", 3000)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def _split_sslmode(url: str) -> tuple[str, str | None]:
    """
    Remove `sslmode` from a DSN query string, returning it separately.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url, None

    sslmode = None
    params = []
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key == "sslmode":
            sslmode = value
            continue
        params.append((key, value))
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment)), sslmode


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return _split_sslmode(url)[0]

    return "postgresql://{user}:{password}@{host}:{port}/{name}".format(
        user=quote(db_user(), safe=""),
        password=quote(db_password(), safe=""),
        host=db_host(),
        port=db_port(),
        name=quote(db_name(), safe=""),
    )


def ssl_mode() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        from_url = _split_sslmode(url)[1]
        if from_url:
            return from_url
    return _env_str("DB_SSLMODE", DEFAULT_SSL_MODE)
