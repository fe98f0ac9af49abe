"""
db/config.py

Environment-driven database settings: `.env` loading and URL resolution.
"""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILENAMES = (".env", ".env.local")
DATABASE_URL_ENV_VARS = ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL")

_CLOUD_LIKE_ENVIRONMENTS = frozenset({"prod", "production", "staging", "cloud"})
_PSYCOPG_SCHEME = "postgresql+psycopg://"
_PLAIN_SCHEMES = ("postgres://", "postgresql://")


class DatabaseConfigError(RuntimeError):
    """
    Raised when no usable database URL can be resolved.
    """


def parse_env_line(raw_line: str) -> tuple[str, str] | None:
    """
    Parse one `.env` line into (key, value).

    Blank lines, comments and lines without ``=`` yield None. An
    ``export`` prefix and one layer of matching quotes are removed.
    """

    line = raw_line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None

    key, value = line.split("=", 1)
    key = key.removeprefix("export ").strip()
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        value = value[1:-1]
    if not key:
        return None
    return key, value


def load_env_files(project_root: Path = PROJECT_ROOT) -> None:
    """
    Export `.env` then `.env.local` into the process environment.

    Variables already set, by the process or an earlier file, win.
    """

    for filename in ENV_FILENAMES:
        env_path = project_root / filename
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = parse_env_line(raw_line)
            if parsed is not None:
                os.environ.setdefault(*parsed)


def normalize_postgres_url(url: str) -> str:
    """
    Rewrite postgres URLs to the psycopg (v3) driver form SQLAlchemy expects.
    """

    for scheme in _PLAIN_SCHEMES:
        if url.startswith(scheme):
            return _PSYCOPG_SCHEME + url[len(scheme) :]
    return url


def _env(name: str) -> str:
    return os.getenv(name, "").strip()


def has_database_url() -> bool:
    return any(_env(name) for name in DATABASE_URL_ENV_VARS)


def resolve_database_url() -> str:
    """
    Resolve the database URL.

    Priority:
    1) DATABASE_URL
    2) CLOUD_DATABASE_URL when ENVIRONMENT is cloud-like
    3) LOCAL_DATABASE_URL
    """

    load_env_files()

    is_cloud = _env("ENVIRONMENT").lower() in _CLOUD_LIKE_ENVIRONMENTS
    candidates = (
        _env("DATABASE_URL"),
        _env("CLOUD_DATABASE_URL") if is_cloud else "",
        _env("LOCAL_DATABASE_URL"),
    )
    for url in candidates:
        if url:
            return normalize_postgres_url(url)

    raise DatabaseConfigError(
        "No database URL configured. Set DATABASE_URL, or configure "
        "LOCAL_DATABASE_URL / CLOUD_DATABASE_URL."
    )
