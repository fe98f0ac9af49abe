"""
tests/test_config.py

Environment-driven settings and database URL resolution.
"""

from __future__ import annotations

import os

import pytest

from app.config import (
    DEFAULT_FROM_EMAIL,
    get_csv_import_settings,
    get_onboarding_settings,
    get_phone_settings,
)
from db.config import (
    DatabaseConfigError,
    has_database_url,
    load_env_files,
    normalize_postgres_url,
    parse_env_line,
    resolve_database_url,
)
from db.session import EngineSettings, create_db_engine, load_engine_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    for getter in (get_csv_import_settings, get_phone_settings, get_onboarding_settings):
        getter.cache_clear()
    yield
    for getter in (get_csv_import_settings, get_phone_settings, get_onboarding_settings):
        getter.cache_clear()


class TestCSVImportSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CSV_IMPORT_MAX_VALIDATION_ERRORS", raising=False)
        monkeypatch.delenv("CSV_IMPORT_LOG_VALIDATION_ERRORS", raising=False)

        settings = get_csv_import_settings()

        assert settings.max_validation_errors == 500
        assert settings.log_validation_errors is True

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSV_IMPORT_MAX_VALIDATION_ERRORS", "25")
        monkeypatch.setenv("CSV_IMPORT_LOG_VALIDATION_ERRORS", "off")

        settings = get_csv_import_settings()

        assert settings.max_validation_errors == 25
        assert settings.log_validation_errors is False

    @pytest.mark.parametrize(("raw", "expected"), [("abc", 500), ("0", 1), ("-3", 1)])
    def test_bad_limits_fall_back(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
        monkeypatch.setenv("CSV_IMPORT_MAX_VALIDATION_ERRORS", raw)

        assert get_csv_import_settings().max_validation_errors == expected


class TestPhoneSettings:
    def test_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DEFAULT_PHONE_COUNTRY_CODE", raising=False)

        assert get_phone_settings().default_country_code is None

    def test_blank_is_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_PHONE_COUNTRY_CODE", "   ")

        assert get_phone_settings().default_country_code is None

    def test_set(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_PHONE_COUNTRY_CODE", " +234 ")

        assert get_phone_settings().default_country_code == "+234"


class TestOnboardingSettings:
    def test_default_sender(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DEFAULT_FROM_EMAIL", raising=False)

        assert get_onboarding_settings().default_from_email == DEFAULT_FROM_EMAIL

    def test_sender_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_FROM_EMAIL", "hello@acme.io")

        assert get_onboarding_settings().default_from_email == "hello@acme.io"


class TestDatabaseURL:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("postgres://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
            ("postgresql://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
            ("postgresql+psycopg://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_postgres_url(raw) == expected

    def test_direct_url_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgres://direct/db")
        monkeypatch.setenv("LOCAL_DATABASE_URL", "postgres://local/db")

        assert resolve_database_url() == "postgresql+psycopg://direct/db"

    def test_cloud_url_needs_cloud_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("CLOUD_DATABASE_URL", "postgres://cloud/db")
        monkeypatch.setenv("LOCAL_DATABASE_URL", "postgres://local/db")

        monkeypatch.setenv("ENVIRONMENT", "local")
        assert resolve_database_url() == "postgresql+psycopg://local/db"

        monkeypatch.setenv("ENVIRONMENT", "production")
        assert resolve_database_url() == "postgresql+psycopg://cloud/db"

    def test_missing_url_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL"):
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(RuntimeError, match="No database URL configured"):
            resolve_database_url()

    def test_missing_url_is_a_config_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL"):
            monkeypatch.delenv(name, raising=False)

        assert has_database_url() is False
        with pytest.raises(DatabaseConfigError):
            resolve_database_url()


class TestEnvFiles:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("DATABASE_URL=postgres://h/db", ("DATABASE_URL", "postgres://h/db")),
            ("export LOG_LEVEL=DEBUG", ("LOG_LEVEL", "DEBUG")),
            ('  DEFAULT_FROM_EMAIL = "hi@acme.io"  ', ("DEFAULT_FROM_EMAIL", "hi@acme.io")),
            ("TOKEN='a=b'", ("TOKEN", "a=b")),
            ('NAME="unbalanced', ("NAME", '"unbalanced')),
            ("EMPTY=", ("EMPTY", "")),
            ("# DATABASE_URL=postgres://h/db", None),
            ("", None),
            ("not a pair", None),
            ("=value", None),
        ],
    )
    def test_parse_env_line(self, line: str, expected: tuple[str, str] | None) -> None:
        assert parse_env_line(line) == expected

    def test_process_environment_and_earlier_files_win(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        (tmp_path / ".env").write_text("A_KEY=from-env\nB_KEY=from-env\n# C_KEY=comment\n", encoding="utf-8")
        (tmp_path / ".env.local").write_text("B_KEY=from-local\nC_KEY=from-local\n", encoding="utf-8")
        monkeypatch.setenv("A_KEY", "from-process")
        # Registered with monkeypatch so values loaded from the files are removed afterwards.
        for name in ("B_KEY", "C_KEY"):
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)

        load_env_files(tmp_path)

        assert os.environ["A_KEY"] == "from-process"
        assert os.environ["B_KEY"] == "from-env"
        assert os.environ["C_KEY"] == "from-local"


class TestEngineSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("SQL_ECHO", "DB_POOL_SIZE", "DB_MAX_OVERFLOW", "DB_POOL_RECYCLE"):
            monkeypatch.delenv(name, raising=False)

        assert load_engine_settings() == EngineSettings()

    def test_overrides_and_bad_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SQL_ECHO", "yes")
        monkeypatch.setenv("DB_POOL_SIZE", "0")
        monkeypatch.setenv("DB_MAX_OVERFLOW", "lots")
        monkeypatch.setenv("DB_POOL_RECYCLE", "60")

        assert load_engine_settings() == EngineSettings(
            echo=True,
            pool_size=1,
            max_overflow=10,
            pool_recycle_seconds=60,
        )

    def test_non_postgres_url_is_rejected(self) -> None:
        with pytest.raises(DatabaseConfigError, match="Only PostgreSQL"):
            create_db_engine("sqlite:///people.db", EngineSettings())
