"""Settings — driver normalization, role validation, and engine options per backend."""

import pytest
from pydantic import ValidationError

from villa_api.config import Settings


def test_plain_postgres_url_gets_async_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/villa")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/villa"
    assert not settings.is_sqlite


def test_sqlite_engine_options_skip_pool_sizing():
    options = Settings(database_url="sqlite+aiosqlite:///:memory:").engine_options()
    assert options["pool_pre_ping"] is True
    assert "pool_size" not in options


def test_server_engine_options_include_pool_sizing():
    options = Settings(
        database_url="postgresql+asyncpg://u:p@h/db", database_pool_size=5,
    ).engine_options()
    assert options["pool_size"] == 5
    assert options["max_overflow"] == 10


def test_blank_privileged_role_rejected():
    with pytest.raises(ValidationError):
        Settings(privileged_role="   ")


def test_unknown_log_format_rejected():
    with pytest.raises(ValidationError):
        Settings(log_format="xml")
