"""Database Session Manager — failure mapping and rollback behaviour."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from villa_api.core.errors import DatabaseError, ResourceNotFoundError
from villa_api.infrastructure.database import DatabaseSessionManager, as_database_error


@pytest.mark.parametrize(
    "exc, message",
    [
        (IntegrityError("INSERT", {}, Exception("dup")), "Integrity constraint violated"),
        (OperationalError("SELECT", {}, Exception("gone")), "Connection or operational error"),
        (SQLAlchemyError("other"), "Database operation failed"),
    ],
)
def test_as_database_error_messages(exc, message):
    err = as_database_error(exc, "commit")
    assert isinstance(err, DatabaseError)
    assert err.message == message
    assert err.http_status == 503


async def test_session_maps_sqlalchemy_failures():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        with pytest.raises(DatabaseError):
            async with manager.session() as db:
                await db.execute(text("SELECT * FROM no_such_table"))
    finally:
        await manager.dispose()


async def test_session_lets_domain_errors_through():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        with pytest.raises(ResourceNotFoundError):
            async with manager.session():
                raise ResourceNotFoundError("VillaNumber", "3")
    finally:
        await manager.dispose()
