"""Concurrent create — two creates of the same villa number race past the duplicate check.

Invariants:
    - Both pre-checks are forced to see "absent" before either insert runs
    - Storage uniqueness is the backstop: exactly one row survives
    - The loser ends with a failed envelope (storage conflict), never a second row

Design Decisions:
    - File-backed SQLite with NullPool: each session gets its own connection, so the
      two inserts genuinely compete for the database lock
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from villa_api.db.base import Base
from villa_api.models.villa_number import VillaNumber
from villa_api.repositories.villa_number import SqlAlchemyVillaNumberRepository
from villa_api.schemas.villa_number import VillaNumberCreate
from villa_api.services.handle_villa_numbers import VillaNumberHandlers


class _Rendezvous:
    """Holds each caller until `parties` callers have arrived."""

    def __init__(self, parties: int):
        self.parties = parties
        self.arrived = 0
        self.event = asyncio.Event()

    async def wait(self) -> None:
        self.arrived += 1
        if self.arrived >= self.parties:
            self.event.set()
        await self.event.wait()


class _GatedRepository(SqlAlchemyVillaNumberRepository):
    def __init__(self, db, rendezvous: _Rendezvous):
        super().__init__(db)
        self.rendezvous = rendezvous

    async def get(self, filter=None):
        entity = await super().get(filter)
        await self.rendezvous.wait()
        return entity


async def test_simultaneous_creates_persist_at_most_one_row(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'race.db'}", poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    rendezvous = _Rendezvous(parties=2)

    async def create(details: str):
        async with factory() as db:
            handlers = VillaNumberHandlers(_GatedRepository(db, rendezvous))
            return await handlers.create_villa_number(
                VillaNumberCreate(villaNo=7, specialDetails=details),
            )

    try:
        outcomes = await asyncio.gather(create("first"), create("second"))

        async with factory() as db:
            rows = (await db.execute(select(VillaNumber))).scalars().all()
    finally:
        await engine.dispose()

    assert len(rows) == 1
    assert rows[0].villa_no == 7
    successes = [o for o in outcomes if o.response.is_success]
    failures = [o for o in outcomes if not o.response.is_success]
    assert len(successes) == 1
    assert len(failures) == 1
    assert failures[0].response.error_messages
    assert failures[0].http_status == 200
    assert failures[0].response.status_code in (409, 503)
    assert rows[0].special_details == successes[0].response.result["specialDetails"]
