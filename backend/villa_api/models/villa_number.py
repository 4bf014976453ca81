"""Villa Number ORM — persists one numbered lodging unit keyed by its natural number.

Invariants:
    - villa_no is the primary key and is supplied by the caller (never generated by storage)
    - villa_no is immutable once created; updates replace special_details only

Design Decisions:
    - autoincrement=False: the database must never assign a villa number
    - Audit timestamps come from TimestampMixin and are set by the repository:
      same values on SQLite and PostgreSQL
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from villa_api.db.base import Base, TimestampMixin


class VillaNumber(TimestampMixin, Base):
    """A numbered villa unit."""
    __tablename__ = "villa_numbers"

    villa_no: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    special_details: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"VillaNumber(villa_no={self.villa_no!r})"
