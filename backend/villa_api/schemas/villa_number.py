"""Villa Number Schemas — Pydantic DTOs for the villa-number resource boundary.

Invariants:
    - villa_no is a positive int, accepted as "villaNo", "number" or "villa_no"
    - VillaNumberView never exposes storage timestamps
    - VillaNumberRecord is the full entity projection (create/update results)

Design Decisions:
    - from_attributes=True: ORM rows map straight into views (no hand-written field copying)
    - Create and update share a base: same fields, the key rule lives in the handler
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class VillaNumberWrite(_CamelModel):
    """Fields a client may send for a villa number."""
    villa_no: int = Field(
        gt=0,
        validation_alias=AliasChoices("villaNo", "number", "villa_no"),
        serialization_alias="villaNo",
    )
    special_details: str | None = Field(None, max_length=2000)

    @field_validator("special_details")
    @classmethod
    def strip_details(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v


class VillaNumberCreate(VillaNumberWrite):
    """Villa number creation request."""


class VillaNumberUpdate(VillaNumberWrite):
    """Full-replace update request; villa_no must match the path id."""


class VillaNumberView(_CamelModel):
    """Public projection returned by list and get."""
    villa_no: int
    special_details: str | None = None


class VillaNumberRecord(VillaNumberView):
    """Full entity returned by create and update."""
    created_at: datetime | None = None
    updated_at: datetime | None = None
