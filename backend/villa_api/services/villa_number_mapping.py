"""Villa Number Mapping — DTO ↔ entity projection.

Invariants:
    - to_entity() copies client fields only; timestamps stay unset until the repository persists
    - Views never carry storage timestamps; records carry the full entity

Design Decisions:
    - Pydantic from_attributes over a mapping library: schemas already declare the projection
    - Payloads leave the service as camelCase dicts so the envelope serializes them verbatim
"""

from collections.abc import Iterable

from pydantic import BaseModel

from villa_api.core.repository_protocols import VillaNumberLike
from villa_api.models.villa_number import VillaNumber
from villa_api.schemas.villa_number import (
    VillaNumberRecord, VillaNumberView, VillaNumberWrite,
)


def to_entity(dto: VillaNumberWrite) -> VillaNumber:
    return VillaNumber(
        villa_no=dto.villa_no, special_details=dto.special_details,
    )


def to_view(entity: VillaNumberLike) -> dict:
    return as_payload(VillaNumberView.model_validate(entity))


def to_views(entities: Iterable[VillaNumberLike]) -> list[dict]:
    return [to_view(e) for e in entities]


def to_record(entity: VillaNumberLike) -> dict:
    return as_payload(VillaNumberRecord.model_validate(entity))


def as_payload(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)
