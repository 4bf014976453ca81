"""Villa Number Repository — SQLAlchemy storage for villa numbers."""

from villa_api.models.villa_number import VillaNumber
from villa_api.repositories.base import SqlAlchemyRepository


class SqlAlchemyVillaNumberRepository(SqlAlchemyRepository[VillaNumber]):
    """Villa numbers keyed by villa_no."""
    model = VillaNumber
    resource_name = "VillaNumber"
