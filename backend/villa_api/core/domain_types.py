"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - VillaNo wraps a positive int; never use a bare int key in handler logic
    - Path ids that are not valid keys parse to None, never to a magic 0
    - All valid roles and API versions encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

VillaNo = NewType("VillaNo", int)


def parse_villa_no(raw: int | None) -> VillaNo | None:
    """Parse a path id into a villa number. Anything below 1 is treated as absent."""
    if raw is None or raw < 1:
        return None
    return VillaNo(raw)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Roles carried in identity-token claims."""
    ADMIN = "admin"
    CUSTOMER = "customer"


class ApiVersion(str, Enum):
    """Coexisting major versions of the public API."""
    V1 = "1.0"
    V2 = "2.0"

    @property
    def path_segment(self) -> str:
        """URL segment, e.g. 'v1' for 1.0."""
        return "v" + self.value.split(".")[0]
