"""Auth Schemas — the authenticated principal as resolved from identity-token claims.

Invariants:
    - roles is always a list (single-role "role" claims are normalized)
    - CurrentUser is built per request and never cached across requests
"""

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """Claims the service reads from an access token."""
    sub: str
    role: str | list[str] | None = None
    roles: list[str] = Field(default_factory=list)
    exp: int | None = None
    iat: int | None = None


class CurrentUser(BaseModel):
    """Authenticated principal."""
    username: str
    roles: list[str] = Field(default_factory=list)

    def has_role(self, role: str) -> bool:
        return role in self.roles
