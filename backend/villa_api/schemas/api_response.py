"""API Response Envelope — uniform success/error wrapper returned by every resource operation.

Invariants:
    - One APIResponse per invocation; never stored on a shared object
    - error_messages is empty while is_success is True
    - status_code is the semantic status; it can differ from the transport status
    - Serialized with camelCase aliases (isSuccess, statusCode, result, errorMessages)

Design Decisions:
    - Mutable model with succeed()/fail(): handlers set fields incrementally and the
      state at return time is what gets serialized
"""

from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIResponse(BaseModel):
    """Uniform response envelope."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_success: bool = True
    status_code: int = int(HTTPStatus.OK)
    result: Any = None
    error_messages: list[str] = Field(default_factory=list)

    def succeed(self, status_code: int = HTTPStatus.OK, result: Any = None) -> "APIResponse":
        self.is_success = True
        self.status_code = int(status_code)
        self.result = result
        self.error_messages = []
        return self

    def fail(self, status_code: int, *messages: str) -> "APIResponse":
        """Mark failed. Keeps whatever result was already set."""
        self.is_success = False
        self.status_code = int(status_code)
        self.error_messages.extend(messages)
        return self

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
