"""Villa Number Handlers — validate, call the repository, map, and build the envelope.

Invariants:
    - Every call builds and returns its own APIResponse; handlers keep no per-request state
    - Rejections (400/404) happen before the repository is touched where the check allows it,
      and carry the same status on the transport and in the envelope
    - Any exception past that point is caught here, logged, stringified into
      errorMessages, and returned with transport 200; clients must read isSuccess
    - A VillaApiError keeps its own status in the envelope (unknown key on update → 404,
      storage conflict → 409); any other exception is envelope 500
    - Duplicate villa number on create is a soft conflict: envelope 400, transport 200
      (409 when strict_conflict_status is on); nothing is persisted
    - Update performs no existence pre-check; an unknown key surfaces through the
      repository's ResourceNotFoundError at the boundary

Design Decisions:
    - Outcome = (transport status, envelope): routes stay thin and never inspect the envelope
    - Duplicate pre-check is not atomic with the insert; the storage key constraint is the
      backstop (ConflictError from the repository lands in the envelope like any failure)
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from http import HTTPStatus

from villa_api.core.domain_types import VillaNo
from villa_api.core.errors import VillaApiError
from villa_api.core.repository_protocols import VillaNumberRepository
from villa_api.models.villa_number import VillaNumber
from villa_api.schemas.api_response import APIResponse
from villa_api.schemas.villa_number import VillaNumberCreate, VillaNumberUpdate
from villa_api.services.villa_number_mapping import (
    to_entity, to_record, to_view, to_views,
)

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "VillaNumber already exists"


@dataclass
class HandlerOutcome:
    """Transport status plus the envelope to serialize."""
    http_status: int
    response: APIResponse


class VillaNumberHandlers:
    """List / get / create / update / delete for villa numbers."""

    def __init__(
        self, repository: VillaNumberRepository, strict_conflict_status: bool = False,
    ):
        self.repository = repository
        self.strict_conflict_status = strict_conflict_status

    async def list_villa_numbers(self) -> HandlerOutcome:
        async def action(response: APIResponse) -> HandlerOutcome:
            entities = await self.repository.get_all()
            response.succeed(HTTPStatus.OK, to_views(entities))
            return HandlerOutcome(HTTPStatus.OK, response)

        return await self._guarded("list", None, action)

    async def get_villa_number(self, villa_no: VillaNo | None) -> HandlerOutcome:
        async def action(response: APIResponse) -> HandlerOutcome:
            if villa_no is None:
                return _reject(response, HTTPStatus.BAD_REQUEST, "Villa number id must be a positive integer", "get")
            entity = await self.repository.get(VillaNumber.villa_no == villa_no)
            if entity is None:
                return _reject(response, HTTPStatus.NOT_FOUND, f"VillaNumber '{villa_no}' not found", "get", villa_no)
            response.succeed(HTTPStatus.OK, to_view(entity))
            return HandlerOutcome(HTTPStatus.OK, response)

        return await self._guarded("get", villa_no, action)

    async def create_villa_number(self, dto: VillaNumberCreate | None) -> HandlerOutcome:
        async def action(response: APIResponse) -> HandlerOutcome:
            if dto is None:
                return _reject(response, HTTPStatus.BAD_REQUEST, "Request body is required", "create")
            existing = await self.repository.get(VillaNumber.villa_no == dto.villa_no)
            if existing is not None:
                transport = HTTPStatus.CONFLICT if self.strict_conflict_status else HTTPStatus.OK
                logger.warning(
                    f"VillaNumber {dto.villa_no} already exists",
                    extra={"operation": "create", "villa_no": dto.villa_no, "error_code": "CONFLICT"},
                )
                response.fail(HTTPStatus.BAD_REQUEST, DUPLICATE_MESSAGE)
                return HandlerOutcome(transport, response)
            entity = await self.repository.create(to_entity(dto))
            logger.info(
                f"VillaNumber {entity.villa_no} created",
                extra={"operation": "create", "villa_no": entity.villa_no},
            )
            response.succeed(HTTPStatus.OK, to_record(entity))
            return HandlerOutcome(HTTPStatus.OK, response)

        return await self._guarded("create", dto.villa_no if dto else None, action)

    async def update_villa_number(
        self, villa_no: VillaNo | None, dto: VillaNumberUpdate | None,
    ) -> HandlerOutcome:
        async def action(response: APIResponse) -> HandlerOutcome:
            if dto is None or villa_no != dto.villa_no:
                return _reject(response, HTTPStatus.BAD_REQUEST, "Path id must match villaNo in the body", "update", villa_no)
            entity = to_entity(dto)
            await self.repository.update(entity)
            logger.info(
                f"VillaNumber {entity.villa_no} updated",
                extra={"operation": "update", "villa_no": entity.villa_no},
            )
            response.succeed(HTTPStatus.OK, to_record(entity))
            return HandlerOutcome(HTTPStatus.OK, response)

        return await self._guarded("update", villa_no, action)

    async def delete_villa_number(self, villa_no: VillaNo | None) -> HandlerOutcome:
        async def action(response: APIResponse) -> HandlerOutcome:
            if villa_no is None:
                return _reject(response, HTTPStatus.BAD_REQUEST, "Villa number id must be a positive integer", "delete")
            entity = await self.repository.get(VillaNumber.villa_no == villa_no)
            if entity is None:
                return _reject(response, HTTPStatus.NOT_FOUND, f"VillaNumber '{villa_no}' not found", "delete", villa_no)
            await self.repository.remove(entity)
            logger.info(
                f"VillaNumber {villa_no} deleted",
                extra={"operation": "delete", "villa_no": villa_no},
            )
            response.succeed(HTTPStatus.NO_CONTENT)
            return HandlerOutcome(HTTPStatus.OK, response)

        return await self._guarded("delete", villa_no, action)

    async def _guarded(
        self,
        operation: str,
        villa_no: int | None,
        action: Callable[[APIResponse], Awaitable[HandlerOutcome]],
    ) -> HandlerOutcome:
        """Run one operation with a fresh envelope; failures go into the envelope."""
        response = APIResponse()
        try:
            return await action(response)
        except VillaApiError as e:
            log = logger.warning if e.http_status < 500 else logger.error
            log(
                f"VillaNumber {operation} failed: {e}",
                extra=e.log_extra(operation=operation, villa_no=villa_no),
            )
            response.fail(e.http_status, str(e))
            return HandlerOutcome(HTTPStatus.OK, response)
        except Exception as e:
            logger.error(
                f"VillaNumber {operation} failed: {e}",
                exc_info=True,
                extra={"operation": operation, "villa_no": villa_no},
            )
            response.fail(HTTPStatus.INTERNAL_SERVER_ERROR, str(e))
            return HandlerOutcome(HTTPStatus.OK, response)


def _reject(
    response: APIResponse,
    status: HTTPStatus,
    message: str,
    operation: str,
    villa_no: int | None = None,
) -> HandlerOutcome:
    logger.warning(
        f"VillaNumber {operation} rejected: {message}",
        extra={"operation": operation, "villa_no": villa_no, "error_code": status.phrase},
    )
    response.fail(status, message)
    return HandlerOutcome(status, response)
