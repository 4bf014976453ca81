"""Villa Number Routes — versioned CRUD endpoints over the villa-number handlers.

Invariants:
    - Item routes (get/post/put/delete) are served identically under v1 and v2
    - GET /api/v1/villanumbers lists real data for any authenticated caller
    - GET /api/v2/villanumbers is an anonymous fixed placeholder kept for backward
      compatibility; it never touches storage
    - Mutations require the privileged role; the gate runs before the handler
    - Routes never inspect the envelope: transport status comes from the HandlerOutcome

Design Decisions:
    - Body(None) on create/update: a null body reaches the handler, which answers 400
      inside the envelope contract
    - Shared item router included twice, once per version prefix
"""

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from villa_api.api.dependencies import (
    get_current_user, get_villa_number_handlers, require_privileged,
)
from villa_api.core.domain_types import ApiVersion, parse_villa_no
from villa_api.schemas.api_response import APIResponse
from villa_api.schemas.auth import CurrentUser
from villa_api.schemas.villa_number import VillaNumberCreate, VillaNumberUpdate
from villa_api.services.handle_villa_numbers import HandlerOutcome, VillaNumberHandlers

V2_PLACEHOLDER = ["val1,val2"]

_ERRORS = {
    400: {"model": APIResponse, "description": "Invalid id or body"},
    401: {"model": APIResponse, "description": "Not authenticated"},
}
_NOT_FOUND = {404: {"model": APIResponse, "description": "Villa number not found"}}
_FORBIDDEN = {403: {"model": APIResponse, "description": "Privileged role required"}}


def _prefix(version: ApiVersion) -> str:
    return f"/api/{version.path_segment}/villanumbers"


def _respond(outcome: HandlerOutcome) -> JSONResponse:
    return JSONResponse(
        status_code=int(outcome.http_status), content=outcome.response.to_wire(),
    )


# ─── Version-specific collection routes ─────────────────────────

_v1_collection = APIRouter()
_v2_collection = APIRouter()


@_v1_collection.get("", response_model=APIResponse, responses={401: _ERRORS[401]})
async def list_villa_numbers(
    user: CurrentUser = Depends(get_current_user),
    handlers: VillaNumberHandlers = Depends(get_villa_number_handlers),
):
    """List every villa number."""
    return _respond(await handlers.list_villa_numbers())


@_v2_collection.get("", response_model=list[str])
async def list_villa_numbers_placeholder():
    """Placeholder collection kept for v2 clients. Returns fixed values."""
    return V2_PLACEHOLDER


# ─── Item routes (all versions) ─────────────────────────────────

_items = APIRouter()


@_items.get(
    "/{villa_no}", response_model=APIResponse, responses={**_ERRORS, **_NOT_FOUND},
)
async def get_villa_number(
    villa_no: int,
    user: CurrentUser = Depends(get_current_user),
    handlers: VillaNumberHandlers = Depends(get_villa_number_handlers),
):
    return _respond(await handlers.get_villa_number(parse_villa_no(villa_no)))


@_items.post(
    "", response_model=APIResponse, responses={**_ERRORS, **_FORBIDDEN},
)
async def create_villa_number(
    body: VillaNumberCreate | None = Body(None),
    user: CurrentUser = Depends(require_privileged),
    handlers: VillaNumberHandlers = Depends(get_villa_number_handlers),
):
    return _respond(await handlers.create_villa_number(body))


@_items.put(
    "/{villa_no}", response_model=APIResponse, responses={**_ERRORS, **_FORBIDDEN},
)
async def update_villa_number(
    villa_no: int,
    body: VillaNumberUpdate | None = Body(None),
    user: CurrentUser = Depends(require_privileged),
    handlers: VillaNumberHandlers = Depends(get_villa_number_handlers),
):
    return _respond(await handlers.update_villa_number(parse_villa_no(villa_no), body))


@_items.delete(
    "/{villa_no}", response_model=APIResponse,
    responses={**_ERRORS, **_FORBIDDEN, **_NOT_FOUND},
)
async def delete_villa_number(
    villa_no: int,
    user: CurrentUser = Depends(require_privileged),
    handlers: VillaNumberHandlers = Depends(get_villa_number_handlers),
):
    return _respond(await handlers.delete_villa_number(parse_villa_no(villa_no)))


# ─── Versioned routers (registered in main.py) ──────────────────

router_v1 = APIRouter(tags=["villa-numbers v1"])
router_v1.include_router(_v1_collection, prefix=_prefix(ApiVersion.V1))
router_v1.include_router(_items, prefix=_prefix(ApiVersion.V1))

router_v2 = APIRouter(tags=["villa-numbers v2"])
router_v2.include_router(_v2_collection, prefix=_prefix(ApiVersion.V2))
router_v2.include_router(_items, prefix=_prefix(ApiVersion.V2))
