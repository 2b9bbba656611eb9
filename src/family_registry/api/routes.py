"""API routes for Family Registry.

Handlers only translate between HTTP and the aggregate manager. Failures
raised by the manager are rendered by the application's exception handler.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from family_registry.api.schemas import ErrorResponse, HealthResponse
from family_registry.container import get_family_manager
from family_registry.domain.families import FamilyStatus
from family_registry.domain.views import FamilyView
from family_registry.services.families import FamilyAggregateManager

health_router = APIRouter(tags=["health"])
family_router = APIRouter(prefix="/api/v1/families", tags=["families"])

Manager = Annotated[FamilyAggregateManager, Depends(get_family_manager)]

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


def _family_not_found(family_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Family {family_id} not found",
    )


async def _collect(manager: FamilyAggregateManager, family_status: FamilyStatus) -> list[FamilyView]:
    return [view async for view in manager.list_by_status(family_status)]


# Health endpoint
@health_router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


# Family endpoints
@family_router.get("/active", response_model=list[FamilyView])
async def list_active_families(manager: Manager) -> list[FamilyView]:
    """List active families ordered by id."""
    return await _collect(manager, FamilyStatus.ACTIVE)


@family_router.get("/inactive", response_model=list[FamilyView])
async def list_inactive_families(manager: Manager) -> list[FamilyView]:
    """List inactive families ordered by id."""
    return await _collect(manager, FamilyStatus.INACTIVE)


@family_router.get("/detail/{family_id}", response_model=FamilyView, responses=_NOT_FOUND)
async def get_family_detail(family_id: int, manager: Manager) -> FamilyView:
    """Get a family with its basic service."""
    view = await manager.get_detail(family_id)
    if view is None:
        raise _family_not_found(family_id)
    return view


@family_router.get("/{family_id}", response_model=FamilyView, responses=_NOT_FOUND)
async def get_family(family_id: int, manager: Manager) -> FamilyView:
    """Get family by ID."""
    view = await manager.get_by_id(family_id)
    if view is None:
        raise _family_not_found(family_id)
    return view


@family_router.post(
    "",
    response_model=FamilyView,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def create_family(payload: FamilyView, manager: Manager) -> FamilyView:
    """Create a new family and its basic service."""
    return await manager.create(payload)


@family_router.put("/{family_id}", response_model=FamilyView, responses=_NOT_FOUND)
async def update_family(
    family_id: int, payload: FamilyView, manager: Manager
) -> FamilyView:
    """Update a family and, when supplied, its basic service."""
    view = await manager.update(family_id, payload)
    if view is None:
        raise _family_not_found(family_id)
    return view


@family_router.put(
    "/delete/{family_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
)
async def deactivate_family(family_id: int, manager: Manager) -> Response:
    """Soft-delete a family by marking it inactive."""
    await manager.deactivate(family_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@family_router.put(
    "/active/{family_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
)
async def activate_family(family_id: int, manager: Manager) -> Response:
    """Reactivate an inactive family."""
    await manager.activate(family_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
