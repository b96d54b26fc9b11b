"""Mockup API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from mockflow.api.dependencies import (
    get_mockup_service,
    get_optional_requester,
    get_requester,
    unwrap,
)
from mockflow.models.enums import MockupType
from mockflow.schemas.mockup import (
    MockupCreate,
    MockupDetailResponse,
    MockupEnvelope,
    MockupListResponse,
    MockupResponse,
    MockupUpdate,
    PublicMockupResponse,
)
from mockflow.services.access_control import Requester
from mockflow.services.mockup_service import MockupService

router = APIRouter(prefix="/api/v1/mockups", tags=["mockups"])


def _detail(mockup, permission) -> MockupDetailResponse:
    # Viewers get the public shape, without owner or project
    shape = MockupResponse if permission.can_edit() else PublicMockupResponse
    return MockupDetailResponse(
        mockup=shape.model_validate(mockup),
        permission=permission,
    )


@router.get("", response_model=MockupListResponse)
def list_mockups(
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[MockupService, Depends(get_mockup_service)],
    type: MockupType | None = None,
    platform: str | None = None,
    limit: int | None = None,
    offset: int = 0,
):
    """List the current user's mockups, most recently updated first."""
    page = unwrap(
        service.list_owned(
            requester, mockup_type=type, platform=platform, limit=limit, offset=offset
        )
    )
    return MockupListResponse(
        mockups=[MockupResponse.model_validate(m) for m in page["mockups"]],
        total=page["total"],
        limit=page["limit"],
        offset=page["offset"],
    )


@router.post("", response_model=MockupResponse, status_code=status.HTTP_201_CREATED)
def create_mockup(
    mockup_data: MockupCreate,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[MockupService, Depends(get_mockup_service)],
):
    """Create a new mockup."""
    return unwrap(service.create(requester, mockup_data))


@router.get("/shared", response_model=list[MockupDetailResponse])
def list_shared_mockups(
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[MockupService, Depends(get_mockup_service)],
):
    """List mockups other users have shared with the current user."""
    shared = unwrap(service.list_shared_with(requester))
    return [_detail(mockup, permission) for mockup, permission in shared]


@router.get("/{mockup_id}", response_model=MockupDetailResponse)
def get_mockup(
    mockup_id: int,
    requester: Annotated[Requester | None, Depends(get_optional_requester)],
    service: Annotated[MockupService, Depends(get_mockup_service)],
):
    """Get a mockup with the caller's permission on it."""
    mockup, permission = unwrap(service.read(mockup_id, requester))
    return _detail(mockup, permission)


@router.put("/{mockup_id}", response_model=MockupDetailResponse)
def update_mockup(
    mockup_id: int,
    mockup_data: MockupUpdate,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[MockupService, Depends(get_mockup_service)],
):
    """Update a mockup (owner or edit share)."""
    mockup, permission = unwrap(service.update(mockup_id, requester, mockup_data))
    return _detail(mockup, permission)


@router.delete("/{mockup_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_mockup(
    mockup_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[MockupService, Depends(get_mockup_service)],
):
    """Delete a mockup with its shares and versions (owner only)."""
    unwrap(service.delete(mockup_id, requester))


@router.get("/{mockup_id}/export", response_model=MockupEnvelope)
def export_mockup(
    mockup_id: int,
    requester: Annotated[Requester | None, Depends(get_optional_requester)],
    service: Annotated[MockupService, Depends(get_mockup_service)],
):
    """Download a mockup's content as an import/export envelope."""
    return unwrap(service.export_envelope(mockup_id, requester))


@router.post("/{mockup_id}/import", response_model=MockupDetailResponse)
def import_mockup(
    mockup_id: int,
    envelope: MockupEnvelope,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[MockupService, Depends(get_mockup_service)],
):
    """Replace a mockup's content with an uploaded envelope."""
    mockup, permission = unwrap(service.import_envelope(mockup_id, requester, envelope))
    return _detail(mockup, permission)
