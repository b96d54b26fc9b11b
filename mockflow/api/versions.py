"""Mockup version history API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from mockflow.api.dependencies import get_requester, get_version_service, unwrap
from mockflow.schemas.mockup import MockupResponse
from mockflow.schemas.version import (
    RestoreResponse,
    VersionCreate,
    VersionResponse,
    VersionSummary,
)
from mockflow.services.access_control import Requester
from mockflow.services.version_service import VersionService

router = APIRouter(prefix="/api/v1/mockups/{mockup_id}/versions", tags=["versions"])


@router.get("", response_model=list[VersionSummary])
def list_versions(
    mockup_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[VersionService, Depends(get_version_service)],
):
    """List the most recent versions of a mockup (owner only)."""
    return unwrap(service.list_versions(mockup_id, requester))


@router.post("", response_model=VersionResponse, status_code=status.HTTP_201_CREATED)
def create_version(
    mockup_id: int,
    version_data: VersionCreate,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[VersionService, Depends(get_version_service)],
):
    """Save the mockup's current state as a new version (owner only)."""
    return unwrap(service.create(mockup_id, requester, version_data.change_description))


@router.get("/{version_id}", response_model=VersionResponse)
def get_version(
    mockup_id: int,
    version_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[VersionService, Depends(get_version_service)],
):
    """Get a version with its full content (owner only)."""
    return unwrap(service.get(mockup_id, version_id, requester))


@router.post("/{version_id}/restore", response_model=RestoreResponse)
def restore_version(
    mockup_id: int,
    version_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[VersionService, Depends(get_version_service)],
):
    """Restore a mockup to a saved version (owner only)."""
    mockup, version = unwrap(service.restore(mockup_id, version_id, requester))
    return RestoreResponse(
        mockup=MockupResponse.model_validate(mockup),
        message=f"Restored to version {version.version_number}",
    )


@router.delete("/{version_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_version(
    mockup_id: int,
    version_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[VersionService, Depends(get_version_service)],
):
    """Delete a version (owner only)."""
    unwrap(service.delete(mockup_id, version_id, requester))
