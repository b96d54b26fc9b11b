"""Mockup sharing API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from mockflow.api.dependencies import get_requester, get_share_service, unwrap
from mockflow.schemas.share import ShareCreate, ShareResponse, ShareUpdate
from mockflow.services.access_control import Requester
from mockflow.services.share_service import ShareService

router = APIRouter(prefix="/api/v1/mockups/{mockup_id}/shares", tags=["shares"])


@router.get("", response_model=list[ShareResponse])
def list_shares(
    mockup_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ShareService, Depends(get_share_service)],
):
    """List all shares of a mockup (owner only)."""
    return unwrap(service.list_shares(mockup_id, requester))


@router.post("", response_model=ShareResponse, status_code=status.HTTP_201_CREATED)
def create_share(
    mockup_id: int,
    share_data: ShareCreate,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ShareService, Depends(get_share_service)],
):
    """Share a mockup with someone by email, or create a share link (owner only)."""
    return unwrap(
        service.create(
            mockup_id,
            requester,
            email=share_data.email,
            permission=share_data.permission,
            generate_link=share_data.generate_link,
            expires_in_days=share_data.expires_in_days,
        )
    )


@router.patch("/{share_id}", response_model=ShareResponse)
def update_share(
    mockup_id: int,
    share_id: int,
    share_data: ShareUpdate,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ShareService, Depends(get_share_service)],
):
    """Change what a share allows (owner only)."""
    return unwrap(service.update(mockup_id, share_id, requester, share_data.permission))


@router.delete("/{share_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_share(
    mockup_id: int,
    share_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ShareService, Depends(get_share_service)],
):
    """Revoke a share (owner only)."""
    unwrap(service.delete(mockup_id, share_id, requester))
