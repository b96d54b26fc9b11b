"""Public, unauthenticated mockup view."""

from typing import Annotated

from fastapi import APIRouter, Depends

from mockflow.api.dependencies import get_mockup_service, unwrap
from mockflow.schemas.mockup import PublicMockupResponse
from mockflow.services.mockup_service import MockupService

router = APIRouter(prefix="/api/v1/public", tags=["public"])


@router.get("/mockups/{mockup_id}", response_model=PublicMockupResponse)
def get_public_mockup(
    mockup_id: int,
    service: Annotated[MockupService, Depends(get_mockup_service)],
):
    """Get a public mockup without any owner details."""
    return unwrap(service.public_view(mockup_id))
