"""API key management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from mockflow.api.dependencies import get_api_key_service, get_requester, unwrap
from mockflow.models.api_key import ApiKey
from mockflow.schemas.api_key import ApiKeyCreate, ApiKeyCreated, ApiKeySummary
from mockflow.services.access_control import Requester
from mockflow.services.api_keys import ApiKeyService, mask_api_key

router = APIRouter(prefix="/api/v1/api-keys", tags=["api-keys"])


def _summary(api_key: ApiKey) -> ApiKeySummary:
    return ApiKeySummary(
        id=api_key.id,
        name=api_key.name,
        description=api_key.description,
        key_preview=mask_api_key(api_key.key),
        is_active=api_key.is_active,
        can_save_mockups=api_key.can_save_mockups,
        last_used_at=api_key.last_used_at,
        expires_at=api_key.expires_at,
        created_at=api_key.created_at,
    )


@router.get("", response_model=list[ApiKeySummary])
def list_api_keys(
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ApiKeyService, Depends(get_api_key_service)],
):
    """List the current user's keys with masked secrets."""
    return [_summary(api_key) for api_key in unwrap(service.list_keys(requester))]


@router.post("", response_model=ApiKeyCreated, status_code=status.HTTP_201_CREATED)
def create_api_key(
    key_data: ApiKeyCreate,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ApiKeyService, Depends(get_api_key_service)],
):
    """Issue a key. The full secret is only returned here."""
    api_key = unwrap(
        service.create(
            requester,
            key_data.name,
            description=key_data.description,
            can_save_mockups=key_data.can_save_mockups,
            expires_in_days=key_data.expires_in_days,
        )
    )
    return ApiKeyCreated(
        id=api_key.id,
        name=api_key.name,
        key=api_key.key,
        description=api_key.description,
        can_save_mockups=api_key.can_save_mockups,
        expires_at=api_key.expires_at,
        created_at=api_key.created_at,
    )


@router.delete("/{key_id}", status_code=status.HTTP_204_NO_CONTENT)
def revoke_api_key(
    key_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ApiKeyService, Depends(get_api_key_service)],
):
    """Delete one of the current user's keys."""
    unwrap(service.revoke(requester, key_id))
