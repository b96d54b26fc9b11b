"""FastAPI dependencies for authentication, services and result handling."""

from typing import Annotated, TypeVar

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from mockflow.database import get_db
from mockflow.models.user import User
from mockflow.services.access_control import Requester
from mockflow.services.api_keys import ApiKeyService, authenticate_api_key
from mockflow.services.auth import decode_access_token
from mockflow.services.errors import ErrorKind, Result
from mockflow.services.mockup_service import MockupService
from mockflow.services.project_service import ProjectService
from mockflow.services.share_service import ShareService
from mockflow.services.version_service import VersionService

T = TypeVar("T")

security = HTTPBearer(auto_error=False)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INSUFFICIENT_PERMISSION: status.HTTP_403_FORBIDDEN,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: Result[T]) -> T:
    """Return a successful result's value or raise the matching HTTP error."""
    if result.ok:
        return result.value
    error = result.error
    raise HTTPException(status_code=STATUS_BY_KIND[error.kind], detail=error.message)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_from_token(db: Session, token: str) -> User:
    user_id = decode_access_token(token)
    if user_id is None:
        raise _unauthorized("Invalid authentication credentials")

    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_optional_requester(
    db: Annotated[Session, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    x_api_key: Annotated[str | None, Header()] = None,
) -> Requester | None:
    """Resolve the caller from a bearer token or an API key.

    Returns ``None`` when no credentials were sent. Credentials that are sent but
    invalid are rejected rather than treated as anonymous.
    """
    if credentials is not None:
        user = _user_from_token(db, credentials.credentials)
        return Requester(id=user.id, email=user.email, name=user.name)

    if x_api_key:
        api_key = authenticate_api_key(db, x_api_key)
        if api_key is None:
            raise _unauthorized("Invalid API key")
        user = api_key.user
        return Requester(id=user.id, email=user.email, name=user.name, api_key=api_key)

    return None


def get_requester(
    requester: Annotated[Requester | None, Depends(get_optional_requester)],
) -> Requester:
    """Require an authenticated caller."""
    if requester is None:
        raise _unauthorized("Not authenticated")
    return requester


def get_current_user(
    requester: Annotated[Requester, Depends(get_requester)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user record."""
    user = db.query(User).filter(User.id == requester.id).first()
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_mockup_service(db: Annotated[Session, Depends(get_db)]) -> MockupService:
    """Get mockup service with dependencies."""
    return MockupService(db)


def get_share_service(db: Annotated[Session, Depends(get_db)]) -> ShareService:
    """Get share service with dependencies."""
    return ShareService(db)


def get_version_service(db: Annotated[Session, Depends(get_db)]) -> VersionService:
    """Get version service with dependencies."""
    return VersionService(db)


def get_project_service(db: Annotated[Session, Depends(get_db)]) -> ProjectService:
    """Get project service with dependencies."""
    return ProjectService(db)


def get_api_key_service(db: Annotated[Session, Depends(get_db)]) -> ApiKeyService:
    """Get API key service with dependencies."""
    return ApiKeyService(db)
