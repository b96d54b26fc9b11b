"""Project API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from mockflow.api.dependencies import get_project_service, get_requester, unwrap
from mockflow.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from mockflow.services.access_control import Requester
from mockflow.services.project_service import ProjectService

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


def _with_count(service: ProjectService, project, counts: dict[int, int] | None = None):
    if counts is None:
        counts = service.mockup_counts([project.id])
    response = ProjectResponse.model_validate(project)
    response.mockup_count = counts.get(project.id, 0)
    return response


@router.get("", response_model=list[ProjectResponse])
def list_projects(
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ProjectService, Depends(get_project_service)],
):
    """List the current user's projects."""
    projects = unwrap(service.list_projects(requester))
    counts = service.mockup_counts([p.id for p in projects])
    return [_with_count(service, p, counts) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ProjectService, Depends(get_project_service)],
):
    """Create a new project."""
    project = unwrap(service.create(requester, project_data))
    return _with_count(service, project, {})


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ProjectService, Depends(get_project_service)],
):
    """Get a project."""
    return _with_count(service, unwrap(service.get(project_id, requester)))


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ProjectService, Depends(get_project_service)],
):
    """Update a project."""
    return _with_count(service, unwrap(service.update(project_id, requester, project_data)))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    requester: Annotated[Requester, Depends(get_requester)],
    service: Annotated[ProjectService, Depends(get_project_service)],
):
    """Delete a project; its mockups are kept and detached."""
    unwrap(service.delete(project_id, requester))
