"""Project folders for organizing an owner's mockups."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from mockflow.models.mockup import Mockup
from mockflow.models.project import Project
from mockflow.schemas.project import ProjectCreate, ProjectUpdate
from mockflow.services.access_control import Requester
from mockflow.services.errors import NotFoundOrUnauthorized, returns_result
from mockflow.services.mockup_service import require_can_save, require_requester

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for project CRUD. Projects are only visible to their owner."""

    def __init__(self, db: Session):
        self.db = db

    def _get_owned(self, project_id: int, requester: Requester | None) -> Project:
        requester = require_requester(requester)
        project = (
            self.db.query(Project)
            .filter(Project.id == project_id, Project.owner_id == requester.id)
            .first()
        )
        if project is None:
            raise NotFoundOrUnauthorized("Project not found")
        return project

    def mockup_counts(self, project_ids: list[int]) -> dict[int, int]:
        """Number of mockups in each project."""
        if not project_ids:
            return {}
        counts = (
            self.db.query(Mockup.project_id, func.count(Mockup.id))
            .filter(Mockup.project_id.in_(project_ids))
            .group_by(Mockup.project_id)
            .all()
        )
        return dict(counts)

    @returns_result
    def create(self, requester: Requester | None, payload: ProjectCreate) -> Project:
        requester = require_requester(requester)
        require_can_save(requester)
        project = Project(
            owner_id=requester.id,
            name=payload.name,
            description=payload.description,
            is_public=payload.is_public,
        )
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        logger.info(f"User {requester.id} created project {project.id}")
        return project

    @returns_result
    def list_projects(self, requester: Requester | None) -> list[Project]:
        requester = require_requester(requester)
        return (
            self.db.query(Project)
            .filter(Project.owner_id == requester.id)
            .order_by(Project.updated_at.desc(), Project.id.desc())
            .all()
        )

    @returns_result
    def get(self, project_id: int, requester: Requester | None) -> Project:
        return self._get_owned(project_id, requester)

    @returns_result
    def update(
        self, project_id: int, requester: Requester | None, payload: ProjectUpdate
    ) -> Project:
        project = self._get_owned(project_id, requester)
        require_can_save(requester)

        if payload.name is not None:
            project.name = payload.name
        if payload.description is not None:
            project.description = payload.description
        if payload.is_public is not None:
            project.is_public = payload.is_public

        project.touch()
        self.db.commit()
        self.db.refresh(project)
        return project

    @returns_result
    def delete(self, project_id: int, requester: Requester | None) -> None:
        """Delete a project. Its mockups stay, detached from any project."""
        project = self._get_owned(project_id, requester)
        require_can_save(requester)

        # The ORM nulls project_id on loaded mockups
        detached = len(project.mockups)
        self.db.delete(project)
        self.db.commit()
        logger.info(f"Deleted project {project_id}, detached {detached} mockups")
