"""
SVGboard Backend — Project Service
====================================

What:  Owns the Project lifecycle: list, get, latest-with-snapshots, create,
       rename and delete.
Who:   Called by the /projects route handlers.

Delete policy (settings.project_delete_policy):
    cascade  The project's snapshots are deleted in the same transaction.
    forbid   Deleting a project that still has snapshots raises ConflictError.
    Snapshot rows are never left pointing at a deleted project.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from svgboard.config import settings
from svgboard.crud import project_crud, snapshot_crud
from svgboard.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from svgboard.models.project import Project, utcnow
from svgboard.schemas.project import ProjectResponse, ProjectWithSnapshotsResponse
from svgboard.services.snapshot_service import to_snapshot_response

logger = logging.getLogger(__name__)


def to_project_response(project: Project) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        title=project.title,
        last_shapes_data=project.last_shapes_data,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


def _require_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValidationError(message="Project title must not be empty", field="title")
    return title


class ProjectService:
    """
    Business logic layer for project operations.

    Error Handling Strategy:
        Missing projects raise NotFoundError, blank titles ValidationError,
        and a forbidden delete ConflictError. Unexpected SQLAlchemy errors
        are logged and wrapped in DatabaseError (generic 500 to the client).
    """

    def __init__(self, delete_policy: Optional[str] = None):
        # None: follow settings.project_delete_policy at call time
        self._delete_policy = delete_policy

    @property
    def delete_policy(self) -> str:
        return self._delete_policy or settings.project_delete_policy

    async def list_projects(self, db: AsyncSession) -> List[ProjectResponse]:
        """All projects, most recently updated first."""
        try:
            projects = await project_crud.list_projects(db)
        except SQLAlchemyError as e:
            logger.error("Database error listing projects: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve projects. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        return [to_project_response(p) for p in projects]

    async def get_latest_project_with_snapshots(
        self, db: AsyncSession
    ) -> ProjectWithSnapshotsResponse:
        """
        The project with the greatest updated_at, with its full snapshot
        history embedded newest first.

        Raises:
            NotFoundError: no project exists at all
        """
        try:
            project = await project_crud.get_latest_project(db)
            if project is None:
                raise NotFoundError(message="No projects exist yet", resource="project")
            snapshots = await snapshot_crud.list_snapshots(db, project.id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching latest project: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the latest project. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        base = to_project_response(project)
        return ProjectWithSnapshotsResponse(
            **base.model_dump(),
            snapshots=[to_snapshot_response(s) for s in snapshots],
        )

    async def get_project(self, db: AsyncSession, project_id: int) -> ProjectResponse:
        """
        A single project, without snapshots.

        Raises:
            NotFoundError: project_id does not exist
        """
        project = await self._load(db, project_id)
        return to_project_response(project)

    async def create_project(self, db: AsyncSession, title: Optional[str]) -> ProjectResponse:
        """
        Insert a new project. last_shapes_data starts unset and both
        timestamps equal the creation time.

        Raises:
            ValidationError: title missing or blank
        """
        title = _require_title(title)
        try:
            project = await project_crud.create_project(db, title=title, now=utcnow())
        except SQLAlchemyError as e:
            logger.error("Database error creating project: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the project. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Project created: %s", project.id)
        return to_project_response(project)

    async def update_project(
        self, db: AsyncSession, project_id: int, title: Optional[str]
    ) -> ProjectResponse:
        """
        Replace the title and refresh updated_at.

        Raises:
            ValidationError: title missing or blank
            NotFoundError: project_id does not exist
        """
        title = _require_title(title)
        project = await self._load(db, project_id)
        try:
            project = await project_crud.update_project(db, project, title=title, now=utcnow())
        except SQLAlchemyError as e:
            logger.error("Database error updating project %s: %s", project_id, str(e))
            raise DatabaseError(
                message="Could not update the project. Please try again.",
                context={"project_id": str(project_id)},
            ) from e

        logger.info("Project %s renamed", project_id)
        return to_project_response(project)

    async def delete_project(self, db: AsyncSession, project_id: int) -> None:
        """
        Remove a project, applying the configured snapshot policy.

        Raises:
            NotFoundError: project_id does not exist
            ConflictError: policy is 'forbid' and the project has snapshots
        """
        await self._load(db, project_id)
        policy = self.delete_policy
        try:
            if policy == "forbid":
                remaining = await snapshot_crud.count_snapshots(db, project_id)
                if remaining:
                    raise ConflictError(
                        message=(
                            f"project with ID '{project_id}' still has {remaining} snapshot(s); "
                            "delete them before deleting the project"
                        ),
                        context={"project_id": str(project_id), "snapshot_count": remaining},
                    )
                removed = 0
            else:
                removed = await snapshot_crud.delete_snapshots_for_project(db, project_id)
            await project_crud.delete_project(db, project_id)
        except SQLAlchemyError as e:
            logger.error("Database error deleting project %s: %s", project_id, str(e))
            raise DatabaseError(
                message="Could not delete the project. Please try again.",
                context={"project_id": str(project_id)},
            ) from e

        logger.info("Project %s deleted (%d snapshot(s) removed)", project_id, removed)

    async def _load(self, db: AsyncSession, project_id: int) -> Project:
        try:
            project = await project_crud.get_project(db, project_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching project %s: %s", project_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the project. Please try again.",
                context={"project_id": str(project_id)},
            ) from e
        if project is None:
            raise NotFoundError(resource="project", resource_id=project_id)
        return project


project_service = ProjectService()
