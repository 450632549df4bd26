"""
SVGboard Backend — Snapshot Service
=====================================

What:  Owns the Snapshot lifecycle and the project/snapshot invariants.
Who:   Called by the /projects/{projectId}/snapshots route handlers.

Invariants enforced here:
    - A snapshot is only ever read or deleted through the project that owns
      it. A snapshot id that exists under another project is rejected with
      SnapshotOwnershipError (an explicit guard, not a join filter).
    - Creating a snapshot sets the parent project's last_shapes_data to the
      new payload and refreshes its updated_at. Both writes are flushed into
      the request's single transaction, so they commit or roll back together.
    - Deleting snapshots (one or all) never touches last_shapes_data.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from svgboard.crud import project_crud, snapshot_crud
from svgboard.exceptions import (
    DatabaseError,
    NotFoundError,
    SnapshotOwnershipError,
    ValidationError,
)
from svgboard.models.project import utcnow
from svgboard.models.snapshot import Snapshot
from svgboard.schemas.snapshot import SnapshotResponse

logger = logging.getLogger(__name__)


def to_snapshot_response(snapshot: Snapshot) -> SnapshotResponse:
    return SnapshotResponse(
        id=snapshot.id,
        project_id=snapshot.project_id,
        shapes_data=snapshot.shapes_data,
        created_at=snapshot.created_at,
    )


class SnapshotService:
    """Business logic layer for snapshot operations."""

    async def list_snapshots(self, db: AsyncSession, project_id: int) -> List[SnapshotResponse]:
        """
        All snapshots of a project, newest first.

        Raises:
            NotFoundError: project_id does not exist
        """
        try:
            await self._require_project(db, project_id)
            snapshots = await snapshot_crud.list_snapshots(db, project_id)
        except SQLAlchemyError as e:
            logger.error("Database error listing snapshots of project %s: %s", project_id, str(e))
            raise DatabaseError(
                message="Could not retrieve snapshots. Please try again.",
                context={"project_id": str(project_id)},
            ) from e
        return [to_snapshot_response(s) for s in snapshots]

    async def get_snapshot(
        self, db: AsyncSession, project_id: int, snapshot_id: int
    ) -> SnapshotResponse:
        """
        A single snapshot, checked against its owning project.

        Raises:
            NotFoundError: snapshot_id does not exist
            SnapshotOwnershipError: snapshot belongs to another project
        """
        snapshot = await self._load_owned(db, project_id, snapshot_id)
        return to_snapshot_response(snapshot)

    async def create_snapshot(
        self, db: AsyncSession, project_id: int, shapes_data: Optional[str]
    ) -> SnapshotResponse:
        """
        Store a new snapshot and make it the project's current shape data.

        Steps (one transaction):
            1. Check the project exists
            2. Insert the snapshot row
            3. Set project.last_shapes_data and refresh project.updated_at

        A failure at step 3 propagates; the session dependency then rolls
        back step 2 as well.

        Raises:
            ValidationError: shapes_data missing
            NotFoundError: project_id does not exist
        """
        if shapes_data is None:
            raise ValidationError(message="shapesData is required", field="shapesData")

        try:
            project = await project_crud.get_project(db, project_id)
            if project is None:
                raise NotFoundError(resource="project", resource_id=project_id)

            now = utcnow()
            snapshot = await snapshot_crud.create_snapshot(
                db, project_id=project_id, shapes_data=shapes_data, now=now
            )
            await project_crud.set_last_shapes_data(db, project, shapes_data, now=now)
        except SQLAlchemyError as e:
            logger.error(
                "Database error creating snapshot for project %s: %s",
                project_id,
                str(e),
                exc_info=True,
            )
            raise DatabaseError(
                message="Could not save the snapshot. Please try again.",
                context={"project_id": str(project_id)},
            ) from e

        logger.info(
            "Snapshot %s created for project %s (%d chars)",
            snapshot.id,
            project_id,
            len(shapes_data),
        )
        return to_snapshot_response(snapshot)

    async def delete_all_snapshots(self, db: AsyncSession, project_id: int) -> int:
        """
        Delete every snapshot of a project. last_shapes_data is kept.

        Returns:
            Number of snapshots deleted

        Raises:
            NotFoundError: project_id does not exist
        """
        try:
            await self._require_project(db, project_id)
            removed = await snapshot_crud.delete_snapshots_for_project(db, project_id)
        except SQLAlchemyError as e:
            logger.error("Database error deleting snapshots of project %s: %s", project_id, str(e))
            raise DatabaseError(
                message="Could not delete snapshots. Please try again.",
                context={"project_id": str(project_id)},
            ) from e

        logger.info("Deleted %d snapshot(s) of project %s", removed, project_id)
        return removed

    async def delete_snapshot(self, db: AsyncSession, project_id: int, snapshot_id: int) -> None:
        """
        Delete one snapshot, checked against its owning project.
        last_shapes_data is kept even if this snapshot produced it.

        Raises:
            NotFoundError: snapshot_id does not exist
            SnapshotOwnershipError: snapshot belongs to another project
        """
        await self._load_owned(db, project_id, snapshot_id)
        try:
            await snapshot_crud.delete_snapshot(db, snapshot_id)
        except SQLAlchemyError as e:
            logger.error("Database error deleting snapshot %s: %s", snapshot_id, str(e))
            raise DatabaseError(
                message="Could not delete the snapshot. Please try again.",
                context={"snapshot_id": str(snapshot_id)},
            ) from e

        logger.info("Snapshot %s of project %s deleted", snapshot_id, project_id)

    async def _require_project(self, db: AsyncSession, project_id: int) -> None:
        if not await project_crud.project_exists(db, project_id):
            raise NotFoundError(resource="project", resource_id=project_id)

    async def _load_owned(self, db: AsyncSession, project_id: int, snapshot_id: int) -> Snapshot:
        try:
            snapshot = await snapshot_crud.get_snapshot(db, snapshot_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching snapshot %s: %s", snapshot_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the snapshot. Please try again.",
                context={"snapshot_id": str(snapshot_id)},
            ) from e

        if snapshot is None:
            raise NotFoundError(resource="snapshot", resource_id=snapshot_id)
        if snapshot.project_id != project_id:
            logger.warning(
                "Snapshot %s requested under project %s but belongs to project %s",
                snapshot_id,
                project_id,
                snapshot.project_id,
            )
            raise SnapshotOwnershipError(snapshot_id=snapshot_id, project_id=project_id)
        return snapshot


snapshot_service = SnapshotService()
