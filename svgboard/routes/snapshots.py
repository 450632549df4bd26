"""
SVGboard Backend — Snapshot Route Handlers
============================================

What:  Snapshot history endpoints, always scoped to a project in the path.
       A snapshot id used under a project that does not own it is a 404.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from svgboard.database import get_db_session
from svgboard.schemas.common import ErrorResponse
from svgboard.schemas.snapshot import SnapshotRequest, SnapshotResponse
from svgboard.services.snapshot_service import snapshot_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}/snapshots", tags=["Snapshots"])

PROJECT_NOT_FOUND = {404: {"description": "Project not found", "model": ErrorResponse}}
SNAPSHOT_NOT_FOUND = {
    404: {
        "description": "Snapshot not found, or it belongs to another project",
        "model": ErrorResponse,
    }
}


@router.get(
    "",
    response_model=List[SnapshotResponse],
    responses=PROJECT_NOT_FOUND,
    summary="List a project's snapshots, newest first",
)
async def list_snapshots(
    project_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[SnapshotResponse]:
    return await snapshot_service.list_snapshots(db, project_id)


@router.get(
    "/{snapshot_id}",
    response_model=SnapshotResponse,
    responses=SNAPSHOT_NOT_FOUND,
    summary="Get a single snapshot",
)
async def get_snapshot(
    project_id: int,
    snapshot_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> SnapshotResponse:
    return await snapshot_service.get_snapshot(db, project_id, snapshot_id)


@router.post(
    "",
    response_model=SnapshotResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **PROJECT_NOT_FOUND,
        400: {"description": "shapesData missing or not a string", "model": ErrorResponse},
    },
    summary="Save a snapshot",
    description=(
        "Stores `shapesData` verbatim as a new snapshot and makes it the project's "
        "`lastShapesData`. Both writes happen in one transaction."
    ),
)
async def create_snapshot(
    project_id: int,
    payload: SnapshotRequest,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> SnapshotResponse:
    return await snapshot_service.create_snapshot(db, project_id, payload.shapes_data)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=PROJECT_NOT_FOUND,
    summary="Delete all snapshots of a project",
    description="The project's `lastShapesData` is left unchanged.",
)
async def delete_all_snapshots(
    project_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> None:
    await snapshot_service.delete_all_snapshots(db, project_id)


@router.delete(
    "/{snapshot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=SNAPSHOT_NOT_FOUND,
    summary="Delete a single snapshot",
)
async def delete_snapshot(
    project_id: int,
    snapshot_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> None:
    await snapshot_service.delete_snapshot(db, project_id, snapshot_id)
