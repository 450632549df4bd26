"""
SVGboard Backend — Project Route Handlers
===========================================

What:  CRUD endpoints for projects, plus GET /projects/latest which the
       drawing UI uses to resume the most recently edited board.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from svgboard.database import get_db_session
from svgboard.schemas.common import ErrorResponse
from svgboard.schemas.project import (
    ProjectRequest,
    ProjectResponse,
    ProjectWithSnapshotsResponse,
)
from svgboard.services.project_service import project_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["Projects"])

NOT_FOUND = {404: {"description": "Project not found", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Invalid request body", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[ProjectResponse],
    summary="List projects, most recently updated first",
)
async def list_projects(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[ProjectResponse]:
    return await project_service.list_projects(db)


# Declared before /{project_id} so "latest" is not parsed as an id
@router.get(
    "/latest",
    response_model=ProjectWithSnapshotsResponse,
    responses={404: {"description": "No project exists", "model": ErrorResponse}},
    summary="Get the most recently updated project with its snapshots",
)
async def get_latest_project(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> ProjectWithSnapshotsResponse:
    return await project_service.get_latest_project_with_snapshots(db)


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses=NOT_FOUND,
    summary="Get a single project",
)
async def get_project(
    project_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> ProjectResponse:
    return await project_service.get_project(db, project_id)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
    summary="Create a project",
)
async def create_project(
    payload: ProjectRequest,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> ProjectResponse:
    return await project_service.create_project(db, payload.title)


@router.patch(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="Rename a project",
)
async def update_project(
    project_id: int,
    payload: ProjectRequest,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> ProjectResponse:
    return await project_service.update_project(db, project_id, payload.title)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        **NOT_FOUND,
        409: {"description": "Project still has snapshots", "model": ErrorResponse},
    },
    summary="Delete a project",
    description=(
        "Deletes the project. With the default `cascade` policy its snapshots are "
        "deleted too; with the `forbid` policy the request fails with 409 while "
        "snapshots remain."
    ),
)
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> None:
    await project_service.delete_project(db, project_id)
