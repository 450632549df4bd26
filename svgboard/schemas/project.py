"""Project request/response schemas."""

from typing import List, Optional

from pydantic import Field

from svgboard.schemas.common import CamelModel, UtcDatetime
from svgboard.schemas.snapshot import SnapshotResponse


class ProjectRequest(CamelModel):
    """Body of POST /projects and PATCH /projects/{id}."""
    title: str = Field(max_length=255, description="Project title (must not be blank)")


class ProjectResponse(CamelModel):
    """
    A project without its snapshot history.

    `lastShapesData` holds the payload of the most recently created snapshot,
    or null when no snapshot was ever created for the project.
    """
    id: int = Field(description="Project identifier")
    title: str = Field(description="Project title")
    last_shapes_data: Optional[str] = Field(
        default=None,
        description="Shape payload of the newest snapshot created for this project",
    )
    created_at: UtcDatetime = Field(description="When the project was created (UTC)")
    updated_at: UtcDatetime = Field(description="When the project was last modified (UTC)")


class ProjectWithSnapshotsResponse(ProjectResponse):
    """Returned by GET /projects/latest: the project plus its history, newest first."""
    snapshots: List[SnapshotResponse] = Field(default_factory=list)
