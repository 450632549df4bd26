"""Snapshot request/response schemas."""

from pydantic import Field

from svgboard.schemas.common import CamelModel, UtcDatetime


class SnapshotRequest(CamelModel):
    """
    Body of POST /projects/{projectId}/snapshots.

    `shapesData` is an opaque JSON-encoded string. Its content is never
    inspected; only its presence and type (string) are checked.
    """
    shapes_data: str = Field(description="JSON-encoded shape state, stored verbatim")


class SnapshotResponse(CamelModel):
    id: int = Field(description="Snapshot identifier")
    project_id: int = Field(description="Owning project identifier")
    shapes_data: str = Field(description="Shape payload exactly as it was submitted")
    created_at: UtcDatetime = Field(description="When the snapshot was created (UTC)")
