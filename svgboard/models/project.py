"""
SVGboard Backend — Project SQLAlchemy Model
=============================================

What:  ORM model representing the `project` table.
Who:   Used by the crud layer for persistence and by ProjectService/SnapshotService.

Table design:
    - Integer autoincrement primary key, assigned by the database
    - title: required, not unique
    - last_shapes_data: denormalized copy of the newest snapshot's payload;
      NULL until the first snapshot is created, never rolled back on
      snapshot deletion
    - created_at: set once; updated_at: set on every mutation
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from svgboard.database import Base

if TYPE_CHECKING:
    from svgboard.models.snapshot import Snapshot


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """
    A named drawing board.

    Lifecycle:
        1. Created with a title (last_shapes_data = NULL)
        2. Mutated by title updates and by snapshot creation
        3. Deleted explicitly; dependent snapshots follow the configured
           delete policy (see ProjectService.delete_project)
    """

    __tablename__ = "project"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # Opaque JSON text, stored verbatim
    last_shapes_data: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Back-reference only; the crud layer deletes snapshots explicitly
    snapshots: Mapped[List["Snapshot"]] = relationship(
        back_populates="project",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, title='{self.title}', updated_at='{self.updated_at}')>"


# Serves the "most recently updated first" listing and the latest-project read
Index("idx_project_updated_at", Project.updated_at.desc())
