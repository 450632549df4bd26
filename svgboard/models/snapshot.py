"""
SVGboard Backend — Snapshot SQLAlchemy Model
==============================================

What:  ORM model representing the `snapshot` table.

A snapshot is an immutable, timestamped copy of a project's shape data.
`shapes_data` is opaque JSON text: it is never parsed, validated or
reformatted, so what a client stores is exactly what it reads back.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from svgboard.database import Base
from svgboard.models.project import utcnow

if TYPE_CHECKING:
    from svgboard.models.project import Project


class Snapshot(Base):
    """Saved state of a project's shapes. Never updated after insert."""

    __tablename__ = "snapshot"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
    )

    shapes_data: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    project: Mapped["Project"] = relationship(back_populates="snapshots", lazy="raise")

    def __repr__(self) -> str:
        return (
            f"<Snapshot(id={self.id}, project_id={self.project_id}, "
            f"created_at='{self.created_at}')>"
        )


# Per-project history listing: WHERE project_id = ? ORDER BY created_at DESC
Index("idx_snapshot_project_created_at", Snapshot.project_id, Snapshot.created_at.desc())
