"""
Query functions for the `snapshot` table. Same rules as project_crud:
the session comes first and nothing here commits.
"""
from datetime import datetime

from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from svgboard.models.snapshot import Snapshot


async def get_snapshot(db: AsyncSession, snapshot_id: int) -> Snapshot | None:
    result = await db.execute(select(Snapshot).where(Snapshot.id == snapshot_id))
    return result.scalar_one_or_none()


async def list_snapshots(db: AsyncSession, project_id: int) -> list[Snapshot]:
    # Newest first; equal timestamps fall back to insertion order
    result = await db.execute(
        select(Snapshot)
        .where(Snapshot.project_id == project_id)
        .order_by(desc(Snapshot.created_at), desc(Snapshot.id))
    )
    return list(result.scalars().all())


async def count_snapshots(db: AsyncSession, project_id: int) -> int:
    result = await db.execute(
        select(func.count(Snapshot.id)).where(Snapshot.project_id == project_id)
    )
    return result.scalar() or 0


async def create_snapshot(
    db: AsyncSession, project_id: int, shapes_data: str, now: datetime
) -> Snapshot:
    snapshot = Snapshot(project_id=project_id, shapes_data=shapes_data, created_at=now)
    db.add(snapshot)
    await db.flush()
    return snapshot


async def delete_snapshot(db: AsyncSession, snapshot_id: int) -> None:
    await db.execute(delete(Snapshot).where(Snapshot.id == snapshot_id))


async def delete_snapshots_for_project(db: AsyncSession, project_id: int) -> int:
    result = await db.execute(delete(Snapshot).where(Snapshot.project_id == project_id))
    return result.rowcount or 0
