from datetime import datetime

from sqlalchemy import delete, desc, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from svgboard.models.project import Project


async def get_project(db: AsyncSession, project_id: int) -> Project | None:
    result = await db.execute(select(Project).where(Project.id == project_id))
    return result.scalar_one_or_none()


async def project_exists(db: AsyncSession, project_id: int) -> bool:
    result = await db.execute(select(exists().where(Project.id == project_id)))
    return bool(result.scalar())


async def list_projects(db: AsyncSession) -> list[Project]:
    result = await db.execute(
        select(Project).order_by(desc(Project.updated_at), desc(Project.id))
    )
    return list(result.scalars().all())


async def get_latest_project(db: AsyncSession) -> Project | None:
    result = await db.execute(
        select(Project).order_by(desc(Project.updated_at), desc(Project.id)).limit(1)
    )
    return result.scalar_one_or_none()


async def create_project(db: AsyncSession, title: str, now: datetime) -> Project:
    project = Project(title=title, created_at=now, updated_at=now)
    db.add(project)
    await db.flush()  # assigns id
    return project


async def update_project(db: AsyncSession, project: Project, title: str, now: datetime) -> Project:
    project.title = title
    project.updated_at = now
    await db.flush()
    return project


async def set_last_shapes_data(
    db: AsyncSession, project: Project, shapes_data: str, now: datetime
) -> Project:
    project.last_shapes_data = shapes_data
    project.updated_at = now
    await db.flush()
    return project


async def delete_project(db: AsyncSession, project_id: int) -> None:
    await db.execute(delete(Project).where(Project.id == project_id))
