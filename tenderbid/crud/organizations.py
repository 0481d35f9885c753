import uuid

from sqlalchemy import exists
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from tenderbid.models.organizations import Employee, Organization, OrganizationResponsible

async def get_employee_by_username(db: AsyncSession, username: str) -> Employee | None:
    result = await db.execute(select(Employee).filter(Employee.username == username))
    return result.scalars().first()

async def organization_exists(db: AsyncSession, organization_id: uuid.UUID) -> bool:
    result = await db.execute(select(exists().where(Organization.id == organization_id)))
    return bool(result.scalar())

async def is_user_responsible(db: AsyncSession, username: str, organization_id: uuid.UUID) -> bool:
    result = await db.execute(
        select(
            exists()
            .where(OrganizationResponsible.user_id == Employee.id)
            .where(Employee.username == username)
            .where(OrganizationResponsible.organization_id == organization_id)
        )
    )
    return bool(result.scalar())

async def is_user_responsible_for_any(db: AsyncSession, username: str) -> bool:
    result = await db.execute(
        select(
            exists()
            .where(OrganizationResponsible.user_id == Employee.id)
            .where(Employee.username == username)
        )
    )
    return bool(result.scalar())

async def is_employee_in_organization(db: AsyncSession, employee_id: uuid.UUID, organization_id: uuid.UUID) -> bool:
    result = await db.execute(
        select(
            exists()
            .where(OrganizationResponsible.user_id == employee_id)
            .where(OrganizationResponsible.organization_id == organization_id)
        )
    )
    return bool(result.scalar())
