import uuid
from typing import Sequence

from sqlalchemy import exists
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from tenderbid.models.tenders import Tender, TenderVersion
from tenderbid.models.enums import TenderStatus
from tenderbid.schemas.tenders import TenderCreate

async def get_published_tenders(db: AsyncSession, service_types: Sequence[str] | None, limit: int, offset: int) -> list[Tender]:
    query = select(Tender).where(Tender.status == TenderStatus.PUBLISHED.value)
    if service_types:
        query = query.where(Tender.service_type.in_(list(service_types)))
    query = query.order_by(Tender.created_at.desc(), Tender.name).offset(offset).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())

async def get_tenders_by_creator(db: AsyncSession, username: str, limit: int, offset: int) -> list[Tender]:
    result = await db.execute(
        select(Tender)
        .where(Tender.creator_username == username)
        .order_by(Tender.created_at.desc(), Tender.name)
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())

async def get_tender(db: AsyncSession, tender_id: uuid.UUID, for_update: bool = False) -> Tender | None:
    query = select(Tender).where(Tender.id == tender_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalars().first()

async def get_tender_owned_by(db: AsyncSession, tender_id: uuid.UUID, username: str) -> Tender | None:
    """Блокирует строку тендера, только если `username` - его автор."""
    result = await db.execute(
        select(Tender)
        .where(Tender.id == tender_id, Tender.creator_username == username)
        .with_for_update()
    )
    return result.scalars().first()

async def tender_exists(db: AsyncSession, tender_id: uuid.UUID) -> bool:
    result = await db.execute(select(exists().where(Tender.id == tender_id)))
    return bool(result.scalar())

async def create_tender(db: AsyncSession, tender: TenderCreate) -> Tender:
    db_tender = Tender(
        name=tender.name,
        description=tender.description or "",
        service_type=tender.service_type or "",
        status=TenderStatus.CREATED.value,
        organization_id=tender.organization_id,
        creator_username=tender.creator_username,
        version=1,
    )
    db.add(db_tender)
    await db.flush()
    await db.refresh(db_tender)
    return db_tender

async def save_tender_version(db: AsyncSession, tender: Tender) -> TenderVersion:
    snapshot = TenderVersion(
        tender_id=tender.id,
        version=tender.version,
        name=tender.name,
        description=tender.description,
        service_type=tender.service_type,
        status=tender.status,
    )
    db.add(snapshot)
    await db.flush()
    return snapshot

async def get_tender_version(db: AsyncSession, tender_id: uuid.UUID, version: int) -> TenderVersion | None:
    result = await db.execute(
        select(TenderVersion).filter_by(tender_id=tender_id, version=version)
    )
    return result.scalars().first()

