import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from tenderbid.models.bids import Bid, BidVersion, BidFeedback
from tenderbid.models.enums import AuthorType, BidStatus

async def create_bid(
    db: AsyncSession,
    name: str,
    description: str,
    tender_id: uuid.UUID,
    organization_id: uuid.UUID,
    author_type: AuthorType,
    author_id: uuid.UUID,
) -> Bid:
    db_bid = Bid(
        name=name,
        description=description or "",
        tender_id=tender_id,
        organization_id=organization_id,
        author_type=author_type.value,
        author_id=author_id,
        status=BidStatus.CREATED.value,
        version=1,
    )
    db.add(db_bid)
    await db.flush()
    await db.refresh(db_bid)
    return db_bid

async def get_bid(db: AsyncSession, bid_id: uuid.UUID, for_update: bool = False) -> Bid | None:
    query = select(Bid).where(Bid.id == bid_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalars().first()

async def get_bids_by_author(db: AsyncSession, author_id: uuid.UUID, limit: int, offset: int) -> list[Bid]:
    result = await db.execute(
        select(Bid)
        .where(Bid.author_type == AuthorType.USER.value, Bid.author_id == author_id)
        .order_by(Bid.name.asc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())

async def get_bids_by_tender(db: AsyncSession, tender_id: uuid.UUID, limit: int, offset: int) -> list[Bid]:
    result = await db.execute(
        select(Bid)
        .where(Bid.tender_id == tender_id)
        .order_by(Bid.name.asc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())

async def save_bid_version(db: AsyncSession, bid: Bid) -> BidVersion:
    snapshot = BidVersion(
        bid_id=bid.id,
        version=bid.version,
        name=bid.name,
        description=bid.description,
    )
    db.add(snapshot)
    await db.flush()
    return snapshot

async def get_bid_version(db: AsyncSession, bid_id: uuid.UUID, version: int) -> BidVersion | None:
    result = await db.execute(select(BidVersion).filter_by(bid_id=bid_id, version=version))
    return result.scalars().first()

async def add_feedback(db: AsyncSession, bid_id: uuid.UUID, author_id: uuid.UUID, feedback: str) -> BidFeedback:
    db_feedback = BidFeedback(bid_id=bid_id, author_id=author_id, description=feedback)
    db.add(db_feedback)
    await db.flush()
    await db.refresh(db_feedback)
    return db_feedback

async def get_reviews(db: AsyncSession, tender_id: uuid.UUID, author_id: uuid.UUID, limit: int, offset: int) -> list[BidFeedback]:
    result = await db.execute(
        select(BidFeedback)
        .join(Bid, BidFeedback.bid_id == Bid.id)
        .where(
            Bid.tender_id == tender_id,
            Bid.author_type == AuthorType.USER.value,
            Bid.author_id == author_id,
        )
        .order_by(BidFeedback.created_at.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())
