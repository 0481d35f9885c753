import uuid

from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, UniqueConstraint, Uuid, func
from tenderbid.models.base import Base
from tenderbid.models.enums import BidStatus

class Bid(Base):
    __tablename__ = "bids"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    tender_id = Column(Uuid, ForeignKey("tenders.id", ondelete="CASCADE"), nullable=False, index=True)
    organization_id = Column(Uuid, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False)
    author_type = Column(String(20), nullable=False)  # User | Organization
    author_id = Column(Uuid, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=BidStatus.CREATED.value)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class BidVersion(Base):
    __tablename__ = "bid_versions"
    __table_args__ = (UniqueConstraint("bid_id", "version", name="uq_bid_version"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    bid_id = Column(Uuid, ForeignKey("bids.id", ondelete="CASCADE"), nullable=False, index=True)
    version = Column(Integer, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class BidFeedback(Base):
    """Отзыв на предложение. Только добавляется, не редактируется и не удаляется."""
    __tablename__ = "bid_feedback"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    bid_id = Column(Uuid, ForeignKey("bids.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    author_id = Column(Uuid, ForeignKey("employee.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
