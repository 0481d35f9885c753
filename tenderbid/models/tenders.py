import uuid

from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, UniqueConstraint, Uuid, func
from tenderbid.models.base import Base
from tenderbid.models.enums import TenderStatus

class Tender(Base):
    __tablename__ = "tenders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    service_type = Column(String(100), nullable=False, default="")
    status = Column(String(20), nullable=False, default=TenderStatus.CREATED.value, index=True)
    organization_id = Column(Uuid, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False)
    creator_username = Column(String(50), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TenderVersion(Base):
    """Неизменяемый снимок тендера на момент, когда у него была версия `version`."""
    __tablename__ = "tender_versions"
    __table_args__ = (UniqueConstraint("tender_id", "version", name="uq_tender_version"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    tender_id = Column(Uuid, ForeignKey("tenders.id", ondelete="CASCADE"), nullable=False, index=True)
    version = Column(Integer, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    service_type = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
