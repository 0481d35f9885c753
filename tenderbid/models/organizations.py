import uuid

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, UniqueConstraint, Uuid, func
from tenderbid.models.base import Base
from tenderbid.models.enums import OrganizationType

class Employee(Base):
    __tablename__ = "employee"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), nullable=False, unique=True)
    first_name = Column(String(50))
    last_name = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Organization(Base):
    __tablename__ = "organization"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    type = Column(String(10), default=OrganizationType.LLC.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class OrganizationResponsible(Base):
    """Связь "пользователь может действовать от имени организации"."""
    __tablename__ = "organization_responsible"
    __table_args__ = (UniqueConstraint("organization_id", "user_id", name="uq_organization_responsible"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True)
