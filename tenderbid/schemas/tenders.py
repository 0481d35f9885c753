import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from tenderbid.models.enums import TenderStatus

class TenderCreate(BaseModel):
    name: str = Field(max_length=100)
    description: str = Field("", max_length=500)
    service_type: str = Field("", max_length=100)
    organization_id: uuid.UUID
    creator_username: str


class TenderUpdate(BaseModel):
    """Частичное обновление: пустая строка или отсутствие поля - "не менять"."""
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    service_type: Optional[str] = Field(None, max_length=100)


class TenderResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    service_type: str
    status: TenderStatus
    organization_id: uuid.UUID
    creator_username: str
    version: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
