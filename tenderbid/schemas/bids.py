import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from tenderbid.models.enums import AuthorType, BidStatus

class BidCreate(BaseModel):
    name: str = Field(max_length=100)
    description: str = Field("", max_length=500)
    tender_id: uuid.UUID
    organization_id: uuid.UUID
    author_type: AuthorType
    # Для author_type=Organization по умолчанию совпадает с organization_id
    author_id: Optional[uuid.UUID] = None


class BidUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class BidResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    status: BidStatus
    tender_id: uuid.UUID
    organization_id: uuid.UUID
    author_type: AuthorType
    author_id: uuid.UUID
    version: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BidReviewResponse(BaseModel):
    id: uuid.UUID
    description: str
    created_at: datetime

    class Config:
        from_attributes = True
